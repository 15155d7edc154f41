"""Heavy-process detection and the interactive termination flow."""

import logging
import re
from collections.abc import Callable, Sequence
from enum import Enum

from rich.console import Console

from pulse.models import ProcessInfo
from pulse.terminator import TerminationError, terminate as terminate_process

logger = logging.getLogger(__name__)

CPU_THRESHOLD = 20.0  # percent
MEMORY_THRESHOLD_MB = 500

PID_MIN = -(2**31)
PID_MAX = 2**31 - 1
_PID_PATTERN = re.compile(r"[+-]?[0-9]+")


class FlowOutcome(Enum):
    """How an interactive termination flow ended."""

    ALL_CLEAR = "all_clear"
    DECLINED = "declined"
    INVALID_PID = "invalid_pid"
    TERMINATED = "terminated"
    TERMINATION_FAILED = "termination_failed"


def is_heavy(process: ProcessInfo) -> bool:
    """Check whether a process meets either resource threshold."""
    return process.cpu >= CPU_THRESHOLD or process.memory_mb >= MEMORY_THRESHOLD_MB


def find_heavy(processes: Sequence[ProcessInfo]) -> list[ProcessInfo]:
    """Return the heavy processes, in input order."""
    return [p for p in processes if is_heavy(p)]


def parse_pid(text: str) -> int | None:
    """Parse a signed 32-bit decimal PID, or return None if ``text`` is not one."""
    text = text.strip()
    if not _PID_PATTERN.fullmatch(text):
        return None
    pid = int(text)
    if not PID_MIN <= pid <= PID_MAX:
        return None
    return pid


def run_termination_flow(
    processes: Sequence[ProcessInfo],
    terminate: Callable[[int], None] = terminate_process,
    prompt: Callable[[str], str] | None = None,
    console: Console | None = None,
) -> FlowOutcome:
    """
    Report heavy processes and optionally terminate one on operator request.

    Blocks on operator input. At most one call to ``terminate`` is made. The
    entered PID is forwarded as long as it is an integer; it is not required
    to be one of the flagged processes.

    Args:
        processes: Ranked processes to inspect.
        terminate: Called with the chosen PID; raises TerminationError on failure.
        prompt: Reads one line of operator input after showing the given text.
            Defaults to the console's input().
        console: Where reports are written. Defaults to stdout.
    """
    console = console or Console(highlight=False)
    ask = prompt or console.input

    heavy = find_heavy(processes)
    if not heavy:
        console.print("\n[green]✅ No high resource consuming processes detected.[/]")
        return FlowOutcome.ALL_CLEAR

    console.print("\n[yellow]⚠️ High resource consuming processes detected:[/]\n")
    for p in heavy:
        console.print(
            f"• PID {p.pid} ({p.name}) → CPU: {p.cpu:.1f}% | MEM: {p.memory_mb} MB",
            markup=False,
        )

    choice = ask("\nDo you want to terminate any process? (y/n): ")
    if choice.strip().lower() != "y":
        console.print("✔ No processes terminated.")
        return FlowOutcome.DECLINED

    pid_input = ask("Enter PID to terminate: ")
    pid = parse_pid(pid_input)
    if pid is None:
        console.print("[red]❌ Invalid PID[/]")
        return FlowOutcome.INVALID_PID

    flagged = {p.pid: p for p in heavy}
    if pid in flagged:
        console.print(f"Terminating PID {pid} ({flagged[pid].name})", markup=False)
    else:
        console.print(f"[yellow]PID {pid} is not one of the flagged processes.[/]")

    try:
        terminate(pid)
    except TerminationError as exc:
        logger.warning("termination of pid %d failed: %s", pid, exc)
        console.print(f"❌ Failed to kill process: {exc}", markup=False)
        return FlowOutcome.TERMINATION_FAILED

    console.print(f"[green]✅ Process {pid} terminated successfully.[/]")
    return FlowOutcome.TERMINATED
