"""One-shot per-process CPU sampling through the ``ps`` utility.

psutil only reports a meaningful per-process CPU percentage after two
refreshes separated by an interval. ``ps`` gives a lifetime-averaged figure in
a single call, at the cost of racing the provider snapshot: a process may
appear in one and not the other. Callers treat the result as best-effort.
"""

import logging
import subprocess
from collections.abc import Sequence

logger = logging.getLogger(__name__)

PS_COMMAND: tuple[str, ...] = ("ps", "-axo", "pid,pcpu")


def parse_cpu_table(text: str) -> dict[int, float]:
    """
    Parse ``PID CPU%`` rows into a pid -> cpu mapping.

    The first line is a header and is skipped. Rows that do not carry an
    integer pid and a float percentage are ignored.
    """
    cpu_map: dict[int, float] = {}
    for line in text.splitlines()[1:]:
        parts = line.split()
        if len(parts) < 2:
            continue
        try:
            pid = int(parts[0])
            cpu = float(parts[1])
        except ValueError:
            logger.debug("skipping malformed cpu row: %r", line)
            continue
        cpu_map[pid] = cpu
    return cpu_map


def sample_cpu(command: Sequence[str] = PS_COMMAND, timeout: float = 5.0) -> dict[int, float]:
    """
    Run the sampling utility and return its pid -> cpu mapping.

    Any failure to run the utility yields an empty mapping, so every process
    is reported at 0.0%.
    """
    try:
        result = subprocess.run(
            list(command),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            check=True,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("cpu sampling via %r failed, reporting 0.0%% for all: %s", command[0], exc)
        return {}
    return parse_cpu_table(result.stdout)
