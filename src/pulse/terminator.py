"""Forceful, cross-platform process termination."""

import logging
import platform
import subprocess

logger = logging.getLogger(__name__)


class TerminationError(Exception):
    """The termination request was refused or could not be issued."""


def kill_command(pid: int, system: str | None = None) -> list[str]:
    """Build the native forced-kill command line for ``pid``."""
    system = system or platform.system()
    if system == "Windows":
        return ["taskkill", "/PID", str(pid), "/F"]
    return ["kill", "-9", str(pid)]


def terminate(pid: int, system: str | None = None) -> None:
    """
    Request forced termination of ``pid`` and wait for the kill utility to exit.

    Fire-and-forget: the process is not checked for death afterwards.

    Raises:
        TerminationError: pid is not positive, the utility could not be run,
            or it reported failure.
    """
    if pid <= 0:
        # 0 and negative pids address process groups on POSIX
        raise TerminationError(f"refusing to terminate non-positive PID {pid}")

    command = kill_command(pid, system)
    logger.info("terminating pid %d with %s", pid, " ".join(command))
    try:
        result = subprocess.run(command, capture_output=True, text=True, errors="replace")
    except OSError as exc:
        raise TerminationError(str(exc)) from exc

    if result.returncode != 0:
        message = result.stderr.strip() or result.stdout.strip()
        raise TerminationError(message or f"{command[0]} exited with status {result.returncode}")
