"""Command-line entry point for pulse."""

import logging
from enum import IntEnum

import click
from rich.console import Console

from pulse import __version__
from pulse.analyzer import FlowOutcome, run_termination_flow
from pulse.config import Config
from pulse.dashboard import print_dashboard
from pulse.provider import MetricsProvider
from pulse.ranker import top_processes
from pulse.sampler import sample_cpu
from pulse.terminator import terminate

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


class ExitCode(IntEnum):
    OK = 0
    TERMINATION_FAILED = 1
    INVALID_PID = 3


_OUTCOME_EXIT_CODES = {
    FlowOutcome.ALL_CLEAR: ExitCode.OK,
    FlowOutcome.DECLINED: ExitCode.OK,
    FlowOutcome.TERMINATED: ExitCode.OK,
    FlowOutcome.INVALID_PID: ExitCode.INVALID_PID,
    FlowOutcome.TERMINATION_FAILED: ExitCode.TERMINATION_FAILED,
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def run(config: Config, console: Console | None = None) -> ExitCode:
    """Sample, rank, render and analyze once."""
    console = console or Console(highlight=False)

    provider = MetricsProvider(cpu_interval=config.cpu_interval)
    snapshot = provider.refresh()
    processes = top_processes(provider, sampler=sample_cpu, limit=config.top_n)
    logger.info("ranked %d of %d processes", len(processes), len(snapshot.processes))

    if config.tui:
        from pulse.app import RESULT_ANALYZE, PulseApp

        result = PulseApp(snapshot, processes).run()
        if result != RESULT_ANALYZE:
            return ExitCode.OK
    else:
        console.print("Welcome to the Pulse")
        print_dashboard(console, snapshot, processes)

    if not config.analyze:
        return ExitCode.OK

    outcome = run_termination_flow(processes, terminate=terminate, console=console)
    logger.info("analysis finished: %s", outcome.value)
    return _OUTCOME_EXIT_CODES[outcome]


@click.command()
@click.version_option(__version__)
@click.option("--tui/--plain", default=False, help="Show the snapshot in an interactive viewer")
@click.option(
    "--analyze/--no-analyze",
    default=True,
    help="Check for heavy processes after showing the dashboard",
)
@click.option(
    "--cpu-interval",
    type=click.FloatRange(min=0.0),
    default=0.2,
    show_default=True,
    help="Seconds to sample per-core CPU usage over",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="PULSE_LOG_LEVEL",
    show_default=True,
    help="Logging level",
)
def main(tui: bool, analyze: bool, cpu_interval: float, log_level: str) -> None:
    """Snapshot host metrics and triage resource-heavy processes."""
    config = Config(
        cpu_interval=cpu_interval,
        tui=tui,
        analyze=analyze,
        log_level=log_level.upper(),
    )
    configure_logging(config.log_level)
    raise SystemExit(int(run(config)))


if __name__ == "__main__":
    main()
