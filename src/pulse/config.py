"""Run settings for pulse."""

from dataclasses import dataclass

from pulse.ranker import TOP_N


@dataclass(frozen=True)
class Config:
    """Settings for one dashboard pass.

    Heavy-process thresholds are fixed in pulse.analyzer and are not
    configurable.
    """

    cpu_interval: float = 0.2  # Seconds to sample per-core CPU over
    top_n: int = TOP_N
    tui: bool = False
    analyze: bool = True
    log_level: str = "WARNING"
