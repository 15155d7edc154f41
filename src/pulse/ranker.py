"""Ranking of processes by CPU usage."""

from collections.abc import Callable, Mapping

from pulse.models import ProcessEntry, ProcessInfo
from pulse.provider import MetricsProvider
from pulse.sampler import sample_cpu

MIB = 1024 * 1024
TOP_N = 10


def bytes_to_mib(size: int) -> int:
    """Whole mebibytes in ``size`` bytes, truncated."""
    return size // MIB


def rank_processes(
    processes: Mapping[int, ProcessEntry],
    cpu_map: Mapping[int, float],
    limit: int = TOP_N,
) -> list[ProcessInfo]:
    """
    Merge a provider snapshot with sampled CPU figures and keep the top ``limit``.

    ``cpu_map`` is authoritative for CPU; pids it lacks get 0.0. The two inputs
    are captured independently and may disagree. Sorting is stable, so equal
    CPU values keep the provider's iteration order.
    """
    ranked = [
        ProcessInfo(
            pid=entry.pid,
            name=entry.name,
            cpu=cpu_map.get(entry.pid, 0.0),
            memory_mb=bytes_to_mib(entry.memory_bytes),
        )
        for entry in processes.values()
    ]
    ranked.sort(key=lambda p: p.cpu, reverse=True)
    return ranked[:limit]


def top_processes(
    provider: MetricsProvider,
    sampler: Callable[[], Mapping[int, float]] = sample_cpu,
    limit: int = TOP_N,
) -> list[ProcessInfo]:
    """Rank the provider's last snapshot using a fresh CPU sample."""
    return rank_processes(provider.processes(), sampler(), limit=limit)
