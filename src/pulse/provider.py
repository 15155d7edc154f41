"""OS metrics provider for pulse, backed by psutil."""

import logging
import platform
import time

import psutil

from pulse.models import (
    CpuCore,
    DiskInfo,
    HostInfo,
    MemoryInfo,
    NetworkInfo,
    ProcessEntry,
    SensorReading,
    SystemSnapshot,
)

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


class ProviderNotRefreshed(RuntimeError):
    """Raised when metrics are read before the first refresh."""


def _os_version() -> str:
    system = platform.system()
    if system == "Linux":
        try:
            return platform.freedesktop_os_release().get("PRETTY_NAME", UNKNOWN)
        except OSError:
            return UNKNOWN
    if system == "Darwin":
        return f"macOS {platform.mac_ver()[0]}".strip()
    if system == "Windows":
        return f"Windows {platform.version()}"
    return platform.platform(terse=True) or UNKNOWN


class MetricsProvider:
    """
    Refresh-then-read view of host metrics.

    Every read returns data captured by the most recent refresh(); nothing
    carries over from earlier refreshes.
    """

    def __init__(self, cpu_interval: float = 0.2) -> None:
        """
        Initialize the MetricsProvider.

        Args:
            cpu_interval: Seconds to sample per-core CPU usage over during a
                refresh. psutil needs an elapsed interval for a meaningful value.
        """
        self._cpu_interval = max(0.0, cpu_interval)
        self._snapshot: SystemSnapshot | None = None
        # Initialize CPU percent (first call returns 0.0)
        psutil.cpu_percent(percpu=True)

    @property
    def cpu_interval(self) -> float:
        return self._cpu_interval

    def refresh(self) -> SystemSnapshot:
        """Capture a complete new snapshot and return it."""
        cpus = self._collect_cpus()
        global_cpu = sum(core.usage for core in cpus) / len(cpus) if cpus else 0.0

        self._snapshot = SystemSnapshot(
            host=self._collect_host(),
            cpus=cpus,
            global_cpu=global_cpu,
            memory=self._collect_memory(),
            disks=self._collect_disks(),
            networks=self._collect_networks(),
            sensors=self._collect_sensors(),
            processes=self._collect_processes(),
        )
        logger.debug(
            "refreshed metrics: %d cores, %d processes",
            len(cpus),
            len(self._snapshot.processes),
        )
        return self._snapshot

    def snapshot(self) -> SystemSnapshot:
        if self._snapshot is None:
            raise ProviderNotRefreshed("refresh() must be called before reading metrics")
        return self._snapshot

    def processes(self) -> dict[int, ProcessEntry]:
        return self.snapshot().processes

    def cpus(self) -> list[CpuCore]:
        return self.snapshot().cpus

    def global_cpu(self) -> float:
        return self.snapshot().global_cpu

    def host(self) -> HostInfo:
        return self.snapshot().host

    def memory(self) -> MemoryInfo:
        return self.snapshot().memory

    def disks(self) -> list[DiskInfo]:
        return self.snapshot().disks

    def networks(self) -> list[NetworkInfo]:
        return self.snapshot().networks

    def sensors(self) -> list[SensorReading]:
        return self.snapshot().sensors

    def _collect_cpus(self) -> list[CpuCore]:
        interval = self._cpu_interval or None
        percents = psutil.cpu_percent(interval=interval, percpu=True)
        return [CpuCore(name=f"cpu{i}", usage=usage) for i, usage in enumerate(percents)]

    def _collect_host(self) -> HostInfo:
        return HostInfo(
            hostname=platform.node() or UNKNOWN,
            os_version=_os_version(),
            kernel_version=platform.release() or UNKNOWN,
            uptime_seconds=int(time.time() - psutil.boot_time()),
        )

    def _collect_memory(self) -> MemoryInfo:
        mem = psutil.virtual_memory()
        swap = psutil.swap_memory()
        return MemoryInfo(
            total=mem.total,
            used=mem.used,
            available=mem.available,
            swap_used=swap.used,
        )

    def _collect_disks(self) -> list[DiskInfo]:
        disks: list[DiskInfo] = []
        for part in psutil.disk_partitions(all=False):
            try:
                usage = psutil.disk_usage(part.mountpoint)
            except OSError:
                # Unmounted media, permission denied, etc.
                logger.debug("skipping disk %s at %s", part.device, part.mountpoint)
                continue
            disks.append(
                DiskInfo(
                    name=part.device,
                    mount_point=part.mountpoint,
                    total_bytes=usage.total,
                    available_bytes=usage.free,
                )
            )
        return disks

    def _collect_networks(self) -> list[NetworkInfo]:
        counters = psutil.net_io_counters(pernic=True)
        return [
            NetworkInfo(
                interface=name,
                received_bytes=stats.bytes_recv,
                transmitted_bytes=stats.bytes_sent,
            )
            for name, stats in counters.items()
        ]

    def _collect_sensors(self) -> list[SensorReading]:
        # Not available on Windows and some macOS builds
        read_temperatures = getattr(psutil, "sensors_temperatures", None)
        if read_temperatures is None:
            return []
        try:
            groups = read_temperatures()
        except OSError:
            logger.debug("temperature sensors unreadable", exc_info=True)
            return []

        readings: list[SensorReading] = []
        for chip, entries in groups.items():
            for entry in entries:
                label = f"{chip} {entry.label}" if entry.label else chip
                readings.append(
                    SensorReading(
                        label=label,
                        temperature=entry.current,
                        max=entry.high,
                    )
                )
        return readings

    def _collect_processes(self) -> dict[int, ProcessEntry]:
        """
        Collect name and resident memory of all running processes.

        Handles AccessDenied and ZombieProcess errors gracefully.
        """
        processes: dict[int, ProcessEntry] = {}

        for proc in psutil.process_iter(attrs=["pid", "name", "memory_info"]):
            try:
                info = proc.info
                mem_info = info.get("memory_info")
                entry = ProcessEntry(
                    pid=info["pid"],
                    name=info.get("name") or "",
                    memory_bytes=mem_info.rss if mem_info else 0,
                )
            except (psutil.NoSuchProcess, psutil.AccessDenied, psutil.ZombieProcess):
                # Process died mid-poll or is not ours to inspect
                continue
            processes[entry.pid] = entry

        return processes
