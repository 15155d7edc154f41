"""Data models for pulse."""

from dataclasses import dataclass, field


@dataclass(slots=True, frozen=True)
class ProcessInfo:
    """Ranked view of one process at sample time."""

    pid: int
    name: str
    cpu: float  # 0.0 - 100.0 * core_count
    memory_mb: int  # Resident memory, floor-divided from bytes


@dataclass(slots=True, frozen=True)
class ProcessEntry:
    """Raw process row as read from the metrics provider."""

    pid: int
    name: str
    memory_bytes: int


@dataclass(slots=True, frozen=True)
class HostInfo:
    """Host identity and uptime."""

    hostname: str
    os_version: str
    kernel_version: str
    uptime_seconds: int


@dataclass(slots=True, frozen=True)
class CpuCore:
    name: str
    usage: float


@dataclass(slots=True, frozen=True)
class MemoryInfo:
    """System memory totals in bytes."""

    total: int
    used: int
    available: int
    swap_used: int


@dataclass(slots=True, frozen=True)
class DiskInfo:
    name: str
    mount_point: str
    total_bytes: int
    available_bytes: int


@dataclass(slots=True, frozen=True)
class NetworkInfo:
    interface: str
    received_bytes: int
    transmitted_bytes: int


@dataclass(slots=True, frozen=True)
class SensorReading:
    """Temperature sensor reading in degrees Celsius."""

    label: str
    temperature: float | None
    max: float | None


@dataclass(slots=True)
class SystemSnapshot:
    """Everything read from the provider in a single refresh."""

    host: HostInfo
    cpus: list[CpuCore]
    global_cpu: float
    memory: MemoryInfo
    disks: list[DiskInfo] = field(default_factory=list)
    networks: list[NetworkInfo] = field(default_factory=list)
    sensors: list[SensorReading] = field(default_factory=list)
    processes: dict[int, ProcessEntry] = field(default_factory=dict)
