"""Shared fixtures for pulse tests."""

import pytest

from pulse.models import (
    CpuCore,
    DiskInfo,
    HostInfo,
    MemoryInfo,
    NetworkInfo,
    ProcessEntry,
    ProcessInfo,
    SensorReading,
    SystemSnapshot,
)

GIB = 1024**3
MIB = 1024**2


@pytest.fixture
def snapshot() -> SystemSnapshot:
    """A fixed snapshot of a small two-core host."""
    return SystemSnapshot(
        host=HostInfo(
            hostname="testbox",
            os_version="Debian GNU/Linux 12 (bookworm)",
            kernel_version="6.1.0-18-amd64",
            uptime_seconds=93784,
        ),
        cpus=[CpuCore("cpu0", 10.0), CpuCore("cpu1", 30.0)],
        global_cpu=20.0,
        memory=MemoryInfo(total=16 * GIB, used=8 * GIB, available=7 * GIB, swap_used=GIB // 2),
        disks=[DiskInfo("/dev/sda1", "/", 100 * GIB, 42 * GIB + 5)],
        networks=[NetworkInfo("eth0", 300 * MIB + 7, 12 * MIB)],
        sensors=[
            SensorReading("coretemp Package id 0", 55.0, 100.0),
            SensorReading("nvme Composite", 71.5, None),
        ],
        processes={
            101: ProcessEntry(101, "encoder", 120 * MIB),
            202: ProcessEntry(202, "[kworker/0:1]", 0),
            303: ProcessEntry(303, "browser", 900 * MIB),
        },
    )


@pytest.fixture
def top() -> list[ProcessInfo]:
    """Ranked processes matching the snapshot fixture."""
    return [
        ProcessInfo(pid=101, name="encoder", cpu=45.2, memory_mb=120),
        ProcessInfo(pid=303, name="browser", cpu=2.0, memory_mb=900),
        ProcessInfo(pid=202, name="[kworker/0:1]", cpu=0.0, memory_mb=0),
    ]
