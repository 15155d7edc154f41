"""Rich renderables for the pulse dashboard."""

from collections.abc import Sequence

from rich import box
from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from pulse.models import ProcessInfo, SystemSnapshot

GIB = 1024**3
MIB = 1024**2

BANNER = """\
██████╗ ██╗   ██╗██╗     ███████╗███████╗
██╔══██╗██║   ██║██║     ██╔════╝██╔════╝
██████╔╝██║   ██║██║     ███████╗█████╗
██╔═══╝ ██║   ██║██║     ╚════██║██╔══╝
██║     ╚██████╔╝███████╗███████║███████╗
╚═╝      ╚═════╝ ╚══════╝╚══════╝╚══════╝
              System Monitor"""


def format_uptime(seconds: float) -> str:
    days = int(seconds // 86400)
    hours = int((seconds % 86400) // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if days > 0:
        return f"{days} days, {hours:02d}:{minutes:02d}:{secs:02d}"
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def meter(percent: float, width: int = 30) -> str:
    """Bar of ``width`` cells filled in proportion to ``percent``."""
    filled = round(percent / 100.0 * width)
    filled = min(max(filled, 0), width)  # Per-process CPU can exceed 100%
    return f"{'█' * filled}{'░' * (width - filled)} {percent:>5.1f}%"


def truncate(text: str, width: int) -> str:
    """Pad ``text`` to ``width``, or cut it and end with an ellipsis."""
    if len(text) <= width:
        return text.ljust(width)
    return text[: width - 1] + "…"


def format_temp(value: float | None) -> str:
    if value is None:
        return "  N/A"
    return f"{value:>5.1f}°"


def temp_status(value: float | None) -> str:
    if value is None:
        return "N/A"
    if value < 60.0:
        return "OK"
    if value < 80.0:
        return "WARM"
    return "HOT"


_STATUS_STYLES = {"OK": "green", "WARM": "yellow", "HOT": "bold red", "N/A": "dim"}


def _section(title: str, *columns: str) -> Table:
    table = Table(title=title, title_justify="left", box=box.SQUARE, expand=False)
    for column in columns:
        table.add_column(column)
    return table


def system_table(snapshot: SystemSnapshot) -> Table:
    host = snapshot.host
    table = Table(title="SYSTEM", title_justify="left", box=box.SQUARE, show_header=False)
    table.add_column("Field")
    table.add_column("Value", min_width=40)
    table.add_row("Host", Text(host.hostname))
    table.add_row("OS", Text(host.os_version))
    table.add_row("Kernel", Text(host.kernel_version))
    table.add_row("Uptime", f"{host.uptime_seconds} seconds ({format_uptime(host.uptime_seconds)})")
    return table


def cpu_table(snapshot: SystemSnapshot) -> Table:
    table = _section("CPU", "Core", "Usage")
    for core in snapshot.cpus:
        table.add_row(core.name, meter(core.usage))
    table.add_row(Text("TOTAL", style="bold"), meter(snapshot.global_cpu))
    return table


def memory_table(snapshot: SystemSnapshot) -> Table:
    mem = snapshot.memory
    table = Table(title="MEMORY", title_justify="left", box=box.SQUARE, show_header=False)
    table.add_column("Field")
    table.add_column("Value", justify="right")
    table.add_row("Total", f"{mem.total / GIB:.2f} GB")
    table.add_row("Used", f"{mem.used / GIB:.2f} GB")
    table.add_row("Available", f"{mem.available / GIB:.2f} GB")
    table.add_row("Swap Used", f"{mem.swap_used / GIB:.2f} GB")
    return table


def disks_table(snapshot: SystemSnapshot) -> Table:
    table = _section("DISKS", "Name", "Mount", "Total", "Free")
    for disk in snapshot.disks:
        table.add_row(
            Text(disk.name),
            Text(disk.mount_point),
            f"{disk.total_bytes // GIB}GB",
            f"{disk.available_bytes // GIB}GB",
        )
    return table


def network_table(snapshot: SystemSnapshot) -> Table:
    table = _section("NETWORK", "Interface", "RX", "TX")
    for net in snapshot.networks:
        table.add_row(
            Text(net.interface),
            f"{net.received_bytes // MIB} MB",
            f"{net.transmitted_bytes // MIB} MB",
        )
    return table


def temperature_table(snapshot: SystemSnapshot) -> RenderableType:
    if not snapshot.sensors:
        return Text("TEMPERATURE: No temperature sensors available on this system", style="dim")
    table = _section("TEMPERATURE", "Sensor", "Temp", "Max", "State")
    for sensor in snapshot.sensors:
        status = temp_status(sensor.temperature)
        table.add_row(
            Text(truncate(sensor.label, 28)),
            format_temp(sensor.temperature),
            format_temp(sensor.max),
            Text(status, style=_STATUS_STYLES[status]),
        )
    return table


def process_table(processes: Sequence[ProcessInfo]) -> Table:
    table = _section("TOP PROCESSES (CPU)", "PID", "Process", "CPU%", "MEM")
    for p in processes:
        table.add_row(str(p.pid), Text(truncate(p.name, 28)), f"{p.cpu:>6.1f}%", f"{p.memory_mb:>6}MB")
    return table


def render_dashboard(snapshot: SystemSnapshot, processes: Sequence[ProcessInfo]) -> Group:
    """Compose every dashboard section into one renderable."""
    return Group(
        Text(BANNER, style="bold cyan"),
        system_table(snapshot),
        cpu_table(snapshot),
        memory_table(snapshot),
        disks_table(snapshot),
        network_table(snapshot),
        temperature_table(snapshot),
        process_table(processes),
    )


def print_dashboard(
    console: Console,
    snapshot: SystemSnapshot,
    processes: Sequence[ProcessInfo],
) -> None:
    console.print(render_dashboard(snapshot, processes))
