"""pulse - Textual viewer for a single metrics snapshot."""

from collections.abc import Sequence
from enum import Enum

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal, VerticalScroll
from textual.widgets import DataTable, Footer, Static

from pulse.dashboard import (
    cpu_table,
    disks_table,
    memory_table,
    network_table,
    system_table,
    temperature_table,
)
from pulse.models import ProcessInfo, SystemSnapshot

RESULT_ANALYZE = "analyze"
RESULT_QUIT = "quit"


class SortKey(Enum):
    """Sort keys for the process table."""

    CPU = "cpu"
    MEM = "mem"
    PID = "pid"


class HeaderStats(Static):
    """Header widget showing host, CPU and memory sections."""

    DEFAULT_CSS = """
    HeaderStats {
        height: auto;
        padding: 0 1;
        background: $surface;
    }
    """

    def __init__(self, snapshot: SystemSnapshot, *args, **kwargs) -> None:
        """Initialize HeaderStats."""
        super().__init__(*args, **kwargs)
        self._snapshot = snapshot

    def compose(self) -> ComposeResult:
        """Compose the header stats layout."""
        yield Horizontal(
            Static(system_table(self._snapshot), id="system-info"),
            Static(memory_table(self._snapshot), id="mem-info"),
        )
        yield Static(cpu_table(self._snapshot), id="cpu-info")


class DeviceStats(VerticalScroll):
    """Disks, network interfaces and temperature sensors."""

    DEFAULT_CSS = """
    DeviceStats {
        height: auto;
        max-height: 50%;
        padding: 0 1;
    }
    """

    def __init__(self, snapshot: SystemSnapshot, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._snapshot = snapshot

    def compose(self) -> ComposeResult:
        yield Static(disks_table(self._snapshot), id="disk-info")
        yield Static(network_table(self._snapshot), id="net-info")
        yield Static(temperature_table(self._snapshot), id="temp-info")


class ProcessTable(Container):
    """Container for the top-process data table."""

    DEFAULT_CSS = """
    ProcessTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def __init__(self, processes: Sequence[ProcessInfo], *args, **kwargs) -> None:
        """Initialize ProcessTable."""
        super().__init__(*args, **kwargs)
        self._processes = list(processes)
        self._sort_key: SortKey = SortKey.CPU
        self._sort_reverse: bool = True  # Default: descending for CPU

    @property
    def sort_key(self) -> SortKey:
        """Get current sort key."""
        return self._sort_key

    def cycle_sort(self) -> SortKey:
        """Cycle to the next sort key, redraw and return it."""
        keys = list(SortKey)
        current_index = keys.index(self._sort_key)
        self._sort_key = keys[(current_index + 1) % len(keys)]
        self._sort_reverse = self._sort_key in (SortKey.CPU, SortKey.MEM)
        self._populate()
        return self._sort_key

    def compose(self) -> ComposeResult:
        """Compose the process table."""
        yield DataTable(id="process-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#process-table", DataTable)
        table.cursor_type = "row"

        table.add_column("PID", key="pid", width=8)
        table.add_column("Process", key="name", width=30)
        table.add_column("CPU%", key="cpu", width=8)
        table.add_column("MEM", key="mem", width=10)
        self._populate()

    def row_pids(self) -> list[int]:
        """PIDs in the order currently displayed."""
        return [p.pid for p in self._sorted_processes()]

    def _sorted_processes(self) -> list[ProcessInfo]:
        key_func = {
            SortKey.CPU: lambda p: p.cpu,
            SortKey.MEM: lambda p: p.memory_mb,
            SortKey.PID: lambda p: p.pid,
        }
        return sorted(self._processes, key=key_func[self._sort_key], reverse=self._sort_reverse)

    def _populate(self) -> None:
        table = self.query_one("#process-table", DataTable)
        table.clear()
        for proc in self._sorted_processes():
            table.add_row(
                str(proc.pid),
                proc.name[:30],
                f"{proc.cpu:5.1f}",
                f"{proc.memory_mb}MB",
                key=str(proc.pid),
            )


class PulseApp(App[str]):
    """
    Read-only view of one snapshot.

    Exits with RESULT_ANALYZE when the operator asks to continue to the
    heavy-process check, RESULT_QUIT otherwise.
    """

    TITLE = "pulse"
    SUB_TITLE = "System Monitor"

    CSS = """
    Screen {
        layout: vertical;
    }

    Horizontal {
        height: auto;
    }

    #system-info {
        width: 1fr;
        padding-right: 2;
    }

    #mem-info {
        width: auto;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("a", "analyze", "Analyze"),
        ("f6", "sort", "Sort"),
    ]

    def __init__(self, snapshot: SystemSnapshot, processes: Sequence[ProcessInfo]) -> None:
        """Initialize the PulseApp."""
        super().__init__()
        self._snapshot = snapshot
        self._processes = list(processes)

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield HeaderStats(self._snapshot, id="header-stats")
        yield DeviceStats(self._snapshot, id="device-stats")
        yield ProcessTable(self._processes)
        yield Footer()

    def action_sort(self) -> None:
        """Cycle the process table sort key."""
        process_table = self.query_one(ProcessTable)
        new_sort_key = process_table.cycle_sort()
        self.notify(f"Sort: {new_sort_key.value.upper()}")

    def action_analyze(self) -> None:
        self.exit(RESULT_ANALYZE)

    def action_quit(self) -> None:
        """Leave without analyzing."""
        self.exit(RESULT_QUIT)
