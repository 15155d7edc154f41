"""Tests for heavy-process analysis and the termination flow."""

import io

import pytest
from rich.console import Console

from pulse.analyzer import (
    CPU_THRESHOLD,
    MEMORY_THRESHOLD_MB,
    FlowOutcome,
    find_heavy,
    is_heavy,
    parse_pid,
    run_termination_flow,
)
from pulse.models import ProcessInfo
from pulse.terminator import TerminationError

HEAVY_CPU = ProcessInfo(pid=101, name="encoder", cpu=45.2, memory_mb=120)
HEAVY_MEM = ProcessInfo(pid=202, name="browser", cpu=2.0, memory_mb=900)
LIGHT = ProcessInfo(pid=303, name="shell", cpu=0.5, memory_mb=8)


class Script:
    """Scripted operator: answers prompts in order and records them."""

    def __init__(self, *answers: str) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, text: str) -> str:
        self.prompts.append(text)
        return self._answers.pop(0)


class Recorder:
    """Stands in for terminate(), recording each pid it is given."""

    def __init__(self, error: str | None = None) -> None:
        self.pids: list[int] = []
        self._error = error

    def __call__(self, pid: int) -> None:
        self.pids.append(pid)
        if self._error is not None:
            raise TerminationError(self._error)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(output) -> Console:
    return Console(file=output, width=120, highlight=False, color_system=None)


class TestIsHeavy:
    """Tests for the threshold predicate."""

    def test_thresholds(self):
        assert CPU_THRESHOLD == 20.0
        assert MEMORY_THRESHOLD_MB == 500

    @pytest.mark.parametrize(
        ("cpu", "memory_mb", "expected"),
        [
            (20.0, 0, True),
            (19.99, 0, False),
            (0.0, 500, True),
            (0.0, 499, False),
            (19.9, 499, False),
            (350.0, 4000, True),
            (0.0, 0, False),
        ],
    )
    def test_boundaries(self, cpu, memory_mb, expected):
        """Test either bound, inclusive, makes a process heavy."""
        assert is_heavy(ProcessInfo(pid=1, name="p", cpu=cpu, memory_mb=memory_mb)) is expected

    def test_find_heavy_preserves_order(self):
        processes = [HEAVY_CPU, LIGHT, HEAVY_MEM]

        assert find_heavy(processes) == [HEAVY_CPU, HEAVY_MEM]

    def test_find_heavy_is_exact_partition(self):
        """Test every heavy process is returned and no light one is."""
        processes = [
            ProcessInfo(pid=i, name=str(i), cpu=float(c), memory_mb=m)
            for i, (c, m) in enumerate([(0, 0), (25, 0), (0, 600), (19, 499), (20, 500), (5, 10)])
        ]

        heavy = find_heavy(processes)

        assert heavy == [p for p in processes if p.cpu >= 20.0 or p.memory_mb >= 500]
        assert [p.pid for p in heavy] == [1, 2, 4]

    def test_find_heavy_empty(self):
        assert find_heavy([]) == []


class TestParsePid:
    """Tests for operator PID parsing."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("101", 101),
            (" 42\n", 42),
            ("+7", 7),
            ("-1", -1),
            ("0", 0),
            ("2147483647", 2147483647),
            ("-2147483648", -2147483648),
        ],
    )
    def test_accepts_signed_32_bit_decimal(self, text, expected):
        assert parse_pid(text) == expected

    @pytest.mark.parametrize(
        "text", ["", "abc", "1_000", "\u0663", "\uff11\uff12", "1 2", "1e3", "2147483648", "-2147483649"]
    )
    def test_rejects_everything_else(self, text):
        """Test underscores, non-ASCII digits and out-of-range values are rejected."""
        assert parse_pid(text) is None


class TestTerminationFlow:
    """Tests for run_termination_flow."""

    def test_all_clear(self, console, output):
        """Test no prompt is shown when nothing is heavy."""
        script = Script()
        recorder = Recorder()

        outcome = run_termination_flow([LIGHT], terminate=recorder, prompt=script, console=console)

        assert outcome is FlowOutcome.ALL_CLEAR
        assert script.prompts == []
        assert recorder.pids == []
        assert "No high resource consuming processes detected" in output.getvalue()

    def test_lists_heavy_processes(self, console, output):
        run_termination_flow(
            [HEAVY_CPU, LIGHT, HEAVY_MEM],
            terminate=Recorder(),
            prompt=Script("n"),
            console=console,
        )

        text = output.getvalue()
        assert "PID 101 (encoder) → CPU: 45.2% | MEM: 120 MB" in text
        assert "PID 202 (browser) → CPU: 2.0% | MEM: 900 MB" in text
        assert "shell" not in text

    @pytest.mark.parametrize("answer", ["n", "", "yes", "no", "yy"])
    def test_declined(self, console, output, answer):
        """Test anything other than y ends the flow without side effects."""
        recorder = Recorder()
        script = Script(answer)

        outcome = run_termination_flow([HEAVY_CPU], terminate=recorder, prompt=script, console=console)

        assert outcome is FlowOutcome.DECLINED
        assert recorder.pids == []
        assert len(script.prompts) == 1
        assert "No processes terminated" in output.getvalue()

    @pytest.mark.parametrize("answer", ["y", "Y", " y\n"])
    def test_affirmative_asks_for_pid(self, console, answer):
        recorder = Recorder()
        script = Script(answer, "101")

        outcome = run_termination_flow([HEAVY_CPU], terminate=recorder, prompt=script, console=console)

        assert outcome is FlowOutcome.TERMINATED
        assert recorder.pids == [101]

    def test_prompts_are_distinguishable(self, console):
        script = Script("y", "101")

        run_termination_flow([HEAVY_CPU], terminate=Recorder(), prompt=script, console=console)

        assert len(script.prompts) == 2
        assert "(y/n)" in script.prompts[0]
        assert "PID" in script.prompts[1]
        assert script.prompts[0] != script.prompts[1]

    @pytest.mark.parametrize(
        "pid_input",
        ["abc", "", "12abc", "1_000", "\u0663", "1.5", "0x10", "99999999999", "2147483648", "-2147483649"],
    )
    def test_invalid_pid(self, console, output, pid_input):
        """Test anything but a decimal signed 32-bit PID is reported and nothing is terminated."""
        recorder = Recorder()
        script = Script("y", pid_input)

        outcome = run_termination_flow([HEAVY_CPU], terminate=recorder, prompt=script, console=console)

        assert outcome is FlowOutcome.INVALID_PID
        assert recorder.pids == []
        assert len(script.prompts) == 2  # No re-prompt
        assert "Invalid PID" in output.getvalue()

    def test_unlisted_pid_is_forwarded(self, console, output):
        """Test any integer PID is forwarded once, flagged or not."""
        recorder = Recorder()

        outcome = run_termination_flow(
            [HEAVY_CPU], terminate=recorder, prompt=Script("y", "9999999"), console=console
        )

        assert outcome is FlowOutcome.TERMINATED
        assert recorder.pids == [9999999]
        assert "not one of the flagged processes" in output.getvalue()

    def test_listed_pid_is_named(self, console, output):
        run_termination_flow(
            [HEAVY_CPU, HEAVY_MEM], terminate=Recorder(), prompt=Script("y", "202"), console=console
        )

        assert "Terminating PID 202 (browser)" in output.getvalue()

    def test_termination_failure(self, console, output):
        """Test the OS message is shown verbatim and not retried."""
        recorder = Recorder(error="kill: (101) - Operation not permitted")

        outcome = run_termination_flow(
            [HEAVY_CPU], terminate=recorder, prompt=Script("y", "101"), console=console
        )

        assert outcome is FlowOutcome.TERMINATION_FAILED
        assert recorder.pids == [101]
        assert "Failed to kill process: kill: (101) - Operation not permitted" in output.getvalue()

    def test_success_message(self, console, output):
        run_termination_flow(
            [HEAVY_CPU], terminate=Recorder(), prompt=Script("y", " 101 "), console=console
        )

        assert "Process 101 terminated successfully" in output.getvalue()

    def test_negative_pid_reaches_terminator(self, console):
        """Test the flow forwards syntactically valid integers unchanged."""
        recorder = Recorder(error="refusing to terminate non-positive PID -1")

        outcome = run_termination_flow(
            [HEAVY_CPU], terminate=recorder, prompt=Script("y", "-1"), console=console
        )

        assert outcome is FlowOutcome.TERMINATION_FAILED
        assert recorder.pids == [-1]
