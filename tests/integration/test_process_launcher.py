"""
Integration Tests: Process Launcher
===================================

Spawns real child processes (the current Python interpreter stands in for
radar-fundamentos) to check exit status reporting and launch failures.
"""

import sys

import pytest

from core.types import Invocation, TaskDescriptor, TaskKind
from execution.process_launcher import SubprocessLauncher
from orchestration.task_scheduler import TaskScheduler
from tests.mocks import SequenceClock
from utils.errors import LaunchError


def _python(code: str) -> Invocation:
    return Invocation(program=sys.executable, args=("-c", code))


class TestSubprocessLauncher:

    def test_zero_exit(self):
        assert SubprocessLauncher().launch(_python("pass")) == 0

    def test_nonzero_exit_returned(self):
        assert SubprocessLauncher().launch(_python("import sys; sys.exit(3)")) == 3

    def test_missing_program_raises_launch_error(self, tmp_path):
        missing = str(tmp_path / "radar-fundamentos-missing")
        with pytest.raises(LaunchError) as exc_info:
            SubprocessLauncher().launch(Invocation(program=missing, args=("cotacoes",)))
        assert exc_info.value.program == missing
        assert isinstance(exc_info.value.cause, OSError)

    def test_extra_environment_passed(self):
        launcher = SubprocessLauncher(env={"RADAR_TEST_MARKER": "42"})
        code = "import os, sys; sys.exit(0 if os.environ.get('RADAR_TEST_MARKER') == '42' else 1)"
        assert launcher.launch(_python(code)) == 0

    def test_arguments_passed_verbatim(self, tmp_path):
        out = tmp_path / "argv.txt"
        code = "import sys; open(sys.argv[1], 'w').write(' '.join(sys.argv[2:]))"
        inv = Invocation(program=sys.executable, args=("-c", code, str(out), "export", "acao", "VALE3"))

        assert SubprocessLauncher().launch(inv) == 0
        assert out.read_text() == "export acao VALE3"


class TestSchedulerWithRealProcesses:

    def test_missing_collector_is_not_fatal(self, runner_config, market_moment, tmp_path):
        from dataclasses import replace

        cfg = replace(runner_config, program=str(tmp_path / "nope"))
        scheduler = TaskScheduler(cfg, clock=SequenceClock([market_moment(2025, 6, 2, 12)]))

        result = scheduler.run_once(
            TaskDescriptor(kind=TaskKind.LIVE_QUOTES_SNAPSHOT, category="geral", codes=("VALE3",))
        )

        assert result.success is False
        assert result.returncode is None
        assert "Could not start" in result.error
        # Output directory is prepared before the launch attempt
        assert cfg.data_dir.is_dir()
