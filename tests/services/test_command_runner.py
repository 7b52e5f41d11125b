import sys

import pytest

from devhost.errors import CommandError
from devhost.services.command_runner import CommandRunner


class DummyLogger:
    def debug(self, *_args, **_kwargs):
        return None


def test_command_runner_raises_with_stderr():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(CommandError, match="boom"):
        runner.run(
            [sys.executable, "-c", "import sys; sys.stderr.write('boom'); sys.exit(1)"],
            check=True,
            capture_output=True,
        )


def test_command_runner_returns_when_check_disabled():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [sys.executable, "-c", "import sys; sys.exit(1)"],
        check=False,
        capture_output=True,
    )

    assert result.returncode == 1


def test_command_runner_passes_input_and_env():
    runner = CommandRunner(logger=DummyLogger())

    result = runner.run(
        [
            sys.executable,
            "-c",
            "import os, sys; sys.stdout.write(sys.stdin.read() + os.environ['DEVHOST_TEST'])",
        ],
        capture_output=True,
        input_text="hello ",
        env={"DEVHOST_TEST": "world"},
    )

    assert result.stdout == "hello world"


def test_command_runner_missing_command_raises_error():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(CommandError, match="Required command not found"):
        runner.run(["devhost-command-that-does-not-exist"], capture_output=True)


def test_command_runner_timeout_raises_error():
    runner = CommandRunner(logger=DummyLogger())

    with pytest.raises(CommandError, match="timed out"):
        runner.run(
            [sys.executable, "-c", "import time; time.sleep(2)"],
            check=True,
            capture_output=True,
            timeout=0.1,
        )
