import shlex
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from startup_check.checker.commands import (  # noqa: E402
    container_logs_command,
    grep_logs_command,
    tail_logs_command,
)

AWKWARD_VALUES = [
    "plain",
    "it's-here",
    "'",
    "''",
    "a'; rm -rf / #",
    "$(touch /tmp/pwned)",
    "`id`",
    "with space",
    'double"quote',
    "back\\slash",
]


@pytest.mark.parametrize("value", AWKWARD_VALUES)
def test_grep_command_keeps_values_literal(value):
    command = grep_logs_command(value, value, value)

    assert shlex.split(command) == [
        "cd", value, "&&", "docker", "logs", value, "2>&1", "|", "grep", "-qP", value,
    ]


def test_container_logs_command_shape():
    command = container_logs_command("/srv/my app", "o'brien")

    assert shlex.split(command) == ["cd", "/srv/my app", "&&", "docker", "logs", "o'brien", "2>&1"]


def test_tail_command_uses_integer_count():
    command = tail_logs_command("/srv/app", "api", 25)

    assert command.endswith("| tail -n 25")


def test_default_success_pattern_survives_quoting():
    pattern = r"Started \S+ in [0-9]+(\.[0-9]+)? seconds"

    assert shlex.split(grep_logs_command("/srv", "api", pattern))[-1] == pattern


@pytest.mark.skipif(shutil.which("sh") is None, reason="needs a POSIX shell")
@pytest.mark.parametrize("value", ["it's-here", "a'; echo injected #", "$(echo injected)"])
def test_shell_receives_literal_argument(value):
    # The container name position is exercised through a real shell.
    command = container_logs_command("/", value).replace("docker logs", "printf %s")

    completed = subprocess.run(["sh", "-c", command], capture_output=True, text=True, check=True)

    assert completed.stdout == value
