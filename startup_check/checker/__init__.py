from .commands import container_logs_command, grep_logs_command, tail_logs_command
from .config import (
    DEFAULT_FAILURE_GREP,
    DEFAULT_SUCCESS_GREP,
    FULL_LOG_TOKEN,
    REQUIRED_FIELDS,
    CheckConfig,
    build_check_config,
    parse_log_lines,
)
from .runner import Outcome, StartupChecker, run_startup_check

__all__ = [
    "container_logs_command",
    "grep_logs_command",
    "tail_logs_command",
    "DEFAULT_FAILURE_GREP",
    "DEFAULT_SUCCESS_GREP",
    "FULL_LOG_TOKEN",
    "REQUIRED_FIELDS",
    "CheckConfig",
    "build_check_config",
    "parse_log_lines",
    "Outcome",
    "StartupChecker",
    "run_startup_check",
]
