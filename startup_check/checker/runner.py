import sys
import time
from enum import Enum
from typing import Callable

from ..connections._logging import get_logger
from ..connections.remote.base_executor import BaseExecutor
from ..errors import RemoteExecutionError
from .commands import container_logs_command, grep_logs_command, tail_logs_command
from .config import CheckConfig

logger = get_logger("checker.runner")


class Outcome(Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"
    MISCONFIGURED = "misconfigured"

    @property
    def exit_code(self) -> int:
        return _EXIT_CODES[self]


_EXIT_CODES = {
    Outcome.SUCCESS: 0,
    Outcome.FAILURE: 1,
    Outcome.TIMEOUT: 1,
    Outcome.MISCONFIGURED: 2,
}


class StartupChecker:
    """Poll the container log until a failure or success pattern shows up.

    Each attempt runs the failure check first, then the success check. Log
    output is dumped only for FAILURE and TIMEOUT.
    """

    def __init__(
        self,
        config: CheckConfig,
        executor: BaseExecutor,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.config = config
        self.executor = executor
        self.sleep = sleep

    def run(self) -> Outcome:
        config = self.config
        self._print_settings()

        for attempt in range(config.max_retries):
            if self._log_matches(config.failure_grep, "failure", attempt):
                print("::error::Application failed to start. Check logs for details.")
                self.print_logs()
                return Outcome.FAILURE

            if self._log_matches(config.success_grep, "success", attempt):
                print("Application started successfully.")
                return Outcome.SUCCESS

            if attempt == config.max_retries - 1:
                print("::error::Application did not start within the expected time. Check logs for details.")
                self.print_logs()
                return Outcome.TIMEOUT

            print(
                f"Application still starting... Waiting for {config.retry_interval} seconds "
                f"before next check. (Attempt {attempt + 1}/{config.max_retries})"
            )
            self.sleep(config.retry_interval)

        print("::error::Unexpected loop exit.")
        return Outcome.FAILURE

    def print_logs(self) -> None:
        config = self.config
        if config.full_logs:
            print("Full application logs:")
            command = container_logs_command(config.server_path, config.container_name)
        else:
            print(f"Last {config.log_lines} lines of application logs:")
            command = tail_logs_command(config.server_path, config.container_name, config.log_lines)

        try:
            result = self.executor.run(command)
        except RemoteExecutionError as exc:
            print(f"::warning::Could not fetch application logs: {exc}", file=sys.stderr)
            return

        if result.output:
            print(result.output, end="" if result.output.endswith("\n") else "\n")

    def _log_matches(self, pattern: str, label: str, attempt: int) -> bool:
        command = grep_logs_command(self.config.server_path, self.config.container_name, pattern)
        try:
            result = self.executor.run(command)
        except RemoteExecutionError as exc:
            # An unreachable host counts as "no match yet"; the retry budget still applies.
            logger.warning("%s check on attempt %s could not run: %s", label.capitalize(), attempt + 1, exc)
            return False

        logger.info("%s check on attempt %s exited with status %s", label.capitalize(), attempt + 1, result.exit_status)
        return result.success

    def _print_settings(self) -> None:
        config = self.config
        print("Checking application startup status...")
        print(f"Container: {config.container_name}")
        print(f"Max retries: {config.max_retries}, Retry interval: {config.retry_interval}s")
        print(f"Failure grep: {config.failure_grep}")
        print(f"Success grep: {config.success_grep}")
        print(f"Log lines: {config.log_lines}")


def run_startup_check(
    config: CheckConfig,
    executor: BaseExecutor,
    sleep: Callable[[float], None] = time.sleep,
) -> Outcome:
    """Run one bounded startup check and always release the executor."""
    with executor:
        return StartupChecker(config, executor, sleep=sleep).run()
