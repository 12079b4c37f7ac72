"""Executor factory keyed by transport name."""

from typing import Any

from .._logging import get_logger, redact_config
from .base_executor import BaseExecutor
from .openssh import OpenSSHExecutor
from .ssh.executor import SSHExecutor

logger = get_logger("remote.factory")

_EXECUTORS: dict[str, type[BaseExecutor]] = {
    "paramiko": SSHExecutor,
    "ssh": SSHExecutor,
    "openssh": OpenSSHExecutor,
}

TRANSPORTS = ("paramiko", "openssh")


def _normalize_transport(value: Any) -> str:
    """Validate and normalize transport name to lowercase string."""
    if not isinstance(value, str) or not value.strip():
        raise ValueError("Missing remote transport name.")
    return value.strip().lower()


def create_executor(transport: str, **options: Any) -> BaseExecutor:
    """Instantiate the executor class registered for the transport."""
    key = _normalize_transport(transport)
    executor_class = _EXECUTORS.get(key)
    if executor_class is None:
        raise ValueError(f"Unsupported transport '{transport}'. Use one of: {', '.join(TRANSPORTS)}")

    logger.info("Creating executor transport=%s class=%s options=%s", key, executor_class.__name__, redact_config(options))

    try:
        return executor_class(**options)
    except TypeError as exc:
        raise TypeError(
            f"Invalid parameters for transport '{key}' using executor '{executor_class.__name__}': {exc}"
        ) from exc


__all__ = ["TRANSPORTS", "create_executor"]
