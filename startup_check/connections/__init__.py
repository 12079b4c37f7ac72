"""Public entrypoints for configuration loading and remote executors."""

from ._config import load_connection_config
from .remote import BaseExecutor, CommandResult, TRANSPORTS, create_executor

__all__ = [
    "load_connection_config",
    "BaseExecutor",
    "CommandResult",
    "TRANSPORTS",
    "create_executor",
]
