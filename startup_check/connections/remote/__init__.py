from .base_executor import BaseExecutor
from .data_contract import CommandResult
from .factory import TRANSPORTS, create_executor
from .openssh import OpenSSHExecutor
from .ssh import SSHConfig, SSHExecutor

__all__ = [
    "BaseExecutor",
    "CommandResult",
    "TRANSPORTS",
    "create_executor",
    "OpenSSHExecutor",
    "SSHConfig",
    "SSHExecutor",
]
