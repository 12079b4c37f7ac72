from .config import SSHConfig
from .executor import SSHExecutor

__all__ = ["SSHConfig", "SSHExecutor"]
