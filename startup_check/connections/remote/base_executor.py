"""Abstract remote-execution contract used by the startup checker."""

from abc import ABC, abstractmethod

from .data_contract import CommandResult


class BaseExecutor(ABC):
    @abstractmethod
    def connect(self) -> None:
        """Open (or validate) access to the remote host."""
        pass

    @abstractmethod
    def run(self, command: str) -> CommandResult:
        """Execute a shell command remotely and capture its status and output.

        Raises RemoteExecutionError when the command could not be executed at
        all. A non-zero remote exit status is returned, not raised.
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release all executor resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
