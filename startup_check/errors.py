"""Exception types raised by the startup checker."""


class StartupCheckError(Exception):
    """Base class for all startup checker errors."""


class ConfigurationError(StartupCheckError, ValueError):
    """Invalid or missing configuration, detected before any remote call."""


class RemoteExecutionError(StartupCheckError, RuntimeError):
    """A remote command could not be executed at all (connect, auth, timeout)."""

    def __init__(self, message: str, command: str | None = None):
        super().__init__(message)
        self.command = command
