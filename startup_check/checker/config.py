import os
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..errors import ConfigurationError

DEFAULT_SUCCESS_GREP = r"Started \S+ in [0-9]+(\.[0-9]+)? seconds"
DEFAULT_FAILURE_GREP = "APPLICATION FAILED TO START"
FULL_LOG_TOKEN = "all"
_FULL_LOG_ALIASES = {"all", "full", "0"}

REQUIRED_FIELDS = ("ssh_user", "ssh_host", "ssh_key", "server_path", "container_name")


def parse_log_lines(value: Any) -> int | str:
    """Normalize a log-lines setting to a positive line count or the full-dump token."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid log lines {value!r}. Use a number or one of: all|full|0.")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"Invalid log lines {value!r}. Use a number or one of: all|full|0.")
        return FULL_LOG_TOKEN if value == 0 else value

    text = str(value).strip()
    if text in _FULL_LOG_ALIASES:
        return FULL_LOG_TOKEN
    if text.isascii() and text.isdigit():
        count = int(text)
        return FULL_LOG_TOKEN if count == 0 else count
    raise ValueError(f"Invalid log lines '{value}'. Use a number or one of: all|full|0.")


class CheckConfig(BaseModel):
    """Everything one startup check needs; immutable for the run."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    ssh_host: str = Field(min_length=1)
    ssh_user: str = Field(min_length=1)
    ssh_port: int = Field(default=22, ge=1, le=65535)
    ssh_key: str = Field(min_length=1)
    key_passphrase: str | None = None
    server_path: str = Field(min_length=1)
    container_name: str = Field(min_length=1)
    max_retries: int = Field(default=10, ge=1)
    retry_interval: int = Field(default=10, ge=0)
    success_grep: str = Field(default=DEFAULT_SUCCESS_GREP, min_length=1)
    failure_grep: str = Field(default=DEFAULT_FAILURE_GREP, min_length=1)
    log_lines: int | Literal["all"] = 12
    strict_host_key_checking: bool = True
    command_timeout: float = Field(default=30.0, gt=0)
    transport: Literal["paramiko", "openssh"] = "paramiko"

    @field_validator("ssh_key")
    @classmethod
    def _key_file_must_exist(cls, value: str) -> str:
        path = Path(value).expanduser()
        if not path.is_file():
            raise ValueError(f"SSH private key file not found: {value}")
        if not os.access(path, os.R_OK):
            raise ValueError(f"SSH private key file is not readable: {value}")
        return str(path)

    @field_validator("log_lines", mode="before")
    @classmethod
    def _normalize_log_lines(cls, value: Any) -> int | str:
        return parse_log_lines(value)

    @property
    def full_logs(self) -> bool:
        return self.log_lines == FULL_LOG_TOKEN

    def executor_options(self) -> dict[str, Any]:
        """Connection keyword arguments for the remote executor factory."""
        return {
            "host": self.ssh_host,
            "port": self.ssh_port,
            "username": self.ssh_user,
            "private_key_path": self.ssh_key,
            "key_passphrase": self.key_passphrase,
            "strict_host_key_checking": self.strict_host_key_checking,
            "timeout": self.command_timeout,
        }


def _format_validation_error(exc: ValidationError) -> str:
    messages = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "config"
        message = error["msg"].removeprefix("Value error, ")
        messages.append(f"{field}: {message}")
    return "; ".join(messages)


def build_check_config(values: dict[str, Any]) -> CheckConfig:
    """Validate raw settings, raising ConfigurationError on any problem."""
    try:
        return CheckConfig.model_validate(values)
    except ValidationError as exc:
        raise ConfigurationError(_format_validation_error(exc)) from exc
