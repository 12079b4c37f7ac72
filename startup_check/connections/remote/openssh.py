"""Remote execution through the system OpenSSH client."""

import subprocess

from ...errors import RemoteExecutionError
from .._config import load_connection_config
from .._logging import get_logger, redact_config
from .base_executor import BaseExecutor
from .data_contract import CommandResult
from .ssh.config import SSHConfig

# ssh reserves 255 for its own errors (connection refused, auth, host key).
_SSH_ERROR_STATUS = 255


def ssh_base_args(config: SSHConfig, ssh_binary: str = "ssh") -> list[str]:
    """Build the ssh argv up to and including the destination."""
    args = [
        ssh_binary,
        "-i",
        config.private_key_path,
        "-p",
        str(config.port),
        "-o",
        "BatchMode=yes",
        "-o",
        f"ConnectTimeout={max(1, int(config.timeout))}",
    ]
    if config.strict_host_key_checking:
        args += ["-o", "StrictHostKeyChecking=yes"]
    else:
        args += ["-o", "StrictHostKeyChecking=no", "-o", "UserKnownHostsFile=/dev/null"]
    args.append(f"{config.username}@{config.host}")
    return args


class OpenSSHExecutor(BaseExecutor):
    def __init__(
        self,
        host: str = "",
        port: int = 22,
        username: str = "",
        private_key_path: str = "",
        key_passphrase: str | None = None,
        strict_host_key_checking: bool = True,
        timeout: float = 30.0,
        ssh_binary: str = "ssh",
        config: dict | None = None,
    ):
        merged_config = load_connection_config(
            config,
            required=("host", "username", "private_key_path"),
            defaults={
                "port": port,
                "strict_host_key_checking": strict_host_key_checking,
                "timeout": timeout,
            },
            overrides={
                "host": host or None,
                "username": username or None,
                "private_key_path": private_key_path or None,
                "key_passphrase": key_passphrase,
            },
        )
        self.config = SSHConfig.model_validate(merged_config)
        self.ssh_binary = ssh_binary
        self.logger = get_logger("remote.openssh")
        if self.config.key_passphrase:
            self.logger.warning("OpenSSH transport runs in batch mode; key passphrase is ignored")

    def connect(self) -> None:
        # Each command opens its own ssh process.
        self.logger.info("Using OpenSSH executor with config=%s", redact_config(self.config.model_dump()))

    def run(self, command: str) -> CommandResult:
        args = ssh_base_args(self.config, self.ssh_binary) + [command]
        destination = f"{self.config.username}@{self.config.host}"
        self.logger.debug("Running remote command on %s: %s", destination, command)

        try:
            completed = subprocess.run(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self.config.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise RemoteExecutionError(f"ssh client not found: {self.ssh_binary}", command=command) from exc
        except subprocess.TimeoutExpired as exc:
            raise RemoteExecutionError(
                f"Remote command on {destination} timed out after {self.config.timeout}s",
                command=command,
            ) from exc

        output = completed.stdout.decode("utf-8", errors="replace")
        if completed.returncode == _SSH_ERROR_STATUS:
            self.logger.warning("ssh to %s failed: %s", destination, output.strip())
            raise RemoteExecutionError(f"ssh to {destination} failed: {output.strip()}", command=command)

        return CommandResult(command=command, exit_status=completed.returncode, output=output)

    def close(self) -> None:
        pass
