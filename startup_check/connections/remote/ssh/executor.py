import paramiko

from ....errors import RemoteExecutionError
from ..._config import load_connection_config
from ..._logging import get_logger, redact_config
from ..base_executor import BaseExecutor
from ..data_contract import CommandResult
from .config import SSHConfig


class SSHExecutor(BaseExecutor):
    """Run commands over a single reusable paramiko connection.

    Authentication is key-only and non-interactive: no agent, no key
    discovery, no password fallback. A transport error drops the connection so
    the next call reconnects from scratch.
    """

    def __init__(
        self,
        host: str = "",
        port: int = 22,
        username: str = "",
        private_key_path: str = "",
        key_passphrase: str | None = None,
        strict_host_key_checking: bool = True,
        timeout: float = 30.0,
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
        self.logger = get_logger("remote.ssh")
        self._client: paramiko.SSHClient | None = None

    @property
    def target(self) -> str:
        return f"{self.config.username}@{self.config.host}:{self.config.port}"

    def connect(self) -> None:
        if self._client is not None:
            return

        safe_config = redact_config(self.config.model_dump())
        self.logger.info("Connecting SSH executor with config=%s", safe_config)

        client = paramiko.SSHClient()
        if self.config.strict_host_key_checking:
            client.load_system_host_keys()
            client.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            # In-memory only; nothing is written to known_hosts.
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        try:
            client.connect(
                hostname=self.config.host,
                port=self.config.port,
                username=self.config.username,
                key_filename=self.config.private_key_path,
                passphrase=self.config.key_passphrase,
                timeout=self.config.timeout,
                banner_timeout=self.config.timeout,
                auth_timeout=self.config.timeout,
                allow_agent=False,
                look_for_keys=False,
            )
        except (paramiko.SSHException, OSError) as exc:
            client.close()
            self.logger.warning("SSH connection to %s failed: %s", self.target, exc)
            raise RemoteExecutionError(f"SSH connection to {self.target} failed: {exc}") from exc

        self._client = client
        self.logger.info("SSH executor connected to %s", self.target)

    def run(self, command: str) -> CommandResult:
        self.connect()
        self.logger.debug("Running remote command on %s: %s", self.target, command)

        channel = None
        try:
            transport = self._client.get_transport()
            if transport is None or not transport.is_active():
                raise paramiko.SSHException("SSH transport is not active")

            channel = transport.open_session(timeout=self.config.timeout)
            channel.settimeout(self.config.timeout)
            channel.set_combine_stderr(True)
            channel.exec_command(command)
            raw_output = channel.makefile("rb").read()
            exit_status = channel.recv_exit_status()
        except (paramiko.SSHException, OSError) as exc:
            self.logger.warning("Remote command on %s could not be executed: %s", self.target, exc)
            self.close()
            raise RemoteExecutionError(
                f"Remote command on {self.target} could not be executed: {exc}",
                command=command,
            ) from exc
        finally:
            if channel is not None:
                channel.close()

        output = raw_output.decode("utf-8", errors="replace")
        self.logger.debug("Remote command exited with status %s", exit_status)
        return CommandResult(command=command, exit_status=exit_status, output=output)

    def close(self) -> None:
        if self._client is not None:
            self.logger.info("Closing SSH executor")
            self._client.close()
            self._client = None
