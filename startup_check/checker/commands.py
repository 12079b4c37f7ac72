"""Shell command builders for the remote side of the startup check.

Every interpolated value is POSIX-quoted, so a working directory, container
name or pattern containing quotes or metacharacters reaches the remote
programs as one literal argument.
"""

from shlex import quote


def container_logs_command(server_path: str, container_name: str) -> str:
    """Combined stdout/stderr of the container, run from the deployment directory."""
    return f"cd {quote(server_path)} && docker logs {quote(container_name)} 2>&1"


def grep_logs_command(server_path: str, container_name: str, pattern: str) -> str:
    """Exit status 0 iff the container log matches the Perl-compatible pattern."""
    return f"{container_logs_command(server_path, container_name)} | grep -qP {quote(pattern)}"


def tail_logs_command(server_path: str, container_name: str, lines: int) -> str:
    return f"{container_logs_command(server_path, container_name)} | tail -n {int(lines)}"
