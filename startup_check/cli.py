import argparse
import sys

from .checker import REQUIRED_FIELDS, Outcome, build_check_config, run_startup_check
from .connections import TRANSPORTS, create_executor, load_connection_config
from .connections._logging import get_logger
from .errors import ConfigurationError

ENV_PREFIX = "STARTUP_CHECK"

logger = get_logger("cli")

_EPILOG = f"""\
Required values may also come from --config <file.json> or from
{ENV_PREFIX}_<NAME> environment variables (e.g. {ENV_PREFIX}_SSH_HOST);
command-line flags win.

log-lines:
  number      tail the last N lines on failure/timeout
  all|full|0  print the full log on failure/timeout

Exit codes:
  0  success message found
  1  failure message found OR timeout
  2  invalid arguments / misconfiguration
"""


def _parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in {"true", "yes", "1"}:
        return True
    if normalized in {"false", "no", "0"}:
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="startup-check",
        description="Check over SSH whether a freshly deployed Docker container started.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    required = parser.add_argument_group("required")
    required.add_argument("--ssh-user", help="Remote SSH user")
    required.add_argument("--ssh-host", help="Remote SSH host")
    required.add_argument("--ssh-key", help="Path to the SSH private key")
    required.add_argument("--server-path", help="Remote working directory of the deployment")
    required.add_argument("--container-name", help="Docker container name")

    optional = parser.add_argument_group("optional")
    optional.add_argument("--ssh-port", type=int, help="SSH port (default: 22)")
    optional.add_argument("--max-retries", type=int, help="Number of checks before timing out (default: 10)")
    optional.add_argument("--retry-interval", type=int, help="Seconds between checks (default: 10)")
    optional.add_argument("--log-lines", help="Lines to print on failure/timeout: N or all|full|0 (default: 12)")
    optional.add_argument("--failure-grep", help='Failure pattern (default: "APPLICATION FAILED TO START")')
    optional.add_argument("--success-grep", help="Success pattern (default: Spring Boot 'Started ... in N seconds')")
    optional.add_argument(
        "--strict-host-key-checking",
        type=_parse_bool,
        metavar="{true,false}",
        help="Reject unknown host keys (default: true)",
    )
    optional.add_argument("--command-timeout", type=float, help="Per remote call timeout in seconds (default: 30)")
    optional.add_argument("--transport", choices=TRANSPORTS, help="Remote execution backend (default: paramiko)")
    optional.add_argument("--config", help="JSON file with check settings")

    return parser


def resolve_config(args: argparse.Namespace) -> dict:
    """Merge the JSON file, environment and command-line layers."""
    overrides = {key: value for key, value in vars(args).items() if key != "config"}
    return load_connection_config(
        file_path=args.config,
        env_prefix=ENV_PREFIX,
        required=REQUIRED_FIELDS,
        overrides=overrides,
    )


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        values = resolve_config(args)
    except ConfigurationError as e:
        print(f"{e}", file=sys.stderr)
        parser.print_help(sys.stderr)
        sys.exit(Outcome.MISCONFIGURED.exit_code)

    try:
        config = build_check_config(values)
        executor = create_executor(config.transport, **config.executor_options())
    except (ValueError, TypeError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        sys.exit(Outcome.MISCONFIGURED.exit_code)

    outcome = run_startup_check(config, executor)
    logger.info("Startup check finished with outcome=%s", outcome.value)
    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
