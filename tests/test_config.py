import sys
import unittest
from pathlib import Path
import tempfile

from pydantic import ValidationError

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from startup_check.checker.config import (  # noqa: E402
    DEFAULT_FAILURE_GREP,
    DEFAULT_SUCCESS_GREP,
    FULL_LOG_TOKEN,
    CheckConfig,
    build_check_config,
    parse_log_lines,
)
from startup_check.errors import ConfigurationError  # noqa: E402


class ParseLogLinesTests(unittest.TestCase):
    def test_full_dump_tokens(self):
        for value in ("all", "full", "0", 0):
            with self.subTest(value=value):
                self.assertEqual(parse_log_lines(value), FULL_LOG_TOKEN)

    def test_numeric_values(self):
        self.assertEqual(parse_log_lines("12"), 12)
        self.assertEqual(parse_log_lines(" 40 "), 40)
        self.assertEqual(parse_log_lines(3), 3)

    def test_rejects_other_values(self):
        for value in ("lots", "-5", "1.5", "", -1, True, "ALL12"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_log_lines(value)


class CheckConfigTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.key_path = Path(self._tmp.name) / "id_ed25519"
        self.key_path.write_text("key")
        self.values = {
            "ssh_host": "deploy.example.com",
            "ssh_user": "ci",
            "ssh_key": str(self.key_path),
            "server_path": "/srv/app",
            "container_name": "prod-api",
        }

    def tearDown(self):
        self._tmp.cleanup()

    def test_defaults(self):
        config = build_check_config(self.values)

        self.assertEqual(config.ssh_port, 22)
        self.assertEqual(config.max_retries, 10)
        self.assertEqual(config.retry_interval, 10)
        self.assertEqual(config.log_lines, 12)
        self.assertFalse(config.full_logs)
        self.assertTrue(config.strict_host_key_checking)
        self.assertEqual(config.success_grep, DEFAULT_SUCCESS_GREP)
        self.assertEqual(config.failure_grep, DEFAULT_FAILURE_GREP)
        self.assertEqual(config.transport, "paramiko")

    def test_string_values_are_coerced(self):
        config = build_check_config(
            {
                **self.values,
                "ssh_port": "2222",
                "max_retries": "3",
                "log_lines": "full",
                "strict_host_key_checking": "false",
            }
        )

        self.assertEqual(config.ssh_port, 2222)
        self.assertEqual(config.max_retries, 3)
        self.assertTrue(config.full_logs)
        self.assertFalse(config.strict_host_key_checking)

    def test_missing_required_field(self):
        for field in self.values:
            with self.subTest(field=field):
                values = dict(self.values)
                values.pop(field)
                with self.assertRaises(ConfigurationError):
                    build_check_config(values)

    def test_empty_required_field(self):
        with self.assertRaises(ConfigurationError):
            build_check_config({**self.values, "container_name": ""})

    def test_missing_key_file(self):
        with self.assertRaises(ConfigurationError) as ctx:
            build_check_config({**self.values, "ssh_key": str(self.key_path) + ".missing"})

        self.assertIn("SSH private key file not found", str(ctx.exception))

    def test_invalid_log_lines(self):
        with self.assertRaises(ConfigurationError) as ctx:
            build_check_config({**self.values, "log_lines": "lots"})

        self.assertIn("log_lines", str(ctx.exception))

    def test_retry_bounds(self):
        with self.assertRaises(ConfigurationError):
            build_check_config({**self.values, "max_retries": 0})
        with self.assertRaises(ConfigurationError):
            build_check_config({**self.values, "retry_interval": -1})

    def test_config_is_immutable(self):
        config = build_check_config(self.values)

        with self.assertRaises(ValidationError):
            config.max_retries = 99

    def test_executor_options(self):
        config = CheckConfig(**self.values, ssh_port=2200, command_timeout=5)

        self.assertEqual(
            config.executor_options(),
            {
                "host": "deploy.example.com",
                "port": 2200,
                "username": "ci",
                "private_key_path": str(self.key_path),
                "key_passphrase": None,
                "strict_host_key_checking": True,
                "timeout": 5.0,
            },
        )


if __name__ == "__main__":
    unittest.main()
