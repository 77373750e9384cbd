#!/usr/bin/env python3
"""
CLI Tests
=========

parse_args() defaults and main() wiring. Provisioner and setup_logger are
patched so nothing is installed and global logging is left alone.
"""

from pathlib import Path
from unittest.mock import patch

from autoflutter.main import EXIT_INTERRUPTED, EXIT_USAGE, main, parse_args


class TestParseArgs:

    def test_defaults(self):
        args = parse_args([])

        assert args.config is None
        assert args.dry_run is None
        assert args.home is None
        assert args.log_file is None
        assert args.log_level is None
        assert args.version is False

    def test_short_flags(self):
        args = parse_args(["-n", "-c", "autoflutter.yaml"])

        assert args.dry_run is True
        assert args.config == "autoflutter.yaml"


class TestMain:

    def test_version(self, capsys):
        with patch("autoflutter.main.Provisioner") as provisioner:
            assert main(["--version"]) == 0

        assert capsys.readouterr().out.startswith("autoflutter ")
        provisioner.assert_not_called()

    def test_bad_config_is_usage_error(self, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_text("- not\n- a mapping\n", encoding="utf-8")

        with patch("autoflutter.main.Provisioner") as provisioner:
            assert main(["--config", str(config)]) == EXIT_USAGE

        assert "[ERR ]" in capsys.readouterr().err
        provisioner.assert_not_called()

    def test_settings_passed_to_provisioner(self, tmp_path):
        with patch("autoflutter.main.Provisioner") as provisioner, \
                patch("autoflutter.main.setup_logger") as setup_logger:
            provisioner.return_value.run.return_value = 0

            assert main(["--dry-run", "--home", str(tmp_path), "--log-level", "DEBUG"]) == 0

        settings = provisioner.call_args[0][0]
        assert settings.dry_run is True
        assert settings.home == Path(tmp_path)
        assert setup_logger.call_args.kwargs["log_level"] == "DEBUG"

    def test_exit_code_propagated(self, tmp_path):
        with patch("autoflutter.main.Provisioner") as provisioner, \
                patch("autoflutter.main.setup_logger"):
            provisioner.return_value.run.return_value = 1

            assert main(["--home", str(tmp_path)]) == 1

    def test_log_file_forwarded(self, tmp_path):
        log_file = tmp_path / "autoflutter.log"
        with patch("autoflutter.main.Provisioner") as provisioner, \
                patch("autoflutter.main.setup_logger") as setup_logger:
            provisioner.return_value.run.return_value = 0

            main(["--home", str(tmp_path), "--log-file", str(log_file)])

        assert setup_logger.call_args.kwargs["log_file"] == str(log_file)

    def test_interrupt_is_clean_exit(self, tmp_path, capsys):
        with patch("autoflutter.main.Provisioner") as provisioner, \
                patch("autoflutter.main.setup_logger"):
            provisioner.return_value.run.side_effect = KeyboardInterrupt

            assert main(["--home", str(tmp_path)]) == EXIT_INTERRUPTED == 130

        assert "Installation cancelled by user." in capsys.readouterr().out
