#!/usr/bin/env python3
"""
Environment Detector Tests
==========================

Shell -> rc file mapping and architecture -> Homebrew prefix mapping.
All inputs are injected; nothing depends on the machine running the tests.
"""

import logging
from pathlib import Path

import pytest

from autoflutter.installer.core.detector import (
    detect_environment,
    detect_install_prefix,
    detect_shell_rc,
    is_arm_machine,
)


class TestShellRc:
    """Tests for detect_shell_rc()."""

    @pytest.mark.parametrize("shell,rc_name", [
        ("/bin/zsh", ".zshrc"),
        ("zsh", ".zshrc"),
        ("/opt/homebrew/bin/zsh", ".zshrc"),
        ("/bin/bash", ".bash_profile"),
    ])
    def test_known_shells(self, shell, rc_name, tmp_path):
        assert detect_shell_rc(shell, tmp_path) == tmp_path / rc_name

    @pytest.mark.parametrize("shell", ["/usr/local/bin/fish", "/bin/tcsh", "nu"])
    def test_unknown_shell_has_no_rc(self, shell, tmp_path):
        assert detect_shell_rc(shell, tmp_path) is None

    def test_defaults_to_zsh_without_shell_env(self, monkeypatch, tmp_path):
        monkeypatch.delenv("SHELL", raising=False)
        assert detect_shell_rc(home=tmp_path) == tmp_path / ".zshrc"

    def test_reads_shell_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SHELL", "/bin/bash")
        assert detect_shell_rc(home=tmp_path) == tmp_path / ".bash_profile"


class TestInstallPrefix:
    """Architecture branch for the Homebrew prefix."""

    @pytest.mark.parametrize("machine", ["arm64", "aarch64", "ARM64"])
    def test_arm_prefix(self, machine):
        assert is_arm_machine(machine)
        assert detect_install_prefix(machine) == "/opt/homebrew"

    @pytest.mark.parametrize("machine", ["x86_64", "i386", ""])
    def test_generic_prefix(self, machine):
        assert not is_arm_machine(machine)
        assert detect_install_prefix(machine) == "/usr/local"


class TestDetectEnvironment:
    """Tests for detect_environment()."""

    def test_apple_silicon_zsh(self, tmp_path):
        env = detect_environment(shell="/bin/zsh", machine="arm64", home=tmp_path)

        assert env.shell == "zsh"
        assert env.rc_file == tmp_path / ".zshrc"
        assert env.is_arm is True
        assert env.install_prefix == "/opt/homebrew"
        assert env.brew_bin == "/opt/homebrew/bin"
        assert env.home == tmp_path

    def test_intel_bash(self, tmp_path):
        env = detect_environment(shell="/bin/bash", machine="x86_64", home=tmp_path)

        assert env.rc_file == tmp_path / ".bash_profile"
        assert env.is_arm is False
        assert env.brew_bin == "/usr/local/bin"

    def test_unknown_shell_warns_and_continues(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING)

        env = detect_environment(shell="/usr/bin/fish", machine="arm64", home=tmp_path)

        assert env.rc_file is None
        assert env.install_prefix == "/opt/homebrew"
        assert "Unknown shell, PATH persistence skipped" in caplog.text
