"""
Environment Detector
====================

This module answers the two questions every later step depends on:

- Which startup file should persisted PATH entries go to? (login shell)
- Where does Homebrew live on this machine? (CPU architecture)

Both answers are plain values returned in a DetectedEnvironment; nothing
here has side effects. Every input can be injected so tests never depend
on the real machine.

SHELL MAPPING:
-------------
- zsh  -> ~/.zshrc
- bash -> ~/.bash_profile
- anything else -> no rc file; PATH persistence is skipped with a warning

ARCHITECTURE MAPPING:
--------------------
- arm64 / aarch64 (Apple Silicon) -> /opt/homebrew
- anything else (Intel)           -> /usr/local

Date: 2026-10-17
"""

import logging
import os
import platform
import sys
from pathlib import Path
from typing import NamedTuple, Optional

from .config import (
    ARM_MACHINES,
    DEFAULT_SHELL,
    HOMEBREW_PREFIX_ARM,
    HOMEBREW_PREFIX_INTEL,
    SHELL_RC_FILES,
)

logger = logging.getLogger(__name__)


class DetectedEnvironment(NamedTuple):
    """
    Result of environment detection.

    FIELDS:
    - shell: Basename of the login shell (e.g. "zsh")
    - rc_file: Startup file for persisted PATH entries, or None if unknown shell
    - machine: Raw architecture string from the OS (e.g. "arm64")
    - is_arm: True on Apple Silicon
    - install_prefix: Homebrew prefix for this architecture
    - home: Home directory used to resolve the rc file
    """
    shell: str
    rc_file: Optional[Path]
    machine: str
    is_arm: bool
    install_prefix: str
    home: Path

    @property
    def brew_bin(self) -> str:
        return f"{self.install_prefix}/bin"


def detect_shell_rc(shell: Optional[str] = None, home: Optional[Path] = None) -> Optional[Path]:
    """
    Map a login shell to its startup file.

    Args:
        shell: Shell path or name (defaults to $SHELL, then /bin/zsh)
        home: Home directory (defaults to Path.home())

    Returns:
        Path of the rc file, or None when the shell is not recognized
    """
    name = os.path.basename(shell or os.environ.get("SHELL") or DEFAULT_SHELL)
    rc_name = SHELL_RC_FILES.get(name)
    if rc_name is None:
        return None
    return (home or Path.home()) / rc_name


def is_arm_machine(machine: str) -> bool:
    return machine.lower() in ARM_MACHINES


def detect_install_prefix(machine: Optional[str] = None) -> str:
    """Return the Homebrew prefix for an architecture string (default: this machine)."""
    machine = machine if machine is not None else platform.machine()
    return HOMEBREW_PREFIX_ARM if is_arm_machine(machine) else HOMEBREW_PREFIX_INTEL


def detect_environment(
    shell: Optional[str] = None,
    machine: Optional[str] = None,
    home: Optional[Path] = None,
) -> DetectedEnvironment:
    """
    Detect shell, rc file, architecture and install prefix.

    An unrecognized shell is not an error: rc_file is None and a warning
    is logged.
    """
    home = home or Path.home()
    shell_name = os.path.basename(shell or os.environ.get("SHELL") or DEFAULT_SHELL)
    machine = machine if machine is not None else platform.machine()

    rc_file = detect_shell_rc(shell_name, home)
    if rc_file is None:
        logger.warning("Unknown shell, PATH persistence skipped")

    env = DetectedEnvironment(
        shell=shell_name,
        rc_file=rc_file,
        machine=machine,
        is_arm=is_arm_machine(machine),
        install_prefix=detect_install_prefix(machine),
        home=home,
    )
    logger.debug(f"Detected environment: {env}")
    return env


def is_macos() -> bool:
    return sys.platform == "darwin"


def get_platform_name(env: DetectedEnvironment) -> str:
    """
    Get human-readable platform name.

    Returns:
        String like "macOS (Apple Silicon)" or "macOS (Intel)"
    """
    if not is_macos():
        return f"Unsupported ({sys.platform}, {env.machine})"
    return "macOS (Apple Silicon)" if env.is_arm else "macOS (Intel)"
