"""
Provisioning Configuration Constants
====================================

This module centralizes ALL provisioning constants: install prefixes,
download URLs, the Flutter checkout, Android SDK layout and version floors.

MODIFICATION RULES:
------------------
1. When Google publishes a new command-line tools build, update
   ANDROID_CMDLINE_TOOLS_URL (the "latest" link name is pinned by build id)
2. When CocoaPods raises its Ruby requirement, update RUBY_MIN_VERSION
3. Everything user-tunable is mirrored in config.settings.ProvisionSettings;
   the values here are only its defaults

Date: 2026-10-17
"""

from typing import Dict, Tuple


# =============================================================================
# Shell Detection
# =============================================================================
#
# The rc file receives the persisted `export PATH=...` lines.
# Shells not listed here get no persistence (warning only).
#

DEFAULT_SHELL = "/bin/zsh"
"""Assumed login shell when $SHELL is unset (macOS default since Catalina)."""

SHELL_RC_FILES: Dict[str, str] = {
    "zsh": ".zshrc",
    "bash": ".bash_profile",
}


# =============================================================================
# Architecture / Homebrew Prefix
# =============================================================================

ARM_MACHINES: Tuple[str, ...] = ("arm64", "aarch64")

HOMEBREW_PREFIX_ARM = "/opt/homebrew"
"""Homebrew prefix on Apple Silicon."""

HOMEBREW_PREFIX_INTEL = "/usr/local"
"""Homebrew prefix on Intel Macs (and anything else)."""

HOMEBREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"

CONFLICTING_BREW_FORMULAE: Tuple[str, ...] = ("dart",)
"""Formulae that shadow the Dart SDK bundled with the Flutter checkout."""

CONFLICTING_BREW_CASKS: Tuple[str, ...] = ("flutter",)
"""Casks that shadow the Flutter checkout in the home directory."""


# =============================================================================
# Xcode Command Line Tools
# =============================================================================

XCODE_CLT_DIR = "/Library/Developer/CommandLineTools"
"""Removed before re-triggering the installer (a broken CLT dir blocks it)."""


# =============================================================================
# Flutter SDK
# =============================================================================

FLUTTER_REPO_URL = "https://github.com/flutter/flutter.git"
FLUTTER_BRANCH = "stable"
FLUTTER_DIR = "flutter"
"""Checkout directory, relative to the home directory."""


# =============================================================================
# Ruby / CocoaPods
# =============================================================================

RUBY_MIN_VERSION = "3.1"
"""
Minimum Ruby version for CocoaPods on Apple Silicon.

The system Ruby shipped with macOS (2.6) cannot build the ffi extension
CocoaPods needs on arm64, so Homebrew Ruby is installed below this floor.
"""

COCOAPODS_GEM = "cocoapods"

RUBY_VERSION_SNIPPET = "print RUBY_VERSION"
GEM_BINDIR_SNIPPET = 'require "rubygems"; puts Gem.bindir'


# =============================================================================
# Android SDK
# =============================================================================

ANDROID_SDK_DIR = "Library/Android/sdk"
"""SDK root relative to the home directory (Android Studio's default)."""

ANDROID_STUDIO_CASK = "android-studio"

ANDROID_CMDLINE_TOOLS_URL = (
    "https://dl.google.com/android/repository/commandlinetools-mac-11076708_latest.zip"
)

ANDROID_CMDLINE_TOOLS_ARCHIVE = "/tmp/cmdline-tools.zip"

ANDROID_PLATFORM_TOOLS_PACKAGE = "platform-tools"

ANDROID_PLATFORM_PATTERN = r"platforms;android-[0-9]+"
ANDROID_BUILD_TOOLS_PATTERN = r"build-tools;[0-9.]+"

ANDROID_SDK_ENV_VARS: Tuple[str, ...] = ("ANDROID_SDK_ROOT", "ANDROID_HOME")


# =============================================================================
# Required Commands
# =============================================================================
#
# A missing command from this list after its install step aborts the run.
# build_toolchain() checks each tool's `required_command` against it.
#

REQUIRED_COMMANDS: Tuple[str, ...] = ("pod", "sdkmanager")


# =============================================================================
# Console
# =============================================================================

START_BANNER = "Auto Flutter + Android Install Script"
END_BANNER = "Installation Completed!"


# =============================================================================
# Validation
# =============================================================================

def validate_config():
    """
    Validate configuration consistency.

    Call this at module load time to catch configuration errors early.
    """
    if HOMEBREW_PREFIX_ARM == HOMEBREW_PREFIX_INTEL:
        raise ValueError("Homebrew prefixes for ARM and Intel must differ")

    if not ANDROID_CMDLINE_TOOLS_URL.endswith(".zip"):
        raise ValueError(
            f"ANDROID_CMDLINE_TOOLS_URL must point to a zip archive: {ANDROID_CMDLINE_TOOLS_URL}"
        )


# Run validation at import time
validate_config()
