"""
Tool Registry - Single Source of Truth for the Toolchain
=========================================================

Every tool the provisioner manages is a Tool subclass here, and
build_toolchain() is the one place that decides their ORDER.

WHY ORDER MATTERS:
-----------------
Each tool may need binaries registered by an earlier one:

    Homebrew ──► Git ──► Flutter SDK (git clone)
        │
        ├──► Ruby (ARM only) ──► CocoaPods (gem install)
        │
        └──► Android Studio ──► cmdline-tools ──► SDK packages (sdkmanager)

THE TOOL CAPABILITY:
-------------------
    probe()             -> bool       is it already present?
    install()           -> bool       install it once; False on failure
    registered_paths()  -> [str]      directories for the PathLedger
    environment()       -> {str: str} variables exported to later commands
    required_command    -> str|None   must resolve afterwards, or abort

Tools never touch subprocess, requests or os.environ directly; everything
goes through the ShellSession so tests can substitute a double.

Date: 2026-10-17
"""

import logging
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from .config import (
    ANDROID_BUILD_TOOLS_PATTERN,
    ANDROID_CMDLINE_TOOLS_ARCHIVE,
    ANDROID_PLATFORM_PATTERN,
    ANDROID_PLATFORM_TOOLS_PACKAGE,
    ANDROID_SDK_ENV_VARS,
    ANDROID_STUDIO_CASK,
    COCOAPODS_GEM,
    CONFLICTING_BREW_CASKS,
    CONFLICTING_BREW_FORMULAE,
    GEM_BINDIR_SNIPPET,
    REQUIRED_COMMANDS,
    RUBY_VERSION_SNIPPET,
    XCODE_CLT_DIR,
)
from .detector import DetectedEnvironment
from .executor import ShellSession
from .versions import is_below_floor, select_latest_package

if TYPE_CHECKING:
    from ...config.settings import ProvisionSettings

logger = logging.getLogger(__name__)


# =============================================================================
# Base Class
# =============================================================================


class Tool(ABC):
    """
    One provisioning unit.

    Subclasses set `name` (and `required_command` for the required
    whitelist) and implement probe() and install().
    """

    name: str = ""
    required_command: Optional[str] = None

    def __init__(
        self,
        session: ShellSession,
        env: DetectedEnvironment,
        settings: "ProvisionSettings",
    ):
        self.session = session
        self.env = env
        self.settings = settings

    @abstractmethod
    def probe(self) -> bool:
        """True if the tool is already present."""

    @abstractmethod
    def install(self) -> bool:
        """Install the tool once. True on success."""

    def registered_paths(self) -> List[str]:
        return []

    def environment(self) -> Dict[str, str]:
        return {}

    def present_message(self) -> str:
        return f"{self.name} already installed."

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


# =============================================================================
# Homebrew
# =============================================================================


class Homebrew(Tool):
    name = "Homebrew"

    def probe(self) -> bool:
        return self.session.which("brew") is not None

    def install(self) -> bool:
        script = self.session.fetch_text(self.settings.homebrew_install_url)
        if script is None:
            return False
        return self.session.run(["/bin/bash", "-c", script]).ok

    def registered_paths(self) -> List[str]:
        return [self.env.brew_bin]


class XcodeCommandLineTools(Tool):
    """
    Triggers the Xcode Command Line Tools installer.

    `xcode-select --install` only opens a GUI dialog; the run does not wait
    for the user to finish it.
    """

    name = "Xcode Command Line Tools"

    def probe(self) -> bool:
        return self.session.capture(["xcode-select", "-p"]).ok

    def install(self) -> bool:
        self.session.run(["sudo", "rm", "-rf", XCODE_CLT_DIR])
        self.session.run(["xcode-select", "--install"], quiet=True)
        logger.info("⚠️ Complete Xcode tools installation if prompted")
        return True

    def present_message(self) -> str:
        return "Xcode Command Line Tools already installed"


class HomebrewDartFlutterCleanup(Tool):
    """
    Removes Homebrew's dart formula and flutter cask.

    They would otherwise shadow the Flutter checkout (and its bundled Dart)
    on PATH. "Present" here means "nothing to remove".
    """

    name = "Homebrew Dart/Flutter removal"

    def _listed(self, kind: str) -> List[str]:
        result = self.session.capture(["brew", "list", kind])
        return result.stdout.split() if result.ok else []

    def _conflicts(self) -> List[List[str]]:
        commands = []
        formulae = self._listed("--formula")
        casks = self._listed("--cask")
        for formula in CONFLICTING_BREW_FORMULAE:
            if formula in formulae:
                commands.append(["brew", "uninstall", formula, "--force"])
        for cask in CONFLICTING_BREW_CASKS:
            if cask in casks:
                commands.append(["brew", "uninstall", "--cask", cask, "--force"])
        return commands

    def probe(self) -> bool:
        return not self._conflicts()

    def install(self) -> bool:
        for cmd in self._conflicts():
            if not self.session.run(cmd).ok:
                logger.warning(f"Could not run: {' '.join(cmd)}")
        return True

    def present_message(self) -> str:
        return "No Homebrew Dart/Flutter to remove."


# =============================================================================
# Git / Flutter
# =============================================================================


class Git(Tool):
    name = "Git"

    def probe(self) -> bool:
        return self.session.which("git") is not None

    def install(self) -> bool:
        return self.session.run(["brew", "install", "git"]).ok


class FlutterSDK(Tool):
    """
    Flutter SDK cloned from source into the home directory.

    Presence is `<flutter_home>/bin` existing. An interrupted clone that
    already created bin/ is treated as installed.
    """

    name = "Flutter SDK"

    @property
    def flutter_home(self) -> Path:
        return self.settings.flutter_home

    def probe(self) -> bool:
        return (self.flutter_home / "bin").is_dir()

    def install(self) -> bool:
        return self.session.run([
            "git", "clone", self.settings.flutter_repo,
            "-b", self.settings.flutter_branch,
            str(self.flutter_home),
        ]).ok

    def registered_paths(self) -> List[str]:
        return [str(self.flutter_home / "bin")]

    def present_message(self) -> str:
        return f"Flutter already installed at {self.flutter_home}"


# =============================================================================
# Ruby / CocoaPods
# =============================================================================


class HomebrewRuby(Tool):
    """
    Homebrew Ruby for Apple Silicon.

    Installed when no Ruby is on PATH or the active one is older than
    settings.ruby_min_version.
    """

    name = "Homebrew Ruby"

    def installed_version(self) -> Optional[str]:
        if self.session.which("ruby") is None:
            return None
        result = self.session.capture(["ruby", "-e", RUBY_VERSION_SNIPPET])
        return result.stdout if result.ok and result.stdout else None

    def probe(self) -> bool:
        version = self.installed_version()
        if is_below_floor(version, self.settings.ruby_min_version):
            logger.debug(f"Ruby {version or 'missing'} < {self.settings.ruby_min_version}")
            return False
        return True

    def install(self) -> bool:
        if self.session.capture(["brew", "list", "ruby"]).ok:
            return True
        return self.session.run(["brew", "install", "ruby"]).ok

    def registered_paths(self) -> List[str]:
        result = self.session.capture(["brew", "--prefix", "ruby"])
        prefix = result.stdout if result.ok and result.stdout else f"{self.env.install_prefix}/opt/ruby"
        return [f"{prefix}/bin"]

    def present_message(self) -> str:
        return f"Ruby {self.installed_version()} meets the {self.settings.ruby_min_version} minimum."


class CocoaPods(Tool):
    name = "CocoaPods"
    required_command = "pod"

    def probe(self) -> bool:
        return self.session.which("pod") is not None

    def install(self) -> bool:
        return self.session.run(["gem", "install", COCOAPODS_GEM, "--no-document"]).ok

    def registered_paths(self) -> List[str]:
        result = self.session.capture(["ruby", "-e", GEM_BINDIR_SNIPPET])
        if not result.ok or not result.stdout:
            logger.warning("Could not determine the RubyGems bin directory")
            return []
        return [result.stdout.splitlines()[0]]

    def present_message(self) -> str:
        return f"CocoaPods already installed at: {self.session.which('pod')}"


# =============================================================================
# Android
# =============================================================================


class AndroidStudio(Tool):
    name = "Android Studio"

    def probe(self) -> bool:
        return self.session.capture(["brew", "list", "--cask", ANDROID_STUDIO_CASK]).ok

    def install(self) -> bool:
        # A leftover `studio` launcher makes the cask install fail
        stale_launcher = Path(self.env.install_prefix) / "bin" / "studio"
        if stale_launcher.exists() or stale_launcher.is_symlink():
            self.session.run(["sudo", "rm", "-f", str(stale_launcher)])
        return self.session.run(["brew", "install", "--cask", ANDROID_STUDIO_CASK]).ok


class AndroidCommandLineTools(Tool):
    """
    Android SDK command-line tools under <sdk>/cmdline-tools/latest.

    The archive extracts to `cmdline-tools/cmdline-tools`, which is renamed
    to `latest`, the layout sdkmanager expects.
    """

    name = "Android command-line tools"
    required_command = "sdkmanager"

    @property
    def sdk_root(self) -> Path:
        return self.settings.android_sdk_root

    @property
    def tools_parent(self) -> Path:
        return self.sdk_root / "cmdline-tools"

    @property
    def latest(self) -> Path:
        return self.tools_parent / "latest"

    def probe(self) -> bool:
        return self.latest.is_dir()

    def install(self) -> bool:
        archive = Path(ANDROID_CMDLINE_TOOLS_ARCHIVE)
        if not self.session.download(self.settings.cmdline_tools_url, archive):
            return False

        if not self.session.dry_run:
            try:
                self.tools_parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning(f"Could not create {self.tools_parent}: {e}")
                return False

        unzip = self.session.run(["unzip", "-q", "-o", str(archive), "-d", str(self.tools_parent)])
        if not unzip.ok:
            return False

        extracted = self.tools_parent / "cmdline-tools"
        if self.session.dry_run:
            logger.info(f"+ mv {extracted} {self.latest}")
            return True
        try:
            shutil.move(str(extracted), str(self.latest))
        except OSError as e:
            logger.warning(f"Could not move {extracted} to {self.latest}: {e}")
            return False
        return True

    def environment(self) -> Dict[str, str]:
        return {name: str(self.sdk_root) for name in ANDROID_SDK_ENV_VARS}

    def registered_paths(self) -> List[str]:
        return [str(self.latest / "bin"), str(self.sdk_root / "platform-tools")]

    def present_message(self) -> str:
        return f"Android command-line tools already installed at {self.latest}"


class AndroidSdkPackages(Tool):
    """
    platform-tools plus the newest platform and build-tools.

    Always reconciled: sdkmanager itself skips what is already installed.
    A failed install is logged and ignored.
    """

    name = "Android SDK packages"

    def probe(self) -> bool:
        return False

    def resolve_packages(self) -> List[str]:
        logger.info("Resolving latest Android SDK packages")
        listing = self.session.capture(["sdkmanager", "--list"]).stdout
        packages = [ANDROID_PLATFORM_TOOLS_PACKAGE]
        for pattern in (ANDROID_PLATFORM_PATTERN, ANDROID_BUILD_TOOLS_PATTERN):
            latest = select_latest_package(listing, pattern)
            if latest:
                packages.append(latest)
            else:
                logger.warning(f"No Android package matching {pattern!r} found")
        return packages

    def install(self) -> bool:
        packages = self.resolve_packages()
        logger.info(f"Installing: {', '.join(packages)}")
        if not self.session.run(["sdkmanager", *packages]).ok:
            logger.warning("sdkmanager reported errors, continuing")
        return True


# =============================================================================
# Toolchain
# =============================================================================


def build_toolchain(
    env: DetectedEnvironment,
    settings: "ProvisionSettings",
    session: ShellSession,
) -> List[Tool]:
    """
    Tools in installation order.

    Homebrew Ruby is only part of the chain on Apple Silicon.

    Raises:
        ValueError: the tools' required commands differ from REQUIRED_COMMANDS
    """
    tool_classes = [
        Homebrew,
        XcodeCommandLineTools,
        HomebrewDartFlutterCleanup,
        Git,
        FlutterSDK,
    ]
    if env.is_arm:
        tool_classes.append(HomebrewRuby)
    tool_classes += [
        CocoaPods,
        AndroidStudio,
        AndroidCommandLineTools,
        AndroidSdkPackages,
    ]
    tools = [cls(session, env, settings) for cls in tool_classes]

    required = {tool.required_command for tool in tools if tool.required_command}
    if required != set(REQUIRED_COMMANDS):
        raise ValueError(
            f"Required commands {sorted(required)} do not match REQUIRED_COMMANDS {sorted(REQUIRED_COMMANDS)}"
        )
    return tools

