"""
Provisioner - runs the whole toolchain in order.

    banner
    detect shell / rc file / architecture
    register Homebrew's bin dir (so an installed brew is found even when the
        current PATH lacks it)
    ensure every tool from the registry
    accept licenses, configure Flutter
    summary, banner

Exit codes:
    0  completed (individual optional steps may have failed)
    1  a required command is missing after its install step
"""

import logging
from typing import Callable, List, Optional

from ..config.errors import RequiredCommandMissing
from ..config.settings import ProvisionSettings
from ..utils.console import print_banner
from .core.config import END_BANNER, START_BANNER
from .core.detector import DetectedEnvironment, detect_environment, get_platform_name, is_macos
from .core.executor import ShellSession, ToolchainInstaller
from .core.finalizer import finalize
from .core.path_ledger import PathLedger
from .core.registry import Tool, build_toolchain

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REQUIRED_MISSING = 1

ToolFactory = Callable[[DetectedEnvironment, ProvisionSettings, ShellSession], List[Tool]]


class Provisioner:
    """
    One provisioning run.

    Everything machine-specific can be injected: the detected environment,
    the ShellSession (and with it the live search path) and the tool list.
    """

    def __init__(
        self,
        settings: ProvisionSettings,
        environment: Optional[DetectedEnvironment] = None,
        session: Optional[ShellSession] = None,
        tool_factory: ToolFactory = build_toolchain,
    ):
        self.settings = settings
        self.environment = environment
        self.session = session
        self.tool_factory = tool_factory
        self.ledger: Optional[PathLedger] = None
        self.installer: Optional[ToolchainInstaller] = None

    def run(self) -> int:
        print_banner(START_BANNER)

        env = self.environment or detect_environment(home=self.settings.home)
        self.environment = env
        if not is_macos():
            logger.warning(f"This installer targets macOS, running on {get_platform_name(env)}")
        logger.debug(f"Platform: {get_platform_name(env)}, Homebrew prefix: {env.install_prefix}")

        if self.session is None:
            self.session = ShellSession.from_environ(dry_run=self.settings.dry_run)
        session = self.session

        self.ledger = PathLedger(env.rc_file, session.search_path)
        self.installer = ToolchainInstaller(session, self.ledger)

        self.ledger.register(env.brew_bin)

        try:
            for tool in self.tool_factory(env, self.settings, session):
                self.installer.ensure(tool)
        except RequiredCommandMissing as e:
            logger.error(str(e))
            return EXIT_REQUIRED_MISSING

        finalize(session, self.settings.android_sdk_root)
        self.installer.print_summary()

        print_banner(END_BANNER, width=28)
        return EXIT_OK
