"""
autoflutter Installer Core Module
=================================

This subpackage contains the core provisioning infrastructure:

- config.py: Centralized constants (prefixes, URLs, version floors)
- detector.py: Shell, rc file and architecture detection
- path_ledger.py: Idempotent PATH registration (live + rc file)
- executor.py: ShellSession and the check -> install -> register unit
- registry.py: Tool definitions and their order
- versions.py: Version floor checks and SDK package selection
- finalizer.py: License acceptance and Flutter configuration

IMPORT RULES:
------------
- Core modules may import from Python stdlib and the declared dependencies
- Core modules may import from each other (no circles)
- Core modules import autoflutter.config.settings for type hints only
"""

# Detector exports
from .detector import (
    DetectedEnvironment,
    detect_environment,
    detect_shell_rc,
    detect_install_prefix,
    get_platform_name,
    is_macos,
)

# Ledger exports
from .path_ledger import (
    PathLedger,
    export_line,
)

# Executor exports
from .executor import (
    CommandResult,
    ExecutionResult,
    ShellSession,
    ToolchainInstaller,
)

# Registry exports
from .registry import (
    Tool,
    build_toolchain,
)

# Version exports
from .versions import (
    is_below_floor,
    parse_version,
    select_latest_package,
)

# Finalizer exports
from .finalizer import (
    accept_android_licenses,
    configure_flutter,
    finalize,
)

__all__ = [
    # Detector exports
    "DetectedEnvironment",
    "detect_environment",
    "detect_shell_rc",
    "detect_install_prefix",
    "get_platform_name",
    "is_macos",

    # Ledger exports
    "PathLedger",
    "export_line",

    # Executor exports
    "CommandResult",
    "ExecutionResult",
    "ShellSession",
    "ToolchainInstaller",

    # Registry exports
    "Tool",
    "build_toolchain",

    # Version exports
    "is_below_floor",
    "parse_version",
    "select_latest_package",

    # Finalizer exports
    "accept_android_licenses",
    "configure_flutter",
    "finalize",
]
