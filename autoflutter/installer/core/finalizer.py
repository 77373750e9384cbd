"""
License / Config Finalizer.

Runs after every tool is in place:
1. Accept all pending Android SDK licenses (`yes | sdkmanager --licenses`)
2. Point Flutter at the Android SDK (`flutter config --android-sdk <root>`)

Both are fire-and-forget: a non-zero exit is logged as a warning and the run
still completes.
"""

import logging
from pathlib import Path

from .executor import ShellSession

logger = logging.getLogger(__name__)


def accept_android_licenses(session: ShellSession) -> bool:
    logger.info("Accepting all Android licenses")
    result = session.run_with_yes(["sdkmanager", "--licenses"])
    if not result.ok:
        logger.warning(f"sdkmanager --licenses exited with {result.returncode}")
    return result.ok


def configure_flutter(session: ShellSession, android_sdk_root: Path) -> bool:
    result = session.run(["flutter", "config", "--android-sdk", str(android_sdk_root)])
    if not result.ok:
        logger.warning(f"flutter config exited with {result.returncode}")
    return result.ok


def finalize(session: ShellSession, android_sdk_root: Path):
    """Accept licenses, configure Flutter, and print the next step."""
    accept_android_licenses(session)
    configure_flutter(session, android_sdk_root)
    logger.info("Run: flutter doctor")
