"""
Step Executor - Check, Install, Register
========================================

This module owns every interaction with the outside world:

- ShellSession: runs external commands, resolves executables and downloads
  files, always against the LIVE search path (not os.environ["PATH"])
- ToolchainInstaller: applies the same unit to every tool in the registry

THE "CHECK -> INSTALL -> REGISTER" PATTERN:
------------------------------------------
For each tool:
1. Probe: is it already there? Skip the install if yes.
2. Install: run the install action ONCE. No retries. A failure is logged
   and the run continues with a degraded environment.
3. Register: export the tool's environment variables and put its
   directories on PATH via the PathLedger (always, even when skipped, so a
   fresh rc file gets repopulated).
4. Require: for tools on the required whitelist, the command must now
   resolve, or RequiredCommandMissing aborts the run.

QUERIES VS. ACTIONS:
-------------------
`capture()` and `which()` only look at the machine and run even in dry-run
mode, so probes report the truth. `run()`, `run_with_yes()`, `fetch_text()`
and `download()` change the machine and are only logged in dry-run mode.

NO TIMEOUTS:
-----------
Every call blocks until the external tool exits. A hung `git clone` hangs
the run; the operator interrupts it.

Date: 2026-10-17
"""

import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

import requests
from tqdm import tqdm

from ...config.errors import RequiredCommandMissing
from .path_ledger import PathLedger

if TYPE_CHECKING:
    from .registry import Tool

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 1024 * 256


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class CommandResult:
    """
    Outcome of one external command.

    FIELDS:
    - returncode: Exit status (127 when the executable was not found)
    - stdout: Captured output (capture() only)
    - error: OS-level error message when the command could not start
    """
    returncode: int
    stdout: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass
class ExecutionResult:
    """
    Result of ensuring one tool.

    FIELDS:
    - tool_name: Which tool was processed
    - success: Present after this step (skipped counts as success)
    - skipped: True if the probe found it already installed
    - duration_seconds: How long the step took
    - registered: Directories newly persisted to the rc file
    - error: Message if the install action failed
    """
    tool_name: str
    success: bool
    duration_seconds: float = 0.0
    skipped: bool = False
    registered: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def __str__(self) -> str:
        """Human-readable summary."""
        if self.skipped:
            return f"{self.tool_name}: already installed"
        elif self.success:
            return f"{self.tool_name}: installed in {self.duration_seconds:.1f}s"
        else:
            return f"{self.tool_name}: FAILED - {self.error}"


def format_command(cmd: Sequence[str]) -> str:
    return " ".join(str(part) for part in cmd)


# =============================================================================
# Shell Session
# =============================================================================


class ShellSession:
    """
    Process environment for one provisioning run.

    `search_path` is the live PATH as an ordered list. The same list object
    is handed to the PathLedger, so registrations are visible to the next
    command without re-reading any file.

    USAGE:
    -----
        search_path = os.environ.get("PATH", "").split(os.pathsep)
        session = ShellSession(search_path)
        if not session.which("git"):
            session.run(["brew", "install", "git"])
    """

    def __init__(
        self,
        search_path: List[str],
        exports: Optional[Dict[str, str]] = None,
        dry_run: bool = False,
        base_env: Optional[Dict[str, str]] = None,
    ):
        self.search_path = search_path
        self.exports: Dict[str, str] = dict(exports or {})
        self.dry_run = dry_run
        self._base_env = base_env

    @classmethod
    def from_environ(cls, dry_run: bool = False) -> "ShellSession":
        """Seed the live search path from this process's PATH."""
        search_path = [p for p in os.environ.get("PATH", "").split(os.pathsep) if p]
        return cls(search_path, dry_run=dry_run)

    # =========================================================================
    # Environment
    # =========================================================================

    @property
    def path_string(self) -> str:
        return os.pathsep.join(self.search_path)

    def environ(self) -> Dict[str, str]:
        """Environment passed to every child process."""
        env = dict(os.environ if self._base_env is None else self._base_env)
        env.update(self.exports)
        env["PATH"] = self.path_string
        return env

    def export(self, name: str, value: str):
        self.exports[name] = value
        logger.debug(f"export {name}={value}")

    def which(self, name: str) -> Optional[str]:
        """Resolve an executable on the live search path (the presence probe)."""
        return shutil.which(name, path=self.path_string)

    # =========================================================================
    # Queries (run even in dry-run mode)
    # =========================================================================

    def capture(self, cmd: Sequence[str]) -> CommandResult:
        """Run a read-only command and capture its stdout; stderr is discarded."""
        logger.debug(f"? {format_command(cmd)}")
        try:
            result = subprocess.run(
                list(cmd),
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                encoding="utf-8",
                errors="replace",
                env=self.environ(),
                check=False,
            )
        except (FileNotFoundError, OSError) as e:
            return CommandResult(returncode=127, error=str(e))
        return CommandResult(returncode=result.returncode, stdout=(result.stdout or "").strip())

    # =========================================================================
    # Actions (logged only in dry-run mode)
    # =========================================================================

    def run(self, cmd: Sequence[str], cwd: Optional[Path] = None, quiet: bool = False) -> CommandResult:
        """
        Run a command with output streaming to the console.

        Args:
            cmd: Command and arguments
            cwd: Working directory
            quiet: Discard the command's output (like `>/dev/null 2>&1`)
        """
        if self.dry_run:
            logger.info(f"+ {format_command(cmd)}")
            return CommandResult(returncode=0)

        logger.debug(f"+ {format_command(cmd)}")
        sink = subprocess.DEVNULL if quiet else None
        try:
            result = subprocess.run(
                list(cmd),
                cwd=str(cwd) if cwd else None,
                stdout=sink,
                stderr=sink,
                env=self.environ(),
                check=False,
            )
        except (FileNotFoundError, OSError) as e:
            logger.debug(f"Could not start {cmd[0]}: {e}")
            return CommandResult(returncode=127, error=str(e))

        if result.returncode != 0:
            logger.debug(f"{format_command(cmd)} exited with {result.returncode}")
        return CommandResult(returncode=result.returncode)

    def run_with_yes(self, cmd: Sequence[str]) -> CommandResult:
        """
        Run a command with `yes` piped into stdin.

        Answers "y" to as many prompts as the command asks.
        """
        if self.dry_run:
            logger.info(f"+ yes | {format_command(cmd)}")
            return CommandResult(returncode=0)

        logger.debug(f"+ yes | {format_command(cmd)}")
        env = self.environ()
        try:
            yes = subprocess.Popen(["yes"], stdout=subprocess.PIPE, env=env)
        except (FileNotFoundError, OSError) as e:
            return CommandResult(returncode=127, error=str(e))

        try:
            result = subprocess.run(list(cmd), stdin=yes.stdout, env=env, check=False)
            return CommandResult(returncode=result.returncode)
        except (FileNotFoundError, OSError) as e:
            return CommandResult(returncode=127, error=str(e))
        finally:
            yes.stdout.close()
            yes.terminate()
            yes.wait()

    def fetch_text(self, url: str) -> Optional[str]:
        """GET a small text resource (install scripts). None on failure."""
        if self.dry_run:
            logger.info(f"+ GET {url}")
            return ""
        try:
            response = requests.get(url)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"Download failed: {url} ({e})")
            return None
        return response.text

    def download(self, url: str, dest: Path) -> bool:
        """Stream a file to `dest` with a progress bar. False on failure."""
        if self.dry_run:
            logger.info(f"+ GET {url} -> {dest}")
            return True

        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Downloading {url} -> {dest}")
        try:
            with requests.get(url, stream=True) as response:
                response.raise_for_status()
                total = int(response.headers.get("Content-Length") or 0)
                with open(dest, "wb") as f, tqdm(
                    total=total or None,
                    unit="B",
                    unit_scale=True,
                    desc=dest.name,
                    ascii=True,
                ) as bar:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        f.write(chunk)
                        bar.update(len(chunk))
        except (requests.RequestException, OSError) as e:
            logger.warning(f"Download failed: {url} ({e})")
            return False
        return True


# =============================================================================
# Toolchain Installer
# =============================================================================


class ToolchainInstaller:
    """
    Ensures tools one after another.

    USAGE:
    -----
        installer = ToolchainInstaller(session, ledger)
        for tool in build_toolchain(env, settings, session):
            installer.ensure(tool)       # may raise RequiredCommandMissing
        installer.print_summary()

    THREADING NOTE:
    ---------------
    Not thread-safe; tools depend on each other's PATH entries and must run
    in registry order.
    """

    def __init__(self, session: ShellSession, ledger: PathLedger):
        self.session = session
        self.ledger = ledger
        self.results: List[ExecutionResult] = []

        self._install_count = 0
        self._skip_count = 0
        self._fail_count = 0

    def ensure(self, tool: "Tool") -> ExecutionResult:
        """
        Probe, install if absent, register paths, enforce required command.

        Raises:
            RequiredCommandMissing: tool.required_command does not resolve
                after the step (not raised in dry-run mode)
        """
        start_time = time.time()
        skipped = False
        error = None

        if tool.probe():
            skipped = True
            self._skip_count += 1
            logger.info(tool.present_message())
        else:
            logger.info(f"Installing {tool.name}...")
            if tool.install():
                self._install_count += 1
            else:
                error = f"install step for {tool.name} failed"
                self._fail_count += 1
                logger.warning(f"{tool.name} installation failed, continuing")

        for name, value in tool.environment().items():
            self.session.export(name, value)

        registered = [d for d in tool.registered_paths() if self.ledger.register(d)]

        result = ExecutionResult(
            tool_name=tool.name,
            success=error is None,
            duration_seconds=time.time() - start_time,
            skipped=skipped,
            registered=registered,
            error=error,
        )
        self.results.append(result)

        if tool.required_command:
            self.require_command(tool.required_command, tool.name)

        return result

    def require_command(self, command: str, tool_name: Optional[str] = None):
        """Abort unless `command` resolves on the live search path."""
        if self.session.which(command):
            return
        if self.session.dry_run:
            logger.warning(f"Missing command: {command} (dry run, not aborting)")
            return
        raise RequiredCommandMissing(command, tool=tool_name)

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_stats(self) -> dict:
        """
        Get installation statistics.

        Returns:
            Dict with install_count, skip_count, fail_count
        """
        return {
            "install_count": self._install_count,
            "skip_count": self._skip_count,
            "fail_count": self._fail_count,
            "total": self._install_count + self._skip_count + self._fail_count,
        }

    def print_summary(self):
        """Log installation summary."""
        stats = self.get_stats()
        logger.info(
            f"Installed: {stats['install_count']}, "
            f"already present: {stats['skip_count']}, "
            f"failed: {stats['fail_count']}"
        )
        for result in self.results:
            logger.debug(str(result))
