"""
Pytest configuration for autoflutter tests.

Registers custom markers and provides a recording ShellSession double so no
test ever runs brew, git, gem or sdkmanager.
"""

from pathlib import Path

import pytest

from autoflutter.config.settings import ProvisionSettings
from autoflutter.installer.core.detector import detect_environment
from autoflutter.installer.core.executor import CommandResult, ShellSession


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests that spawn real subprocesses"
    )


class FakeSession(ShellSession):
    """
    ShellSession double.

    - which(): resolves names in `available` (mutable during a test)
    - capture(): answers from `responses`, keyed by the command tuple;
      unknown commands fail with exit status 1
    - run(): records the command, runs an optional `on_run` hook, and
      returns `run_results` for that command (default: success)
    """

    def __init__(self, search_path=None, available=(), responses=None, dry_run=False):
        super().__init__(
            search_path if search_path is not None else ["/usr/bin", "/bin"],
            dry_run=dry_run,
            base_env={},
        )
        self.available = set(available)
        self.responses = dict(responses or {})
        self.run_results = {}
        self.on_run = {}
        self.ran = []
        self.captured = []
        self.downloads = []
        self.fetched = []
        self.fetch_result = "#!/bin/bash\necho homebrew"
        self.download_ok = True

    def which(self, name):
        return f"/fake/bin/{name}" if name in self.available else None

    def capture(self, cmd):
        self.captured.append(list(cmd))
        return self.responses.get(tuple(cmd), CommandResult(returncode=1))

    def run(self, cmd, cwd=None, quiet=False):
        key = tuple(str(part) for part in cmd)
        self.ran.append(list(key))
        hook = self.on_run.get(key)
        if hook is not None:
            hook()
        return self.run_results.get(key, CommandResult(returncode=0))

    def run_with_yes(self, cmd):
        self.ran.append(["yes", "|"] + list(cmd))
        return CommandResult(returncode=0)

    def fetch_text(self, url):
        self.fetched.append(url)
        return self.fetch_result

    def download(self, url, dest):
        self.downloads.append((url, Path(dest)))
        return self.download_ok


@pytest.fixture
def make_session():
    """Factory for FakeSession instances."""
    return FakeSession


@pytest.fixture
def settings(tmp_path):
    """Settings rooted in a temporary home directory."""
    return ProvisionSettings(home=tmp_path)


@pytest.fixture
def arm_env(tmp_path):
    return detect_environment(shell="/bin/zsh", machine="arm64", home=tmp_path)


@pytest.fixture
def intel_env(tmp_path):
    return detect_environment(shell="/bin/bash", machine="x86_64", home=tmp_path)
