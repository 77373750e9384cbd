#!/usr/bin/env python3
"""
Path Ledger Tests
=================

- rc file lines are prepended, once per directory
- re-running never duplicates or reorders existing entries
- the live search path sees every registration immediately
- the rc file is replaced atomically (no temp files left behind)
"""

import os

import pytest

from autoflutter.installer.core.path_ledger import PathLedger, export_line


@pytest.fixture
def rc_file(tmp_path):
    rc = tmp_path / ".zshrc"
    rc.write_text("alias ll='ls -l'\n", encoding="utf-8")
    return rc


class TestRegister:
    """Tests for PathLedger.register()."""

    def test_prepends_export_line(self, rc_file):
        ledger = PathLedger(rc_file, [])

        assert ledger.register("/opt/homebrew/bin") is True

        lines = rc_file.read_text(encoding="utf-8").splitlines()
        assert lines[0] == 'export PATH="/opt/homebrew/bin:$PATH"'
        assert lines[1] == "alias ll='ls -l'"

    def test_newest_entry_first(self, rc_file):
        ledger = PathLedger(rc_file, [])
        ledger.register("/a/bin")
        ledger.register("/b/bin")

        lines = rc_file.read_text(encoding="utf-8").splitlines()
        assert lines[:2] == [export_line("/b/bin"), export_line("/a/bin")]

    def test_second_register_is_noop(self, rc_file):
        ledger = PathLedger(rc_file, [])
        ledger.register("/opt/homebrew/bin")
        before = rc_file.read_text(encoding="utf-8")

        assert ledger.register("/opt/homebrew/bin") is False
        assert rc_file.read_text(encoding="utf-8") == before

    def test_existing_mention_counts_as_registered(self, rc_file):
        rc_file.write_text("# managed: /Users/me/flutter/bin\n", encoding="utf-8")
        ledger = PathLedger(rc_file, [])

        assert ledger.register("/Users/me/flutter/bin") is False
        assert ledger.is_registered("/Users/me/flutter/bin")

    def test_missing_rc_file_is_created(self, tmp_path):
        rc = tmp_path / ".bash_profile"
        ledger = PathLedger(rc, [])

        ledger.register("/usr/local/bin")

        assert rc.read_text(encoding="utf-8") == export_line("/usr/local/bin") + "\n"

    def test_no_rc_file_only_updates_live_path(self, tmp_path):
        search_path = ["/usr/bin"]
        ledger = PathLedger(None, search_path)

        assert ledger.register("/opt/homebrew/bin") is False
        assert search_path == ["/opt/homebrew/bin", "/usr/bin"]
        assert list(tmp_path.iterdir()) == []

    def test_no_temp_files_left(self, rc_file):
        ledger = PathLedger(rc_file, [])
        ledger.register("/a/bin")
        ledger.register("/b/bin")

        assert sorted(p.name for p in rc_file.parent.iterdir()) == [".zshrc"]

    def test_file_mode_preserved(self, rc_file):
        os.chmod(rc_file, 0o644)
        PathLedger(rc_file, []).register("/a/bin")

        assert (rc_file.stat().st_mode & 0o777) == 0o644


class TestLiveSearchPath:
    """The live list is shared by reference and updated immediately."""

    def test_prepends_to_shared_list(self, rc_file):
        search_path = ["/usr/bin", "/bin"]
        ledger = PathLedger(rc_file, search_path)

        ledger.register("/opt/homebrew/bin")

        assert search_path[0] == "/opt/homebrew/bin"
        assert ledger.search_path is search_path

    def test_live_path_updated_even_when_already_persisted(self, rc_file):
        PathLedger(rc_file, []).register("/a/bin")
        search_path = ["/usr/bin"]

        PathLedger(rc_file, search_path).register("/a/bin")

        assert search_path == ["/a/bin", "/usr/bin"]

    def test_existing_live_entry_moves_to_front(self, rc_file):
        search_path = ["/usr/bin", "/a/bin", "/bin"]
        PathLedger(rc_file, search_path).register("/a/bin")

        assert search_path == ["/a/bin", "/usr/bin", "/bin"]


class TestAcrossRuns:
    """Idempotence and prepend ordering over repeated provisioning runs."""

    def test_each_directory_appears_once(self, rc_file):
        dirs = ["/opt/homebrew/bin", "/Users/me/flutter/bin", "/Users/me/sdk/platform-tools"]

        for _ in range(2):
            ledger = PathLedger(rc_file, [])
            for d in dirs:
                ledger.register(d)

        content = rc_file.read_text(encoding="utf-8")
        for d in dirs:
            assert content.count(export_line(d)) == 1

    def test_second_run_entry_precedes_prior_content(self, rc_file):
        first = PathLedger(rc_file, [])
        first.register("/a/bin")
        first.register("/b/bin")
        before = rc_file.read_text(encoding="utf-8")

        second = PathLedger(rc_file, [])
        assert second.register("/a/bin") is False
        assert second.register("/c/bin") is True

        after = rc_file.read_text(encoding="utf-8")
        assert after == export_line("/c/bin") + "\n" + before


class TestEncoding:
    """rc files are not required to be UTF-8."""

    def test_latin1_bytes_survive_prepend(self, tmp_path):
        rc = tmp_path / ".zshrc"
        rc.write_bytes(b"# caf\xe9\nalias ll='ls -l'\n")

        assert PathLedger(rc, []).register("/opt/homebrew/bin") is True

        assert rc.read_bytes() == (
            b'export PATH="/opt/homebrew/bin:$PATH"\n'
            b"# caf\xe9\nalias ll='ls -l'\n"
        )

    def test_latin1_rc_still_detects_existing_entry(self, tmp_path):
        rc = tmp_path / ".zshrc"
        rc.write_bytes(b"# caf\xe9\nexport PATH=\"/opt/homebrew/bin:$PATH\"\n")

        assert PathLedger(rc, []).register("/opt/homebrew/bin") is False
        assert PathLedger(rc, []).is_registered("/opt/homebrew/bin")
