"""
Path Ledger
===========

Keeps tool directories on PATH, both for the running process and for every
future login shell.

TWO VIEWS OF THE SAME ENTRY:
---------------------------
- Live: `search_path`, an ordered list owned by the caller and shared with
  the ShellSession. Registering a directory moves it to the front
  immediately, so the very next command can find freshly installed tools.
- Persisted: one `export PATH="<dir>:$PATH"` line at the TOP of the rc file.
  Newest entries come first, so they shadow stale system-wide versions.

IDEMPOTENCE:
-----------
A directory already mentioned anywhere in the rc file is not written again.
This is a plain substring check, so a directory that appears in a comment or
in a longer path also counts as present.

ENCODING:
--------
The rc file may hold bytes that are not valid UTF-8; they are carried
through unchanged.

ATOMIC REPLACE:
--------------
The rc file is never edited in place: the new content is written to a
temporary file in the same directory and renamed over the original.
There is no locking; only one provisioner runs at a time.

Date: 2026-10-17
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

# Bytes that are not UTF-8 round-trip unchanged
RC_ERRORS = "surrogateescape"


def export_line(directory: str) -> str:
    """Build the persisted line for a directory."""
    return f'export PATH="{directory}:$PATH"'


class PathLedger:
    """
    Registers directories exactly once in the rc file and at the front of
    the live search path.

    USAGE:
    -----
        search_path = os.environ["PATH"].split(os.pathsep)
        ledger = PathLedger(Path("~/.zshrc").expanduser(), search_path)
        ledger.register("/opt/homebrew/bin")
        search_path[0]   # "/opt/homebrew/bin"
    """

    def __init__(self, rc_file: Optional[Path], search_path: List[str]):
        self.rc_file = rc_file
        self.search_path = search_path

    def register(self, directory: str) -> bool:
        """
        Put `directory` first on the live search path and persist it once.

        Returns:
            True if a new line was written to the rc file
        """
        directory = str(directory)
        self._prepend_live(directory)

        if self.rc_file is None:
            return False

        content = self._read_rc()
        if directory in content:
            logger.debug(f"{directory} already in {self.rc_file}")
            return False

        self._replace_rc(export_line(directory) + "\n" + content)
        logger.debug(f"Added {directory} to {self.rc_file}")
        return True

    def is_registered(self, directory: str) -> bool:
        """True if the rc file already mentions `directory`."""
        if self.rc_file is None:
            return False
        return str(directory) in self._read_rc()

    def _prepend_live(self, directory: str):
        if directory in self.search_path:
            self.search_path.remove(directory)
        self.search_path.insert(0, directory)

    def _read_rc(self) -> str:
        try:
            return self.rc_file.read_text(encoding="utf-8", errors=RC_ERRORS)
        except FileNotFoundError:
            return ""

    def _replace_rc(self, content: str):
        rc_file = self.rc_file
        rc_file.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=rc_file.parent, prefix=f"{rc_file.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", errors=RC_ERRORS) as f:
                f.write(content)
            if rc_file.exists():
                shutil.copymode(rc_file, tmp_name)
            os.replace(tmp_name, rc_file)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
