#!/usr/bin/env python3
"""
Console utilities for autoflutter.

Provides:
- UTF-8 encoding fix for the console streams
- Safe print that survives encoding errors
- The start/end banners printed around a provisioning run

Usage:
    from autoflutter.utils.console import ensure_utf8_console, print_banner

    ensure_utf8_console()
    print_banner("Installation Completed!")
"""
import io
import sys
from typing import Any, TextIO


def ensure_utf8_console() -> None:
    """
    Ensure stdout and stderr use UTF-8 encoding.

    Log lines include non-ASCII markers (e.g. the Xcode prompt warning),
    which break on terminals that were started with a C/POSIX locale.

    Safe to call multiple times - will only apply the fix once.
    """
    _fix_stream_encoding(sys.stdout, 1)
    _fix_stream_encoding(sys.stderr, 2)


def _fix_stream_encoding(stream: TextIO | None, fd: int) -> None:
    """
    Fix encoding for a single stream.

    Args:
        stream: The stream to fix (sys.stdout or sys.stderr)
        fd: File descriptor (1 for stdout, 2 for stderr)
    """
    if stream is None:
        return

    # Check if already UTF-8
    try:
        if hasattr(stream, 'encoding') and stream.encoding:
            if stream.encoding.lower() in ('utf-8', 'utf8'):
                return
    except (AttributeError, TypeError):
        pass

    # Apply UTF-8 wrapper
    try:
        if not hasattr(stream, 'buffer'):
            return

        wrapper = io.TextIOWrapper(
            stream.buffer,
            encoding='utf-8',
            errors='replace',  # Replace unencodable chars instead of crashing
            line_buffering=True
        )

        if fd == 1:
            sys.stdout = wrapper
        elif fd == 2:
            sys.stderr = wrapper

    except (AttributeError, OSError, ValueError):
        # If we can't fix it, just continue with original
        pass


def safe_print(*args: Any, **kwargs: Any) -> None:
    """
    Print with automatic encoding error handling.

    Like print(), but replaces unencodable characters instead of crashing.
    """
    try:
        print(*args, **kwargs)
    except UnicodeEncodeError:
        output = " ".join(str(arg) for arg in args)
        print(output.encode('ascii', errors='replace').decode('ascii'), **kwargs)


def print_banner(title: str, width: int = 38, file: TextIO | None = None) -> None:
    """
    Print a framed banner line.

    Example:
        print_banner("Auto Flutter + Android Install Script")

        ======================================
         Auto Flutter + Android Install Script
        ======================================
    """
    rule = "=" * max(width, len(title) + 2)
    out = file or sys.stdout
    safe_print(rule, file=out)
    safe_print(f" {title}", file=out)
    safe_print(rule, file=out)


# Module-level exports
__all__ = [
    "ensure_utf8_console",
    "safe_print",
    "print_banner",
]
