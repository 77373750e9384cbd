#!/usr/bin/env python3
"""
autoflutter command line entry point.

Provisions this Mac for Flutter development: Homebrew, Xcode Command Line
Tools, Git, the Flutter SDK, CocoaPods and the Android SDK.

This never runs `flutter doctor` and does not install full Xcode
(download it from https://developer.apple.com/download/all/).
"""

import argparse
import sys

from autoflutter.__version__ import __version_display__
from autoflutter.config.errors import ConfigurationError
from autoflutter.config.settings import load_settings
from autoflutter.installer.provision import Provisioner
from autoflutter.utils.console import ensure_utf8_console
from autoflutter.utils.logger import setup_logger


EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="autoflutter",
        description="Auto Flutter + Android install tool for macOS",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  autoflutter                          # Provision this Mac
  autoflutter --dry-run                # Show what would be run
  autoflutter --config autoflutter.yaml
  autoflutter --log-file ~/autoflutter.log --log-level DEBUG
"""
    )

    parser.add_argument(
        '--config', '-c',
        metavar='FILE',
        help='YAML settings file'
    )

    parser.add_argument(
        '--dry-run', '-n',
        action='store_true',
        default=None,
        help='Log install commands instead of running them'
    )

    parser.add_argument(
        '--home',
        metavar='DIR',
        help='Home directory for the SDKs and shell rc file (default: ~)'
    )

    parser.add_argument(
        '--log-file',
        metavar='FILE',
        help='Write a detailed log to FILE'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Console log level (default: INFO)'
    )

    parser.add_argument(
        '--version', '-v',
        action='store_true',
        help='Show version and exit'
    )

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.version:
        print(f"autoflutter {__version_display__}")
        return 0

    ensure_utf8_console()

    try:
        settings = load_settings(
            args.config,
            dry_run=args.dry_run,
            home=args.home,
            log_file=args.log_file,
            log_level=args.log_level,
        )
    except ConfigurationError as e:
        print(f"[ERR ] {e}", file=sys.stderr)
        return EXIT_USAGE

    setup_logger(
        "autoflutter",
        log_level=settings.log_level,
        log_file=str(settings.log_file) if settings.log_file else None,
        stream=sys.stdout,
    )

    try:
        return Provisioner(settings).run()
    except KeyboardInterrupt:
        print("\n\nInstallation cancelled by user.")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
