"""Utility modules for autoflutter."""

from autoflutter.utils.logger import setup_logger, SeverityTagFormatter
from autoflutter.utils.console import print_banner

__all__ = ["setup_logger", "SeverityTagFormatter", "print_banner"]
