"""autoflutter - Flutter + Android + iOS toolchain provisioning for macOS"""

from autoflutter.__version__ import __version__, __version_info__


# Public API exports
from autoflutter.installer.provision import Provisioner
from autoflutter.config.settings import ProvisionSettings, load_settings
from autoflutter.utils.logger import setup_logger


__all__ = [
    "Provisioner",
    "ProvisionSettings",
    "load_settings",
    "setup_logger",
]
