"""
Provisioning settings.

ProvisionSettings is the single object the provisioner reads its tunables
from. Defaults come from installer.core.config; a YAML file and CLI flags
may override them.

Usage:
    settings = load_settings("autoflutter.yaml", dry_run=True)
    settings.flutter_home        # ~/flutter
    settings.android_sdk_root    # ~/Library/Android/sdk

Example YAML:
    flutter_branch: beta
    android_sdk_dir: /opt/android-sdk
    log_level: DEBUG
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from packaging.version import InvalidVersion, Version
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..installer.core import config as defaults
from .errors import ConfigFileError, ConfigValidationError


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ProvisionSettings(BaseModel):
    """User-tunable provisioning settings."""

    model_config = {"extra": "forbid"}

    home: Path = Field(
        default_factory=Path.home,
        description="Home directory the SDKs and rc file live under",
    )
    flutter_repo: str = Field(
        default=defaults.FLUTTER_REPO_URL,
        description="Git URL of the Flutter SDK",
    )
    flutter_branch: str = Field(
        default=defaults.FLUTTER_BRANCH,
        description="Branch cloned for the Flutter SDK",
    )
    flutter_dir: Path = Field(
        default=Path(defaults.FLUTTER_DIR),
        description="Flutter checkout (relative paths resolve under home)",
    )
    android_sdk_dir: Path = Field(
        default=Path(defaults.ANDROID_SDK_DIR),
        description="Android SDK root (relative paths resolve under home)",
    )
    cmdline_tools_url: str = Field(
        default=defaults.ANDROID_CMDLINE_TOOLS_URL,
        description="Android command-line tools archive",
    )
    homebrew_install_url: str = Field(
        default=defaults.HOMEBREW_INSTALL_URL,
        description="Homebrew install script",
    )
    ruby_min_version: str = Field(
        default=defaults.RUBY_MIN_VERSION,
        description="Homebrew Ruby is installed when the active Ruby is older",
    )
    dry_run: bool = Field(
        default=False,
        description="Log commands instead of running them",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional detailed log file",
    )
    log_level: str = Field(
        default="INFO",
        description="Console log level",
    )

    @field_validator("ruby_min_version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        try:
            Version(value)
        except InvalidVersion:
            raise ValueError(f"not a version string: {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("home", "flutter_dir", "android_sdk_dir", "log_file")
    @classmethod
    def _expand_user(cls, value: Optional[Path]) -> Optional[Path]:
        return value.expanduser() if value is not None else None

    def _under_home(self, path: Path) -> Path:
        return path if path.is_absolute() else self.home / path

    @property
    def flutter_home(self) -> Path:
        return self._under_home(self.flutter_dir)

    @property
    def android_sdk_root(self) -> Path:
        return self._under_home(self.android_sdk_dir)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigFileError(path, f"cannot read settings file: {e}")
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        line = mark.line + 1 if mark is not None else None
        raise ConfigFileError(path, f"invalid YAML: {e}", line=line)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigFileError(path, "top level must be a mapping")
    return data


def load_settings(
    path: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> ProvisionSettings:
    """
    Build settings from an optional YAML file plus keyword overrides.

    Overrides whose value is None are ignored, so argparse namespaces can be
    passed through unchanged.

    Raises:
        ConfigFileError: the file is unreadable or not a YAML mapping
        ConfigValidationError: a value fails validation
    """
    data: Dict[str, Any] = {}
    if path is not None:
        data.update(_read_yaml(Path(path)))
    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ProvisionSettings(**data)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ConfigValidationError(first["msg"], field=field, value=first.get("input"))
