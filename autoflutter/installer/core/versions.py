"""
Version helpers.

- Version floor checks for auxiliary runtimes (Ruby for CocoaPods)
- Picking the newest Android SDK package id out of `sdkmanager --list`

Versions are ordered with packaging.version, so "3.10" > "3.9" and
"34.0.0" > "9.0.0".
"""

import re
from typing import List, Optional

from packaging.version import InvalidVersion, Version


_ZERO = Version("0")


def parse_version(version_str: Optional[str]) -> Version:
    """Parse a version string; missing or malformed strings sort as 0."""
    if not version_str:
        return _ZERO
    try:
        return Version(version_str.strip())
    except InvalidVersion:
        return _ZERO


def is_below_floor(installed: Optional[str], floor: str) -> bool:
    """
    True if `installed` is older than `floor`.

    A version equal to the floor satisfies it. An absent or unparseable
    installed version is treated as below the floor.

    Example:
        is_below_floor("3.0", "3.1")  # True
        is_below_floor("3.1", "3.1")  # False
        is_below_floor(None, "3.1")   # True
    """
    return parse_version(installed) < parse_version(floor)


def _package_version(package_id: str) -> Version:
    # "platforms;android-34" -> "34", "build-tools;34.0.0" -> "34.0.0"
    match = re.search(r"(\d+(?:\.\d+)*)$", package_id)
    return parse_version(match.group(1) if match else None)


def find_packages(listing: str, pattern: str) -> List[str]:
    """All distinct ids matching `pattern` in an sdkmanager listing, in order seen."""
    seen: List[str] = []
    for package_id in re.findall(pattern, listing):
        package_id = package_id.rstrip(".")
        if package_id not in seen:
            seen.append(package_id)
    return seen


def select_latest_package(listing: str, pattern: str) -> Optional[str]:
    """
    Return the version-greatest package id matching `pattern`, or None.

    Example:
        select_latest_package(listing, r"platforms;android-[0-9]+")
        # "platforms;android-35"
    """
    candidates = find_packages(listing, pattern)
    if not candidates:
        return None
    return max(candidates, key=_package_version)
