"""Platform auto-detection for modifier aliasing."""

from __future__ import annotations

import os
import platform
import sys
from typing import Callable

PlatformProbe = Callable[[], bool]

PLATFORM_ENV_VAR = "KEYMATCH_PLATFORM"

KNOWN_PLATFORMS = ("windows", "macos", "ios", "linux")
APPLE_PLATFORMS = frozenset({"macos", "ios"})


def _classify(name: str) -> str:
    name = name.strip().lower()
    if not name:
        return "unknown"
    if name in KNOWN_PLATFORMS:
        return name
    if name.startswith(("win", "cygwin", "msys")):
        return "windows"
    if name == "darwin" or "mac" in name:
        return "macos"
    if name in ("ipados", "iphoneos"):
        return "ios"
    if name.startswith("linux"):
        return "linux"
    return "unknown"


def detect_platform() -> str:
    """Return the current platform identifier.

    The ``KEYMATCH_PLATFORM`` environment variable wins when set. Otherwise
    the structured descriptor from :func:`platform.system` is used, falling
    back to the legacy ``sys.platform`` string. Unrecognised platforms are
    reported as ``"unknown"`` rather than raising.
    """
    forced = os.environ.get(PLATFORM_ENV_VAR)
    if forced:
        return _classify(forced)

    try:
        system = platform.system()
    except Exception:
        system = ""
    if system:
        return _classify(system)
    return _classify(getattr(sys, "platform", "") or "")


def is_apple_platform() -> bool:
    """True when Cmd/Option aliases should resolve the Apple way."""
    return detect_platform() in APPLE_PLATFORMS


def platform_probe(name: str | None = None) -> PlatformProbe:
    """Return a probe for the named platform, or the live one for None.

    Args:
        name: Force a specific platform ('windows', 'macos', 'ios', 'linux').
              Any other value behaves as a non-Apple platform.
    """
    if name is None:
        return is_apple_platform

    apple = _classify(name) in APPLE_PLATFORMS

    def probe() -> bool:
        return apple

    return probe
