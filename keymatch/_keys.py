"""Shared key normalization and modifier resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from keymatch._router import PlatformProbe, is_apple_platform

# Rewrites applied to event key labels after lowercasing
_KEY_ALIASES: dict[str, str] = {
    " ": "space",
    "arrowup": "up",
    "arrowdown": "down",
    "arrowleft": "left",
    "arrowright": "right",
}

# Modifier tokens understood in patterns (lowercase)
MODIFIER_TOKENS = frozenset(
    {
        "cmd",
        "command",
        "ctrl",
        "control",
        "cmdorctrl",
        "commandorcontrol",
        "alt",
        "option",
        "shift",
        "meta",
        "super",
    }
)

# Tokens that resolve the same way on every platform
_FIXED_TOKENS: dict[str, str] = {
    "cmd": "meta",
    "command": "meta",
    "ctrl": "ctrl",
    "control": "ctrl",
    "alt": "alt",
    "shift": "shift",
    "meta": "meta",
    "super": "meta",
}


@dataclass(frozen=True)
class Modifiers:
    """The four modifier flags a pattern or event can carry."""

    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False


def normalize_key(key: str) -> str:
    """Map a raw event key label to its canonical lowercase name.

    Examples::

        >>> normalize_key("ArrowUp")
        'up'
        >>> normalize_key(" ")
        'space'
        >>> normalize_key("Enter")
        'enter'
    """
    normalized = key.lower()
    return _KEY_ALIASES.get(normalized, normalized)


def resolve_modifiers(
    tokens: Iterable[str],
    *,
    is_apple: PlatformProbe | None = None,
) -> Modifiers:
    """Resolve lowercase modifier tokens into the four modifier flags.

    ``cmdorctrl``/``commandorcontrol`` become meta on Apple platforms and
    ctrl elsewhere; ``option`` is alt on Apple platforms and ignored
    elsewhere. Unknown tokens are dropped silently.

    Args:
        tokens: Modifier tokens, already lowercased.
        is_apple: Platform probe; defaults to the live platform query.
            Only called when a platform-conditional token is present.
    """
    probe = is_apple or is_apple_platform
    flags = {"ctrl": False, "alt": False, "shift": False, "meta": False}

    for token in tokens:
        fixed = _FIXED_TOKENS.get(token)
        if fixed is not None:
            flags[fixed] = True
        elif token in ("cmdorctrl", "commandorcontrol"):
            flags["meta" if probe() else "ctrl"] = True
        elif token == "option":
            if probe():
                flags["alt"] = True

    return Modifiers(**flags)
