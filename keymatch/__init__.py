"""
keymatch -- keyboard accelerator matching.

Checks whether a key event satisfies a human-authored accelerator pattern
such as ``"CmdOrCtrl+Shift+S"`` or ``"EnterOrSpace"``.

Quick start::

    import keymatch

    event = keymatch.KeyEvent(key="s", ctrl=True)
    keymatch.key_match(event, "CmdOrCtrl+S")       # True on Windows/Linux
    keymatch.key_match(event, "Ctrl+EnterOrSpace") # False

    # Parse once, match many times
    pattern = keymatch.parse_pattern("Shift+Tab")
    keymatch.key_match(event, pattern)

    # Route events to callbacks
    dispatcher = keymatch.KeyDispatcher({"Escape": close_dialog})
    dispatcher.handle(event)
"""

from __future__ import annotations

from keymatch._keys import MODIFIER_TOKENS, Modifiers, normalize_key, resolve_modifiers
from keymatch._router import (
    PlatformProbe,
    detect_platform,
    is_apple_platform,
    platform_probe,
)
from keymatch.dispatch import EventSource, KeyDispatcher, ListenerSource
from keymatch.keymap import Binding, Keymap, KeymapError, load_keymap
from keymatch.matcher import KeyEvent, KeyEventLike, key_match
from keymatch.pattern import (
    INERT_PATTERN,
    AcceleratorPattern,
    InvalidPatternError,
    parse_pattern,
    tokenize,
)

__all__ = [
    "key_match",
    "parse_pattern",
    "KeyEvent",
    "KeyEventLike",
    "AcceleratorPattern",
    "InvalidPatternError",
    "KeyDispatcher",
    "EventSource",
    "ListenerSource",
    # Keymap files
    "load_keymap",
    "Keymap",
    "Binding",
    "KeymapError",
    # Advanced / building blocks
    "tokenize",
    "normalize_key",
    "resolve_modifiers",
    "Modifiers",
    "MODIFIER_TOKENS",
    "INERT_PATTERN",
    "detect_platform",
    "is_apple_platform",
    "platform_probe",
    "PlatformProbe",
]
