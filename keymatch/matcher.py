"""Match keyboard events against accelerator patterns."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from keymatch._keys import normalize_key
from keymatch._router import PlatformProbe
from keymatch.pattern import AcceleratorPattern, parse_pattern

# CDP Input.dispatchKeyEvent modifier bits
CDP_MODIFIER_BITS: dict[str, int] = {
    "alt": 1,
    "ctrl": 2,
    "meta": 4,
    "shift": 8,
}


class KeyEventLike(Protocol):
    """Anything exposing a key label and the four modifier states."""

    @property
    def key(self) -> str: ...

    @property
    def ctrl(self) -> bool: ...

    @property
    def alt(self) -> bool: ...

    @property
    def shift(self) -> bool: ...

    @property
    def meta(self) -> bool: ...


@dataclass(frozen=True)
class KeyEvent:
    """A single key press with its modifier state."""

    key: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False

    @classmethod
    def from_dom(cls, event: Mapping[str, Any]) -> KeyEvent:
        """Build from a DOM ``KeyboardEvent``-shaped mapping.

        Reads ``key``, ``ctrlKey``, ``altKey``, ``shiftKey`` and ``metaKey``;
        missing modifier fields count as released.
        """
        return cls(
            key=str(event.get("key", "")),
            ctrl=bool(event.get("ctrlKey", False)),
            alt=bool(event.get("altKey", False)),
            shift=bool(event.get("shiftKey", False)),
            meta=bool(event.get("metaKey", False)),
        )

    @classmethod
    def from_cdp(cls, params: Mapping[str, Any]) -> KeyEvent:
        """Build from CDP ``Input.dispatchKeyEvent`` params.

        The ``modifiers`` field is a bitmask: Alt=1, Ctrl=2, Meta=4, Shift=8.
        """
        bits = int(params.get("modifiers", 0) or 0)
        return cls(
            key=str(params.get("key", "")),
            ctrl=bool(bits & CDP_MODIFIER_BITS["ctrl"]),
            alt=bool(bits & CDP_MODIFIER_BITS["alt"]),
            shift=bool(bits & CDP_MODIFIER_BITS["shift"]),
            meta=bool(bits & CDP_MODIFIER_BITS["meta"]),
        )


def key_match(
    event: KeyEventLike,
    pattern: str | AcceleratorPattern,
    *,
    is_apple: PlatformProbe | None = None,
) -> bool:
    """Check whether a key event satisfies an accelerator pattern.

    Modifier state must match exactly: holding Shift while the pattern does
    not ask for it is a mismatch.

    Usage::

        if key_match(event, "CmdOrCtrl+N"):
            create_new_file()

        # Any of several keys
        if key_match(event, "EnterOrSpace"):
            submit()

    Args:
        event: The key event to test.
        pattern: Accelerator string, or a pattern already returned by
            :func:`parse_pattern` to skip re-parsing.
        is_apple: Platform probe used when parsing a string pattern.

    Raises:
        InvalidPatternError: If a string pattern is malformed.
    """
    if not isinstance(pattern, AcceleratorPattern):
        pattern = parse_pattern(pattern, is_apple=is_apple)
    if pattern.is_inert:
        return False

    return (
        normalize_key(event.key) in pattern.keys
        and bool(event.ctrl) == pattern.ctrl
        and bool(event.alt) == pattern.alt
        and bool(event.shift) == pattern.shift
        and bool(event.meta) == pattern.meta
    )
