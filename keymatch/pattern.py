"""Accelerator pattern tokenizer and parser.

A pattern is one or more alternatives separated by the word ``or``
(case-insensitive), each alternative being ``+``-joined modifier tokens
followed by a terminal key::

    "CmdOrCtrl+Shift+S"        -> meta|ctrl + shift, keys ("s",)
    "Ctrl+EnterOrSpace"        -> ctrl, keys ("enter", "space")

The compound aliases ``CmdOrCtrl`` and ``CommandOrControl`` are recognised
by the tokenizer before the ``or`` separator can split them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, NamedTuple

from keymatch._keys import Modifiers, resolve_modifiers
from keymatch._router import PlatformProbe

KEY = "KEY"
PLUS = "PLUS"
OR = "OR"

_TOKEN_RE = re.compile(
    r"(?P<compound>commandorcontrol|cmdorctrl)|(?P<or>or)|(?P<plus>\+)",
    re.IGNORECASE,
)


class InvalidPatternError(ValueError):
    """Raised when an alternative has no terminal key (``"ctrl+"``, ``"+"``)."""

    def __init__(self, pattern: str) -> None:
        super().__init__(f"Invalid accelerator: {pattern}")
        self.pattern = pattern


class Token(NamedTuple):
    kind: str
    text: str


@dataclass(frozen=True)
class AcceleratorPattern:
    """A parsed accelerator: required modifier flags plus accepted keys."""

    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    meta: bool = False
    keys: tuple[str, ...] = ("",)

    @property
    def modifiers(self) -> Modifiers:
        return Modifiers(ctrl=self.ctrl, alt=self.alt, shift=self.shift, meta=self.meta)

    @property
    def is_inert(self) -> bool:
        """True for the blank-pattern sentinel, which never matches."""
        return self.keys == ("",)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ctrl": self.ctrl,
            "alt": self.alt,
            "shift": self.shift,
            "meta": self.meta,
            "keys": list(self.keys),
        }


INERT_PATTERN = AcceleratorPattern()


def tokenize(pattern: str) -> list[Token]:
    """Split a pattern into KEY, PLUS and OR tokens in a single pass.

    KEY tokens keep their original spelling, compound aliases included.
    Empty text between separators produces no token.

    Examples::

        >>> [t.kind for t in tokenize("Ctrl+EnterOrSpace")]
        ['KEY', 'PLUS', 'KEY', 'OR', 'KEY']
        >>> tokenize("CmdOrCtrl+n")[0]
        Token(kind='KEY', text='CmdOrCtrl')
    """
    tokens: list[Token] = []
    text: list[str] = []
    pos = 0

    def flush() -> None:
        if text:
            joined = "".join(text)
            text.clear()
            if joined:
                tokens.append(Token(KEY, joined))

    for match in _TOKEN_RE.finditer(pattern):
        text.append(pattern[pos : match.start()])
        pos = match.end()
        if match.lastgroup == "compound":
            text.append(match.group())
            continue
        flush()
        tokens.append(Token(PLUS if match.lastgroup == "plus" else OR, match.group()))

    text.append(pattern[pos:])
    flush()
    return tokens


def _split_alternatives(tokens: list[Token]) -> list[list[str]]:
    """Group tokens into alternatives, each a list of ``+``-separated segments."""
    alternatives: list[list[str]] = [[""]]
    for token in tokens:
        if token.kind == OR:
            alternatives.append([""])
        elif token.kind == PLUS:
            alternatives[-1].append("")
        else:
            alternatives[-1][-1] += token.text
    return alternatives


def _strip_segments(segments: list[str]) -> list[str]:
    # Same as trimming the joined alternative text before splitting on "+"
    stripped = list(segments)
    stripped[0] = stripped[0].lstrip()
    stripped[-1] = stripped[-1].rstrip()
    return stripped


def _terminal_key(segments: list[str]) -> str:
    key = segments[-1].lower()
    if not key:
        raise InvalidPatternError("+".join(segments))
    return key


def parse_pattern(
    pattern: str,
    *,
    is_apple: PlatformProbe | None = None,
) -> AcceleratorPattern:
    """Parse an accelerator pattern string.

    Blank patterns return :data:`INERT_PATTERN`, which never matches. When a
    pattern has several alternatives, only the first alternative's modifiers
    are kept and they apply to every alternative key: ``"Ctrl+EnterOrSpace"``
    means Ctrl+Enter or Ctrl+Space.

    Args:
        pattern: Accelerator string such as ``"CmdOrCtrl+Shift+S"``.
        is_apple: Platform probe for the platform-conditional aliases.

    Raises:
        InvalidPatternError: If an alternative is empty or ends in ``+``.
    """
    if not pattern or pattern.isspace():
        return INERT_PATTERN

    alternatives = _split_alternatives(tokenize(pattern))

    if len(alternatives) == 1:
        segments = alternatives[0]
        keys = [_terminal_key(segments)]
        modifier_parts = segments[:-1]
    else:
        keys = []
        modifier_parts = []
        for index, segments in enumerate(alternatives):
            segments = _strip_segments(segments)
            keys.append(_terminal_key(segments))
            if index == 0:
                modifier_parts = segments[:-1]

    modifiers = resolve_modifiers(
        [part.lower() for part in modifier_parts],
        is_apple=is_apple,
    )
    return AcceleratorPattern(
        ctrl=modifiers.ctrl,
        alt=modifiers.alt,
        shift=modifiers.shift,
        meta=modifiers.meta,
        keys=tuple(keys),
    )
