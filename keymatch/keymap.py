"""Keymap files: JSON lists of accelerator pattern -> command bindings.

Example document::

    {
        "version": 1,
        "bindings": [
            {"keys": "CmdOrCtrl+S", "command": "save"},
            {"keys": "EnterOrSpace", "command": "confirm"}
        ]
    }

Documents are validated against ``schema/keymap.schema.json``.
"""

from __future__ import annotations

import json
import logging
import pathlib
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from jsonschema import ValidationError, validate

from keymatch._router import PlatformProbe
from keymatch.dispatch import KeyDispatcher
from keymatch.matcher import KeyEventLike, key_match
from keymatch.pattern import AcceleratorPattern, InvalidPatternError, parse_pattern

logger = logging.getLogger(__name__)

SCHEMA_PATH = pathlib.Path(__file__).resolve().parent / "schema" / "keymap.schema.json"

_schema: dict[str, Any] | None = None


class KeymapError(ValueError):
    """A keymap document could not be read or is invalid."""


def _get_schema() -> dict[str, Any]:
    global _schema
    if _schema is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _schema = json.load(f)
    return _schema


@dataclass(frozen=True)
class Binding:
    keys: str
    command: str
    description: str = ""

    def parse(self, *, is_apple: PlatformProbe | None = None) -> AcceleratorPattern:
        return parse_pattern(self.keys, is_apple=is_apple)


@dataclass(frozen=True)
class Keymap:
    """An ordered set of bindings loaded from a keymap document."""

    bindings: tuple[Binding, ...] = ()
    source: str | None = None

    @classmethod
    def from_dict(cls, data: Any, *, source: str | None = None) -> Keymap:
        """Validate and build a keymap from a decoded JSON document.

        Raises:
            KeymapError: On schema violations or malformed patterns.
        """
        where = source or "<keymap>"
        try:
            validate(instance=data, schema=_get_schema())
        except ValidationError as exc:
            path = "/".join(str(p) for p in exc.absolute_path) or "(root)"
            raise KeymapError(f"{where}: {path}: {exc.message}") from exc

        bindings = []
        for entry in data["bindings"]:
            binding = Binding(
                keys=entry["keys"],
                command=entry["command"],
                description=entry.get("description", ""),
            )
            try:
                binding.parse()
            except InvalidPatternError as exc:
                raise KeymapError(f"{where}: command {binding.command!r}: {exc}") from exc
            bindings.append(binding)

        return cls(bindings=tuple(bindings), source=source)

    @property
    def commands(self) -> list[str]:
        return [b.command for b in self.bindings]

    def commands_for(
        self,
        event: KeyEventLike,
        *,
        is_apple: PlatformProbe | None = None,
    ) -> list[str]:
        """Return the commands bound to patterns matching the event, in file order."""
        return [
            b.command for b in self.bindings if key_match(event, b.keys, is_apple=is_apple)
        ]

    def dispatcher(
        self,
        handlers: Mapping[str, Callable[[KeyEventLike], object]],
        *,
        is_apple: PlatformProbe | None = None,
    ) -> KeyDispatcher:
        """Build a dispatcher that calls ``handlers[command]`` for each binding.

        Bindings whose command has no handler are skipped. When two bindings
        share a pattern the later one wins, keeping the earlier position.
        """
        dispatcher = KeyDispatcher(is_apple=is_apple)
        for binding in self.bindings:
            handler = handlers.get(binding.command)
            if handler is None:
                logger.debug("No handler for command %r, skipping", binding.command)
                continue
            dispatcher.register(binding.keys, handler)
        return dispatcher


def load_keymap(path: str | pathlib.Path) -> Keymap:
    """Read and validate a keymap JSON file.

    Raises:
        KeymapError: If the file cannot be read, is not JSON, or is invalid.
    """
    path = pathlib.Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as exc:
        raise KeymapError(f"{path}: cannot read keymap: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise KeymapError(f"{path}: invalid JSON: {exc}") from exc

    keymap = Keymap.from_dict(data, source=str(path))
    logger.info("Loaded %d key bindings from %s", len(keymap.bindings), path)
    return keymap
