"""Dispatch key events to callbacks registered by accelerator pattern."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Mapping, Protocol

from keymatch._router import PlatformProbe
from keymatch.matcher import KeyEventLike, key_match
from keymatch.pattern import parse_pattern

logger = logging.getLogger(__name__)

KeyCallback = Callable[[KeyEventLike], object]
KeyListener = Callable[[KeyEventLike], object]


class EventSource(Protocol):
    """Something that delivers key events to attached listeners."""

    def add_listener(self, listener: KeyListener) -> None: ...

    def remove_listener(self, listener: KeyListener) -> None: ...


class ListenerSource:
    """In-process event source: ``emit()`` forwards an event to every listener."""

    def __init__(self) -> None:
        self._listeners: list[KeyListener] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: KeyListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def emit(self, event: KeyEventLike) -> None:
        for listener in list(self._listeners):
            listener(event)


class KeyDispatcher:
    """Route key events to callbacks by accelerator pattern.

    Patterns are kept in registration order and every matching callback
    runs, in that order, with the event. Re-registering a pattern swaps its
    callback but keeps its position.

    Usage::

        dispatcher = KeyDispatcher({"CmdOrCtrl+S": save, "Escape": close})
        with dispatcher.listen(source):
            run_event_loop()
    """

    def __init__(
        self,
        callbacks: Mapping[str, KeyCallback] | None = None,
        *,
        is_apple: PlatformProbe | None = None,
    ) -> None:
        self._callbacks: dict[str, KeyCallback] = {}
        self._is_apple = is_apple
        if callbacks:
            self.update(callbacks)

    @property
    def patterns(self) -> tuple[str, ...]:
        return tuple(self._callbacks)

    def __len__(self) -> int:
        return len(self._callbacks)

    def __contains__(self, pattern: object) -> bool:
        return pattern in self._callbacks

    def register(self, pattern: str, callback: KeyCallback) -> None:
        """Bind a callback to a pattern.

        Raises:
            InvalidPatternError: If the pattern is malformed.
        """
        parse_pattern(pattern, is_apple=self._is_apple)
        self._callbacks[pattern] = callback
        logger.debug("Registered key pattern %r", pattern)

    def unregister(self, pattern: str) -> bool:
        """Remove a pattern. Returns False if it was not registered."""
        if pattern not in self._callbacks:
            return False
        del self._callbacks[pattern]
        logger.debug("Unregistered key pattern %r", pattern)
        return True

    def update(self, callbacks: Mapping[str, KeyCallback]) -> None:
        for pattern, callback in callbacks.items():
            self.register(pattern, callback)

    def clear(self) -> None:
        self._callbacks.clear()

    def matching(self, event: KeyEventLike) -> list[str]:
        """Return the registered patterns that match the event, in order."""
        return [
            pattern
            for pattern in self._callbacks
            if key_match(event, pattern, is_apple=self._is_apple)
        ]

    def handle(self, event: KeyEventLike) -> list[str]:
        """Invoke every callback whose pattern matches the event.

        The matching set is computed before any callback runs, so callbacks
        may register or unregister patterns without affecting this event.
        Callback exceptions propagate to the caller.

        Returns:
            The patterns whose callbacks were invoked.
        """
        matched = self.matching(event)
        callbacks = [self._callbacks[pattern] for pattern in matched]
        if matched:
            logger.debug("Key %r matched %s", event.key, matched)
        for callback in callbacks:
            callback(event)
        return matched

    @contextmanager
    def listen(self, source: EventSource) -> Iterator[KeyDispatcher]:
        """Attach :meth:`handle` to an event source for the ``with`` block.

        The listener is removed on every exit path, including exceptions.
        """
        listener = self.handle
        source.add_listener(listener)
        try:
            yield self
        finally:
            source.remove_listener(listener)
