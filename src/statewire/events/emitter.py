"""Multi-listener event emitter.

This module provides the publish/subscribe primitive that model instances use
to deliver events. Listeners are grouped by event name and called
synchronously, in registration order, on the caller's stack.
"""

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


@dataclass(frozen=True, eq=False)
class _Registration:
    listener: Listener
    once: bool


class EventEmitter:
    """
    Named-event listener registry with synchronous fan-out.

    Delivery Semantics:
        - Listeners for one event name run in registration order.
        - A `once` listener is removed before it is called.
        - `emit` iterates over a copy of the listener list, so listeners
          added or removed during delivery only affect later emissions.
        - Listeners may emit again (reentrancy is allowed and unguarded).

    Error Handling:
        By default an exception raised by a listener propagates to the caller
        of `emit` and the remaining listeners are skipped. With
        `isolate_errors=True` the exception is logged and delivery continues.

    Example:
        ```python
        emitter = EventEmitter(emitter_name="model")
        emitter.on("value", lambda field, value: print(field, value))
        emitter.emit("value", descriptor, 42)
        ```
    """

    def __init__(self, isolate_errors: bool = False, emitter_name: str = "event"):
        """
        Initialize the emitter.

        Args:
            isolate_errors: Log listener exceptions instead of propagating them
            emitter_name: Name of the emitter for logging (e.g., "model", "snapshot")
        """
        self._listeners: dict[Hashable, list[_Registration]] = {}
        self._isolate_errors = isolate_errors
        self._emitter_name = emitter_name

    def on(self, event_name: Hashable, listener: Listener) -> None:
        """
        Register a listener for every future emission of an event.

        Registering the same listener twice makes it run twice.

        Args:
            event_name: Event to listen for
            listener: Callable invoked with the emitted arguments
        """
        self._add(event_name, listener, once=False)

    def once(self, event_name: Hashable, listener: Listener) -> None:
        """
        Register a listener for the next emission of an event only.

        Args:
            event_name: Event to listen for
            listener: Callable invoked with the emitted arguments
        """
        self._add(event_name, listener, once=True)

    def off(self, event_name: Hashable, listener: Listener) -> None:
        """
        Remove the most recently registered entry of a listener.

        Matches both `on` and `once` registrations of the same callable.
        Removing a listener that is not registered is a no-op.

        Args:
            event_name: Event the listener was registered for
            listener: The callable passed to `on` or `once`
        """
        registrations = self._listeners.get(event_name)
        if registrations:
            for position in range(len(registrations) - 1, -1, -1):
                if registrations[position].listener == listener:
                    del registrations[position]
                    if not registrations:
                        del self._listeners[event_name]
                    logger.debug(f"Removed {self._emitter_name} listener for {event_name!r}: {listener}")
                    return
        logger.debug(f"No {self._emitter_name} listener to remove for {event_name!r}: {listener}")

    def emit(self, event_name: Hashable, *args: Any, **kwargs: Any) -> bool:
        """
        Call every listener of an event with the given arguments.

        Args:
            event_name: Event to emit
            *args: Positional arguments passed to each listener
            **kwargs: Keyword arguments passed to each listener

        Returns:
            True if the event had listeners, False otherwise
        """
        registrations = self._listeners.get(event_name)
        if not registrations:
            return False

        for registration in list(registrations):
            if registration.once:
                self._discard(event_name, registration)
            self._deliver(event_name, registration.listener, args, kwargs)
        return True

    def listener_count(self, event_name: Hashable) -> int:
        """Get the number of listeners registered for an event."""
        return len(self._listeners.get(event_name, ()))

    def listeners(self, event_name: Hashable) -> list[Listener]:
        """Get a copy of the listeners registered for an event, in call order."""
        return [registration.listener for registration in self._listeners.get(event_name, ())]

    def remove_all_listeners(self, event_name: Hashable | None = None) -> None:
        """
        Remove all listeners of one event, or of every event.

        Args:
            event_name: Event to clear; clears everything if None
        """
        if event_name is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event_name, None)

    def _add(self, event_name: Hashable, listener: Listener, once: bool) -> None:
        if not callable(listener):
            raise TypeError(f"{self._emitter_name} listener must be callable, got {listener!r}")
        self._listeners.setdefault(event_name, []).append(_Registration(listener, once))
        logger.debug(f"Registered {self._emitter_name} listener for {event_name!r}: {listener}")

    def _discard(self, event_name: Hashable, registration: _Registration) -> None:
        registrations = self._listeners.get(event_name)
        if registrations and registration in registrations:
            registrations.remove(registration)
            if not registrations:
                del self._listeners[event_name]

    def _deliver(
        self, event_name: Hashable, listener: Listener, args: tuple, kwargs: dict[str, Any]
    ) -> None:
        if not self._isolate_errors:
            listener(*args, **kwargs)
            return

        try:
            listener(*args, **kwargs)
        except Exception as e:
            logger.error(
                f"Error in {self._emitter_name} listener {listener} for {event_name!r}: {e}",
                exc_info=True,
            )
