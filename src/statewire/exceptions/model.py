"""Model instance usage exceptions.

This module defines exceptions raised by the API of a live model:
- ModelUsageError: Base class for misuse of a model instance
- FieldIndexError: Positional write to an index with no registered field
- UnknownEventError: Subscription to an event name the model never emits
"""

from typing import Any

from .base import StatewireError


class ModelUsageError(StatewireError):
    """A model instance was used incorrectly."""
    pass


class FieldIndexError(ModelUsageError, IndexError):
    """No field setter is registered at the requested index; `subject` is the index."""

    def __init__(self, index: Any, field_count: int):
        super().__init__(
            f"No field registered at index {index!r} (valid range 0..{field_count - 1})",
            subject=index,
            hint="Use the index of a FieldDescriptor from ModelSchema.fields",
        )


class UnknownEventError(ModelUsageError, ValueError):
    """The event name is not one of the model events; `subject` is the name."""

    def __init__(self, event_name: Any, known: list[str]):
        super().__init__(
            f"Unknown model event: {event_name!r}",
            subject=event_name,
            hint=f"Valid events: {', '.join(known)}",
        )
