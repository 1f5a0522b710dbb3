"""Events raised by model instances.

- ModelEvents: Public events delivered to `on`/`once` listeners
- InternalSignal: Signals exchanged between a model and its own leaves
"""

from enum import Enum


class ModelEvents(str, Enum):
    """Events a model instance emits to its listeners."""

    VALUE = "value"                      # A field was written
    COMMIT = "commit"                    # A batch of changes ended
    SNAPSHOT_VALUE = "snapshot_value"    # Current value of one field, replayed
    SNAPSHOT_COMMIT = "snapshot_commit"  # End of a snapshot replay

    @classmethod
    def names(cls) -> list[str]:
        """Return the string value of every event."""
        return [event.value for event in cls]


class InternalSignal(Enum):
    """Signals on the private channel between a model and its fields."""

    SNAPSHOT_REQUEST = "snapshot_request"  # Every field reports its value
