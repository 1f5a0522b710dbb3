"""Handler protocols for model events.

Handlers receive positional arguments only, unless the model was built with
`ModelConfig(tag_instances=True)`, in which case an `instance_id` keyword
argument is added to every call.
"""

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from statewire.schema.field import FieldDescriptor


class ValueEventHandler(Protocol):
    """Receives VALUE and SNAPSHOT_VALUE events."""

    def __call__(self, field: "FieldDescriptor", value: Any, /, **kwargs: Any) -> None:
        """
        Handle a field value.

        Args:
            field: Descriptor of the field that was written or replayed
            value: The field's value
        """
        ...


class CommitEventHandler(Protocol):
    """Receives COMMIT and SNAPSHOT_COMMIT events."""

    def __call__(self, revision: int, /, **kwargs: Any) -> None:
        """
        Handle the end of a batch.

        Args:
            revision: For COMMIT, the revision that just ended; for
                SNAPSHOT_COMMIT, the current (not yet committed) revision
        """
        ...
