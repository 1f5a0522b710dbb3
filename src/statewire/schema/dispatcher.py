"""Dispatcher shared by a model schema and all of its instances."""

import logging
import weakref
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from statewire.config import ModelConfig
from statewire.events import EventEmitter, InternalSignal, ModelEvents
from statewire.exceptions import FieldIndexError
from statewire.schema.field import FieldDescriptor, FieldSchema, Relationship

logger = logging.getLogger(__name__)

Getter = Callable[[], Any]
Setter = Callable[[Any], None]
Responder = Callable[[], None]


class Bindable(Protocol):
    """Schema node that can be detached from a failed initialization pass."""

    def _unbind(self) -> None: ...


class Dispatcher:
    """
    Registry and event hub owned by one ModelSchema.

    The dispatcher assigns field descriptors during the initialization pass,
    then routes every field write, commit and snapshot of every instance
    created from the schema. It holds:

    - the descriptor registry (index counter starting at 0, never reset)
    - the positional accessor table, indexed by descriptor index
    - the revision counter
    - the public event emitter and the private snapshot channel

    Sharing:
        All instances of a schema share this object. Their events reach the
        same listeners, their commits advance the same revision counter, and
        the accessor table holds the leaves of the most recently created
        instance. Snapshot requests reach the leaves of every instance that is
        still alive.
    """

    def __init__(self, config: ModelConfig | None = None):
        """
        Initialize the dispatcher.

        Args:
            config: Model options; defaults to ModelConfig()
        """
        self.config = config if config is not None else ModelConfig()
        self._descriptors: list[FieldDescriptor] = []
        self._bound: list[Bindable] = []
        self._accessors: dict[int, tuple[Getter, Setter]] = {}
        self._revision = self.config.initial_revision
        self._sealed = False

        self.events = EventEmitter(
            isolate_errors=self.config.isolate_listener_errors, emitter_name="model"
        )
        # Leaves subscribe here, out of reach of the public off()
        self._snapshot_channel = EventEmitter(emitter_name="snapshot")

    # =================================================================
    # Initialization pass
    # =================================================================

    def create_field_descriptor(self, name: str, parent: Relationship | None = None) -> FieldDescriptor:
        """Allocate the next index and build a descriptor around it."""
        descriptor = FieldDescriptor(index=len(self._descriptors), name=name, parent=parent)
        self._descriptors.append(descriptor)
        return descriptor

    def init_field(
        self, field_schema: FieldSchema[Any], name: str, parent: Relationship | None = None
    ) -> FieldDescriptor:
        """
        Assign a descriptor to a field and run its configurators.

        Raises:
            AlreadyInitializedError: If the field already belongs to a model
        """
        descriptor = self.create_field_descriptor(name, parent)
        field_schema._bind(descriptor)
        self.track_binding(field_schema)
        field_schema._configure()
        return descriptor

    def track_binding(self, node: Bindable) -> None:
        """Remember a node bound during this pass so `rollback()` can detach it."""
        self._bound.append(node)

    def rollback(self) -> None:
        """
        Undo a failed initialization pass.

        Every node bound by this dispatcher is detached and may be placed in
        another model. Nodes that already belonged to a different model are
        never touched.
        """
        for node in reversed(self._bound):
            node._unbind()
        logger.debug(f"Rolled back {len(self._bound)} schema node(s)")
        self._bound.clear()
        self._descriptors.clear()

    def seal(self) -> None:
        """End the initialization pass; descriptor configs become read-only."""
        for descriptor in self._descriptors:
            descriptor.configs.seal()
        self._bound.clear()
        self._sealed = True
        logger.debug(f"Dispatcher sealed with {len(self._descriptors)} field(s)")

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def descriptors(self) -> tuple[FieldDescriptor, ...]:
        """All descriptors in index order."""
        return tuple(self._descriptors)

    # =================================================================
    # Instance wiring
    # =================================================================

    def init_field_accessor(self, descriptor: FieldDescriptor, getter: Getter, setter: Setter) -> None:
        """Register a leaf's accessor pair at its descriptor index."""
        self._accessors[descriptor.index] = (getter, setter)

    def subscribe_snapshot(self, owner: object, responders: Sequence[Responder]) -> None:
        """
        Register the leaves of one instance to answer snapshot requests.

        The registrations live as long as `owner`: once the instance is
        garbage-collected its leaves stop answering.

        Args:
            owner: Live object the leaves belong to; must support weak references
            responders: One snapshot responder per leaf, in index order
        """
        responders = tuple(responders)
        for responder in responders:
            self._snapshot_channel.on(InternalSignal.SNAPSHOT_REQUEST, responder)
        finalizer = weakref.finalize(owner, self._unsubscribe_snapshot, responders)
        finalizer.atexit = False

    def _unsubscribe_snapshot(self, responders: tuple[Responder, ...]) -> None:
        for responder in responders:
            self._snapshot_channel.off(InternalSignal.SNAPSHOT_REQUEST, responder)
        logger.debug(f"Released {len(responders)} snapshot responder(s) of a collected instance")

    def set_by_index(self, index: int, value: Any) -> None:
        """
        Write a field through the accessor registered at an index.

        Raises:
            FieldIndexError: If no accessor is registered at the index
        """
        _, setter = self._accessor(index)
        setter(value)

    def _accessor(self, index: Any) -> tuple[Getter, Setter]:
        # bool is an int subclass; True must not address field 1
        if isinstance(index, bool) or not isinstance(index, int) or index not in self._accessors:
            raise FieldIndexError(index, len(self._descriptors))
        return self._accessors[index]

    # =================================================================
    # Emission
    # =================================================================

    @property
    def revision(self) -> int:
        """Revision the next commit will report."""
        return self._revision

    def emit_value(self, descriptor: FieldDescriptor, value: Any, instance_id: int) -> None:
        self._emit(ModelEvents.VALUE, instance_id, descriptor, value)

    def emit_snapshot_value(self, descriptor: FieldDescriptor, value: Any, instance_id: int) -> None:
        self._emit(ModelEvents.SNAPSHOT_VALUE, instance_id, descriptor, value)

    def commit(self, instance_id: int) -> None:
        """Emit COMMIT with the current revision, then advance it."""
        revision = self._revision
        logger.debug(f"Commit revision {revision} from instance {instance_id}")
        self._emit(ModelEvents.COMMIT, instance_id, revision)
        self._revision = revision + 1

    def snapshot(self, instance_id: int) -> None:
        """Replay every field's current value, then emit SNAPSHOT_COMMIT."""
        logger.debug(f"Snapshot at revision {self._revision} from instance {instance_id}")
        self._snapshot_channel.emit(InternalSignal.SNAPSHOT_REQUEST)
        self._emit(ModelEvents.SNAPSHOT_COMMIT, instance_id, self._revision)

    def _emit(self, event: ModelEvents, instance_id: int, *args: Any) -> None:
        if self.config.tag_instances:
            self.events.emit(event, *args, instance_id=instance_id)
        else:
            self.events.emit(event, *args)
