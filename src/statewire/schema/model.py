"""Model schemas: the root of a schema tree and the API of its instances."""

import logging
from typing import Any

from statewire.config import ModelConfig
from statewire.events import CommitEventHandler, ModelEvents, ValueEventHandler
from statewire.exceptions import ModelUsageError, ReservedNameError, UnknownEventError
from statewire.schema.dispatcher import Dispatcher, Getter, Setter
from statewire.schema.field import FieldDescriptor
from statewire.schema.object import ObjectInstance, ObjectSchema, Shape

logger = logging.getLogger(__name__)

# Members of ModelInstance that a top-level key would shadow
RESERVED_NAMES: frozenset[str] = frozenset({"on", "once", "off", "snapshot", "commit", "set"})

type Handler = ValueEventHandler | CommitEventHandler


def _event_name(event_name: ModelEvents | str) -> ModelEvents:
    try:
        return ModelEvents(event_name)
    except ValueError:
        raise UnknownEventError(event_name, ModelEvents.names()) from None


class ModelInstance(ObjectInstance):
    """
    Live model: the root object plus the event and revision API.

    Events:
        - VALUE(field, value): after every field write
        - COMMIT(revision): on `commit()`
        - SNAPSHOT_VALUE(field, value): once per field on `snapshot()`
        - SNAPSHOT_COMMIT(revision): after the snapshot values

    Threading:
        Not thread-safe. Listeners run synchronously on the writer's stack and
        may write fields themselves; cycles of such writes are not detected.
    """

    __slots__ = ("_dispatcher", "_instance_id")

    def __init__(
        self,
        accessors: dict[str, tuple[Getter, Setter]],
        objects: dict[str, ObjectInstance],
        keys: tuple[str, ...],
        dispatcher: Dispatcher,
        instance_id: int,
    ):
        super().__init__(accessors, objects, keys)
        object.__setattr__(self, "_dispatcher", dispatcher)
        object.__setattr__(self, "_instance_id", instance_id)

    # =================================================================
    # Event System
    # =================================================================

    def on(self, event_name: ModelEvents | str, handler: Handler) -> None:
        """
        Register a handler for every future event of a kind.

        Raises:
            UnknownEventError: If event_name is not a ModelEvents value
        """
        self._dispatcher.events.on(_event_name(event_name), handler)

    def once(self, event_name: ModelEvents | str, handler: Handler) -> None:
        """
        Register a handler for the next event of a kind only.

        Raises:
            UnknownEventError: If event_name is not a ModelEvents value
        """
        self._dispatcher.events.once(_event_name(event_name), handler)

    def off(self, event_name: ModelEvents | str, handler: Handler) -> None:
        """
        Unregister a handler; other handlers and other events are unaffected.

        Raises:
            UnknownEventError: If event_name is not a ModelEvents value
        """
        self._dispatcher.events.off(_event_name(event_name), handler)

    # =================================================================
    # Batches
    # =================================================================

    def commit(self) -> None:
        """
        End the current batch of changes.

        Emits COMMIT with the current revision, then advances it: the first
        commit reports the initial revision (1 by default), the next one 2,
        and so on.
        """
        self._dispatcher.commit(self._instance_id)

    def snapshot(self) -> None:
        """
        Replay the current value of every field.

        Emits one SNAPSHOT_VALUE per field in index order, then one
        SNAPSHOT_COMMIT with the current revision. The revision is unchanged.
        """
        self._dispatcher.snapshot(self._instance_id)

    def set(self, field_index: int, value: Any) -> None:
        """
        Write a field by descriptor index and raise VALUE normally.

        Dangerous operation: there is no run-time type check, so any value
        can land in any field. Meant for generic loaders that address fields
        by index, e.g. replaying remote updates.

        Args:
            field_index: Index of the field to be updated
            value: The value to be set

        Raises:
            FieldIndexError: If no field is registered at field_index
            ModelUsageError: If positional writes are disabled in ModelConfig
        """
        if not self._dispatcher.config.positional_set:
            raise ModelUsageError(
                "Positional set is disabled for this model",
                hint="Build the model with ModelConfig(positional_set=True)",
            )
        self._dispatcher.set_by_index(field_index, value)

    def __repr__(self) -> str:
        items = ", ".join(f"{key}={self[key]!r}" for key in self._keys)
        return f"{type(self).__name__}#{self._instance_id}({items})"


def get_instance_id(model: ModelInstance) -> int:
    """Return the identifier of a model instance, unique per schema."""
    return model._instance_id


class ModelSchema:
    """
    Root schema of a model, initialized once at construction.

    Owns the Dispatcher; every instance from `create()` shares its listeners,
    revision counter and positional accessor table. An instance that is
    garbage-collected stops answering `snapshot()`.

    Example:
        ```python
        schema = define_model(
            {"player1": define_object({"score": define_field(0)})},
            {"name": define_field("Round 1")},
        )
        model = schema.create()
        model.on(ModelEvents.VALUE, lambda field, value: print(field.path, value))
        model.player1.score += 3
        model.commit()
        ```
    """

    def __init__(self, root: ObjectSchema, config: ModelConfig | None = None):
        """
        Validate the top-level keys and initialize the schema tree.

        If initialization fails, every node bound so far is released again,
        so the same schema objects can be used in another `define_model()`.

        Args:
            root: Root object schema; must not belong to another model
            config: Model options

        Raises:
            ReservedNameError: If a top-level key collides with the model API
            AlreadyInitializedError: If a schema node belongs to another model
        """
        for key in root.children:
            if key in RESERVED_NAMES:
                raise ReservedNameError(key)

        self._root = root
        self._dispatcher = Dispatcher(config)
        self._instance_count = 0

        try:
            root.initialize(self._dispatcher)
        except Exception:
            # Leave every node usable in another model
            self._dispatcher.rollback()
            raise
        self._dispatcher.seal()

        logger.info(f"Model defined with {len(self._dispatcher.descriptors)} field(s)")

    @property
    def config(self) -> ModelConfig:
        return self._dispatcher.config

    @property
    def fields(self) -> tuple[FieldDescriptor, ...]:
        """Field descriptors in index order."""
        return self._dispatcher.descriptors

    @property
    def revision(self) -> int:
        """Revision the next commit will report."""
        return self._dispatcher.revision

    def field(self, path: str) -> FieldDescriptor:
        """
        Look up a field descriptor by its dot-separated path.

        Raises:
            KeyError: If no field has that path
        """
        for descriptor in self._dispatcher.descriptors:
            if descriptor.path == path:
                return descriptor
        raise KeyError(path)

    def create(self) -> ModelInstance:
        """Materialize a new live instance with initial values."""
        self._instance_count += 1
        instance_id = self._instance_count
        if instance_id > 1:
            logger.warning(
                f"Instance {instance_id} created from a schema that already has instances; "
                "listeners, revisions and positional set are shared between them"
            )

        parts = self._root.materialize(instance_id)
        model = ModelInstance(parts.accessors, parts.objects, parts.keys, self._dispatcher, instance_id)
        self._dispatcher.subscribe_snapshot(model, parts.responders)
        logger.debug(f"Created model instance {instance_id}")
        return model


def define_model(
    shape: Shape | None = None,
    fields: Shape | None = None,
    *,
    config: ModelConfig | None = None,
) -> ModelSchema:
    """
    Declare a model and initialize it.

    Takes the same shapes as `define_object()`. Top-level keys must not be
    one of RESERVED_NAMES.

    Raises:
        SchemaDefinitionError: If a shape is malformed
        ReservedNameError: If a top-level key collides with the model API
        AlreadyInitializedError: If a schema node belongs to another model
    """
    return ModelSchema(ObjectSchema(shape, fields), config)
