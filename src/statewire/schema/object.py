"""Object schemas and the live objects materialized from them."""

from collections.abc import Iterator, Mapping
from typing import Any, NamedTuple

from statewire.exceptions import (
    AlreadyInitializedError,
    NotInitializedError,
    SchemaDefinitionError,
)
from statewire.schema.dispatcher import Dispatcher, Getter, Responder, Setter
from statewire.schema.field import FieldSchema, Relationship, is_field_schema

type SchemaNode = FieldSchema[Any] | ObjectSchema
type Shape = Mapping[str, SchemaNode]


def _validate_shapes(shape: Shape | None, fields: Shape | None) -> dict[str, SchemaNode]:
    """Merge both shapes into one ordered mapping, rejecting malformed entries."""
    children: dict[str, SchemaNode] = {}

    for source, fields_only in ((shape, False), (fields, True)):
        if source is None:
            continue
        if not isinstance(source, Mapping):
            raise SchemaDefinitionError("<shape>", f"shape must be a mapping, got {type(source).__name__}")
        for key, node in source.items():
            if not isinstance(key, str) or not key:
                raise SchemaDefinitionError(key, "keys must be non-empty strings")
            if key.startswith("_"):
                raise SchemaDefinitionError(key, "keys must not start with '_'")
            if key in children:
                raise SchemaDefinitionError(key, "declared more than once")
            if not is_field_schema(node):
                if not isinstance(node, ObjectSchema):
                    raise SchemaDefinitionError(key, f"expected a field or object schema, got {node!r}")
                if fields_only:
                    raise SchemaDefinitionError(key, "nested objects are not allowed in the fields shape")
            children[key] = node

    return children


class ObjectSchema:
    """
    Static declaration of a set of named fields and nested objects.

    Create with `define_object()`. Nothing happens until a model initializes
    the schema; after that, each `create_instance()` builds a fresh object.

    Traversal Order:
        Children are visited depth-first in declaration order: the entries of
        the first shape as declared (fields and nested objects interleaved),
        then the entries of the fields shape. This order fixes field indices.
    """

    def __init__(self, shape: Shape | None = None, fields: Shape | None = None):
        """
        Initialize the object schema.

        Args:
            shape: Fields and/or nested objects, in declaration order
            fields: Additional fields, visited after `shape`

        Raises:
            SchemaDefinitionError: If either shape is malformed
        """
        self._children = _validate_shapes(shape, fields)
        self._dispatcher: Dispatcher | None = None

    @property
    def children(self) -> Mapping[str, SchemaNode]:
        """Declared children in traversal order."""
        return dict(self._children)

    @property
    def initialized(self) -> bool:
        return self._dispatcher is not None

    def initialize(self, dispatcher: Dispatcher, parent: Relationship | None = None) -> None:
        """
        Assign descriptors to every field below this object.

        On failure the nodes bound so far stay bound; `Dispatcher.rollback()`
        detaches them.

        Args:
            dispatcher: Registry of the model this schema becomes part of
            parent: Relationship of this object to its enclosing object

        Raises:
            AlreadyInitializedError: If this schema already belongs to a model
        """
        if self._dispatcher is not None:
            raise AlreadyInitializedError("object schema")
        self._dispatcher = dispatcher
        dispatcher.track_binding(self)

        for key, node in self._children.items():
            if isinstance(node, ObjectSchema):
                node.initialize(dispatcher, Relationship(name=key, parent=parent))
            else:
                dispatcher.init_field(node, key, parent)

    def _unbind(self) -> None:
        self._dispatcher = None

    def create_instance(self, instance_id: int = 0) -> "ObjectInstance":
        """
        Build one live object graph with its own field values.

        Args:
            instance_id: Identifier of the model instance being built

        Raises:
            NotInitializedError: If the schema was never initialized
        """
        parts = self.materialize(instance_id)
        instance = ObjectInstance(parts.accessors, parts.objects, parts.keys)
        self.dispatcher.subscribe_snapshot(instance, parts.responders)
        return instance

    @property
    def dispatcher(self) -> Dispatcher:
        """
        Dispatcher of the model this schema belongs to.

        Raises:
            NotInitializedError: If the schema was never initialized
        """
        if self._dispatcher is None:
            raise NotInitializedError("object schema")
        return self._dispatcher

    def materialize(self, instance_id: int) -> "Materialized":
        """
        Build the value cells of one instance without wrapping them.

        Registers every leaf in the positional accessor table. The returned
        snapshot responders are not subscribed yet; the caller hands them to
        `Dispatcher.subscribe_snapshot()` together with the object that owns
        them.

        Raises:
            NotInitializedError: If the schema was never initialized
        """
        dispatcher = self.dispatcher
        accessors: dict[str, tuple[Getter, Setter]] = {}
        objects: dict[str, ObjectInstance] = {}
        responders: list[Responder] = []
        for key, node in self._children.items():
            if isinstance(node, ObjectSchema):
                nested = node.materialize(instance_id)
                objects[key] = ObjectInstance(nested.accessors, nested.objects, nested.keys)
                responders.extend(nested.responders)
            else:
                getter, setter, responder = _materialize_field(dispatcher, node, instance_id)
                accessors[key] = (getter, setter)
                responders.append(responder)
        return Materialized(accessors, objects, tuple(self._children), responders)

    def __repr__(self) -> str:
        return f"ObjectSchema({', '.join(self._children)})"


class Materialized(NamedTuple):
    """Parts of one live object, as built by `ObjectSchema.materialize()`."""

    accessors: dict[str, tuple[Getter, Setter]]
    objects: dict[str, "ObjectInstance"]
    keys: tuple[str, ...]
    responders: list[Responder]


def _materialize_field(
    dispatcher: Dispatcher, field_schema: FieldSchema[Any], instance_id: int
) -> tuple[Getter, Setter, Responder]:
    """Create one field's value cell and wire it to the dispatcher."""
    descriptor = field_schema.descriptor
    value = field_schema.initial_value

    def get_value() -> Any:
        return value

    def set_value(new_value: Any) -> None:
        nonlocal value
        # Stored before emission so listeners read back the new value
        value = new_value
        dispatcher.emit_value(descriptor, new_value, instance_id)

    def report_value() -> None:
        dispatcher.emit_snapshot_value(descriptor, value, instance_id)

    dispatcher.init_field_accessor(descriptor, get_value, set_value)
    return get_value, set_value, report_value


class ObjectInstance:
    """
    Live object mirroring an ObjectSchema.

    Fields read and write through attributes or items; every write raises a
    VALUE event. Nested objects are read-only attributes. No other attribute
    can be added. Iteration yields keys in declaration order.
    """

    __slots__ = ("_accessors", "_objects", "_keys", "__weakref__")

    def __init__(
        self,
        accessors: dict[str, tuple[Getter, Setter]],
        objects: dict[str, "ObjectInstance"],
        keys: tuple[str, ...],
    ):
        object.__setattr__(self, "_accessors", accessors)
        object.__setattr__(self, "_objects", objects)
        object.__setattr__(self, "_keys", keys)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; private names never map to fields
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError:
            raise AttributeError(f"'{type(self).__name__}' has no field '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        accessor = self._accessors.get(name)
        if accessor is not None:
            accessor[1](value)
        elif name in self._objects:
            raise AttributeError(f"Nested object '{name}' is read-only")
        else:
            raise AttributeError(f"'{type(self).__name__}' has no field '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Cannot delete '{name}' from a model object")

    def __getitem__(self, key: str) -> Any:
        accessor = self._accessors.get(key)
        if accessor is not None:
            return accessor[0]()
        return self._objects[key]

    def __setitem__(self, key: str, value: Any) -> None:
        accessor = self._accessors.get(key)
        if accessor is None:
            if key in self._objects:
                raise TypeError(f"Nested object '{key}' is read-only")
            raise KeyError(key)
        accessor[1](value)

    def __contains__(self, key: object) -> bool:
        return key in self._accessors or key in self._objects

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._keys))

    def __repr__(self) -> str:
        items = ", ".join(f"{key}={self[key]!r}" for key in self._keys)
        return f"{type(self).__name__}({items})"


def to_dict(instance: ObjectInstance) -> dict[str, Any]:
    """
    Copy the current values of a live object into plain nested dicts.

    Reading emits no events.
    """
    result: dict[str, Any] = {}
    for key in instance:
        value = instance[key]
        result[key] = to_dict(value) if isinstance(value, ObjectInstance) else value
    return result


def define_object(shape: Shape | None = None, fields: Shape | None = None) -> ObjectSchema:
    """
    Declare a nested object.

    Accepts a field-only shape, a subordinate-only shape, a mixed shape, or a
    subordinates shape followed by a fields shape.

    Example:
        ```python
        player = define_object({"score": define_field(0)})
        team = define_object({"captain": define_object({"name": define_field("")})},
                             {"wins": define_field(0)})
        ```

    Raises:
        SchemaDefinitionError: If either shape is malformed
    """
    return ObjectSchema(shape, fields)
