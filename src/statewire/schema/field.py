"""Field declarations and descriptors."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Optional

from statewire.exceptions import AlreadyInitializedError, NotInitializedError
from statewire.schema.configs import FieldConfigs

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Relationship:
    """Lookup-only link from a field or object to its enclosing object."""

    name: str
    parent: Optional["Relationship"] = None


@dataclass(frozen=True, eq=False)
class FieldDescriptor:
    """
    Identity of one field, assigned once during model initialization.

    Attributes:
        index: Position in depth-first declaration order, unique per model
        name: Key of the field within its enclosing object
        parent: Enclosing object, or None for top-level fields
        configs: Extension metadata written by configurators
    """

    index: int
    name: str
    parent: Relationship | None = None
    configs: FieldConfigs = field(default=None, repr=False)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self.configs is None:
            object.__setattr__(self, "configs", FieldConfigs(self.name))

    @property
    def path(self) -> str:
        """Dot-separated path of the field from the model root."""
        return get_field_path(self)


def get_field_path(field: FieldDescriptor | Relationship) -> str:
    """
    Build the dot-separated path of a field, root first.

    Example:
        ```python
        get_field_path(model_schema.fields[1])  # "player1.score"
        ```
    """
    names = [field.name]
    current = field.parent
    while current is not None:
        names.append(current.name)
        current = current.parent
    names.reverse()
    return ".".join(names)


type FieldConfigure[T] = Callable[["FieldSchema[T]"], None]


class FieldSchema[T]:
    """
    Static declaration of one field: its initial value and configurators.

    Create with `define_field()`. A FieldSchema describes exactly one position
    in one model; build a new one for every place a field is needed.
    """

    __slots__ = ("_initial_value", "_configurators", "_descriptor")

    def __init__(self, initial_value: T):
        self._initial_value = initial_value
        self._configurators: list[FieldConfigure[T]] = []
        self._descriptor: FieldDescriptor | None = None

    @property
    def initial_value(self) -> T:
        """Value every new instance starts with."""
        return self._initial_value

    @property
    def configurators(self) -> tuple[FieldConfigure[T], ...]:
        """Configurators queued with `with_()`, in run order."""
        return tuple(self._configurators)

    @property
    def descriptor(self) -> FieldDescriptor:
        """
        Descriptor assigned during initialization.

        Raises:
            NotInitializedError: If the field has not been initialized yet
        """
        if self._descriptor is None:
            raise NotInitializedError("field")
        return self._descriptor

    @property
    def initialized(self) -> bool:
        return self._descriptor is not None

    def with_(self, configure: FieldConfigure[T]) -> "FieldSchema[T]":
        """
        Queue a configurator to run once the descriptor is assigned.

        Configurators accumulate and run in the order they were queued.

        Args:
            configure: Called with this schema; `descriptor` is available

        Returns:
            This schema, for chaining
        """
        self._configurators.append(configure)
        return self

    def _bind(self, descriptor: FieldDescriptor) -> None:
        if self._descriptor is not None:
            raise AlreadyInitializedError(f"field '{self._descriptor.path}'")
        self._descriptor = descriptor

    def _unbind(self) -> None:
        self._descriptor = None

    def _configure(self) -> None:
        """Run the queued configurators against the bound descriptor."""
        descriptor = self.descriptor
        for configure in self._configurators:
            configure(self)
        if self._configurators:
            logger.debug(f"Ran {len(self._configurators)} configurator(s) for '{descriptor.path}'")

    def __repr__(self) -> str:
        return f"FieldSchema({self._initial_value!r})"


def define_field[T](initial_value: T) -> FieldSchema[T]:
    """
    Declare a field with the value new instances start with.

    Example:
        ```python
        score = define_field(0)
        name = define_field("Round 1").with_(attach_formatter)
        ```
    """
    return FieldSchema(initial_value)


def is_field_schema(value: Any) -> bool:
    """True if the value declares a field rather than a nested object."""
    return isinstance(value, FieldSchema)
