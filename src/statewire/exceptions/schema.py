"""Schema construction exceptions.

These are raised while a schema is declared, initialized or materialized:
- SchemaDefinitionError: A shape is malformed
- ReservedNameError: A top-level key collides with the model API
- AlreadyInitializedError: A schema node was placed in more than one position
- NotInitializedError: A schema node was used before initialization
- ConfigsSealedError: Field configs were written after initialization
"""

from typing import Any

from .base import StatewireError


class SchemaError(StatewireError):
    """A schema could not be built or used."""
    pass


class SchemaDefinitionError(SchemaError):
    """A shape passed to define_object/define_model is malformed; `subject` is the key."""

    def __init__(self, key: Any, reason: str):
        super().__init__(
            f"Invalid schema entry {key!r}: {reason}",
            subject=key,
            hint="Shape keys must be plain strings not starting with '_', "
            "mapped to define_field(...) or define_object(...) values",
        )


class ReservedNameError(SchemaError):
    """A top-level shape key conflicts with the model API; `subject` is the key."""

    def __init__(self, key: str):
        super().__init__(
            f"Top-level shape property name conflicts with Model API: '{key}'",
            subject=key,
            hint=f"Rename '{key}' or move it into a nested object",
        )


class AlreadyInitializedError(SchemaError):
    """A schema node was initialized a second time."""

    def __init__(self, what: str = "schema"):
        """
        Args:
            what: Description of the reused node, e.g. "field 'player.score'"
        """
        super().__init__(
            f"Already initialized: this {what} belongs to another model.",
            subject=what,
            hint="Create a separate schema object for each usage site",
        )


class NotInitializedError(SchemaError):
    """A schema node was used before it was initialized."""

    def __init__(self, what: str = "schema"):
        super().__init__(
            f"Not initialized: this {what} is not usable without a model.",
            subject=what,
            hint="Wrap the schema with define_model(...) and call create()",
        )


class ConfigsSealedError(SchemaError):
    """Field configs were written after initialization; `subject` is the field name."""

    def __init__(self, field_name: str):
        super().__init__(
            f"Configs of field '{field_name}' can no longer be changed",
            subject=field_name,
            hint="Attach metadata from a .with_(...) configurator",
        )
