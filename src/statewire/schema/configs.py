"""Typed per-field extension metadata.

Configurators attached with `FieldSchema.with_()` store arbitrary payloads on
a field's descriptor. Payloads are addressed by `ConfigKey` tokens, which
compare by identity, so two libraries never clash even if they pick the same
key name.

Example:
    ```python
    FORMATTER = ConfigKey[Callable[[int], str]]("formatter")

    score = define_field(0).with_(
        lambda field: field.descriptor.configs.set(FORMATTER, "{:03d}".format)
    )

    def on_value(field, value):
        fmt = field.configs.get(FORMATTER, str)
        print(get_field_path(field), fmt(value))
    ```
"""

from collections.abc import Hashable, Iterator
from typing import Any, overload

from statewire.exceptions import ConfigsSealedError


class ConfigKey[T]:
    """Identity-compared key for a payload of type T."""

    __slots__ = ("name",)

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"ConfigKey({self.name!r})"


class FieldConfigs:
    """
    Mapping from extension keys to payloads, scoped to one field.

    Writable during the initialization pass only; the owning dispatcher seals
    it once every configurator has run.
    """

    def __init__(self, field_name: str):
        self._field_name = field_name
        self._entries: dict[Hashable, Any] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        """True once the initialization pass has ended."""
        return self._sealed

    def seal(self) -> None:
        """Reject all further writes."""
        self._sealed = True

    def set[T](self, key: ConfigKey[T] | Hashable, value: T) -> None:
        """
        Store a payload under a key, replacing any previous one.

        Raises:
            ConfigsSealedError: If called after initialization
        """
        if self._sealed:
            raise ConfigsSealedError(self._field_name)
        self._entries[key] = value

    @overload
    def get[T](self, key: ConfigKey[T]) -> T | None: ...

    @overload
    def get[T, D](self, key: ConfigKey[T], default: D) -> T | D: ...

    @overload
    def get(self, key: Hashable, default: Any = None) -> Any: ...

    def get(self, key, default=None):
        """Return the payload stored under a key, or default."""
        return self._entries.get(key, default)

    def __getitem__(self, key: Hashable) -> Any:
        return self._entries[key]

    def __setitem__(self, key: Hashable, value: Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: Hashable) -> None:
        if self._sealed:
            raise ConfigsSealedError(self._field_name)
        del self._entries[key]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        state = "sealed" if self._sealed else "open"
        return f"FieldConfigs({self._field_name!r}, {len(self._entries)} entries, {state})"
