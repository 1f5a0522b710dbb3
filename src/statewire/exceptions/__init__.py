"""
Custom exception hierarchy for statewire.

## Exception Hierarchy

```
StatewireError (base)
├── SchemaError
│   ├── SchemaDefinitionError
│   ├── ReservedNameError
│   ├── AlreadyInitializedError
│   ├── NotInitializedError
│   └── ConfigsSealedError
└── ModelUsageError
    ├── FieldIndexError
    └── UnknownEventError
```

## Usage

Schema errors surface from `define_field`, `define_object` and `define_model`
and mean the schema itself is wrong. Usage errors surface from a live model.

```python
from statewire import define_field, define_model
from statewire.exceptions import ReservedNameError

try:
    define_model({"commit": define_field(0)})
except ReservedNameError as e:
    print(e.describe())
```
"""

from .base import StatewireError
from .model import FieldIndexError, ModelUsageError, UnknownEventError
from .schema import (
    AlreadyInitializedError,
    ConfigsSealedError,
    NotInitializedError,
    ReservedNameError,
    SchemaDefinitionError,
    SchemaError,
)

__all__ = [
    # Schema
    "AlreadyInitializedError",
    "ConfigsSealedError",
    # Model
    "FieldIndexError",
    "ModelUsageError",
    "NotInitializedError",
    "ReservedNameError",
    "SchemaDefinitionError",
    "SchemaError",
    # Base
    "StatewireError",
    "UnknownEventError",
]
