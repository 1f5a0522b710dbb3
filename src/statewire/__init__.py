"""Reactive model schemas with fine-grained change events.

Declare a tree of fields and nested objects once, then create live model
instances from it. Every field write raises a VALUE event, `commit()` ends a
batch with a revision number, and `snapshot()` replays the whole state.

## Public API

### Declaration

- **define_field**: Declare a field with its initial value
- **define_object**: Declare a nested object
- **define_model**: Declare and initialize a model root

### Events

- **ModelEvents**: VALUE, COMMIT, SNAPSHOT_VALUE, SNAPSHOT_COMMIT
- **EventEmitter**: The multi-listener emitter behind `on`/`once`/`off`

### Helpers

- **get_field_path**: Dot-separated path of a field descriptor
- **get_instance_id**: Identifier of an instance within its schema
- **to_dict**: Plain nested dict of an instance's current values
- **ConfigKey**: Typed key for field extension metadata

## Example Usage

```python
from statewire import ModelEvents, define_field, define_model, define_object, get_field_path

schema = define_model(
    {
        "player1": define_object({"score": define_field(0)}),
        "player2": define_object({"score": define_field(0)}),
    },
    {"name": define_field("Round 1")},
)

model = schema.create()
model.on(ModelEvents.VALUE, lambda field, value: print(get_field_path(field), value))
model.on(ModelEvents.COMMIT, lambda revision: print("commit", revision))

model.player1.score += 3   # player1.score 3
model.commit()             # commit 1
```
"""

from statewire.config import ModelConfig
from statewire.events import EventEmitter, ModelEvents
from statewire.exceptions import StatewireError
from statewire.schema import (
    RESERVED_NAMES,
    ConfigKey,
    FieldConfigs,
    FieldDescriptor,
    FieldSchema,
    ModelInstance,
    ModelSchema,
    ObjectInstance,
    ObjectSchema,
    define_field,
    define_model,
    define_object,
    get_field_path,
    get_instance_id,
    to_dict,
)

__all__ = [
    "RESERVED_NAMES",
    "ConfigKey",
    "EventEmitter",
    "FieldConfigs",
    "FieldDescriptor",
    "FieldSchema",
    "ModelConfig",
    "ModelEvents",
    "ModelInstance",
    "ModelSchema",
    "ObjectInstance",
    "ObjectSchema",
    "StatewireError",
    "define_field",
    "define_model",
    "define_object",
    "get_field_path",
    "get_instance_id",
    "to_dict",
]

__version__ = "0.1.0"
