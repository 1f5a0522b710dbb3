"""Schema declaration, initialization and materialization.

- **define_field / FieldSchema / FieldDescriptor**: Leaf declarations and identities
- **define_object / ObjectSchema / ObjectInstance**: Nested objects
- **define_model / ModelSchema / ModelInstance**: Model root and instance API
- **Dispatcher**: Descriptor registry and event hub shared by a model's instances
- **ConfigKey / FieldConfigs**: Typed per-field extension metadata
"""

from .configs import ConfigKey, FieldConfigs
from .dispatcher import Dispatcher
from .field import FieldDescriptor, FieldSchema, Relationship, define_field, get_field_path
from .model import RESERVED_NAMES, ModelInstance, ModelSchema, define_model, get_instance_id
from .object import ObjectInstance, ObjectSchema, define_object, to_dict

__all__ = [
    "RESERVED_NAMES",
    "ConfigKey",
    "Dispatcher",
    "FieldConfigs",
    "FieldDescriptor",
    "FieldSchema",
    "ModelInstance",
    "ModelSchema",
    "ObjectInstance",
    "ObjectSchema",
    "Relationship",
    "define_field",
    "define_model",
    "define_object",
    "get_field_path",
    "get_instance_id",
    "to_dict",
]
