"""Event delivery for model instances.

- **ModelEvents**: The four events a model emits
- **EventEmitter**: Synchronous multi-listener emitter
- **ValueEventHandler** / **CommitEventHandler**: Handler protocols
"""

from .emitter import EventEmitter
from .events import InternalSignal, ModelEvents
from .protocols import CommitEventHandler, ValueEventHandler

__all__ = [
    "CommitEventHandler",
    "EventEmitter",
    "InternalSignal",
    "ModelEvents",
    "ValueEventHandler",
]
