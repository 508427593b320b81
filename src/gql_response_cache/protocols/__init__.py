"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → Valkey, HTTP upstream → in-process schema)
- Unit testing with in-memory implementations
- Clear separation of concerns
"""

from .operation_executor import OperationExecutor
from .slot_store import SlotStore

__all__ = [
    "OperationExecutor",
    "SlotStore",
]
