"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_slot import CacheSlot, SlotState
from .interception import Interception
from .request_descriptor import RequestDescriptor

__all__ = ["CacheSlot", "SlotState", "Interception", "RequestDescriptor"]
