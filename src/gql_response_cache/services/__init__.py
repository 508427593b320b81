"""Service layer for business logic.

This layer contains the core caching logic. Services depend on
protocols (interfaces), not concrete implementations, making them
testable against in-memory stores.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .cache_coordinator import CacheCoordinator
from .cache_keys import derive_key
from .eligibility import EligibilityFilter

__all__ = [
    "CacheCoordinator",
    "EligibilityFilter",
    "derive_key",
]
