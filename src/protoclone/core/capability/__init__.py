"""Capability tags: exclusion from cloning, reset after cloning, participation."""

from protoclone.core.capability.core import (
    CapabilityRegistry,
    get_registry,
    is_excluded,
    is_participating,
    is_resettable,
    non_prototypable,
    resettable,
)
from protoclone.core.capability.models import DEFAULT_RESET_HOOK, CapabilityMeta

__all__ = [
    # Models
    "CapabilityMeta",
    "DEFAULT_RESET_HOOK",
    # Core
    "CapabilityRegistry",
    "get_registry",
    "non_prototypable",
    "resettable",
    "is_excluded",
    "is_resettable",
    "is_participating",
]
