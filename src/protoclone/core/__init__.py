"""Core functionalities: capability tags, the clone engine, and prototypes.

Architecture Note:
    capability/ and engine/ hold stateless building blocks: per-type tags and
    the recursive clone algorithm. prototype/ layers overrides and the
    participation mixin on top of the engine.
"""

from protoclone.core.capability import (
    CapabilityMeta,
    CapabilityRegistry,
    get_registry,
    is_excluded,
    is_participating,
    is_resettable,
    non_prototypable,
    resettable,
)
from protoclone.core.engine import CloneEngine, TypeDescriptor, ValueKind, describe
from protoclone.core.errors import CyclicGraphError, InvalidOverrideError, PrototypeError
from protoclone.core.prototype import (
    Prototypable,
    PrototypableProtocol,
    Prototyper,
    PrototyperProtocol,
    configure,
    create_prototype,
    deep_clone,
    deep_clone_array,
    get_prototyper,
)
from protoclone.core.types import BehaviorOverrides, Clone, FieldOverrides

__all__ = [
    # Types
    "Clone",
    "FieldOverrides",
    "BehaviorOverrides",
    # Errors
    "PrototypeError",
    "InvalidOverrideError",
    "CyclicGraphError",
    # Capability
    "CapabilityMeta",
    "CapabilityRegistry",
    "get_registry",
    "non_prototypable",
    "resettable",
    "is_excluded",
    "is_resettable",
    "is_participating",
    # Engine
    "CloneEngine",
    "ValueKind",
    "TypeDescriptor",
    "describe",
    # Prototype
    "Prototyper",
    "PrototyperProtocol",
    "PrototypableProtocol",
    "Prototypable",
    "get_prototyper",
    "configure",
    "deep_clone",
    "deep_clone_array",
    "create_prototype",
]
