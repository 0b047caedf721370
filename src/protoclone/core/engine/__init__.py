"""Clone engine: value classification and recursive deep cloning."""

from protoclone.core.engine.core import (
    CONTAINER_TYPES,
    OPAQUE_TYPES,
    PRIMITIVE_TYPES,
    CloneEngine,
)
from protoclone.core.engine.models import TypeDescriptor, ValueKind
from protoclone.core.engine.operations import (
    allocate,
    describe,
    is_native_type,
    mangle,
    native_base,
)

__all__ = [
    # Models
    "ValueKind",
    "TypeDescriptor",
    # Operations
    "allocate",
    "describe",
    "is_native_type",
    "mangle",
    "native_base",
    # Core
    "CloneEngine",
    "PRIMITIVE_TYPES",
    "OPAQUE_TYPES",
    "CONTAINER_TYPES",
]
