"""protoclone: prototype-pattern object cloning for Python.

Usage:
    from protoclone import Prototypable, create_prototype, resettable

    @resettable
    @dataclass
    class Order(Prototypable):
        items: list[str]
        status: str = "new"
        audit: list[str] = field(default_factory=list)

        def reset(self) -> None:
            self.audit = []

    order = Order(["apple"])
    draft = order.prototype(
        fields={"status": "draft"},
        behaviors={"total": lambda self: len(self.items)},
    )
    draft.items.append("pear")   # order.items is still ["apple"]
    draft.total()                # 2

    fresh = copy.copy(order)     # deep clone, then fresh.reset()
"""

__version__ = "0.1.0"

# Configuration
from protoclone.config import (
    CloneSettings,
    LoggingSettings,
    configure_logging,
)

# Core primitives
from protoclone.core import (
    BehaviorOverrides,
    CapabilityMeta,
    CapabilityRegistry,
    Clone,
    CloneEngine,
    CyclicGraphError,
    FieldOverrides,
    InvalidOverrideError,
    Prototypable,
    PrototypableProtocol,
    Prototyper,
    PrototyperProtocol,
    PrototypeError,
    ValueKind,
    configure,
    create_prototype,
    deep_clone,
    deep_clone_array,
    get_prototyper,
    get_registry,
    is_excluded,
    is_participating,
    is_resettable,
    non_prototypable,
    resettable,
)

__all__ = [
    # Version
    "__version__",
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
    # Config
    "CloneSettings",
    "LoggingSettings",
    "configure_logging",
]
