"""Prototype functionality: factory, participation mixin, and protocols."""

from protoclone.core.prototype.core import (
    Prototyper,
    configure,
    create_prototype,
    deep_clone,
    deep_clone_array,
    get_prototyper,
    is_member_name,
)
from protoclone.core.prototype.mixin import Prototypable
from protoclone.core.prototype.models import PrototypableProtocol, PrototyperProtocol

__all__ = [
    # Models
    "PrototyperProtocol",
    "PrototypableProtocol",
    # Core
    "Prototyper",
    "get_prototyper",
    "configure",
    "deep_clone",
    "deep_clone_array",
    "create_prototype",
    "is_member_name",
    # Mixin
    "Prototypable",
]
