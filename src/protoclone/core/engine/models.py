"""Clone engine models: value categories and structural type descriptors."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class ValueKind(Enum):
    """How the engine treats a value, in precedence order."""

    PRIMITIVE = auto()  # Immutable scalar, returned unchanged
    CALLABLE = auto()  # Function, method, class or partial, shared
    OPAQUE = auto()  # External handle or native object without copy semantics, shared
    EXCLUDED = auto()  # Tagged @non_prototypable, identity preserved
    CONTAINER = auto()  # Sequence, mapping or set, rebuilt with cloned elements
    FOREIGN = auto()  # Defines its own __copy__/__deepcopy__, delegated
    OBJECT = auto()  # Plain instance, field-copied without running constructors

    @property
    def shared(self) -> bool:
        """Whether values of this kind are handed out by reference."""
        return self in _SHARED_KINDS


_SHARED_KINDS = frozenset(
    {ValueKind.PRIMITIVE, ValueKind.CALLABLE, ValueKind.OPAQUE, ValueKind.EXCLUDED}
)


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Structural description of a runtime type's stored fields.

    Built once per type by `describe()`. Slot storage is located by the
    position of the declaring class in the MRO, so the descriptor holds no
    reference to the type it describes and cached entries die with it.
    Member descriptors are resolved against the instance's type so fields
    can be read and written without going through `__getattribute__`,
    `__setattr__` or properties.
    """

    slots: tuple[tuple[str, int], ...]
    """(stored name, MRO index of the declaring class) for every slot."""

    has_dict: bool
    """Whether instances carry a `__dict__`."""

    declared: frozenset[str]
    """Field names declared by the type: slots, annotations, dataclass and pydantic fields."""

    private_prefixes: tuple[str, ...]
    """Name-mangling prefixes (`_ClassName`) of every class in the MRO."""

    def members(self, cls: type) -> Iterator[tuple[str, Any]]:
        """Iterate (stored name, member descriptor) for every slot of `cls`."""
        mro = cls.__mro__
        for stored, index in self.slots:
            yield stored, mro[index].__dict__[stored]

    def slot(self, cls: type, name: str) -> Any | None:
        """Get the most derived member descriptor of `cls` stored under `name`."""
        for stored, member in self.members(cls):
            if stored == name:
                return member
        return None

    def field_names(self, instance: Any) -> frozenset[str]:
        """Get every field name declared by the type or stored on `instance`."""
        if not self.has_dict:
            return self.declared
        return self.declared | frozenset(object.__getattribute__(instance, "__dict__"))

    def stored_name(self, instance: Any, name: str) -> str | None:
        """Resolve a field name to the name it is stored under.

        Private names may be given unmangled (`__secret`), in which case the
        mangled name of the closest class in the MRO that stores it is used.

        Args:
            instance: Instance of the described type.
            name: Field name as given by the caller.

        Returns:
            Stored field name, or None if the instance has no such field.
        """
        fields = self.field_names(instance)
        if name in fields:
            return name
        if name.startswith("__") and not name.endswith("__"):
            for prefix in self.private_prefixes:
                if prefix + name in fields:
                    return prefix + name
        return None
