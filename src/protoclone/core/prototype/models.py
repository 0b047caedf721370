"""Prototype protocols: what a prototyper and a participating type expose."""

from __future__ import annotations

from typing import Any, Protocol, Self, runtime_checkable

from protoclone.core.types import BehaviorOverrides, Clone, FieldOverrides


@runtime_checkable
class PrototyperProtocol(Protocol):
    """Deep cloning plus override-layered prototype construction."""

    def deep_clone(self, value: Any) -> Any:
        """Deep-clone any value."""
        ...

    def deep_clone_array(self, container: Any) -> Any:
        """Deep-clone a container, keeping its shape."""
        ...

    def create_prototype(
        self,
        obj: Any,
        fields: FieldOverrides | None = None,
        behaviors: BehaviorOverrides | None = None,
    ) -> Any:
        """Clone `obj` and apply field and behavior overrides to the clone."""
        ...


@runtime_checkable
class PrototypableProtocol(Protocol):
    """A type that can produce prototypes of itself."""

    def prototype(
        self,
        obj: Any | None = None,
        fields: FieldOverrides | None = None,
        behaviors: BehaviorOverrides | None = None,
    ) -> Any: ...

    def __copy__(self) -> Clone[Self]: ...
