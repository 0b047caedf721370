"""Capability registry, tagging decorators, and queries.

Usage:
    @non_prototypable
    class ServiceRegistry:
        ...

    @resettable
    @dataclass
    class Session:
        token: str | None = None

        def reset(self) -> None:
            self.token = None

    @resettable(hook="clear_cache")
    class Renderer:
        def clear_cache(self) -> None: ...

    is_excluded(ServiceRegistry())   # True
    is_resettable(Session)           # True
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, overload

from protoclone.core.capability.models import DEFAULT_RESET_HOOK, CapabilityMeta


def _type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class CapabilityRegistry:
    """Process-local registry mapping types to their capability tags.

    Lookups walk the MRO, so a subclass of a tagged type carries the tag too.
    """

    def __init__(self) -> None:
        """Initialize empty capability registry."""
        self._by_type: dict[type, CapabilityMeta] = {}

    def register(
        self,
        cls: type,
        *,
        excluded: bool = False,
        resettable: bool = False,
        reset_hook: str | None = None,
        participating: bool = False,
    ) -> CapabilityMeta:
        """Tag a type and return its accumulated metadata.

        Registering the same type again adds tags, it never removes them.

        Args:
            cls: Type to tag.
            excluded: Exclude instances from deep cloning.
            resettable: Invoke the reset hook after native duplication.
            reset_hook: Method name of the reset hook.
            participating: Type routes its duplication through the engine.

        Returns:
            Capability metadata recorded for the type itself.
        """
        meta = CapabilityMeta(
            type_name=_type_name(cls),
            excluded=excluded,
            resettable=resettable,
            reset_hook=reset_hook if resettable else None,
            participating=participating,
        )
        existing = self._by_type.get(cls)
        if existing is not None:
            meta = existing.merged(meta)
        self._by_type[cls] = meta
        return meta

    def get_meta(self, cls: type) -> CapabilityMeta | None:
        """Get the tags recorded for exactly this type.

        Args:
            cls: Type to look up.

        Returns:
            Capability metadata if the type itself was registered, None otherwise.
        """
        return self._by_type.get(cls)

    def resolve(self, cls: type) -> CapabilityMeta:
        """Get the effective tags of a type, merged over its MRO.

        Args:
            cls: Type to resolve.

        Returns:
            Capability metadata; all tags False for unregistered hierarchies.
        """
        resolved = CapabilityMeta(type_name=_type_name(cls))
        for klass in cls.__mro__:
            meta = self._by_type.get(klass)
            if meta is not None:
                resolved = resolved.merged(meta)
        return resolved

    def is_registered(self, cls: type) -> bool:
        """Check if a type itself carries any registration.

        Args:
            cls: Type to check.

        Returns:
            True if the type was registered, False otherwise.
        """
        return cls in self._by_type


# Module-level registry instance
_registry = CapabilityRegistry()


def get_registry() -> CapabilityRegistry:
    """Access the global capability registry.

    Returns:
        The process-local CapabilityRegistry instance.
    """
    return _registry


def _as_type(obj: Any) -> type:
    return obj if isinstance(obj, type) else type(obj)


def is_excluded(obj: Any, registry: CapabilityRegistry | None = None) -> bool:
    """Check whether an instance (or type) is excluded from deep cloning."""
    return (registry or _registry).resolve(_as_type(obj)).excluded


def is_resettable(obj: Any, registry: CapabilityRegistry | None = None) -> bool:
    """Check whether an instance (or type) is reset after native duplication."""
    return (registry or _registry).resolve(_as_type(obj)).resettable


def is_participating(obj: Any, registry: CapabilityRegistry | None = None) -> bool:
    """Check whether an instance (or type) routes duplication through the engine."""
    return (registry or _registry).resolve(_as_type(obj)).participating


def non_prototypable[C: type](cls: C) -> C:
    """Exclude a type from deep cloning: the engine hands out the same instance.

    Intended for singletons and registries that must never be duplicated.

    >>> @non_prototypable
    ... class Clock:
    ...     pass
    """
    _registry.register(cls, excluded=True)
    return cls


@overload
def resettable[C: type](cls: C) -> C: ...


@overload
def resettable[C: type](cls: None = None, *, hook: str = ...) -> Callable[[C], C]: ...


def resettable[C: type](
    cls: C | None = None, *, hook: str = DEFAULT_RESET_HOOK
) -> C | Callable[[C], C]:
    """Tag a type as resettable after cloning.

    Supports three forms:
        @resettable                       # bare decorator, hook "reset"
        @resettable()                     # parenthesized, no args
        @resettable(hook="clear_state")   # custom hook method

    Args:
        cls: The class to tag, or None if called with arguments.
        hook: Name of the zero-argument method invoked on the fresh clone.

    Returns:
        Decorated class or decorator function.

    Raises:
        TypeError: If the class has no callable attribute named `hook`.
    """

    def decorator(c: C) -> C:
        if not callable(getattr(c, hook, None)):
            raise TypeError(
                f"Resettable type {c.__name__} must define a callable '{hook}' method"
            )
        _registry.register(c, resettable=True, reset_hook=hook)
        return c

    if cls is None:
        return decorator
    return decorator(cls)
