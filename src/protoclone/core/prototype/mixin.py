"""Participation mixin: opt a type into prototyping and engine-backed copies.

Usage:
    @resettable
    class Connection(Prototypable):
        def __init__(self, dsn: str) -> None:
            self.dsn = dsn
            self.session_id = open_session(dsn)

        def reset(self) -> None:
            self.session_id = None

    base = Connection("db://primary")
    replica = base.prototype(fields={"dsn": "db://replica"})
    fresh = copy.copy(base)  # deep clone, then reset() on the clone
"""

from __future__ import annotations

from typing import Any, Self

from protoclone.core.capability import get_registry
from protoclone.core.types import BehaviorOverrides, Clone, FieldOverrides


class Prototypable:
    """Mixin exposing `prototype()` and routing native copies through the engine.

    Subclasses are registered as participants, so the engine field-copies
    them instead of treating their `__copy__` as foreign duplication.

    Gotcha: only copies triggered through `copy.copy`/`copy.deepcopy` call
    the reset hook. `prototype()` and nested clones never do.
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        get_registry().register(cls, participating=True)

    def prototype(
        self,
        obj: Any | None = None,
        fields: FieldOverrides | None = None,
        behaviors: BehaviorOverrides | None = None,
    ) -> Any:
        """Create a prototype of `obj` (this instance by default).

        Args:
            obj: Template object. Defaults to self.
            fields: Field overrides for the clone.
            behaviors: Behavior overrides bound to the clone.

        Returns:
            The new instance.

        Raises:
            InvalidOverrideError: If an override cannot be applied.
        """
        # Late import to avoid circular dependency
        from protoclone.core.prototype.core import get_prototyper

        return get_prototyper().create_prototype(
            self if obj is None else obj, fields, behaviors
        )

    def __copy__(self) -> Clone[Self]:
        """Deep-clone this instance, then reset the clone if its type is resettable."""
        from protoclone.core.prototype.core import get_prototyper

        prototyper = get_prototyper()
        clone = prototyper.deep_clone(self)
        meta = prototyper.engine.registry.resolve(type(clone))
        if meta.resettable and meta.reset_hook is not None:
            getattr(clone, meta.reset_hook)()
        return clone

    def __deepcopy__(self, memo: dict[int, Any]) -> Clone[Self]:
        """Same as `__copy__`: every duplication of a participant is deep."""
        return self.__copy__()
