"""Prototype factory: clone, then layer field and behavior overrides.

Usage:
    proto = create_prototype(
        invoice,
        fields={"number": None, "lines": []},
        behaviors={"describe": lambda self: f"Draft of {self.customer}"},
    )
    proto.describe()  # bound to proto, invoice is untouched

Overrides only touch the top-level clone. Field values are stored as given,
they are not cloned.
"""

from __future__ import annotations

import keyword
import types
from typing import Any, TypeVar

import structlog

from protoclone.config import CloneSettings, configure_logging_once
from protoclone.core.capability import CapabilityRegistry
from protoclone.core.engine import CloneEngine, describe
from protoclone.core.errors import InvalidOverrideError
from protoclone.core.types import BehaviorOverrides, Clone, FieldOverrides

T = TypeVar("T")

logger = structlog.get_logger(__name__)


def is_member_name(name: Any) -> bool:
    """Check if `name` can be used as a member in attribute-access syntax.

    Args:
        name: Candidate member name.

    Returns:
        True for identifiers that are not reserved keywords.
    """
    return isinstance(name, str) and name.isidentifier() and not keyword.iskeyword(name)


class Prototyper:
    """Builds prototypes on top of a CloneEngine.

    Args:
        settings: Engine settings. Loaded from the environment when None.
        registry: Capability registry. The process-wide one when None.
        engine: Engine to use. Built from settings and registry when None.
    """

    def __init__(
        self,
        settings: CloneSettings | None = None,
        registry: CapabilityRegistry | None = None,
        engine: CloneEngine | None = None,
    ) -> None:
        self._engine = engine or CloneEngine(settings=settings, registry=registry)

    @property
    def engine(self) -> CloneEngine:
        """Underlying clone engine."""
        return self._engine

    def deep_clone(self, value: T) -> Clone[T]:
        """Deep-clone any value. See CloneEngine.deep_clone."""
        return self._engine.deep_clone(value)

    def deep_clone_array(self, container: T) -> Clone[T]:
        """Deep-clone a container. See CloneEngine.deep_clone_array."""
        return self._engine.deep_clone_array(container)

    def create_prototype(
        self,
        obj: T,
        fields: FieldOverrides | None = None,
        behaviors: BehaviorOverrides | None = None,
    ) -> Clone[T]:
        """Clone `obj` and apply overrides to the clone.

        Field overrides are applied first, then behavior overrides. Within
        each mapping the order of application is not part of the contract.

        Args:
            obj: Object to use as the template.
            fields: Field name -> value to store on the clone. Names must be
                fields of the clone's runtime type; private fields may be
                given unmangled (`__secret`).
            behaviors: Member name -> callable, bound to the clone as its
                receiver and attached to that instance only.

        Returns:
            The clone with overrides applied.

        Raises:
            InvalidOverrideError: If a field does not exist, a member name is
                not a valid identifier, a behavior is not callable, or the
                clone cannot carry per-instance members.
        """
        if not fields and not behaviors:
            return self._engine.deep_clone(obj)

        clone = self._engine.deep_clone(obj)
        if fields:
            self._apply_fields(clone, fields)
        if behaviors:
            self._apply_behaviors(clone, behaviors)

        logger.debug(
            "prototype_created",
            prototype_type=type(clone).__qualname__,
            fields=sorted(fields or ()),
            behaviors=sorted(behaviors or ()),
        )
        return clone

    def _apply_fields(self, clone: Any, fields: FieldOverrides) -> None:
        cls = type(clone)
        descriptor = describe(cls)
        for name, value in fields.items():
            stored = descriptor.stored_name(clone, name) if isinstance(name, str) else None
            if stored is None:
                logger.warning(
                    "prototype_field_rejected", field=name, prototype_type=cls.__qualname__
                )
                raise InvalidOverrideError.missing_field(str(name), cls)

            member = descriptor.slot(cls, stored)
            if member is not None:
                member.__set__(clone, value)
            else:
                object.__getattribute__(clone, "__dict__")[stored] = value

    def _apply_behaviors(self, clone: Any, behaviors: BehaviorOverrides) -> None:
        cls = type(clone)
        descriptor = describe(cls)
        for name, behavior in behaviors.items():
            if not is_member_name(name):
                logger.warning("prototype_behavior_rejected", member=name, reason="invalid_name")
                raise InvalidOverrideError.invalid_member_name(str(name), cls)
            if not callable(behavior):
                logger.warning("prototype_behavior_rejected", member=name, reason="not_callable")
                raise InvalidOverrideError.not_callable(name, cls, behavior)
            if not descriptor.has_dict:
                logger.warning(
                    "prototype_behavior_rejected", member=name, reason="no_instance_dict"
                )
                raise InvalidOverrideError.no_instance_members(name, cls)

            if isinstance(behavior, types.MethodType):
                behavior = behavior.__func__
            object.__getattribute__(clone, "__dict__")[name] = types.MethodType(behavior, clone)


# Module-level prototyper instance, built on first use
_prototyper: Prototyper | None = None


def get_prototyper() -> Prototyper:
    """Access the default prototyper, building it on first use.

    Building it configures structlog from LoggingSettings unless the host
    application already configured structlog.

    Returns:
        The process-wide Prototyper instance.
    """
    global _prototyper
    if _prototyper is None:
        configure_logging_once()
        _prototyper = Prototyper()
    return _prototyper


def configure(
    settings: CloneSettings | None = None,
    registry: CapabilityRegistry | None = None,
) -> Prototyper:
    """Replace the default prototyper.

    Args:
        settings: Engine settings. Loaded from the environment when None.
        registry: Capability registry. The process-wide one when None.

    Returns:
        The new default Prototyper.
    """
    global _prototyper
    configure_logging_once()
    _prototyper = Prototyper(settings=settings, registry=registry)
    return _prototyper


def deep_clone(value: T) -> Clone[T]:
    """Deep-clone any value with the default prototyper."""
    return get_prototyper().deep_clone(value)


def deep_clone_array(container: T) -> Clone[T]:
    """Deep-clone a container with the default prototyper."""
    return get_prototyper().deep_clone_array(container)


def create_prototype(
    obj: T,
    fields: FieldOverrides | None = None,
    behaviors: BehaviorOverrides | None = None,
) -> Clone[T]:
    """Build a prototype of `obj` with the default prototyper."""
    return get_prototyper().create_prototype(obj, fields, behaviors)
