"""Errors raised while cloning and building prototypes."""

from __future__ import annotations


def _type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class PrototypeError(Exception):
    """Base class for protoclone errors."""

    pass


class InvalidOverrideError(PrototypeError, ValueError):
    """Raised when a prototype override cannot be applied to the clone.

    Signals a programming error by the caller: the partially built clone is
    discarded and never returned.

    Attributes:
        name: Offending field or member name.
        target_type: Runtime type of the clone the override was aimed at.
        reason: Human readable explanation.
    """

    def __init__(self, name: str, target_type: type, reason: str) -> None:
        self.name = name
        self.target_type = target_type
        self.reason = reason
        super().__init__(f"{reason} (name={name!r}, type={_type_name(target_type)!r})")

    @classmethod
    def missing_field(cls, name: str, target_type: type) -> InvalidOverrideError:
        return cls(
            name,
            target_type,
            f"Field '{name}' does not exist on type '{_type_name(target_type)}'",
        )

    @classmethod
    def invalid_member_name(cls, name: str, target_type: type) -> InvalidOverrideError:
        return cls(name, target_type, f"Invalid member name '{name}'")

    @classmethod
    def not_callable(cls, name: str, target_type: type, value: object) -> InvalidOverrideError:
        return cls(
            name,
            target_type,
            f"Behavior '{name}' must be callable, got {type(value).__name__}",
        )

    @classmethod
    def no_instance_members(cls, name: str, target_type: type) -> InvalidOverrideError:
        return cls(
            name,
            target_type,
            f"Type '{_type_name(target_type)}' cannot carry per-instance behavior '{name}'",
        )


class CyclicGraphError(PrototypeError):
    """Raised when a value is reached again while it is still being cloned.

    Attributes:
        value_type: Type of the value that closed the cycle.
    """

    def __init__(self, value_type: type) -> None:
        self.value_type = value_type
        super().__init__(
            f"Reference cycle through {_type_name(value_type)}: "
            f"cyclic object graphs cannot be deep-cloned"
        )
