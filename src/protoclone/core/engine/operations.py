"""Pure functions for type introspection and constructor-free allocation.

These are the reflection facilities the engine needs: enumerating stored
fields across the MRO and allocating instances without running any
`__new__`/`__init__` defined in Python.
"""

from __future__ import annotations

import inspect
import weakref
from dataclasses import fields, is_dataclass
from typing import Any, ClassVar, get_origin

from protoclone.core.engine.models import TypeDescriptor

_HEAPTYPE_FLAG = 1 << 9
_RESERVED_SLOTS = frozenset({"__dict__", "__weakref__"})


def is_native_type(cls: type) -> bool:
    """Check if a type is implemented natively (builtins, C extensions).

    Args:
        cls: Type to check.

    Returns:
        True for static/extension types, False for classes defined in Python.
    """
    return not cls.__flags__ & _HEAPTYPE_FLAG


def native_base(cls: type) -> type:
    """Get the closest natively implemented class in the MRO.

    Args:
        cls: Type to inspect.

    Returns:
        The first native type in `cls.__mro__` (`object` at the latest).
    """
    for klass in cls.__mro__:
        if is_native_type(klass):
            return klass
    return object


def allocate[T](cls: type[T]) -> T:
    """Allocate an empty instance without running Python-level constructors.

    The native base's `__new__` creates the instance layout; no `__new__` or
    `__init__` written in Python is invoked.

    Args:
        cls: Type to instantiate.

    Returns:
        Uninitialized instance of `cls`.
    """
    return native_base(cls).__new__(cls)  # type: ignore[no-any-return]


def mangle(cls: type, name: str) -> str:
    """Apply private name mangling as the compiler does inside `cls`'s body."""
    if not name.startswith("__") or name.endswith("__"):
        return name
    stripped = cls.__name__.lstrip("_")
    if not stripped:
        return name
    return f"_{stripped}{name}"


def _slot_names(cls: type) -> tuple[str, ...]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return tuple(slots)


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _annotated_names(cls: type) -> set[str]:
    names: set[str] = set()
    for klass in cls.__mro__:
        try:
            annotations = inspect.get_annotations(klass)
        except NameError:
            continue  # unresolved forward reference, no names to read
        names.update(
            name for name, annotation in annotations.items() if not _is_class_var(annotation)
        )
    return names


def _declared_names(cls: type, has_dict: bool) -> set[str]:
    names: set[str] = set()
    if is_dataclass(cls):
        names.update(f.name for f in fields(cls))
    model_fields = getattr(cls, "model_fields", None)
    if isinstance(model_fields, dict):
        names.update(model_fields)
    if has_dict:
        # Annotated instance fields may still be unset and live on the class
        names.update(_annotated_names(cls))
    return names


_descriptors: weakref.WeakKeyDictionary[type, TypeDescriptor] = weakref.WeakKeyDictionary()


def describe(cls: type) -> TypeDescriptor:
    """Build the structural descriptor of a type.

    Walks the whole MRO so slots of every ancestor, including private
    (name-mangled) ones, are part of the description. Descriptors are cached
    per type and released together with the type.

    Args:
        cls: Runtime type to describe.

    Returns:
        Cached TypeDescriptor for `cls`.
    """
    descriptor = _descriptors.get(cls)
    if descriptor is None:
        descriptor = _descriptors[cls] = _build_descriptor(cls)
    return descriptor


def _build_descriptor(cls: type) -> TypeDescriptor:
    slots: list[tuple[str, int]] = []
    prefixes: list[str] = []
    for index, klass in enumerate(cls.__mro__):
        stripped = klass.__name__.lstrip("_")
        if stripped and f"_{stripped}" not in prefixes:
            prefixes.append(f"_{stripped}")
        for name in _slot_names(klass):
            if name in _RESERVED_SLOTS:
                continue
            stored = mangle(klass, name)
            member = klass.__dict__.get(stored)
            if member is not None and hasattr(member, "__set__"):
                slots.append((stored, index))

    has_dict = cls.__dictoffset__ != 0
    declared = _declared_names(cls, has_dict) | {name for name, _ in slots}
    return TypeDescriptor(
        slots=tuple(slots),
        has_dict=has_dict,
        declared=frozenset(declared),
        private_prefixes=tuple(prefixes),
    )
