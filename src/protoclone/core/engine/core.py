"""Recursive deep-clone engine.

Usage:
    engine = CloneEngine()

    clone = engine.deep_clone(obj)          # any value
    rows = engine.deep_clone_array(rows)    # containers only
    engine.classify(open("f"))              # ValueKind.OPAQUE

Every value is classified on its runtime type, in this order (first match
wins): primitive, callable, opaque handle, excluded, container, foreign,
plain object. Only containers, foreign objects and plain objects produce new
storage; everything else is shared by reference.

Gotcha: shared substructure is not preserved. Two fields pointing at the same
list end up pointing at two distinct cloned lists.
"""

from __future__ import annotations

import copy
import datetime
import functools
import inspect
import io
import logging
import mmap
import re
import selectors
import socket
import subprocess
import threading
import types
import weakref
from collections import UserDict, UserList, defaultdict, deque
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, TypeVar
from uuid import UUID

import structlog

from protoclone.config import CloneSettings
from protoclone.core.capability import CapabilityRegistry, get_registry
from protoclone.core.engine.models import TypeDescriptor, ValueKind
from protoclone.core.engine.operations import allocate, describe, is_native_type, native_base
from protoclone.core.errors import CyclicGraphError
from protoclone.core.types import Clone

T = TypeVar("T")

logger = structlog.get_logger(__name__)

PRIMITIVE_TYPES: tuple[type, ...] = (
    type(None),
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    datetime.tzinfo,
    UUID,
    range,
    slice,
    type(Ellipsis),
    type(NotImplemented),
    re.Pattern,
    Enum,
)

OPAQUE_TYPES: tuple[type, ...] = (
    io.IOBase,
    socket.socket,
    mmap.mmap,
    memoryview,
    types.ModuleType,
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    types.FrameType,
    types.TracebackType,
    types.CodeType,
    weakref.ReferenceType,
    type(threading.Lock()),
    type(threading.RLock()),
    threading.Condition,
    threading.Event,
    threading.Semaphore,
    threading.Thread,
    subprocess.Popen,
    selectors.BaseSelector,
    logging.Logger,
    logging.Handler,
)

CONTAINER_TYPES: tuple[type, ...] = (
    dict,
    list,
    tuple,
    set,
    frozenset,
    deque,
    bytearray,
    UserDict,
    UserList,
)


def _is_callable_value(value: Any) -> bool:
    return isinstance(value, (type, functools.partial)) or inspect.isroutine(value)


def _defines_duplication(cls: type) -> bool:
    return hasattr(cls, "__deepcopy__") or hasattr(cls, "__copy__")


class CloneEngine:
    """Deep-clones arbitrary object graphs without running constructors.

    The engine keeps no reference to what it clones or produces; each call
    allocates a new graph. Concurrent calls on disjoint graphs are safe, calls
    racing with a writer on the same source graph are not.

    Args:
        settings: Engine settings. Loaded from the environment when None.
        registry: Capability registry. The process-wide one when None.
        opaque_types: Extra types to share by reference, like open handles.
    """

    def __init__(
        self,
        settings: CloneSettings | None = None,
        registry: CapabilityRegistry | None = None,
        opaque_types: tuple[type, ...] = (),
    ) -> None:
        self._settings = settings or CloneSettings()
        self._registry = registry or get_registry()
        self._opaque_types = OPAQUE_TYPES + tuple(opaque_types)

    @property
    def settings(self) -> CloneSettings:
        """Settings the engine was built with."""
        return self._settings

    @property
    def registry(self) -> CapabilityRegistry:
        """Capability registry consulted for exclusion and participation."""
        return self._registry

    def register_opaque(self, cls: type) -> None:
        """Share instances of `cls` by reference from now on.

        Args:
            cls: Handle-like type with no meaningful duplication.
        """
        if not issubclass(cls, self._opaque_types):
            self._opaque_types = self._opaque_types + (cls,)

    def classify(self, value: Any) -> ValueKind:
        """Determine how `value` is cloned, from its runtime type.

        Args:
            value: Any value.

        Returns:
            The first matching category.
        """
        if isinstance(value, PRIMITIVE_TYPES):
            return ValueKind.PRIMITIVE
        if _is_callable_value(value):
            return ValueKind.CALLABLE
        if isinstance(value, self._opaque_types):
            return ValueKind.OPAQUE

        cls = type(value)
        meta = self._registry.resolve(cls)
        if meta.excluded:
            return ValueKind.EXCLUDED
        if isinstance(value, CONTAINER_TYPES):
            return ValueKind.CONTAINER
        if _defines_duplication(cls) and not meta.participating:
            return ValueKind.FOREIGN
        if is_native_type(cls) and not cls.__dictoffset__:
            # Native objects without copy support or an instance __dict__
            return ValueKind.OPAQUE
        return ValueKind.OBJECT

    def deep_clone(self, value: T) -> Clone[T]:
        """Produce an independently owned copy of `value`.

        Args:
            value: Any acyclic value.

        Returns:
            Behaviorally equivalent value sharing no compound storage with
            the source, except shared-by-reference categories.

        Raises:
            CyclicGraphError: If the graph contains a reference cycle and
                cycle detection is enabled.
        """
        return self._clone(value, set())

    def deep_clone_array(self, container: T) -> Clone[T]:
        """Deep-clone a container, preserving its type, order and keys.

        Args:
            container: list, tuple, dict, set, frozenset, deque, bytearray,
                or a subclass of one of those.

        Returns:
            New container of the same runtime type with cloned elements.

        Raises:
            TypeError: If `container` is not a container.
            CyclicGraphError: If the container reaches itself.
        """
        if not isinstance(container, CONTAINER_TYPES):
            raise TypeError(
                f"deep_clone_array expects a container, got {type(container).__name__}"
            )
        return self._clone(container, set())

    def _clone(self, value: Any, active: set[int]) -> Any:
        kind = self.classify(value)
        if kind.shared:
            return value
        if not self._settings.detect_cycles:
            return self._dispatch(kind, value, active)

        marker = id(value)
        if marker in active:
            logger.warning("clone_cycle_detected", value_type=type(value).__qualname__)
            raise CyclicGraphError(type(value))
        active.add(marker)
        try:
            return self._dispatch(kind, value, active)
        finally:
            active.discard(marker)

    def _dispatch(self, kind: ValueKind, value: Any, active: set[int]) -> Any:
        if kind is ValueKind.CONTAINER:
            return self._clone_container(value, active)
        if kind is ValueKind.FOREIGN and (
            self._settings.delegate_foreign or is_native_type(type(value))
        ):
            return self._delegate(value)
        return self._clone_object(value, active)

    def _delegate(self, value: Any) -> Any:
        cls = type(value)
        if hasattr(cls, "__deepcopy__"):
            logger.debug(
                "foreign_clone_delegated", value_type=cls.__qualname__, operator="deepcopy"
            )
            return copy.deepcopy(value)
        logger.debug("foreign_clone_delegated", value_type=cls.__qualname__, operator="copy")
        return copy.copy(value)

    def _clone_items(self, items: Any, active: set[int]) -> list[Any]:
        return [self._clone(item, active) for item in items]

    def _clone_container(self, value: Any, active: set[int]) -> Any:
        if isinstance(value, (UserDict, UserList)):
            # Pure-Python wrappers: their state lives in ordinary fields
            return self._clone_object(value, active)

        cls = type(value)
        base = native_base(cls)
        if isinstance(value, (tuple, frozenset)):
            clone = base.__new__(cls, self._clone_items(value, active))
        else:
            clone = base.__new__(cls)
            if isinstance(value, dict):
                pairs = [(key, self._clone(item, active)) for key, item in value.items()]
                if isinstance(value, defaultdict):
                    base.__init__(clone, value.default_factory, pairs)
                else:
                    base.__init__(clone, pairs)
            elif isinstance(value, deque):
                base.__init__(clone, self._clone_items(value, active), value.maxlen)
            else:
                base.__init__(clone, self._clone_items(value, active))

        if not is_native_type(cls):
            self._copy_fields(value, clone, describe(cls), active)
        return clone

    def _clone_object(self, value: Any, active: set[int]) -> Any:
        cls = type(value)
        if isinstance(value, BaseException):
            clone = self._clone_exception(value, active)
        else:
            clone = allocate(cls)
        self._copy_fields(value, clone, describe(cls), active)
        return clone

    def _clone_exception(self, value: BaseException, active: set[int]) -> BaseException:
        # args and chaining live in the native exception struct, not in __dict__
        cls = type(value)
        args = tuple(self._clone_items(value.args, active))
        clone = native_base(cls).__new__(cls, *args)
        object.__setattr__(clone, "args", args)
        object.__setattr__(clone, "__cause__", self._clone(value.__cause__, active))
        object.__setattr__(clone, "__context__", self._clone(value.__context__, active))
        object.__setattr__(clone, "__traceback__", value.__traceback__)
        object.__setattr__(clone, "__suppress_context__", value.__suppress_context__)
        return clone

    def _copy_fields(
        self, source: Any, clone: Any, descriptor: TypeDescriptor, active: set[int]
    ) -> None:
        cls = type(source)
        for _, member in descriptor.members(cls):
            try:
                item = member.__get__(source, cls)
            except AttributeError:
                continue  # unset slot
            member.__set__(clone, self._clone_field(item, source, clone, active))

        if descriptor.has_dict:
            source_fields = object.__getattribute__(source, "__dict__")
            target_fields = object.__getattribute__(clone, "__dict__")
            for name, item in source_fields.items():
                target_fields[name] = self._clone_field(item, source, clone, active)

    def _clone_field(self, item: Any, source: Any, clone: Any, active: set[int]) -> Any:
        if (
            self._settings.rebind_behaviors
            and isinstance(item, types.MethodType)
            and item.__self__ is source
        ):
            return types.MethodType(item.__func__, clone)
        return self._clone(item, active)
