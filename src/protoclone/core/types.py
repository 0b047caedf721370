"""Core type definitions for protoclone."""

from collections.abc import Callable, Mapping
from typing import Any

type Clone[T] = T
"""Type alias indicating a value is an independently owned clone.

When you see `Clone[T]` in a return type, every compound sub-value of the
result is freshly allocated. Mutating the clone never affects its source,
except through values that are shared on purpose (callables, opaque handles,
non-prototypable objects).
"""

type FieldOverrides = Mapping[str, Any]
"""Field name -> replacement value, applied to the top-level clone only."""

type BehaviorOverrides = Mapping[str, Callable[..., Any]]
"""Member name -> callable, bound to the top-level clone as its receiver."""
