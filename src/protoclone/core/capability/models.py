"""Capability models: per-type tags consulted by the clone engine.

Tags are facts about a type, not data on its instances. A type either has a
tag or not, and tags never change once the class is defined.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_RESET_HOOK = "reset"


@dataclass(slots=True, frozen=True)
class CapabilityMeta:
    """Capability tags recorded for a type."""

    type_name: str
    excluded: bool = False
    """Instances are returned as-is by the engine (singletons, registries)."""

    resettable: bool = False
    """Clones made by native duplication get their reset hook called."""

    reset_hook: str | None = None
    """Name of the method invoked on a fresh clone when resettable."""

    participating: bool = False
    """Type routes its own duplication through the engine (Prototypable)."""

    def merged(self, other: CapabilityMeta) -> CapabilityMeta:
        """Combine tags from two records, keeping the first reset hook found.

        Args:
            other: Record contributed by another registration or an ancestor.

        Returns:
            New record carrying the union of both tag sets.
        """
        return CapabilityMeta(
            type_name=self.type_name,
            excluded=self.excluded or other.excluded,
            resettable=self.resettable or other.resettable,
            reset_hook=self.reset_hook or other.reset_hook,
            participating=self.participating or other.participating,
        )
