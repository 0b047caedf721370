"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from dataclasses import dataclass, field

from protoclone import CapabilityRegistry, CloneEngine, CloneSettings, Prototyper


@pytest.fixture
def settings():
    """Default engine settings, independent of the environment."""
    return CloneSettings(detect_cycles=True, delegate_foreign=True, rebind_behaviors=True)


@pytest.fixture
def engine(settings):
    """Fresh CloneEngine backed by the process-wide capability registry."""
    return CloneEngine(settings=settings)


@pytest.fixture
def prototyper(engine):
    """Prototyper sharing the fixture engine."""
    return Prototyper(engine=engine)


@pytest.fixture
def registry():
    """Empty CapabilityRegistry for isolated tagging tests."""
    return CapabilityRegistry()


@dataclass
class FixtureProfile:
    name: str
    tags: list[str] = field(default_factory=list)
    settings: dict[str, list[int]] = field(default_factory=dict)

    def describe(self) -> str:
        return f"profile {self.name}"


@pytest.fixture
def profile_cls():
    return FixtureProfile


@pytest.fixture
def profile():
    return FixtureProfile("ada", ["admin"], {"limits": [1, 2]})
