"""Tests for the Prototypable participation mixin.

Critical Invariants:
- copy.copy/copy.deepcopy of a participant is a deep clone
- The reset hook runs exactly once, on the clone, and only for resettable types
- Reset hook errors propagate unchanged
"""

import copy
from dataclasses import dataclass, field

import pytest

from protoclone import (
    InvalidOverrideError,
    Prototypable,
    PrototypableProtocol,
    resettable,
)


@resettable
class Session(Prototypable):
    def __init__(self, user: str) -> None:
        self.user = user
        self.cache = {"token": ["abc"]}
        self.reset_calls = 0

    def reset(self) -> None:
        self.reset_calls += 1
        self.cache = {}


class AdminSession(Session):
    pass


class Plain(Prototypable):
    def __init__(self) -> None:
        self.items = [[1]]
        self.reset_calls = 0

    def reset(self) -> None:  # Not tagged, never called by copies
        self.reset_calls += 1


@resettable(hook="clear_transient")
class Renderer(Prototypable):
    def __init__(self) -> None:
        self.frames = [1, 2]
        self.cleared = 0

    def clear_transient(self) -> None:
        self.cleared += 1
        self.frames = []


@resettable
class Fragile(Prototypable):
    def reset(self) -> None:
        raise RuntimeError("cannot reset fragile state")


@resettable
@dataclass
class Order(Prototypable):
    items: list[str]
    status: str = "new"
    audit: list[str] = field(default_factory=list)

    def reset(self) -> None:
        self.audit = []


@pytest.mark.parametrize("duplicate", [copy.copy, copy.deepcopy])
def test_copy_resets_clone_once(duplicate):
    """CRITICAL: reset runs exactly once on the clone and never on the source."""
    session = Session("ada")

    clone = duplicate(session)

    assert clone.reset_calls == 1
    assert clone.cache == {}
    assert session.reset_calls == 0
    assert session.cache == {"token": ["abc"]}
    assert clone.user == "ada"


def test_copy_is_deep_for_participants():
    plain = Plain()

    clone = copy.copy(plain)

    assert clone.items == [[1]]
    assert clone.items is not plain.items
    assert clone.items[0] is not plain.items[0]


def test_non_resettable_type_not_reset():
    plain = Plain()

    clone = copy.copy(plain)

    assert clone.reset_calls == 0
    assert plain.reset_calls == 0


def test_custom_reset_hook():
    renderer = Renderer()

    clone = copy.copy(renderer)

    assert clone.cleared == 1
    assert clone.frames == []
    assert renderer.frames == [1, 2]


def test_resettable_tag_inherited():
    clone = copy.copy(AdminSession("root"))

    assert type(clone) is AdminSession
    assert clone.reset_calls == 1


def test_reset_error_propagates():
    with pytest.raises(RuntimeError, match="cannot reset fragile state"):
        copy.copy(Fragile())


def test_nested_deepcopy_resets_each_participant():
    sessions = [Session("a"), Session("b")]

    clones = copy.deepcopy(sessions)

    assert [s.reset_calls for s in clones] == [1, 1]
    assert [s.reset_calls for s in sessions] == [0, 0]


def test_prototype_defaults_to_self_without_reset():
    session = Session("ada")

    proto = session.prototype(fields={"user": "grace"})

    assert proto.user == "grace"
    assert proto.reset_calls == 0
    assert proto.cache == session.cache
    assert proto.cache is not session.cache
    assert session.user == "ada"


def test_prototype_of_other_object():
    session = Session("ada")
    other = Plain()

    proto = session.prototype(other)

    assert type(proto) is Plain
    assert proto.items == other.items
    assert proto.items is not other.items


def test_prototype_with_behaviors():
    order = Order(["apple"])

    draft = order.prototype(
        fields={"status": "draft"},
        behaviors={"total": lambda self: len(self.items)},
    )
    draft.items.append("pear")

    assert draft.total() == 2
    assert draft.status == "draft"
    assert order.items == ["apple"]
    assert not hasattr(order, "total")


def test_prototype_rejects_bad_overrides():
    with pytest.raises(InvalidOverrideError):
        Order(["apple"]).prototype(fields={"missing": 1})


def test_dataclass_participant_copy():
    order = Order(["apple"], audit=["created"])

    clone = copy.copy(order)

    assert clone.items == ["apple"]
    assert clone.audit == []
    assert order.audit == ["created"]


def test_participant_matches_protocol():
    assert isinstance(Session("ada"), PrototypableProtocol)
