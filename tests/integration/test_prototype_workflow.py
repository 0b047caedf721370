"""Integration: building documents from a template prototype.

Exercises the whole stack together: tags, engine categories, overrides and
the participation mixin on one realistic object graph.
"""

import copy
import io
from dataclasses import dataclass, field

import pytest

from protoclone import (
    CyclicGraphError,
    InvalidOverrideError,
    Prototypable,
    create_prototype,
    non_prototypable,
    resettable,
)


@non_prototypable
class TemplateRegistry:
    def __init__(self) -> None:
        self.templates: dict[str, "Document"] = {}

    def add(self, name: str, document: "Document") -> None:
        self.templates[name] = document


@dataclass
class Section:
    title: str
    paragraphs: list[str] = field(default_factory=list)


@resettable
@dataclass
class Document(Prototypable):
    title: str
    sections: list[Section]
    registry: TemplateRegistry
    sink: io.StringIO
    formatter: object = str.upper
    revision: int = 0
    parent: "Document | None" = None

    def render(self) -> str:
        body = "\n".join(self.formatter(s.title) for s in self.sections)
        return f"{self.title}\n{body}"

    def reset(self) -> None:
        self.revision = 0


def _publish(document: Document) -> str:
    document.sink.write(document.render())
    return document.title


@pytest.fixture
def template():
    registry = TemplateRegistry()
    document = Document(
        title="Quarterly report",
        sections=[Section("summary", ["draft"]), Section("numbers")],
        registry=registry,
        sink=io.StringIO(),
        revision=7,
    )
    registry.add("report", document)
    return document


def test_prototype_from_template(template):
    report = template.prototype(
        fields={"title": "Q3 report"},
        behaviors={"publish": _publish},
    )
    report.sections[0].paragraphs.append("final")

    assert report.publish() == "Q3 report"
    assert template.sink.getvalue().startswith("Q3 report\nSUMMARY")
    assert report.sink is template.sink
    assert report.registry is template.registry
    assert report.formatter is template.formatter
    assert template.sections[0].paragraphs == ["draft"]
    assert report.revision == 7
    assert not hasattr(template, "publish")


def test_copy_resets_revision(template):
    fresh = copy.copy(template)

    assert fresh.revision == 0
    assert template.revision == 7
    assert fresh.sections == template.sections
    assert fresh.sections is not template.sections


def test_module_function_and_bad_override(template):
    with pytest.raises(InvalidOverrideError, match="does not exist"):
        create_prototype(template, {"author": "ada"})

    report = create_prototype(template, {"parent": None})
    assert report.title == template.title


def test_cyclic_document_rejected(template):
    template.parent = template

    with pytest.raises(CyclicGraphError):
        template.prototype()
