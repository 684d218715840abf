from dataclasses import dataclass, field
from typing import Any

WIDTH_FULL = 24
WIDTH_HALF = 12


class View:
    """
    Base class for all view nodes.

    Rendering backends translate the node tree to their own widgets; the
    plain-dict form returned by to_dict() is the common interchange shape.
    """

    kind: str = "view"

    def to_dict(self) -> dict[str, Any]:
        raise NotImplementedError


@dataclass
class Text(View):
    value: str
    kind = "text"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "value": self.value}


@dataclass
class MarkdownText(View):
    value: str
    kind = "markdown"

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "value": self.value}


@dataclass
class Card(View):
    title: str = ""
    body: View | None = None
    kind = "card"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "title": self.title,
            "body": self.body.to_dict() if self.body else None,
        }


@dataclass
class SummarySection:
    header: str
    content: View

    def to_dict(self) -> dict[str, Any]:
        return {"header": self.header, "content": self.content.to_dict()}


@dataclass
class Summary(View):
    title: str
    sections: list[SummarySection] = field(default_factory=list)
    kind = "summary"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "title": self.title,
            "sections": [s.to_dict() for s in self.sections],
        }


@dataclass
class FlexItem:
    width: int
    view: View

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "view": self.view.to_dict()}


@dataclass
class FlexLayout(View):
    title: str = ""
    sections: list[list[FlexItem]] = field(default_factory=list)
    kind = "flexlayout"

    def add_section(self, *items: FlexItem) -> None:
        self.sections.append(list(items))

    def items(self) -> list[FlexItem]:
        return [item for section in self.sections for item in section]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "title": self.title,
            "sections": [[i.to_dict() for i in s] for s in self.sections],
        }
