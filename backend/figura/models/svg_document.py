"""Rendered output models — SVG element tree, collaborator markup, placeholders."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, Field


class SvgElement(BaseModel):
    """One node of a rendered SVG tree. The root node has tag ``svg``."""

    tag: str
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list[SvgElement] = Field(default_factory=list)
    text: str | None = None

    def append(self, child: SvgElement) -> SvgElement:
        self.children.append(child)
        return child

    def insert(self, index: int, child: SvgElement) -> SvgElement:
        self.children.insert(index, child)
        return child

    def iter(self, tag: str | None = None):
        """Depth-first walk over this node and its descendants."""
        if tag is None or self.tag == tag:
            yield self
        for child in self.children:
            yield from child.iter(tag)

    def find_by_class(self, class_name: str) -> list[SvgElement]:
        return [
            el for el in self.iter()
            if class_name in el.attributes.get("class", "").split()
        ]

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)


class RawMarkup(BaseModel):
    """Markup produced by an external collaborator, attached verbatim."""

    markup: str
    media_type: str = "image/svg+xml"
    source: str = ""


class Placeholder(BaseModel):
    """Short visible text shown instead of a graphic."""

    message: str
    kind: Literal["error", "note"] = "error"


RenderOutput = Union[SvgElement, RawMarkup, Placeholder]


def output_kind(output: RenderOutput) -> str:
    if isinstance(output, SvgElement):
        return "svg"
    if isinstance(output, RawMarkup):
        return "markup"
    return output.kind


class SvgSummary(BaseModel):
    """What a rendered SVG contains (for API responses and checks)."""

    width: float | None = None
    height: float | None = None
    element_count: int = 0
    tag_counts: dict[str, int] = Field(default_factory=dict)
    class_counts: dict[str, int] = Field(default_factory=dict)
    # (xmin, ymin, xmax, ymax) over all <path> data
    path_bounds: tuple[float, float, float, float] | None = None
