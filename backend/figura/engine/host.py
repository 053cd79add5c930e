"""Host document — the diagram containers a batch run renders into.

Containers come either from a list of specs or from HTML, where each one is a
``<div class="diagram-container" data-diagram="{json}">`` element. Rendering
replaces the element's children with the output and sets
``data-rendered="true"``; ``to_html`` splices only the changed containers
back into the original text, leaving everything else byte-for-byte intact.
"""

from __future__ import annotations

import html
import json
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from figura.models.spec import DiagramSpec
from figura.models.svg_document import RenderOutput
from figura.svg.serializer import serialize_output

CONTAINER_CLASS = "diagram-container"

_DIV_OPEN_RE = re.compile(r"<div\b[^>]*>", re.IGNORECASE)
_DIV_TOKEN_RE = re.compile(r"<div\b[^>]*>|</div\s*>", re.IGNORECASE)
_ATTR_RE = re.compile(r"""([\w:.-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_RENDERED_ATTR_RE = re.compile(r"""\sdata-rendered\s*=\s*(?:"[^"]*"|'[^']*')""", re.IGNORECASE)


@dataclass
class DiagramContainer:
    """One diagram slot: its spec payload, rendered flag and attached output."""

    spec_source: str | dict[str, Any]
    rendered: bool = False
    output: RenderOutput | None = None
    # (start, end) of the whole element in the source HTML
    source_span: tuple[int, int] | None = None
    open_tag: str = ""

    def load_spec(self) -> DiagramSpec:
        """Parse the payload; raises ValueError (incl. JSONDecodeError) or ValidationError."""
        raw = json.loads(self.spec_source) if isinstance(self.spec_source, str) else self.spec_source
        if not isinstance(raw, dict):
            raise ValueError("Diagram payload is not a JSON object")
        return DiagramSpec.model_validate(raw)

    def attach(self, output: RenderOutput) -> None:
        """Make ``output`` the sole child and mark the container rendered."""
        self.output = output
        self.rendered = True

    @property
    def markup(self) -> str:
        return serialize_output(self.output) if self.output is not None else ""

    def opening_tag(self) -> str:
        if not self.open_tag:
            payload = self.spec_source if isinstance(self.spec_source, str) else json.dumps(
                self.spec_source, ensure_ascii=False)
            return (
                f'<div class="{CONTAINER_CLASS}" data-diagram="{html.escape(payload, quote=True)}" '
                f'data-rendered="{"true" if self.rendered else "false"}">'
            )
        if not self.rendered:
            return self.open_tag
        tag = _RENDERED_ATTR_RE.sub("", self.open_tag)
        return tag[:-1].rstrip() + ' data-rendered="true">'


def _attributes(tag: str) -> dict[str, str]:
    return {
        m.group(1).lower(): html.unescape(m.group(2) if m.group(2) is not None else m.group(3))
        for m in _ATTR_RE.finditer(tag)
    }


def _element_end(text: str, pos: int) -> tuple[int, int] | None:
    """(inner_end, element_end) of the div whose opening tag ends at ``pos``."""
    depth = 1
    for m in _DIV_TOKEN_RE.finditer(text, pos):
        if m.group(0).startswith("</"):
            depth -= 1
            if depth == 0:
                return m.start(), m.end()
        else:
            depth += 1
    return None


@dataclass
class HostDocument:
    containers: list[DiagramContainer] = field(default_factory=list)
    source: str | None = None

    @classmethod
    def from_specs(cls, specs: Iterable[DiagramSpec | dict[str, Any] | str]) -> HostDocument:
        containers = []
        for spec in specs:
            if isinstance(spec, DiagramSpec):
                spec = spec.model_dump()
            containers.append(DiagramContainer(spec_source=spec))
        return cls(containers=containers)

    @classmethod
    def from_html(cls, text: str) -> HostDocument:
        """Find every ``.diagram-container[data-diagram]`` div, in document order."""
        containers: list[DiagramContainer] = []
        last_end = 0
        for m in _DIV_OPEN_RE.finditer(text):
            if m.start() < last_end:
                continue
            attrs = _attributes(m.group(0))
            if CONTAINER_CLASS not in attrs.get("class", "").split() or "data-diagram" not in attrs:
                continue
            ends = _element_end(text, m.end())
            if ends is None:
                continue
            containers.append(DiagramContainer(
                spec_source=attrs["data-diagram"],
                rendered=attrs.get("data-rendered", "").lower() == "true",
                source_span=(m.start(), ends[1]),
                open_tag=m.group(0),
            ))
            last_end = ends[1]
        return cls(containers=containers, source=text)

    @property
    def pending(self) -> list[DiagramContainer]:
        return [c for c in self.containers if not c.rendered]

    def to_html(self) -> str:
        if self.source is None:
            return "\n".join(f"{c.opening_tag()}{c.markup}</div>" for c in self.containers)

        result = self.source
        # splice back to front so earlier spans stay valid
        for c in sorted(self.containers, key=lambda c: c.source_span[0], reverse=True):
            if c.output is None or c.source_span is None:
                continue
            start, end = c.source_span
            result = result[:start] + f"{c.opening_tag()}{c.markup}</div>" + result[end:]
        return result
