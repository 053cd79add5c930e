"""Shared canvas scaffolding for the domain renderers."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.labels import normalize_label
from figura.utils.mapper import CoordinateMapper

if TYPE_CHECKING:
    from figura.engine.context import RenderContext

BACKGROUND = "#fafbfc"
CAPTION = "#94a3b8"
MUTED = "#64748b"
SLATE = "#475569"
BLUE = "#2563eb"
RED = "#dc2626"
GREEN = "#16a34a"
PURPLE = "#9333ea"
ORANGE = "#ea580c"
GRID = "#e2e8f0"


def canvas(ctx: RenderContext, width: float, height: float) -> SvgElement:
    """Root <svg> with a unique id and the rounded background panel."""
    root = P.svg_root(width, height)
    root.attributes["id"] = ctx.new_id()
    root.append(P.rect(0, 0, width, height, fill=BACKGROUND, stroke="none", stroke_width=0, rx=8,
                       cls="canvas-bg"))
    return root


def caption(root: SvgElement, width: float, height: float, title: str | None) -> None:
    """Title caption along the bottom edge, if there is a title."""
    if title:
        root.append(P.text(width / 2, height - 8, normalize_label(title), font_size=11, fill=CAPTION,
                           cls="diagram-title"))


class MarkerSet:
    """Arrowhead markers for one root, one per (colour, head style)."""

    def __init__(self, root: SvgElement, ctx: RenderContext) -> None:
        self.root = root
        self.ctx = ctx
        self._ids: dict[tuple[str, bool], str] = {}

    def get(self, color: str = P.INK, open_head: bool = False) -> str:
        key = (color, open_head)
        if key not in self._ids:
            self._ids[key] = P.add_arrow_marker(self.root, self.ctx.new_id("arrow"), color, open_head)
        return self._ids[key]


def grid_values(lo: float, hi: float, step: float, max_lines: int) -> list[float]:
    """Multiples of ``step`` inside [lo, hi]; the step doubles until at most ``max_lines`` fit."""
    if not (step > 0 and math.isfinite(step)):
        step = 1.0
    while (hi - lo) / step > max_lines:
        step *= 2
    first = math.ceil(lo / step - 1e-9)
    last = math.floor(hi / step + 1e-9)
    return [k * step for k in range(first, last + 1)]


def axes_and_grid(root: SvgElement, m: CoordinateMapper, step: float, markers: MarkerSet, max_lines: int) -> None:
    """Light grid with tick labels plus arrowed x/y axes through the origin.

    An axis whose zero lies outside the range is pinned to the nearest edge.
    """
    (xlo, xhi), (ylo, yhi) = m.x_range, m.y_range
    axis_y = min(max(0.0, ylo), yhi)
    axis_x = min(max(0.0, xlo), xhi)

    for x in grid_values(xlo, xhi, step, max_lines):
        if abs(x) < 1e-9:
            continue
        px = m.map_x(x)
        root.append(P.line(px, m.map_y(ylo), px, m.map_y(yhi), stroke=GRID, stroke_width=0.5, cls="grid-line"))
        root.append(P.text(px, m.map_y(axis_y) + 16, P.fmt(x), font_size=10, fill=CAPTION, cls="tick-label"))
    for y in grid_values(ylo, yhi, step, max_lines):
        if abs(y) < 1e-9:
            continue
        py = m.map_y(y)
        root.append(P.line(m.map_x(xlo), py, m.map_x(xhi), py, stroke=GRID, stroke_width=0.5, cls="grid-line"))
        root.append(P.text(m.map_x(axis_x) - 16, py, P.fmt(y), font_size=10, fill=CAPTION, cls="tick-label"))

    arrow = markers.get(P.INK)
    ox, oy = m.map_x(axis_x), m.map_y(axis_y)
    root.append(P.line(m.map_x(xlo), oy, m.map_x(xhi), oy, stroke_width=1.5, marker_end=arrow, cls="axis"))
    root.append(P.line(ox, m.map_y(ylo), ox, m.map_y(yhi), stroke_width=1.5, marker_end=arrow, cls="axis"))
    root.append(P.text(m.map_x(xhi) - 4, oy + 16, "x", font_size=12, bold=True))
    root.append(P.text(ox + 14, m.map_y(yhi) + 4, "y", font_size=12, bold=True))
    root.append(P.text(ox - 10, oy + 14, "O", font_size=10, fill=CAPTION))
