"""Coordinate plane with vectors, straight lines and points."""

from __future__ import annotations

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import (
    BLUE, GREEN, ORANGE, PURPLE, RED, MarkerSet, axes_and_grid, canvas, caption,
)
from figura.models.spec import CoordinateData, DiagramType
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.geometry import clip_segment, midpoint
from figura.utils.labels import normalize_label
from figura.utils.mapper import CoordinateMapper

W, H = 360, 300

LINE_COLORS = [GREEN, PURPLE, ORANGE]
VECTOR_COLORS = [BLUE, RED, GREEN, PURPLE]


@renderer(DiagramType.COORDINATE, data_model=CoordinateData)
def render_coordinate(data: CoordinateData, title: str | None, ctx: RenderContext) -> SvgElement:
    cfg = ctx.config
    m = CoordinateMapper.stretch(
        data.x_range, data.y_range, W, H, cfg.padding,
        default_x=cfg.coordinate_range, default_y=cfg.coordinate_range,
    )
    root = canvas(ctx, W, H)
    markers = MarkerSet(root, ctx)
    axes_and_grid(root, m, 1.0, markers, cfg.max_grid_lines)

    (xlo, xhi), (ylo, yhi) = m.x_range, m.y_range
    for i, ln in enumerate(data.lines):
        color = ln.color or LINE_COLORS[i % len(LINE_COLORS)]
        seen = clip_segment(
            (xlo, ln.slope * xlo + ln.intercept),
            (xhi, ln.slope * xhi + ln.intercept),
            (xlo, ylo, xhi, yhi),
        )
        if seen is None:
            continue
        (x1, y1), (x2, y2) = seen
        p1, p2 = m.map_point(x1, y1), m.map_point(x2, y2)
        root.append(P.line(*p1, *p2, stroke=color, stroke_width=1.5, dashed=ln.style == "dashed", cls="plane-line"))
        if ln.label:
            root.append(P.text(p2[0] - 20, p2[1] - 10, normalize_label(ln.label), font_size=11, fill=color,
                               italic=True))

    for i, vec in enumerate(data.vectors):
        if len(vec.start) < 2 or len(vec.end) < 2:
            continue
        color = vec.color or VECTOR_COLORS[i % len(VECTOR_COLORS)]
        p1 = m.map_point(vec.start[0], vec.start[1])
        p2 = m.map_point(vec.end[0], vec.end[1])
        root.append(P.line(*p1, *p2, stroke=color, stroke_width=2.5, marker_end=markers.get(color), cls="vector"))
        if vec.label:
            mx, my = midpoint(p1, p2)
            root.append(P.text(mx + 10, my - 10, normalize_label(vec.label), font_size=13, fill=color, bold=True))

    for p in data.points:
        if not m.contains(p.x, p.y):
            continue
        px, py = m.map_point(p.x, p.y)
        root.append(P.circle(px, py, 4, fill=P.INK, stroke="none", stroke_width=0, cls="point-solid"))
        if p.label:
            root.append(P.text(px + 10, py - 10, normalize_label(p.label), font_size=11))

    caption(root, W, H, title)
    return root
