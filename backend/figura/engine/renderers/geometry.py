"""Plane geometry: points, segments, circles, auxiliary lines, angle marks, edge labels."""

from __future__ import annotations

import math

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import BLUE, MUTED, SLATE, canvas, caption
from figura.models.spec import DiagramType, GeoAngle, GeometryData
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.geometry import Pt, bearing, extent, midpoint, unit
from figura.utils.labels import normalize_label
from figura.utils.mapper import CoordinateMapper

W, H = 360, 280

_RIGHT_ANGLE_TAGS = {"direct_angle", "right"}
_AUX_COLOR = "#94a3b8"


def is_right_angle(value: str | None) -> bool:
    """True for an exact 90 (``90``, ``90°``, ``∠ABC = 90deg``) or a right-angle tag."""
    if not value:
        return False
    v = value.strip().lower()
    if v in _RIGHT_ANGLE_TAGS:
        return True
    if "=" in v:
        v = v.rsplit("=", 1)[1]
    v = v.replace("°", "").replace("deg", "").strip()
    try:
        return math.isclose(float(v), 90.0)
    except ValueError:
        return False


def _angle_neighbours(angle: GeoAngle, data: GeometryData, pts: dict[str, Pt]) -> list[Pt]:
    """Points joined to the vertex by a segment or auxiliary line."""
    found: list[Pt] = []
    edges = list(data.segments) + [(a.start, a.end) for a in data.auxiliary]
    for a, b in edges:
        if a == angle.vertex and b in pts:
            found.append(pts[b])
        elif b == angle.vertex and a in pts:
            found.append(pts[a])
    return found


def _angle_mark(root: SvgElement, vertex: Pt, p1: Pt, p2: Pt, value: str | None, ctx: RenderContext) -> None:
    cfg = ctx.config
    vx, vy = vertex
    if is_right_angle(value):
        r = cfg.right_angle_size
        u1 = unit(p1[0] - vx, p1[1] - vy)
        u2 = unit(p2[0] - vx, p2[1] - vy)
        a = (vx + u1[0] * r, vy + u1[1] * r)
        b = (vx + (u1[0] + u2[0]) * r, vy + (u1[1] + u2[1]) * r)
        c = (vx + u2[0] * r, vy + u2[1] * r)
        root.append(P.path(P.polyline_d([a, b, c]), stroke=SLATE, stroke_width=1.5, cls="right-angle-mark"))
        return

    r = cfg.angle_arc_radius
    a1, a2 = bearing(vertex, p1), bearing(vertex, p2)
    start, end = min(a1, a2), max(a1, a2)
    sx, sy = vx + r * math.cos(start), vy + r * math.sin(start)
    ex, ey = vx + r * math.cos(end), vy + r * math.sin(end)
    large = 1 if end - start > math.pi else 0
    d = f"M{P.fmt(sx)},{P.fmt(sy)} A{P.fmt(r)},{P.fmt(r)} 0 {large},1 {P.fmt(ex)},{P.fmt(ey)}"
    root.append(P.path(d, stroke=SLATE, stroke_width=1.5, cls="angle-arc"))


@renderer(DiagramType.GEOMETRY, data_model=GeometryData)
def render_geometry(data: GeometryData, title: str | None, ctx: RenderContext) -> SvgElement:
    """Points and constructions on a uniformly scaled plane."""
    cfg = ctx.config
    semantic = {p.id: (p.x, p.y) for p in data.points}
    circles = [(semantic[c.center], c.radius, c) for c in data.circles if c.center in semantic]

    bounds = extent(list(semantic.values()), [(center, r) for center, r, _ in circles])
    if bounds is None:
        bounds = (0.0, 0.0, cfg.default_box_width, cfg.default_box_height)
    xmin, ymin, xmax, ymax = bounds
    m = CoordinateMapper.fit(
        (xmin, xmax), (ymin, ymax), W, H, cfg.padding,
        default_width=cfg.default_box_width, default_height=cfg.default_box_height,
    )
    pts = {pid: m.map_point(x, y) for pid, (x, y) in semantic.items()}

    root = canvas(ctx, W, H)

    for center, radius, c in circles:
        cx, cy = pts[c.center]
        root.append(P.circle(cx, cy, abs(radius) * m.scale, stroke=c.color or BLUE, cls="geo-circle"))

    for aux in data.auxiliary:
        if aux.start not in pts or aux.end not in pts:
            continue
        p1, p2 = pts[aux.start], pts[aux.end]
        root.append(P.line(*p1, *p2, stroke=_AUX_COLOR, stroke_width=1.5, dashed=True, cls="geo-auxiliary"))
        if aux.label:
            mx, my = midpoint(p1, p2)
            root.append(P.text(mx + 8, my, normalize_label(aux.label), font_size=11, fill=MUTED, italic=True))

    for a, b in data.segments:
        if a not in pts or b not in pts:
            continue
        root.append(P.line(*pts[a], *pts[b], cls="geo-segment"))

    for angle in data.angles:
        if angle.vertex not in pts:
            continue
        neighbours = _angle_neighbours(angle, data, pts)
        if len(neighbours) < 2:
            continue
        vertex = pts[angle.vertex]
        p1, p2 = neighbours[0], neighbours[1]
        if angle.mark:
            _angle_mark(root, vertex, p1, p2, angle.value, ctx)
        if angle.value and angle.value.strip().lower() not in _RIGHT_ANGLE_TAGS:
            mid = (bearing(vertex, p1) + bearing(vertex, p2)) / 2
            lr = cfg.angle_label_radius
            root.append(P.text(
                vertex[0] + lr * math.cos(mid), vertex[1] + lr * math.sin(mid),
                normalize_label(angle.value), font_size=11, fill=SLATE, cls="angle-label",
            ))

    span_x, span_y = xmax - xmin, ymax - ymin
    for p in data.points:
        px, py = pts[p.id]
        root.append(P.circle(px, py, 3, fill=P.INK, stroke="none", stroke_width=0, cls="geo-point"))
        off_x, off_y = 0.0, -12.0
        if p.y <= ymin + span_y * 0.3:
            off_y = 16.0
        if p.x <= xmin + span_x * 0.2:
            off_x = -10.0
        if p.x >= xmax - span_x * 0.2:
            off_x = 10.0
        root.append(P.text(px + off_x, py + off_y, p.id, font_size=14, bold=True, cls="point-label"))

    for label in data.labels:
        if label.start not in pts or label.end not in pts:
            continue
        p1, p2 = pts[label.start], pts[label.end]
        mx, my = midpoint(p1, p2)
        nx, ny = unit(p2[0] - p1[0], p2[1] - p1[1])
        root.append(P.text(mx - ny * 14, my + nx * 14, normalize_label(label.text), font_size=12, fill=BLUE,
                           cls="edge-label"))

    caption(root, W, H, title)
    return root
