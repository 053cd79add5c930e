"""Free-body diagrams on flat ground or an inclined plane.

On an incline the block lives in a group translated to the slope midpoint and
rotated by ``-angle``, so slope-relative forces (normal, friction along the
slope, applied) are plain local axes. World-relative forces (gravity, up,
left, right) are rotated into the local frame before drawing. Labels stay
outside the group so their text is never tilted.
"""

from __future__ import annotations

import math

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import CAPTION, MUTED, RED, SLATE, MarkerSet, canvas, caption
from figura.models.spec import DiagramType, ForceData, ForceVector
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.geometry import Pt, rotate
from figura.utils.labels import normalize_label

W, H = 360, 280

_BLOCK_FILL = "#dbeafe"
_BLOCK_STROKE = "#2563eb"
_SURFACE_FILL = "#f1f5f9"
_MAX_INCLINE = 75.0

# Unit directions in world (canvas) coordinates, y down
_WORLD_DIRECTIONS: dict[str, Pt] = {
    "down": (0.0, 1.0),
    "gravity": (0.0, 1.0),
    "up": (0.0, -1.0),
    "left": (-1.0, 0.0),
    "right": (1.0, 0.0),
    "friction_left": (-1.0, 0.0),
    "friction_right": (1.0, 0.0),
}

# Unit directions relative to the slope (local x runs up the slope)
_SLOPE_DIRECTIONS: dict[str, Pt] = {
    "normal": (0.0, -1.0),
    "friction_up": (1.0, 0.0),
    "friction_down": (-1.0, 0.0),
    "applied": (1.0, 0.0),
}


def force_length(f: ForceVector, ctx: RenderContext) -> float:
    return ctx.config.force_lengths.get(f.magnitude, ctx.config.default_force_length)


def _label(root: SvgElement, tip: Pt, delta: Pt, text: str) -> None:
    if not text:
        return
    dx, dy = delta
    ox = 10 if dx > 1e-6 else -10 if dx < -1e-6 else 8
    oy = 16 if dy > 1e-6 else -8 if dy < -1e-6 else 0
    root.append(P.text(tip[0] + ox, tip[1] + oy, normalize_label(text), font_size=13, fill=RED,
                       bold=True, italic=True, cls="force-label"))


def _flat(root: SvgElement, data: ForceData, ctx: RenderContext, arrow: str) -> None:
    cx, ground = W / 2, H / 2 + 40
    root.append(P.line(40, ground, W - 40, ground, stroke=SLATE, cls="surface"))
    for x in range(50, W - 40, 14):
        root.append(P.line(x, ground, x - 6, ground + 8, stroke=CAPTION, stroke_width=1))

    bw, bh = 60, 44
    top = ground - bh
    root.append(P.rect(cx - bw / 2, top, bw, bh, fill=_BLOCK_FILL, stroke=_BLOCK_STROKE, rx=4, cls="body"))
    root.append(P.text(cx, ground - bh / 2, normalize_label(data.body.label or "m"), bold=True))

    for f in data.forces:
        length = force_length(f, ctx)
        direction = f.direction.strip().lower()
        if direction in ("down", "gravity"):
            origin, delta = (cx, ground), (0.0, length)
        elif direction in ("up", "normal"):
            origin, delta = (cx, top), (0.0, -length)
        elif direction in ("left", "friction_left", "friction_down"):
            origin, delta = (cx, ground - bh / 2), (-length, 0.0)
        elif direction in ("right", "friction_right", "friction_up", "applied"):
            origin, delta = (cx, ground - bh / 2), (length, 0.0)
        else:
            continue
        tip = (origin[0] + delta[0], origin[1] + delta[1])
        root.append(P.line(*origin, *tip, stroke=RED, stroke_width=2.5, marker_end=arrow, cls="force-arrow"))
        _label(root, tip, delta, f.label)


def _incline(root: SvgElement, data: ForceData, ctx: RenderContext, arrow: str) -> None:
    angle = min(data.surface.angle, _MAX_INCLINE)
    rad = math.radians(angle)
    base = min(240.0, (H - 90) / math.tan(rad))
    rise = base * math.tan(rad)
    bx, by = W / 2 - base / 2, H - 50

    root.append(P.polygon([(bx, by), (bx + base, by), (bx + base, by - rise)], fill=_SURFACE_FILL,
                          stroke=SLATE, cls="surface"))
    for i in range(20, int(base), 18):
        root.append(P.line(bx + i, by, bx + i - 8, by + 8, stroke=CAPTION, stroke_width=1))

    r = 30
    arc = (f"M{P.fmt(bx + r)},{P.fmt(by)} A{r},{r} 0 0,0 "
           f"{P.fmt(bx + r * math.cos(rad))},{P.fmt(by - r * math.sin(rad))}")
    root.append(P.path(arc, stroke=SLATE, stroke_width=1.5, cls="incline-angle"))
    root.append(P.text(bx + r + 16, by - 12, f"{P.fmt(angle)}°", font_size=12, fill=SLATE))

    # block centre on the slope midpoint, bottom face on the surface
    mx, my = bx + base / 2, by - rise / 2
    bw, bh = 50, 36
    g = root.append(P.group(f"{P.translate(mx, my)} rotate({P.fmt(-angle)})", cls="body-frame"))
    g.append(P.rect(-bw / 2, -bh, bw, bh, fill=_BLOCK_FILL, stroke=_BLOCK_STROKE, rx=3, cls="body"))
    g.append(P.text(0, -bh / 2, normalize_label(data.body.label or "m"), font_size=12, bold=True))

    origin = (0.0, -bh / 2)
    for f in data.forces:
        direction = f.direction.strip().lower()
        if direction in _SLOPE_DIRECTIONS:
            local = _SLOPE_DIRECTIONS[direction]
        elif direction in _WORLD_DIRECTIONS:
            local = rotate(_WORLD_DIRECTIONS[direction], angle)
        else:
            continue
        length = force_length(f, ctx)
        tip = (origin[0] + local[0] * length, origin[1] + local[1] * length)
        g.append(P.line(*origin, *tip, stroke=RED, stroke_width=2.5, marker_end=arrow, cls="force-arrow"))

        world_tip = rotate(tip, -angle)
        world_delta = rotate((local[0] * length, local[1] * length), -angle)
        _label(root, (mx + world_tip[0], my + world_tip[1]), world_delta, f.label)


@renderer(DiagramType.FORCE, data_model=ForceData)
def render_force(data: ForceData, title: str | None, ctx: RenderContext) -> SvgElement:
    """Block with force arrows; incline layout when the surface is tilted."""
    root = canvas(ctx, W, H)
    arrow = MarkerSet(root, ctx).get(RED)

    if data.surface.type == "incline" and data.surface.angle > 0:
        _incline(root, data, ctx, arrow)
    else:
        _flat(root, data, ctx, arrow)

    for i, note in enumerate(data.annotations):
        root.append(P.text(W - 20, 20 + i * 18, normalize_label(note), font_size=11, fill=MUTED, anchor="end"))

    caption(root, W, H, title)
    return root
