"""Series circuits laid out around a rectangular loop.

Components go round the four side midpoints (top, right, bottom, left) in
order; when there are more than four, the ones sharing a side are spread
evenly along it. Each glyph sits on a background-coloured mask so the loop
wire appears to pass through it.
"""

from __future__ import annotations

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import BACKGROUND, SLATE, canvas, caption
from figura.models.spec import CircuitData, DiagramType
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.labels import normalize_label

W, H = 400, 280
MARGIN = 60


def _lead(g: SvgElement, x1: float, x2: float) -> None:
    g.append(P.line(x1, 0, x2, 0))


def draw_component(kind: str) -> SvgElement:
    """Glyph for one component type, centred on the origin, wires along x."""
    g = P.group(cls=f"component component-{kind or 'unknown'}")
    if kind == "battery":
        _lead(g, -20, -8)
        g.append(P.line(-8, -14, -8, 14, stroke_width=2.5))
        g.append(P.line(-2, -8, -2, 8, stroke_width=1.5))
        g.append(P.line(4, -14, 4, 14, stroke_width=2.5))
        g.append(P.line(10, -8, 10, 8, stroke_width=1.5))
        _lead(g, 10, 20)
    elif kind == "resistor":
        _lead(g, -25, -15)
        g.append(P.rect(-15, -8, 30, 16))
        _lead(g, 15, 25)
    elif kind == "capacitor":
        _lead(g, -20, -4)
        g.append(P.line(-4, -12, -4, 12, stroke_width=2.5))
        g.append(P.line(4, -12, 4, 12, stroke_width=2.5))
        _lead(g, 4, 20)
    elif kind == "switch":
        _lead(g, -20, -6)
        g.append(P.circle(-6, 0, 3, fill=P.INK, stroke="none", stroke_width=0))
        g.append(P.circle(14, 0, 3, fill=P.INK, stroke="none", stroke_width=0))
        g.append(P.line(-6, 0, 12, -12))
        _lead(g, 14, 20)
    elif kind in ("ammeter", "voltmeter"):
        _lead(g, -20, -12)
        g.append(P.circle(0, 0, 12))
        g.append(P.text(0, 0, "A" if kind == "ammeter" else "V", font_size=12, bold=True))
        _lead(g, 12, 20)
    elif kind in ("bulb", "lamp"):
        _lead(g, -20, -10)
        g.append(P.circle(0, 0, 10))
        g.append(P.line(-7, -7, 7, 7, stroke_width=1.5))
        g.append(P.line(-7, 7, 7, -7, stroke_width=1.5))
        _lead(g, 10, 20)
    else:
        g.append(P.rect(-15, -10, 30, 20, fill=BACKGROUND, rx=3))
        g.append(P.text(0, 0, kind, font_size=10))
    return g


def slot_positions(n: int) -> list[tuple[float, float, int]]:
    """(x, y, side) for n components; side 0..3 is top, right, bottom, left."""
    inner_w, inner_h = W - 2 * MARGIN, H - 2 * MARGIN
    per_side = [len(range(side, n, 4)) for side in range(4)]
    positions = []
    for i in range(n):
        side, k = i % 4, i // 4
        frac = (k + 1) / (per_side[side] + 1)
        if side == 0:
            positions.append((MARGIN + inner_w * frac, MARGIN, side))
        elif side == 1:
            positions.append((MARGIN + inner_w, MARGIN + inner_h * frac, side))
        elif side == 2:
            positions.append((MARGIN + inner_w * (1 - frac), MARGIN + inner_h, side))
        else:
            positions.append((MARGIN, MARGIN + inner_h * (1 - frac), side))
    return positions


@renderer(DiagramType.CIRCUIT, data_model=CircuitData)
def render_circuit(data: CircuitData, title: str | None, ctx: RenderContext) -> SvgElement:
    root = canvas(ctx, W, H)
    if data.components:
        corners = [(MARGIN, MARGIN), (W - MARGIN, MARGIN), (W - MARGIN, H - MARGIN), (MARGIN, H - MARGIN)]
        root.append(P.polygon(corners, stroke=SLATE, cls="circuit-loop"))

        for comp, (px, py, side) in zip(data.components, slot_positions(len(data.components))):
            vertical = side in (1, 3)
            mw, mh = (40, 56) if vertical else (56, 40)
            root.append(P.rect(px - mw / 2, py - mh / 2, mw, mh, fill=BACKGROUND, stroke="none", stroke_width=0))

            glyph = draw_component(comp.type.strip().lower())
            transform = P.translate(px, py)
            if vertical:
                transform += " rotate(90)"
            glyph.attributes["transform"] = transform
            root.append(glyph)

            if comp.label:
                label = normalize_label(comp.label)
                if side == 1:
                    root.append(P.text(px + 30, py, label, font_size=12, anchor="start"))
                elif side == 3:
                    root.append(P.text(px - 30, py, label, font_size=12, anchor="end"))
                else:
                    root.append(P.text(px, py - 22, label, font_size=12))

    caption(root, W, H, title)
    return root
