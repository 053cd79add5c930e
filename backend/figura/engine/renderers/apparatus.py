"""Laboratory apparatus laid out left to right and joined by tubing."""

from __future__ import annotations

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import BLUE, SLATE, canvas, caption
from figura.models.spec import ApparatusData, DiagramType
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.labels import normalize_label

MIN_W, H = 420, 280
MIN_SPACING = 90
_LIQUID = "#dbeafe"


def draw_equipment(kind: str, content: str | None) -> SvgElement:
    """Glyph for one piece of equipment, centred on the origin."""
    g = P.group(cls=f"equipment equipment-{kind or 'unknown'}")
    fill_text = normalize_label(content) if content else ""
    if kind in ("flask", "round_flask"):
        g.append(P.path(
            "M-8,-40 L-8,-20 Q-8,-10 -25,5 Q-35,20 -30,35 Q-25,50 0,52 Q25,50 30,35 Q35,20 25,5 Q8,-10 8,-20 L8,-40",
            stroke=SLATE,
        ))
        g.append(P.line(-8, -40, 8, -40, stroke=SLATE))
        if fill_text:
            g.append(P.text(0, 25, fill_text, font_size=10, fill=BLUE))
    elif kind == "beaker":
        g.append(P.rect(-25, -35, 50, 70, stroke=SLATE, rx=2))
        g.append(P.line(-25, -35, -30, -30, stroke=SLATE))
        if fill_text:
            g.append(P.rect(-23, 0, 46, 33, fill=_LIQUID, stroke="none", stroke_width=0))
            g.append(P.text(0, 16, fill_text, font_size=10, fill=BLUE))
    elif kind in ("tube", "test_tube"):
        g.append(P.path("M-8,-35 L-8,20 Q-8,35 0,35 Q8,35 8,20 L8,-35", stroke=SLATE))
        if fill_text:
            g.append(P.text(0, 10, fill_text, font_size=9, fill=BLUE))
    elif kind in ("alcohol_lamp", "lamp"):
        g.append(P.path("M-18,0 Q-20,-15 -12,-20 L12,-20 Q20,-15 18,0 Z", fill="#fef3c7", stroke=SLATE))
        g.append(P.line(0, -20, 0, -30, stroke=SLATE, stroke_width=1.5))
        g.append(P.path("M-4,-30 Q0,-40 4,-30", fill="#fbbf24", stroke="#ea580c", cls="flame"))
    elif kind == "funnel":
        g.append(P.path("M-20,-20 L-5,15 L-5,35 L5,35 L5,15 L20,-20 Z", stroke=SLATE))
    elif kind in ("gas_jar", "collecting_bottle"):
        g.append(P.rect(-22, -35, 44, 70, stroke=SLATE, rx=4))
        g.append(P.line(-15, -35, 15, -35, stroke=SLATE, stroke_width=3))
        if fill_text:
            g.append(P.text(0, 5, fill_text, font_size=10, fill=BLUE))
    else:
        g.append(P.rect(-20, -25, 40, 50, stroke=SLATE, rx=4))
        g.append(P.text(0, 0, kind, font_size=10, fill=SLATE))
    return g


@renderer(DiagramType.APPARATUS, data_model=ApparatusData)
def render_apparatus(data: ApparatusData, title: str | None, ctx: RenderContext) -> SvgElement:
    n = len(data.equipment)
    width = max(MIN_W, MIN_SPACING * (n + 1))
    spacing = width / (n + 1)
    cy = H / 2 - 10

    root = canvas(ctx, width, H)
    for i, eq in enumerate(data.equipment):
        cx = spacing * (i + 1)
        if i < n - 1:
            root.append(P.line(cx + 35, cy - 10, cx + spacing - 35, cy - 10, stroke=SLATE, cls="connector"))
        glyph = draw_equipment(eq.type.strip().lower(), eq.content)
        glyph.attributes["transform"] = P.translate(cx, cy)
        root.append(glyph)
        if eq.label:
            root.append(P.text(cx, cy + 64, normalize_label(eq.label), font_size=11, cls="equipment-label"))

    caption(root, width, H, title)
    return root
