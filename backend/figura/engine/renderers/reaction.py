"""Reaction equations, one step per horizontal band."""

from __future__ import annotations

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import MUTED, MarkerSet, canvas, caption
from figura.models.spec import DiagramType, ReactionData
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.labels import approx_text_width, normalize_label

MIN_W, MIN_H = 420, 100
BAND = 56
FORMULA_SIZE = 15
CONDITION_SIZE = 10


def _equilibrium(root: SvgElement, x1: float, x2: float, y: float) -> None:
    """Two opposed half-arrows (⇌)."""
    top = f"M{P.fmt(x1)},{P.fmt(y - 3)} L{P.fmt(x2)},{P.fmt(y - 3)} L{P.fmt(x2 - 8)},{P.fmt(y - 9)}"
    bottom = f"M{P.fmt(x2)},{P.fmt(y + 3)} L{P.fmt(x1)},{P.fmt(y + 3)} L{P.fmt(x1 + 8)},{P.fmt(y + 9)}"
    root.append(P.path(top, stroke_width=1.5, cls="equilibrium-arrow"))
    root.append(P.path(bottom, stroke_width=1.5, cls="equilibrium-arrow"))


@renderer(DiagramType.REACTION, data_model=ReactionData)
def render_reaction(data: ReactionData, title: str | None, ctx: RenderContext) -> SvgElement:
    rows = []
    width = MIN_W
    for i, step in enumerate(data.steps):
        reactants = " + ".join(normalize_label(r) for r in step.reactants)
        products = " + ".join(normalize_label(p) for p in step.products)
        conditions = ", ".join(normalize_label(c) for c in step.conditions)

        arrow_x = max(180.0, 20 + approx_text_width(reactants, FORMULA_SIZE) + 12)
        arrow_len = max(60.0, approx_text_width(conditions, CONDITION_SIZE) + 16)
        products_x = arrow_x + arrow_len + 10
        width = max(width, products_x + approx_text_width(products, FORMULA_SIZE) + 20)
        rows.append((40 + i * BAND, reactants, products, conditions, arrow_x, arrow_len, products_x, step.reversible))

    height = max(60 + len(data.steps) * BAND, MIN_H)
    root = canvas(ctx, width, height)
    markers = MarkerSet(root, ctx)

    for y, reactants, products, conditions, arrow_x, arrow_len, products_x, reversible in rows:
        root.append(P.text(20, y, reactants, font_size=FORMULA_SIZE, anchor="start", cls="reactants"))
        if reversible:
            _equilibrium(root, arrow_x, arrow_x + arrow_len, y)
        else:
            root.append(P.line(arrow_x, y, arrow_x + arrow_len, y, marker_end=markers.get(), cls="reaction-arrow"))
        if conditions:
            root.append(P.text(arrow_x + arrow_len / 2, y - 12, conditions, font_size=CONDITION_SIZE, fill=MUTED,
                               cls="conditions"))
        root.append(P.text(products_x, y, products, font_size=FORMULA_SIZE, anchor="start", cls="products"))

    caption(root, width, height, title)
    return root
