"""Process flow diagrams.

The flow-layout collaborator gets the first try; without it (or when it
fails) nodes are laid out in one row in declaration order. Edges between
neighbours in that row are straight arrows, any other edge arcs over the row.
"""

from __future__ import annotations

import logging

from figura.engine.collaborators import available
from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import BLUE, GREEN, MUTED, SLATE, MarkerSet, canvas, caption
from figura.models.spec import DiagramType, FlowNode, ProcessFlowData
from figura.models.svg_document import Placeholder, RawMarkup, RenderOutput, SvgElement
from figura.svg import primitives as P
from figura.utils.labels import normalize_label

logger = logging.getLogger(__name__)

NODE_W, NODE_H, GAP = 90, 36, 50
H = 130


def _node(root: SvgElement, node: FlowNode, cx: float, cy: float) -> None:
    if node.shape == "diamond":
        pts = [(cx, cy - NODE_H / 2 - 4), (cx + NODE_W / 2, cy), (cx, cy + NODE_H / 2 + 4), (cx - NODE_W / 2, cy)]
        root.append(P.polygon(pts, fill="#eff6ff", stroke=BLUE, cls="flow-node"))
    elif node.shape == "circle":
        root.append(P.circle(cx, cy, NODE_H / 2 + 2, fill="#f0fdf4", stroke=GREEN, cls="flow-node"))
    else:
        root.append(P.rect(cx - NODE_W / 2, cy - NODE_H / 2, NODE_W, NODE_H, fill="#eff6ff", stroke=BLUE, rx=6,
                           cls="flow-node"))
    root.append(P.text(cx, cy, normalize_label(node.text or node.id), font_size=12, bold=True))


def flow_fallback(data: ProcessFlowData, title: str | None, ctx: RenderContext) -> SvgElement:
    n = len(data.nodes)
    width = max(400, n * (NODE_W + GAP) + 40)
    cy = H / 2 + 6

    root = canvas(ctx, width, H)
    arrow = MarkerSet(root, ctx).get(SLATE)

    xs = [40 + i * (NODE_W + GAP) + NODE_W / 2 for i in range(n)]
    # first declaration wins for duplicate ids
    centres: dict[str, tuple[int, float]] = {}
    for i, node in enumerate(data.nodes):
        centres.setdefault(node.id, (i, xs[i]))

    for edge in data.edges:
        if edge.start not in centres or edge.end not in centres or edge.start == edge.end:
            continue
        (i, x1), (j, x2) = centres[edge.start], centres[edge.end]
        label = normalize_label(edge.label) if edge.label else ""
        if j == i + 1:
            sx, ex = x1 + NODE_W / 2 + 2, x2 - NODE_W / 2 - 2
            root.append(P.line(sx, cy, ex, cy, stroke=SLATE, marker_end=arrow, cls="flow-edge"))
            if label:
                root.append(P.text((sx + ex) / 2, cy - 14, label, font_size=10, fill=MUTED))
        else:
            top = cy - NODE_H / 2 - 4
            lift = top - 30
            d = f"M{P.fmt(x1)},{P.fmt(top)} Q{P.fmt((x1 + x2) / 2)},{P.fmt(lift)} {P.fmt(x2)},{P.fmt(top)}"
            root.append(P.path(d, stroke=SLATE, stroke_width=1.5, marker_end=arrow, cls="flow-edge flow-edge-arc"))
            if label:
                root.append(P.text((x1 + x2) / 2, lift + 8, label, font_size=10, fill=MUTED))

    for node, cx in zip(data.nodes, xs):
        _node(root, node, cx, cy)

    caption(root, width, H, title)
    return root


@renderer(DiagramType.PROCESS_FLOW, data_model=ProcessFlowData)
async def render_process_flow(data: ProcessFlowData, title: str | None, ctx: RenderContext) -> RenderOutput:
    if not data.nodes:
        return Placeholder(message="Process flow has no nodes")

    layout = ctx.collaborators.flow
    if available(layout):
        try:
            markup = await layout.render(data.nodes, data.edges)
            return RawMarkup(markup=markup, source="flow")
        except Exception as e:
            logger.warning("Flow layout failed, drawing row layout: %s", e)

    return flow_fallback(data, title, ctx)
