"""Function graphs: sampled curves on a grid, with asymptotes and special points.

Each expression is sampled at ``curve_steps + 1`` evenly spaced x values. The
pen lifts wherever a sample is non-finite or leaves the y-range by more than
``curve_margin_ratio`` of its span; the surviving runs are clipped to the plot
box in pixel space, so no path coordinate ever lands in the padding.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import (
    BLUE, GREEN, ORANGE, PURPLE, RED, MarkerSet, axes_and_grid, canvas, caption,
)
from figura.models.spec import DiagramType, FunctionCurve, FunctionGraphData
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.expression import Expression, ExpressionError, compile_expression
from figura.utils.geometry import clip_polyline, finite_runs
from figura.utils.labels import normalize_label
from figura.utils.mapper import CoordinateMapper

logger = logging.getLogger(__name__)

W, H = 380, 300

CURVE_COLORS = [BLUE, RED, GREEN, PURPLE, ORANGE]
_ASYMPTOTE = "#ef4444"


def sample_curve(expr: Expression, m: CoordinateMapper, steps: int, margin_ratio: float) -> list[list[tuple[float, float]]]:
    """Pixel-space polyline pieces for one expression, clipped to the plot box."""
    (xlo, xhi), (ylo, yhi) = m.x_range, m.y_range
    xs = np.linspace(xlo, xhi, steps + 1)
    ys = np.asarray(expr(xs), dtype=np.float64)
    margin = (yhi - ylo) * margin_ratio
    keep = np.isfinite(ys) & (ys >= ylo - margin) & (ys <= yhi + margin)

    left, top, right, bottom = m.envelope
    pieces: list[list[tuple[float, float]]] = []
    for run in finite_runs(xs, ys, keep):
        pixels = [m.map_point(x, y) for x, y in run]
        pieces.extend(clip_polyline(pixels, (left, top, right, bottom)))
    return pieces


def _curve(root: SvgElement, fn: FunctionCurve, color: str, m: CoordinateMapper, ctx: RenderContext) -> None:
    try:
        expr = compile_expression(fn.expr)
    except ExpressionError as e:
        logger.debug("Skipping curve %r: %s", fn.expr, e)
        return

    pieces = sample_curve(expr, m, ctx.config.curve_steps, ctx.config.curve_margin_ratio)
    if pieces:
        d = " ".join(P.polyline_d(piece) for piece in pieces)
        root.append(P.path(d, stroke=color, stroke_width=2.5, dashed=fn.style == "dashed", cls="function-curve"))

    if fn.label:
        xlo, xhi = m.x_range
        lx = xhi - (xhi - xlo) * 0.15
        ly = expr(lx)
        if math.isfinite(ly) and m.y_range[0] <= ly <= m.y_range[1]:
            label = normalize_label(fn.label)
            root.append(P.text(m.map_x(lx) + len(label) * 3.5 + 2, m.map_y(ly) - 4, label,
                               font_size=11, fill=color, cls="curve-label"))


@renderer(DiagramType.FUNCTION_GRAPH, data_model=FunctionGraphData)
def render_function_graph(data: FunctionGraphData, title: str | None, ctx: RenderContext) -> SvgElement:
    """Plotted expressions on a stretched plane."""
    cfg = ctx.config
    m = CoordinateMapper.stretch(
        data.x_range, data.y_range, W, H, cfg.padding,
        default_x=cfg.function_range, default_y=cfg.function_range,
    )
    root = canvas(ctx, W, H)
    markers = MarkerSet(root, ctx)
    axes_and_grid(root, m, data.grid_step, markers, cfg.max_grid_lines)

    (xlo, xhi), (ylo, yhi) = m.x_range, m.y_range
    for a in data.asymptotes:
        if a.type == "vertical" and xlo <= a.value <= xhi:
            px = m.map_x(a.value)
            root.append(P.line(px, m.map_y(ylo), px, m.map_y(yhi), stroke=_ASYMPTOTE, stroke_width=1,
                               dashed=True, cls="asymptote"))
        elif a.type == "horizontal" and ylo <= a.value <= yhi:
            py = m.map_y(a.value)
            root.append(P.line(m.map_x(xlo), py, m.map_x(xhi), py, stroke=_ASYMPTOTE, stroke_width=1,
                               dashed=True, cls="asymptote"))

    for i, fn in enumerate(data.functions):
        _curve(root, fn, fn.color or CURVE_COLORS[i % len(CURVE_COLORS)], m, ctx)

    for p in data.points:
        if not m.contains(p.x, p.y):
            continue
        px, py = m.map_point(p.x, p.y)
        if p.style == "hollow":
            root.append(P.circle(px, py, 4, fill="#fff", stroke=P.INK, stroke_width=2, cls="point-hollow"))
        else:
            root.append(P.circle(px, py, 4, fill=P.INK, stroke="none", stroke_width=0, cls="point-solid"))
        if p.label:
            root.append(P.text(px + 8, py - 10, normalize_label(p.label), font_size=11, anchor="start"))

    caption(root, W, H, title)
    return root
