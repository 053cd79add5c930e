"""Generic primitives: the fallback for unknown or free-form figures."""

from __future__ import annotations

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import BLUE, CAPTION, GREEN, MUTED, SLATE, MarkerSet, canvas
from figura.models.spec import DiagramType, GenericData, GenericElement
from figura.models.svg_document import Placeholder, RenderOutput, SvgElement
from figura.svg import primitives as P
from figura.utils.geometry import midpoint
from figura.utils.labels import normalize_label

W, H = 400, 240
_DESCRIPTION_CHARS = 50


def _or(value: float | None, default: float) -> float:
    return default if value is None else value


def _element(root: SvgElement, el: GenericElement, markers: MarkerSet) -> None:
    shape = el.shape.strip().lower()
    label = normalize_label(el.label) if el.label else ""
    if shape == "rect":
        x, y = _or(el.x, 0), _or(el.y, 0)
        w, h = _or(el.width, 80), _or(el.height, 40)
        root.append(P.rect(x, y, w, h, fill=el.fill or "#eff6ff", stroke=el.stroke or BLUE, rx=_or(el.rx, 4)))
        if label:
            root.append(P.text(x + w / 2, y + h / 2, label, font_size=12))
    elif shape == "circle":
        cx, cy = _or(el.cx, 0), _or(el.cy, 0)
        root.append(P.circle(cx, cy, _or(el.r, 20), fill=el.fill or "#f0fdf4", stroke=el.stroke or GREEN))
        if label:
            root.append(P.text(cx, cy, label, font_size=12))
    elif shape == "ellipse":
        cx, cy = _or(el.cx, 0), _or(el.cy, 0)
        root.append(P.ellipse(cx, cy, _or(el.rx, 30), _or(el.ry, 20), fill=el.fill or "#eff6ff",
                              stroke=el.stroke or BLUE))
        if label:
            root.append(P.text(cx, cy, label, font_size=12))
    elif shape == "line":
        root.append(P.line(_or(el.x1, 0), _or(el.y1, 0), _or(el.x2, 100), _or(el.y2, 0), stroke=el.stroke or SLATE))
    elif shape == "arrow":
        if len(el.start) < 2 or len(el.end) < 2:
            return
        color = el.stroke or SLATE
        p1, p2 = (el.start[0], el.start[1]), (el.end[0], el.end[1])
        root.append(P.line(*p1, *p2, stroke=color, marker_end=markers.get(color)))
        if label:
            mx, my = midpoint(p1, p2)
            root.append(P.text(mx, my - 10, label, font_size=10, fill=MUTED))
    elif shape == "text":
        root.append(P.text(_or(el.x, 0), _or(el.y, 0), normalize_label(el.text or ""),
                           font_size=_or(el.font_size, 13), fill=el.fill or P.INK, bold=el.bold,
                           anchor=el.anchor or "start"))


def generic_figure(data: GenericData, title: str | None, ctx: RenderContext) -> RenderOutput:
    """Draw the listed primitives, or a note naming the figure when there are none."""
    if not data.elements:
        return Placeholder(message=f"Figure: {data.description or title or 'diagram'}", kind="note")

    root = canvas(ctx, W, H)
    markers = MarkerSet(root, ctx)
    for el in data.elements:
        _element(root, el, markers)

    if data.description:
        root.append(P.text(W / 2, H - 10, data.description[:_DESCRIPTION_CHARS], font_size=10, fill=CAPTION,
                           cls="diagram-description"))
    if title:
        root.append(P.text(W / 2, 16, normalize_label(title), font_size=11, fill=CAPTION, cls="diagram-title"))
    return root


@renderer(DiagramType.GENERIC_SVG, data_model=GenericData)
def render_generic(data: GenericData, title: str | None, ctx: RenderContext) -> RenderOutput:
    return generic_figure(data, title, ctx)
