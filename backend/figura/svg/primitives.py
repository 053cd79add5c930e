"""Primitive builder — typed SVG elements with styling attributes.

Every helper returns a fresh SvgElement; nothing here holds state. Attribute
values of None are dropped, numbers are rounded to two decimals.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from figura.models.svg_document import SvgElement

SVG_NS = "http://www.w3.org/2000/svg"
FONT_FAMILY = "Arial, 'PingFang SC', 'Microsoft YaHei', sans-serif"

INK = "#1e293b"
DASH = "6,4"


def fmt(value: Any) -> str:
    """Compact attribute formatting: 12.0 -> "12", 3.14159 -> "3.14"."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        text = f"{float(value):.2f}".rstrip("0").rstrip(".")
        return "0" if text in ("-0", "") else text
    return str(value)


def element(tag: str, attrs: dict[str, Any] | None = None, text: str | None = None) -> SvgElement:
    clean = {k: fmt(v) for k, v in (attrs or {}).items() if v is not None}
    return SvgElement(tag=tag, attributes=clean, text=text)


def svg_root(width: float, height: float, view_box: str | None = None) -> SvgElement:
    return element("svg", {
        "xmlns": SVG_NS,
        "width": width,
        "height": height,
        "viewBox": view_box or f"0 0 {fmt(width)} {fmt(height)}",
        "font-family": FONT_FAMILY,
        "style": "display:block;max-width:100%",
    })


def line(
    x1: float, y1: float, x2: float, y2: float,
    stroke: str = INK,
    stroke_width: float = 2,
    dashed: bool = False,
    marker_end: str | None = None,
    cls: str | None = None,
) -> SvgElement:
    return element("line", {
        "x1": x1, "y1": y1, "x2": x2, "y2": y2,
        "stroke": stroke,
        "stroke-width": stroke_width,
        "stroke-dasharray": DASH if dashed else None,
        "marker-end": f"url(#{marker_end})" if marker_end else None,
        "class": cls,
    })


def circle(
    cx: float, cy: float, r: float,
    fill: str = "none",
    stroke: str = INK,
    stroke_width: float = 2,
    cls: str | None = None,
) -> SvgElement:
    return element("circle", {
        "cx": cx, "cy": cy, "r": r,
        "fill": fill,
        "stroke": stroke,
        "stroke-width": stroke_width,
        "class": cls,
    })


def ellipse(
    cx: float, cy: float, rx: float, ry: float,
    fill: str = "none",
    stroke: str = INK,
    stroke_width: float = 2,
    dashed: bool = False,
    dasharray: str | None = None,
    cls: str | None = None,
) -> SvgElement:
    return element("ellipse", {
        "cx": cx, "cy": cy, "rx": rx, "ry": ry,
        "fill": fill,
        "stroke": stroke,
        "stroke-width": stroke_width,
        "stroke-dasharray": dasharray or (DASH if dashed else None),
        "class": cls,
    })


def rect(
    x: float, y: float, w: float, h: float,
    fill: str = "none",
    stroke: str = INK,
    stroke_width: float = 2,
    rx: float = 0,
    dashed: bool = False,
    cls: str | None = None,
) -> SvgElement:
    return element("rect", {
        "x": x, "y": y, "width": w, "height": h,
        "rx": rx,
        "fill": fill,
        "stroke": stroke,
        "stroke-width": stroke_width,
        "stroke-dasharray": DASH if dashed else None,
        "class": cls,
    })


def polygon(
    points: Iterable[Sequence[float]],
    fill: str = "none",
    stroke: str = INK,
    stroke_width: float = 2,
    cls: str | None = None,
) -> SvgElement:
    return element("polygon", {
        "points": " ".join(f"{fmt(p[0])},{fmt(p[1])}" for p in points),
        "fill": fill,
        "stroke": stroke,
        "stroke-width": stroke_width,
        "class": cls,
    })


def path(
    d: str,
    fill: str = "none",
    stroke: str = INK,
    stroke_width: float = 2,
    dashed: bool = False,
    marker_end: str | None = None,
    cls: str | None = None,
) -> SvgElement:
    return element("path", {
        "d": d,
        "fill": fill,
        "stroke": stroke,
        "stroke-width": stroke_width,
        "stroke-dasharray": DASH if dashed else None,
        "marker-end": f"url(#{marker_end})" if marker_end else None,
        "class": cls,
    })


def polyline_d(points: Sequence[Sequence[float]]) -> str:
    """Path data for an open polyline: ``M x,y L x,y ...``."""
    if not points:
        return ""
    head = f"M{fmt(points[0][0])},{fmt(points[0][1])}"
    tail = "".join(f" L{fmt(x)},{fmt(y)}" for x, y in points[1:])
    return head + tail


def text(
    x: float, y: float, content: str,
    font_size: float = 13,
    fill: str = INK,
    anchor: str = "middle",
    baseline: str = "central",
    bold: bool = False,
    italic: bool = False,
    cls: str | None = None,
) -> SvgElement:
    return element("text", {
        "x": x, "y": y,
        "text-anchor": anchor,
        "dominant-baseline": baseline,
        "font-size": font_size,
        "fill": fill,
        "font-weight": "bold" if bold else "normal",
        "font-style": "italic" if italic else "normal",
        "class": cls,
    }, text=str(content))


def group(transform: str | None = None, cls: str | None = None) -> SvgElement:
    return element("g", {"transform": transform, "class": cls})


def translate(x: float, y: float) -> str:
    return f"translate({fmt(x)},{fmt(y)})"


def add_arrow_marker(root: SvgElement, marker_id: str, color: str = INK, open_head: bool = False) -> str:
    """Register an arrowhead marker in the root's <defs>; returns the marker id."""
    defs = next((c for c in root.children if c.tag == "defs"), None)
    if defs is None:
        defs = root.insert(0, element("defs"))
    if any(m.get("id") == marker_id for m in defs.children):
        return marker_id

    marker = element("marker", {
        "id": marker_id,
        "markerWidth": 10,
        "markerHeight": 7,
        "refX": 9,
        "refY": 3.5,
        "orient": "auto",
        "markerUnits": "strokeWidth",
    })
    if open_head:
        marker.append(element("path", {
            "d": "M0,0 L10,3.5 L0,7", "fill": "none", "stroke": color, "stroke-width": 1.5,
        }))
    else:
        marker.append(element("path", {"d": "M0,0 L10,3.5 L0,7 Z", "fill": color}))
    defs.append(marker)
    return marker_id
