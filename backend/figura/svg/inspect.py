"""Summarize serialized SVG — element/class counts and drawn path extents via svgpathtools."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from collections import Counter

from svgpathtools import parse_path

from figura.models.svg_document import SvgSummary

logger = logging.getLogger(__name__)


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _number(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value.rstrip("px"))
    except ValueError:
        return None


def path_bounds(d: str) -> tuple[float, float, float, float] | None:
    """(xmin, ymin, xmax, ymax) of one path's data, or None if it draws nothing."""
    path = parse_path(d)
    if len(path) == 0:
        return None
    xmin, xmax, ymin, ymax = path.bbox()
    return (xmin, ymin, xmax, ymax)


def inspect_svg(markup: str) -> SvgSummary:
    """Parse SVG markup and count what is in it. Raises ET.ParseError on bad XML."""
    root = ET.fromstring(markup)
    tags: Counter[str] = Counter()
    classes: Counter[str] = Counter()
    bounds: list[tuple[float, float, float, float]] = []

    # paths under <defs> (markers) are not drawn in canvas coordinates
    hidden = {el for defs in root.iter() if _local(defs.tag) == "defs" for el in defs.iter()}

    for el in root.iter():
        tag = _local(el.tag)
        tags[tag] += 1
        for name in el.get("class", "").split():
            classes[name] += 1
        if tag == "path" and el.get("d") and el not in hidden:
            try:
                b = path_bounds(el.get("d"))
            except (ValueError, IndexError) as e:
                logger.debug("Unparsable path data %r: %s", el.get("d")[:40], e)
                continue
            if b is not None:
                bounds.append(b)

    overall = None
    if bounds:
        overall = (
            min(b[0] for b in bounds),
            min(b[1] for b in bounds),
            max(b[2] for b in bounds),
            max(b[3] for b in bounds),
        )
    return SvgSummary(
        width=_number(root.get("width")),
        height=_number(root.get("height")),
        element_count=sum(tags.values()),
        tag_counts=dict(tags),
        class_counts=dict(classes),
        path_bounds=overall,
    )
