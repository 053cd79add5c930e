"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from shapely.geometry import GeometryCollection, LineString, MultiPoint, Point, box

Pt = tuple[float, float]


def midpoint(p1: Sequence[float], p2: Sequence[float]) -> Pt:
    return ((p1[0] + p2[0]) / 2, (p1[1] + p2[1]) / 2)


def bearing(origin: Sequence[float], target: Sequence[float]) -> float:
    """Angle of origin→target in radians (canvas coordinates, y down)."""
    return math.atan2(target[1] - origin[1], target[0] - origin[0])


def unit(dx: float, dy: float) -> Pt:
    """Unit vector; a zero vector maps to (0, 0) instead of dividing by zero."""
    length = math.hypot(dx, dy)
    if length < 1e-12:
        return (0.0, 0.0)
    return (dx / length, dy / length)


def rotate(vec: Sequence[float], degrees: float) -> Pt:
    """Rotate a vector by the given angle in degrees (SVG ``rotate()`` convention)."""
    rad = math.radians(degrees)
    c, s = math.cos(rad), math.sin(rad)
    return (vec[0] * c - vec[1] * s, vec[0] * s + vec[1] * c)


def extent(
    points: Sequence[Pt],
    circles: Sequence[tuple[Pt, float]] = (),
) -> tuple[float, float, float, float] | None:
    """(xmin, ymin, xmax, ymax) covering points and circles, or None if empty."""
    geoms = []
    if points:
        geoms.append(MultiPoint([tuple(p) for p in points]))
    for center, radius in circles:
        geoms.append(Point(center).buffer(abs(radius)) if radius else Point(center))
    if not geoms:
        return None
    return tuple(GeometryCollection(geoms).bounds)


def finite_runs(xs: NDArray[np.float64], ys: NDArray[np.float64], keep: NDArray[np.bool_]) -> list[list[Pt]]:
    """Split samples into consecutive runs where ``keep`` holds (the pen lifts between runs)."""
    runs: list[list[Pt]] = []
    current: list[Pt] = []
    for x, y, ok in zip(xs, ys, keep):
        if ok:
            current.append((float(x), float(y)))
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs


def clip_polyline(
    points: Sequence[Pt],
    bounds: tuple[float, float, float, float],
) -> list[list[Pt]]:
    """Clip a polyline to an axis-aligned box, returning the visible pieces."""
    if len(points) < 2:
        return []
    clipped = LineString(points).intersection(box(*bounds))
    if clipped.is_empty:
        return []

    pieces: list[list[Pt]] = []
    parts = getattr(clipped, "geoms", [clipped])
    for part in parts:
        if part.geom_type == "LineString" and len(part.coords) >= 2:
            pieces.append([(float(x), float(y)) for x, y in part.coords])
        elif part.geom_type == "MultiLineString":
            for sub in part.geoms:
                pieces.append([(float(x), float(y)) for x, y in sub.coords])
    return pieces


def clip_segment(
    p1: Pt, p2: Pt, bounds: tuple[float, float, float, float],
) -> tuple[Pt, Pt] | None:
    """Visible part of a straight segment inside a box, or None."""
    pieces = clip_polyline([p1, p2], bounds)
    if not pieces:
        return None
    return (pieces[0][0], pieces[0][-1])
