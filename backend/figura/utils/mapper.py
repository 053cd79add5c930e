"""Coordinate mapper — semantic box to padded canvas pixels. No engine imports.

``fit`` keeps one scale factor for both axes and centers the box (geometry must
not be distorted). ``stretch`` scales each axis independently so the box fills
the plot area (function graphs, coordinate planes, charts). Both flip Y so that
semantic "up" is a smaller pixel y.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

# Range spans below this are treated as degenerate.
_DEGENERATE_SPAN = 1e-12


def normalize_range(
    rng: Sequence[float] | None,
    default: tuple[float, float],
) -> tuple[float, float]:
    """Return a usable (low, high) with low < high.

    Absent, malformed or non-finite ranges become ``default``; reversed ranges
    are swapped; zero-width ranges are widened to the default's span, centered
    on the given value.
    """
    if rng is None or len(rng) != 2:
        return default
    try:
        lo, hi = float(rng[0]), float(rng[1])
    except (TypeError, ValueError):
        return default
    if not (math.isfinite(lo) and math.isfinite(hi)):
        return default
    if lo > hi:
        lo, hi = hi, lo
    if hi - lo < _DEGENERATE_SPAN:
        half = (default[1] - default[0]) / 2
        return (lo - half, lo + half)
    return (lo, hi)


@dataclass(frozen=True)
class CoordinateMapper:
    """Affine map from the semantic box to canvas pixels (computed once per render)."""

    x_range: tuple[float, float]
    y_range: tuple[float, float]
    width: float
    height: float
    padding: float
    scale_x: float
    scale_y: float
    offset_x: float
    offset_y: float

    @classmethod
    def fit(
        cls,
        x_range: Sequence[float] | None,
        y_range: Sequence[float] | None,
        width: float,
        height: float,
        padding: float = 40.0,
        default_width: float = 4.0,
        default_height: float = 3.0,
    ) -> CoordinateMapper:
        """Uniform scale, box centered inside the padded canvas."""
        xr = normalize_range(x_range, (0.0, default_width))
        yr = normalize_range(y_range, (0.0, default_height))
        span_x, span_y = xr[1] - xr[0], yr[1] - yr[0]
        inner_w, inner_h = width - 2 * padding, height - 2 * padding
        scale = min(inner_w / span_x, inner_h / span_y)
        return cls(
            x_range=xr,
            y_range=yr,
            width=width,
            height=height,
            padding=padding,
            scale_x=scale,
            scale_y=scale,
            offset_x=padding + (inner_w - span_x * scale) / 2,
            offset_y=padding + (inner_h - span_y * scale) / 2,
        )

    @classmethod
    def stretch(
        cls,
        x_range: Sequence[float] | None,
        y_range: Sequence[float] | None,
        width: float,
        height: float,
        padding: float = 40.0,
        default_x: tuple[float, float] = (-5.0, 5.0),
        default_y: tuple[float, float] = (-5.0, 5.0),
    ) -> CoordinateMapper:
        """Independent x/y scales filling the padded canvas."""
        xr = normalize_range(x_range, default_x)
        yr = normalize_range(y_range, default_y)
        return cls(
            x_range=xr,
            y_range=yr,
            width=width,
            height=height,
            padding=padding,
            scale_x=(width - 2 * padding) / (xr[1] - xr[0]),
            scale_y=(height - 2 * padding) / (yr[1] - yr[0]),
            offset_x=padding,
            offset_y=padding,
        )

    @property
    def scale(self) -> float:
        """Uniform scale (the smaller one for stretched maps)."""
        return min(self.scale_x, self.scale_y)

    def map_x(self, x):
        return self.offset_x + (x - self.x_range[0]) * self.scale_x

    def map_y(self, y):
        return self.height - self.offset_y - (y - self.y_range[0]) * self.scale_y

    def map_point(self, x: float, y: float) -> tuple[float, float]:
        return (self.map_x(x), self.map_y(y))

    def contains(self, x: float, y: float) -> bool:
        return (
            self.x_range[0] <= x <= self.x_range[1]
            and self.y_range[0] <= y <= self.y_range[1]
        )

    @property
    def envelope(self) -> tuple[float, float, float, float]:
        """Pixel bounds (left, top, right, bottom) of the semantic box."""
        left = self.map_x(self.x_range[0])
        right = self.map_x(self.x_range[1])
        top = self.map_y(self.y_range[1])
        bottom = self.map_y(self.y_range[0])
        return (left, top, right, bottom)
