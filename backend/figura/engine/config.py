"""Render configuration — engine constants shared by the domain renderers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class RenderConfig:
    """Controls sampling, default ranges and glyph sizes."""

    # Function-graph curve sampling: 300 steps -> 301 samples
    curve_steps: int = 300
    # A sample beyond the y-range by more than this share of the range lifts the pen
    curve_margin_ratio: float = 0.1

    # Fallback semantic box when a range is absent or degenerate
    default_box_width: float = 4.0
    default_box_height: float = 3.0

    # Default ranges per domain
    function_range: tuple[float, float] = (-5.0, 5.0)
    coordinate_range: tuple[float, float] = (-4.0, 4.0)
    optics_range: tuple[float, float] = (-30.0, 30.0)

    # Grid lines per axis before the step is coarsened
    max_grid_lines: int = 40

    # Force arrows (px) per magnitude
    force_lengths: dict[str, float] = field(
        default_factory=lambda: {"small": 40.0, "medium": 60.0, "large": 80.0}
    )
    default_force_length: float = 60.0

    # Optics: no construction rays within this distance (axis units) of lens or focus
    optics_singular_eps: float = 1.0
    default_focal_length: float = 10.0
    default_object_height: float = 3.0

    # Geometry angle marks (px)
    right_angle_size: float = 14.0
    angle_arc_radius: float = 20.0
    angle_label_radius: float = 30.0

    # Canvas padding (px)
    padding: float = 40.0
