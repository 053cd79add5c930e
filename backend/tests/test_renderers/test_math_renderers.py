"""Tests for geometry, function graph and coordinate plane renderers."""

from __future__ import annotations

import copy

import pytest

from figura.engine.renderers.function_graph import sample_curve
from figura.engine.renderers.geometry import is_right_angle
from figura.models.svg_document import SvgElement
from figura.utils.expression import compile_expression
from figura.utils.mapper import CoordinateMapper
from tests.conftest import FUNCTION_SPEC, RIGHT_TRIANGLE_SPEC, path_points, run


# ── Geometry ──────────────────────────────────────────────────────────────

@pytest.mark.parametrize("value", ["90", "90°", "∠A=90°", "∠ABC = 90 deg", "direct_angle", "right", "90.0"])
def test_right_angle_values(value):
    assert is_right_angle(value)


@pytest.mark.parametrize("value", ["190°", "45", "60°", "900", "", None, "obtuse"])
def test_not_right_angle_values(value):
    assert not is_right_angle(value)


def _triangle(angle_value: str, mark: bool = True) -> dict:
    spec = copy.deepcopy(RIGHT_TRIANGLE_SPEC)
    spec["data"]["angles"] = [{"vertex": "A", "value": angle_value, "mark": mark}]
    return spec


def test_right_angle_gets_square_mark(dispatcher):
    out = run(dispatcher.render(_triangle("90°")))
    assert len(out.find_by_class("right-angle-mark")) == 1
    assert out.find_by_class("angle-arc") == []


def test_other_angle_gets_arc(dispatcher):
    out = run(dispatcher.render(_triangle("60°")))
    assert len(out.find_by_class("angle-arc")) == 1
    assert out.find_by_class("right-angle-mark") == []
    assert out.find_by_class("angle-label")[0].text == "60°"


def test_arc_flags_follow_bearing_span(dispatcher):
    # bearings from A to B and to C sit either side of the +-pi seam
    spec = {
        "type": "geometry",
        "data": {
            "points": [{"id": "A", "x": 4, "y": 0}, {"id": "B", "x": 0, "y": 1}, {"id": "C", "x": 0, "y": -1}],
            "segments": [["A", "B"], ["A", "C"]],
            "angles": [{"vertex": "A", "value": "28°", "mark": True}],
        },
    }
    out = run(dispatcher.render(spec))
    assert " 0 1,1 " in out.find_by_class("angle-arc")[0].get("d")

    out = run(dispatcher.render(_triangle("60°")))
    assert " 0 0,1 " in out.find_by_class("angle-arc")[0].get("d")


def test_unmarked_angle_has_no_glyph(dispatcher):
    out = run(dispatcher.render(_triangle("90°", mark=False)))
    assert out.find_by_class("right-angle-mark") == []
    assert len(out.find_by_class("angle-label")) == 1


def test_right_angle_tag_has_no_text(dispatcher):
    out = run(dispatcher.render(_triangle("direct_angle")))
    assert len(out.find_by_class("right-angle-mark")) == 1
    assert out.find_by_class("angle-label") == []


def test_dangling_references_skipped(dispatcher):
    spec = copy.deepcopy(RIGHT_TRIANGLE_SPEC)
    spec["data"]["segments"] = [["A", "B"], ["A", "Z"]]
    spec["data"]["circles"] = [{"center": "Q", "radius": 2}]
    spec["data"]["labels"] = [{"from": "A", "to": "Z", "text": "?"}]
    out = run(dispatcher.render(spec))
    assert len(out.find_by_class("geo-segment")) == 1
    assert out.find_by_class("geo-circle") == []
    assert out.find_by_class("edge-label") == []
    assert len(out.find_by_class("geo-point")) == 3


def test_geometry_fits_canvas(dispatcher):
    out = run(dispatcher.render(RIGHT_TRIANGLE_SPEC))
    for p in out.find_by_class("geo-point"):
        assert 40 <= float(p.get("cx")) <= 320
        assert 40 <= float(p.get("cy")) <= 240


def test_geometry_without_points(dispatcher):
    out = run(dispatcher.render({"type": "geometry", "data": {}}))
    assert isinstance(out, SvgElement)
    assert out.find_by_class("geo-point") == []


def test_segments_accept_from_to_objects(dispatcher):
    spec = copy.deepcopy(RIGHT_TRIANGLE_SPEC)
    spec["data"]["segments"] = [{"from": "A", "to": "B"}, "junk", ["C"]]
    out = run(dispatcher.render(spec))
    assert len(out.find_by_class("geo-segment")) == 1


# ── Function graph ────────────────────────────────────────────────────────

ENVELOPE = (40, 40, 340, 260)


def _inside(points, tol=0.011):
    left, top, right, bottom = ENVELOPE
    return all(left - tol <= x <= right + tol and top - tol <= y <= bottom + tol for x, y in points)


@pytest.mark.parametrize("expr", ["1/x", "tan(x)", "x^3", "sqrt(x)", "log(x)", "exp(x)", "1/(x-1)^2"])
def test_curves_stay_inside_plot_box(dispatcher, expr):
    spec = {"type": "function_graph", "data": {"xRange": [-5, 5], "yRange": [-5, 5], "functions": [expr]}}
    out = run(dispatcher.render(spec))
    curves = out.find_by_class("function-curve")
    assert len(curves) == 1
    assert _inside(path_points(curves[0].get("d")))


def test_reciprocal_breaks_at_pole(dispatcher):
    out = run(dispatcher.render(FUNCTION_SPEC))
    d = out.find_by_class("function-curve")[0].get("d")
    assert d.count("M") >= 2


def test_sample_curve_pieces_clipped():
    m = CoordinateMapper.stretch((-5, 5), (-5, 5), 380, 300, 40)
    pieces = sample_curve(compile_expression("tan(x)"), m, 300, 0.1)
    assert len(pieces) >= 3
    for piece in pieces:
        assert _inside(piece, tol=1e-6)


def test_asymptotes_and_points(dispatcher):
    out = run(dispatcher.render(FUNCTION_SPEC))
    assert len(out.find_by_class("asymptote")) == 2
    assert len(out.find_by_class("point-hollow")) == 1


def test_out_of_range_asymptotes_and_points_dropped(dispatcher):
    spec = {
        "type": "function_graph",
        "data": {
            "xRange": [0, 4],
            "yRange": [0, 4],
            "asymptotes": [{"type": "vertical", "value": 9}],
            "points": [{"x": 10, "y": 10}],
        },
    }
    out = run(dispatcher.render(spec))
    assert out.find_by_class("asymptote") == []
    assert out.find_by_class("point-solid") == []


def test_invalid_expression_skipped(dispatcher):
    spec = {"type": "function_graph", "data": {"functions": ["__import__('os')", "x^2"]}}
    out = run(dispatcher.render(spec))
    assert isinstance(out, SvgElement)
    assert len(out.find_by_class("function-curve")) == 1


def test_deeply_nested_expression_keeps_sibling_curves(dispatcher):
    nested = "(" * 240 + "x" + ")" * 240
    spec = {"type": "function_graph", "data": {"functions": [nested, "x^2"]}}
    out = run(dispatcher.render(spec))
    assert isinstance(out, SvgElement)
    assert len(out.find_by_class("function-curve")) == 1


def test_degenerate_range(dispatcher):
    spec = {"type": "function_graph", "data": {"xRange": [2, 2], "yRange": [1, 1], "functions": ["x"]}}
    out = run(dispatcher.render(spec))
    assert isinstance(out, SvgElement)


def test_grid_density_capped(dispatcher):
    spec = {"type": "function_graph", "data": {"xRange": [-1000, 1000], "yRange": [-5, 5], "gridStep": 1}}
    out = run(dispatcher.render(spec))
    assert len(out.find_by_class("grid-line")) <= 2 * 41


# ── Coordinate plane ──────────────────────────────────────────────────────

def test_vectors_get_one_marker_per_colour(dispatcher):
    spec = {
        "type": "coordinate",
        "data": {
            "vectors": [
                {"from": [0, 0], "to": [2, 1], "label": "a"},
                {"from": [0, 0], "to": [-1, 2], "label": "b"},
                {"from": [1, 1], "to": [3, 3], "color": "#2563eb"},
            ],
        },
    }
    out = run(dispatcher.render(spec))
    assert len(out.find_by_class("vector")) == 3
    # axis marker plus blue and red
    assert len(list(out.iter("marker"))) == 3


def test_lines_clipped_to_plane(dispatcher):
    spec = {"type": "coordinate", "data": {"lines": [{"slope": 10, "intercept": 0}, {"slope": 0, "intercept": 99}]}}
    out = run(dispatcher.render(spec))
    lines = out.find_by_class("plane-line")
    assert len(lines) == 1
    for key in ("y1", "y2"):
        assert 40 - 0.01 <= float(lines[0].get(key)) <= 260 + 0.01
