"""Tests for rendered-SVG inspection."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from figura.svg import primitives as P
from figura.svg.inspect import inspect_svg, path_bounds
from figura.svg.serializer import serialize_element


def test_path_bounds():
    assert path_bounds("M0,0 L10,20") == pytest.approx((0, 0, 10, 20))
    assert path_bounds("M10,10 L5,30 L20,15") == pytest.approx((5, 10, 20, 30))


def test_inspect_counts_and_bounds():
    root = P.svg_root(360, 280)
    root.append(P.path("M10,10 L50,40", cls="curve"))
    root.append(P.path("M20,5 L30,60", cls="curve"))
    root.append(P.circle(5, 5, 2, cls="geo-point"))
    summary = inspect_svg(serialize_element(root))

    assert summary.width == 360
    assert summary.height == 280
    assert summary.tag_counts == {"svg": 1, "path": 2, "circle": 1}
    assert summary.element_count == 4
    assert summary.class_counts["curve"] == 2
    assert summary.path_bounds == pytest.approx((10, 5, 50, 60))


def test_inspect_without_paths():
    summary = inspect_svg(serialize_element(P.svg_root(10, 10)))
    assert summary.path_bounds is None


def test_inspect_rejects_bad_xml():
    with pytest.raises(ET.ParseError):
        inspect_svg("<svg><g></svg>")


def test_marker_paths_excluded_from_bounds():
    root = P.svg_root(200, 200)
    root.append(P.line(50, 50, 150, 150, marker_end=P.add_arrow_marker(root, "m1")))
    root.append(P.path("M100,100 L120,140"))
    summary = inspect_svg(serialize_element(root))
    assert summary.tag_counts["path"] == 2
    assert summary.path_bounds == pytest.approx((100, 100, 120, 140))
