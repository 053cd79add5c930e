"""Tests for geographic and generic renderers."""

from __future__ import annotations

import copy

from figura.engine.collaborators import Collaborators
from figura.engine.config import RenderConfig
from figura.engine.context import RenderContext
from figura.engine.dispatcher import Dispatcher
from figura.engine.ids import IdAllocator
from figura.engine.renderers.geographic import climate_series
from figura.models.spec import GeographicData
from figura.models.svg_document import Placeholder, RawMarkup, SvgElement
from tests.conftest import CLIMATE_SPEC, run


class FakeCharter:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.seen = []

    def present(self) -> bool:
        return True

    async def render(self, series) -> str:
        self.seen.append(series)
        if self.fail:
            raise RuntimeError("backend missing")
        return "<svg><rect/></svg>"


def _with_charter(charter) -> Dispatcher:
    collaborators = Collaborators(climate=charter)
    return Dispatcher(RenderContext(ids=IdAllocator("t"), collaborators=collaborators, config=RenderConfig()))


# ── Geographic ────────────────────────────────────────────────────────────

def test_climate_fallback_chart(dispatcher):
    out = run(dispatcher.render(CLIMATE_SPEC))
    assert isinstance(out, SvgElement)
    assert len(out.find_by_class("precipitation-bar")) == 12
    assert len(out.find_by_class("temperature-point")) == 12
    assert len(out.find_by_class("temperature-line")) == 1
    assert out.find_by_class("chart-heading")[0].text == "Shanghai climate chart"


def test_climate_bars_grow_from_baseline(dispatcher):
    out = run(dispatcher.render(CLIMATE_SPEC))
    bars = out.find_by_class("precipitation-bar")
    bottoms = [float(b.get("y")) + float(b.get("height")) for b in bars]
    assert max(bottoms) - min(bottoms) < 0.02
    tallest = max(bars, key=lambda b: float(b.get("height")))
    assert tallest is bars[7]


def test_climate_series_defaults_and_truncation():
    data = GeographicData.model_validate({"temperature": list(range(15)), "precipitation": [1, 2]})
    series = climate_series(data)
    assert series.months == [str(m) for m in range(1, 13)]
    assert len(series.temperature) == 12
    assert series.precipitation == [1, 2]


def test_flat_climate_fields(dispatcher):
    spec = {"type": "geographic", "data": {"city": "Lima", "months": ["J", "F"], "temperature": [22, 23]}}
    out = run(dispatcher.render(spec))
    assert len(out.find_by_class("temperature-point")) == 2
    assert out.find_by_class("precipitation-bar") == []


def test_climate_charter_used():
    charter = FakeCharter()
    out = run(_with_charter(charter).render(CLIMATE_SPEC))
    assert isinstance(out, RawMarkup)
    assert out.source == "climate"
    assert charter.seen[0].city == "Shanghai"


def test_climate_charter_failure_falls_back():
    out = run(_with_charter(FakeCharter(fail=True)).render(CLIMATE_SPEC))
    assert isinstance(out, SvgElement)
    assert len(out.find_by_class("precipitation-bar")) == 12


def test_other_geographic_subtypes_use_generic(dispatcher):
    spec = {
        "type": "geographic",
        "data": {"subtype": "contour_map", "elements": [{"shape": "ellipse", "cx": 200, "cy": 120}]},
    }
    out = run(dispatcher.render(spec))
    assert isinstance(out, SvgElement)
    assert len(list(out.iter("ellipse"))) == 1

    spec = copy.deepcopy(spec)
    spec["data"]["elements"] = []
    out = run(dispatcher.render(spec))
    assert isinstance(out, Placeholder)
    assert out.kind == "note"
    assert out.message == "Figure: Geographic figure"


# ── Generic ───────────────────────────────────────────────────────────────

def test_generic_elements(dispatcher):
    spec = {
        "type": "generic_svg",
        "title": "Parts",
        "data": {
            "description": "A labelled sketch with far more words than fit in the caption line below it",
            "elements": [
                {"shape": "rect", "x": 10, "y": 10, "label": "box"},
                {"shape": "circle", "cx": 200, "cy": 100, "r": 30},
                {"shape": "line", "x1": 0, "y1": 0, "x2": 50, "y2": 50},
                {"shape": "arrow", "from": [10, 10], "to": [100, 100], "label": "flow"},
                {"shape": "arrow", "from": [10]},
                {"shape": "text", "x": 5, "y": 200, "text": "H_2O", "fontSize": 16, "bold": True},
                {"shape": "hexagon"},
            ],
        },
    }
    out = run(dispatcher.render(spec))
    assert len(out.find_by_class("canvas-bg")) == 1
    assert len(list(out.iter("circle"))) == 1
    assert len(list(out.iter("line"))) == 2
    assert len(list(out.iter("marker"))) == 1
    texts = [t.text for t in out.iter("text")]
    assert "H₂O" in texts
    assert out.find_by_class("diagram-description")[0].text == spec["data"]["description"][:50]
    assert out.find_by_class("diagram-title")[0].text == "Parts"


def test_generic_without_elements_uses_title(dispatcher):
    out = run(dispatcher.render({"type": "generic_svg", "title": "Food web", "data": {}}))
    assert isinstance(out, Placeholder)
    assert out.message == "Figure: Food web"
