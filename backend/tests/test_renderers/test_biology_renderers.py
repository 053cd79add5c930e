"""Tests for cell and process flow renderers."""

from __future__ import annotations

from figura.engine.collaborators import Collaborators, MermaidFlowLayout
from figura.engine.config import RenderConfig
from figura.engine.context import RenderContext
from figura.engine.dispatcher import Dispatcher
from figura.engine.ids import IdAllocator
from figura.engine.renderers.cell import structure_key
from figura.models.svg_document import Placeholder, RawMarkup, SvgElement
from tests.conftest import CELL_SPEC, run


# ── Cell ──────────────────────────────────────────────────────────────────

def test_structure_aliases():
    assert structure_key("Cell Membrane") == "cell_membrane"
    assert structure_key("mitochondrion") == "mitochondria"
    assert structure_key("Golgi-Apparatus") == "golgi"
    assert structure_key("ER") == "endoplasmic_reticulum"


def test_plant_cell(dispatcher):
    out = run(dispatcher.render(CELL_SPEC))
    for cls in ("cell-wall", "cell-membrane", "nucleus", "chloroplast", "vacuole"):
        assert out.find_by_class(cls), cls
    assert out.find_by_class("mitochondria") == []
    assert out.find_by_class("cell-membrane")[0].tag == "rect"
    assert out.find_by_class("nucleus")[0].get("fill") == "#fef3c7"


def test_animal_cell_never_draws_plant_structures(dispatcher):
    spec = {"type": "cell", "data": {"cellType": "animal", "structures": ["nucleus", "chloroplast", "cell_wall",
                                                                          "vacuole", "mitochondria"]}}
    out = run(dispatcher.render(spec))
    for cls in ("cell-wall", "chloroplast", "vacuole"):
        assert out.find_by_class(cls) == [], cls
    assert out.find_by_class("mitochondria")
    assert out.find_by_class("nucleus")[0].get("fill") == "#e0e7ff"


def test_default_structures(dispatcher):
    out = run(dispatcher.render({"type": "cell", "data": {}}))
    membrane = out.find_by_class("cell-membrane")
    assert len(membrane) == 1
    assert membrane[0].tag == "ellipse"
    assert len(out.find_by_class("nucleus")) == 1
    assert out.find_by_class("ribosome") == []


def test_labels_can_be_hidden(dispatcher):
    spec = {"type": "cell", "data": {"structures": ["nucleus", "golgi"], "labels": False}}
    out = run(dispatcher.render(spec))
    assert out.find_by_class("organelle-label") == []
    assert len(out.find_by_class("golgi")) == 4


# ── Process flow ──────────────────────────────────────────────────────────

FLOW = {
    "type": "process_flow",
    "title": "Water treatment",
    "data": {
        "nodes": [
            {"id": "a", "text": "Intake"},
            {"id": "b", "text": "Filter", "shape": "diamond"},
            {"id": "c", "text": "Store", "shape": "circle"},
        ],
        "edges": [
            {"from": "a", "to": "b", "label": "raw"},
            {"from": "b", "to": "c"},
            {"from": "c", "to": "a", "label": "recycle"},
            {"from": "a", "to": "missing"},
        ],
    },
}


def _with_runner(runner) -> Dispatcher:
    collaborators = Collaborators(flow=MermaidFlowLayout(runner))
    return Dispatcher(RenderContext(ids=IdAllocator("t"), collaborators=collaborators, config=RenderConfig()))


def test_empty_flow_is_an_error(dispatcher):
    out = run(dispatcher.render({"type": "process_flow", "data": {"nodes": []}}))
    assert isinstance(out, Placeholder)
    assert out.kind == "error"


def test_flow_row_layout(dispatcher):
    out = run(dispatcher.render(FLOW))
    assert isinstance(out, SvgElement)
    assert len(out.find_by_class("flow-node")) == 3
    edges = out.find_by_class("flow-edge")
    assert len(edges) == 3
    assert len(out.find_by_class("flow-edge-arc")) == 1
    assert {"raw", "recycle"} <= {t.text for t in out.iter("text")}


def test_flow_uses_layout_collaborator():
    async def runner(source):
        return f"<svg><desc>{len(source.splitlines())}</desc></svg>"

    out = run(_with_runner(runner).render(FLOW))
    assert isinstance(out, RawMarkup)
    assert out.source == "flow"
    # header, three nodes and three known edges
    assert out.markup == "<svg><desc>7</desc></svg>"


def test_flow_layout_failure_falls_back():
    async def runner(source):
        raise RuntimeError("renderer crashed")

    out = run(_with_runner(runner).render(FLOW))
    assert isinstance(out, SvgElement)
    assert len(out.find_by_class("flow-node")) == 3
