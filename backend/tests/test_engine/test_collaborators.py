"""Tests for the optional rendering collaborators."""

from __future__ import annotations

import pytest

from figura.engine.collaborators import (
    CollaboratorError, Collaborators, MatplotlibClimateCharter, MermaidFlowLayout, available, mermaid_source,
)
from figura.models.spec import ClimateSeries, FlowEdge, FlowNode
from tests.conftest import run


NODES = [
    FlowNode(id="start", text="Start"),
    FlowNode(id="check", text='Is "x" > 0?', shape="diamond"),
    FlowNode(id="end-1", text="Done", shape="circle"),
]
EDGES = [
    FlowEdge.model_validate({"from": "start", "to": "check"}),
    FlowEdge.model_validate({"from": "check", "to": "end-1", "label": "yes"}),
    FlowEdge.model_validate({"from": "check", "to": "ghost"}),
]


class _Broken:
    def present(self):
        raise OSError("probe failed")


class _Absent:
    def present(self):
        return False


def test_available():
    assert not available(None)
    assert not available(_Absent())
    assert not available(_Broken())
    assert available(MermaidFlowLayout(runner=lambda s: s))


def test_default_collaborators_include_charter():
    c = Collaborators.default()
    assert isinstance(c.climate, MatplotlibClimateCharter)
    assert c.molecule is None
    assert c.flow is None


def test_mermaid_source():
    src = mermaid_source(NODES, EDGES)
    lines = src.splitlines()
    assert lines[0] == "graph LR"
    assert '    start["Start"]' in lines
    assert '    check{"Is #quot;x#quot; > 0?"}' in lines
    assert '    end_1(("Done"))' in lines
    assert "    start --> check" in lines
    assert '    check -->|"yes"| end_1' in lines
    assert "ghost" not in src


def test_mermaid_layout_uses_runner():
    seen = []

    async def runner(source):
        seen.append(source)
        return "<svg><g/></svg>"

    layout = MermaidFlowLayout(runner)
    assert layout.present()
    assert run(layout.render(NODES, EDGES)) == "<svg><g/></svg>"
    assert seen[0].startswith("graph LR")


def test_mermaid_layout_errors():
    async def failing(source):
        raise RuntimeError("no browser")

    async def empty(source):
        return ""

    with pytest.raises(CollaboratorError, match="no browser"):
        run(MermaidFlowLayout(failing).render(NODES, EDGES))
    with pytest.raises(CollaboratorError, match="no SVG"):
        run(MermaidFlowLayout(empty).render(NODES, EDGES))
    assert not MermaidFlowLayout().present()


def test_matplotlib_climate_chart():
    pytest.importorskip("matplotlib")
    charter = MatplotlibClimateCharter()
    series = ClimateSeries(
        city="Lhasa",
        months=["1", "2", "3"],
        temperature=[-2.0, 1.0, 5.0],
        precipitation=[1.0, 2.0, 4.0],
    )
    markup = run(charter.render(series))
    assert markup.startswith("<svg")
    assert markup.rstrip().endswith("</svg>")


def test_matplotlib_climate_chart_empty_series():
    pytest.importorskip("matplotlib")
    with pytest.raises(CollaboratorError):
        run(MatplotlibClimateCharter().render(ClimateSeries()))
