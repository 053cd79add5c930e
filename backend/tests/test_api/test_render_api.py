"""Tests for API endpoints."""

from __future__ import annotations

import html
import json

from fastapi.testclient import TestClient

from figura.main import app
from figura.models.spec import DiagramType
from tests.conftest import CELL_SPEC, FUNCTION_SPEC, RIGHT_TRIANGLE_SPEC


client = TestClient(app)


def _container(spec) -> str:
    payload = html.escape(json.dumps(spec) if not isinstance(spec, str) else spec, quote=True)
    return f'<div class="diagram-container" data-diagram="{payload}"></div>'


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["renderers_registered"] == len(DiagramType)
    assert isinstance(data["environment"], str)


def test_render_geometry():
    response = client.post("/api/render", json={"spec": RIGHT_TRIANGLE_SPEC})
    assert response.status_code == 200
    data = response.json()
    assert data["type"] == "geometry"
    assert data["kind"] == "svg"
    assert data["markup"].startswith("<svg")
    summary = data["summary"]
    assert summary["tag_counts"]["svg"] == 1
    assert summary["class_counts"]["geo-segment"] == 3
    assert summary["width"] == 360


def test_render_function_graph_paths_in_box():
    data = client.post("/api/render", json={"spec": FUNCTION_SPEC}).json()
    xmin, ymin, xmax, ymax = data["summary"]["path_bounds"]
    assert xmin >= 39.99 and xmax <= 340.01
    assert ymin >= 39.99 and ymax <= 260.01


def test_render_without_spec():
    data = client.post("/api/render", json={}).json()
    assert data["kind"] == "error"
    assert "diagram-error" in data["markup"]
    assert data["summary"] is None


def test_render_unknown_type_without_elements():
    data = client.post("/api/render", json={"spec": {"type": "mind_map", "title": "Ideas"}}).json()
    assert data["kind"] == "note"
    assert "Figure: Ideas" in data["markup"]


def test_render_document():
    page = "<main><h2>Cells</h2>" + _container(CELL_SPEC) + _container("{broken") + "</main>"
    response = client.post("/api/render/document", json={"html": page})
    assert response.status_code == 200
    data = response.json()
    assert data["report"] == {"rendered": 1, "failed": 1, "skipped": 0}
    assert data["html"].startswith("<main><h2>Cells</h2>")
    assert data["html"].count('data-rendered="true"') == 2
    assert "Diagram data could not be read" in data["html"]


def test_render_document_twice_is_stable():
    page = _container(CELL_SPEC) + _container(RIGHT_TRIANGLE_SPEC)
    first = client.post("/api/render/document", json={"html": page}).json()
    second = client.post("/api/render/document", json={"html": first["html"]}).json()
    assert second["report"] == {"rendered": 0, "failed": 0, "skipped": 2}
    assert second["html"] == first["html"]
