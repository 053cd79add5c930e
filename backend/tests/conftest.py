"""Shared test fixtures."""

from __future__ import annotations

import asyncio
import re

import pytest

from figura.engine.collaborators import Collaborators
from figura.engine.config import RenderConfig
from figura.engine.context import RenderContext
from figura.engine.dispatcher import Dispatcher
from figura.engine.ids import IdAllocator


# Representative specs, as the upstream generator emits them (camelCase keys)

RIGHT_TRIANGLE_SPEC = {
    "type": "geometry",
    "title": "Right triangle ABC",
    "data": {
        "points": [
            {"id": "A", "x": 0, "y": 0},
            {"id": "B", "x": 4, "y": 0},
            {"id": "C", "x": 0, "y": 3},
        ],
        "segments": [["A", "B"], ["B", "C"], ["C", "A"]],
        "angles": [{"vertex": "A", "value": "90°", "mark": True}],
        "labels": [{"from": "A", "to": "B", "text": "4"}],
    },
}

FUNCTION_SPEC = {
    "type": "function_graph",
    "title": "y = 1/x",
    "data": {
        "xRange": [-5, 5],
        "yRange": [-5, 5],
        "functions": [{"expr": "1/x", "label": "y=1/x"}],
        "asymptotes": [{"type": "vertical", "value": 0}, {"type": "horizontal", "value": 0}],
        "points": [{"x": 1, "y": 1, "label": "(1,1)", "style": "hollow"}],
    },
}

OPTICS_SPEC = {
    "type": "optics",
    "data": {
        "axisRange": [-30, 30],
        "elements": [
            {"type": "convex_lens", "position": 0, "focalLength": 10},
            {"type": "object", "position": -20, "height": 4},
        ],
        "rays": True,
    },
}

FORCE_INCLINE_SPEC = {
    "type": "force",
    "data": {
        "object": {"label": "m"},
        "surface": {"type": "incline", "angle": 30},
        "forces": [
            {"direction": "gravity", "magnitude": "medium", "label": "G"},
            {"direction": "normal", "magnitude": "medium", "label": "N"},
            {"direction": "friction_up", "magnitude": "small", "label": "f"},
        ],
    },
}

CELL_SPEC = {
    "type": "cell",
    "data": {
        "cellType": "plant",
        "structures": ["cell_membrane", "nucleus", "chloroplast", "vacuole"],
        "highlighted": ["nucleus"],
    },
}

CLIMATE_SPEC = {
    "type": "geographic",
    "title": "Shanghai",
    "data": {
        "subtype": "climate_chart",
        "climate_chart": {
            "city": "Shanghai",
            "months": [str(m) for m in range(1, 13)],
            "temperature": [4, 6, 10, 15, 21, 25, 29, 29, 25, 19, 13, 7],
            "precipitation": [50, 60, 90, 100, 110, 170, 150, 200, 130, 60, 50, 40],
        },
    },
}

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")


def path_points(d: str) -> list[tuple[float, float]]:
    """All coordinate pairs in M/L path data."""
    nums = [float(n) for n in _NUMBER_RE.findall(d)]
    return list(zip(nums[0::2], nums[1::2]))


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def ctx() -> RenderContext:
    return RenderContext(ids=IdAllocator(prefix="t"), collaborators=Collaborators(), config=RenderConfig())


@pytest.fixture
def dispatcher(ctx) -> Dispatcher:
    return Dispatcher(ctx)
