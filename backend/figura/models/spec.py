"""Diagram specification models — one validated data model per domain.

JSON from the upstream generator uses camelCase keys (``xRange``,
``focalLength``, ``cellType``); both those and the snake_case names are
accepted. Unknown keys are ignored and an explicit ``null`` falls back to
the field default. ``Infinity`` and ``NaN`` are rejected. Cross-references
(segment endpoints, angle vertices, edge ends) are NOT checked here: renderers
skip the ones that do not resolve.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class DiagramType(str, enum.Enum):
    GEOMETRY = "geometry"
    FUNCTION_GRAPH = "function_graph"
    COORDINATE = "coordinate"
    FORCE = "force"
    CIRCUIT = "circuit"
    OPTICS = "optics"
    MOLECULE = "molecule"
    REACTION = "reaction"
    APPARATUS = "apparatus"
    CELL = "cell"
    PROCESS_FLOW = "process_flow"
    GEOGRAPHIC = "geographic"
    GENERIC_SVG = "generic_svg"


class DiagramSpec(BaseModel):
    """One figure to render. ``data`` is validated later against the domain model."""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    type: str = ""
    title: str | None = None
    data: dict[str, Any] = Field(default_factory=dict)

    @field_validator("data", mode="before")
    @classmethod
    def _dict_only(cls, v: Any) -> Any:
        return v if isinstance(v, dict) else {}

    @property
    def description(self) -> str:
        desc = self.data.get("description")
        return desc if isinstance(desc, str) else ""


class _SpecModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", coerce_numbers_to_str=True, allow_inf_nan=False
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # an explicit null means "use the default"
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


def _as_list(v: Any) -> Any:
    if v is None:
        return []
    if isinstance(v, (str, dict)):
        return [v]
    return v


def _id_pairs(v: Any) -> list[tuple[str, str]]:
    """Accept ``["A", "B"]`` or ``{"from": "A", "to": "B"}``; drop anything else."""
    pairs: list[tuple[str, str]] = []
    for item in v or []:
        if isinstance(item, (list, tuple)) and len(item) >= 2:
            pairs.append((str(item[0]), str(item[1])))
        elif isinstance(item, dict) and "from" in item and "to" in item:
            pairs.append((str(item["from"]), str(item["to"])))
    return pairs


# ── Geometry ──────────────────────────────────────────────────────────────


class GeoPoint(_SpecModel):
    id: str
    x: float
    y: float


class GeoAngle(_SpecModel):
    vertex: str
    value: str | None = None
    mark: bool = False


class GeoCircle(_SpecModel):
    center: str
    radius: float
    color: str | None = None


class GeoAuxiliary(_SpecModel):
    start: str = Field(alias="from")
    end: str = Field(alias="to")
    label: str | None = None


class GeoEdgeLabel(_SpecModel):
    start: str = Field(alias="from")
    end: str = Field(alias="to")
    text: str = ""


class GeometryData(_SpecModel):
    points: list[GeoPoint] = Field(default_factory=list)
    segments: list[tuple[str, str]] = Field(default_factory=list)
    angles: list[GeoAngle] = Field(default_factory=list)
    circles: list[GeoCircle] = Field(default_factory=list)
    auxiliary: list[GeoAuxiliary] = Field(default_factory=list)
    labels: list[GeoEdgeLabel] = Field(default_factory=list)

    @field_validator("segments", mode="before")
    @classmethod
    def _segments(cls, v: Any) -> list[tuple[str, str]]:
        return _id_pairs(v)

    @field_validator("points", "angles", "circles", "auxiliary", "labels", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> Any:
        return _as_list(v)


# ── Function graph / coordinate plane ─────────────────────────────────────


class FunctionCurve(_SpecModel):
    expr: str
    color: str | None = None
    label: str | None = None
    style: str | None = None


class PlotPoint(_SpecModel):
    x: float
    y: float
    label: str | None = None
    style: str | None = None


class Asymptote(_SpecModel):
    type: str
    value: float


class FunctionGraphData(_SpecModel):
    x_range: list[float] | None = Field(default=None, alias="xRange")
    y_range: list[float] | None = Field(default=None, alias="yRange")
    grid_step: float = Field(default=1.0, alias="gridStep")
    functions: list[FunctionCurve] = Field(default_factory=list)
    points: list[PlotPoint] = Field(default_factory=list)
    asymptotes: list[Asymptote] = Field(default_factory=list)

    @field_validator("functions", mode="before")
    @classmethod
    def _functions(cls, v: Any) -> Any:
        # a bare string is a single expression
        return [{"expr": f} if isinstance(f, str) else f for f in _as_list(v)]


class PlaneVector(_SpecModel):
    start: list[float] = Field(default_factory=list, alias="from")
    end: list[float] = Field(default_factory=list, alias="to")
    label: str | None = None
    color: str | None = None


class PlaneLine(_SpecModel):
    slope: float = 0.0
    intercept: float = 0.0
    label: str | None = None
    color: str | None = None
    style: str | None = None


class CoordinateData(_SpecModel):
    x_range: list[float] | None = Field(default=None, alias="xRange")
    y_range: list[float] | None = Field(default=None, alias="yRange")
    vectors: list[PlaneVector] = Field(default_factory=list)
    lines: list[PlaneLine] = Field(default_factory=list)
    points: list[PlotPoint] = Field(default_factory=list)


# ── Physics ───────────────────────────────────────────────────────────────


class ForceBody(_SpecModel):
    label: str | None = None


class Surface(_SpecModel):
    type: str = "flat"
    angle: float = 0.0


class ForceVector(_SpecModel):
    direction: str = ""
    magnitude: str = "medium"
    label: str = ""


class ForceData(_SpecModel):
    body: ForceBody = Field(default_factory=ForceBody, alias="object")
    surface: Surface = Field(default_factory=Surface)
    forces: list[ForceVector] = Field(default_factory=list)
    annotations: list[str] = Field(default_factory=list)

    @field_validator("annotations", mode="before")
    @classmethod
    def _annotations(cls, v: Any) -> Any:
        return _as_list(v)


class CircuitComponent(_SpecModel):
    type: str = ""
    label: str | None = None


class CircuitData(_SpecModel):
    components: list[CircuitComponent] = Field(default_factory=list)


class OpticsElement(_SpecModel):
    type: str = ""
    position: float = 0.0
    focal_length: float | None = Field(default=None, alias="focalLength")
    height: float | None = None


class OpticsData(_SpecModel):
    axis_range: list[float] | None = Field(default=None, alias="axisRange")
    elements: list[OpticsElement] = Field(default_factory=list)
    rays: bool = True


# ── Chemistry ─────────────────────────────────────────────────────────────


class MoleculeData(_SpecModel):
    smiles: str = ""
    name: str = ""


class ReactionStep(_SpecModel):
    reactants: list[str] = Field(default_factory=list)
    products: list[str] = Field(default_factory=list)
    conditions: list[str] = Field(default_factory=list)
    reversible: bool = False

    @field_validator("reactants", "products", "conditions", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> Any:
        return _as_list(v)


class ReactionData(_SpecModel):
    steps: list[ReactionStep] = Field(default_factory=list)


class Equipment(_SpecModel):
    type: str = ""
    label: str | None = None
    content: str | None = None


class ApparatusData(_SpecModel):
    equipment: list[Equipment] = Field(default_factory=list)


# ── Biology ───────────────────────────────────────────────────────────────


class CellData(_SpecModel):
    cell_type: str = Field(default="animal", alias="cellType")
    structures: list[str] = Field(default_factory=list)
    highlighted: list[str] = Field(default_factory=list)
    labels: bool = True

    @field_validator("structures", "highlighted", mode="before")
    @classmethod
    def _lists(cls, v: Any) -> Any:
        return _as_list(v)


class FlowNode(_SpecModel):
    id: str
    text: str = ""
    shape: str = "rect"


class FlowEdge(_SpecModel):
    start: str = Field(alias="from")
    end: str = Field(alias="to")
    label: str | None = None


class ProcessFlowData(_SpecModel):
    nodes: list[FlowNode] = Field(default_factory=list)
    edges: list[FlowEdge] = Field(default_factory=list)


# ── Geography ─────────────────────────────────────────────────────────────


class ClimateSeries(_SpecModel):
    city: str = ""
    months: list[str] = Field(default_factory=list)
    temperature: list[float] = Field(default_factory=list)
    precipitation: list[float] = Field(default_factory=list)


class GeographicData(_SpecModel):
    subtype: str = "climate_chart"
    climate_chart: ClimateSeries | None = None
    city: str = ""
    months: list[str] = Field(default_factory=list)
    temperature: list[float] = Field(default_factory=list)
    precipitation: list[float] = Field(default_factory=list)
    description: str = ""
    elements: list[dict[str, Any]] = Field(default_factory=list)

    def series(self) -> ClimateSeries:
        """Climate data, nested under ``climate_chart`` or given flat."""
        if self.climate_chart is not None:
            return self.climate_chart
        return ClimateSeries(
            city=self.city,
            months=self.months,
            temperature=self.temperature,
            precipitation=self.precipitation,
        )


# ── Generic primitives ────────────────────────────────────────────────────


class GenericElement(_SpecModel):
    shape: str = "rect"
    x: float | None = None
    y: float | None = None
    width: float | None = None
    height: float | None = None
    cx: float | None = None
    cy: float | None = None
    r: float | None = None
    rx: float | None = None
    ry: float | None = None
    x1: float | None = None
    y1: float | None = None
    x2: float | None = None
    y2: float | None = None
    start: list[float] = Field(default_factory=list, alias="from")
    end: list[float] = Field(default_factory=list, alias="to")
    label: str | None = None
    text: str | None = None
    fill: str | None = None
    stroke: str | None = None
    font_size: float | None = Field(default=None, alias="fontSize")
    bold: bool = False
    anchor: str | None = None


class GenericData(_SpecModel):
    description: str = ""
    elements: list[GenericElement] = Field(default_factory=list)
