"""Optional rendering collaborators — molecule drawing, flow layout, charting.

Each collaborator exposes ``present()`` (a cheap availability probe) and an
async ``render(...)`` returning finished markup. Renderers call them only
through this narrow interface and fall back to their own primitive drawing
when a collaborator is absent or raises.
"""

from __future__ import annotations

import asyncio
import importlib.util
import io
import logging
import re
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from figura.config import settings
from figura.models.spec import ClimateSeries, FlowEdge, FlowNode

logger = logging.getLogger(__name__)


class CollaboratorError(RuntimeError):
    """A collaborator was called and could not produce output."""


@runtime_checkable
class MoleculeDrawer(Protocol):
    def present(self) -> bool: ...

    async def render(self, notation: str, name: str = "") -> str: ...


@runtime_checkable
class FlowLayout(Protocol):
    def present(self) -> bool: ...

    async def render(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> str: ...


@runtime_checkable
class ClimateCharter(Protocol):
    def present(self) -> bool: ...

    async def render(self, series: ClimateSeries) -> str: ...


@dataclass
class Collaborators:
    """The optional capabilities wired into one engine instance."""

    molecule: MoleculeDrawer | None = None
    flow: FlowLayout | None = None
    climate: ClimateCharter | None = None

    @classmethod
    def default(cls) -> Collaborators:
        """Collaborators available in this process without extra wiring."""
        return cls(climate=MatplotlibClimateCharter())


def available(collaborator: object | None) -> bool:
    """True if the collaborator is wired in and its probe succeeds."""
    if collaborator is None:
        return False
    try:
        return bool(collaborator.present())
    except Exception as e:
        logger.warning("Collaborator probe %s failed: %s", type(collaborator).__name__, e)
        return False


# ── Flow layout via a mermaid runner ──────────────────────────────────────

MermaidRunner = Callable[[str], Awaitable[str]]

_SHAPES = {
    "diamond": ("{", "}"),
    "circle": ("((", "))"),
    "round": ("(", ")"),
}


def _mermaid_id(node_id: str) -> str:
    return re.sub(r"\W", "_", node_id) or "_"


def _mermaid_text(value: str) -> str:
    return value.replace('"', "#quot;").replace("\n", " ")


def mermaid_source(nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> str:
    """Left-to-right mermaid graph source for the given nodes and edges."""
    lines = ["graph LR"]
    known = set()
    for node in nodes:
        known.add(node.id)
        opener, closer = _SHAPES.get(node.shape, ("[", "]"))
        label = _mermaid_text(node.text or node.id)
        lines.append(f'    {_mermaid_id(node.id)}{opener}"{label}"{closer}')
    for edge in edges:
        if edge.start not in known or edge.end not in known:
            continue
        link = f'-->|"{_mermaid_text(edge.label)}"|' if edge.label else "-->"
        lines.append(f"    {_mermaid_id(edge.start)} {link} {_mermaid_id(edge.end)}")
    return "\n".join(lines)


class MermaidFlowLayout:
    """Flow layout delegating to an injected mermaid runner (source -> SVG)."""

    def __init__(self, runner: MermaidRunner | None = None) -> None:
        self.runner = runner

    def present(self) -> bool:
        return self.runner is not None

    async def render(self, nodes: Sequence[FlowNode], edges: Sequence[FlowEdge]) -> str:
        if self.runner is None:
            raise CollaboratorError("No mermaid runner configured")
        source = mermaid_source(nodes, edges)
        try:
            markup = await self.runner(source)
        except Exception as e:
            raise CollaboratorError(f"Mermaid runner failed: {e}") from e
        if not markup or "<svg" not in markup:
            raise CollaboratorError("Mermaid runner returned no SVG")
        return markup


# ── Climate chart via matplotlib ──────────────────────────────────────────

_BAR_COLOR = (37 / 255, 99 / 255, 235 / 255, 0.5)
_LINE_COLOR = "#dc2626"


class MatplotlibClimateCharter:
    """Dual-axis climate chart (precipitation bars, temperature line) as SVG."""

    def present(self) -> bool:
        return settings.enable_matplotlib_charts and importlib.util.find_spec("matplotlib") is not None

    async def render(self, series: ClimateSeries) -> str:
        return await asyncio.to_thread(self._draw, series)

    def _draw(self, series: ClimateSeries) -> str:
        from matplotlib.figure import Figure

        n = len(series.months)
        temps = series.temperature[:n]
        precip = series.precipitation[:n]
        if n == 0 or (not temps and not precip):
            raise CollaboratorError("Climate series is empty")

        fig = Figure(figsize=(4.0, 2.8), dpi=100)
        ax = fig.add_subplot()
        ax.bar(range(len(precip)), precip, color=_BAR_COLOR)
        ax.set_ylim(0, max(max(precip, default=0.0), 1.0) * 1.1)
        ax.set_ylabel("Precipitation (mm)", fontsize=8)
        ax.set_xticks(range(n), series.months, fontsize=7)

        ax2 = ax.twinx()
        if temps:
            ax2.plot(range(len(temps)), temps, color=_LINE_COLOR, marker="o", markersize=3)
            ax2.set_ylim(min(temps) - 5, max(temps) + 5)
        ax2.set_ylabel("Temperature (°C)", fontsize=8)

        if series.city:
            ax.set_title(f"{series.city} climate chart", fontsize=10)
        fig.tight_layout()

        buf = io.StringIO()
        fig.savefig(buf, format="svg")
        markup = buf.getvalue()
        # drop the XML prolog and doctype, keep the <svg> element
        start = markup.find("<svg")
        return markup[start:] if start >= 0 else markup
