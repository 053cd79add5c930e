"""Geographic figures: climate charts, anything else via generic primitives."""

from __future__ import annotations

import logging

from figura.engine.collaborators import available
from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import MUTED, RED, canvas, caption
from figura.engine.renderers.generic import generic_figure
from figura.models.spec import ClimateSeries, DiagramType, GenericData, GeographicData
from figura.models.svg_document import RawMarkup, RenderOutput, SvgElement
from figura.svg import primitives as P
from figura.utils.labels import normalize_label
from figura.utils.mapper import CoordinateMapper

logger = logging.getLogger(__name__)

W, H = 400, 280
PAD = 50
CLIMATE_SUBTYPES = {"climate_chart", "climate"}
_BAR_FILL = "rgba(37,99,235,0.5)"


def climate_series(data: GeographicData) -> ClimateSeries:
    """Series with month labels defaulted to 1..12 and values truncated to the month count."""
    series = data.series()
    months = series.months or [str(m) for m in range(1, 13)]
    n = len(months)
    return ClimateSeries(
        city=series.city,
        months=months,
        temperature=series.temperature[:n],
        precipitation=series.precipitation[:n],
    )


def climate_fallback(series: ClimateSeries, title: str | None, ctx: RenderContext) -> SvgElement:
    """Precipitation bars (zero-based) and a temperature line (data range ±5) over shared months."""
    n = len(series.months)
    temps, precip = series.temperature, series.precipitation
    plot_w = W - 2 * PAD

    precip_map = CoordinateMapper.stretch((0, n), (0, max(max(precip, default=0.0), 1.0)), W, H, PAD)
    t_lo = min(temps, default=0.0) - 5
    t_hi = max(temps, default=0.0) + 5
    temp_map = CoordinateMapper.stretch((0, n), (t_lo, t_hi), W, H, PAD)

    root = canvas(ctx, W, H)
    if series.city:
        root.append(P.text(W / 2, 20, f"{normalize_label(series.city)} climate chart", bold=True,
                           cls="chart-heading"))

    bar_w = plot_w / n * 0.6
    base = precip_map.map_y(0)
    for i, p in enumerate(precip):
        y = min(precip_map.map_y(p), base)
        root.append(P.element("rect", {
            "x": precip_map.map_x(i + 0.5) - bar_w / 2, "y": y, "width": bar_w, "height": max(base - y, 0),
            "fill": _BAR_FILL, "stroke": "#2563eb", "stroke-width": 1, "class": "precipitation-bar",
        }))

    points = [temp_map.map_point(i + 0.5, t) for i, t in enumerate(temps)]
    if points:
        root.append(P.path(P.polyline_d(points), stroke=RED, cls="temperature-line"))
        for x, y in points:
            root.append(P.circle(x, y, 3, fill=RED, stroke="#fff", stroke_width=1, cls="temperature-point"))

    for i, month in enumerate(series.months):
        root.append(P.text(precip_map.map_x(i + 0.5), H - PAD + 14, month, font_size=9, fill=MUTED))
    root.append(P.text(PAD - 6, PAD, "mm", font_size=9, fill=MUTED, anchor="end"))
    root.append(P.text(W - PAD + 6, PAD, "°C", font_size=9, fill=RED, anchor="start"))

    caption(root, W, H, title)
    return root


@renderer(DiagramType.GEOGRAPHIC, data_model=GeographicData)
async def render_geographic(data: GeographicData, title: str | None, ctx: RenderContext) -> RenderOutput:
    if data.subtype.strip().lower() not in CLIMATE_SUBTYPES:
        generic = GenericData.model_validate({
            "description": data.description or "Geographic figure",
            "elements": data.elements,
        })
        return generic_figure(generic, title, ctx)

    series = climate_series(data)
    charter = ctx.collaborators.climate
    if available(charter):
        try:
            markup = await charter.render(series)
            return RawMarkup(markup=markup, source="climate")
        except Exception as e:
            logger.warning("Climate charter failed, drawing primitive chart: %s", e)
    return climate_fallback(series, title, ctx)
