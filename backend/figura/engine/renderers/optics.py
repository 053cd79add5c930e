"""Thin-lens ray diagrams on a horizontal optical axis."""

from __future__ import annotations

import math
from dataclasses import dataclass

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import BLUE, CAPTION, GREEN, ORANGE, RED, canvas, caption
from figura.models.spec import DiagramType, OpticsData, OpticsElement
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P
from figura.utils.geometry import Pt, clip_segment, unit
from figura.utils.mapper import normalize_range

W, H = 400, 240
PAD = 30
LENS_HALF_HEIGHT = 70


@dataclass(frozen=True)
class ThinLensImage:
    """Image formed by a thin lens, in axis units.

    ``distance`` is measured from the lens, positive on the far side (real
    image). ``height`` is signed, positive above the axis.
    """

    distance: float
    position: float
    height: float
    magnification: float

    @property
    def size(self) -> float:
        return abs(self.height)

    @property
    def real(self) -> bool:
        return self.distance > 0


def thin_lens_image(
    lens_position: float,
    focal_length: float,
    object_position: float,
    object_height: float,
    eps: float = 1.0,
) -> ThinLensImage | None:
    """Solve the thin-lens equation; None when the object is within ``eps`` of the lens or focus.

    With u the object distance (lens minus object position), v = f·u / (u − f)
    and the magnification is −v/u.
    """
    u = lens_position - object_position
    if abs(u) <= eps or abs(u - focal_length) <= eps:
        return None
    v = focal_length * u / (u - focal_length)
    magnification = -v / u
    return ThinLensImage(
        distance=v,
        position=lens_position + v,
        height=magnification * object_height,
        magnification=magnification,
    )


def _lens(root: SvgElement, px: float, cy: float, bulge: float) -> None:
    top, bottom = cy - LENS_HALF_HEIGHT, cy + LENS_HALF_HEIGHT
    for side in (1, -1):
        d = f"M{P.fmt(px)},{P.fmt(top)} Q{P.fmt(px + side * bulge)},{P.fmt(cy)} {P.fmt(px)},{P.fmt(bottom)}"
        root.append(P.path(d, stroke=BLUE, stroke_width=2.5, cls="lens"))


def _arrow(root: SvgElement, x: float, base: float, tip: float, color: str, dashed: bool, cls: str) -> None:
    root.append(P.line(x, base, x, tip, stroke=color, stroke_width=2.5, dashed=dashed, cls=cls))
    head = 10 if tip < base else -10
    root.append(P.polygon([(x, tip), (x - 5, tip + head), (x + 5, tip + head)], fill=color, stroke="none",
                          stroke_width=0, cls=f"{cls}-head"))


def _ray(root: SvgElement, p1: Pt, p2: Pt, dashed: bool = False) -> None:
    seen = clip_segment(p1, p2, (0, 0, W, H))
    if seen is not None:
        root.append(P.line(*seen[0], *seen[1], stroke=RED, stroke_width=1.5, dashed=dashed, cls="ray"))


def _extend(p1: Pt, p2: Pt) -> Pt:
    """A point far along p1→p2, past the canvas edge."""
    ux, uy = unit(p2[0] - p1[0], p2[1] - p1[1])
    reach = W + H
    return (p2[0] + ux * reach, p2[1] + uy * reach)


@renderer(DiagramType.OPTICS, data_model=OpticsData)
def render_optics(data: OpticsData, title: str | None, ctx: RenderContext) -> SvgElement:
    """Lens, object arrow, image arrow and the two principal rays."""
    cfg = ctx.config
    lo, hi = normalize_range(data.axis_range, cfg.optics_range)
    sx = (W - 2 * PAD) / (hi - lo)
    cy = H / 2

    def tx(x: float) -> float:
        return PAD + (x - lo) * sx

    lens: OpticsElement | None = None
    obj: OpticsElement | None = None
    for el in data.elements:
        if el.type in ("convex_lens", "concave_lens"):
            lens = el
        elif el.type == "object":
            obj = el

    focal = None
    if lens is not None:
        focal = abs(lens.focal_length or cfg.default_focal_length)
        if lens.type == "concave_lens":
            focal = -focal

    image = None
    obj_height = cfg.default_object_height
    if obj is not None:
        obj_height = obj.height if obj.height is not None else cfg.default_object_height
        if lens is not None and focal:
            image = thin_lens_image(lens.position, focal, obj.position, obj_height, cfg.optics_singular_eps)

    # vertical scale: half the axis scale, shrunk so both arrows fit above/below the axis
    tallest = max(abs(obj_height), image.size if image is not None else 0.0, 1e-9)
    sy = min(sx * 0.5, (cy - PAD - 10) / tallest)

    root = canvas(ctx, W, H)
    root.append(P.line(PAD, cy, W - PAD, cy, stroke=CAPTION, stroke_width=1, dashed=True, cls="optical-axis"))

    if lens is not None:
        lx = tx(lens.position)
        if lens.type == "convex_lens":
            _lens(root, lx, cy, 12)
            for fx, name in ((lx - focal * sx, "F"), (lx + focal * sx, "F'")):
                if PAD <= fx <= W - PAD:
                    root.append(P.circle(fx, cy, 3, fill=BLUE, stroke="none", stroke_width=0, cls="focal-point"))
                    root.append(P.text(fx, cy + 16, name, font_size=10, fill=BLUE))
        else:
            _lens(root, lx, cy, -10)

    if obj is not None:
        ox = tx(obj.position)
        top = cy - obj_height * sy
        _arrow(root, ox, cy, top, GREEN, False, "object")
        root.append(P.text(ox - 10, top - 8 if obj_height >= 0 else top + 14, "object", font_size=11, fill=GREEN,
                           bold=True))

    if image is not None and lens is not None and obj is not None:
        lx, ox = tx(lens.position), tx(obj.position)
        ix = tx(image.position)
        obj_top = (ox, cy - obj_height * sy)
        img_top = (ix, cy - image.height * sy)
        visible = PAD < ix < W - PAD and math.isfinite(ix)

        if visible:
            _arrow(root, ix, cy, img_top[1], ORANGE, not image.real, "image")
            root.append(P.text(ix + 10, img_top[1], "image", font_size=11, fill=ORANGE, bold=True))

        if data.rays:
            at_lens = (lx, obj_top[1])
            # parallel ray, refracted through (or away from) the far focus
            _ray(root, obj_top, at_lens)
            # ray through the optical centre, undeviated
            centre = (lx, cy)
            if image.real:
                _ray(root, at_lens, img_top)
                _ray(root, obj_top, img_top)
            else:
                _ray(root, at_lens, _extend(img_top, at_lens))
                _ray(root, obj_top, _extend(obj_top, centre))
                _ray(root, at_lens, img_top, dashed=True)
                _ray(root, centre, img_top, dashed=True)

    caption(root, W, H, title)
    return root
