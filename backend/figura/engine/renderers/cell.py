"""Cell structure diagrams (animal or plant).

Organelles are drawn at fixed offsets from the cell centre. An empty
structure list means membrane plus nucleus. Chloroplasts, vacuoles and the
cell wall are plant-only: requesting them for an animal cell draws nothing.
"""

from __future__ import annotations

from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import BLUE, GREEN, canvas, caption
from figura.models.spec import CellData, DiagramType
from figura.models.svg_document import SvgElement
from figura.svg import primitives as P

W, H = 380, 300

DEFAULT_STRUCTURES = frozenset({"cell_membrane", "nucleus"})
PLANT_ONLY = frozenset({"chloroplast", "vacuole", "cell_wall"})

_ALIASES = {
    "membrane": "cell_membrane",
    "plasma_membrane": "cell_membrane",
    "wall": "cell_wall",
    "mitochondrion": "mitochondria",
    "ribosomes": "ribosome",
    "er": "endoplasmic_reticulum",
    "golgi_apparatus": "golgi",
    "golgi_body": "golgi",
    "chloroplasts": "chloroplast",
    "vacuoles": "vacuole",
}

# Highlight palette: (fill, stroke, accent)
_HL = ("#fef3c7", "#d97706", "#fbbf24")


def structure_key(name: str) -> str:
    key = name.strip().lower().replace(" ", "_").replace("-", "_")
    return _ALIASES.get(key, key)


def _label(root: SvgElement, show: bool, x: float, y: float, text: str, color: str) -> None:
    if show:
        root.append(P.text(x, y, text, font_size=10, fill=color, cls="organelle-label"))


@renderer(DiagramType.CELL, data_model=CellData)
def render_cell(data: CellData, title: str | None, ctx: RenderContext) -> SvgElement:
    plant = data.cell_type.strip().lower() == "plant"
    requested = {structure_key(s) for s in data.structures} or set(DEFAULT_STRUCTURES)
    if not plant:
        requested -= PLANT_ONLY
    highlighted = {structure_key(s) for s in data.highlighted}
    show = data.labels
    cx, cy = W / 2, H / 2 - 10

    def hl(name: str) -> bool:
        return name in highlighted

    root = canvas(ctx, W, H)

    if plant:
        wall_hl = hl("cell_wall")
        root.append(P.rect(cx - 130, cy - 95, 260, 190, fill="#f0fdf4", stroke=_HL[1] if wall_hl else GREEN,
                           stroke_width=3, rx=8, cls="cell-wall"))

    if "cell_membrane" in requested:
        stroke = _HL[1] if hl("cell_membrane") else BLUE
        if plant:
            root.append(P.rect(cx - 120, cy - 85, 240, 170, fill="#eff6ff", stroke=stroke, rx=6, dashed=True,
                               cls="cell-membrane"))
        else:
            root.append(P.ellipse(cx, cy, 130, 90, fill="#eff6ff", stroke=stroke, cls="cell-membrane"))

    if "nucleus" in requested:
        on = hl("nucleus")
        root.append(P.circle(cx - 20, cy, 35, fill=_HL[0] if on else "#e0e7ff", stroke=_HL[1] if on else "#4f46e5",
                             cls="nucleus"))
        root.append(P.circle(cx - 20, cy, 10, fill=_HL[2] if on else "#818cf8", stroke="none", stroke_width=0,
                             cls="nucleolus"))
        _label(root, show, cx - 20, cy + 48, "Nucleus", "#4f46e5")

    if "mitochondria" in requested:
        on = hl("mitochondria")
        mx, my = cx + 60, cy - 30
        stroke = _HL[1] if on else GREEN
        root.append(P.ellipse(mx, my, 22, 12, fill=_HL[0] if on else "#dcfce7", stroke=stroke, cls="mitochondria"))
        root.append(P.path(f"M{mx - 12},{my - 4} Q{mx},{my - 10} {mx + 12},{my - 4}", stroke=stroke, stroke_width=1))
        root.append(P.path(f"M{mx - 10},{my + 4} Q{mx},{my + 10} {mx + 10},{my + 4}", stroke=stroke, stroke_width=1))
        _label(root, show, mx, my + 22, "Mitochondrion", GREEN)

    if "ribosome" in requested:
        on = hl("ribosome")
        for rx, ry in ((cx + 40, cy + 20), (cx + 55, cy + 10), (cx + 30, cy + 35), (cx + 50, cy + 30)):
            root.append(P.circle(rx, ry, 3, fill=_HL[2] if on else "#6366f1", stroke="none", stroke_width=0,
                                 cls="ribosome"))
        _label(root, show, cx + 55, cy + 45, "Ribosomes", "#6366f1")

    if "endoplasmic_reticulum" in requested:
        stroke = _HL[1] if hl("endoplasmic_reticulum") else "#a855f7"
        ex, ey = cx - 70, cy - 20
        for dy in (0, 12):
            d = (f"M{ex},{ey + dy} Q{ex + 15},{ey + dy - 15} {ex + 30},{ey + dy} "
                 f"Q{ex + 45},{ey + dy + 15} {ex + 60},{ey + dy}")
            root.append(P.path(d, stroke=stroke, stroke_width=1.5, cls="endoplasmic-reticulum"))
        _label(root, show, ex + 30, ey + 30, "ER", "#a855f7")

    if "golgi" in requested:
        stroke = _HL[1] if hl("golgi") else "#ea580c"
        gx, gy = cx + 70, cy + 10
        for i in range(4):
            y = gy + i * 6
            root.append(P.path(f"M{gx - 18},{y} Q{gx},{y - 5} {gx + 18},{y}", stroke=stroke, stroke_width=1.5,
                               cls="golgi"))
        _label(root, show, gx, gy + 32, "Golgi apparatus", "#ea580c")

    if "chloroplast" in requested:
        on = hl("chloroplast")
        kx, ky = cx - 80, cy + 30
        root.append(P.ellipse(kx, ky, 25, 14, fill=_HL[0] if on else "#bbf7d0", stroke=_HL[1] if on else "#15803d",
                              cls="chloroplast"))
        for i in (-1, 0, 1):
            root.append(P.rect(kx + i * 12 - 4, ky - 6, 8, 12, fill=_HL[2] if on else "#15803d", stroke="none",
                               stroke_width=0, rx=2))
        _label(root, show, kx, ky + 24, "Chloroplast", "#15803d")

    if "vacuole" in requested:
        on = hl("vacuole")
        root.append(P.ellipse(cx + 20, cy + 20, 40, 25, fill=_HL[0] if on else "#e0f2fe",
                              stroke=_HL[1] if on else "#0284c7", stroke_width=1.5, dasharray="4,3", cls="vacuole"))
        _label(root, show, cx + 20, cy + 55, "Vacuole", "#0284c7")

    heading = "Plant cell structure" if plant else "Animal cell structure"
    root.append(P.text(W / 2, 18, heading, font_size=12, fill=GREEN if plant else BLUE, bold=True))

    caption(root, W, H, title)
    return root
