"""Molecules: delegated to the structure-drawing collaborator, with a text fallback."""

from __future__ import annotations

import logging
from html import escape

from figura.engine.collaborators import available
from figura.engine.context import RenderContext
from figura.engine.registry import renderer
from figura.engine.renderers._common import MUTED, SLATE, canvas, caption
from figura.models.spec import DiagramType, MoleculeData
from figura.models.svg_document import Placeholder, RawMarkup, RenderOutput, SvgElement
from figura.svg import primitives as P

logger = logging.getLogger(__name__)

W, H = 360, 140
_FAILED = "#991b1b"


def molecule_fallback(data: MoleculeData, title: str | None, ctx: RenderContext, failed: bool = False) -> SvgElement:
    """The notation itself as text, optionally marked as unparsable."""
    root = canvas(ctx, W, H)
    notation = f"SMILES: {data.smiles}" + (" (parse failed)" if failed else "")
    root.append(P.text(W / 2, H / 2 - 12, notation, font_size=14, fill=_FAILED if failed else MUTED,
                       cls="molecule-notation"))
    if data.name:
        root.append(P.text(W / 2, H / 2 + 16, data.name, bold=True, fill=SLATE, cls="molecule-name"))
    caption(root, W, H, title)
    return root


@renderer(DiagramType.MOLECULE, data_model=MoleculeData)
async def render_molecule(data: MoleculeData, title: str | None, ctx: RenderContext) -> RenderOutput:
    smiles = data.smiles.strip()
    if not smiles:
        return Placeholder(message="Molecule notation is empty; nothing to draw")

    drawer = ctx.collaborators.molecule
    if not available(drawer):
        logger.info("No molecule drawer available, drawing notation text")
        return molecule_fallback(data, title, ctx)

    try:
        markup = await drawer.render(smiles, data.name)
    except Exception as e:
        logger.warning("Molecule drawer failed for %r: %s", smiles, e)
        return molecule_fallback(data, title, ctx, failed=True)
    if not markup or not markup.strip():
        logger.warning("Molecule drawer returned nothing for %r", smiles)
        return molecule_fallback(data, title, ctx, failed=True)

    if data.name:
        markup = (
            f'<figure class="molecule">{markup}'
            f"<figcaption>{escape(data.name, quote=False)}</figcaption></figure>"
        )
    return RawMarkup(markup=markup, media_type="text/html" if data.name else "image/svg+xml", source="molecule")
