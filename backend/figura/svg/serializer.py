"""Write SVG / placeholder markup from rendered output."""

from __future__ import annotations

from html import escape

from figura.models.svg_document import Placeholder, RawMarkup, RenderOutput, SvgElement

_ERROR_STYLE = (
    "padding:16px;background:#fef2f2;border:1px solid #fecaca;border-radius:8px;"
    "color:#991b1b;font-size:13px;text-align:center;"
)
_NOTE_STYLE = (
    "padding:16px;background:#f8fafc;border:1px solid #e2e8f0;border-radius:8px;"
    "color:#475569;font-size:13px;text-align:center;"
)


def serialize_element(elem: SvgElement, indent: int = 0) -> str:
    """Generate SVG markup for an element tree."""
    pad = "  " * indent
    attr_str = "".join(f' {k}="{escape(v, quote=True)}"' for k, v in elem.attributes.items())

    if not elem.children and elem.text is None:
        return f"{pad}<{elem.tag}{attr_str} />"

    if not elem.children:
        return f"{pad}<{elem.tag}{attr_str}>{escape(elem.text or '', quote=False)}</{elem.tag}>"

    lines = [f"{pad}<{elem.tag}{attr_str}>"]
    if elem.text:
        lines.append(f"{pad}  {escape(elem.text, quote=False)}")
    for child in elem.children:
        lines.append(serialize_element(child, indent + 1))
    lines.append(f"{pad}</{elem.tag}>")
    return "\n".join(lines)


def serialize_placeholder(placeholder: Placeholder) -> str:
    if placeholder.kind == "error":
        return (
            f'<div class="diagram-error" style="{_ERROR_STYLE}">'
            f"⚠ {escape(placeholder.message, quote=False)}</div>"
        )
    return (
        f'<div class="diagram-note" style="{_NOTE_STYLE}">'
        f"{escape(placeholder.message, quote=False)}</div>"
    )


def serialize_output(output: RenderOutput) -> str:
    """Markup for whatever a renderer produced."""
    if isinstance(output, SvgElement):
        return serialize_element(output)
    if isinstance(output, RawMarkup):
        return output.markup
    return serialize_placeholder(output)
