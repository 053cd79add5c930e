"""Scientific label normalization — TeX-ish arrows, super/subscripts to Unicode.

Generated specs often carry labels like ``H_2O``, ``Fe^{3+}`` or
``\\rightarrow``. SVG text has no markup for these, so they are folded into
plain Unicode before drawing.
"""

from __future__ import annotations

import re

_SUPERSCRIPT = str.maketrans("0123456789+-=()ni", "⁰¹²³⁴⁵⁶⁷⁸⁹⁺⁻⁼⁽⁾ⁿⁱ")
_SUBSCRIPT = str.maketrans("0123456789+-=()", "₀₁₂₃₄₅₆₇₈₉₊₋₌₍₎")

_COMMANDS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\\rightleftharpoons|\\leftrightarrow|<=>|<->|⇄"), "⇌"),
    (re.compile(r"\\longrightarrow|\\rightarrow|\\to\b|=>|->"), "→"),
    (re.compile(r"\\uparrow"), "↑"),
    (re.compile(r"\\downarrow"), "↓"),
    (re.compile(r"\\times"), "×"),
    (re.compile(r"\\div"), "÷"),
    (re.compile(r"\\leq"), "≤"),
    (re.compile(r"\\geq"), "≥"),
    (re.compile(r"\\neq"), "≠"),
    (re.compile(r"\\angle"), "∠"),
    (re.compile(r"\\Delta"), "Δ"),
    (re.compile(r"\\alpha"), "α"),
    (re.compile(r"\\beta"), "β"),
    (re.compile(r"\\gamma"), "γ"),
    (re.compile(r"\\lambda"), "λ"),
    (re.compile(r"\\mu"), "μ"),
    (re.compile(r"\\omega"), "ω"),
    (re.compile(r"\\Omega"), "Ω"),
    (re.compile(r"\\cdot"), "·"),
]

_SUP_BRACED_RE = re.compile(r"\^\{([^{}]+)\}")
_SUB_BRACED_RE = re.compile(r"_\{([^{}]+)\}")
_SUP_BARE_RE = re.compile(r"\^([A-Za-z0-9+\-=()]+)")
_SUB_BARE_RE = re.compile(r"_([A-Za-z0-9+\-=()]+)")
_CONTROL_RE = re.compile(r"[\u0000-\u0008\u000B\u000C\u000E-\u001F\u007F\uFFFD]")


def superscript(value: str) -> str:
    return value.translate(_SUPERSCRIPT)


def subscript(value: str) -> str:
    return value.translate(_SUBSCRIPT)


def normalize_label(value: object) -> str:
    """Fold TeX-style commands and ^/_ scripts into Unicode text."""
    if value is None:
        return ""
    text = _CONTROL_RE.sub("", str(value)).strip()
    for pattern, replacement in _COMMANDS:
        text = pattern.sub(replacement, text)
    text = text.replace("$", "")
    text = _SUP_BRACED_RE.sub(lambda m: superscript(m.group(1)), text)
    text = _SUB_BRACED_RE.sub(lambda m: subscript(m.group(1)), text)
    text = _SUP_BARE_RE.sub(lambda m: superscript(m.group(1)), text)
    text = _SUB_BARE_RE.sub(lambda m: subscript(m.group(1)), text)
    return re.sub(r"[ \t]{2,}", " ", text).strip()


def approx_text_width(value: str, font_size: float) -> float:
    """Rough rendered width of a label in px (no font metrics available)."""
    wide = sum(1 for ch in value if ord(ch) > 0x2E80)
    return (len(value) - wide) * font_size * 0.58 + wide * font_size
