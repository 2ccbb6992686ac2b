"""
Display glyphs for accidentals.

Glyph choice is a rendering concern only. Core types store semitone
offsets and call into this module when producing text.
"""

from __future__ import annotations

from chuk_mcp_theory.constants import DEFAULT_SYMBOL_STYLE, SymbolStyle

# Indexed by semitone offset + 2 (double flat .. double sharp)
_GLYPHS: dict[SymbolStyle, tuple[str, ...]] = {
    SymbolStyle.ASCII: ("bb", "b", "", "#", "##"),
    SymbolStyle.UNICODE: ("𝄫", "♭", "", "♯", "𝄪"),
}

_NATURAL_SIGN: dict[SymbolStyle, str] = {
    SymbolStyle.ASCII: "n",
    SymbolStyle.UNICODE: "♮",
}

# Every accepted spelling of an accidental, mapped to its semitone offset
ACCIDENTAL_TOKENS: dict[str, int] = {
    "": 0,
    "n": 0,
    "♮": 0,
    "b": -1,
    "♭": -1,
    "#": 1,
    "♯": 1,
    "bb": -2,
    "♭♭": -2,
    "𝄫": -2,
    "##": 2,
    "♯♯": 2,
    "x": 2,
    "𝄪": 2,
}


def accidental_glyph(
    offset: int,
    style: SymbolStyle = SymbolStyle.ASCII,
    explicit_natural: bool = False,
) -> str:
    """
    Glyph for a semitone offset in the range -2..2.

    Args:
        offset: Semitone offset (-2 = double flat, 2 = double sharp)
        style: Glyph family
        explicit_natural: Render 0 as a natural sign instead of nothing

    Returns:
        The glyph string
    """
    if offset == 0 and explicit_natural:
        return _NATURAL_SIGN[SymbolStyle(style)]
    return _GLYPHS[SymbolStyle(style)][offset + 2]


def flat_sign(style: SymbolStyle = SymbolStyle.ASCII) -> str:
    return accidental_glyph(-1, style)


def sharp_sign(style: SymbolStyle = SymbolStyle.ASCII) -> str:
    return accidental_glyph(1, style)


def resolve_style(
    value: str | SymbolStyle | None, default: SymbolStyle = DEFAULT_SYMBOL_STYLE
) -> SymbolStyle:
    """
    Glyph style from a user-supplied value.

    None falls back to ``default``, which is the CHUK_THEORY_SYMBOLS
    setting unless the server was started with another style.

    Raises:
        ValueError: If the value is not 'ascii' or 'unicode'
    """
    if value is None:
        return default
    return SymbolStyle(value.lower() if isinstance(value, str) else value)
