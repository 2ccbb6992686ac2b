"""
Constants and enums for the theory engine.

No magic strings - use enums for constrained values.
"""

import os
from enum import Enum


class SymbolStyle(str, Enum):
    """Glyph family used when rendering accidentals."""

    ASCII = "ascii"  # b, #, bb, ##
    UNICODE = "unicode"  # ♭, ♯, 𝄫, 𝄪


class KeyMode(str, Enum):
    """Mode of a key signature."""

    MAJOR = "major"
    MINOR = "minor"


# Default glyph style for tool output
DEFAULT_SYMBOL_STYLE = SymbolStyle(os.environ.get("CHUK_THEORY_SYMBOLS", SymbolStyle.ASCII.value))

# Semitone offset of each diatonic step from C (C D E F G A B)
DIATONIC_SEMITONES: tuple[int, ...] = (0, 2, 4, 5, 7, 9, 11)

# Valid range of line-of-fifths coordinates (Fbb .. B##)
MIN_COORDINATE = -15
MAX_COORDINATE = 19

# Scale degrees are steps 1-7
MAX_SCALE_STEPS = 7


class ErrorMessages:
    """Standardized error messages."""

    SCALE_NOT_FOUND = "Scale '{name}' not found."
    NOTE_NOT_IN_SCALE = "Note '{note}' cannot be placed in {scale}."
    UNKNOWN_TRANSFORM = "Unknown transform '{code}'. Expected P, R or L."
    UNKNOWN_QUALITY = "Unknown chord quality '{quality}'. Expected major or minor."
    EMPTY_CHORD = "A chord needs at least one note."
    INVALID_KEY = "Invalid key: '{key}'. Expected format like 'C_major' or 'D_minor'."


class SuccessMessages:
    """Standardized success messages."""

    SCALE_COPIED = "Copied scale '{name}' to {path}."
