"""
Core theory primitives.

These are the value types everything else composes on:
- Interval: Line-of-fifths position plus octave count (an abelian group)
- Letter, Accidental, NoteName: Spelled note names (a torsor over Interval)
- Pitch: A NoteName in a specific octave
- spelling: Enharmonic spelling selector for chromatic transposition
- ScaleDefinition, ScaleDegree, Scale, Key: Scales and degree resolution
- ChordQuality, HarmonicFunction, Chord: Chords and their classification
"""

from chuk_mcp_theory.core.chord import Chord, ChordQuality, HarmonicFunction
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import Accidental, Letter, NoteName
from chuk_mcp_theory.core.pitch import Pitch
from chuk_mcp_theory.core.scale import Key, Scale, ScaleDefinition, ScaleDegree
from chuk_mcp_theory.core.spelling import (
    SpellingCandidate,
    SpellingPenalty,
    choose_spelling,
    transpose_chromatic,
)

__all__ = [
    # Interval
    "Interval",
    # Notes
    "Letter",
    "Accidental",
    "NoteName",
    "Pitch",
    # Spelling
    "SpellingCandidate",
    "SpellingPenalty",
    "choose_spelling",
    "transpose_chromatic",
    # Scale
    "ScaleDefinition",
    "ScaleDegree",
    "Scale",
    "Key",
    # Chord
    "ChordQuality",
    "HarmonicFunction",
    "Chord",
]
