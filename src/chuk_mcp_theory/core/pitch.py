"""
Pitch - a NoteName placed in a specific octave.

Two absolute scales are exposed:
- ``absolute``: note semitones + (octave + 2) * 12, so C-2 = 0
- ``midi_number``: standard MIDI, C4 = 60

The octave belongs to the letter, so B#3 and C4 are enharmonic and
Cb4 sounds one semitone below C4.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from chuk_mcp_theory.constants import SymbolStyle
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import Accidental, Letter, NoteName
from chuk_mcp_theory.errors import InvalidPitchError

_PITCH_PATTERN = re.compile(r"^([A-Za-z][^\d\s.-]*)(-?\d+)$")

# Plain spellings used when a pitch comes from a bare MIDI number
_SHARP_SPELLINGS: list[NoteName] = [
    NoteName.of(Letter.C),
    NoteName.of(Letter.C, Accidental.SHARP),
    NoteName.of(Letter.D),
    NoteName.of(Letter.D, Accidental.SHARP),
    NoteName.of(Letter.E),
    NoteName.of(Letter.F),
    NoteName.of(Letter.F, Accidental.SHARP),
    NoteName.of(Letter.G),
    NoteName.of(Letter.G, Accidental.SHARP),
    NoteName.of(Letter.A),
    NoteName.of(Letter.A, Accidental.SHARP),
    NoteName.of(Letter.B),
]
_FLAT_SPELLINGS: list[NoteName] = [
    NoteName.of(Letter.C),
    NoteName.of(Letter.D, Accidental.FLAT),
    NoteName.of(Letter.D),
    NoteName.of(Letter.E, Accidental.FLAT),
    NoteName.of(Letter.E),
    NoteName.of(Letter.F),
    NoteName.of(Letter.G, Accidental.FLAT),
    NoteName.of(Letter.G),
    NoteName.of(Letter.A, Accidental.FLAT),
    NoteName.of(Letter.A),
    NoteName.of(Letter.B, Accidental.FLAT),
    NoteName.of(Letter.B),
]


@dataclass(frozen=True)
class Pitch:
    """
    A spelled note in a given octave.

    Examples:
        Pitch.parse("C4") = middle C
        Pitch.parse("F#-1")
        Pitch(NoteName.parse("Bb"), 3)
    """

    note: NoteName
    octave: int

    @property
    def absolute(self) -> int:
        """Semitones above C-2."""
        return self.note.semitones + (self.octave + 2) * 12

    @property
    def midi_number(self) -> int:
        """MIDI note number. C4 = 60."""
        return self.note.semitones + (self.octave + 1) * 12

    @classmethod
    def from_midi(cls, midi_note: int, prefer_flats: bool = False) -> Pitch:
        """Spell a MIDI note number with a plain sharp or flat name."""
        spellings = _FLAT_SPELLINGS if prefer_flats else _SHARP_SPELLINGS
        octave, pitch_class = divmod(midi_note, 12)
        return cls(spellings[pitch_class], octave - 1)

    @classmethod
    def from_absolute(cls, note: NoteName, absolute: int) -> Pitch:
        """
        Place ``note`` at the octave that makes it sound ``absolute``.

        Raises:
            ValueError: If the note's pitch class does not match
        """
        octave, remainder = divmod(absolute - note.semitones, 12)
        if remainder:
            raise ValueError(f"{note} cannot sound at absolute pitch {absolute}")
        return cls(note, octave - 2)

    @classmethod
    def parse(cls, text: str) -> Pitch:
        """
        Parse a pitch like 'C4', 'C-2', 'F#-1' or 'Bbb5'.

        The octave is required and must be an integer.
        """
        match = _PITCH_PATTERN.match(text.strip())
        if not match:
            raise InvalidPitchError(text)
        note_text, octave_text = match.groups()
        return cls(NoteName.parse(note_text), int(octave_text))

    def is_enharmonic_with(self, other: Pitch) -> bool:
        """True if both pitches sound the same absolute pitch."""
        return self.absolute == other.absolute

    def transpose(self, semitones: int) -> Pitch:
        """
        Move by a number of semitones and choose the most natural spelling.

        Zero returns this pitch unchanged.
        """
        from chuk_mcp_theory.core.spelling import transpose_chromatic

        return transpose_chromatic(self, semitones)

    def spell(self, style: SymbolStyle = SymbolStyle.ASCII) -> str:
        return f"{self.note.spell(style)}{self.octave}"

    def __add__(self, other: Interval) -> Pitch:
        """Exact transposition: the interval fixes both spelling and octave."""
        if not isinstance(other, Interval):
            return NotImplemented
        return Pitch.from_absolute(self.note + other, self.absolute + other.semitones)

    def __sub__(self, other: Pitch | Interval) -> Pitch | Interval:
        """
        Pitch - Pitch gives the Interval between them, octaves included.
        Pitch - Interval transposes down.
        """
        if isinstance(other, Pitch):
            fifths = self.note.fifths - other.note.fifths
            return Interval.from_fifths_and_semitones(fifths, self.absolute - other.absolute)
        if isinstance(other, Interval):
            return Pitch.from_absolute(self.note - other, self.absolute - other.semitones)
        return NotImplemented

    def __str__(self) -> str:
        return self.spell()

    def __repr__(self) -> str:
        return f"Pitch({self.spell()!r})"
