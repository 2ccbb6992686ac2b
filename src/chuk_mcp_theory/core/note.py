"""
Note primitives - Letter, Accidental, NoteName.

A NoteName is a single integer coordinate on the line of fifths
(F=-1, C=0, G=1 ... B=5; each sharp adds 7, each flat subtracts 7).
Letter and accidental are derived from the coordinate, which makes
note arithmetic plain integer addition: NoteName + Interval -> NoteName
and NoteName - NoteName -> Interval.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from chuk_mcp_theory.constants import MAX_COORDINATE, MIN_COORDINATE, SymbolStyle
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.symbols import ACCIDENTAL_TOKENS, accidental_glyph
from chuk_mcp_theory.errors import (
    InvalidAccidentalError,
    InvalidNoteNameError,
    InvariantViolation,
    NoteOutOfRangeError,
)


class Letter(str, Enum):
    """The seven natural note letters."""

    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    A = "A"
    B = "B"

    @property
    def fifths(self) -> int:
        """Position of the natural note on the line of fifths."""
        return _LETTER_FIFTHS[self]

    @property
    def semitones(self) -> int:
        """Semitones above C."""
        return _LETTER_SEMITONES[self]

    @property
    def index(self) -> int:
        """Diatonic step from C (C=0 .. B=6)."""
        return _LETTER_INDEX[self]

    def step(self, steps: int) -> Letter:
        """The letter ``steps`` diatonic steps away (negative steps go down)."""
        return _ALPHABET[(self.index + steps) % 7]

    @classmethod
    def from_index(cls, index: int) -> Letter:
        return _ALPHABET[index % 7]

    @classmethod
    def parse(cls, token: str) -> Letter:
        """Parse a letter, case-insensitive."""
        try:
            return cls(token.strip().upper())
        except ValueError:
            raise InvalidNoteNameError(token) from None


# Explicit lookup tables - the line of fifths is not alphabetical
_LETTER_FIFTHS: dict[Letter, int] = {
    Letter.F: -1,
    Letter.C: 0,
    Letter.G: 1,
    Letter.D: 2,
    Letter.A: 3,
    Letter.E: 4,
    Letter.B: 5,
}
_LETTER_SEMITONES: dict[Letter, int] = {
    Letter.C: 0,
    Letter.D: 2,
    Letter.E: 4,
    Letter.F: 5,
    Letter.G: 7,
    Letter.A: 9,
    Letter.B: 11,
}
_ALPHABET: tuple[Letter, ...] = (
    Letter.C,
    Letter.D,
    Letter.E,
    Letter.F,
    Letter.G,
    Letter.A,
    Letter.B,
)
_LETTER_INDEX: dict[Letter, int] = {letter: i for i, letter in enumerate(_ALPHABET)}

# (coordinate + 15) mod 7 indexes this cycle
_FIFTHS_CYCLE: tuple[Letter, ...] = (
    Letter.F,
    Letter.C,
    Letter.G,
    Letter.D,
    Letter.A,
    Letter.E,
    Letter.B,
)


class Accidental(IntEnum):
    """
    Chromatic alteration of a letter.

    The value is the semitone offset, so Accidental.SHARP == 1.
    """

    DOUBLE_FLAT = -2
    FLAT = -1
    NATURAL = 0
    SHARP = 1
    DOUBLE_SHARP = 2

    @property
    def semitones(self) -> int:
        return int(self.value)

    @property
    def penalty(self) -> int:
        """Spelling cost: 0 natural, 1 single, 3 double."""
        return _ACCIDENTAL_PENALTY[self]

    @property
    def is_sharp(self) -> bool:
        return self.value > 0

    @property
    def is_flat(self) -> bool:
        return self.value < 0

    def symbol(
        self, style: SymbolStyle = SymbolStyle.ASCII, explicit_natural: bool = False
    ) -> str:
        """Display glyph for this accidental."""
        return accidental_glyph(self.value, style, explicit_natural)

    @classmethod
    def from_semitones(cls, semitones: int) -> Accidental:
        """
        Accidental for a chromatic delta of -2..2.

        Any other delta means an upstream computation went wrong.
        """
        try:
            return cls(semitones)
        except ValueError:
            raise InvariantViolation(
                f"Chromatic delta {semitones} cannot be written as a single accidental"
            ) from None

    @classmethod
    def parse(cls, token: str) -> Accidental:
        """Parse an accidental token such as 'b', '#', '♭♭', '𝄪' or ''."""
        if token not in ACCIDENTAL_TOKENS:
            raise InvalidAccidentalError(token)
        return cls(ACCIDENTAL_TOKENS[token])


_ACCIDENTAL_PENALTY: dict[Accidental, int] = {
    Accidental.DOUBLE_FLAT: 3,
    Accidental.FLAT: 1,
    Accidental.NATURAL: 0,
    Accidental.SHARP: 1,
    Accidental.DOUBLE_SHARP: 3,
}


@dataclass(frozen=True)
class NoteName:
    """
    A note name as a line-of-fifths coordinate.

    Valid spellings run from F double-flat (-15) to B double-sharp (19).
    Arithmetic is total; reading letter or accidental outside that range
    raises InvariantViolation.

    Examples:
        NoteName.of(Letter.C) = C (0)
        NoteName.of(Letter.F, Accidental.SHARP) = F# (6)
        NoteName.parse("Bb") = Bb (-2)
    """

    fifths: int

    @classmethod
    def of(cls, letter: Letter, accidental: Accidental = Accidental.NATURAL) -> NoteName:
        """Build a note name from a letter and accidental."""
        return cls(letter.fifths + 7 * accidental.value)

    @classmethod
    def parse(cls, text: str) -> NoteName:
        """
        Parse a note name like 'C', 'f#', 'Bb', 'E𝄫'.

        Raises:
            InvalidNoteNameError: Missing or unknown letter
            InvalidAccidentalError: Unknown accidental suffix
        """
        text = text.strip()
        if not text:
            raise InvalidNoteNameError(text)
        letter = Letter.parse(text[0])
        accidental = Accidental.parse(text[1:])
        return cls.of(letter, accidental)

    @property
    def is_spellable(self) -> bool:
        """True if the coordinate lies between Fbb and B##."""
        return MIN_COORDINATE <= self.fifths <= MAX_COORDINATE

    def checked(self) -> NoteName:
        """
        Return this note, or raise NoteOutOfRangeError if it cannot be spelled.

        Use where a computed note reaches the caller.
        """
        if not self.is_spellable:
            raise NoteOutOfRangeError(self.fifths)
        return self

    def _check_range(self) -> None:
        if not MIN_COORDINATE <= self.fifths <= MAX_COORDINATE:
            raise InvariantViolation(
                f"Line-of-fifths coordinate {self.fifths} is outside "
                f"{MIN_COORDINATE}..{MAX_COORDINATE}"
            )

    @property
    def letter(self) -> Letter:
        self._check_range()
        return _FIFTHS_CYCLE[(self.fifths + 15) % 7]

    @property
    def accidental(self) -> Accidental:
        self._check_range()
        return Accidental((self.fifths + 1) // 7)

    @property
    def semitones(self) -> int:
        """
        Semitones from C, not reduced (Cb = -1, B# = 12).

        This is the note's offset inside its own octave number.
        """
        return self.letter.semitones + self.accidental.value

    @property
    def pitch_class(self) -> int:
        """Semitones from C reduced to 0-11."""
        return self.semitones % 12

    def is_enharmonic_with(self, other: NoteName) -> bool:
        """True if both names sound the same pitch class."""
        return self.pitch_class == other.pitch_class

    def interval_to(self, other: NoteName) -> Interval:
        """Interval class from this note up to ``other``."""
        return Interval(other.fifths - self.fifths, 0)

    def enharmonics(self) -> list[NoteName]:
        """Every other valid spelling of the same pitch class."""
        return [
            NoteName(fifths)
            for fifths in range(MIN_COORDINATE, MAX_COORDINATE + 1)
            if fifths != self.fifths and NoteName(fifths).pitch_class == self.pitch_class
        ]

    def spell(self, style: SymbolStyle = SymbolStyle.ASCII) -> str:
        """Human-readable name in the given glyph style."""
        return f"{self.letter.value}{self.accidental.symbol(style)}"

    def __add__(self, other: Interval) -> NoteName:
        """Move along the line of fifths by an interval (octaves are ignored)."""
        if not isinstance(other, Interval):
            return NotImplemented
        return NoteName(self.fifths + other.fifths)

    def __sub__(self, other: NoteName | Interval) -> NoteName | Interval:
        """
        NoteName - NoteName gives the Interval between them (octaves = 0).
        NoteName - Interval moves down the line of fifths.
        """
        if isinstance(other, NoteName):
            return Interval(self.fifths - other.fifths, 0)
        if isinstance(other, Interval):
            return self + (-other)
        return NotImplemented

    def __str__(self) -> str:
        return self.spell()

    def __repr__(self) -> str:
        if MIN_COORDINATE <= self.fifths <= MAX_COORDINATE:
            return f"NoteName({self.spell()!r})"
        return f"NoteName({self.fifths})"
