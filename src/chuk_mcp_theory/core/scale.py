"""
Scale primitives - ScaleDefinition, ScaleDegree, Scale, Key.

A ScaleDefinition is an interval pattern measured from the tonic (the
first interval is always a unison). A Scale applies a definition to a
tonic NoteName; its notes are computed on demand. Degree resolution
maps any note, in or out of the scale, onto a step with a chromatic
alteration.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import ClassVar

from chuk_mcp_theory.constants import MAX_SCALE_STEPS, ErrorMessages, KeyMode, SymbolStyle
from chuk_mcp_theory.core.chord import Chord, HarmonicFunction
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import Accidental, NoteName
from chuk_mcp_theory.errors import InvalidScaleDegreeError, ParseError


@dataclass(frozen=True)
class ScaleDefinition:
    """
    An interval pattern from the tonic.

    Only ``intervals`` takes part in equality and hashing; name and mode
    metadata are descriptive.

    Examples:
        ScaleDefinition.IONIAN.intervals = (P1, M2, M3, P4, P5, M6, M7)
        ScaleDefinition.DORIAN.mode_of = "Ionian", degree_offset = 1
    """

    intervals: tuple[Interval, ...]
    name: str = field(default="", compare=False)
    mode_of: str | None = field(default=None, compare=False)
    degree_offset: int = field(default=0, compare=False)

    # Common scale definitions (defined after class)
    IONIAN: ClassVar[ScaleDefinition]
    DORIAN: ClassVar[ScaleDefinition]
    PHRYGIAN: ClassVar[ScaleDefinition]
    LYDIAN: ClassVar[ScaleDefinition]
    MIXOLYDIAN: ClassVar[ScaleDefinition]
    AEOLIAN: ClassVar[ScaleDefinition]
    LOCRIAN: ClassVar[ScaleDefinition]
    HARMONIC_MINOR: ClassVar[ScaleDefinition]
    MELODIC_MINOR: ClassVar[ScaleDefinition]
    WHOLE_TONE: ClassVar[ScaleDefinition]
    HUNGARIAN_MINOR: ClassVar[ScaleDefinition]
    ALTERED: ClassVar[ScaleDefinition]
    MAJOR: ClassVar[ScaleDefinition]
    NATURAL_MINOR: ClassVar[ScaleDefinition]

    def __post_init__(self) -> None:
        object.__setattr__(self, "intervals", tuple(self.intervals))
        if not self.intervals:
            raise ValueError("A scale needs at least one interval")
        if self.intervals[0] != Interval.PERFECT_UNISON:
            raise ValueError(f"First scale interval must be P1, got {self.intervals[0]}")
        if len(self.intervals) > MAX_SCALE_STEPS:
            raise ValueError(
                f"A scale has at most {MAX_SCALE_STEPS} steps, got {len(self.intervals)}"
            )

    @classmethod
    def from_codes(
        cls,
        name: str,
        codes: Iterable[str],
        mode_of: str | None = None,
        degree_offset: int = 0,
    ) -> ScaleDefinition:
        """Build a definition from interval designations like ['P1', 'M2', ...]."""
        intervals = tuple(Interval.parse(code) for code in codes)
        return cls(intervals, name, mode_of, degree_offset)

    @property
    def bitmask(self) -> int:
        """12-bit pitch-class set (bit 0 = tonic)."""
        mask = 0
        for interval in self.intervals:
            mask |= 1 << (interval.semitones % 12)
        return mask

    def __len__(self) -> int:
        return len(self.intervals)

    def rotated(self, offset: int, name: str = "") -> ScaleDefinition:
        """
        The mode starting on step ``offset`` (0-based) of this pattern.

        Every resulting interval stays inside one octave above the new tonic.
        """
        offset %= len(self.intervals)
        pivot = self.intervals[offset]
        rotated: list[Interval] = []
        for index in range(len(self.intervals)):
            interval = self.intervals[(offset + index) % len(self.intervals)]
            semitones = interval.semitones - pivot.semitones
            if offset + index >= len(self.intervals):
                semitones += 12
            rotated.append(
                Interval.from_fifths_and_semitones(interval.fifths - pivot.fifths, semitones)
            )
        return ScaleDefinition(tuple(rotated), name, self.name or None, offset)

    def __str__(self) -> str:
        return self.name or " ".join(str(i) for i in self.intervals)


@dataclass(frozen=True)
class ScaleDegree:
    """
    A scale step (1-7) with a chromatic alteration.

    Examples:
        ScaleDegree(1) = tonic
        ScaleDegree(4, Accidental.SHARP) = #4
        ScaleDegree(7, Accidental.FLAT) = b7
    """

    step: int
    alteration: Accidental = Accidental.NATURAL

    def __post_init__(self) -> None:
        if not 1 <= self.step <= 7:
            raise InvalidScaleDegreeError(self.step)

    def spell(self, style: SymbolStyle = SymbolStyle.ASCII) -> str:
        return f"{self.alteration.symbol(style)}{self.step}"

    def __str__(self) -> str:
        return self.spell()

    def __repr__(self) -> str:
        if self.alteration == Accidental.NATURAL:
            return f"ScaleDegree({self.step})"
        return f"ScaleDegree({self.step}, {self.alteration.name})"


def _semitone_distance(note: NoteName, scale_note: NoteName) -> int:
    """Pitch-class distance from the scale note up to the query, 0-11."""
    return (note.pitch_class - scale_note.pitch_class) % 12


@dataclass(frozen=True)
class Scale:
    """
    A tonic plus a scale definition.

    Immutable. Notes are derived from tonic + each interval on every access.

    Examples:
        Scale(NoteName.parse("C"), ScaleDefinition.IONIAN).notes = C D E F G A B
        Scale(NoteName.parse("A"), ScaleDefinition.HARMONIC_MINOR).notes = A B C D E F G#
    """

    tonic: NoteName
    definition: ScaleDefinition

    @property
    def notes(self) -> list[NoteName]:
        return [self.tonic + interval for interval in self.definition.intervals]

    def _diatonic_step(self, note: NoteName) -> int | None:
        notes = self.notes
        for index, scale_note in enumerate(notes):
            if scale_note == note:
                return index + 1
        for index, scale_note in enumerate(notes):
            if scale_note.is_enharmonic_with(note):
                return index + 1
        return None

    def contains(self, note: NoteName) -> bool:
        """True if the note is a scale tone, by spelling or enharmonically."""
        return self._diatonic_step(note) is not None

    def degree_of(self, note: NoteName) -> ScaleDegree | None:
        """
        Resolve any note to a scale step and chromatic alteration.

        Tiers, each tried only when the previous one finds nothing, and
        each scanning scale steps in ascending order:
        1. exact spelling match
        2. enharmonic match (no alteration)
        3. single alteration in the query's own direction: a flat query
           one semitone below a scale note, or a sharp query one
           semitone above it
        4. same letter as a scale note, one semitone away
        5. any scale note one semitone away
        6. any scale note two semitones away (double alteration)

        Returns None when nothing matches.
        """
        step = self._diatonic_step(note)
        if step is not None:
            return ScaleDegree(step)

        notes = self.notes
        accidental = note.accidental

        if accidental.is_flat or accidental.is_sharp:
            for index, scale_note in enumerate(notes):
                distance = _semitone_distance(note, scale_note)
                if accidental.is_flat and distance == 11:
                    return ScaleDegree(index + 1, Accidental.FLAT)
                if accidental.is_sharp and distance == 1:
                    return ScaleDegree(index + 1, Accidental.SHARP)

        for index, scale_note in enumerate(notes):
            if scale_note.letter != note.letter:
                continue
            distance = _semitone_distance(note, scale_note)
            if distance == 1:
                return ScaleDegree(index + 1, Accidental.SHARP)
            if distance == 11:
                return ScaleDegree(index + 1, Accidental.FLAT)

        for index, scale_note in enumerate(notes):
            distance = _semitone_distance(note, scale_note)
            if distance == 1:
                return ScaleDegree(index + 1, Accidental.SHARP)
            if distance == 11:
                return ScaleDegree(index + 1, Accidental.FLAT)

        for index, scale_note in enumerate(notes):
            distance = _semitone_distance(note, scale_note)
            if distance == 2:
                return ScaleDegree(index + 1, Accidental.DOUBLE_SHARP)
            if distance == 10:
                return ScaleDegree(index + 1, Accidental.DOUBLE_FLAT)

        return None

    def note_at(self, degree: ScaleDegree) -> NoteName:
        """
        The note for a scale degree, alteration applied.

        Raises:
            InvalidScaleDegreeError: If the step is beyond this scale's length
        """
        notes = self.notes
        if degree.step > len(notes):
            raise InvalidScaleDegreeError(degree.step, len(notes))
        return NoteName(notes[degree.step - 1].fifths + 7 * degree.alteration.value)

    def transpose_diatonic(self, note: NoteName, steps: int) -> NoteName | None:
        """
        Move a note by scale steps, keeping its chromatic offset from the scale.

        Returns None when the note cannot be placed in the scale.

        Raises:
            InvariantViolation: If the offset is not a single accidental
        """
        degree = self.degree_of(note)
        if degree is None:
            return None

        notes = self.notes
        source = notes[degree.step - 1]
        delta = (_semitone_distance(note, source) + 6) % 12 - 6
        alteration = Accidental.from_semitones(delta)
        target = notes[(degree.step - 1 + steps) % len(notes)]
        return NoteName(target.fifths + 7 * alteration.value)

    def triads(self) -> list[Chord]:
        """The stacked-third triad on every step."""
        return [self._stack(index, 3) for index in range(len(self.definition))]

    def sevenths(self) -> list[Chord]:
        """The stacked-third seventh chord on every step."""
        return [self._stack(index, 4) for index in range(len(self.definition))]

    def _stack(self, index: int, size: int) -> Chord:
        notes = self.notes
        root = notes[index]
        tones = [notes[(index + 2 * k) % len(notes)] for k in range(size)]
        return Chord.from_notes_and_root(tones, root)

    def harmonic_function(self, chord: Chord) -> HarmonicFunction | None:
        """
        Tonic, subdominant or dominant role of a chord in this scale.

        Chromatic chord tones are ignored.
        """
        steps = [
            step for step in (self._diatonic_step(note) for note in chord.notes) if step is not None
        ]
        return HarmonicFunction.detect(steps)

    def transposed(self, interval: Interval) -> Scale:
        return Scale(self.tonic + interval, self.definition)

    def __str__(self) -> str:
        return f"{self.tonic} {self.definition}"


@dataclass(frozen=True)
class Key:
    """
    A key: tonic plus major or minor mode.

    Examples:
        Key.parse("C_major").accidentals = 0
        Key.parse("D_minor").accidentals = -1 (one flat)
    """

    tonic: NoteName
    mode: KeyMode = KeyMode.MAJOR

    @property
    def accidentals(self) -> int:
        """Signed key-signature count: positive = sharps, negative = flats."""
        if self.mode == KeyMode.MAJOR:
            return self.tonic.fifths
        return self.tonic.fifths - 3

    def scale(self) -> Scale:
        if self.mode == KeyMode.MAJOR:
            return Scale(self.tonic, ScaleDefinition.IONIAN)
        return Scale(self.tonic, ScaleDefinition.AEOLIAN)

    def relative(self) -> Key:
        """Relative minor of a major key, or relative major of a minor key."""
        if self.mode == KeyMode.MAJOR:
            return Key(self.tonic - Interval.m3, KeyMode.MINOR)
        return Key(self.tonic + Interval.m3, KeyMode.MAJOR)

    def parallel(self) -> Key:
        """Same tonic, other mode."""
        other = KeyMode.MINOR if self.mode == KeyMode.MAJOR else KeyMode.MAJOR
        return Key(self.tonic, other)

    def spell(self, style: SymbolStyle = SymbolStyle.ASCII) -> str:
        return f"{self.tonic.spell(style)} {self.mode.value}"

    def __str__(self) -> str:
        return self.spell()

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key from a string like 'C_major', 'F#_minor' or 'Bb_major'.

        Args:
            name: Key name with underscore separator

        Returns:
            Parsed Key object
        """
        parts = name.strip().split("_")
        if len(parts) != 2:
            raise ParseError(ErrorMessages.INVALID_KEY.format(key=name))
        try:
            mode = KeyMode(parts[1].lower())
        except ValueError:
            raise ParseError(ErrorMessages.INVALID_KEY.format(key=name)) from None
        return cls(NoteName.parse(parts[0]), mode)


# Define scale definitions using interval designations
ScaleDefinition.IONIAN = ScaleDefinition.from_codes(
    "Ionian", ["P1", "M2", "M3", "P4", "P5", "M6", "M7"]
)
ScaleDefinition.DORIAN = ScaleDefinition.IONIAN.rotated(1, "Dorian")
ScaleDefinition.PHRYGIAN = ScaleDefinition.IONIAN.rotated(2, "Phrygian")
ScaleDefinition.LYDIAN = ScaleDefinition.IONIAN.rotated(3, "Lydian")
ScaleDefinition.MIXOLYDIAN = ScaleDefinition.IONIAN.rotated(4, "Mixolydian")
ScaleDefinition.AEOLIAN = ScaleDefinition.IONIAN.rotated(5, "Aeolian")
ScaleDefinition.LOCRIAN = ScaleDefinition.IONIAN.rotated(6, "Locrian")
ScaleDefinition.HARMONIC_MINOR = ScaleDefinition.from_codes(
    "Harmonic Minor", ["P1", "M2", "m3", "P4", "P5", "m6", "M7"]
)
ScaleDefinition.MELODIC_MINOR = ScaleDefinition.from_codes(
    "Melodic Minor", ["P1", "M2", "m3", "P4", "P5", "M6", "M7"]
)
ScaleDefinition.WHOLE_TONE = ScaleDefinition.from_codes(
    "Whole Tone", ["P1", "M2", "M3", "A4", "A5", "A6"]
)
ScaleDefinition.HUNGARIAN_MINOR = ScaleDefinition.from_codes(
    "Hungarian Minor", ["P1", "M2", "m3", "A4", "P5", "m6", "M7"]
)
ScaleDefinition.ALTERED = ScaleDefinition.from_codes(
    "Altered", ["P1", "m2", "m3", "d4", "d5", "m6", "m7"]
)

# Aliases
ScaleDefinition.MAJOR = ScaleDefinition.IONIAN
ScaleDefinition.NATURAL_MINOR = ScaleDefinition.AEOLIAN
