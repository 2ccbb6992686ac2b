"""
Tests for scales, scale degrees and keys.
"""

import pytest

from chuk_mcp_theory.constants import KeyMode, SymbolStyle
from chuk_mcp_theory.core import (
    Accidental,
    Chord,
    HarmonicFunction,
    Interval,
    Key,
    NoteName,
    Scale,
    ScaleDefinition,
    ScaleDegree,
)
from chuk_mcp_theory.errors import InvalidScaleDegreeError, ParseError


def n(text: str) -> NoteName:
    return NoteName.parse(text)


@pytest.fixture
def c_major() -> Scale:
    return Scale(n("C"), ScaleDefinition.IONIAN)


class TestScaleDefinition:
    """Tests for ScaleDefinition."""

    def test_modes_are_rotations(self) -> None:
        """Dorian is Ionian started on its second step."""
        expected = [Interval.parse(c) for c in ["P1", "M2", "m3", "P4", "P5", "M6", "m7"]]
        assert list(ScaleDefinition.DORIAN.intervals) == expected
        assert ScaleDefinition.DORIAN.mode_of == "Ionian"
        assert ScaleDefinition.DORIAN.degree_offset == 1

    def test_locrian(self) -> None:
        """Locrian keeps its diminished fifth."""
        assert Interval.d5 in ScaleDefinition.LOCRIAN.intervals

    def test_equality_ignores_name(self) -> None:
        """Only the interval list takes part in equality."""
        renamed = ScaleDefinition(ScaleDefinition.IONIAN.intervals, "Major")
        assert renamed == ScaleDefinition.IONIAN
        assert ScaleDefinition.MAJOR is ScaleDefinition.IONIAN
        assert ScaleDefinition.IONIAN != ScaleDefinition.LYDIAN

    def test_bitmask(self) -> None:
        """Pitch-class set of the major scale."""
        assert ScaleDefinition.IONIAN.bitmask == 0b101010110101
        assert len(ScaleDefinition.WHOLE_TONE) == 6

    def test_validation(self) -> None:
        """Patterns must start on a unison."""
        with pytest.raises(ValueError):
            ScaleDefinition(())
        with pytest.raises(ValueError):
            ScaleDefinition((Interval.M2, Interval.M3))

    def test_at_most_seven_steps(self) -> None:
        """Degrees are steps 1-7, so longer patterns are rejected."""
        with pytest.raises(ValueError):
            ScaleDefinition.from_codes(
                "Bebop Dominant", ["P1", "M2", "M3", "P4", "P5", "M6", "m7", "M7"]
            )


class TestScaleDegree:
    """Tests for ScaleDegree."""

    def test_step_range(self) -> None:
        """Steps outside 1-7 are rejected."""
        with pytest.raises(InvalidScaleDegreeError):
            ScaleDegree(0)
        with pytest.raises(InvalidScaleDegreeError):
            ScaleDegree(8)

    def test_spell(self) -> None:
        """Alteration is written before the step."""
        assert str(ScaleDegree(4, Accidental.SHARP)) == "#4"
        assert ScaleDegree(7, Accidental.FLAT).spell(SymbolStyle.UNICODE) == "♭7"
        assert str(ScaleDegree(1)) == "1"
        assert repr(ScaleDegree(4, Accidental.SHARP)) == "ScaleDegree(4, SHARP)"


class TestDegreeResolution:
    """Tests for Scale.degree_of."""

    def test_literal_c_major(self, c_major: Scale) -> None:
        """C#, F# and B# in C major."""
        assert c_major.degree_of(n("C#")) == ScaleDegree(1, Accidental.SHARP)
        assert c_major.degree_of(n("F#")) == ScaleDegree(4, Accidental.SHARP)
        assert c_major.degree_of(n("B#")) == ScaleDegree(1)

    def test_exact_match(self, c_major: Scale) -> None:
        """Scale tones resolve with no alteration."""
        assert c_major.degree_of(n("G")) == ScaleDegree(5)
        assert c_major.contains(n("B"))
        assert not c_major.contains(n("Bb"))

    def test_flat_queries(self, c_major: Scale) -> None:
        """Flat queries resolve to the scale note above them."""
        assert c_major.degree_of(n("Eb")) == ScaleDegree(3, Accidental.FLAT)
        assert c_major.degree_of(n("Bb")) == ScaleDegree(7, Accidental.FLAT)
        assert c_major.degree_of(n("Db")) == ScaleDegree(2, Accidental.FLAT)

    def test_query_polarity_wins(self, c_major: Scale) -> None:
        """Gb is b5, not #4, even though F is scanned first."""
        assert c_major.degree_of(n("Gb")) == ScaleDegree(5, Accidental.FLAT)

    def test_same_letter_tier(self) -> None:
        """A natural query prefers the scale note sharing its letter."""
        whole_tone = Scale(n("C"), ScaleDefinition.WHOLE_TONE)
        assert whole_tone.degree_of(n("F")) == ScaleDegree(4, Accidental.FLAT)

    def test_double_alteration_tier(self) -> None:
        """Two semitones away resolves as a double accidental."""
        fifths_only = Scale(n("C"), ScaleDefinition.from_codes("Fifths", ["P1", "P5"]))
        assert fifths_only.degree_of(n("D")) == ScaleDegree(1, Accidental.DOUBLE_SHARP)
        assert fifths_only.degree_of(n("E")) is None

    def test_single_accidental_tier_scans_steps_in_order(self) -> None:
        """B in C whole-tone is b1: step 1 is reached before the A# reading at step 6."""
        whole_tone = Scale(n("C"), ScaleDefinition.WHOLE_TONE)
        assert whole_tone.degree_of(n("B")) == ScaleDegree(1, Accidental.FLAT)


class TestScaleOperations:
    """Tests for notes, note_at and diatonic transposition."""

    def test_notes(self, c_major: Scale) -> None:
        """Notes are tonic plus each interval."""
        assert [str(x) for x in c_major.notes] == ["C", "D", "E", "F", "G", "A", "B"]
        harmonic = Scale(n("A"), ScaleDefinition.HARMONIC_MINOR)
        assert [str(x) for x in harmonic.notes] == ["A", "B", "C", "D", "E", "F", "G#"]

    def test_note_at(self, c_major: Scale) -> None:
        """Degrees map back to notes with their alteration."""
        assert c_major.note_at(ScaleDegree(4, Accidental.SHARP)) == n("F#")
        assert c_major.note_at(ScaleDegree(7, Accidental.FLAT)) == n("Bb")
        with pytest.raises(InvalidScaleDegreeError):
            Scale(n("C"), ScaleDefinition.WHOLE_TONE).note_at(ScaleDegree(7))

    @pytest.mark.parametrize(
        "note,steps,expected",
        [
            ("E", 1, "F"),
            ("F#", 1, "G#"),
            ("B", 1, "C"),
            ("C", -1, "B"),
            ("D", 7, "D"),
            ("Bb", 1, "Cb"),
        ],
    )
    def test_transpose_diatonic(self, c_major: Scale, note: str, steps: int, expected: str) -> None:
        """Scale steps keep the note's chromatic offset."""
        assert c_major.transpose_diatonic(n(note), steps) == n(expected)

    def test_transpose_diatonic_unplaceable(self) -> None:
        """A note the scale cannot place gives None."""
        fifths_only = Scale(n("C"), ScaleDefinition.from_codes("Fifths", ["P1", "P5"]))
        assert fifths_only.transpose_diatonic(n("E"), 1) is None

    def test_transposed(self, c_major: Scale) -> None:
        """Moving the tonic moves every note."""
        d_major = c_major.transposed(Interval.M2)
        assert [str(x) for x in d_major.notes] == ["D", "E", "F#", "G", "A", "B", "C#"]
        assert str(d_major) == "D Ionian"

    def test_triads(self, c_major: Scale) -> None:
        """Diatonic triads of C major."""
        names = [chord.abbreviated_name() for chord in c_major.triads()]
        assert names == ["C", "Dm", "Em", "F", "G", "Am", "Bdim"]

    def test_sevenths(self, c_major: Scale) -> None:
        """Diatonic seventh chords of C major."""
        names = [chord.abbreviated_name() for chord in c_major.sevenths()]
        assert names == ["Cmaj7", "Dm7", "Em7", "Fmaj7", "G7", "Am7", "Bm7b5"]

    def test_harmonic_function(self, c_major: Scale) -> None:
        """Tonic, subdominant and dominant chords in C major."""
        assert c_major.harmonic_function(Chord.major(n("C"))) == HarmonicFunction.TONIC
        assert c_major.harmonic_function(Chord.major(n("F"))) == HarmonicFunction.SUBDOMINANT
        assert c_major.harmonic_function(Chord.minor(n("D"))) == HarmonicFunction.SUBDOMINANT
        assert c_major.harmonic_function(Chord.major(n("G"))) == HarmonicFunction.DOMINANT
        assert c_major.harmonic_function(Chord.dominant_7th(n("G"))) == HarmonicFunction.DOMINANT
        assert c_major.harmonic_function(Chord.minor(n("A"))) == HarmonicFunction.TONIC


class TestKey:
    """Tests for Key."""

    def test_parse(self) -> None:
        """Keys parse from tonic_mode strings."""
        key = Key.parse("F#_minor")
        assert key.tonic == n("F#")
        assert key.mode == KeyMode.MINOR

    @pytest.mark.parametrize("text", ["C-major", "C_dorian", "C", "H_major"])
    def test_parse_errors(self, text: str) -> None:
        """Malformed keys raise ParseError."""
        with pytest.raises(ParseError):
            Key.parse(text)

    def test_accidentals(self) -> None:
        """Signed key-signature counts."""
        assert Key.parse("C_major").accidentals == 0
        assert Key.parse("D_minor").accidentals == -1
        assert Key.parse("E_major").accidentals == 4

    def test_relative_and_parallel(self) -> None:
        """Relative and parallel keys."""
        assert Key.parse("C_major").relative() == Key(n("A"), KeyMode.MINOR)
        assert Key.parse("A_minor").relative() == Key(n("C"), KeyMode.MAJOR)
        assert Key.parse("C_major").parallel() == Key(n("C"), KeyMode.MINOR)

    def test_scale(self) -> None:
        """A minor key uses the natural minor scale."""
        notes = Key.parse("A_minor").scale().notes
        assert [str(x) for x in notes] == ["A", "B", "C", "D", "E", "F", "G"]
        assert str(Key.parse("Bb_major")) == "Bb major"
