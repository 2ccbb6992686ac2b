"""
Tests for core theory primitives.

Tests cover:
- Interval (interval.py)
- Letter, Accidental, NoteName (note.py)
- Pitch (pitch.py)
- Accidental glyphs (symbols.py)
"""

import pytest

from chuk_mcp_theory.constants import DEFAULT_SYMBOL_STYLE, SymbolStyle
from chuk_mcp_theory.core import Accidental, Interval, Letter, NoteName, Pitch
from chuk_mcp_theory.core.symbols import accidental_glyph, resolve_style
from chuk_mcp_theory.errors import (
    InvalidAccidentalError,
    InvalidIntervalError,
    InvalidNoteNameError,
    InvalidPitchError,
    InvariantViolation,
    NoteOutOfRangeError,
    ParseError,
)

SAMPLE_INTERVALS = [
    Interval.parse(code)
    for code in ["P1", "m2", "M3", "A4", "d5", "P5", "m7", "M9", "A7", "d8", "-P5", "-m3"]
]

ALL_NOTES = [(letter, accidental) for letter in Letter for accidental in Accidental]


class TestInterval:
    """Tests for the Interval group."""

    @pytest.mark.parametrize(
        "code,semitones",
        [
            ("P1", 0),
            ("m2", 1),
            ("M2", 2),
            ("m3", 3),
            ("M3", 4),
            ("P4", 5),
            ("A4", 6),
            ("d5", 6),
            ("P5", 7),
            ("m6", 8),
            ("M6", 9),
            ("m7", 10),
            ("M7", 11),
            ("P8", 12),
            ("M9", 14),
            ("P11", 17),
            ("P12", 19),
            ("M13", 21),
            ("A14", 24),
        ],
    )
    def test_semitones(self, code: str, semitones: int) -> None:
        """Semitone size follows from fifths and octaves."""
        assert Interval.parse(code).semitones == semitones

    def test_octave_edge_constants(self) -> None:
        """A7 spans a full octave, d8 one semitone less, d2 none."""
        assert Interval.AUGMENTED_SEVENTH.semitones == 12
        assert Interval.AUGMENTED_SEVENTH == Interval(12, 1)
        assert Interval.DIMINISHED_OCTAVE.semitones == 11
        assert Interval.DIMINISHED_OCTAVE == Interval(-7, 0)
        assert Interval.DIMINISHED_SECOND.semitones == 0

    def test_enharmonic_intervals_distinct(self) -> None:
        """A4 and d5 sound alike but are different intervals."""
        assert Interval.A4.semitones == Interval.d5.semitones
        assert Interval.A4 != Interval.d5
        assert len({Interval.A4, Interval.d5, Interval.parse("A4")}) == 2

    @pytest.mark.parametrize("a", SAMPLE_INTERVALS)
    def test_identity(self, a: Interval) -> None:
        """Adding a unison changes nothing."""
        assert a + Interval.UNISON == a
        assert Interval.UNISON + a == a

    @pytest.mark.parametrize("a", SAMPLE_INTERVALS)
    def test_inverse(self, a: Interval) -> None:
        """An interval plus its negation is a unison."""
        assert a + (-a) == Interval.UNISON
        assert a - a == Interval.UNISON

    @pytest.mark.parametrize(
        "a,b,c",
        [
            (Interval.M3, Interval.m3, Interval.P5),
            (Interval.A4, Interval.d5, Interval.M9),
            (Interval.P8, Interval.parse("-P5"), Interval.AUGMENTED_SEVENTH),
        ],
    )
    def test_associative_and_commutative(self, a: Interval, b: Interval, c: Interval) -> None:
        """Addition is associative and commutative."""
        assert (a + b) + c == a + (b + c)
        assert a + b == b + a

    def test_negation_flips_both_fields(self) -> None:
        """The group inverse of M3 is the minor sixth class."""
        assert -Interval.M3 == Interval(-4, 0)
        assert -Interval.M3 == Interval.m6

    def test_ordering_by_semitones(self) -> None:
        """Ordering compares size, not line-of-fifths position."""
        assert Interval.M3 < Interval.P5
        assert Interval.P5 < Interval.P8
        assert not Interval.A4 < Interval.d5
        assert not Interval.d5 < Interval.A4
        assert sorted([Interval.P5, Interval.m2, Interval.M3]) == [
            Interval.m2,
            Interval.M3,
            Interval.P5,
        ]

    @pytest.mark.parametrize("code", ["M3", "P8", "M9", "A7", "d8", "d2", "AA4", "dd5", "m13"])
    def test_str_round_trip(self, code: str) -> None:
        """Designations render back the way they were written."""
        assert str(Interval.parse(code)) == code

    def test_descending(self) -> None:
        """A leading '-' gives the same size measured downward."""
        down = Interval.parse("-P5")
        assert down.semitones == -7
        assert str(down) == "-P5"
        assert Interval.parse("-P8").semitones == -12
        assert str(Interval.parse("-P8")) == "-P8"

    def test_downward(self) -> None:
        """downward keeps the size and flips the direction."""
        assert Interval.M3.downward().semitones == -4
        assert Interval.M3.downward().downward() == Interval.M3

    @pytest.mark.parametrize("code", ["P3", "M4", "m5", "X5", "M0", "", "3M", "P 5"])
    def test_parse_errors(self, code: str) -> None:
        """Impossible or malformed designations are parse errors."""
        with pytest.raises(InvalidIntervalError):
            Interval.parse(code)

    def test_parse_error_is_value_error(self) -> None:
        """Parse errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            Interval.parse("P3")
        with pytest.raises(ParseError):
            Interval.from_quality_and_size("M", 4)

    def test_number_and_quality(self) -> None:
        """Generic size and quality symbol."""
        assert Interval.MAJOR_TENTH.number == 10
        assert Interval.MAJOR_TENTH.quality_symbol == "M"
        assert Interval.DIMINISHED_FIFTH.quality_symbol == "d"
        assert Interval.PERFECT_OCTAVE.number == 8

    def test_interval_class_and_compound(self) -> None:
        """Octave component can be dropped or added."""
        assert Interval.MAJOR_NINTH.interval_class() == Interval.M2
        assert Interval.M3.compound() == Interval.MAJOR_TENTH
        assert Interval.P1.compound(2).semitones == 24

    def test_generic_predicates(self) -> None:
        """Third, fifth and seventh predicates work on classes."""
        assert Interval.m3.is_third()
        assert Interval.MAJOR_TENTH.is_third()
        assert not Interval.P5.is_third()
        assert Interval.d5.is_fifth()
        assert Interval.AUGMENTED_FIFTH.is_fifth()
        assert Interval.DIMINISHED_SEVENTH.is_seventh()
        assert Interval.M7.is_seventh()
        assert not Interval.M6.is_seventh()

    def test_from_fifths_and_semitones_mismatch(self) -> None:
        """A semitone count the class cannot reach is rejected."""
        with pytest.raises(ValueError):
            Interval.from_fifths_and_semitones(1, 8)

    def test_repr(self) -> None:
        """Named intervals repr as their constant."""
        assert repr(Interval.M3) == "Interval.MAJOR_THIRD"
        assert repr(Interval(30, 0)) == "Interval(30, 0)"


class TestLetterAndAccidental:
    """Tests for Letter and Accidental."""

    def test_letter_parse(self) -> None:
        """Letters parse case-insensitively."""
        assert Letter.parse("c") == Letter.C
        assert Letter.parse("G") == Letter.G

    def test_letter_parse_error(self) -> None:
        """Unknown letters raise InvalidNoteNameError."""
        with pytest.raises(InvalidNoteNameError):
            Letter.parse("H")

    def test_letter_fifths_table(self) -> None:
        """Line-of-fifths positions are not alphabetical."""
        assert [letter.fifths for letter in Letter] == [0, 2, 4, -1, 1, 3, 5]

    def test_letter_step_wraps(self) -> None:
        """Diatonic steps wrap around the alphabet."""
        assert Letter.B.step(1) == Letter.C
        assert Letter.C.step(-1) == Letter.B
        assert Letter.C.step(4) == Letter.G

    @pytest.mark.parametrize(
        "token,expected",
        [
            ("", Accidental.NATURAL),
            ("n", Accidental.NATURAL),
            ("b", Accidental.FLAT),
            ("♭", Accidental.FLAT),
            ("##", Accidental.DOUBLE_SHARP),
            ("x", Accidental.DOUBLE_SHARP),
            ("𝄫", Accidental.DOUBLE_FLAT),
        ],
    )
    def test_accidental_parse(self, token: str, expected: Accidental) -> None:
        """ASCII and Unicode tokens both parse."""
        assert Accidental.parse(token) == expected

    def test_accidental_parse_error(self) -> None:
        """Unknown accidental tokens raise InvalidAccidentalError."""
        with pytest.raises(InvalidAccidentalError):
            Accidental.parse("q")

    def test_accidental_penalty(self) -> None:
        """Naturals are free, doubles are expensive."""
        assert Accidental.NATURAL.penalty == 0
        assert Accidental.SHARP.penalty == 1
        assert Accidental.DOUBLE_FLAT.penalty == 3

    def test_from_semitones_out_of_range(self) -> None:
        """A delta beyond a double accidental is an invariant violation."""
        assert Accidental.from_semitones(-2) == Accidental.DOUBLE_FLAT
        with pytest.raises(InvariantViolation):
            Accidental.from_semitones(3)


class TestNoteName:
    """Tests for NoteName."""

    @pytest.mark.parametrize("letter,accidental", ALL_NOTES)
    def test_round_trip(self, letter: Letter, accidental: Accidental) -> None:
        """Letter and accidental read back exactly for every spelling."""
        note = NoteName.of(letter, accidental)
        assert note.letter == letter
        assert note.accidental == accidental

    @pytest.mark.parametrize(
        "text,fifths",
        [("F", -1), ("C", 0), ("B", 5), ("F#", 6), ("Bb", -2), ("Fbb", -15), ("B##", 19)],
    )
    def test_coordinates(self, text: str, fifths: int) -> None:
        """Spellings sit at their line-of-fifths coordinate."""
        assert NoteName.parse(text).fifths == fifths

    def test_parse_variants(self) -> None:
        """Lowercase letters and Unicode accidentals parse."""
        assert NoteName.parse("f#") == NoteName.of(Letter.F, Accidental.SHARP)
        assert NoteName.parse("E𝄫") == NoteName.of(Letter.E, Accidental.DOUBLE_FLAT)
        assert NoteName.parse("Cn") == NoteName.of(Letter.C)

    def test_parse_errors(self) -> None:
        """Bad letters and accidentals raise distinct errors."""
        with pytest.raises(InvalidNoteNameError):
            NoteName.parse("H")
        with pytest.raises(InvalidNoteNameError):
            NoteName.parse("")
        with pytest.raises(InvalidAccidentalError):
            NoteName.parse("C$")

    def test_out_of_range_read(self) -> None:
        """Reading letter or accidental outside the valid band fails loudly."""
        with pytest.raises(InvariantViolation):
            _ = NoteName(20).letter
        with pytest.raises(InvariantViolation):
            _ = NoteName(-16).accidental

    def test_arithmetic_is_total(self) -> None:
        """Arithmetic does not range-check."""
        assert (NoteName(19) + Interval.P5).fifths == 20

    @pytest.mark.parametrize("p", [NoteName.parse(n) for n in ["C", "F#", "Bb", "Ebb"]])
    @pytest.mark.parametrize("v", SAMPLE_INTERVALS)
    def test_torsor_add_then_subtract(self, p: NoteName, v: Interval) -> None:
        """(p + v) - p recovers the interval class of v."""
        assert (p + v) - p == v.interval_class()

    @pytest.mark.parametrize("p", [NoteName.parse(n) for n in ["C", "G#", "Db"]])
    @pytest.mark.parametrize("q", [NoteName.parse(n) for n in ["E", "Bb", "F##"]])
    def test_torsor_subtract_then_add(self, p: NoteName, q: NoteName) -> None:
        """p + (q - p) lands on q."""
        assert p + (q - p) == q

    def test_subtract_direction(self) -> None:
        """q - p is the interval from p up to q."""
        c, e = NoteName.parse("C"), NoteName.parse("E")
        assert e - c == Interval.M3
        assert c.interval_to(e) == Interval.M3
        assert e.interval_to(c) == Interval.m6
        assert e - Interval.M3 == c

    @pytest.mark.parametrize(
        "a,b",
        [("C#", "Db"), ("B#", "C"), ("E", "Fb"), ("G##", "A"), ("C", "D")],
    )
    def test_enharmonic_symmetry(self, a: str, b: str) -> None:
        """Enharmonic equivalence is reflexive and symmetric."""
        x, y = NoteName.parse(a), NoteName.parse(b)
        assert x.is_enharmonic_with(x)
        assert x.is_enharmonic_with(y) == y.is_enharmonic_with(x)

    def test_enharmonic_pairs(self) -> None:
        """Spelling differs, sound matches."""
        assert NoteName.parse("C#").is_enharmonic_with(NoteName.parse("Db"))
        assert NoteName.parse("B#").is_enharmonic_with(NoteName.parse("C"))
        assert not NoteName.parse("C").is_enharmonic_with(NoteName.parse("D"))

    def test_enharmonics_list(self) -> None:
        """Every other spelling of the pitch class, in coordinate order."""
        assert NoteName.parse("C#").enharmonics() == [NoteName.parse("Db"), NoteName.parse("B##")]

    def test_semitones_unreduced(self) -> None:
        """Cb and B# reach outside 0-11 before reduction."""
        assert NoteName.parse("Cb").semitones == -1
        assert NoteName.parse("B#").semitones == 12
        assert NoteName.parse("B#").pitch_class == 0

    def test_spell(self) -> None:
        """Glyph style is a rendering choice."""
        bb = NoteName.parse("Bb")
        assert str(bb) == "Bb"
        assert bb.spell(SymbolStyle.UNICODE) == "B♭"
        assert repr(NoteName.parse("C#")) == "NoteName('C#')"

    def test_checked_range(self) -> None:
        """Computed notes past Fbb or B## are a user-facing error."""
        b_double_sharp = NoteName.parse("B##")
        assert b_double_sharp.checked() is b_double_sharp
        beyond = b_double_sharp + Interval.parse("A1")
        assert not beyond.is_spellable
        with pytest.raises(NoteOutOfRangeError) as exc_info:
            beyond.checked()
        assert isinstance(exc_info.value, ParseError)
        assert exc_info.value.fifths == 26


class TestPitch:
    """Tests for Pitch."""

    def test_absolute_and_midi(self, middle_c: Pitch) -> None:
        """C4 is MIDI 60 and absolute 72."""
        assert middle_c.midi_number == 60
        assert middle_c.absolute == 72
        assert Pitch.parse("C-2").absolute == 0
        assert Pitch.parse("F#-1").midi_number == 6

    def test_octave_belongs_to_letter(self, middle_c: Pitch) -> None:
        """B#3 sounds as C4 and Cb4 as B3."""
        assert Pitch.parse("B#3").is_enharmonic_with(middle_c)
        assert Pitch.parse("Cb4").absolute == Pitch.parse("B3").absolute

    @pytest.mark.parametrize("text", ["C", "4", "C4.5", "C 4", "", "C#"])
    def test_parse_errors(self, text: str) -> None:
        """Malformed pitch strings raise InvalidPitchError."""
        with pytest.raises(InvalidPitchError):
            Pitch.parse(text)

    def test_parse_bad_note(self) -> None:
        """The note part reports its own error kind."""
        with pytest.raises(InvalidNoteNameError):
            Pitch.parse("H4")
        with pytest.raises(InvalidAccidentalError):
            Pitch.parse("C$4")

    def test_from_midi(self) -> None:
        """Plain spellings for MIDI numbers."""
        assert Pitch.from_midi(61) == Pitch.parse("C#4")
        assert Pitch.from_midi(61, prefer_flats=True) == Pitch.parse("Db4")
        assert Pitch.from_midi(0) == Pitch.parse("C-1")

    def test_add_interval(self, middle_c: Pitch) -> None:
        """Exact transposition keeps the interval's spelling."""
        assert middle_c + Interval.M3 == Pitch.parse("E4")
        assert middle_c + Interval.P8 == Pitch.parse("C5")
        assert middle_c + Interval.A4 == Pitch.parse("F#4")
        assert middle_c + Interval.d5 == Pitch.parse("Gb4")
        assert Pitch.parse("B3") + Interval.m2 == middle_c
        assert middle_c + Interval.parse("-P5") == Pitch.parse("F3")

    def test_subtract_interval(self, middle_c: Pitch) -> None:
        """Pitch - Interval transposes down."""
        assert middle_c - Interval.M3 == Pitch.parse("Ab3")
        assert middle_c - Interval.P8 == Pitch.parse("C3")

    def test_subtract_pitch(self, middle_c: Pitch) -> None:
        """Pitch - Pitch gives the interval, octaves included."""
        assert Pitch.parse("G4") - middle_c == Interval.P5
        assert Pitch.parse("C5") - middle_c == Interval.P8
        assert str(middle_c - Pitch.parse("G4")) == "-P5"

    def test_transpose_zero_is_identity(self, middle_c: Pitch) -> None:
        """Zero semitones returns the same pitch."""
        assert middle_c.transpose(0) is middle_c

    def test_str(self) -> None:
        """Pitches render as note plus octave."""
        assert str(Pitch.parse("Bb3")) == "Bb3"
        assert Pitch.parse("Bb3").spell(SymbolStyle.UNICODE) == "B♭3"
        assert repr(Pitch.parse("F#2")) == "Pitch('F#2')"


class TestSymbols:
    """Tests for accidental glyphs."""

    def test_glyphs(self) -> None:
        """Both glyph families cover the full range."""
        assert accidental_glyph(-2, SymbolStyle.UNICODE) == "𝄫"
        assert accidental_glyph(2) == "##"
        assert accidental_glyph(0) == ""

    def test_explicit_natural(self) -> None:
        """Naturals render only when asked."""
        assert accidental_glyph(0, SymbolStyle.ASCII, explicit_natural=True) == "n"
        assert accidental_glyph(0, SymbolStyle.UNICODE, explicit_natural=True) == "♮"

    def test_resolve_style(self) -> None:
        """User-supplied style values resolve to SymbolStyle."""
        assert resolve_style(None) == DEFAULT_SYMBOL_STYLE
        assert resolve_style("UNICODE") == SymbolStyle.UNICODE
        assert resolve_style(SymbolStyle.ASCII) == SymbolStyle.ASCII
        assert resolve_style(None, SymbolStyle.UNICODE) == SymbolStyle.UNICODE
        with pytest.raises(ValueError):
            resolve_style("fancy")
