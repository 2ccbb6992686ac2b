"""
Interval - a position on the line of fifths plus an octave count.

Intervals form an abelian group under component-wise addition. The
``fifths`` field carries the interval class (how many perfect fifths
it takes to reach it), ``octaves`` the displacement. Two intervals are
equal only when both fields match, so an augmented fourth and a
diminished fifth stay distinct even though they span the same
number of semitones.
"""

from __future__ import annotations

import re
from functools import total_ordering
from typing import ClassVar

from chuk_mcp_theory.constants import DIATONIC_SEMITONES
from chuk_mcp_theory.errors import InvalidIntervalError

# Line-of-fifths position of the major/perfect form of each simple size
_BASE_FIFTHS: dict[int, int] = {1: 0, 2: 2, 3: 4, 4: -1, 5: 1, 6: 3, 7: 5}
_PERFECT_SIZES = frozenset({1, 4, 5})

_INTERVAL_PATTERN = re.compile(r"^(-)?(P|M|m|A+|d+)(\d+)$")


@total_ordering
class Interval:
    """
    A musical interval on the line of fifths.

    Semitones are derived, never stored:
        ((fifths * 7) mod 12) + octaves * 12

    Ordering compares semitone size. Equality compares both fields.

    Immutable and hashable.
    """

    __slots__ = ("_fifths", "_octaves")
    _fifths: int
    _octaves: int

    # Named intervals (class constants)
    PERFECT_UNISON: ClassVar[Interval]
    AUGMENTED_UNISON: ClassVar[Interval]
    DIMINISHED_SECOND: ClassVar[Interval]
    MINOR_SECOND: ClassVar[Interval]
    MAJOR_SECOND: ClassVar[Interval]
    AUGMENTED_SECOND: ClassVar[Interval]
    DIMINISHED_THIRD: ClassVar[Interval]
    MINOR_THIRD: ClassVar[Interval]
    MAJOR_THIRD: ClassVar[Interval]
    AUGMENTED_THIRD: ClassVar[Interval]
    DIMINISHED_FOURTH: ClassVar[Interval]
    PERFECT_FOURTH: ClassVar[Interval]
    AUGMENTED_FOURTH: ClassVar[Interval]
    DIMINISHED_FIFTH: ClassVar[Interval]
    PERFECT_FIFTH: ClassVar[Interval]
    AUGMENTED_FIFTH: ClassVar[Interval]
    DIMINISHED_SIXTH: ClassVar[Interval]
    MINOR_SIXTH: ClassVar[Interval]
    MAJOR_SIXTH: ClassVar[Interval]
    AUGMENTED_SIXTH: ClassVar[Interval]
    DIMINISHED_SEVENTH: ClassVar[Interval]
    MINOR_SEVENTH: ClassVar[Interval]
    MAJOR_SEVENTH: ClassVar[Interval]
    AUGMENTED_SEVENTH: ClassVar[Interval]
    DIMINISHED_OCTAVE: ClassVar[Interval]
    PERFECT_OCTAVE: ClassVar[Interval]
    AUGMENTED_OCTAVE: ClassVar[Interval]
    DIMINISHED_NINTH: ClassVar[Interval]
    MINOR_NINTH: ClassVar[Interval]
    MAJOR_NINTH: ClassVar[Interval]
    AUGMENTED_NINTH: ClassVar[Interval]
    DIMINISHED_TENTH: ClassVar[Interval]
    MINOR_TENTH: ClassVar[Interval]
    MAJOR_TENTH: ClassVar[Interval]
    AUGMENTED_TENTH: ClassVar[Interval]
    DIMINISHED_ELEVENTH: ClassVar[Interval]
    PERFECT_ELEVENTH: ClassVar[Interval]
    AUGMENTED_ELEVENTH: ClassVar[Interval]
    DIMINISHED_TWELFTH: ClassVar[Interval]
    PERFECT_TWELFTH: ClassVar[Interval]
    AUGMENTED_TWELFTH: ClassVar[Interval]
    DIMINISHED_THIRTEENTH: ClassVar[Interval]
    MINOR_THIRTEENTH: ClassVar[Interval]
    MAJOR_THIRTEENTH: ClassVar[Interval]
    AUGMENTED_THIRTEENTH: ClassVar[Interval]
    DIMINISHED_FOURTEENTH: ClassVar[Interval]
    MINOR_FOURTEENTH: ClassVar[Interval]
    MAJOR_FOURTEENTH: ClassVar[Interval]
    AUGMENTED_FOURTEENTH: ClassVar[Interval]

    # Short aliases
    UNISON: ClassVar[Interval]
    OCTAVE: ClassVar[Interval]
    TRITONE: ClassVar[Interval]
    P1: ClassVar[Interval]
    m2: ClassVar[Interval]
    M2: ClassVar[Interval]
    m3: ClassVar[Interval]
    M3: ClassVar[Interval]
    P4: ClassVar[Interval]
    A4: ClassVar[Interval]
    TT: ClassVar[Interval]
    d5: ClassVar[Interval]
    P5: ClassVar[Interval]
    m6: ClassVar[Interval]
    M6: ClassVar[Interval]
    m7: ClassVar[Interval]
    M7: ClassVar[Interval]
    P8: ClassVar[Interval]
    M9: ClassVar[Interval]

    def __init__(self, fifths: int, octaves: int = 0) -> None:
        """Create an interval from its line-of-fifths position and octave count."""
        object.__setattr__(self, "_fifths", fifths)
        object.__setattr__(self, "_octaves", octaves)

    @classmethod
    def from_fifths_and_semitones(cls, fifths: int, semitones: int) -> Interval:
        """
        Build the interval with the given class that spans exactly ``semitones``.

        The octave count is whatever makes the semitone formula agree.
        """
        octaves, remainder = divmod(semitones - (fifths * 7) % 12, 12)
        if remainder:
            raise ValueError(f"{semitones} semitones is not reachable with fifths={fifths}")
        return cls(fifths, octaves)

    @classmethod
    def from_quality_and_size(cls, quality: str, size: int) -> Interval:
        """
        Build an interval from a quality symbol and a generic size.

        Args:
            quality: "P", "M", "m", one or more "A", or one or more "d"
            size: Generic size, 1 = unison, 8 = octave, 10 = tenth ...

        Returns:
            The interval

        Raises:
            InvalidIntervalError: If the quality/size pair is impossible
        """
        code = f"{quality}{size}"
        if size < 1:
            raise InvalidIntervalError(code, "size must be at least 1")

        simple = (size - 1) % 7 + 1
        octave_span = (size - 1) // 7
        base = _BASE_FIFTHS[simple]
        perfect = simple in _PERFECT_SIZES

        if quality == "P":
            if not perfect:
                raise InvalidIntervalError(code, f"a {simple} cannot be perfect")
            alteration = 0
        elif quality in ("M", "m"):
            if perfect:
                raise InvalidIntervalError(code, f"a {simple} cannot be major or minor")
            alteration = 0 if quality == "M" else -1
        elif quality and set(quality) == {"A"}:
            alteration = len(quality)
        elif quality and set(quality) == {"d"}:
            alteration = -len(quality) if perfect else -len(quality) - 1
        else:
            raise InvalidIntervalError(code, f"unknown quality '{quality}'")

        fifths = base + 7 * alteration
        semitones = DIATONIC_SEMITONES[simple - 1] + 12 * octave_span + alteration
        return cls.from_fifths_and_semitones(fifths, semitones)

    @classmethod
    def parse(cls, text: str) -> Interval:
        """
        Parse an interval designation like 'M3', 'P5', 'AA4', 'm9' or '-P8'.

        A leading '-' gives the descending form of the interval.
        """
        match = _INTERVAL_PATTERN.match(text.strip())
        if not match:
            raise InvalidIntervalError(text)
        negative, quality, size = match.groups()
        interval = cls.from_quality_and_size(quality, int(size))
        return interval.downward() if negative else interval

    @property
    def fifths(self) -> int:
        """Position on the line of fifths."""
        return self._fifths

    @property
    def octaves(self) -> int:
        """Octave displacement."""
        return self._octaves

    @property
    def semitones(self) -> int:
        """Size in semitones, constant time from the two fields."""
        return (self._fifths * 7) % 12 + self._octaves * 12

    @property
    def number(self) -> int:
        """
        Generic size (1 = unison, 3 = third, 10 = tenth).

        Only meaningful for intervals of zero or more semitones.
        """
        steps = (self._fifths * 4) % 7
        octave_span = (self.semitones - DIATONIC_SEMITONES[steps] + 6) // 12
        return steps + 1 + 7 * octave_span

    @property
    def quality_symbol(self) -> str:
        """Quality as P, M, m, A.. or d.."""
        simple = (self._fifths * 4) % 7 + 1
        alteration = (self._fifths - _BASE_FIFTHS[simple]) // 7
        if simple in _PERFECT_SIZES:
            if alteration == 0:
                return "P"
            return "A" * alteration if alteration > 0 else "d" * -alteration
        if alteration == 0:
            return "M"
        if alteration == -1:
            return "m"
        return "A" * alteration if alteration > 0 else "d" * (-alteration - 1)

    def interval_class(self) -> Interval:
        """The same interval with the octave component dropped."""
        return Interval(self._fifths, 0)

    def downward(self) -> Interval:
        """
        The same span measured in the opposite direction.

        Negates both the interval class and the semitone count, so P5
        becomes a fifth below (-7 semitones). Unlike the group inverse,
        this keeps the size.
        """
        return Interval.from_fifths_and_semitones(-self._fifths, -self.semitones)

    def compound(self, octaves: int = 1) -> Interval:
        """This interval widened by whole octaves."""
        return Interval(self._fifths, self._octaves + octaves)

    def is_third(self) -> bool:
        """True for any third (d3, m3, M3, A3), simple or compound."""
        return self._fifths in (-10, -3, 4, 11)

    def is_fifth(self) -> bool:
        """True for a diminished, perfect or augmented fifth, simple or compound."""
        return self._fifths in (-6, 1, 8)

    def is_seventh(self) -> bool:
        """True for any seventh (d7, m7, M7, A7), simple or compound."""
        return self._fifths in (-9, -2, 5, 12)

    def __add__(self, other: Interval) -> Interval:
        """Compose two intervals."""
        if not isinstance(other, Interval):
            return NotImplemented
        return Interval(self._fifths + other._fifths, self._octaves + other._octaves)

    def __neg__(self) -> Interval:
        """Group inverse: flips both fields."""
        return Interval(-self._fifths, -self._octaves)

    def __sub__(self, other: Interval) -> Interval:
        if not isinstance(other, Interval):
            return NotImplemented
        return self + (-other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self._fifths == other._fifths and self._octaves == other._octaves

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return self.semitones < other.semitones

    def __hash__(self) -> int:
        return hash((self._fifths, self._octaves))

    def __repr__(self) -> str:
        name = _CONSTANT_NAMES.get((self._fifths, self._octaves))
        if name:
            return f"Interval.{name}"
        return f"Interval({self._fifths}, {self._octaves})"

    def __str__(self) -> str:
        """Conventional designation such as 'M3', 'P8' or 'A11'."""
        if self.semitones < 0:
            return f"-{self.downward()}"
        return f"{self.quality_symbol}{self.number}"


# (constant name, designation) for every named interval, unison through a compound 14th
_NAMED: list[tuple[str, str]] = [
    ("PERFECT_UNISON", "P1"),
    ("AUGMENTED_UNISON", "A1"),
    ("DIMINISHED_SECOND", "d2"),
    ("MINOR_SECOND", "m2"),
    ("MAJOR_SECOND", "M2"),
    ("AUGMENTED_SECOND", "A2"),
    ("DIMINISHED_THIRD", "d3"),
    ("MINOR_THIRD", "m3"),
    ("MAJOR_THIRD", "M3"),
    ("AUGMENTED_THIRD", "A3"),
    ("DIMINISHED_FOURTH", "d4"),
    ("PERFECT_FOURTH", "P4"),
    ("AUGMENTED_FOURTH", "A4"),
    ("DIMINISHED_FIFTH", "d5"),
    ("PERFECT_FIFTH", "P5"),
    ("AUGMENTED_FIFTH", "A5"),
    ("DIMINISHED_SIXTH", "d6"),
    ("MINOR_SIXTH", "m6"),
    ("MAJOR_SIXTH", "M6"),
    ("AUGMENTED_SIXTH", "A6"),
    ("DIMINISHED_SEVENTH", "d7"),
    ("MINOR_SEVENTH", "m7"),
    ("MAJOR_SEVENTH", "M7"),
    ("AUGMENTED_SEVENTH", "A7"),
    ("DIMINISHED_OCTAVE", "d8"),
    ("PERFECT_OCTAVE", "P8"),
    ("AUGMENTED_OCTAVE", "A8"),
    ("DIMINISHED_NINTH", "d9"),
    ("MINOR_NINTH", "m9"),
    ("MAJOR_NINTH", "M9"),
    ("AUGMENTED_NINTH", "A9"),
    ("DIMINISHED_TENTH", "d10"),
    ("MINOR_TENTH", "m10"),
    ("MAJOR_TENTH", "M10"),
    ("AUGMENTED_TENTH", "A10"),
    ("DIMINISHED_ELEVENTH", "d11"),
    ("PERFECT_ELEVENTH", "P11"),
    ("AUGMENTED_ELEVENTH", "A11"),
    ("DIMINISHED_TWELFTH", "d12"),
    ("PERFECT_TWELFTH", "P12"),
    ("AUGMENTED_TWELFTH", "A12"),
    ("DIMINISHED_THIRTEENTH", "d13"),
    ("MINOR_THIRTEENTH", "m13"),
    ("MAJOR_THIRTEENTH", "M13"),
    ("AUGMENTED_THIRTEENTH", "A13"),
    ("DIMINISHED_FOURTEENTH", "d14"),
    ("MINOR_FOURTEENTH", "m14"),
    ("MAJOR_FOURTEENTH", "M14"),
    ("AUGMENTED_FOURTEENTH", "A14"),
]

_CONSTANT_NAMES: dict[tuple[int, int], str] = {}

# Initialize class constants after class is defined
for _name, _code in _NAMED:
    _interval = Interval.parse(_code)
    setattr(Interval, _name, _interval)
    _CONSTANT_NAMES[(_interval.fifths, _interval.octaves)] = _name

# Short aliases
Interval.UNISON = Interval.PERFECT_UNISON
Interval.OCTAVE = Interval.PERFECT_OCTAVE
Interval.TRITONE = Interval.AUGMENTED_FOURTH
Interval.P1 = Interval.PERFECT_UNISON
Interval.m2 = Interval.MINOR_SECOND
Interval.M2 = Interval.MAJOR_SECOND
Interval.m3 = Interval.MINOR_THIRD
Interval.M3 = Interval.MAJOR_THIRD
Interval.P4 = Interval.PERFECT_FOURTH
Interval.A4 = Interval.AUGMENTED_FOURTH
Interval.TT = Interval.AUGMENTED_FOURTH
Interval.d5 = Interval.DIMINISHED_FIFTH
Interval.P5 = Interval.PERFECT_FIFTH
Interval.m6 = Interval.MINOR_SIXTH
Interval.M6 = Interval.MAJOR_SIXTH
Interval.m7 = Interval.MINOR_SEVENTH
Interval.M7 = Interval.MAJOR_SEVENTH
Interval.P8 = Interval.PERFECT_OCTAVE
Interval.M9 = Interval.MAJOR_NINTH
