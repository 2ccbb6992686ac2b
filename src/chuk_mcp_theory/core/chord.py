"""
Chord primitives - ChordQuality, HarmonicFunction, Chord.

A chord is a root NoteName plus intervals measured from that root
(the root itself included as a unison). Notes are derived on every
access. Classification works on interval classes, so a compound tenth
counts as a third and a ninth shares its class with a second.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from chuk_mcp_theory.constants import ErrorMessages, SymbolStyle
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import NoteName
from chuk_mcp_theory.core.symbols import flat_sign, sharp_sign

# Line-of-fifths classes used by the classifier
_MAJOR_THIRD = 4
_MINOR_THIRD = -3
_PERFECT_FIFTH = 1
_DIMINISHED_FIFTH = -6
_AUGMENTED_FIFTH = 8
_MINOR_SEVENTH = -2
_MAJOR_SEVENTH = 5
_DIMINISHED_SEVENTH = -9
_NINTH = 2  # also the sus2 second
_FLAT_NINTH = -5
_SHARP_NINTH = 9
_ELEVENTH = -1  # also the sus4 fourth
_SHARP_ELEVENTH = 6
_THIRTEENTH = 3  # also the added sixth
_FLAT_THIRTEENTH = -4


class ChordQuality(str, Enum):
    """Triad quality."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"


class HarmonicFunction(str, Enum):
    """
    Harmonic role of a chord within a key.

    Detected with Ian Quinn's scale-degree scoring: trigger degrees
    score 8, associates 4, and conditional dissonances 1.
    """

    TONIC = "tonic"
    SUBDOMINANT = "subdominant"
    DOMINANT = "dominant"

    @property
    def triggers(self) -> tuple[int, ...]:
        return _TRIGGERS[self]

    @property
    def associates(self) -> tuple[int, ...]:
        return _ASSOCIATES[self]

    @property
    def dissonances(self) -> tuple[tuple[int, int | None], ...]:
        """(degree, required companion degree or None)."""
        return _DISSONANCES[self]

    def score(self, steps: Sequence[int]) -> int:
        """Score a collection of scale steps (1-7) for this function."""
        total = 0
        for step in steps:
            if step in self.triggers:
                total += 8
            elif step in self.associates:
                total += 4
            elif any(
                degree == step and (companion is None or companion in steps)
                for degree, companion in self.dissonances
            ):
                total += 1
        return total

    @classmethod
    def detect(cls, steps: Sequence[int]) -> HarmonicFunction | None:
        """
        Detect the harmonic function of a set of scale steps.

        Returns None when no function scores above zero. On a tie the
        later function in tonic/subdominant/dominant order wins.
        """
        best: HarmonicFunction | None = None
        best_score = 0
        for function in cls:
            score = function.score(steps)
            if score > 0 and score >= best_score:
                best = function
                best_score = score
        return best


_TRIGGERS: dict[HarmonicFunction, tuple[int, ...]] = {
    HarmonicFunction.TONIC: (1, 3),
    HarmonicFunction.SUBDOMINANT: (4, 6),
    HarmonicFunction.DOMINANT: (5, 7),
}
_ASSOCIATES: dict[HarmonicFunction, tuple[int, ...]] = {
    HarmonicFunction.TONIC: (5, 6),
    HarmonicFunction.SUBDOMINANT: (1, 2),
    HarmonicFunction.DOMINANT: (2,),
}
_DISSONANCES: dict[HarmonicFunction, tuple[tuple[int, int | None], ...]] = {
    HarmonicFunction.TONIC: ((5, 6), (7, None)),
    HarmonicFunction.SUBDOMINANT: ((1, 2), (3, None)),
    HarmonicFunction.DOMINANT: ((4, None), (6, None)),
}


@dataclass(frozen=True)
class Chord:
    """
    A chord as a root plus intervals from that root.

    ``bass`` is set for slash chords and inversions.

    Examples:
        Chord.major(NoteName.parse("C")) = C E G
        Chord.from_notes([A, C, E]) = Am
        Chord.dominant_7th(G).inversion(1) = G7/B
    """

    root: NoteName
    intervals: tuple[Interval, ...]
    bass: NoteName | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "intervals", tuple(self.intervals))

    # --- Constructors ---

    @classmethod
    def major(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.M3, Interval.P5))

    @classmethod
    def minor(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.m3, Interval.P5))

    @classmethod
    def diminished(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.m3, Interval.DIMINISHED_FIFTH))

    @classmethod
    def augmented(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.M3, Interval.AUGMENTED_FIFTH))

    @classmethod
    def dominant_7th(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.M3, Interval.P5, Interval.m7))

    @classmethod
    def major_7th(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.M3, Interval.P5, Interval.M7))

    @classmethod
    def minor_7th(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.m3, Interval.P5, Interval.m7))

    @classmethod
    def minor_major_7th(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.m3, Interval.P5, Interval.M7))

    @classmethod
    def half_diminished_7th(cls, root: NoteName) -> Chord:
        return cls(root, (Interval.P1, Interval.m3, Interval.DIMINISHED_FIFTH, Interval.m7))

    @classmethod
    def diminished_7th(cls, root: NoteName) -> Chord:
        return cls(
            root,
            (Interval.P1, Interval.m3, Interval.DIMINISHED_FIFTH, Interval.DIMINISHED_SEVENTH),
        )

    @classmethod
    def from_notes_and_root(cls, notes: Sequence[NoteName], root: NoteName) -> Chord:
        """Build a chord from notes with a known root. Intervals are sorted by size."""
        intervals = sorted((root.interval_to(note) for note in notes), key=lambda i: i.semitones)
        return cls(root, tuple(intervals))

    @classmethod
    def from_notes(cls, notes: Sequence[NoteName]) -> Chord:
        """
        Build a chord from notes in any order, detecting the root.

        Each candidate root scores 5 for every other note a fifth above
        it, 3 for every third and 1 for every seventh, so a stacked seventh
        chord (A C E G) roots on A rather than reading as C6. Remaining ties
        go to the lower note.
        """
        if not notes:
            raise ValueError(ErrorMessages.EMPTY_CHORD)

        best = notes[0]
        best_score = -1
        for candidate in notes:
            score = 0
            for other in notes:
                if other == candidate:
                    continue
                interval = candidate.interval_to(other)
                if interval.is_fifth():
                    score += 5
                elif interval.is_third():
                    score += 3
                elif interval.is_seventh():
                    score += 1
            if score > best_score or (score == best_score and candidate.semitones < best.semitones):
                best = candidate
                best_score = score
        return cls.from_notes_and_root(notes, best)

    # --- Derived values ---

    @property
    def notes(self) -> list[NoteName]:
        """Chord tones, root first, recomputed on every access."""
        return [self.root + interval for interval in self.intervals]

    @property
    def third(self) -> Interval | None:
        """The third of the chord (if present)."""
        return next((i for i in self.intervals if i.is_third()), None)

    @property
    def fifth(self) -> Interval | None:
        """The fifth of the chord (if present)."""
        return next((i for i in self.intervals if i.is_fifth()), None)

    @property
    def seventh(self) -> Interval | None:
        """The seventh of the chord (if present)."""
        return next((i for i in self.intervals if i.is_seventh()), None)

    def _classes(self) -> set[int]:
        return {interval.fifths for interval in self.intervals}

    def _third_quality(self) -> ChordQuality | None:
        fifths = [interval.fifths for interval in self.intervals]
        major = fifths.count(_MAJOR_THIRD)
        minor = fifths.count(_MINOR_THIRD)
        if major > minor:
            return ChordQuality.MAJOR
        if minor > major:
            return ChordQuality.MINOR
        return None

    def _suspension(self) -> str | None:
        classes = self._classes()
        if _MAJOR_THIRD in classes or _MINOR_THIRD in classes:
            return None
        if _ELEVENTH in classes:
            return "sus4"
        if _NINTH in classes:
            return "sus2"
        return None

    # --- Classification ---

    def quality(self) -> ChordQuality | None:
        """
        Triad quality from counted thirds and fifths.

        The strictly more frequent third type and fifth type decide.
        A chord with a third but no fifth is classified by the third.
        Returns None when the result is indeterminate.
        """
        third = self._third_quality()
        if third is None:
            return None

        fifths = [interval.fifths for interval in self.intervals]
        counts = {
            _PERFECT_FIFTH: fifths.count(_PERFECT_FIFTH),
            _DIMINISHED_FIFTH: fifths.count(_DIMINISHED_FIFTH),
            _AUGMENTED_FIFTH: fifths.count(_AUGMENTED_FIFTH),
        }
        if not any(counts.values()):
            return third

        top = max(counts.values())
        winners = [kind for kind, count in counts.items() if count == top]
        if len(winners) != 1:
            return None

        combination = (third, winners[0])
        if combination == (ChordQuality.MAJOR, _PERFECT_FIFTH):
            return ChordQuality.MAJOR
        if combination == (ChordQuality.MINOR, _PERFECT_FIFTH):
            return ChordQuality.MINOR
        if combination == (ChordQuality.MINOR, _DIMINISHED_FIFTH):
            return ChordQuality.DIMINISHED
        if combination == (ChordQuality.MAJOR, _AUGMENTED_FIFTH):
            return ChordQuality.AUGMENTED
        return None

    def extension_label(self, style: SymbolStyle = SymbolStyle.ASCII) -> str | None:
        """
        Label for sevenths, extensions and added tones.

        With a seventh, the highest natural extension names the chord and
        subsumes the ones below it ("9", "13", "maj13(no11)", "(maj11)" on
        a minor triad). Without a seventh, extensions become added tones
        ("add9", "add9/11", "6", "6/9"). Altered tones are appended in
        parentheses. Returns None when there is nothing to label.
        """
        classes = self._classes()
        suspension = self._suspension()
        flat, sharp = flat_sign(style), sharp_sign(style)

        has_ninth = _NINTH in classes and suspension != "sus2"
        has_eleventh = _ELEVENTH in classes and suspension != "sus4"
        has_thirteenth = _THIRTEENTH in classes
        altered_ninth = _FLAT_NINTH in classes or _SHARP_NINTH in classes
        alterations = [
            label
            for present, label in (
                (_FLAT_NINTH in classes, f"{flat}9"),
                (_SHARP_NINTH in classes, f"{sharp}9"),
                (_SHARP_ELEVENTH in classes, f"{sharp}11"),
                (_FLAT_THIRTEENTH in classes, f"{flat}13"),
            )
            if present
        ]

        if _MAJOR_SEVENTH in classes or _MINOR_SEVENTH in classes:
            prefix = "maj" if _MAJOR_SEVENTH in classes else ""
            if has_thirteenth:
                top = 13
            elif has_eleventh:
                top = 11
            elif has_ninth:
                top = 9
            else:
                top = 7

            if prefix and self._third_quality() == ChordQuality.MINOR:
                label = f"(maj{top})"
            else:
                label = f"{prefix}{top}"

            if top > 9 and not has_ninth and not altered_ninth:
                label += "(no9)"
            if top > 11 and not has_eleventh and _SHARP_ELEVENTH not in classes:
                label += "(no11)"
        else:
            sixth = any(i.fifths == _THIRTEENTH and i.octaves == 0 for i in self.intervals)
            added = []
            if sixth:
                label = "6/9" if has_ninth else "6"
            else:
                label = ""
                if has_ninth:
                    added.append(9)
            if has_eleventh:
                added.append(11)
            if has_thirteenth and not sixth:
                added.append(13)
            if added:
                label += "add" + "/".join(str(n) for n in added)

        label += "".join(f"({alteration})" for alteration in alterations)
        return label or None

    def abbreviated_name(self, style: SymbolStyle = SymbolStyle.ASCII) -> str:
        """
        Conventional chord symbol such as 'C', 'Am7', 'Bdim7', 'G7sus4' or 'C/E'.
        """
        quality = self.quality()
        classes = self._classes()
        flat, sharp = flat_sign(style), sharp_sign(style)
        label = self.extension_label(style) or ""

        if quality == ChordQuality.DIMINISHED and (
            _DIMINISHED_SEVENTH in classes or _THIRTEENTH in classes
        ):
            body = "dim7"
        elif quality == ChordQuality.DIMINISHED and _MINOR_SEVENTH in classes:
            body = f"m7{flat}5"
        elif quality is not None:
            prefix = {
                ChordQuality.MAJOR: "",
                ChordQuality.MINOR: "m",
                ChordQuality.DIMINISHED: "dim",
                ChordQuality.AUGMENTED: "aug",
            }[quality]
            body = prefix + label
        else:
            third = self._third_quality()
            suspension = self._suspension()
            if third is not None:
                body = ("m" if third == ChordQuality.MINOR else "") + label
                if _DIMINISHED_FIFTH in classes:
                    body += f"({flat}5)"
                elif _AUGMENTED_FIFTH in classes:
                    body += f"({sharp}5)"
            elif suspension is not None:
                body = label + suspension
            elif classes == {0, _PERFECT_FIFTH}:
                body = "5"
            else:
                body = label

        name = f"{self.root.spell(style)}{body}"
        if self.bass is not None and self.bass != self.root:
            name += f"/{self.bass.spell(style)}"
        return name

    # --- Transformations ---

    def transposed(self, interval: Interval) -> Chord:
        """The same chord shape moved by an interval."""
        bass = self.bass + interval if self.bass is not None else None
        return Chord(self.root + interval, self.intervals, bass)

    def inversion(self, n: int) -> Chord:
        """
        The n-th inversion as a slash chord.

        The root is unchanged; the n-th chord tone (root = 0) becomes the bass.
        """
        tones = self.notes
        bass = tones[n % len(tones)]
        return Chord(self.root, self.intervals, None if bass == self.root else bass)

    def __str__(self) -> str:
        return self.abbreviated_name()

    def __repr__(self) -> str:
        intervals = ", ".join(str(i) for i in self.intervals)
        return f"Chord({self.root}, [{intervals}])"
