"""
Enharmonic spelling selector.

Chromatic transposition is easy to compute and hard to spell: C4 up one
semitone is both C#4 and Db4. This module enumerates every
letter/accidental combination that sounds the target pitch, scores each
one against a set of soft musical penalties, and returns the winner.

All 35 candidates are scored on every call.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chuk_mcp_theory.core.note import Accidental, Letter, NoteName
from chuk_mcp_theory.core.pitch import Pitch
from chuk_mcp_theory.errors import InvariantViolation

logger = logging.getLogger(__name__)

# Enumeration order of the scan; with <= replacement this order decides ties
_LETTER_ORDER: tuple[Letter, ...] = (
    Letter.C,
    Letter.D,
    Letter.E,
    Letter.F,
    Letter.G,
    Letter.A,
    Letter.B,
)
_ACCIDENTAL_ORDER: tuple[Accidental, ...] = (
    Accidental.DOUBLE_FLAT,
    Accidental.FLAT,
    Accidental.NATURAL,
    Accidental.SHARP,
    Accidental.DOUBLE_SHARP,
)

# (letter distance, semitone distance) pairs that form an ordinary diatonic interval
_DIATONIC_STEPS: frozenset[tuple[int, int]] = frozenset(
    {
        (0, 0),
        (1, 1),
        (6, -1),
        (1, 2),
        (6, -2),
        (2, 3),
        (5, -3),
        (2, 4),
        (5, -4),
        (3, 5),
        (4, -5),
        (4, 7),
        (3, -7),
        (5, 8),
        (2, -8),
        (5, 9),
        (2, -9),
        (6, 10),
        (1, -10),
        (6, 11),
        (1, -11),
        (0, 12),
        (0, -12),
    }
)

# Conventionally avoided spellings: B#, E#, Cb, Fb
_SUSPICIOUS: frozenset[NoteName] = frozenset(
    {
        NoteName.of(Letter.B, Accidental.SHARP),
        NoteName.of(Letter.E, Accidental.SHARP),
        NoteName.of(Letter.C, Accidental.FLAT),
        NoteName.of(Letter.F, Accidental.FLAT),
    }
)


def expected_letter_steps(semitones: int) -> int:
    """
    Diatonic steps a plain transposition by ``semitones`` normally spans.

    0 -> 0, 1-2 -> 1, 3-4 -> 2, 5 -> 3, 6-7 -> 4, 8-9 -> 5, 10-11 -> 6, else 7.
    """
    distance = abs(semitones)
    if distance == 0:
        return 0
    if distance <= 2:
        return 1
    if distance <= 4:
        return 2
    if distance == 5:
        return 3
    if distance <= 7:
        return 4
    if distance <= 9:
        return 5
    if distance <= 11:
        return 6
    return 7


@dataclass(frozen=True)
class SpellingPenalty:
    """Penalty breakdown for one candidate spelling. Lower is better."""

    diatonic_step: int
    spelling_change: int
    unnatural_motion: int
    suspicious: int
    letter_bias: int
    direction: int

    @property
    def total(self) -> int:
        return (
            self.diatonic_step
            + self.spelling_change
            + self.unnatural_motion
            + self.suspicious
            + self.letter_bias
            + self.direction
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "diatonic_step": self.diatonic_step,
            "spelling_change": self.spelling_change,
            "unnatural_motion": self.unnatural_motion,
            "suspicious": self.suspicious,
            "letter_bias": self.letter_bias,
            "direction": self.direction,
            "total": self.total,
        }


@dataclass(frozen=True)
class SpellingCandidate:
    """A spelling that sounds the target pitch, with its score."""

    pitch: Pitch
    penalty: SpellingPenalty


def _diatonic_step_penalty(letter_distance: int, semitones: int) -> int:
    pair = (letter_distance, semitones)
    if pair in _DIATONIC_STEPS:
        return 0
    if abs(semitones) == 6:
        return 1
    if abs(semitones) in (1, 2):
        return 2
    return 4


def _direction_penalty(accidental: Accidental, semitones: int) -> int:
    if accidental == Accidental.NATURAL:
        return 0
    if accidental.is_flat and semitones < 0:
        return 0
    if accidental.is_sharp and semitones > 0:
        return 0
    return 2


def score_candidate(source: Pitch, candidate: Pitch, semitones: int) -> SpellingPenalty:
    """
    Score one candidate spelling for a transposition of ``source``.

    Args:
        source: The pitch being transposed
        candidate: A spelling that sounds the target pitch
        semitones: The signed transposition

    Returns:
        The penalty breakdown
    """
    source_letter = source.note.letter
    source_accidental = source.note.accidental
    letter = candidate.note.letter
    accidental = candidate.note.accidental
    letter_distance = (letter.index - source_letter.index) % 7

    steps = expected_letter_steps(semitones)
    expected = source_letter.step(steps if semitones >= 0 else -steps)

    return SpellingPenalty(
        diatonic_step=_diatonic_step_penalty(letter_distance, semitones),
        spelling_change=0 if accidental == source_accidental else accidental.penalty,
        unnatural_motion=2 if letter_distance in (0, 6) else 0,
        suspicious=3 if candidate.note in _SUSPICIOUS else 0,
        letter_bias=2 if letter != expected else 0,
        direction=_direction_penalty(accidental, semitones),
    )


def candidates(source: Pitch, semitones: int) -> list[SpellingCandidate]:
    """
    Every spelling that sounds ``source`` moved by ``semitones``, scored.

    Returned in scan order (letters C..B, accidentals double flat..double sharp).
    """
    target = source.absolute + semitones
    found: list[SpellingCandidate] = []

    for letter in _LETTER_ORDER:
        for accidental in _ACCIDENTAL_ORDER:
            note = NoteName.of(letter, accidental)
            octave = target // 12 - 2
            raw = note.semitones + (octave + 2) * 12
            # Correct octave-boundary errors from the integer division
            if raw - target > 6:
                octave -= 1
            elif raw - target < -6:
                octave += 1
            pitch = Pitch(note, octave)
            if pitch.absolute != target:
                continue
            found.append(SpellingCandidate(pitch, score_candidate(source, pitch, semitones)))

    return found


def _passes_polarity_guard(source: Pitch, candidate: Pitch, semitones: int) -> bool:
    """Flats going down, sharps going up, unless the source already leans that way."""
    if semitones < 0:
        return not candidate.note.accidental.is_sharp or source.note.accidental.is_sharp
    if semitones > 0:
        return not candidate.note.accidental.is_flat or source.note.accidental.is_flat
    return True


def choose_spelling(source: Pitch, semitones: int) -> SpellingCandidate:
    """
    Pick the best-scoring spelling for a transposition.

    A candidate replaces the running best when its total is less than or
    equal to the best so far and it passes the polarity guard.

    Raises:
        InvariantViolation: If no spelling sounds the target pitch
    """
    best: SpellingCandidate | None = None
    for candidate in candidates(source, semitones):
        if best is not None and candidate.penalty.total > best.penalty.total:
            continue
        if not _passes_polarity_guard(source, candidate.pitch, semitones):
            continue
        best = candidate

    if best is None:
        raise InvariantViolation(
            f"No spelling found for {source} transposed by {semitones} semitones"
        )

    logger.debug(
        f"Spelled {source} {semitones:+d} as {best.pitch} "
        f"(penalty {best.penalty.total}: {best.penalty.to_dict()})"
    )
    return best


def transpose_chromatic(source: Pitch, semitones: int) -> Pitch:
    """
    Transpose by semitones and return the most natural spelling.

    Examples:
        C4 +1 -> C#4
        B4 +1 -> C5
        C4 -1 -> B3
        F#4 +1 -> G4
    """
    if semitones == 0:
        return source
    return choose_spelling(source, semitones).pitch
