"""
Neo-Riemannian P, R and L transforms.

Each transform keeps two tones of a major or minor triad and reflects
the third tone across them on the line of fifths. With root r, third t
and fifth f as NoteName coordinates:

    P: t' = r + f - t               (C major <-> C minor)
    R: major f' = r + t - f         (C major -> A minor)
       minor r' = t + f - r         (A minor -> C major)
    L: major r' = t + f - r         (C major -> E minor)
       minor f' = r + t - f         (E minor -> C major)

Only the triad is transformed; sevenths and extensions are dropped.
Chords that are neither major nor minor come back unchanged.
A step whose reflected tone falls outside Fbb..B## raises
NoteOutOfRangeError.
"""

from __future__ import annotations

from chuk_mcp_theory.constants import ErrorMessages
from chuk_mcp_theory.core.chord import Chord, ChordQuality
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import NoteName


def _triad(chord: Chord) -> tuple[ChordQuality, int, int, int] | None:
    quality = chord.quality()
    if quality not in (ChordQuality.MAJOR, ChordQuality.MINOR):
        return None
    third = Interval.M3 if quality == ChordQuality.MAJOR else Interval.m3
    root = chord.root.fifths
    return quality, root, (chord.root + third).fifths, (chord.root + Interval.P5).fifths


def _build(root: int, *tones: int) -> Chord:
    notes = [NoteName(root).checked(), *(NoteName(tone).checked() for tone in tones)]
    return Chord.from_notes_and_root(notes, notes[0])


def transform_p(chord: Chord) -> Chord:
    """Parallel: C major <-> C minor."""
    triad = _triad(chord)
    if triad is None:
        return chord
    _, r, t, f = triad
    return _build(r, r + f - t, f)


def transform_r(chord: Chord) -> Chord:
    """Relative: C major <-> A minor."""
    triad = _triad(chord)
    if triad is None:
        return chord
    quality, r, t, f = triad
    if quality == ChordQuality.MAJOR:
        return _build(r + t - f, r, t)
    return _build(t, t + f - r, f)


def transform_l(chord: Chord) -> Chord:
    """Leading-tone exchange: C major <-> E minor."""
    triad = _triad(chord)
    if triad is None:
        return chord
    quality, r, t, f = triad
    if quality == ChordQuality.MAJOR:
        return _build(t, f, t + f - r)
    return _build(r + t - f, r, t)


_TRANSFORMS = {
    "P": transform_p,
    "R": transform_r,
    "L": transform_l,
}


def apply_transforms(chord: Chord, sequence: str) -> Chord:
    """
    Apply a sequence of transforms left to right, e.g. "PLR".

    Raises:
        ValueError: On a letter other than P, R or L
        NoteOutOfRangeError: If a step drifts past Fbb or B##
    """
    for code in sequence.replace(" ", "").upper():
        transform = _TRANSFORMS.get(code)
        if transform is None:
            raise ValueError(ErrorMessages.UNKNOWN_TRANSFORM.format(code=code))
        chord = transform(chord)
    return chord
