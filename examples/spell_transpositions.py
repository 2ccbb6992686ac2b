#!/usr/bin/env python3
"""
Example: Chromatic and Exact Transposition.

Shows how chromatic transposition picks a spelling, how exact transposition
by an interval keeps the interval's spelling, and how notes resolve to scale
degrees in a key.

Usage:
    python examples/spell_transpositions.py
"""

from chuk_mcp_theory.core import Interval, Key, NoteName, Pitch, choose_spelling


def main() -> None:
    """Demonstrate spelling and degree resolution."""
    print("CHUK Theory Spelling Demo")
    print("=" * 40)
    print()

    # Chromatic transposition chooses the most natural spelling
    source = Pitch.parse("C4")
    print(f"Chromatic steps from {source}:")
    for semitones in range(-3, 4):
        if semitones == 0:
            continue
        choice = choose_spelling(source, semitones)
        print(f"  {semitones:+d}: {choice.pitch}  (penalty {choice.penalty.total})")
    print()

    # Exact transposition follows the interval
    print(f"Exact intervals from {source}:")
    for code in ["A4", "d5", "M3", "-P5", "m10"]:
        print(f"  {code:>4}: {source + Interval.parse(code)}")
    print()

    # Intervals between pitches
    low, high = Pitch.parse("E3"), Pitch.parse("G#4")
    print(f"{low} to {high}: {high - low}")
    print(f"{high} to {low}: {low - high}")
    print()

    # Scale degrees in a key
    key = Key.parse("Eb_major")
    scale = key.scale()
    print(f"Degrees in {key} ({', '.join(str(n) for n in scale.notes)}):")
    for text in ["Eb", "E", "Gb", "A", "B", "D"]:
        degree = scale.degree_of(NoteName.parse(text))
        print(f"  {text:>2}: {degree}")


if __name__ == "__main__":
    main()
