#!/usr/bin/env python3
"""
Example: Chord Analysis.

Detects roots and qualities from unordered notes, labels extensions,
reports harmonic function in a key, and walks a neo-Riemannian chain.

Usage:
    python examples/analyze_chords.py
"""

from chuk_mcp_theory.constants import SymbolStyle
from chuk_mcp_theory.core import Chord, Key, NoteName, Scale
from chuk_mcp_theory.scales import ScaleLoader
from chuk_mcp_theory.transformation import apply_transforms


def main() -> None:
    """Demonstrate chord analysis."""
    print("CHUK Theory Chord Demo")
    print("=" * 40)
    print()

    key = Key.parse("C_major")
    scale = key.scale()

    voicings = [
        ["E", "G", "C"],
        ["F", "A", "D"],
        ["G", "B", "D", "F"],
        ["A", "C", "E", "G"],
        ["B", "D", "F", "A"],
        ["C", "E", "G", "Bb", "D"],
    ]

    print(f"Chords in {key}:")
    for voicing in voicings:
        chord = Chord.from_notes([NoteName.parse(n) for n in voicing])
        function = scale.harmonic_function(chord)
        label = function.value if function else "-"
        print(f"  {' '.join(voicing):<12} {chord.abbreviated_name():<8} {label}")
    print()

    # Diatonic harmony of every library scale on A
    loader = ScaleLoader()
    tonic = NoteName.parse("A")
    print(f"Triads on {tonic}:")
    for meta in loader.list_scales():
        definition = loader.require_scale(meta.name).to_definition()
        if len(definition) != 7:
            continue
        triads = Scale(tonic, definition).triads()
        names = " ".join(c.abbreviated_name(SymbolStyle.UNICODE) for c in triads)
        print(f"  {meta.name:<16} {names}")
    print()

    # Neo-Riemannian chain
    start = Chord.major(NoteName.parse("C"))
    print(f"Neo-Riemannian walk from {start}:")
    for transforms in ["P", "R", "L", "PL", "PLR", "LRLR"]:
        print(f"  {transforms:<5} {apply_transforms(start, transforms)}")


if __name__ == "__main__":
    main()
