"""
Chord tools - MCP tools for chord analysis and transformation.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.constants import DEFAULT_SYMBOL_STYLE, ErrorMessages, SymbolStyle
from chuk_mcp_theory.core.chord import Chord, ChordQuality
from chuk_mcp_theory.core.note import NoteName
from chuk_mcp_theory.core.scale import Key
from chuk_mcp_theory.core.symbols import resolve_style
from chuk_mcp_theory.errors import InvariantViolation, ParseError
from chuk_mcp_theory.transformation import apply_transforms

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_chord_tools(
    mcp: ChukMCPServer, default_style: SymbolStyle = DEFAULT_SYMBOL_STYLE
) -> dict[str, Any]:
    """
    Register chord tools with the MCP server.

    Args:
        mcp: The MCP server instance
        default_style: Accidental glyphs when a call gives no symbols

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_analyze_chord(
        notes: list[str],
        root: str | None = None,
        key: str | None = None,
        symbols: str | None = None,
    ) -> str:
        """
        Classify a chord from its notes.

        The root is detected from fifth and third relationships unless
        given. With a key, the chord's harmonic function is included.

        Args:
            notes: Note names in any order, e.g. ["E", "G", "C"]
            root: Optional root note name
            key: Optional key like "C_major" or "A_minor"
            symbols: "ascii" or "unicode" accidentals

        Returns:
            JSON string with root, quality, extension label, name and function

        Example:
            theory_analyze_chord(notes=["G", "B", "D", "F"], key="C_major")
        """
        try:
            style = resolve_style(symbols, default_style)
            parsed = [NoteName.parse(n) for n in notes]
            if root is not None:
                chord = Chord.from_notes_and_root(parsed, NoteName.parse(root))
            else:
                chord = Chord.from_notes(parsed)

            quality = chord.quality()
            result: dict[str, Any] = {
                "status": "success",
                "root": chord.root.spell(style),
                "notes": [n.spell(style) for n in chord.notes],
                "intervals": [str(i) for i in chord.intervals],
                "quality": quality.value if quality else None,
                "extension": chord.extension_label(style),
                "name": chord.abbreviated_name(style),
            }

            if key is not None:
                parsed_key = Key.parse(key)
                key_scale = parsed_key.scale()
                for note in key_scale.notes:
                    note.checked()
                function = key_scale.harmonic_function(chord)
                result["key"] = parsed_key.spell(style)
                result["function"] = function.value if function else None

            return json.dumps(result)
        except ParseError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except InvariantViolation:
            logger.exception("Chord analysis invariant failed")
            raise
        except Exception as e:
            logger.exception("Failed to analyze chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_analyze_chord"] = theory_analyze_chord

    @mcp.tool  # type: ignore[arg-type]
    async def theory_neo_riemann(
        root: str,
        quality: str,
        transforms: str,
        symbols: str | None = None,
    ) -> str:
        """
        Apply neo-Riemannian P, R and L transforms to a triad.

        Transforms are applied left to right, so "PL" is P then L.

        Args:
            root: Triad root, e.g. "C"
            quality: "major" or "minor"
            transforms: Sequence of P, R and L, e.g. "PLR"
            symbols: "ascii" or "unicode" accidentals

        Returns:
            JSON string with the resulting triad

        Example:
            theory_neo_riemann(root="C", quality="major", transforms="R")
        """
        try:
            style = resolve_style(symbols, default_style)
            tonic = NoteName.parse(root)
            try:
                parsed_quality = ChordQuality(quality.strip().lower())
            except ValueError:
                parsed_quality = None
            if parsed_quality == ChordQuality.MAJOR:
                chord = Chord.major(tonic)
            elif parsed_quality == ChordQuality.MINOR:
                chord = Chord.minor(tonic)
            else:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.UNKNOWN_QUALITY.format(quality=quality),
                    }
                )

            result = apply_transforms(chord, transforms)
            result_quality = result.quality()
            return json.dumps(
                {
                    "status": "success",
                    "source": chord.abbreviated_name(style),
                    "transforms": transforms.upper(),
                    "result": result.abbreviated_name(style),
                    "root": result.root.spell(style),
                    "quality": result_quality.value if result_quality else None,
                    "notes": [n.spell(style) for n in result.notes],
                }
            )
        except ParseError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except InvariantViolation:
            logger.exception("Transform invariant failed")
            raise
        except Exception as e:
            logger.exception("Failed to apply transforms")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_neo_riemann"] = theory_neo_riemann

    return tools
