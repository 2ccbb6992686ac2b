"""
Note tools - MCP tools for pitches, intervals and spellings.

Tools for chromatic and exact transposition, measuring the interval
between two notes, and listing enharmonic spellings.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.constants import DEFAULT_SYMBOL_STYLE, SymbolStyle
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.note import NoteName
from chuk_mcp_theory.core.pitch import Pitch
from chuk_mcp_theory.core.spelling import choose_spelling
from chuk_mcp_theory.core.symbols import resolve_style
from chuk_mcp_theory.errors import InvariantViolation, ParseError

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _interval_payload(interval: Interval) -> dict[str, Any]:
    return {
        "name": str(interval),
        "semitones": interval.semitones,
        "fifths": interval.fifths,
        "octaves": interval.octaves,
    }


def register_note_tools(
    mcp: ChukMCPServer, default_style: SymbolStyle = DEFAULT_SYMBOL_STYLE
) -> dict[str, Any]:
    """
    Register note and interval tools with the MCP server.

    Args:
        mcp: The MCP server instance
        default_style: Accidental glyphs when a call gives no symbols

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_transpose_pitch(
        pitch: str,
        semitones: int | None = None,
        interval: str | None = None,
        symbols: str | None = None,
    ) -> str:
        """
        Transpose a pitch chromatically or by an exact interval.

        With ``semitones`` the most natural spelling is chosen (C4 + 1 = C#4,
        F#4 + 1 = G4). With ``interval`` the spelling follows the interval
        exactly (C4 + A4 = F#4, C4 + d5 = Gb4).

        Args:
            pitch: Pitch with octave, e.g. "C4", "F#3", "Bb-1"
            semitones: Signed semitone offset
            interval: Interval designation, e.g. "M3", "-P5", "m10"
            symbols: "ascii" or "unicode" accidentals

        Returns:
            JSON string with the transposed pitch

        Example:
            theory_transpose_pitch(pitch="C4", semitones=1)
        """
        try:
            style = resolve_style(symbols, default_style)
            source = Pitch.parse(pitch)

            if interval is not None:
                step = Interval.parse(interval)
                (source.note + step).checked()
                target = source + step
                return json.dumps(
                    {
                        "status": "success",
                        "source": source.spell(style),
                        "interval": interval,
                        "result": target.spell(style),
                        "midi_number": target.midi_number,
                    }
                )

            if semitones is None:
                return json.dumps(
                    {"status": "error", "message": "Provide either semitones or interval"}
                )

            if semitones == 0:
                return json.dumps(
                    {
                        "status": "success",
                        "source": source.spell(style),
                        "semitones": 0,
                        "result": source.spell(style),
                        "midi_number": source.midi_number,
                    }
                )

            choice = choose_spelling(source, semitones)
            return json.dumps(
                {
                    "status": "success",
                    "source": source.spell(style),
                    "semitones": semitones,
                    "result": choice.pitch.spell(style),
                    "midi_number": choice.pitch.midi_number,
                    "penalty": choice.penalty.to_dict(),
                }
            )
        except ParseError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except InvariantViolation:
            logger.exception("Spelling invariant failed")
            raise
        except Exception as e:
            logger.exception("Failed to transpose pitch")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_transpose_pitch"] = theory_transpose_pitch

    @mcp.tool  # type: ignore[arg-type]
    async def theory_interval_between(from_note: str, to_note: str) -> str:
        """
        Name the interval between two notes or two pitches.

        Note names without octaves give the interval class upward
        (E to C = m6). Pitches with octaves give the exact interval,
        descending ones prefixed with '-'.

        Args:
            from_note: Starting note or pitch, e.g. "C" or "C4"
            to_note: Ending note or pitch, e.g. "E" or "E5"

        Returns:
            JSON string with the interval name and its components

        Example:
            theory_interval_between(from_note="C4", to_note="G3")
        """
        try:
            if from_note.strip()[-1:].isdigit() and to_note.strip()[-1:].isdigit():
                result = Pitch.parse(to_note) - Pitch.parse(from_note)
            else:
                result = NoteName.parse(from_note).interval_to(NoteName.parse(to_note))

            return json.dumps(
                {
                    "status": "success",
                    "from": from_note,
                    "to": to_note,
                    "interval": _interval_payload(result),
                }
            )
        except ParseError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to compute interval")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_interval_between"] = theory_interval_between

    @mcp.tool  # type: ignore[arg-type]
    async def theory_enharmonic_spellings(note: str, symbols: str | None = None) -> str:
        """
        List every spelling of a note's pitch class.

        Args:
            note: Note name, e.g. "C#" or "Fb"
            symbols: "ascii" or "unicode" accidentals

        Returns:
            JSON string with the pitch class and all alternative spellings

        Example:
            theory_enharmonic_spellings(note="C#")
        """
        try:
            style = resolve_style(symbols, default_style)
            name = NoteName.parse(note)
            return json.dumps(
                {
                    "status": "success",
                    "note": name.spell(style),
                    "pitch_class": name.pitch_class,
                    "enharmonics": [other.spell(style) for other in name.enharmonics()],
                }
            )
        except ParseError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to list enharmonics")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_enharmonic_spellings"] = theory_enharmonic_spellings

    return tools
