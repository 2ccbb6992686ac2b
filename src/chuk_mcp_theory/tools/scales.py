"""
Scale tools - MCP tools for scale discovery and degree resolution.

Tools for listing the scale library, spelling a scale on a tonic,
resolving notes to scale degrees, and moving notes by scale steps.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.constants import (
    DEFAULT_SYMBOL_STYLE,
    ErrorMessages,
    SuccessMessages,
    SymbolStyle,
)
from chuk_mcp_theory.core.note import NoteName
from chuk_mcp_theory.core.scale import Scale
from chuk_mcp_theory.core.symbols import resolve_style
from chuk_mcp_theory.errors import InvariantViolation, ParseError
from chuk_mcp_theory.scales import ScaleLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_scale_tools(
    mcp: ChukMCPServer,
    scale_loader: ScaleLoader,
    default_style: SymbolStyle = DEFAULT_SYMBOL_STYLE,
) -> dict[str, Any]:
    """
    Register scale tools with the MCP server.

    Args:
        mcp: The MCP server instance
        scale_loader: The scale loader
        default_style: Accidental glyphs when a call gives no symbols

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    def _scale(tonic: str, scale: str) -> Scale:
        definition = scale_loader.require_scale(scale).to_definition()
        resolved = Scale(NoteName.parse(tonic), definition)
        for note in resolved.notes:
            note.checked()
        return resolved

    @mcp.tool  # type: ignore[arg-type]
    async def theory_list_scales() -> str:
        """
        List available scales.

        Returns all scales from the library and project with basic
        metadata.

        Returns:
            JSON string with list of scale summaries

        Example:
            theory_list_scales()
        """
        try:
            scales = scale_loader.list_scales()
            return json.dumps(
                {
                    "status": "success",
                    "scales": [s.model_dump() for s in scales],
                    "count": len(scales),
                }
            )
        except Exception as e:
            logger.exception("Failed to list scales")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_list_scales"] = theory_list_scales

    @mcp.tool  # type: ignore[arg-type]
    async def theory_spell_scale(tonic: str, scale: str, symbols: str | None = None) -> str:
        """
        Spell a scale on a tonic, with its diatonic triads.

        Args:
            tonic: Tonic note name, e.g. "C", "F#", "Bb"
            scale: Scale name or alias, e.g. "major", "harmonic minor"
            symbols: "ascii" or "unicode" accidentals

        Returns:
            JSON string with the scale notes, intervals and triads

        Example:
            theory_spell_scale(tonic="A", scale="harmonic_minor")
        """
        try:
            style = resolve_style(symbols, default_style)
            resolved = _scale(tonic, scale)
            return json.dumps(
                {
                    "status": "success",
                    "scale": resolved.definition.name,
                    "tonic": resolved.tonic.spell(style),
                    "notes": [note.spell(style) for note in resolved.notes],
                    "intervals": [str(i) for i in resolved.definition.intervals],
                    "triads": [chord.abbreviated_name(style) for chord in resolved.triads()],
                }
            )
        except ParseError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except InvariantViolation:
            logger.exception("Scale spelling invariant failed")
            raise
        except Exception as e:
            logger.exception("Failed to spell scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_spell_scale"] = theory_spell_scale

    @mcp.tool  # type: ignore[arg-type]
    async def theory_scale_degree(
        tonic: str, scale: str, note: str, symbols: str | None = None
    ) -> str:
        """
        Resolve a note to a scale degree with its chromatic alteration.

        Notes outside the scale come back altered, e.g. F# in C major is #4
        and Eb is b3.

        Args:
            tonic: Tonic note name
            scale: Scale name or alias
            note: The note to place
            symbols: "ascii" or "unicode" accidentals

        Returns:
            JSON string with the degree, or an error if the note cannot be placed

        Example:
            theory_scale_degree(tonic="C", scale="major", note="F#")
        """
        try:
            style = resolve_style(symbols, default_style)
            resolved = _scale(tonic, scale)
            degree = resolved.degree_of(NoteName.parse(note))
            if degree is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.NOTE_NOT_IN_SCALE.format(
                            note=note, scale=resolved
                        ),
                    }
                )
            return json.dumps(
                {
                    "status": "success",
                    "note": note,
                    "degree": degree.spell(style),
                    "step": degree.step,
                    "alteration": degree.alteration.value,
                    "in_scale": resolved.contains(NoteName.parse(note)),
                }
            )
        except ParseError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except InvariantViolation:
            logger.exception("Degree resolution invariant failed")
            raise
        except Exception as e:
            logger.exception("Failed to resolve scale degree")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_scale_degree"] = theory_scale_degree

    @mcp.tool  # type: ignore[arg-type]
    async def theory_transpose_diatonic(
        tonic: str, scale: str, note: str, steps: int, symbols: str | None = None
    ) -> str:
        """
        Move a note by scale steps, keeping its alteration.

        Args:
            tonic: Tonic note name
            scale: Scale name or alias
            note: The note to move
            steps: Scale steps, negative moves down
            symbols: "ascii" or "unicode" accidentals

        Returns:
            JSON string with the moved note

        Example:
            theory_transpose_diatonic(tonic="C", scale="major", note="F#", steps=1)
        """
        try:
            style = resolve_style(symbols, default_style)
            resolved = _scale(tonic, scale)
            result = resolved.transpose_diatonic(NoteName.parse(note), steps)
            if result is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.NOTE_NOT_IN_SCALE.format(
                            note=note, scale=resolved
                        ),
                    }
                )
            return json.dumps(
                {
                    "status": "success",
                    "note": note,
                    "steps": steps,
                    "result": result.checked().spell(style),
                }
            )
        except ParseError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except InvariantViolation:
            logger.exception("Diatonic transposition invariant failed")
            raise
        except Exception as e:
            logger.exception("Failed to transpose diatonically")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_transpose_diatonic"] = theory_transpose_diatonic

    @mcp.tool  # type: ignore[arg-type]
    async def theory_copy_scale_to_project(name: str) -> str:
        """
        Copy a library scale to the project for customization.

        Args:
            name: Scale name, e.g. "dorian"

        Returns:
            JSON string with the copied file path

        Example:
            theory_copy_scale_to_project(name="dorian")
        """
        try:
            path = scale_loader.copy_to_project(name)
            if path is None:
                return json.dumps(
                    {"status": "error", "message": ErrorMessages.SCALE_NOT_FOUND.format(name=name)}
                )
            return json.dumps(
                {
                    "status": "success",
                    "path": str(path),
                    "message": SuccessMessages.SCALE_COPIED.format(name=name, path=path),
                }
            )
        except Exception as e:
            logger.exception("Failed to copy scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_copy_scale_to_project"] = theory_copy_scale_to_project

    return tools
