#!/usr/bin/env python3
"""
Async Theory MCP Server using chuk-mcp-server

This server provides MCP tools for spelled music theory: intervals on
the line of fifths, enharmonic spelling, scale degrees and chord
classification. Scales live in YAML files - the library ships with the
package and a project can copy and override them.

The server provides tools for:
- Chromatic and exact transposition with natural spelling
- Interval naming and enharmonic spellings
- Scale discovery, spelling and degree resolution
- Chord analysis and neo-Riemannian transforms
"""

import logging
from pathlib import Path
from typing import Any

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_theory.constants import SymbolStyle
from chuk_mcp_theory.core.symbols import resolve_style
from chuk_mcp_theory.scales import ScaleLoader
from chuk_mcp_theory.tools import (
    register_chord_tools,
    register_note_tools,
    register_scale_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Paths - use standard project structure
BASE_PATH = Path.cwd()
SCALES_DIR = BASE_PATH / "scales"
SCALES_LIBRARY_PATH = Path(__file__).parent / "scales" / "library"


def create_server(
    symbols: str | SymbolStyle | None = None,
) -> tuple[ChukMCPServer, dict[str, Any]]:
    """
    Build the MCP server with every theory tool registered.

    Args:
        symbols: Default accidental glyphs, "ascii" or "unicode".
            None uses CHUK_THEORY_SYMBOLS.

    Returns:
        The server and a dictionary of its tool functions
    """
    default_style = resolve_style(symbols)
    server = ChukMCPServer("chuk-mcp-theory")
    loader = ScaleLoader(
        library_path=SCALES_LIBRARY_PATH,
        project_path=SCALES_DIR,
    )

    tools: dict[str, Any] = {}
    tools.update(register_note_tools(server, default_style))
    tools.update(register_scale_tools(server, loader, default_style))
    tools.update(register_chord_tools(server, default_style))

    logger.info("CHUK Theory MCP Server initialized")
    logger.info(f"  Scale library: {SCALES_LIBRARY_PATH}")
    logger.info(f"  Project scales dir: {SCALES_DIR}")
    logger.info(f"  Default symbols: {default_style.value}")
    return server, tools


# Create the MCP server instance
mcp, tools = create_server()

# Export tool functions for direct access
theory_transpose_pitch = tools["theory_transpose_pitch"]
theory_interval_between = tools["theory_interval_between"]
theory_enharmonic_spellings = tools["theory_enharmonic_spellings"]

theory_list_scales = tools["theory_list_scales"]
theory_spell_scale = tools["theory_spell_scale"]
theory_scale_degree = tools["theory_scale_degree"]
theory_transpose_diatonic = tools["theory_transpose_diatonic"]
theory_copy_scale_to_project = tools["theory_copy_scale_to_project"]

theory_analyze_chord = tools["theory_analyze_chord"]
theory_neo_riemann = tools["theory_neo_riemann"]
