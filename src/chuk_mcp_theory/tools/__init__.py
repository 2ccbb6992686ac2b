"""
MCP tool implementations.

Tools are organized by domain:
- notes - Transposition, intervals, enharmonic spellings
- scales - Scale library, degree resolution, diatonic motion
- chords - Chord analysis and neo-Riemannian transforms
"""

from chuk_mcp_theory.tools.chords import register_chord_tools
from chuk_mcp_theory.tools.notes import register_note_tools
from chuk_mcp_theory.tools.scales import register_scale_tools

__all__ = [
    "register_chord_tools",
    "register_note_tools",
    "register_scale_tools",
]
