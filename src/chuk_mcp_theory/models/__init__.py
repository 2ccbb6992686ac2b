"""
Pydantic models for the theory server.

This module provides:
- ScaleDefinitionModel: A validated scale library record
- ScaleMetadata: Lightweight scale info for listings
"""

from chuk_mcp_theory.models.scale import ScaleDefinitionModel, ScaleMetadata

__all__ = [
    "ScaleDefinitionModel",
    "ScaleMetadata",
]
