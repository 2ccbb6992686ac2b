"""
Scale registry - the library of named interval patterns.

Library scales ship with the package; a project can copy and override
them, or add its own.
"""

from chuk_mcp_theory.scales.loader import ScaleLoader, normalize_name

__all__ = [
    "ScaleLoader",
    "normalize_name",
]
