"""
Chord transformations.

- neo_riemann - P, R and L triad transforms on the line of fifths
"""

from chuk_mcp_theory.transformation.neo_riemann import (
    apply_transforms,
    transform_l,
    transform_p,
    transform_r,
)

__all__ = [
    "apply_transforms",
    "transform_l",
    "transform_p",
    "transform_r",
]
