"""
Scale registry models - validated records for the scale library.

Each library file describes one interval pattern. The models check that
every interval designation parses, that the pattern starts on a unison,
and that mode metadata is consistent.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_theory.constants import MAX_SCALE_STEPS
from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.scale import ScaleDefinition


class ScaleDefinitionModel(BaseModel):
    """A scale record as stored in YAML."""

    name: str = Field(..., min_length=1, description="Display name, e.g. 'Harmonic Minor'")
    intervals: list[str] = Field(
        ...,
        min_length=1,
        max_length=MAX_SCALE_STEPS,
        description="Interval designations from the tonic, first must be P1, at most 7",
    )
    mode_of: str | None = Field(
        default=None,
        description="Name of the parent scale this is a mode of",
    )
    degree_offset: int = Field(
        default=0,
        ge=0,
        description="0-based step of the parent the mode starts on",
    )
    aliases: list[str] = Field(
        default_factory=list,
        description="Alternative lookup names, e.g. 'major' for Ionian",
    )
    description: str = Field(default="", description="Human-readable description")

    model_config = {"frozen": True}

    @field_validator("intervals")
    @classmethod
    def validate_intervals(cls, v: list[str]) -> list[str]:
        parsed = [Interval.parse(code) for code in v]
        if parsed[0] != Interval.PERFECT_UNISON:
            raise ValueError(f"First interval must be P1, got {v[0]}")
        return v

    @model_validator(mode="after")
    def validate_mode(self) -> ScaleDefinitionModel:
        if self.degree_offset and not self.mode_of:
            raise ValueError("degree_offset requires mode_of")
        if self.mode_of and self.degree_offset >= len(self.intervals):
            raise ValueError(
                f"degree_offset {self.degree_offset} is outside a "
                f"{len(self.intervals)}-note pattern"
            )
        return self

    def to_definition(self) -> ScaleDefinition:
        """Convert to the core value type."""
        return ScaleDefinition.from_codes(
            self.name, self.intervals, self.mode_of, self.degree_offset
        )


class ScaleMetadata(BaseModel):
    """Lightweight scale info for listings."""

    name: str
    description: str
    size: int
    mode_of: str | None = None
    aliases: list[str] = Field(default_factory=list)

    @classmethod
    def from_model(cls, model: ScaleDefinitionModel) -> ScaleMetadata:
        """Create metadata from a full scale record."""
        return cls(
            name=model.name,
            description=model.description,
            size=len(model.intervals),
            mode_of=model.mode_of,
            aliases=list(model.aliases),
        )
