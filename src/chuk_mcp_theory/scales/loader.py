"""
Scale loader - discovers and loads scale definitions.

Scales can come from:
1. Built-in library (shipped with package)
2. Project scales (user's project/scales directory)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

import yaml
from pydantic import ValidationError

from chuk_mcp_theory.core.interval import Interval
from chuk_mcp_theory.core.scale import ScaleDefinition
from chuk_mcp_theory.errors import InvalidScaleError
from chuk_mcp_theory.models.scale import ScaleDefinitionModel, ScaleMetadata

logger = logging.getLogger(__name__)


def normalize_name(name: str) -> str:
    """'Harmonic Minor', 'harmonic-minor' and 'harmonic_minor' all map to 'harmonic_minor'."""
    return "_".join(name.strip().lower().replace("-", " ").replace("_", " ").split())


class ScaleLoader:
    """
    Discovers and loads scale definitions.

    Scales are loaded from YAML files in the library and project directories.
    Project scales override library scales with the same name.
    """

    def __init__(
        self,
        library_path: Path | None = None,
        project_path: Path | None = None,
    ):
        """
        Initialize the scale loader.

        Args:
            library_path: Path to built-in scale library
            project_path: Path to project scales directory
        """
        self.library_path = library_path or (Path(__file__).parent / "library")
        self.project_path = project_path
        self._cache: dict[str, ScaleDefinitionModel] | None = None

    def _load_all(self) -> dict[str, ScaleDefinitionModel]:
        if self._cache is not None:
            return self._cache

        scales: dict[str, ScaleDefinitionModel] = {}
        for directory in (self.library_path, self.project_path):
            if directory is None or not directory.exists():
                continue
            for path in sorted(directory.glob("*.yaml")):
                scale = self._load_scale_file(path)
                if scale:
                    scales[normalize_name(scale.name)] = scale

        self._cache = scales
        return scales

    def list_scales(self) -> list[ScaleMetadata]:
        """
        List all available scales.

        Returns scales from both library and project, with project
        scales taking precedence.
        """
        return [ScaleMetadata.from_model(scale) for scale in self._load_all().values()]

    def get_scale(self, name: str) -> ScaleDefinitionModel | None:
        """
        Get a scale by name or alias.

        Args:
            name: Scale name in any case, with spaces, hyphens or underscores

        Returns:
            ScaleDefinitionModel if found, None otherwise
        """
        key = normalize_name(name)
        scales = self._load_all()
        if key in scales:
            return scales[key]
        for scale in scales.values():
            if key in (normalize_name(alias) for alias in scale.aliases):
                return scale
        return None

    def require_scale(self, name: str) -> ScaleDefinitionModel:
        """
        Get a scale by name, raising if it does not exist.

        Raises:
            InvalidScaleError: If no scale has that name or alias
        """
        scale = self.get_scale(name)
        if scale is None:
            raise InvalidScaleError(name)
        return scale

    def find_by_intervals(self, intervals: Iterable[Interval]) -> ScaleDefinitionModel | None:
        """
        Find the scale with exactly this interval pattern.

        Only the intervals are compared, never names.
        """
        wanted = ScaleDefinition(tuple(intervals))
        for scale in self._load_all().values():
            if scale.to_definition() == wanted:
                return scale
        return None

    def parent_of(self, scale: ScaleDefinitionModel) -> ScaleDefinitionModel | None:
        """The scale a mode is derived from, if it declares one."""
        if not scale.mode_of:
            return None
        return self.get_scale(scale.mode_of)

    def copy_to_project(self, name: str) -> Path | None:
        """
        Copy a library scale to the project for customization.

        Args:
            name: Scale name or alias

        Returns:
            Path to copied file, or None if not found
        """
        if not self.project_path:
            raise ValueError("No project path configured")

        # Find in library, aliases resolve to the scale's own file
        scale = self.get_scale(name)
        if scale is None:
            return None
        library_file = self.library_path / f"{normalize_name(scale.name)}.yaml"
        if not library_file.exists():
            return None

        # Create project scales directory
        self.project_path.mkdir(parents=True, exist_ok=True)

        dest_file = self.project_path / library_file.name
        if dest_file.exists():
            raise ValueError(f"Scale already exists in project: {name}")

        dest_file.write_text(library_file.read_text())

        # Invalidate cache
        self.clear_cache()

        return dest_file

    def _load_scale_file(self, path: Path) -> ScaleDefinitionModel | None:
        """Load a scale from a YAML file. Invalid files are logged and skipped."""
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
            return ScaleDefinitionModel.model_validate(data)
        except (OSError, yaml.YAMLError, ValidationError) as e:
            logger.warning(f"Skipping invalid scale file {path}: {e}")
            return None

    def clear_cache(self) -> None:
        """Clear the scale cache."""
        self._cache = None
