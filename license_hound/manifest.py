"""Dependency manifest loading.

A manifest lists already-resolved dependencies, either as a top-level
list or under a ``dependencies`` key::

    dependencies:
      - name: serde
        version: 1.0.197
        path: vendor/serde-1.0.197
        repository: https://github.com/serde-rs/serde

JSON manifests are accepted too, since JSON is valid YAML.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from license_hound.config.loader import format_validation_errors
from license_hound.exceptions import ManifestError
from license_hound.models.dependency import Dependency


class ManifestEntry(BaseModel):
    """One dependency as written in a manifest."""

    model_config = {"extra": "forbid"}

    name: str = Field(min_length=1, description="Dependency name")
    version: str = Field(description="Dependency version")
    path: Optional[str] = Field(
        default=None, description="Local source directory, relative to the manifest"
    )
    repository: Optional[str] = Field(
        default=None, description="Source repository URL"
    )

    @field_validator("version", mode="before")
    @classmethod
    def _version_is_text(cls, value: Any) -> Any:
        """Reject versions YAML loaded as numbers (1.10 loads as 1.1)."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            raise ValueError(
                f"version {value!r} was read as a number; quote it in the manifest"
            )
        return value

    def to_dependency(self, base_dir: Path) -> Dependency:
        """Convert to a Dependency, resolving a relative path against base_dir."""
        source_path = None
        if self.path:
            source_path = Path(self.path)
            if not source_path.is_absolute():
                source_path = base_dir / source_path
        return Dependency(
            name=self.name,
            version=self.version,
            source_path=source_path,
            repository=self.repository or None,
        )


def parse_manifest(
    data: Any, base_dir: Path, origin: str = "manifest"
) -> list[Dependency]:
    """Build dependencies from parsed manifest data.

    Args:
        data: Parsed YAML/JSON document.
        base_dir: Directory relative paths are resolved against.
        origin: Name used in error messages.

    Returns:
        Dependencies in manifest order.

    Raises:
        ManifestError: If the document does not have the expected shape.
    """
    if isinstance(data, dict):
        if "dependencies" not in data:
            raise ManifestError(f"Invalid {origin}: missing 'dependencies' list")
        data = data["dependencies"]

    if data is None:
        return []

    if not isinstance(data, list):
        raise ManifestError(
            f"Invalid {origin}: expected a list of dependencies, "
            f"got {type(data).__name__}"
        )

    dependencies: list[Dependency] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise ManifestError(f"Invalid {origin}: entry {index} is not a mapping")
        try:
            entry = ManifestEntry.model_validate(item)
        except ValidationError as e:
            raise ManifestError(
                f"Invalid {origin}: entry {index}: {format_validation_errors(e)}"
            ) from e
        dependencies.append(entry.to_dependency(base_dir))
    return dependencies


def load_manifest(path: Path) -> list[Dependency]:
    """Load dependencies from a YAML or JSON manifest file.

    Args:
        path: Manifest file.

    Returns:
        Dependencies in manifest order.

    Raises:
        ManifestError: If the file cannot be read or is malformed.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read manifest '{path}': {e}") from e

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML syntax in '{path}': {e}") from e

    return parse_manifest(data, path.parent, origin=f"manifest '{path}'")
