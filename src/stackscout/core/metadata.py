"""Project metadata models and the agent/exports/project_metadata.json store."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

METADATA_VERSION = 1
PROJECT_METADATA_FILE = "agent/exports/project_metadata.json"


class FrameworkMatch(BaseModel):
    """One matched stack indicator with the provenance of each hit."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str
    preset: str
    provides_ui: bool = Field(default=False, alias="providesUi")
    matches: list[str] = Field(default_factory=list)


class ProjectMetadata(BaseModel):
    """Result of a single scan. Field order is the on-disk key order."""

    model_config = ConfigDict(populate_by_name=True)

    version: int = METADATA_VERSION
    scanned_at: str = Field(alias="scannedAt")
    workspace_root: str = Field(alias="workspaceRoot")
    frameworks: list[FrameworkMatch] = Field(default_factory=list)
    has_ui: bool = Field(default=False, alias="hasUi")
    has_docker: bool = Field(default=False, alias="hasDocker")
    docker_targets: list[str] = Field(default_factory=list, alias="dockerTargets")
    is_monorepo: bool = Field(default=False, alias="isMonorepo")
    recommended_preset: str = Field(alias="recommendedPreset", min_length=1)

    @property
    def framework_ids(self) -> list[str]:
        return [fw.id for fw in self.frameworks]

    def to_json(self) -> str:
        """Pretty-printed JSON using the camelCase field names."""
        return json.dumps(self.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)


def get_metadata_path(project_path: Path, relative: str = PROJECT_METADATA_FILE) -> Path:
    """Return the path to the metadata file for a project."""
    return project_path / relative


def write_metadata(
    project_path: Path,
    metadata: ProjectMetadata,
    relative: str = PROJECT_METADATA_FILE,
) -> Path:
    """Write (or overwrite) the metadata file, creating parent directories."""
    path = get_metadata_path(project_path, relative)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(metadata.to_json() + "\n", encoding="utf-8")
    logger.debug("Wrote project metadata to %s", path)
    return path


def read_metadata(
    project_path: Path,
    relative: str = PROJECT_METADATA_FILE,
) -> ProjectMetadata | None:
    """Load a previously written metadata file.

    Returns None if the file is missing or can't be read, parsed, or
    validated. Failures other than absence are logged as warnings.
    """
    path = get_metadata_path(project_path, relative)
    if not path.exists():
        return None

    try:
        raw = path.read_text(encoding="utf-8")
        return ProjectMetadata.model_validate(json.loads(raw))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Could not read project metadata %s: %s", path, e)
        return None
