"""ProjectScanner orchestrator - combines framework, monorepo, and preset detection."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timezone
from pathlib import Path

from stackscout.core.metadata import METADATA_VERSION, ProjectMetadata
from stackscout.detection.frameworks import detect_frameworks
from stackscout.detection.indicators import DOCKER_INDICATOR_ID, STACK_INDICATORS, Indicator
from stackscout.detection.monorepo import detect_monorepo
from stackscout.detection.paths import DEFAULT_MAX_DEPTH, IGNORE_DIRS
from stackscout.detection.presets import choose_preset, has_headless_fallback, is_docker_only

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised when a project root cannot be scanned."""


class ProjectScanner:
    """Runs a full, stateless scan of a project directory."""

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        extra_ignore_dirs: Iterable[str] = (),
        indicators: Sequence[Indicator] = STACK_INDICATORS,
    ) -> None:
        self.max_depth = max_depth
        self.ignore_dirs = frozenset(IGNORE_DIRS) | frozenset(extra_ignore_dirs)
        self.indicators = indicators

    def scan(self, project_path: Path | str | None) -> ProjectMetadata:
        """Detect frameworks, monorepo layout, and the recommended preset."""
        root = self._resolve_root(project_path)
        logger.debug("Scanning %s (max depth %d)", root, self.max_depth)

        try:
            frameworks = detect_frameworks(root, self.indicators, self.max_depth, self.ignore_dirs)
            is_monorepo = detect_monorepo(root)
            headless = has_headless_fallback(root, self.max_depth, self.ignore_dirs)
        except Exception as e:
            raise ScanError(f"Failed to scan {root}: {e}") from e

        docker = [fw for fw in frameworks if fw.id == DOCKER_INDICATOR_ID]
        recommended = choose_preset(frameworks, is_docker_only(frameworks), headless)

        logger.info(
            "Detected %s in %s, recommending %s",
            ", ".join(fw.id for fw in frameworks) or "no frameworks",
            root,
            recommended,
        )

        return ProjectMetadata(
            version=METADATA_VERSION,
            scanned_at=datetime.now(timezone.utc).isoformat(),
            workspace_root=str(root),
            frameworks=frameworks,
            has_ui=any(fw.provides_ui for fw in frameworks),
            has_docker=bool(docker),
            docker_targets=[target for fw in docker for target in fw.matches],
            is_monorepo=is_monorepo,
            recommended_preset=recommended,
        )

    @staticmethod
    def _resolve_root(project_path: Path | str | None) -> Path:
        if project_path is None or str(project_path).strip() == "":
            raise ScanError("No project path was provided.")

        root = Path(project_path).expanduser()
        try:
            root = root.resolve()
        except OSError as e:
            raise ScanError(f"Cannot resolve project path {project_path}: {e}") from e

        try:
            exists = root.exists()
            is_dir = exists and root.is_dir()
        except OSError as e:
            raise ScanError(f"Cannot access project path {root}: {e}") from e

        if not exists:
            raise ScanError(f"Project path does not exist: {root}")
        if not is_dir:
            raise ScanError(f"Project path is not a directory: {root}")

        return root
