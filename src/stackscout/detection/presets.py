"""Preset recommendation from detected frameworks and fallback signals."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from stackscout.core.metadata import FrameworkMatch
from stackscout.detection.indicators import DOCKER_INDICATOR_ID
from stackscout.detection.manifests import COMPOSER_MANIFEST, PACKAGE_MANIFEST
from stackscout.detection.paths import (
    DEFAULT_MAX_DEPTH,
    IGNORE_DIRS,
    find_files_by_name,
    path_matches_pattern,
)

# UI-bearing stacks first, pure back-end last. Independent of table order.
PRESET_PRIORITY: tuple[str, ...] = ("angular", "ionic", "next", "react", "laravel")

DOCKER_PRESET = "docker"
HEADLESS_PRESET = "headless"
GENERIC_PRESET = "generic"

FALLBACK_MANIFESTS: tuple[str, ...] = (COMPOSER_MANIFEST, PACKAGE_MANIFEST)


def is_docker_only(frameworks: Sequence[FrameworkMatch]) -> bool:
    """True when something matched and every match is the docker indicator."""
    return bool(frameworks) and all(fw.id == DOCKER_INDICATOR_ID for fw in frameworks)


def has_headless_fallback(
    project_path: Path,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> bool:
    """True when a package or composer manifest exists in the bounded tree."""
    ignored = frozenset(ignore_dirs)
    for name in FALLBACK_MANIFESTS:
        if path_matches_pattern(project_path, name):
            return True
        if find_files_by_name(project_path, name, max_depth, ignored):
            return True
    return False


def choose_preset(
    frameworks: Sequence[FrameworkMatch],
    has_docker_only: bool,
    has_headless: bool,
    priority: Sequence[str] = PRESET_PRIORITY,
) -> str:
    """Pick exactly one preset id; first rule that applies wins."""
    detected = {fw.id: fw.preset for fw in frameworks}
    for framework_id in priority:
        if framework_id in detected:
            return detected[framework_id]

    if has_docker_only:
        return DOCKER_PRESET
    if has_headless:
        return HEADLESS_PRESET
    return GENERIC_PRESET
