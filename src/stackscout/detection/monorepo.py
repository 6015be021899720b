"""Monorepo detection via workspace manifests or multi-package container dirs."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

WORKSPACE_MANIFESTS: tuple[str, ...] = (
    "pnpm-workspace.yaml",
    "pnpm-workspace.yml",
    "turbo.json",
    "nx.json",
    "lerna.json",
    "workspace.json",
)

CONTAINER_DIRS: tuple[str, ...] = ("apps", "packages", "services", "modules")

MIN_PACKAGE_DIRS = 2


def has_multiple_subdirectories(directory: Path, minimum: int = MIN_PACKAGE_DIRS) -> bool:
    """Check that ``directory`` holds at least ``minimum`` subdirectories.

    Symlinks are not followed, so a link to a directory does not count. A
    directory that cannot be listed does not qualify.
    """
    count = 0
    try:
        with os.scandir(directory) as it:
            for entry in it:
                if entry.is_dir(follow_symlinks=False):
                    count += 1
                    if count >= minimum:
                        return True
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        logger.warning("Could not list %s: %s", directory, e)
        return False

    return False


def detect_monorepo(project_path: Path) -> bool:
    """Return True if the project looks like a multi-package repository.

    Workspace manifests are only checked at the root.
    """
    for name in WORKSPACE_MANIFESTS:
        if (project_path / name).exists():
            return True

    return any(has_multiple_subdirectories(project_path / name) for name in CONTAINER_DIRS)
