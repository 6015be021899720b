"""Pattern resolution against a project root, including bounded deep search."""

from __future__ import annotations

import logging
import os
from collections import deque
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

DEEP_PREFIX = "**/"
DEFAULT_MAX_DEPTH = 3

# Directories never descended into by the deep search
IGNORE_DIRS: frozenset[str] = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".next",
        ".turbo",
        "dist",
        "build",
        "coverage",
        "node_modules",
        "vendor",
        ".output",
        "agent",
    }
)


def normalize_pattern(pattern: str) -> str:
    """Use forward slashes regardless of how the pattern was written."""
    return pattern.replace("\\", "/")


def is_deep_pattern(pattern: str) -> bool:
    return normalize_pattern(pattern).startswith(DEEP_PREFIX)


def strip_deep_prefix(pattern: str) -> str:
    """Return the pattern without its ``**/`` marker (unchanged if direct)."""
    normalized = normalize_pattern(pattern)
    if normalized.startswith(DEEP_PREFIX):
        return normalized[len(DEEP_PREFIX):]
    return normalized


def find_files_by_name(
    root: Path,
    name: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> list[Path]:
    """Breadth-first search for entries called ``name`` under ``root``.

    ``name`` may contain slashes (``src/App.tsx``); in that case the last
    component is matched by name and the remaining components must be the
    entry's parent directories. Directories up to ``max_depth`` levels below
    root are listed, so ``root/a/b/c/name`` is found with the default depth
    of 3 and ``root/a/b/c/d/name`` is not. Directories in ``ignore_dirs``
    are neither matched nor descended into. Unreadable directories are
    skipped.

    Returns absolute paths in BFS order (sorted by name within a directory).
    """
    if not name:
        return []

    ignored = frozenset(ignore_dirs)
    parts = [p for p in normalize_pattern(name).split("/") if p]
    if not parts:
        return []
    leaf, parents = parts[-1], parts[:-1]

    matches: list[Path] = []
    queue: deque[tuple[Path, int]] = deque([(root, 0)])

    while queue:
        directory, depth = queue.popleft()
        if depth > max_depth:
            continue

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except (FileNotFoundError, NotADirectoryError):
            continue
        except OSError as e:
            logger.warning("Skipping unreadable directory %s: %s", directory, e)
            continue

        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue

            if is_dir and entry.name in ignored:
                continue

            if entry.name == leaf:
                candidate = Path(entry.path)
                if _has_parents(candidate, parents, root):
                    matches.append(candidate)

            if is_dir and depth + 1 <= max_depth:
                queue.append((Path(entry.path), depth + 1))

    return matches


def _has_parents(candidate: Path, parents: list[str], root: Path) -> bool:
    if not parents:
        return True
    try:
        relative = candidate.relative_to(root).parts
    except ValueError:
        return False
    # relative = (..., *parents, leaf)
    if len(relative) < len(parents) + 1:
        return False
    return list(relative[-len(parents) - 1:-1]) == parents


def path_matches_pattern(
    root: Path,
    pattern: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> bool:
    """Check whether ``pattern`` is satisfied under ``root``.

    Direct patterns test ``root / pattern`` for existence. Deep patterns
    (``**/name``) run a bounded search for ``name``.
    """
    if not pattern:
        return False

    if is_deep_pattern(pattern):
        return bool(find_files_by_name(root, strip_deep_prefix(pattern), max_depth, ignore_dirs))

    return resolve_path(root, pattern).exists()


def resolve_path(root: Path, pattern: str) -> Path:
    """Resolve a root-relative pattern; absolute patterns are returned as-is."""
    target = Path(normalize_pattern(pattern))
    if target.is_absolute():
        return target
    return root / target
