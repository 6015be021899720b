"""JSON manifest reading and dependency lookup (package.json, composer.json)."""

from __future__ import annotations

import enum
import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from stackscout.detection.paths import (
    DEFAULT_MAX_DEPTH,
    IGNORE_DIRS,
    find_files_by_name,
    is_deep_pattern,
    resolve_path,
    strip_deep_prefix,
)

logger = logging.getLogger(__name__)

PACKAGE_MANIFEST = "package.json"
COMPOSER_MANIFEST = "composer.json"

PACKAGE_BUCKETS: tuple[str, ...] = ("dependencies", "devDependencies", "peerDependencies")
COMPOSER_BUCKETS: tuple[str, ...] = ("require",)


class ManifestStatus(str, enum.Enum):
    PRESENT = "present"
    MISSING = "missing"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class ManifestResult:
    """Outcome of reading one manifest file."""

    path: Path
    status: ManifestStatus
    data: dict[str, Any] | None = None
    error: str | None = None

    @property
    def present(self) -> bool:
        return self.status is ManifestStatus.PRESENT


def read_manifest(path: Path) -> ManifestResult:
    """Read and parse a JSON manifest. Never raises.

    A missing or unreadable file yields MISSING; invalid JSON, bad encoding,
    or a top-level value that is not an object yields MALFORMED.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return ManifestResult(path=path, status=ManifestStatus.MISSING)
    except UnicodeDecodeError as e:
        logger.warning("Could not decode manifest %s: %s", path, e)
        return ManifestResult(path=path, status=ManifestStatus.MALFORMED, error=str(e))
    except OSError as e:
        logger.warning("Could not read manifest %s: %s", path, e)
        return ManifestResult(path=path, status=ManifestStatus.MISSING, error=str(e))

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Failed to parse manifest %s: %s", path, e)
        return ManifestResult(path=path, status=ManifestStatus.MALFORMED, error=str(e))

    if not isinstance(data, dict):
        logger.warning("Manifest %s is not a JSON object", path)
        return ManifestResult(
            path=path, status=ManifestStatus.MALFORMED, error="top-level value is not an object"
        )

    return ManifestResult(path=path, status=ManifestStatus.PRESENT, data=data)


def has_dependency(
    manifest: dict[str, Any] | None,
    dependency: str,
    buckets: Sequence[str] = PACKAGE_BUCKETS,
) -> bool:
    """Check whether ``dependency`` is a key of any of the given buckets."""
    if not manifest:
        return False
    for bucket in buckets:
        declared = manifest.get(bucket)
        if isinstance(declared, dict) and dependency in declared:
            return True
    return False


def iter_manifest_paths(
    root: Path,
    patterns: Iterable[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> list[Path]:
    """Expand manifest patterns into candidate paths, de-duplicated in order."""
    ignored = frozenset(ignore_dirs)
    seen: set[Path] = set()
    paths: list[Path] = []

    for pattern in patterns:
        if is_deep_pattern(pattern):
            candidates = find_files_by_name(root, strip_deep_prefix(pattern), max_depth, ignored)
        else:
            candidates = [resolve_path(root, pattern)]

        for candidate in candidates:
            key = Path(candidate).absolute()
            if key in seen:
                continue
            seen.add(key)
            paths.append(candidate)

    return paths


def find_dependency_manifest(
    root: Path,
    dependency: str,
    patterns: Iterable[str] = (PACKAGE_MANIFEST,),
    buckets: Sequence[str] = PACKAGE_BUCKETS,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> Path | None:
    """Return the first manifest declaring ``dependency``, or None."""
    for path in iter_manifest_paths(root, patterns, max_depth, ignore_dirs):
        result = read_manifest(path)
        if result.present and has_dependency(result.data, dependency, buckets):
            return path
    return None


def find_composer_dependency(
    root: Path,
    dependency: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> Path | None:
    """Search every composer.json in the bounded tree for a ``require`` entry."""
    return find_dependency_manifest(
        root,
        dependency,
        patterns=(f"**/{COMPOSER_MANIFEST}",),
        buckets=COMPOSER_BUCKETS,
        max_depth=max_depth,
        ignore_dirs=ignore_dirs,
    )
