"""Framework detection: evaluate the indicator table against a project root."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from stackscout.core.metadata import FrameworkMatch
from stackscout.detection.indicators import (
    STACK_INDICATORS,
    ComposerDependencyMatcher,
    FileMatcher,
    Indicator,
    Matcher,
    PackageDependencyMatcher,
)
from stackscout.detection.manifests import find_composer_dependency, find_dependency_manifest
from stackscout.detection.paths import (
    DEFAULT_MAX_DEPTH,
    IGNORE_DIRS,
    path_matches_pattern,
    strip_deep_prefix,
)


def _relative(root: Path, path: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def evaluate_matcher(
    root: Path,
    matcher: Matcher,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> list[str]:
    """Return the provenance strings for every part of ``matcher`` that succeeds."""
    ignored = frozenset(ignore_dirs)

    if isinstance(matcher, FileMatcher):
        return [
            strip_deep_prefix(pattern)
            for pattern in matcher.patterns
            if path_matches_pattern(root, pattern, max_depth, ignored)
        ]

    if isinstance(matcher, PackageDependencyMatcher):
        found = find_dependency_manifest(
            root,
            matcher.dependency,
            patterns=matcher.file_patterns,
            max_depth=max_depth,
            ignore_dirs=ignored,
        )
        return [_relative(root, found)] if found else []

    if isinstance(matcher, ComposerDependencyMatcher):
        found = find_composer_dependency(root, matcher.dependency, max_depth, ignored)
        return [_relative(root, found)] if found else []

    raise TypeError(f"Unsupported matcher type: {type(matcher).__name__}")


def match_indicator(
    root: Path,
    indicator: Indicator,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> FrameworkMatch | None:
    """Evaluate all matchers of one indicator; None if nothing matched."""
    matches: list[str] = []
    for matcher in indicator.matchers:
        matches.extend(evaluate_matcher(root, matcher, max_depth, ignore_dirs))

    if not matches:
        return None

    return FrameworkMatch(
        id=indicator.id,
        label=indicator.label,
        preset=indicator.preset,
        provides_ui=indicator.provides_ui,
        matches=matches,
    )


def detect_frameworks(
    project_path: Path,
    indicators: Sequence[Indicator] = STACK_INDICATORS,
    max_depth: int = DEFAULT_MAX_DEPTH,
    ignore_dirs: Iterable[str] = IGNORE_DIRS,
) -> list[FrameworkMatch]:
    """Detect every stack in ``indicators`` order. A project may match several."""
    ignored = frozenset(ignore_dirs)
    frameworks: list[FrameworkMatch] = []
    for indicator in indicators:
        match = match_indicator(project_path, indicator, max_depth, ignored)
        if match is not None:
            frameworks.append(match)
    return frameworks
