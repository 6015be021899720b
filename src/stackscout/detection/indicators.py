"""Static stack indicator table.

Each indicator names one recognizable stack, the preset it recommends, and
the matchers that detect it. Matchers are plain data; evaluation lives in
``stackscout.detection.frameworks``.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileMatcher:
    """Succeeds for each pattern that exists (direct) or is found (``**/``)."""

    patterns: tuple[str, ...]


@dataclass(frozen=True)
class PackageDependencyMatcher:
    """Succeeds when a package.json-style manifest declares ``dependency``."""

    dependency: str
    file_patterns: tuple[str, ...] = ("package.json",)


@dataclass(frozen=True)
class ComposerDependencyMatcher:
    """Succeeds when any composer.json in the bounded tree requires ``dependency``."""

    dependency: str


Matcher = FileMatcher | PackageDependencyMatcher | ComposerDependencyMatcher


@dataclass(frozen=True)
class Indicator:
    id: str
    label: str
    preset: str
    matchers: tuple[Matcher, ...]
    provides_ui: bool = False


DOCKER_INDICATOR_ID = "docker"

STACK_INDICATORS: tuple[Indicator, ...] = (
    Indicator(
        id="angular",
        label="Angular",
        preset="angular",
        provides_ui=True,
        matchers=(FileMatcher(("angular.json", "**/angular.json")),),
    ),
    Indicator(
        id="ionic",
        label="Ionic",
        preset="ionic",
        provides_ui=True,
        matchers=(FileMatcher(("ionic.config.json", "**/ionic.config.json")),),
    ),
    Indicator(
        id="next",
        label="Next.js",
        preset="next",
        provides_ui=True,
        matchers=(
            FileMatcher(
                (
                    "next.config.js",
                    "next.config.ts",
                    "next.config.mjs",
                    "**/next.config.js",
                    "**/next.config.ts",
                    "**/next.config.mjs",
                )
            ),
        ),
    ),
    Indicator(
        id="react",
        label="React",
        preset="react",
        provides_ui=True,
        matchers=(
            PackageDependencyMatcher("react", ("package.json", "**/package.json")),
            FileMatcher(("src/App.tsx", "src/App.jsx", "**/src/App.tsx", "**/src/App.jsx")),
        ),
    ),
    Indicator(
        id="laravel",
        label="Laravel",
        preset="laravel",
        matchers=(
            FileMatcher(("artisan", "**/artisan")),
            ComposerDependencyMatcher("laravel/framework"),
        ),
    ),
    Indicator(
        id=DOCKER_INDICATOR_ID,
        label="Containers only",
        preset="docker",
        matchers=(
            FileMatcher(
                (
                    "docker-compose.yml",
                    "compose.yml",
                    "compose.yaml",
                    "Dockerfile",
                    "**/docker-compose.yml",
                    "**/Dockerfile",
                )
            ),
        ),
    ),
)


def get_indicator(indicator_id: str) -> Indicator | None:
    """Look up an indicator by id."""
    for indicator in STACK_INDICATORS:
        if indicator.id == indicator_id:
            return indicator
    return None
