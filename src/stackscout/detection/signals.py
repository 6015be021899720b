"""Root-level quick signals, read without any deep search."""

from __future__ import annotations

from pathlib import Path

from stackscout.detection.manifests import (
    COMPOSER_BUCKETS,
    COMPOSER_MANIFEST,
    PACKAGE_BUCKETS,
    PACKAGE_MANIFEST,
    has_dependency,
    read_manifest,
)
from stackscout.detection.monorepo import detect_monorepo

DOCKER_FILES: tuple[str, ...] = ("docker-compose.yml", "compose.yml", "compose.yaml", "Dockerfile")
LARAVEL_FILES: tuple[str, ...] = ("artisan", "bootstrap/app.php", COMPOSER_MANIFEST)

_ALL_BUCKETS = PACKAGE_BUCKETS + COMPOSER_BUCKETS


def detect_signals(project_path: Path) -> dict[str, bool]:
    """Return a flat map of stack signals from files at the project root."""
    pkg = read_manifest(project_path / PACKAGE_MANIFEST)
    composer = read_manifest(project_path / COMPOSER_MANIFEST)

    def has(relative: str) -> bool:
        return (project_path / relative).exists()

    def dep(*names: str) -> bool:
        return any(has_dependency(pkg.data, name, _ALL_BUCKETS) for name in names)

    signals = {
        "laravel": all(has(f) for f in LARAVEL_FILES),
        "angular": has("angular.json") or dep("@angular/core"),
        "ionic": has("ionic.config.json") or dep("@ionic/angular", "@ionic/react"),
        "nx": has("nx.json") or dep("nx"),
        "vite": dep("vite"),
        "nextjs": dep("next"),
        "react": dep("react", "react-dom"),
        "docker": any(has(f) for f in DOCKER_FILES),
        "monorepo": detect_monorepo(project_path),
    }
    signals["headless"] = (
        not signals["angular"]
        and not signals["nextjs"]
        and not signals["react"]
        and (pkg.present or composer.present)
    )
    return signals
