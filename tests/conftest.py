"""Shared pytest fixtures for the SPA Deploy Scaffold test suite.

Provides reusable fixtures for:
- Temporary front-end projects with a ``package.json``
- Pre-built manifests for each supported build tool
- Build-tool configs used by the generators
- Logger state reset between tests
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from spa_scaffold.config import BuildToolConfig, BuildToolName, PackageManifest
from spa_scaffold.utils import logger


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_logger():
    """Keep debug mode off between tests (``main`` toggles it)."""
    logger.debug_mode = False
    yield
    logger.debug_mode = False


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Empty project root (auto-cleanup)."""
    root = tmp_path / "web-app"
    root.mkdir()
    yield root


@pytest.fixture
def write_manifest(project_dir: Path) -> Callable[..., Path]:
    """Factory that writes ``package.json`` into ``project_dir``."""

    def _write(**fields: Any) -> Path:
        data: dict[str, Any] = {"name": "test-app", "version": "1.0.0"}
        data.update(fields)
        path = project_dir / "package.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Manifests
# ---------------------------------------------------------------------------

@pytest.fixture
def vite_manifest() -> PackageManifest:
    return PackageManifest(
        name="test-app",
        version="1.0.0",
        devDependencies={"vite": "^5.0.0"},
        scripts={"build": "vite build", "test": "vitest", "lint": "eslint ."},
    )


@pytest.fixture
def rollup_manifest() -> PackageManifest:
    return PackageManifest(name="test-app", version="1.0.0", devDependencies={"rollup": "^4.0.0"})


@pytest.fixture
def esbuild_manifest() -> PackageManifest:
    return PackageManifest(
        name="test-app",
        version="1.0.0",
        devDependencies={"esbuild": "^0.20.0"},
        scripts={"build": "esbuild src/index.ts --bundle --outdir=build"},
    )


@pytest.fixture
def empty_manifest() -> PackageManifest:
    return PackageManifest(name="test-app", version="1.0.0", dependencies={"react": "^18.0.0"})


# ---------------------------------------------------------------------------
# Build tool configs
# ---------------------------------------------------------------------------

@pytest.fixture
def vite_build_config() -> BuildToolConfig:
    return BuildToolConfig(name=BuildToolName.VITE, output_dir="dist", config_path="vite.config.ts")
