"""Build-tool detection orchestrator.

All detectors are launched together and awaited jointly; the winner is then
picked by folding over the detectors in their static priority order, so the
result never depends on which detector finished first.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from ..config import BuildToolConfig, BuildToolName, PackageManifest
from ..errors import BuildToolNotFoundError
from .base import BuildToolDetector
from .esbuild import EsbuildDetector
from .rollup import RollupDetector
from .vite import ViteDetector

# Highest priority first.
DETECTORS: tuple[BuildToolDetector, ...] = (
    ViteDetector(),
    RollupDetector(),
    EsbuildDetector(),
)


def detectors_for(tool: Optional[BuildToolName | str] = None) -> tuple[BuildToolDetector, ...]:
    """Return the detectors to run, optionally narrowed to a single tool."""
    if tool is None:
        return DETECTORS
    wanted = BuildToolName(tool)
    return tuple(d for d in DETECTORS if d.name == wanted)


async def detect_build_tool(
    project_path: str | Path,
    manifest: PackageManifest,
    detectors: Sequence[BuildToolDetector] | None = None,
) -> BuildToolConfig:
    """Detect the project's build tool.

    Args:
        project_path: Project root containing ``package.json``.
        manifest: The loaded manifest.
        detectors: Detectors in priority order.  Defaults to vite, rollup,
            esbuild.

    Raises:
        BuildToolNotFoundError: If no detector recognises the project.
    """
    ordered = tuple(detectors) if detectors is not None else DETECTORS

    results = await asyncio.gather(*(d.detect(project_path, manifest) for d in ordered))

    for result in results:
        if result is not None:
            return result

    raise BuildToolNotFoundError([d.checked_location for d in ordered])
