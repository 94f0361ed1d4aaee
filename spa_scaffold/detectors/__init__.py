"""Build-tool detection.

Usage::

    from spa_scaffold.detectors import detect_build_tool

    config = await detect_build_tool(project_path, manifest)
    print(config.name, config.output_dir, config.config_path)
"""

from spa_scaffold.detectors.base import BuildToolDetector
from spa_scaffold.detectors.esbuild import EsbuildDetector
from spa_scaffold.detectors.orchestrator import DETECTORS, detect_build_tool, detectors_for
from spa_scaffold.detectors.rollup import RollupDetector
from spa_scaffold.detectors.vite import ViteDetector

__all__ = [
    "DETECTORS",
    "BuildToolDetector",
    "EsbuildDetector",
    "RollupDetector",
    "ViteDetector",
    "detect_build_tool",
    "detectors_for",
]
