"""Shared build-tool detection algorithm.

Every supported tool is detected the same way:

1. The tool must be a key in ``dependencies`` or ``devDependencies``.
2. Its config file is located by trying ``<tool>.config`` with each of the
   known extensions, in order.
3. A found config is evaluated and, if it passes the tool's shape guard,
   the output directory is read from it.
4. Otherwise a tool-specific ``package.json`` heuristic is consulted.
5. Otherwise the default ``dist`` is used.

Subclasses only supply the tool name, the shape guard, and the extractor
(plus, optionally, the script heuristic).  Detection never raises.
"""

from __future__ import annotations

import posixpath
from pathlib import Path
from typing import Any, Optional

from ..config import CONFIG_EXTENSIONS, DEFAULT_OUTPUT_DIR, BuildToolConfig, BuildToolName, PackageManifest
from ..utils import find_config_file, logger
from .loader import load_config_module


class BuildToolDetector:
    """Base detector.  One subclass per supported build tool."""

    name: BuildToolName
    display_name: str = ""
    extensions: tuple[str, ...] = CONFIG_EXTENSIONS
    default_output_dir: str = DEFAULT_OUTPUT_DIR

    @property
    def config_basename(self) -> str:
        return f"{self.name.value}.config"

    @property
    def checked_location(self) -> str:
        """Human-readable description of where this detector looks."""
        return f"{self.name.value} (devDependencies)"

    async def detect(self, project_path: str | Path, manifest: PackageManifest) -> Optional[BuildToolConfig]:
        """Return the tool's config if it is a project dependency, else ``None``."""
        if not manifest.has_dependency(self.name.value):
            return None

        logger.debug(f"{self.display_name} detected in dependencies")

        config_path = await find_config_file(project_path, self.config_basename, self.extensions)

        output_dir: Optional[str] = None
        if config_path is not None:
            logger.debug(f"Found {self.display_name} config: {config_path}")
            output_dir = await self._parse_config(config_path)

        if output_dir is None:
            output_dir = self.output_dir_from_manifest(manifest)

        return BuildToolConfig(
            name=self.name,
            output_dir=output_dir or self.default_output_dir,
            config_path=str(config_path) if config_path is not None else None,
        )

    async def _parse_config(self, config_path: Path) -> Optional[str]:
        try:
            config = await load_config_module(config_path)
            if not self.is_config(config):
                return None
            return self.extract_output_dir(config)
        except Exception as exc:
            cause = getattr(exc, "cause", None)
            detail = f"{exc} ({cause})" if cause else str(exc)
            logger.debug(f"Failed to parse {self.display_name} config: {detail}")
            return None

    # -- Per-tool hooks ----------------------------------------------------

    def is_config(self, config: Any) -> bool:
        raise NotImplementedError

    def extract_output_dir(self, config: dict[str, Any]) -> Optional[str]:
        raise NotImplementedError

    def output_dir_from_manifest(self, manifest: PackageManifest) -> Optional[str]:
        return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def string_or_none(value: Any) -> Optional[str]:
    """Return *value* if it is a non-empty string, else ``None``."""
    if isinstance(value, str) and value:
        return value
    return None


def directory_of(file_path: Any) -> Optional[str]:
    """Return the parent directory of an output file path.

    ``"build/bundle.js"`` -> ``"build"``; a bare ``"bundle.js"`` -> ``"."``.
    """
    path = string_or_none(file_path)
    if path is None:
        return None
    return posixpath.dirname(path) or "."
