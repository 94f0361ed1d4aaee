"""esbuild detection.

esbuild is usually driven from a ``package.json`` script rather than a
config file, so besides ``esbuild.config.*`` (``outdir`` / ``outfile``) the
detector also scans the ``build`` script for an ``--outdir`` flag.
"""

from __future__ import annotations

import re
from typing import Any, Optional

from ..config import BuildToolName, PackageManifest
from ..validation import is_esbuild_config
from .base import BuildToolDetector, directory_of, string_or_none

_OUTDIR_FLAG = re.compile(r"--outdir[=\s]+(\S+)")


class EsbuildDetector(BuildToolDetector):
    name = BuildToolName.ESBUILD
    display_name = "esbuild"

    def is_config(self, config: Any) -> bool:
        return is_esbuild_config(config)

    def extract_output_dir(self, config: dict[str, Any]) -> Optional[str]:
        return string_or_none(config.get("outdir")) or directory_of(config.get("outfile"))

    def output_dir_from_manifest(self, manifest: PackageManifest) -> Optional[str]:
        return parse_outdir_from_script(manifest.scripts.get("build"))


def parse_outdir_from_script(build_script: Optional[str]) -> Optional[str]:
    """Extract ``--outdir`` from an esbuild ``build`` script.

    Accepts ``--outdir=build`` and ``--outdir build``.  Scripts that do not
    invoke esbuild are ignored.
    """
    if not build_script or "esbuild" not in build_script:
        return None
    match = _OUTDIR_FLAG.search(build_script)
    return match.group(1) if match else None
