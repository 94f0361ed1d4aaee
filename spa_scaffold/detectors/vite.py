"""Vite detection: reads ``build.outDir`` from ``vite.config.*``."""

from __future__ import annotations

from typing import Any, Optional

from ..config import BuildToolName
from ..validation import is_vite_config
from .base import BuildToolDetector, string_or_none


class ViteDetector(BuildToolDetector):
    name = BuildToolName.VITE
    display_name = "Vite"

    def is_config(self, config: Any) -> bool:
        return is_vite_config(config)

    def extract_output_dir(self, config: dict[str, Any]) -> Optional[str]:
        build = config.get("build")
        if not isinstance(build, dict):
            return None
        return string_or_none(build.get("outDir"))
