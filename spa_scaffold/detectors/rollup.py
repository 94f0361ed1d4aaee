"""Rollup detection: reads ``output.dir`` (or the parent of ``output.file``).

``output`` may be a single object or an array of output targets; only the
first target is considered.
"""

from __future__ import annotations

from typing import Any, Optional

from ..config import BuildToolName
from ..validation import is_rollup_config
from .base import BuildToolDetector, directory_of, string_or_none


class RollupDetector(BuildToolDetector):
    name = BuildToolName.ROLLUP
    display_name = "Rollup"

    def is_config(self, config: Any) -> bool:
        return is_rollup_config(config)

    def extract_output_dir(self, config: dict[str, Any]) -> Optional[str]:
        output = config.get("output")
        if isinstance(output, list):
            output = output[0] if output else None
        if not isinstance(output, dict):
            return None
        return string_or_none(output.get("dir")) or directory_of(output.get("file"))
