"""Validation helpers: output-path guard, name sanitiser, config shape guards.

The shape guards are loose.  An object with zero keys counts as
a valid config for every tool, so an empty export falls through to the
tool's defaults instead of being rejected.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from .errors import SecurityError

MAX_PROJECT_NAME_LENGTH = 63


def validate_output_path(output_path: str | Path, project_root: str | Path) -> Path:
    """Resolve *output_path* against *project_root* and refuse escapes.

    No file-system access is performed.

    Raises:
        SecurityError: If the resolved path is not *project_root* or below it.
    """
    root = os.path.abspath(os.fspath(project_root))
    resolved = os.path.abspath(os.path.join(root, os.fspath(output_path)))

    if os.path.commonpath([root, resolved]) != root:
        raise SecurityError(
            "Output path must be within project directory. Path traversal detected."
        )
    return Path(resolved)


def sanitize_project_name(name: str) -> str:
    """Turn an arbitrary name into a DNS-label-safe resource prefix.

    Examples::

        sanitize_project_name("My Super Cool Project! v2.0") -> "my-super-cool-project-v2-0"
    """
    result = re.sub(r"[^a-z0-9-]", "-", name.lower())
    result = re.sub(r"-+", "-", result).strip("-")
    return result[:MAX_PROJECT_NAME_LENGTH].rstrip("-")


# ---------------------------------------------------------------------------
# Config shape guards
# ---------------------------------------------------------------------------


def is_vite_config(config: Any) -> bool:
    return isinstance(config, dict) and ("build" in config or len(config) == 0)


def is_rollup_config(config: Any) -> bool:
    return isinstance(config, dict) and ("output" in config or len(config) == 0)


def is_esbuild_config(config: Any) -> bool:
    return isinstance(config, dict) and (
        "outdir" in config or "outfile" in config or len(config) == 0
    )
