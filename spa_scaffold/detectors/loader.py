"""Dynamic evaluation of JavaScript/TypeScript build-tool config files.

Config files are real ES modules, so the only faithful way to read them is
to let Node.js import them.  ``load_config_module`` runs a tiny Node script
that imports the file and prints its default export (or the module namespace
when there is no default) as JSON after a marker line, so console output from
the config itself is skipped.  Functions, promises and other
non-serialisable exports come back as ``None``.

This is the one untyped boundary in the package: callers must shape-check
whatever comes back.
"""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any

from ..errors import ConfigParseError
from ..utils import run_command

CONFIG_PATH_ENV = "SPA_SCAFFOLD_CONFIG_PATH"
RESULT_MARKER_ENV = "SPA_SCAFFOLD_RESULT_MARKER"

# Printed on its own line before the JSON payload; anything the config itself
# writes to stdout comes before it and is ignored.
RESULT_MARKER = "__SPA_SCAFFOLD_CONFIG_RESULT__"

_EVALUATE_SCRIPT = r"""
import { pathToFileURL } from 'node:url';
const mod = await import(pathToFileURL(process.env.SPA_SCAFFOLD_CONFIG_PATH).href);
const config = mod.default ?? { ...mod };
const marker = process.env.SPA_SCAFFOLD_RESULT_MARKER;
process.stdout.write('\n' + marker + '\n' + (JSON.stringify(config) ?? 'null'));
"""

EVALUATE_TIMEOUT = 30


async def load_config_module(config_path: str | Path) -> Any:
    """Import *config_path* with Node.js and return its export as plain data.

    Raises:
        ConfigParseError: If Node.js is unavailable, the import fails, or
            the output is not JSON.
    """
    path = Path(config_path).resolve()
    node = shutil.which("node")
    if node is None:
        raise ConfigParseError(str(path), "node executable not found on PATH")

    cmd = [node]
    if path.suffix in (".ts", ".mts", ".cts"):
        cmd.append("--experimental-strip-types")
    cmd += ["--no-warnings", "--input-type=module", "--eval", _EVALUATE_SCRIPT]

    returncode, stdout, stderr = await run_command(
        cmd,
        cwd=path.parent,
        timeout=EVALUATE_TIMEOUT,
        env={CONFIG_PATH_ENV: str(path), RESULT_MARKER_ENV: RESULT_MARKER},
    )
    if returncode != 0:
        raise ConfigParseError(str(path), stderr or f"node exited with status {returncode}")

    _, marker, payload = stdout.rpartition(RESULT_MARKER)
    if not marker:
        raise ConfigParseError(str(path), "config evaluation produced no result")

    try:
        return json.loads(payload.strip() or "null")
    except json.JSONDecodeError as exc:
        raise ConfigParseError(str(path), exc) from exc
