"""Shared utility functions for SPA Deploy Scaffold.

Provides the Rich-based CLI logger, async command execution, manifest
loading, config-file lookup, and the file emitter used by every generator.
"""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import Any, TypeVar

from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape

from .config import MANIFEST_FILENAME, PackageManifest
from .errors import ConfigParseError, MissingFileError

console = Console()
err_console = Console(stderr=True)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# CLI logger
# ---------------------------------------------------------------------------


class CLILogger:
    """Console logger with coloured prefixes and a spinner helper.

    Debug lines are only printed when ``debug`` is enabled (``--debug`` on
    the command line).
    """

    def __init__(self, debug: bool = False, out: Console | None = None, err: Console | None = None) -> None:
        self.debug_mode = debug
        self.out = out or console
        self.err = err or err_console

    def info(self, message: str) -> None:
        self.out.print(f"[blue]ℹ[/blue] {message}")

    def success(self, message: str) -> None:
        self.out.print(f"[green]✔[/green] {message}")

    def warn(self, message: str) -> None:
        self.out.print(f"[yellow]⚠[/yellow] {message}")

    def error(self, message: str) -> None:
        self.err.print(f"[bold red]✖[/bold red] {escape(message)}")

    def debug(self, message: str) -> None:
        if self.debug_mode:
            self.out.print(f"[grey50]🔍 {escape(message)}[/grey50]")

    def highlight(self, text: str) -> str:
        return f"[cyan]{escape(text)}[/cyan]"

    def dim(self, text: str) -> str:
        return f"[grey50]{escape(text)}[/grey50]"

    async def with_spinner(self, message: str, task: Callable[[], Awaitable[T]]) -> T:
        """Run *task* while a spinner shows *message*.

        The spinner is replaced by a success or failure line.  Exceptions
        from *task* are re-raised unchanged.
        """
        with self.out.status(message):
            try:
                result = await task()
            except Exception:
                self.out.print(f"[red]✖[/red] {message}")
                raise
        self.out.print(f"[green]✔[/green] {message}")
        return result


logger = CLILogger()


# ---------------------------------------------------------------------------
# Async command execution
# ---------------------------------------------------------------------------


async def run_command(
    cmd: list[str],
    cwd: str | Path | None = None,
    timeout: int = 60,
    env: dict[str, str] | None = None,
) -> tuple[int, str, str]:
    """Run a command asynchronously and capture its output.

    Args:
        cmd: Program and arguments.
        cwd: Working directory for the child process.
        timeout: Maximum wall-clock seconds before the process is killed.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple.  A timed-out command
        returns ``-1`` with an explanatory stderr.
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        process.kill()
        await process.wait()
        return (-1, "", f"Command timed out after {timeout}s: {' '.join(cmd)}")

    stdout_str = (stdout_bytes or b"").decode("utf-8", errors="replace").strip()
    stderr_str = (stderr_bytes or b"").decode("utf-8", errors="replace").strip()
    return (process.returncode or 0, stdout_str, stderr_str)


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


async def read_package_json(project_path: str | Path) -> PackageManifest:
    """Load and validate ``package.json`` from *project_path*.

    Raises:
        MissingFileError: If the manifest does not exist.
        ConfigParseError: If it is not valid JSON or fails schema validation.
    """
    manifest_path = Path(project_path) / MANIFEST_FILENAME

    if not await file_exists(manifest_path):
        raise MissingFileError(str(manifest_path))

    try:
        raw = await asyncio.to_thread(manifest_path.read_text, encoding="utf-8")
        data: Any = json.loads(raw)
        return PackageManifest.model_validate(data)
    except (OSError, json.JSONDecodeError, PydanticValidationError) as exc:
        raise ConfigParseError(str(manifest_path), exc) from exc


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


async def file_exists(path: str | Path) -> bool:
    """Return ``True`` if *path* exists (file or directory)."""
    return await asyncio.to_thread(Path(path).exists)


async def ensure_directory(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist."""
    dir_path = Path(path)
    await asyncio.to_thread(dir_path.mkdir, parents=True, exist_ok=True)
    return dir_path


async def write_file_with_directory(path: str | Path, content: str) -> Path:
    """Write *content* to *path*, creating parent directories first.

    An existing file at *path* is overwritten.
    """
    out = Path(path)
    await asyncio.to_thread(_write_file, out, content)
    return out


async def find_config_file(
    project_path: str | Path,
    base_name: str,
    extensions: Sequence[str],
) -> Path | None:
    """Return the first ``<base_name><ext>`` under *project_path* that exists.

    Extensions are tried in order; ``None`` when no candidate exists.
    """
    root = Path(project_path)
    for ext in extensions:
        candidate = root / f"{base_name}{ext}"
        if await file_exists(candidate):
            return candidate
    return None


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
