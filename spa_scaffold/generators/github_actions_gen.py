"""GitHub Actions CI/CD workflow generation.

Writes ``.github/workflows/deploy.yml`` and ``DEPLOYMENT.md`` into the
project root.  The workflow adapts to the project's package manager (from
its lockfile), Node.js version (from ``engines.node``), and the scripts
declared in ``package.json``.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from ..config import DEFAULT_NODE_VERSION, GitHubActionsOptions, PackageManifest
from ..utils import file_exists, logger
from .templates import TemplateRenderer

WORKFLOW_PATH = Path(".github") / "workflows" / "deploy.yml"
GUIDE_PATH = Path("DEPLOYMENT.md")

_LOCKFILES: tuple[tuple[str, str], ...] = (
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
)


class GitHubActionsGenerator:
    """Generates the deployment workflow and its setup guide."""

    def __init__(self, project_path: str | Path, renderer: TemplateRenderer | None = None) -> None:
        self.project_path = Path(project_path)
        self.renderer = renderer or TemplateRenderer()

    async def generate(self, options: GitHubActionsOptions) -> list[Path]:
        """Write the workflow and the deployment guide concurrently."""
        context = await self.build_context(options)
        workflow, guide = await asyncio.gather(
            self.renderer.render_to_file("github/deploy.yml.j2", self.project_path / WORKFLOW_PATH, context),
            self.renderer.render_to_file("github/DEPLOYMENT.md.j2", self.project_path / GUIDE_PATH, context),
        )
        logger.debug(f"Generated: {workflow}")
        logger.debug(f"Generated: {guide}")
        return [workflow, guide]

    async def generate_workflow(self, options: GitHubActionsOptions) -> Path:
        context = await self.build_context(options)
        return await self.renderer.render_to_file(
            "github/deploy.yml.j2", self.project_path / WORKFLOW_PATH, context
        )

    async def generate_deployment_guide(self, options: GitHubActionsOptions) -> Path:
        context = await self.build_context(options)
        return await self.renderer.render_to_file(
            "github/DEPLOYMENT.md.j2", self.project_path / GUIDE_PATH, context
        )

    # -- Context building --------------------------------------------------

    async def detect_package_manager(self) -> str:
        """Return ``pnpm``, ``yarn`` or ``npm`` based on the lockfile present."""
        for lockfile, manager in _LOCKFILES:
            if await file_exists(self.project_path / lockfile):
                return manager
        return "npm"

    async def build_context(self, options: GitHubActionsOptions) -> dict[str, Any]:
        """Build the template context for the workflow and guide."""
        package_manager = await self.detect_package_manager()
        scripts = options.manifest.scripts

        return {
            "project_name": options.project_name,
            "build_tool": options.build_tool_config.name.value,
            "output_dir": options.build_tool_config.output_dir,
            "aws_region": options.aws_region,
            "cloudfront_url": options.cloudfront_url or "",
            "node_version": detect_node_version(options.manifest),
            "package_manager": package_manager,
            "is_pnpm": package_manager == "pnpm",
            "is_yarn": package_manager == "yarn",
            "is_npm": package_manager == "npm",
            "install_command": install_command(package_manager),
            "build_command": _script_command(package_manager, scripts, ("build",), "build"),
            "test_command": _script_command(package_manager, scripts, ("test", "test:ci"), "test"),
            "lint_command": _script_command(package_manager, scripts, ("lint",), "lint"),
            "has_tests": has_test_scripts(options.manifest),
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def detect_node_version(manifest: PackageManifest) -> str:
    """Return the major Node.js version from ``engines.node`` (``">=18.0.0"`` -> ``"18"``)."""
    match = re.search(r"(\d+)", manifest.engines.get("node", ""))
    return match.group(1) if match else DEFAULT_NODE_VERSION


def has_test_scripts(manifest: PackageManifest) -> bool:
    return bool(manifest.scripts.get("test") or manifest.scripts.get("test:ci"))


def install_command(package_manager: str) -> str:
    if package_manager == "pnpm":
        return "pnpm install --frozen-lockfile"
    if package_manager == "yarn":
        return "yarn install --frozen-lockfile"
    return "npm ci"


def run_command_for(package_manager: str, script: str) -> str:
    if package_manager in ("pnpm", "yarn"):
        return f"{package_manager} {script}"
    return f"npm run {script}"


def _script_command(
    package_manager: str,
    scripts: dict[str, str],
    candidates: tuple[str, ...],
    label: str,
) -> str:
    for script in candidates:
        if scripts.get(script):
            return run_command_for(package_manager, script)
    return f'echo "No {label} command found"'
