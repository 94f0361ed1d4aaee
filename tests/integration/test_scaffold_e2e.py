"""Integration tests for the detect-then-generate pipeline.

These tests run real detection and real template rendering against small
front-end projects on disk and verify that the generated Terraform and
workflow files are complete and well-formed.

No AWS account, Terraform binary or network access is required.  Node.js
is only needed by the test that evaluates a real config file.
"""

from __future__ import annotations

import json
import re
import shutil
from pathlib import Path

import pytest
import yaml

from spa_scaffold.config import (
    BuildToolConfig,
    BuildToolName,
    GitHubActionsOptions,
    TerraformGenerationOptions,
)
from spa_scaffold.detectors import detect_build_tool
from spa_scaffold.generators import GitHubActionsGenerator, TerraformGenerator
from spa_scaffold.utils import read_package_json
from spa_scaffold.validation import validate_output_path


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _write_project(root: Path, manifest: dict, files: dict[str, str] | None = None) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    (root / "package.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    for name, content in (files or {}).items():
        (root / name).write_text(content, encoding="utf-8")
    return root


async def _scaffold(project: Path, output: str = "./terraform", with_workflow: bool = True) -> Path:
    """Run the full pipeline and return the Terraform output directory."""
    manifest = await read_package_json(project)
    build_tool = await detect_build_tool(project, manifest)
    output_dir = validate_output_path(output, project)

    await TerraformGenerator().generate(
        TerraformGenerationOptions(
            project_name=manifest.name,
            output_dir=output_dir,
            build_tool_config=build_tool,
            aws_region="us-east-1",
        )
    )
    if with_workflow:
        await GitHubActionsGenerator(project).generate(
            GitHubActionsOptions(
                project_name=manifest.name,
                build_tool_config=build_tool,
                manifest=manifest,
                aws_region="us-east-1",
            )
        )
    return output_dir


def _balanced(text: str) -> bool:
    return text.count("{") == text.count("}")


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

@pytest.mark.integration
class TestScaffoldEndToEnd:
    """Full pipeline against projects on disk."""

    async def test_vite_without_config(self, tmp_path: Path):
        project = _write_project(
            tmp_path / "site",
            {"name": "site", "version": "1.0.0", "devDependencies": {"vite": "^5.0.0"}},
        )
        manifest = await read_package_json(project)
        assert await detect_build_tool(project, manifest) == BuildToolConfig(
            name=BuildToolName.VITE, output_dir="dist", config_path=None
        )

        terraform = await _scaffold(project, with_workflow=False)

        root_files = sorted(p.name for p in terraform.iterdir() if p.is_file())
        module_files = sorted(p.name for p in (terraform / "modules" / "cloudfront-s3").iterdir())
        assert root_files == ["README.md", "main.tf", "outputs.tf", "variables.tf"]
        assert module_files == ["main.tf", "outputs.tf", "variables.tf"]

    async def test_terraform_is_well_formed(self, tmp_path: Path):
        project = _write_project(
            tmp_path / "site",
            {"name": "Site With Spaces", "version": "1.0.0", "devDependencies": {"vite": "^5.0.0"}},
        )
        terraform = await _scaffold(project, with_workflow=False)

        for tf_file in terraform.rglob("*.tf"):
            content = tf_file.read_text(encoding="utf-8")
            assert _balanced(content), f"Unbalanced braces in {tf_file}"
            assert "{{" not in content, f"Unrendered Jinja2 in {tf_file}"
            assert "{%" not in content, f"Unrendered Jinja2 block in {tf_file}"

        variables_tf = (terraform / "variables.tf").read_text(encoding="utf-8")
        assert '"site-with-spaces"' in variables_tf

    async def test_root_variables_feed_module(self, tmp_path: Path):
        project = _write_project(
            tmp_path / "site",
            {"name": "site", "version": "1.0.0", "devDependencies": {"vite": "^5.0.0"}},
        )
        terraform = await _scaffold(project, with_workflow=False)

        module_vars = set(
            re.findall(
                r'variable "(\w+)"',
                (terraform / "modules" / "cloudfront-s3" / "variables.tf").read_text(encoding="utf-8"),
            )
        )
        main_tf = (terraform / "main.tf").read_text(encoding="utf-8")
        for name in ("project_name", "environment", "price_class", "domain_name", "certificate_arn"):
            assert name in module_vars
            assert f"{name}" in main_tf

    async def test_esbuild_script_outdir_flows_to_workflow(self, tmp_path: Path):
        project = _write_project(
            tmp_path / "tool",
            {
                "name": "tool",
                "version": "1.0.0",
                "devDependencies": {"esbuild": "^0.20.0"},
                "scripts": {"build": "esbuild src/index.ts --bundle --outdir=public", "test": "node --test"},
            },
            {"pnpm-lock.yaml": "lockfileVersion: '9.0'\n"},
        )
        terraform = await _scaffold(project)

        readme = (terraform / "README.md").read_text(encoding="utf-8")
        assert "aws s3 sync ./public" in readme

        workflow = yaml.safe_load(
            (project / ".github" / "workflows" / "deploy.yml").read_text(encoding="utf-8")
        )
        ci_steps = {step["name"]: step for step in workflow["jobs"]["ci"]["steps"]}
        assert ci_steps["Upload build artifacts"]["with"]["path"] == "public"
        assert ci_steps["Build application"]["run"] == "pnpm build"
        assert ci_steps["Run tests"]["run"] == "pnpm test"
        assert "Install pnpm" in ci_steps

    async def test_nested_output_path(self, tmp_path: Path):
        project = _write_project(
            tmp_path / "site",
            {"name": "site", "version": "1.0.0", "devDependencies": {"rollup": "^4.0.0"}},
        )
        terraform = await _scaffold(project, output="infra/aws/terraform", with_workflow=False)
        assert terraform == project / "infra" / "aws" / "terraform"
        assert (terraform / "modules" / "cloudfront-s3" / "outputs.tf").is_file()

    @pytest.mark.skipif(shutil.which("node") is None, reason="node not installed")
    async def test_real_vite_config(self, tmp_path: Path):
        project = _write_project(
            tmp_path / "site",
            {"name": "site", "version": "1.0.0", "type": "module", "devDependencies": {"vite": "^5.0.0"}},
            {"vite.config.mjs": "export default { build: { outDir: 'www' } };\n"},
        )
        manifest = await read_package_json(project)
        config = await detect_build_tool(project, manifest)
        assert config.output_dir == "www"
        assert config.config_path == str(project / "vite.config.mjs")
