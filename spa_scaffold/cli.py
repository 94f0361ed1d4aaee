"""SPA Deploy Scaffold command-line interface.

Two commands, both run against the current working directory:

- ``generate``: read ``package.json`` -> detect build tool -> (prompt) ->
  validate options and output path -> write Terraform -> optionally write
  a GitHub Actions workflow and deployment guide.
- ``detect``: print the detected build tool, output directory and config
  file.

Usage::

    spa-deploy-scaffold generate
    spa-deploy-scaffold generate --yes --region eu-west-1 --github-actions
    spa-deploy-scaffold detect
"""

from __future__ import annotations

import argparse
import asyncio
import re
import traceback
from collections.abc import Callable
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError
from rich.prompt import Confirm, Prompt

from . import __version__
from .config import (
    AWS_REGIONS,
    DEFAULT_ENVIRONMENT,
    DEFAULT_PRICE_CLASS,
    DEFAULT_REGION,
    DEFAULT_TERRAFORM_DIR,
    PRICE_CLASSES,
    BuildToolConfig,
    BuildToolName,
    GenerationOptions,
    GitHubActionsOptions,
    PackageManifest,
    TerraformGenerationOptions,
)
from .detectors import detect_build_tool, detectors_for
from .errors import ScaffoldError, ValidationError
from .generators import GitHubActionsGenerator, TerraformGenerator
from .utils import console, logger, read_package_json
from .validation import sanitize_project_name, validate_output_path

_DOMAIN_RE = re.compile(r"^([a-z0-9]+(-[a-z0-9]+)*\.)+[a-z]{2,}$", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Option handling
# ---------------------------------------------------------------------------


def build_options(values: dict[str, Any]) -> GenerationOptions:
    """Validate merged flag/prompt values.

    Raises:
        ValidationError: If any option fails validation.
    """
    try:
        return GenerationOptions.model_validate(values)
    except PydanticValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
        raise ValidationError(f"Invalid options: {fields}", exc.errors()) from exc


def _required(label: str) -> Callable[[str], Optional[str]]:
    def check(value: str) -> Optional[str]:
        if not value or not value.strip():
            return f"{label} is required"
        return None

    return check


def _validate_project_name(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "Project name is required"
    if not sanitize_project_name(value):
        return "Project name must contain at least one letter or digit"
    return None


def _validate_domain(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "Domain name is required when using custom domain"
    if not _DOMAIN_RE.match(value.strip()):
        return "Please enter a valid domain name (e.g., example.com)"
    return None


def _validate_cert_arn(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "Certificate ARN is required when using custom domain"
    if not value.strip().startswith("arn:aws:acm:"):
        return 'ARN must start with "arn:aws:acm:"'
    return None


def _ask(message: str, validate: Callable[[str], Optional[str]], default: Optional[str] = None) -> str:
    """Prompt until *validate* accepts the answer."""
    while True:
        if default:
            value = Prompt.ask(message, default=default, console=console)
        else:
            value = Prompt.ask(message, console=console)
        problem = validate(value or "")
        if problem is None:
            return value.strip()
        console.print(f"[red]{problem}[/red]")


def prompt_generation_options(defaults: dict[str, Any]) -> dict[str, Any]:
    """Interactively collect project name, output, region and domain settings."""
    project_name = _ask("Project name", _validate_project_name, defaults.get("project_name"))
    output = _ask("Terraform output directory", _required("Output directory"), defaults.get("output"))

    for code, label in AWS_REGIONS.items():
        console.print(f"  [cyan]{code}[/cyan]  {label}")
    region = Prompt.ask(
        "AWS region",
        choices=list(AWS_REGIONS),
        default=defaults.get("region") or DEFAULT_REGION,
        show_choices=False,
        console=console,
    )

    domain: Optional[str] = None
    cert_arn: Optional[str] = None
    if Confirm.ask("Use custom domain?", default=False, console=console):
        domain = _ask("Custom domain name", _validate_domain)
        cert_arn = _ask("ACM certificate ARN", _validate_cert_arn)

    return {
        "project_name": project_name,
        "output": output,
        "region": region,
        "domain": domain,
        "cert_arn": cert_arn,
    }


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


async def generate_command(args: argparse.Namespace, project_path: Path | None = None) -> int:
    project_path = (project_path or Path.cwd()).resolve()

    logger.info("Analyzing project...")

    manifest = await logger.with_spinner(
        "Reading package.json", lambda: read_package_json(project_path)
    )
    build_tool = await logger.with_spinner(
        "Detecting build tool",
        lambda: detect_build_tool(project_path, manifest, detectors_for(args.tool)),
    )
    logger.success(
        f"Detected {logger.highlight(build_tool.name.value)} "
        f"with output directory: {logger.highlight(build_tool.output_dir)}"
    )

    values: dict[str, Any] = {
        "project_name": args.project_name or manifest.name,
        "output": args.output,
        "region": args.region,
        "environment": args.environment,
        "domain": args.domain,
        "cert_arn": args.cert_arn,
        "price_class": args.price_class,
        "github_actions": args.github_actions,
        "yes": args.yes,
        "tool": args.tool,
    }
    if not args.yes:
        values.update(prompt_generation_options(values))

    options = build_options(values)
    output_path = validate_output_path(options.output, project_path)

    terraform_options = TerraformGenerationOptions(
        project_name=options.project_name,
        output_dir=output_path,
        build_tool_config=build_tool,
        aws_region=options.region,
        environment=options.environment,
        domain_name=options.domain,
        certificate_arn=options.cert_arn,
        price_class=options.price_class,
    )
    await logger.with_spinner(
        "Generating Terraform files",
        lambda: TerraformGenerator().generate(terraform_options),
    )
    logger.success(f"Terraform files generated in: {logger.highlight(str(output_path))}")

    with_workflow = options.github_actions
    if not options.yes and not options.github_actions:
        with_workflow = Confirm.ask(
            "Generate GitHub Actions CI/CD workflow?", default=True, console=console
        )

    if with_workflow:
        await _generate_workflow(project_path, options, manifest, build_tool)

    _print_next_steps(output_path, with_workflow)
    return 0


async def _generate_workflow(
    project_path: Path,
    options: GenerationOptions,
    manifest: PackageManifest,
    build_tool: BuildToolConfig,
) -> None:
    workflow_options = GitHubActionsOptions(
        project_name=options.project_name,
        build_tool_config=build_tool,
        manifest=manifest,
        aws_region=options.region,
        cloudfront_url=options.domain,
    )
    await logger.with_spinner(
        "Generating GitHub Actions workflow",
        lambda: GitHubActionsGenerator(project_path).generate(workflow_options),
    )
    logger.success(
        "GitHub Actions workflow generated in: "
        + logger.highlight(".github/workflows/deploy.yml")
    )
    logger.info("Setup instructions: " + logger.highlight("DEPLOYMENT.md"))


def _print_next_steps(output_path: Path, with_workflow: bool) -> None:
    logger.info("")
    logger.info("Next steps:")
    logger.info(f"  1. cd {output_path}")
    logger.info("  2. terraform init")
    logger.info("  3. terraform plan")
    logger.info("  4. terraform apply")
    if with_workflow:
        logger.info("  5. Configure GitHub secrets (see DEPLOYMENT.md)")
        logger.info("  6. Push to main/master branch to trigger deployment")


async def detect_command(args: argparse.Namespace, project_path: Path | None = None) -> int:
    project_path = (project_path or Path.cwd()).resolve()

    logger.info("Detecting build tool configuration...")
    logger.info("")

    manifest = await read_package_json(project_path)
    build_tool = await detect_build_tool(project_path, manifest)

    logger.info("Build Tool Configuration:")
    logger.info(f"  Tool: {logger.highlight(build_tool.name.value)}")
    logger.info(f"  Output Directory: {logger.highlight(build_tool.output_dir)}")
    if build_tool.config_path:
        logger.info(f"  Config File: {logger.highlight(build_tool.config_path)}")
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spa-deploy-scaffold",
        description="Generate Terraform for AWS CloudFront + S3 deployment",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--debug", action="store_true", help="Print debug output")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate Terraform configuration files")
    g.add_argument(
        "--tool",
        choices=[t.value for t in BuildToolName],
        default=None,
        help="Build tool (vite|rollup|esbuild)",
    )
    g.add_argument(
        "--project-name",
        default=None,
        help="Project name (default: package.json name)",
    )
    g.add_argument(
        "--output",
        default=DEFAULT_TERRAFORM_DIR,
        help=f"Output directory (default: {DEFAULT_TERRAFORM_DIR})",
    )
    g.add_argument(
        "--region",
        default=DEFAULT_REGION,
        help=f"AWS region (default: {DEFAULT_REGION})",
    )
    g.add_argument("--domain", default=None, help="Custom domain name")
    g.add_argument("--cert-arn", default=None, help="ACM certificate ARN")
    g.add_argument(
        "--environment",
        default=DEFAULT_ENVIRONMENT,
        help=f"Deployment environment (default: {DEFAULT_ENVIRONMENT})",
    )
    g.add_argument(
        "--price-class",
        choices=PRICE_CLASSES,
        default=DEFAULT_PRICE_CLASS,
        help=f"CloudFront price class (default: {DEFAULT_PRICE_CLASS})",
    )
    g.add_argument(
        "--github-actions",
        action="store_true",
        help="Generate GitHub Actions workflow",
    )
    g.add_argument("--yes", action="store_true", help="Skip confirmation prompts")
    g.set_defaults(func=generate_command)

    d = sub.add_parser("detect", help="Detect build tool configuration")
    d.set_defaults(func=detect_command)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logger.debug_mode = bool(args.debug)

    try:
        return int(asyncio.run(args.func(args)))
    except ScaffoldError as exc:
        logger.error(str(exc))
        return 1
    except KeyboardInterrupt:
        logger.error("Aborted")
        return 130
    except Exception as exc:
        logger.error(f"{type(exc).__name__}: {exc}")
        logger.debug(traceback.format_exc())
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
