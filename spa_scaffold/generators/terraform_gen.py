"""Terraform generation for an S3 + CloudFront static site.

Writes a root configuration that calls a local ``cloudfront-s3`` module:

- ``main.tf``, ``variables.tf``, ``outputs.tf``, ``README.md`` at the root
- ``modules/cloudfront-s3/{main,variables,outputs}.tf``

All seven files are rendered and written concurrently.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from ..config import TerraformGenerationOptions
from ..utils import logger
from ..validation import sanitize_project_name
from .templates import TemplateRenderer

MODULE_NAME = "cloudfront-s3"

# Template name -> output path relative to the Terraform output directory
ROOT_FILES: dict[str, str] = {
    "terraform/main.tf.j2": "main.tf",
    "terraform/variables.tf.j2": "variables.tf",
    "terraform/outputs.tf.j2": "outputs.tf",
    "terraform/README.md.j2": "README.md",
}

MODULE_FILES: dict[str, str] = {
    f"terraform/modules/{MODULE_NAME}/main.tf.j2": f"modules/{MODULE_NAME}/main.tf",
    f"terraform/modules/{MODULE_NAME}/variables.tf.j2": f"modules/{MODULE_NAME}/variables.tf",
    f"terraform/modules/{MODULE_NAME}/outputs.tf.j2": f"modules/{MODULE_NAME}/outputs.tf",
}


class TerraformGenerator:
    """Generates the Terraform configuration for a detected project."""

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    async def generate(
        self,
        options: TerraformGenerationOptions,
        generated_at: Optional[datetime] = None,
    ) -> list[Path]:
        """Render every Terraform file into ``options.output_dir``.

        Returns:
            The written paths (root files first, then module files).
        """
        context = build_terraform_context(options, generated_at)
        logger.debug(f"Generating Terraform files to: {options.output_dir}")

        written = await self.renderer.render_files(
            {**ROOT_FILES, **MODULE_FILES}, options.output_dir, context
        )

        for path in written:
            logger.debug(f"Generated: {path}")
        return written


def build_terraform_context(
    options: TerraformGenerationOptions,
    generated_at: Optional[datetime] = None,
) -> dict[str, Any]:
    """Flatten generation options into the Terraform template context."""
    timestamp = (generated_at or datetime.now(timezone.utc)).isoformat()
    return {
        "project_name": sanitize_project_name(options.project_name),
        "environment": sanitize_project_name(options.environment),
        "aws_region": options.aws_region,
        "output_directory": options.build_tool_config.output_dir,
        "build_tool": options.build_tool_config.name.value,
        "domain_name": options.domain_name or "",
        "certificate_arn": options.certificate_arn or "",
        "price_class": options.price_class,
        "module_name": MODULE_NAME,
        "timestamp": timestamp,
    }
