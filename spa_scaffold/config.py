"""SPA Deploy Scaffold configuration.

Typed models for everything that flows through a single command run: the
project's ``package.json`` manifest, the detected build-tool configuration,
and the user-facing generation options.  All models are Pydantic v2 so they
are validated at construction time.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .validation import sanitize_project_name


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_DIR = "dist"
DEFAULT_TERRAFORM_DIR = "./terraform"
DEFAULT_REGION = "us-east-1"
DEFAULT_ENVIRONMENT = "production"
DEFAULT_PRICE_CLASS = "PriceClass_100"
DEFAULT_NODE_VERSION = "20"

MANIFEST_FILENAME = "package.json"
CONFIG_EXTENSIONS: tuple[str, ...] = (".ts", ".js", ".mjs")

PRICE_CLASSES: tuple[str, ...] = ("PriceClass_100", "PriceClass_200", "PriceClass_All")

AWS_REGIONS: dict[str, str] = {
    "us-east-1": "US East (N. Virginia)",
    "us-east-2": "US East (Ohio)",
    "us-west-1": "US West (N. California)",
    "us-west-2": "US West (Oregon)",
    "sa-east-1": "South America (São Paulo)",
    "eu-west-1": "EU (Ireland)",
    "eu-west-2": "EU (London)",
    "eu-central-1": "EU (Frankfurt)",
    "ap-southeast-1": "Asia Pacific (Singapore)",
    "ap-southeast-2": "Asia Pacific (Sydney)",
    "ap-northeast-1": "Asia Pacific (Tokyo)",
    "ap-northeast-2": "Asia Pacific (Seoul)",
}


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


class PackageManifest(BaseModel):
    """The subset of ``package.json`` the scaffolder reads.

    Unknown keys are ignored.  The model is frozen: once loaded it is never
    mutated.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    version: str
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    scripts: dict[str, str] = Field(default_factory=dict)
    engines: dict[str, str] = Field(default_factory=dict)

    def has_dependency(self, package: str) -> bool:
        """Return ``True`` if *package* is a key of either dependency map."""
        return package in self.dependencies or package in self.dev_dependencies


# ---------------------------------------------------------------------------
# Build tool
# ---------------------------------------------------------------------------


class BuildToolName(str, Enum):
    """Supported front-end build tools, listed in detection priority order."""

    VITE = "vite"
    ROLLUP = "rollup"
    ESBUILD = "esbuild"


class BuildToolConfig(BaseModel):
    """Result of build-tool detection.  Produced once per run."""

    model_config = ConfigDict(frozen=True)

    name: BuildToolName
    output_dir: str = Field(..., min_length=1)
    config_path: Optional[str] = None


# ---------------------------------------------------------------------------
# Generation options
# ---------------------------------------------------------------------------


class GenerationOptions(BaseModel):
    """Options for the ``generate`` command, after prompts and flag merging."""

    project_name: str
    output: str = Field(default=DEFAULT_TERRAFORM_DIR)
    region: str = Field(default=DEFAULT_REGION)
    environment: str = Field(default=DEFAULT_ENVIRONMENT)
    domain: Optional[str] = None
    cert_arn: Optional[str] = None
    price_class: Literal["PriceClass_100", "PriceClass_200", "PriceClass_All"] = DEFAULT_PRICE_CLASS
    github_actions: bool = False
    yes: bool = False
    tool: Optional[BuildToolName] = None

    @field_validator("project_name", "output", "region", "environment")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("project_name", "environment")
    @classmethod
    def _usable_as_resource_name(cls, value: str) -> str:
        if not sanitize_project_name(value):
            raise ValueError("must contain at least one letter or digit")
        return value

    @field_validator("domain", "cert_arn")
    @classmethod
    def _blank_to_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        return value.strip()


class TerraformGenerationOptions(BaseModel):
    """Inputs to the Terraform generator."""

    project_name: str
    output_dir: Path
    build_tool_config: BuildToolConfig
    aws_region: str
    environment: str = DEFAULT_ENVIRONMENT
    domain_name: Optional[str] = None
    certificate_arn: Optional[str] = None
    price_class: str = DEFAULT_PRICE_CLASS


class GitHubActionsOptions(BaseModel):
    """Inputs to the GitHub Actions workflow generator."""

    project_name: str
    build_tool_config: BuildToolConfig
    manifest: PackageManifest
    aws_region: str
    cloudfront_url: Optional[str] = None
