"""Deployment scaffolding generators.

Renders Terraform (S3 + CloudFront) and GitHub Actions files from Jinja2
templates shipped in ``spa_scaffold/generators/templates/``.

Quick usage::

    from spa_scaffold.generators import TerraformGenerator

    written = await TerraformGenerator().generate(options)
"""

from spa_scaffold.generators.github_actions_gen import GitHubActionsGenerator
from spa_scaffold.generators.templates import TemplateRenderer
from spa_scaffold.generators.terraform_gen import TerraformGenerator

__all__ = [
    "GitHubActionsGenerator",
    "TemplateRenderer",
    "TerraformGenerator",
]
