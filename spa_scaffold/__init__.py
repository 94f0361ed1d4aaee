"""SPA Deploy Scaffold.

Detects a front-end project's build tool (vite, rollup, esbuild) and
generates Terraform for an S3 + CloudFront deployment, plus an optional
GitHub Actions workflow.

Modules:
- ``detectors``: concurrent build-tool detection with a static priority order
- ``generators``: Jinja2 rendering of Terraform and GitHub Actions files
- ``cli``: the ``generate`` and ``detect`` commands
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "1.0.0"
