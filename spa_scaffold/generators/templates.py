"""Jinja2 template rendering for deployment scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``spa_scaffold/generators/templates/`` directory and renders them with a
generator-specific context.  Missing context keys render as empty strings
and are falsy inside ``{% if %}`` blocks, so optional sections simply
disappear when their data is absent.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..utils import write_file_with_directory
from ..validation import sanitize_project_name


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for deployment scaffolding.

    The renderer is stateless between calls: identical template and context
    always produce identical output.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([], default_for_string=False),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["dns_label"] = sanitize_project_name

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: Mapping[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"terraform/main.tf.j2"``).
            context: Variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: Mapping[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    # -- File-based rendering (async) --------------------------------------

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: Mapping[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(template_path, context)
        return await write_file_with_directory(output_path, content)

    async def render_files(
        self,
        files: Mapping[str, str | Path],
        output_dir: str | Path,
        context: Mapping[str, Any],
    ) -> list[Path]:
        """Render a batch of templates concurrently.

        Args:
            files: Mapping of template path -> output path relative to
                *output_dir*.
            output_dir: Target directory.
            context: Template context shared by the whole batch.

        Returns:
            Written paths, in the order of *files*.  The first failure
            propagates; files already written are left on disk.
        """
        out_base = Path(output_dir)
        return list(
            await asyncio.gather(
                *(
                    self.render_to_file(template, out_base / target, context)
                    for template, target in files.items()
                )
            )
        )

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*."""
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )
