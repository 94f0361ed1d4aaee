"""Tests for the Jinja2 TemplateRenderer.

Covers:
- Default template directory and template listing
- Inline rendering, missing keys, the dns_label filter
- GitHub expression escaping
- Async rendering to files and batch rendering
"""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import TemplateNotFound

from spa_scaffold.generators.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def custom_renderer(tmp_path: Path) -> TemplateRenderer:
    """Renderer backed by a throwaway template directory."""
    (tmp_path / "one.txt.j2").write_text("one={{ value }}\n", encoding="utf-8")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "two.txt.j2").write_text("two={{ value }}\n", encoding="utf-8")
    return TemplateRenderer(tmp_path)


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


class TestTemplateDiscovery:
    def test_default_directory_exists(self, renderer):
        assert renderer.template_dir.is_dir()

    def test_terraform_templates(self, renderer):
        assert renderer.list_templates("terraform") == [
            "terraform/README.md.j2",
            "terraform/main.tf.j2",
            "terraform/modules/cloudfront-s3/main.tf.j2",
            "terraform/modules/cloudfront-s3/outputs.tf.j2",
            "terraform/modules/cloudfront-s3/variables.tf.j2",
            "terraform/outputs.tf.j2",
            "terraform/variables.tf.j2",
        ]

    def test_github_templates(self, renderer):
        assert renderer.list_templates("github") == [
            "github/DEPLOYMENT.md.j2",
            "github/deploy.yml.j2",
        ]

    def test_missing_prefix(self, renderer):
        assert renderer.list_templates("nonexistent") == []

    def test_missing_template(self, renderer):
        with pytest.raises(TemplateNotFound):
            renderer.render("terraform/nope.tf.j2", {})


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRenderString:
    def test_basic(self, renderer):
        assert renderer.render_string("bucket-{{ name }}", {"name": "app"}) == "bucket-app"

    def test_missing_key_is_empty_and_falsy(self, renderer):
        template = "[{{ domain }}]{% if domain %}custom{% endif %}"
        assert renderer.render_string(template, {}) == "[]"

    def test_no_html_escaping(self, renderer):
        assert renderer.render_string("{{ v }}", {"v": "<a & b>"}) == "<a & b>"

    def test_string_and_file_templates_agree(self, custom_renderer):
        context = {"value": "npm ci && npm run build > /dev/null"}
        from_file = custom_renderer.render("one.txt.j2", context)
        from_string = custom_renderer.render_string("one={{ value }}\n", context)
        assert from_string == from_file == "one=npm ci && npm run build > /dev/null\n"

    def test_dns_label_filter(self, renderer):
        assert renderer.render_string("{{ n | dns_label }}", {"n": "My App!"}) == "my-app"

    def test_github_expression_escape(self, renderer):
        assert renderer.render_string("{{ '${{' }} secrets.X }}", {}) == "${{ secrets.X }}"

    def test_deterministic(self, renderer):
        context = {
            "project_name": "app",
            "environment": "production",
            "aws_region": "us-east-1",
            "output_directory": "dist",
            "build_tool": "vite",
            "domain_name": "",
            "certificate_arn": "",
            "price_class": "PriceClass_100",
            "module_name": "cloudfront-s3",
            "timestamp": "2024-01-01T00:00:00+00:00",
        }
        assert renderer.render("terraform/main.tf.j2", context) == renderer.render(
            "terraform/main.tf.j2", context
        )


# ---------------------------------------------------------------------------
# File rendering
# ---------------------------------------------------------------------------


class TestRenderToFile:
    async def test_creates_parents(self, custom_renderer, tmp_path):
        target = tmp_path / "out" / "deep" / "one.txt"
        written = await custom_renderer.render_to_file("one.txt.j2", target, {"value": 1})
        assert written == target
        assert target.read_text(encoding="utf-8") == "one=1\n"

    async def test_render_files_preserves_order(self, custom_renderer, tmp_path):
        out = tmp_path / "out"
        written = await custom_renderer.render_files(
            {"nested/two.txt.j2": "b/two.txt", "one.txt.j2": "one.txt"},
            out,
            {"value": "x"},
        )
        assert written == [out / "b" / "two.txt", out / "one.txt"]
        assert (out / "b" / "two.txt").read_text(encoding="utf-8") == "two=x\n"

    async def test_render_files_propagates_failure(self, custom_renderer, tmp_path):
        with pytest.raises(TemplateNotFound):
            await custom_renderer.render_files({"missing.j2": "missing.txt"}, tmp_path / "out", {})
