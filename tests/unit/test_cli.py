"""Unit tests for the erdkit CLI."""

import json

from typer.testing import CliRunner

from erdkit import __version__
from erdkit.cli import app


class TestRenderCLI:
    """Test the render command."""

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_render_mermaid_to_stdout(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, ["render", str(shop_document_file)])

        assert result.exit_code == 0
        assert "erDiagram" in result.stdout
        assert "User ||--o{ Order" in result.stdout

    def test_render_yuml(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, ["render", str(shop_document_file), "--format", "yuml"])

        assert result.exit_code == 0
        assert result.stdout.strip() == "[User] 1-*> [Order]"

    def test_render_with_only(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, ["render", str(shop_document_file), "--only", "User"])

        assert result.exit_code == 0
        assert "Address" not in result.stdout

    def test_render_with_attributes(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, [
            "render", str(shop_document_file), "-a", "primary_keys", "-a", "timestamps"
        ])

        assert result.exit_code == 0
        assert "integer id PK" in result.stdout
        assert "datetime created_at" in result.stdout

    def test_render_to_file(self, shop_document_file, tmp_path):
        runner = CliRunner()
        output = tmp_path / "shop.mmd"
        result = runner.invoke(app, ["render", str(shop_document_file), "--out", str(output)])

        assert result.exit_code == 0
        assert "Diagram generated" in result.stdout
        assert output.read_text(encoding="utf-8").startswith('---\ntitle: "Domain model"\n')

    def test_render_to_directory(self, shop_document_file, tmp_path):
        runner = CliRunner()
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        result = runner.invoke(app, ["render", str(shop_document_file), "-f", "yuml", "-o", str(out_dir)])

        assert result.exit_code == 0
        assert (out_dir / "Shop.yuml").exists()

    def test_invalid_format(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, ["render", str(shop_document_file), "--format", "graphviz"])

        assert result.exit_code == 1
        assert "Invalid format" in result.stdout

    def test_missing_domain_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(app, ["render", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Error" in result.stdout

    def test_everything_excluded(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, [
            "render", str(shop_document_file),
            "--exclude", "User", "--exclude", "Order", "--exclude", "Address",
        ])

        assert result.exit_code == 1
        assert "No entities found" in result.stdout

    def test_config_file_defaults(self, shop_document_file, tmp_path):
        config_path = tmp_path / "erdkit.json"
        config_path.write_text(json.dumps({"diagram": {"indirect": False, "title": "From config"}}))

        runner = CliRunner()
        result = runner.invoke(app, ["render", str(shop_document_file), "--config", str(config_path)])

        assert result.exit_code == 0
        assert 'title: "From config"' in result.stdout
        assert "}o..o{" not in result.stdout

    def test_command_line_overrides_config(self, shop_document_file, tmp_path):
        config_path = tmp_path / "erdkit.json"
        config_path.write_text(json.dumps({"diagram": {"indirect": False}}))

        runner = CliRunner()
        result = runner.invoke(app, [
            "render", str(shop_document_file), "--config", str(config_path), "--indirect"
        ])

        assert result.exit_code == 0
        assert "}o..o{" in result.stdout

    def test_invalid_config(self, shop_document_file, tmp_path):
        config_path = tmp_path / "erdkit.json"
        config_path.write_text(json.dumps({"diagram": {"colour": "blue"}}))

        runner = CliRunner()
        result = runner.invoke(app, ["render", str(shop_document_file), "--config", str(config_path)])

        assert result.exit_code == 1
        assert "Failed to load config" in result.stdout


class TestEntitiesCLI:
    """Test the entities command."""

    def test_list_entities(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, ["entities", str(shop_document_file)])

        assert result.exit_code == 0
        assert "User" in result.stdout
        assert "3 entities, 2 relationships, 0 specializations" in result.stdout

    def test_list_entities_with_only(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, ["entities", str(shop_document_file), "--only", "User"])

        assert result.exit_code == 0
        assert "2 entities, 1 relationships" in result.stdout

    def test_list_entities_without_indirect(self, shop_document_file):
        runner = CliRunner()
        result = runner.invoke(app, ["entities", str(shop_document_file), "--no-indirect"])

        assert result.exit_code == 0
        assert "3 entities, 1 relationships, 0 specializations" in result.stdout
