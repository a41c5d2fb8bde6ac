"""Unit tests for the create CLI command."""

import json
import tempfile
from pathlib import Path

from typer.testing import CliRunner

from modulegraph import __version__
from modulegraph.cli import app


class TestCreateCLI:
    """Test the create command."""

    def setup_project(self, temp_path: Path, config_data: dict) -> None:
        """Set up a two-module Gradle project with a config file."""
        (temp_path / "settings.gradle.kts").write_text('include(":app")\ninclude(":libs:core")\n')
        (temp_path / "app").mkdir()
        (temp_path / "app" / "build.gradle.kts").write_text(
            'dependencies {\n    implementation(project(":libs:core"))\n}\n'
        )
        (temp_path / ".modulegraph.json").write_text(json.dumps(config_data))

    def test_create_updates_readme(self):
        runner = CliRunner()

        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            self.setup_project(temp_path, {"heading": "## Modules", "readmePath": "README.md"})
            (temp_path / "README.md").write_text("# Demo\n")

            result = runner.invoke(app, ["create", "--project-dir", str(temp_path)])

            assert result.exit_code == 0, result.stdout
            assert "Updated" in result.stdout
            content = (temp_path / "README.md").read_text()
            assert content.startswith("# Demo\n\n## Modules\n```mermaid\n")
            assert "  app --> core\n" in content

    def test_create_missing_readme_exits_with_error(self):
        runner = CliRunner()

        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            self.setup_project(temp_path, {"heading": "## Modules", "readmePath": "README.md"})

            result = runner.invoke(app, ["create", "--project-dir", str(temp_path)])

            assert result.exit_code == 1
            assert "Target document not found" in result.stdout
            assert not (temp_path / "README.md").exists()

    def test_unreadable_readme_reports_error(self):
        runner = CliRunner()

        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            self.setup_project(temp_path, {"heading": "## Modules", "readmePath": "README.md"})
            (temp_path / "README.md").mkdir()

            result = runner.invoke(app, ["create", "--project-dir", str(temp_path)])

            assert result.exit_code == 1
            assert "Error:" in result.stdout
            assert "Failed to read" in result.stdout
            assert (temp_path / "README.md").is_dir()

    def test_create_with_explicit_config(self):
        runner = CliRunner()

        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            self.setup_project(temp_path, {"heading": "## Unused", "readmePath": "README.md"})
            other_config = temp_path / "other.json"
            other_config.write_text(json.dumps({
                "heading": "## Modules",
                "readmePath": "docs/GRAPH.md",
                "createReadmeIfMissing": True,
            }))
            (temp_path / "docs").mkdir()

            result = runner.invoke(app, [
                "create", "--project-dir", str(temp_path), "--config", str(other_config)
            ])

            assert result.exit_code == 0, result.stdout
            assert "Created" in result.stdout
            assert (temp_path / "docs" / "GRAPH.md").read_text().startswith("## Modules\n")

    def test_invalid_config_reports_error(self):
        runner = CliRunner()

        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            self.setup_project(temp_path, {"heading": "## Modules", "readmePath": "README.md",
                                           "orientation": "DIAGONAL"})

            result = runner.invoke(app, ["create", "--project-dir", str(temp_path)])

            assert result.exit_code == 1
            assert "Invalid configuration" in result.stdout

    def test_version(self):
        result = CliRunner().invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout
