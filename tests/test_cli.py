"""Integration tests for the flakeinit CLI."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import click
import pytest
from typer.testing import CliRunner

from flakeinit.catalog import Catalog, parse_catalog
from flakeinit.cli import app
from flakeinit.core.config import ProjectConfig, Settings
from flakeinit.core.errors import FetchError, MaterializeError

runner = CliRunner()


@pytest.fixture
def catalog(registry_output: str) -> Catalog:
    return parse_catalog(registry_output)


@pytest.fixture
def mock_fetch(catalog: Catalog):
    with patch("flakeinit.cli.app.fetch_catalog", return_value=catalog) as mock:
        yield mock


@pytest.fixture
def mock_materialize(tmp_path: Path):
    """Stands in for ``nix flake new``: writes a template tree under tmp_path."""

    def generate(config: ProjectConfig, settings: Settings, cwd: Path) -> Path:
        root = config.target_dir(tmp_path)
        (root / "project_name").mkdir(parents=True)
        (root / "project_name" / "main.py").write_text('print("project_name")\n')
        (root / "flake.nix").write_text('{ description = "project_name"; }\n')
        (root / "README.md").write_text("# project_name\n\nTemplate readme.\n")
        (root / "logo.png").write_bytes(b"\x89PNG\xffproject_name")
        return root

    with patch("flakeinit.cli.app.materialize", side_effect=generate) as mock:
        yield mock


class TestRun:
    @pytest.mark.usefixtures("mock_fetch")
    def test_full_run(self, tmp_path: Path, mock_materialize: MagicMock) -> None:
        result = runner.invoke(app, [], input="2\nnew\nacme\nn\ny\n")

        assert result.exit_code == 0, result.output
        root = tmp_path / "acme"
        assert (root / "acme" / "main.py").read_text() == 'print("acme")\n'
        assert (root / "flake.nix").read_text() == '{ description = "acme"; }\n'
        assert (root / "README.md").read_text() == "# acme\n\nLorem ipsum dolor sit amet"
        assert not (root / "project_name").exists()

        config = mock_materialize.call_args.args[0]
        assert config.template_id == "rust"
        assert config.project_name == "acme"

        assert "Failed to read logo.png" in result.output
        assert "1 failed" in result.output
        assert "Done!" in result.output

    @pytest.mark.usefixtures("mock_fetch")
    def test_git_init_failure_is_not_fatal(
        self, tmp_path: Path, mock_materialize: MagicMock
    ) -> None:
        with patch("flakeinit.finalize.run_command", side_effect=FileNotFoundError(2, "missing")):
            result = runner.invoke(app, [], input="1\ninit\nacme\nyes\nno\n")

        assert result.exit_code == 0, result.output
        assert "Failed to run git" in result.output
        assert "Done!" in result.output
        assert (tmp_path / "acme" / "main.py").exists()

    @pytest.mark.usefixtures("mock_fetch")
    def test_shows_selection_and_command(self, mock_materialize: MagicMock) -> None:
        result = runner.invoke(app, [], input="rust-alt\nn\nacme\nn\nn\n")

        assert result.exit_code == 0, result.output
        assert "Project name: acme" in result.output
        assert "flake new --template" in " ".join(result.output.split())

    def test_registry_option_overrides_env(self, mock_fetch: MagicMock) -> None:
        runner.invoke(
            app,
            ["--registry", "path:/cli"],
            input="",
            env={"FLAKEINIT_REGISTRY": "path:/env"},
        )

        settings = mock_fetch.call_args.args[0]
        assert settings.registry == "path:/cli"

    def test_registry_from_env(self, mock_fetch: MagicMock) -> None:
        runner.invoke(app, [], input="", env={"FLAKEINIT_REGISTRY": "path:/env"})

        settings = mock_fetch.call_args.args[0]
        assert settings.registry == "path:/env"


class TestFatalErrors:
    def test_fetch_error(self) -> None:
        with patch("flakeinit.cli.app.fetch_catalog", side_effect=FetchError("nix not found")):
            result = runner.invoke(app, [], input="1\n")

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "nix not found" in result.output

    @pytest.mark.usefixtures("mock_fetch")
    def test_invalid_answer(self, mock_materialize: MagicMock) -> None:
        result = runner.invoke(app, [], input="1\ncreate\n")

        assert result.exit_code == 1
        assert "Invalid input" in result.output
        mock_materialize.assert_not_called()

    @pytest.mark.usefixtures("mock_fetch")
    def test_superscript_digit_answer(self, mock_materialize: MagicMock) -> None:
        result = runner.invoke(app, [], input="²\n")

        assert result.exit_code == 1
        assert "Invalid input" in result.output
        mock_materialize.assert_not_called()

    @pytest.mark.usefixtures("mock_fetch")
    def test_end_of_input(self, mock_materialize: MagicMock) -> None:
        result = runner.invoke(app, [], input="1\n")

        assert result.exit_code == 1
        mock_materialize.assert_not_called()

    @pytest.mark.usefixtures("mock_fetch")
    def test_materialize_error(self) -> None:
        with patch(
            "flakeinit.cli.app.materialize",
            side_effect=MaterializeError("Directory 'acme' already exists."),
        ), patch("flakeinit.cli.app.substitute") as mock_substitute:
            result = runner.invoke(app, [], input="1\nnew\nacme\nn\nn\n")

        assert result.exit_code == 1
        assert "already exists" in result.output
        mock_substitute.assert_not_called()


class TestListTemplates:
    @pytest.mark.usefixtures("mock_fetch")
    def test_lists_and_exits(self, mock_materialize: MagicMock, catalog: Catalog) -> None:
        result = runner.invoke(app, ["--list-templates"])

        assert result.exit_code == 0
        for t in catalog.templates:
            assert t.identifier in result.output
            assert t.description in result.output
        mock_materialize.assert_not_called()

    @pytest.mark.usefixtures("mock_fetch")
    def test_shorthand(self) -> None:
        result = runner.invoke(app, ["-l"])
        assert result.exit_code == 0
        assert "Available templates" in result.output


class TestOptions:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "flakeinit v" in result.output

    def test_help_mentions_options(self) -> None:
        result = runner.invoke(app, ["--help"])
        output = click.unstyle(result.output)
        assert result.exit_code == 0
        assert "--registry" in output
        assert "--list-templates" in output
