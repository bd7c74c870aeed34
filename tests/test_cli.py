"""Tests for the command line interface."""

import json

import pytest
from click.testing import CliRunner

from specflow.cli import main
from specflow.service import SpecService
from specflow.workspace import SpecflowWorkspace


@pytest.fixture
def runner():
    return CliRunner()


def generate(runner, project, *extra):
    return runner.invoke(main, [
        "generate", "-p", str(project),
        "-g", "Add dark mode", "-u", "admins", "--no-delay", *extra,
    ])


def stored(project):
    return SpecService.for_project(project).list_specs()


class TestGenerateCommand:
    """Test the generate command."""

    def test_generate(self, runner, tmp_path):
        """Test generating and saving a spec."""
        result = generate(runner, tmp_path)

        assert result.exit_code == 0, result.output
        assert "Generated 5 stories and 23 tasks" in result.output
        assert len(stored(tmp_path)) == 1

    def test_dry_run(self, runner, tmp_path):
        """Test that a dry run saves nothing."""
        result = generate(runner, tmp_path, "--dry-run")

        assert result.exit_code == 0, result.output
        assert "Dry run complete" in result.output
        assert stored(tmp_path) == []

    def test_template_option(self, runner, tmp_path):
        """Test choosing a template."""
        result = generate(runner, tmp_path, "-t", "mobile")

        assert result.exit_code == 0, result.output
        assert len(stored(tmp_path)[0].tasks) == 24

    def test_blank_goal(self, runner, tmp_path):
        """Test that a blank goal is a validation error."""
        result = runner.invoke(main, [
            "generate", "-p", str(tmp_path), "-g", "   ", "-u", "admins", "--no-delay",
        ])

        assert result.exit_code == 1
        assert "Validation error" in result.output
        assert stored(tmp_path) == []

    def test_prompts_for_missing_input(self, runner, tmp_path):
        """Test interactive prompts."""
        result = runner.invoke(
            main,
            ["generate", "-p", str(tmp_path), "--no-delay"],
            input="Add dark mode\nadmins\n",
        )

        assert result.exit_code == 0, result.output
        assert stored(tmp_path)[0].goal == "Add dark mode"


class TestBrowseCommands:
    """Test list, show and export."""

    def test_list_empty(self, runner, tmp_path):
        """Test listing with no specs."""
        result = runner.invoke(main, ["list", "-p", str(tmp_path)])
        assert result.exit_code == 0
        assert "No specs yet" in result.output

    def test_list(self, runner, tmp_path):
        """Test listing saved specs."""
        generate(runner, tmp_path)
        result = runner.invoke(main, ["list", "-p", str(tmp_path)])

        assert result.exit_code == 0
        assert stored(tmp_path)[0].id[:8] in result.output

    def test_show_by_prefix(self, runner, tmp_path):
        """Test showing a spec by ID prefix."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]

        result = runner.invoke(main, ["show", "-p", str(tmp_path), spec.id[:8]])

        assert result.exit_code == 0, result.output
        assert "Add dark mode" in result.output

    def test_show_unknown(self, runner, tmp_path):
        """Test that unknown IDs exit with an error."""
        result = runner.invoke(main, ["show", "-p", str(tmp_path), "missing"])
        assert result.exit_code == 1
        assert "No spec matches" in result.output

    def test_export_stdout(self, runner, tmp_path):
        """Test exporting to stdout."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]

        result = runner.invoke(main, ["export", "-p", str(tmp_path), spec.id, "-f", "text"])

        assert result.exit_code == 0, result.output
        assert result.output.startswith("Add dark mode\n")
        assert "RISKS & UNKNOWNS" in result.output

    def test_export_auto_filename(self, runner, tmp_path):
        """Test exporting to a derived filename."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]

        result = runner.invoke(main, ["export", "-p", str(tmp_path), spec.id, "-o", "auto"])

        assert result.exit_code == 0, result.output
        output_file = tmp_path / "add_dark_mode_spec.md"
        assert output_file.read_text().startswith("# Add dark mode")


class TestEditCommands:
    """Test commands that change stored specs."""

    def test_delete(self, runner, tmp_path):
        """Test deleting a spec."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]

        result = runner.invoke(main, ["delete", "-p", str(tmp_path), spec.id, "--yes"])

        assert result.exit_code == 0, result.output
        assert stored(tmp_path) == []

    def test_delete_cancelled(self, runner, tmp_path):
        """Test declining the confirmation."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]

        result = runner.invoke(main, ["delete", "-p", str(tmp_path), spec.id], input="n\n")

        assert "Cancelled" in result.output
        assert len(stored(tmp_path)) == 1

    def test_edit_item(self, runner, tmp_path):
        """Test editing a task."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]
        task = spec.tasks[0]

        result = runner.invoke(main, [
            "edit-item", "-p", str(tmp_path), spec.id, task.id,
            "--title", "Renamed task", "--priority", "low",
        ])

        assert result.exit_code == 0, result.output
        item = stored(tmp_path)[0].find_item(task.id)
        assert item.title == "Renamed task"
        assert item.priority.value == "low"

    def test_edit_item_invalid_priority(self, runner, tmp_path):
        """Test that click rejects unknown priorities."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]

        result = runner.invoke(main, [
            "edit-item", "-p", str(tmp_path), spec.id, spec.tasks[0].id, "--priority", "urgent",
        ])

        assert result.exit_code == 2

    def test_edit_item_unknown(self, runner, tmp_path):
        """Test editing an unknown item."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]

        result = runner.invoke(main, ["edit-item", "-p", str(tmp_path), spec.id, "missing", "--title", "x"])

        assert result.exit_code == 1
        assert "No single item matches" in result.output

    def test_remove_item(self, runner, tmp_path):
        """Test removing a story."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]
        story = spec.stories[0]

        result = runner.invoke(main, ["remove-item", "-p", str(tmp_path), spec.id, story.id])

        assert result.exit_code == 0, result.output
        assert stored(tmp_path)[0].find_item(story.id) is None

    def test_move_item(self, runner, tmp_path):
        """Test reordering tasks."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]
        first, second = spec.tasks[0].id, spec.tasks[1].id

        result = runner.invoke(main, ["move-item", "-p", str(tmp_path), spec.id, second, first])

        assert result.exit_code == 0, result.output
        assert [t.id for t in stored(tmp_path)[0].tasks[:2]] == [second, first]

    def test_edit_risk(self, runner, tmp_path):
        """Test editing a risk."""
        generate(runner, tmp_path)
        spec = stored(tmp_path)[0]
        risk = spec.risks[0]

        result = runner.invoke(main, ["edit-risk", "-p", str(tmp_path), spec.id, risk.id, "Scope is frozen"])

        assert result.exit_code == 0, result.output
        assert stored(tmp_path)[0].find_risk(risk.id).text == "Scope is frozen"


class TestConfigCommand:
    """Test the config command."""

    def test_show_defaults(self, runner, tmp_path):
        """Test showing default configuration."""
        result = runner.invoke(main, ["config", "-p", str(tmp_path)])
        assert result.exit_code == 0
        assert "max_saved_specs: 5" in result.output

    def test_set_values(self, runner, tmp_path):
        """Test changing configuration."""
        result = runner.invoke(main, ["config", "-p", str(tmp_path), "--max-specs", "3", "--delay", "0"])

        assert result.exit_code == 0, result.output
        data = json.loads(SpecflowWorkspace(tmp_path).config_file.read_text())
        assert data["max_saved_specs"] == 3
        assert data["generation_delay_seconds"] == 0

    def test_invalid_value(self, runner, tmp_path):
        """Test that out of range values are rejected."""
        result = runner.invoke(main, ["config", "-p", str(tmp_path), "--max-specs", "0"])

        assert result.exit_code == 1
        assert "Validation error" in result.output
        assert not SpecflowWorkspace(tmp_path).config_file.exists()
