"""Unit tests for the developer CLI."""

import json

import pytest
from click.testing import CliRunner

from ajax_response.cli import VERBS, main, replay


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCodesCommand:
    """Test the command code table."""

    def test_table(self, runner: CliRunner):
        result = runner.invoke(main, ["codes"])

        assert result.exit_code == 0
        assert "ASSIGN" in result.output
        assert "nop" in result.output

    def test_json(self, runner: CliRunner):
        result = runner.invoke(main, ["codes", "--format", "json"])

        assert result.exit_code == 0
        codes = json.loads(result.output)
        assert codes["SCRIPT"] == "js"
        assert codes["DOM_APPEND_TEXT"] == "DAT"


class TestRenderCommand:
    """Test replaying verb documents."""

    def test_render_from_stdin(self, runner: CliRunner):
        document = {
            "return_value": 42,
            "commands": [
                {"verb": "assign", "args": ["status", "innerHTML", "Saved"]},
                {"verb": "script", "args": ["a()"]},
                {"verb": "redirect", "args": ["/done?x=a b"], "kwargs": {"delay": 1}},
            ],
        }

        result = runner.invoke(main, ["render", "-"], input=json.dumps(document))

        assert result.exit_code == 0, result.output
        envelope = json.loads(result.output)
        assert envelope["xjxrv"] == 42
        assert envelope["xjxobj"] == [
            {"cmd": "as", "id": "status", "prop": "innerHTML", "data": "Saved"},
            {
                "cmd": "js",
                "data": "a(); window.setTimeout(\"window.location = '/done?x=a%20b';\",1000);",
            },
        ]

    def test_render_from_file_with_indent(self, runner: CliRunner, tmp_path):
        path = tmp_path / "verbs.json"
        path.write_text(json.dumps({"commands": [{"verb": "alert", "args": ["hi"]}]}))

        result = runner.invoke(main, ["render", str(path), "--indent", "2"])

        assert result.exit_code == 0
        assert result.output.startswith("{\n  ")
        assert json.loads(result.output) == {"xjxobj": [{"cmd": "al", "data": "hi"}]}

    def test_unknown_verb_is_usage_error(self, runner: CliRunner):
        document = {"commands": [{"verb": "add_command", "args": [{"cmd": "x"}]}]}

        result = runner.invoke(main, ["render", "-"], input=json.dumps(document))

        assert result.exit_code == 2
        assert "Unknown verb at commands[0]" in result.output

    def test_bad_arguments_are_usage_error(self, runner: CliRunner):
        document = {"commands": [{"verb": "assign", "args": ["only-one"]}]}

        result = runner.invoke(main, ["render", "-"], input=json.dumps(document))

        assert result.exit_code == 2
        assert "Bad arguments for assign" in result.output

    def test_invalid_json(self, runner: CliRunner):
        result = runner.invoke(main, ["render", "-"], input="{not json")

        assert result.exit_code == 1
        assert "Invalid verb document" in result.output

    def test_document_must_be_object(self, runner: CliRunner):
        result = runner.invoke(main, ["render", "-"], input="[]")

        assert result.exit_code == 1


class TestReplay:
    """Test the verb replay helper."""

    def test_verbs_cover_public_queue_api(self):
        assert {"assign", "redirect", "dom_append_text", "clear_commands"} <= VERBS
        assert "add_command" not in VERBS
        assert "_include_attributes" not in VERBS

    def test_replay_clear_commands(self):
        response = replay({"commands": [{"verb": "script", "args": ["a()"]}, {"verb": "clear_commands"}]})

        assert [c.cmd for c in response.commands] == ["js", "nop"]
