"""Tests for the asyncdoc command line interface."""

import json
from pathlib import Path

import yaml

from asyncdoc import __version__
from asyncdoc.cli.commands import generate_cmd, schema_cmd
from asyncdoc.cli.main import app

CONFIG = """\
[tool.asyncdoc]
title = "Configured"

[tool.asyncdoc.senders]
test_topic1 = "payloads.ExampleTopic1"

[tool.asyncdoc.receivers]
test_topic2 = "payloads:ExampleTopic2"
"""


class TestMainApp:
    """Test the top-level app."""

    def test_version(self, runner):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_generate_through_main_app(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(app, ["generate", "-s", "pings=payloads.Contact"])
        assert result.exit_code == 0
        assert "produceContact:" in result.stdout


class TestGenerate:
    """Test the generate command."""

    def test_bindings_from_options(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(
                generate_cmd.app,
                [
                    "--sender",
                    "test_topic1=payloads.ExampleTopic1",
                    "--receiver",
                    "test_topic2=payloads.ExampleTopic2",
                ],
            )
        assert result.exit_code == 0
        document = yaml.safe_load(result.stdout)
        assert list(document["operations"]) == ["produceExampleTopic1", "consumeExampleTopic2"]
        assert list(document["components"]["schemas"]) == ["ExampleTopic1", "ExampleTopic2"]

    def test_bindings_from_config(self, runner, tmp_path):
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text(CONFIG)
        result = runner.invoke(generate_cmd.app, ["--config", str(config_file), "-f", "json"])
        assert result.exit_code == 0
        document = json.loads(result.stdout)
        assert document["info"]["title"] == "Configured"
        assert list(document["channels"]) == ["test_topic1", "test_topic2"]

    def test_option_overrides_config_binding(self, runner, tmp_path):
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text(CONFIG)
        result = runner.invoke(
            generate_cmd.app,
            ["-c", str(config_file), "-s", "test_topic1=payloads.NestedTopic"],
        )
        assert result.exit_code == 0
        document = yaml.safe_load(result.stdout)
        assert "produceNestedTopic" in document["operations"]
        assert "produceExampleTopic1" not in document["operations"]

    def test_output_file(self, runner, tmp_path):
        output = tmp_path / "docs" / "asyncapi.yaml"
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(
                generate_cmd.app, ["-r", "maps=payloads.MapTopic", "--output", str(output)]
            )
        assert result.exit_code == 0
        assert output.exists()
        assert yaml.safe_load(output.read_text())["operations"] == {
            "consumeMapTopic": {"action": "receive", "channel": {"$ref": "#/channels/maps"}}
        }

    def test_invalid_binding(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(generate_cmd.app, ["-s", "payloads.ExampleTopic1"])
        assert result.exit_code != 0

    def test_unresolvable_type(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(generate_cmd.app, ["-s", "a=payloads.DoesNotExist"])
        assert result.exit_code == 1
        assert "DoesNotExist" in result.output

    def test_unknown_format(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(
                generate_cmd.app, ["-s", "a=payloads.Contact", "--format", "xml"]
            )
        assert result.exit_code == 1

    def test_collision_warns(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(generate_cmd.app, ["-s", "dir=payloads.Directory"])
        assert result.exit_code == 0
        assert "name_collision" in result.output

    def test_collision_strict(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(
                generate_cmd.app, ["-s", "dir=payloads.Directory", "--strict"]
            )
        assert result.exit_code == 1
        assert "crm.models.Contact" in result.output

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(generate_cmd.app, ["--config", str(tmp_path / "nope.toml")])
        assert result.exit_code == 1


class TestSchema:
    """Test the schema command."""

    def test_schema_yaml(self, runner):
        result = runner.invoke(schema_cmd.app, ["payloads.NestedTopic"])
        assert result.exit_code == 0
        schemas = yaml.safe_load(result.stdout)
        assert list(schemas) == ["NestedTopic", "Contact"]

    def test_schema_json(self, runner):
        result = runner.invoke(schema_cmd.app, ["--format", "json", "payloads:TreeNode"])
        assert result.exit_code == 0
        assert list(json.loads(result.stdout)) == ["TreeNode"]

    def test_schema_unknown_type(self, runner):
        result = runner.invoke(schema_cmd.app, ["payloads.Nope"])
        assert result.exit_code == 1


class TestConfigShow:
    """Test the config show command."""

    def test_show_all(self, runner, tmp_path):
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text(CONFIG)
        result = runner.invoke(app, ["config", "show", "--config", str(config_file)])
        assert result.exit_code == 0
        settings = yaml.safe_load(result.stdout)
        assert settings["title"] == "Configured"
        assert settings["receivers"] == {"test_topic2": "payloads:ExampleTopic2"}

    def test_show_key(self, runner, tmp_path):
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text(CONFIG)
        result = runner.invoke(app, ["config", "show", "senders", "-c", str(config_file)])
        assert result.exit_code == 0
        assert yaml.safe_load(result.stdout) == {
            "senders": {"test_topic1": "payloads.ExampleTopic1"}
        }

    def test_show_unknown_key(self, runner, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(app, ["config", "show", "nope"])
        assert result.exit_code == 1


def test_output_file_parent_created(runner, tmp_path):
    output = tmp_path / "a" / "b" / "doc.json"
    with runner.isolated_filesystem(temp_dir=tmp_path):
        result = runner.invoke(
            generate_cmd.app, ["-s", "x=payloads.Contact", "-o", str(output), "-f", "json"]
        )
    assert result.exit_code == 0
    assert json.loads(Path(output).read_text())["components"]["schemas"]["Contact"]["type"] == "object"
