"""Tests for asyncdoc.core.document.serializer module."""

import json

import pytest
import yaml

from asyncdoc.core.document import render
from asyncdoc.core.exceptions import ValidationError


@pytest.fixture
def tree():
    shared = {"type": "string"}
    return {
        "asyncapi": "3.0.0",
        "info": {"title": "Kafka Topics", "version": "1.0.0"},
        "components": {
            "schemas": {
                "A": {"type": "object", "properties": {"x": shared, "y": shared}},
                "B": {"type": ["null", "integer"]},
            }
        },
    }


class TestRenderYaml:
    """Test YAML rendering."""

    def test_block_style_and_order(self, tree):
        text = render(tree)
        assert text.splitlines()[:4] == [
            "asyncapi: 3.0.0",
            "info:",
            "  title: Kafka Topics",
            "  version: 1.0.0",
        ]
        assert "{" not in text

    def test_null_member_is_quoted(self, tree):
        assert "- 'null'" in render(tree)

    def test_shared_objects_not_aliased(self, tree):
        """Test repeated sub-trees are written out, not anchored."""
        text = render(tree)
        assert "&" not in text
        assert "*" not in text

    def test_round_trips(self, tree):
        assert yaml.safe_load(render(tree)) == tree

    def test_deterministic(self, tree):
        assert render(tree) == render(tree)

    def test_long_values_not_folded(self):
        description = "Channel for " + "VeryLongTypeName" * 20 + " events."
        text = render({"description": description})
        assert text == f"description: {description}\n"


class TestRenderJson:
    """Test JSON rendering."""

    def test_json(self, tree):
        text = render(tree, "json")
        assert json.loads(text) == tree
        assert text.endswith("}\n")
        assert list(json.loads(text)) == ["asyncapi", "info", "components"]


class TestRenderErrors:
    def test_unknown_format(self, tree):
        with pytest.raises(ValidationError) as exc_info:
            render(tree, "xml")
        assert exc_info.value.field == "output_format"
        assert exc_info.value.value == "xml"
