"""Tests for asyncdoc.core.schema.builder module."""

from datetime import date
from decimal import Decimal
from uuid import UUID

import pytest
from payloads import (
    Address,
    Containers,
    Contact,
    Customer,
    Directory,
    ExampleTopic1,
    Husband,
    MapTopic,
    Messy,
    NestedTopic,
    Order,
    Primitives,
    TreeNode,
)

from asyncdoc.core.descriptors import build_descriptor
from asyncdoc.core.exceptions import NameCollisionError
from asyncdoc.core.schema import SchemaBuilder, SchemaRegistry


def expand(*targets, strict=False, source=None):
    builder = SchemaBuilder(source, strict=strict)
    registry = builder.expand_all(targets, SchemaRegistry())
    return registry.to_dict(), builder


class TestPrimitiveFields:
    """Test primitive field mapping."""

    @pytest.fixture
    def properties(self):
        schemas, _ = expand(Primitives)
        return schemas["Primitives"]["properties"]

    def test_scalars(self, properties):
        """Test each primitive class maps to its JSON type."""
        assert properties["flag"] == {"type": "boolean"}
        assert properties["count"] == {"type": "integer"}
        assert properties["ratio"] == {"type": "number"}
        assert properties["price"] == {"type": "number"}
        assert properties["text"] == {"type": "string"}
        assert properties["raw"] == {"type": "string"}

    def test_formats(self, properties):
        """Test UUID, date and datetime carry a format."""
        assert properties["ident"] == {"type": "string", "format": "uuid"}
        assert properties["day"] == {"type": "string", "format": "date"}
        assert properties["moment"] == {"type": "string", "format": "date-time"}

    def test_nullable_primitives(self, properties):
        """Test nullable primitives become a two-element type list."""
        assert properties["maybe_count"] == {"type": ["null", "integer"]}
        assert properties["maybe_moment"] == {
            "type": ["null", "string"],
            "format": "date-time",
        }

    def test_field_order_is_declaration_order(self, properties):
        """Test properties keep the declared field order."""
        assert list(properties) == [
            "flag",
            "count",
            "maybe_count",
            "ratio",
            "price",
            "text",
            "raw",
            "ident",
            "day",
            "moment",
            "maybe_moment",
        ]

    def test_primitives_are_not_registered(self):
        """Test primitive field types never become schema entries."""
        schemas, _ = expand(Primitives)
        assert list(schemas) == ["Primitives"]


class TestContainerFields:
    """Test sequence and mapping field mapping."""

    @pytest.fixture
    def properties(self):
        schemas, _ = expand(Containers)
        return schemas["Containers"]["properties"]

    def test_sequences(self, properties):
        """Test sets and homogeneous tuples are arrays of their item type."""
        assert properties["tags"] == {"type": "array", "items": {"type": "string"}}
        assert properties["scores"] == {"type": "array", "items": {"type": "integer"}}

    def test_heterogeneous_tuple_uses_placeholder(self, properties):
        """Test a tuple with mixed item types gets a generic item schema."""
        assert properties["pair"] == {"type": "array", "items": {"type": "object"}}

    def test_nested_sequences(self, properties):
        """Test arrays of arrays and nullable items."""
        assert properties["matrix"] == {
            "type": "array",
            "items": {"type": "array", "items": {"type": "integer"}},
        }
        assert properties["sparse"] == {
            "type": "array",
            "items": {"type": ["null", "integer"]},
        }

    def test_unresolvable_items_use_placeholder(self, properties):
        """Test list[Any] and bare list keep the field with a generic item."""
        assert properties["anything"] == {"type": "array", "items": {"type": "object"}}
        assert properties["bare"] == {"type": "array", "items": {"type": "object"}}

    def test_abstract_sequence_of_objects(self, properties):
        """Test Sequence[Address] references the Address schema."""
        assert properties["items"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/Address"},
        }

    def test_mapping_key_and_value(self, properties):
        """Test mappings are objects with key and value properties."""
        assert properties["lookup"] == {
            "type": "object",
            "properties": {
                "key": {"type": "string", "format": "uuid"},
                "value": {"type": "array", "items": {"type": "integer"}},
            },
        }

    def test_bare_mapping_uses_placeholders(self, properties):
        """Test a bare dict gets generic key and value schemas."""
        assert properties["untyped"] == {
            "type": "object",
            "properties": {"key": {"type": "object"}, "value": {"type": "object"}},
        }


class TestNestedObjects:
    """Test nested object expansion."""

    def test_list_of_objects(self):
        """Test a list of objects references the item schema and registers it."""
        schemas, _ = expand(NestedTopic)
        assert list(schemas) == ["NestedTopic", "Contact"]
        assert schemas["NestedTopic"]["properties"]["contacts"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/Contact"},
        }

    def test_map_of_objects(self):
        """Test a map value type is registered as its own schema."""
        schemas, _ = expand(MapTopic)
        assert schemas["MapTopic"]["properties"]["contacts"]["properties"]["value"] == {
            "$ref": "#/components/schemas/Contact"
        }
        assert schemas["Contact"] == {
            "type": "object",
            "properties": {
                "name": {"type": "string"},
                "lastname": {"type": "string"},
                "deleted": {"type": "boolean"},
            },
        }

    def test_nullable_reference_has_no_null_marker(self):
        """Test nullability is dropped on references."""
        schemas, _ = expand(Order)
        assert schemas["Order"]["properties"]["shipping"] == {
            "$ref": "#/components/schemas/Address"
        }

    def test_shared_type_registered_once(self):
        """Test a type reached through several fields has a single entry."""
        schemas, _ = expand(Order)
        assert list(schemas) == ["Order", "Address"]
        properties = schemas["Order"]["properties"]
        assert properties["billing"] == properties["shipping"]
        assert properties["history"]["items"] == properties["billing"]

    def test_shared_type_across_payloads(self):
        """Test two payloads sharing a nested type produce one entry for it."""
        schemas, _ = expand(NestedTopic, MapTopic)
        assert list(schemas) == ["NestedTopic", "Contact", "MapTopic"]

    def test_pydantic_model(self):
        """Test pydantic models expand like dataclasses."""
        schemas, _ = expand(Customer)
        assert schemas["Customer"]["properties"] == {
            "id": {"type": "string", "format": "uuid"},
            "email": {"type": ["null", "string"]},
            "created_at": {"type": "string", "format": "date-time"},
            "score": {"type": "number"},
            "address": {"$ref": "#/components/schemas/Address"},
        }
        assert "Address" in schemas


class TestCycles:
    """Test self-referential and mutually recursive types."""

    def test_self_reference_terminates(self):
        """Test a type referring to itself yields one entry."""
        schemas, _ = expand(TreeNode)
        assert list(schemas) == ["TreeNode"]
        properties = schemas["TreeNode"]["properties"]
        assert properties["children"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/TreeNode"},
        }
        assert properties["parent"] == {"$ref": "#/components/schemas/TreeNode"}

    def test_mutual_recursion_terminates(self):
        """Test two types referring to each other yield one entry each."""
        schemas, _ = expand(Husband)
        assert list(schemas) == ["Husband", "Wife"]
        assert schemas["Husband"]["properties"]["wife"] == {"$ref": "#/components/schemas/Wife"}
        assert schemas["Wife"]["properties"]["husband"] == {
            "$ref": "#/components/schemas/Husband"
        }

    def test_no_reservation_left_pending(self):
        """Test every reserved slot is completed."""
        builder = SchemaBuilder()
        registry = SchemaRegistry()
        builder.expand(Husband, registry)
        assert not any(registry.is_pending(name) for name in registry)


class TestRootExpansion:
    """Test expand() called on non-structural targets."""

    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            (int, {"int": {"type": "integer"}}),
            (str, {"str": {"type": "string"}}),
            (bool, {"bool": {"type": "boolean"}}),
            (float, {"float": {"type": "number"}}),
            (date, {"date": {"type": "string", "format": "date"}}),
            (list, {"list": {"type": "array", "items": {"type": "object"}}}),
            (
                dict,
                {
                    "dict": {
                        "type": "object",
                        "properties": {"key": {"type": "object"}, "value": {"type": "object"}},
                    }
                },
            ),
            (complex, {"complex": {"type": "object", "properties": {}}}),
        ],
    )
    def test_builtin_leaf_root_registers_itself(self, target, expected):
        """Test a built-in expanded directly yields exactly one entry for itself."""
        schemas, builder = expand(target)
        assert schemas == expected
        assert builder.diagnostics == []

    def test_builtin_leaf_root_alongside_payload(self):
        """Test a directly expanded int does not disturb field-level primitives."""
        schemas, _ = expand(Primitives, int)
        assert list(schemas) == ["Primitives", "int"]
        assert schemas["Primitives"]["properties"]["count"] == {"type": "integer"}

    def test_decimal_root_registers_primitive(self):
        """Test a scalar class outside the leaf set registers its primitive schema."""
        schemas, _ = expand(Decimal)
        assert schemas == {"Decimal": {"type": "number"}}

    def test_uuid_root_registers_primitive(self):
        schemas, _ = expand(UUID)
        assert schemas == {"UUID": {"type": "string", "format": "uuid"}}

    def test_expansion_is_idempotent(self):
        """Test expanding the same type twice changes nothing."""
        builder = SchemaBuilder()
        registry = SchemaRegistry()
        builder.expand(ExampleTopic1, registry)
        first = registry.to_dict()
        builder.expand(ExampleTopic1, registry)
        assert registry.to_dict() == first
        assert builder.diagnostics == []


class TestUnresolvableFields:
    """Test fields whose type can't be resolved."""

    def test_fields_are_omitted(self):
        """Test Any, multi-type unions, missing forward refs and complex are left out."""
        schemas, _ = expand(Messy)
        assert schemas["Messy"]["properties"] == {"ok": {"type": "string"}}

    def test_diagnostics_recorded(self):
        """Test each omitted field is reported."""
        _, builder = expand(Messy)
        assert [d.kind for d in builder.diagnostics] == ["unresolvable_field"] * 4
        assert [d.subject for d in builder.diagnostics] == [
            "Messy.anything",
            "Messy.either",
            "Messy.ghost",
            "Messy.span",
        ]

    def test_every_reference_resolves(self):
        """Test all $ref values point at registered entries."""
        schemas, _ = expand(Messy, Containers, Order, Customer, TreeNode)

        def refs(node):
            if isinstance(node, dict):
                for key, value in node.items():
                    if key == "$ref":
                        yield value
                    else:
                        yield from refs(value)

        for ref in refs(schemas):
            assert ref.removeprefix("#/components/schemas/") in schemas


class TestNameCollisions:
    """Test two distinct types with the same bare name."""

    def test_first_registration_wins(self):
        """Test the first Contact keeps the slot."""
        schemas, _ = expand(Directory)
        assert list(schemas) == ["Directory", "Contact"]
        assert list(schemas["Contact"]["properties"]) == ["name", "lastname", "deleted"]
        assert schemas["Directory"]["properties"]["leads"]["items"] == {
            "$ref": "#/components/schemas/Contact"
        }

    def test_collision_reported(self):
        """Test the clash is reported with both qualified names."""
        _, builder = expand(Directory)
        assert len(builder.diagnostics) == 1
        diagnostic = builder.diagnostics[0]
        assert diagnostic.kind == "name_collision"
        assert diagnostic.subject == "Contact"
        assert "crm.models.Contact" in diagnostic.message
        assert "payloads.Contact" in diagnostic.message

    def test_strict_mode_raises(self):
        """Test strict mode fails on the clash."""
        with pytest.raises(NameCollisionError) as exc_info:
            expand(Directory, strict=True)
        assert exc_info.value.name == "Contact"
        assert exc_info.value.existing == "payloads.Contact"
        assert exc_info.value.incoming == "crm.models.Contact"

    def test_same_type_twice_is_not_a_collision(self):
        schemas, builder = expand(Contact, Contact, strict=True)
        assert list(schemas) == ["Contact"]
        assert builder.diagnostics == []


class TestHandBuiltDescriptors:
    """Test expansion of descriptors built without a backing class."""

    def test_nested_descriptors(self):
        """Test descriptor-typed fields become references."""
        item = build_descriptor("LineItem", {"sku": str, "quantity": int})
        invoice = build_descriptor(
            "Invoice", [("id", UUID), ("items", list[item]), ("billing", Address | None)]
        )
        schemas, _ = expand(invoice)
        assert list(schemas) == ["Invoice", "LineItem", "Address"]
        assert schemas["Invoice"]["properties"]["items"] == {
            "type": "array",
            "items": {"$ref": "#/components/schemas/LineItem"},
        }
        assert schemas["LineItem"]["properties"] == {
            "sku": {"type": "string"},
            "quantity": {"type": "integer"},
        }

    def test_registered_descriptor_overrides_introspection(self, source):
        """Test an explicit registration controls name and fields."""
        source.register(Address, {"line": str}, name="PostalAddress")
        schemas, _ = expand(Order, source=source)
        assert list(schemas) == ["Order", "PostalAddress"]
        assert schemas["Order"]["properties"]["billing"] == {
            "$ref": "#/components/schemas/PostalAddress"
        }
        assert schemas["PostalAddress"]["properties"] == {"line": {"type": "string"}}
