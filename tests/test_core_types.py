"""Tests for core/types.py module.

Covers:
- PropItem / ComponentDoc serialization
- StaticPropFilter construction from mappings
- ParserOptions prop filter normalization
"""

from tsdocgen.core.types import (
    DEFAULT_PARSER_OPTIONS,
    Component,
    ComponentDoc,
    DefaultValue,
    JSDoc,
    ParserOptions,
    PropItem,
    PropItemType,
    StaticPropFilter,
)


class TestPropItem:
    """Tests for PropItem serialization."""

    def test_to_dict_uses_camel_case_keys(self):
        """Output keys follow the documented camelCase shape."""
        prop = PropItem(
            name="disabled",
            required=False,
            type=PropItemType("boolean"),
            description="",
            default_value=DefaultValue("false"),
        )

        assert prop.to_dict() == {
            "name": "disabled",
            "required": False,
            "type": {"name": "boolean"},
            "description": "",
            "defaultValue": {"value": "false"},
        }

    def test_missing_default_is_none(self):
        """A prop without default serializes defaultValue as None."""
        prop = PropItem(name="label", required=True, type=PropItemType("string"))
        assert prop.to_dict()["defaultValue"] is None

    def test_type_value_included_when_set(self):
        """PropItemType includes value only when present."""
        assert PropItemType("enum", value=["a", "b"]).to_dict() == {"name": "enum", "value": ["a", "b"]}
        assert PropItemType("string").to_dict() == {"name": "string"}


class TestComponentDoc:
    """Tests for ComponentDoc serialization."""

    def test_to_dict_keeps_prop_order(self):
        """Props are serialized in insertion order."""
        doc = ComponentDoc(
            display_name="Button",
            description="A button",
            props={
                "b": PropItem(name="b", required=True, type=PropItemType("string")),
                "a": PropItem(name="a", required=True, type=PropItemType("number")),
            },
        )

        result = doc.to_dict()

        assert result["displayName"] == "Button"
        assert result["description"] == "A button"
        assert list(result["props"]) == ["b", "a"]


class TestJSDoc:
    """Tests for the JSDoc record."""

    def test_defaults_are_empty(self):
        """An empty JSDoc has empty strings and no tags."""
        doc = JSDoc()
        assert doc.description == ""
        assert doc.full_comment == ""
        assert doc.tags == {}

    def test_instances_do_not_share_tags(self):
        """Each JSDoc gets its own tag map."""
        first, second = JSDoc(), JSDoc()
        first.tags["default"] = "1"
        assert second.tags == {}


class TestStaticPropFilter:
    """Tests for StaticPropFilter.from_dict."""

    def test_accepts_camel_case_keys(self):
        """camelCase keys match the documented option names."""
        result = StaticPropFilter.from_dict({"skipPropsWithName": ["a"], "skipPropsWithoutDoc": True})
        assert result.skip_props_with_name == ["a"]
        assert result.skip_props_without_doc is True

    def test_accepts_snake_case_keys(self):
        """snake_case keys are accepted too."""
        result = StaticPropFilter.from_dict({"skip_props_with_name": "a"})
        assert result.skip_props_with_name == "a"
        assert result.skip_props_without_doc is False

    def test_round_trips_through_to_dict(self):
        """to_dict output is accepted by from_dict."""
        original = StaticPropFilter(skip_props_with_name=["x"], skip_props_without_doc=True)
        assert StaticPropFilter.from_dict(original.to_dict()) == original


class TestParserOptions:
    """Tests for ParserOptions normalization."""

    def test_mapping_becomes_static_filter(self):
        """A plain mapping is converted into a StaticPropFilter."""
        opts = ParserOptions(prop_filter={"skipPropsWithoutDoc": True})
        assert isinstance(opts.prop_filter, StaticPropFilter)
        assert opts.prop_filter.skip_props_without_doc is True

    def test_callable_kept_as_is(self):
        """A predicate is stored unchanged."""

        def predicate(prop: PropItem, component: Component) -> bool:
            return True

        assert ParserOptions(prop_filter=predicate).prop_filter is predicate

    def test_default_options_have_no_filter(self):
        """Default parser options carry no filter."""
        assert DEFAULT_PARSER_OPTIONS.prop_filter is None
