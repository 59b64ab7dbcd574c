"""Tests for defaultProps extraction."""

from tsdocgen.docgen.default_props import DefaultPropsResolver, numeric_literal_text

BUTTON = """
    import * as React from "react";

    export class Button extends React.Component<{}> {
      static defaultProps = {
        disabled: false,
        primary: true,
        color: "  blue  ",
        size: 12,
        offset: -1,
        icon: null,
        style: {a:1},
        missing: undefined,
        onClick: noop,
        ["computed"]: "x",
        "quoted": "y",
        list: [1, 2],
        nothing: void 0,
        kind: typeof window,
        flipped: !true,
        hex: 0x10,
        thousand: 1_000,
        ratio: 1.50,
        tiny: 1e-7,
        0x1F: "hex key",
      };

      render() {
        return null;
      }
    }

    export function Plain(props: { a: string }) {
      return null;
    }
"""


def resolve(load_module, content, name, file_name="Button.tsx"):
    checker, source = load_module(file_name, content)
    symbol = source.exports[name]
    return DefaultPropsResolver(checker).extract_default_props_from_component(symbol, source)


class TestExtractDefaultProps:
    """Tests for DefaultPropsResolver.extract_default_props_from_component."""

    def test_literal_values(self, load_module):
        """Supported literals map to their source text."""
        result = resolve(load_module, BUTTON, "Button")

        assert result["disabled"] == "false"
        assert result["primary"] == "true"
        assert result["color"] == "blue"
        assert result["size"] == "12"
        assert result["offset"] == "-1"
        assert result["icon"] == "null"
        assert result["style"] == "{a:1}"
        assert result["missing"] == "undefined"

    def test_unsupported_values_excluded(self, load_module):
        """Identifiers other than undefined, arrays, void and typeof are left out."""
        result = resolve(load_module, BUTTON, "Button")

        assert "onClick" not in result
        assert "list" not in result
        assert "nothing" not in result
        assert "kind" not in result

    def test_prefix_operators(self, load_module):
        """Prefix operator expressions keep their source text."""
        result = resolve(load_module, BUTTON, "Button")

        assert result["flipped"] == "!true"

    def test_numeric_literals_are_normalized(self, load_module):
        """Numbers are reported the way JavaScript prints them."""
        result = resolve(load_module, BUTTON, "Button")

        assert result["hex"] == "16"
        assert result["thousand"] == "1000"
        assert result["ratio"] == "1.5"
        assert result["tiny"] == "1e-7"
        assert result["31"] == "hex key"

    def test_property_names(self, load_module):
        """String names use their text; computed names their source text."""
        result = resolve(load_module, BUTTON, "Button")

        assert result['["computed"]'] == "x"
        assert result["quoted"] == "y"

    def test_order_follows_literal(self, load_module):
        """Entries keep the order of the object literal."""
        result = resolve(load_module, BUTTON, "Button")
        assert list(result)[:3] == ["disabled", "primary", "color"]

    def test_function_component_has_no_defaults(self, load_module):
        """Only class declarations are searched."""
        assert resolve(load_module, BUTTON, "Plain") == {}

    def test_class_without_default_props(self, load_module):
        """A class with no defaultProps member gives an empty map."""
        content = """
            export class Empty {
              render() { return null; }
            }
        """
        assert resolve(load_module, content, "Empty", "Empty.ts") == {}

    def test_non_object_default_props(self, load_module):
        """defaultProps must be an object literal."""
        content = """
            const defaults = { a: 1 };
            export class Panel {
              static defaultProps = defaults;
            }
        """
        assert resolve(load_module, content, "Panel", "Panel.ts") == {}

    def test_default_exported_class(self, load_module):
        """A default-exported class is found by its declaration name."""
        content = """
            export default class Card {
              static defaultProps = { elevation: 2 };
            }
        """
        assert resolve(load_module, content, "default", "Card.ts") == {"elevation": "2"}


class TestNumericLiteralText:
    """Tests for numeric_literal_text."""

    def test_integers_keep_digits(self):
        """Plain integers are unchanged apart from separators."""
        assert numeric_literal_text("42") == "42"
        assert numeric_literal_text("12_345") == "12345"

    def test_radix_literals(self):
        """Hex, octal, binary and legacy octal literals become decimal."""
        assert numeric_literal_text("0xFF") == "255"
        assert numeric_literal_text("0o17") == "15"
        assert numeric_literal_text("0b101") == "5"
        assert numeric_literal_text("010") == "8"

    def test_fractions_and_exponents(self):
        """Fractions and exponents are printed like JavaScript numbers."""
        assert numeric_literal_text("1.50") == "1.5"
        assert numeric_literal_text(".5") == "0.5"
        assert numeric_literal_text("1e3") == "1000"
        assert numeric_literal_text("2.0") == "2"
        assert numeric_literal_text("1e21") == "1e+21"
        assert numeric_literal_text("0.000001") == "0.000001"

    def test_bigint_not_supported(self):
        """BigInt literals have no cooked text."""
        assert numeric_literal_text("10n") is None
