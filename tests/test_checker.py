"""Tests for the type checker."""

from tsdocgen.compiler import create_program
from tsdocgen.compiler.symbols import SymbolFlags
from tsdocgen.core.config import CompilerOptions


def props_of(checker, symbol):
    """Property name -> rendered type of the first parameter of a function export."""
    t = checker.get_type_of_symbol_at_location(symbol, symbol.value_declaration)
    param = t.get_call_signatures()[0].get_parameters()[0]
    props_type = checker.get_type_of_symbol_at_location(param, param.value_declaration)
    return {p.name: checker.type_to_string(checker.get_type_of_symbol_at_location(p, None)) for p in props_type.get_properties()}


class TestModuleSymbols:
    """Tests for module symbols and exports."""

    def test_script_has_no_module_symbol(self, load_module):
        """Files without imports or exports are not modules."""
        checker, source = load_module("script.ts", "const a = 1;\n")
        assert checker.get_symbol_at_location(source) is None

    def test_exports_in_declaration_order(self, load_module):
        """Own exports come in source order."""
        content = """
            export const b = 1;
            export function a() {}
            export default class {}
            export interface C {}
        """
        checker, source = load_module("mod.ts", content)
        module = checker.get_symbol_at_location(source)

        names = [s.name for s in checker.get_exports_of_module(module)]

        assert names == ["b", "a", "default", "C"]

    def test_export_star_appended_without_default(self, write_source):
        """export * adds the target's named exports after local ones."""
        write_source("lib.ts", "export const x = 1;\nexport default function f() {}\nexport const local = 2;\n")
        path = write_source("index.ts", 'export const local = 0;\nexport * from "./lib";\n')
        program = create_program([path])
        checker = program.get_type_checker()
        module = checker.get_symbol_at_location(program.get_source_file(path))

        names = [s.name for s in checker.get_exports_of_module(module)]

        assert names == ["local", "x"]

    def test_aliases_resolve_across_files(self, write_source):
        """Re-exported names resolve to the declaring file's symbol."""
        write_source("Button.ts", "export function Button(props: { label: string }) {}\n")
        path = write_source("index.ts", 'export { Button as Primary } from "./Button";\n')
        program = create_program([path])
        checker = program.get_type_checker()
        module = checker.get_symbol_at_location(program.get_source_file(path))
        (alias,) = checker.get_exports_of_module(module)

        assert alias.name == "Primary"
        assert alias.flags & SymbolFlags.ALIAS
        assert alias.value_declaration is None
        resolved = checker.get_root_symbols(alias)[0]
        assert resolved.name == "Button"
        assert checker.get_type_of_symbol_at_location(alias, None).symbol is resolved


class TestTypeRendering:
    """Tests for types of props and their rendering."""

    def test_common_types(self, load_module):
        """Primitive, literal, array, function and reference types render as written."""
        content = """
            interface Item { id: number }
            type Size = "small" | "large";
            export function List(props: {
              title: string;
              count?: number;
              size: Size;
              variant: "a" | "b";
              items: Item[];
              tags: Array<string>;
              onSelect: (item: Item, index: number) => void;
              flag: boolean;
              mixed: string | number | null;
              style: { color: string };
              node: React.ReactNode;
            }) {}
        """
        checker, source = load_module("List.ts", content)

        result = props_of(checker, source.exports["List"])

        assert result == {
            "title": "string",
            "count": "number",
            "size": "Size",
            "variant": '"a" | "b"',
            "items": "Item[]",
            "tags": "string[]",
            "onSelect": "(item: Item, index: number) => void",
            "flag": "boolean",
            "mixed": "string | number | null",
            "style": "{ color: string; }",
            "node": "React.ReactNode",
        }

    def test_optional_includes_undefined_under_strict(self, load_module):
        """strict adds undefined to optional member types."""
        content = "export function F(props: { a?: string; b: number }) {}\n"
        checker, source = load_module("F.ts", content, CompilerOptions(strict=True))

        result = props_of(checker, source.exports["F"])

        assert result == {"a": "string | undefined", "b": "number"}

    def test_interface_inheritance(self, load_module):
        """Own members come first, then inherited ones."""
        content = """
            interface Base { id: string; label: string }
            interface Props extends Base { label: string; extra: boolean }
            export function F(props: Props) {}
        """
        checker, source = load_module("F.ts", content)

        assert list(props_of(checker, source.exports["F"])) == ["label", "extra", "id"]

    def test_generic_instantiation(self, load_module):
        """Type arguments replace type parameters; members keep their declared symbol as root."""
        content = """
            interface Box<T, U = string> {
              /** The value */
              value: T;
              other: U;
            }
            export function F(props: Box<number>) {}
        """
        checker, source = load_module("F.ts", content)
        symbol = source.exports["F"]

        assert props_of(checker, symbol) == {"value": "number", "other": "string"}

        t = checker.get_type_of_symbol_at_location(symbol, None)
        param = t.get_call_signatures()[0].get_parameters()[0]
        value = checker.get_type_of_symbol_at_location(param, None).get_property("value")
        (root,) = checker.get_root_symbols(value)
        assert root is not value
        assert root.get_documentation_comment() == "The value"
        assert value.get_documentation_comment() == ""

    def test_utility_types(self, load_module):
        """Partial, Pick and Omit derive members from their source type."""
        content = """
            interface Props { a: string; b: number; c: boolean }
            export function P(props: Partial<Props>) {}
            export function K(props: Pick<Props, "a" | "c">) {}
            export function O(props: Omit<Props, "a">) {}
        """
        checker, source = load_module("U.ts", content)

        partial_type = checker.get_type_of_symbol_at_location(source.exports["P"], None)
        param = partial_type.get_call_signatures()[0].get_parameters()[0]
        assert checker.type_to_string(checker.get_type_of_symbol_at_location(param, None)) == "Partial<Props>"
        props = checker.get_type_of_symbol_at_location(param, None).get_properties()
        assert all(p.is_optional for p in props)

        assert list(props_of(checker, source.exports["K"])) == ["a", "c"]
        assert list(props_of(checker, source.exports["O"])) == ["b", "c"]

    def test_intersection_merges_members(self, load_module):
        """Intersections expose the members of every constituent."""
        content = """
            type A = { a: string };
            type B = { b: number };
            export function F(props: A & B) {}
        """
        checker, source = load_module("F.ts", content)

        assert props_of(checker, source.exports["F"]) == {"a": "string", "b": "number"}


class TestValueTypes:
    """Tests for the types of exported values."""

    def test_arrow_function_type_symbol(self, load_module):
        """Function expressions have an anonymous __function type symbol."""
        checker, source = load_module("F.ts", "export const F = (props: { a: string }) => null;\n")

        t = checker.get_type_of_symbol_at_location(source.exports["F"], None)

        assert t.symbol.name == "__function"
        assert len(t.get_call_signatures()) == 1

    def test_class_constructs_instance(self, load_module):
        """Classes have a construct signature returning the instance type."""
        content = """
            export class Store {
              count: number = 0;
              constructor(private readonly name: string) {}
              increment(): void {}
              static create() {}
            }
        """
        checker, source = load_module("Store.ts", content)

        t = checker.get_type_of_symbol_at_location(source.exports["Store"], None)
        (signature,) = t.get_construct_signatures()
        instance = signature.get_return_type()

        assert [p.name for p in instance.get_properties()] == ["count", "name", "increment"]
        assert checker.type_to_string(t) == "typeof Store"

    def test_react_component_base_contributes_props(self, load_module):
        """Extending React.Component adds props typed by the first type argument."""
        content = """
            import * as React from "react";
            interface Props { label: string }
            export class Button extends React.Component<Props> {}
        """
        checker, source = load_module("Button.tsx", content)

        t = checker.get_type_of_symbol_at_location(source.exports["Button"], None)
        props = t.get_construct_signatures()[0].get_return_type().get_property("props")

        assert props is not None
        props_type = checker.get_type_of_symbol_at_location(props, props.value_declaration)
        assert checker.type_to_string(props_type) == "Props"

    def test_function_component_type(self, load_module):
        """React.FC<P> typed variables are callable with P."""
        content = """
            import React from "react";
            interface Props { label: string }
            export const Button: React.FC<Props> = (props) => null;
        """
        checker, source = load_module("Button.tsx", content)

        assert props_of(checker, source.exports["Button"]) == {"label": "string"}
