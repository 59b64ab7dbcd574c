"""CLI entry point for tsdocgen.

Provides commands for:
- parse: Extract component documentation from TypeScript files
- init: Write a default tsdocgen.yaml
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
@click.version_option(package_name="tsdocgen")
def main() -> None:
    """tsdocgen - Documentation for TypeScript React components.

    Reads the props, defaults and doc comments of the components a module
    exports.

    Examples:

      # Document a component
      tsdocgen parse src/Button.tsx

      # Use the project's compiler options and skip undocumented props
      tsdocgen parse src/*.tsx --tsconfig tsconfig.json --skip-undocumented

      # Write YAML to a file
      tsdocgen parse src/Button.tsx --format yaml --output docs/button.yaml
    """
    pass


@main.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "--tsconfig",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="tsconfig.json to read compilerOptions from",
)
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="tsdocgen.yaml configuration file",
)
@click.option("--skip-prop", "skip_props", multiple=True, help="Prop name to leave out (repeatable)")
@click.option("--skip-undocumented", is_flag=True, default=False, help="Leave out props without a description")
@click.option(
    "--format", "output_format",
    type=click.Choice(["json", "yaml"]),
    default=None,
    help="Output format (default: json)",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write to a file instead of stdout",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log parser decisions")
def parse(
    files: tuple[Path, ...],
    tsconfig: Path | None,
    config: Path | None,
    skip_props: tuple[str, ...],
    skip_undocumented: bool,
    output_format: str | None,
    output: Path | None,
    verbose: bool,
) -> None:
    """Extract component documentation from FILES."""
    import yaml

    from ..core.config import load_config
    from ..core.exceptions import TsDocgenError
    from ..core.types import ParserOptions, StaticPropFilter
    from ..docgen.parser import with_custom_config, with_default_config

    _setup_logging(verbose)

    try:
        docgen_config = load_config(config)
        prop_filter = docgen_config.prop_filter
        names = prop_filter.skip_props_with_name
        if isinstance(names, str):
            names = [names]
        parser_opts = ParserOptions(
            prop_filter=StaticPropFilter(
                skip_props_with_name=[*(names or []), *skip_props] or None,
                skip_props_without_doc=prop_filter.skip_props_without_doc or skip_undocumented,
            )
        )

        tsconfig = tsconfig or docgen_config.tsconfig
        if tsconfig is not None:
            file_parser = with_custom_config(tsconfig, parser_opts)
        else:
            file_parser = with_default_config(parser_opts)

        docs = []
        for file_path in files:
            docs.extend(component.to_dict() for component in file_parser.parse(file_path))
    except TsDocgenError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    output_format = output_format or docgen_config.output_format
    if output_format == "yaml":
        text = yaml.safe_dump(docs, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(docs, indent=2, ensure_ascii=False) + "\n"

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        click.echo(f"Wrote {len(docs)} components to {output}", err=True)
    else:
        click.echo(text, nl=False)


@main.command()
@click.option(
    "--project", "-p",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=".",
    help="Project directory (default: current directory)",
)
@click.option("--tsconfig", default=None, help="tsconfig.json path, relative to the project")
def init(project: Path, tsconfig: str | None) -> None:
    """Write a default tsdocgen.yaml to the project."""
    from ..core.config import DocgenConfig

    project = project.resolve()
    config_path = project / "tsdocgen.yaml"
    if config_path.exists():
        click.echo(f"Configuration already exists: {config_path}")
        return

    if tsconfig is None and (project / "tsconfig.json").exists():
        tsconfig = "tsconfig.json"
    config = DocgenConfig(tsconfig=Path(tsconfig) if tsconfig else None)
    config.save(config_path)
    click.echo(f"Configuration saved to: {config_path}")


if __name__ == "__main__":
    main()
