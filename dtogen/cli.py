"""Command line interface: render C# records from a schema or a tool manifest."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from .codegen import render, write_output
from .context_builder import DEFAULT_NAMESPACE, build_context
from .declarations import (
    COLLISION_POLICIES,
    generate_declarations_from_schema,
    generate_declarations_from_tools,
)
from .loader import load_schema, load_tools
from .models import Declaration, DtogenError


class CliError(Exception):
    """Generator failure reported to the user without a traceback."""


_namespace_option = click.option(
    "--namespace",
    default=DEFAULT_NAMESPACE,
    show_default=True,
    help="C# namespace for the generated records",
)
_output_option = click.option(
    "--output",
    "output_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="File to write; prints to stdout when omitted",
)
_collision_option = click.option(
    "--on-collision",
    type=click.Choice(COLLISION_POLICIES),
    default="error",
    show_default=True,
    help="Fail on duplicate record names, or rename later ones Name2, Name3, ...",
)


def _emit(declarations: list[Declaration], namespace: str, output_path: Path | None) -> None:
    context = build_context(declarations, namespace)
    source = render(context)
    if output_path is None:
        click.echo(source, nl=False)
        return
    write_output(source, output_path)
    click.echo(f"Generated {output_path} ({context['declaration_count']} declarations)")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Generate immutable C# records from JSON Schema."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


@cli.command(name="schema")
@click.argument("source")
@click.option("--name", "root_name", required=True, help="Name of the root record")
@_namespace_option
@_output_option
@_collision_option
def schema_command(
    source: str,
    root_name: str,
    namespace: str,
    output_path: Path | None,
    on_collision: str,
) -> None:
    """Render records for the JSON Schema at SOURCE (file path or URL)."""
    try:
        schema = load_schema(source)
        declarations = generate_declarations_from_schema(schema, root_name, on_collision=on_collision)
        _emit(declarations, namespace, output_path)
    except (DtogenError, OSError) as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="tools")
@click.argument("source")
@_namespace_option
@_output_option
@_collision_option
def tools_command(
    source: str,
    namespace: str,
    output_path: Path | None,
    on_collision: str,
) -> None:
    """Render {Tool}Request records for the tool manifest at SOURCE."""
    try:
        tools = load_tools(source)
        declarations = generate_declarations_from_tools(tools, on_collision=on_collision)
        _emit(declarations, namespace, output_path)
    except (DtogenError, OSError) as exc:
        raise CliError(str(exc)) from exc


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="dtogen", standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0
