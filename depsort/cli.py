"""CLI entry point for depsort."""

from __future__ import annotations

from pathlib import Path

import click

from depsort.config import load_settings
from depsort.errors import DepsortError
from depsort.pipeline import run

PATH = click.Path(dir_okay=False, path_type=Path)


@click.command()
@click.argument("target", required=False)
@click.option(
    "-i", "--input", "input_path", type=PATH, help="Dependency file to read. [default: depend]"
)
@click.option(
    "-o", "--output", type=PATH, help="Build order output file. [default: file_list.txt]"
)
@click.option("--dot", type=PATH, help="GraphViz output file. [default: depend.dot]")
@click.option(
    "--dot-mode",
    type=click.Choice(["closure", "neighbors"]),
    help="Render the target's closure, or direct neighbours of --node units.",
)
@click.option(
    "-n",
    "--node",
    "nodes",
    multiple=True,
    help="Unit to render in neighbors mode (repeatable).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="pyproject.toml to read [tool.depsort] settings from.",
)
@click.version_option(package_name="depsort")
def cli(
    target: str | None,
    input_path: Path | None,
    output: Path | None,
    dot: Path | None,
    dot_mode: str | None,
    nodes: tuple[str, ...],
    config_path: Path | None,
) -> None:
    """Compute a safe build order from a dependency file.

    With TARGET, only the units TARGET depends on (and TARGET itself) are
    ordered, and its dependency graph is written as a .dot file.
    """
    try:
        settings = load_settings(config_path).merged(
            input=input_path,
            output=output,
            dot=dot,
            dot_mode=dot_mode,
            nodes=list(nodes) or None,
        )
        result = run(settings, target)
    except DepsortError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(f"there are {len(result.order)} files to compile")
