from collections.abc import Callable
from typing import Annotated, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from lessbuild.core.config import ConfigResolver
from lessbuild.core.pipeline import StylesheetPipeline
from lessbuild.errors import LessBuildError

console = Console()
err_console = Console(stderr=True)

T = TypeVar("T")


def _get_pipeline(resolver: ConfigResolver) -> StylesheetPipeline:
    return StylesheetPipeline(resolver)


def _run(action: Callable[[], T]) -> T:
    try:
        return action()
    except (LessBuildError, OSError) as exc:
        err_console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        raise typer.Exit(1) from exc


def generate(
    ctx: typer.Context,
    segments: Annotated[
        list[str] | None,
        typer.Argument(help="Slug segments of one stylesheet, e.g. 'admin forms'. Omit to build everything."),
    ] = None,
) -> None:
    """Compile one stylesheet to stdout, or all of them to the destination."""
    pipeline = _get_pipeline(ctx.obj)
    if segments:
        css = _run(lambda: pipeline.generate_one(segments))
        typer.echo(css)
        return

    written = _run(pipeline.generate_all)
    for path in written:
        console.print(f"[green]Wrote[/green] {path}")
    console.print(f"({len(written)} stylesheets)")


def clean(ctx: typer.Context) -> None:
    """Remove every generated CSS file."""
    pipeline = _get_pipeline(ctx.obj)
    removed = _run(pipeline.clean)
    for path in removed:
        console.print(f"[yellow]Removed[/yellow] {path}")
    console.print(f"({len(removed)} stylesheets)")


def exists(
    ctx: typer.Context,
    segments: Annotated[list[str], typer.Argument(help="Slug segments, e.g. 'admin forms'.")],
) -> None:
    """Exit 0 if a compilable source exists for the slug, 1 otherwise."""
    pipeline = _get_pipeline(ctx.obj)
    if pipeline.exists(segments):
        console.print("[green]yes[/green]")
        return
    console.print("[yellow]no[/yellow]")
    raise typer.Exit(1)


def show_config(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    resolver: ConfigResolver = ctx.obj
    config = resolver.resolve()
    table = Table(show_lines=False)
    table.add_column("setting", no_wrap=True)
    table.add_column("value")
    for name, value in config.model_dump().items():
        table.add_row(name, str(value))
    table.add_row("destination_root", str(config.destination_root))
    console.print(table)
