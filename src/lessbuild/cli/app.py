import logging
from pathlib import Path
from typing import Annotated

import typer

from lessbuild.cli.build import clean, exists, generate, show_config
from lessbuild.core.config import ConfigResolver

app = typer.Typer(
    name="lessbuild",
    help="lessbuild CLI: compile LESS stylesheets into CSS files.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    ctx: typer.Context,
    root: Annotated[Path, typer.Option(help="Project root; CSS goes to <root>/public/<destination>.")] = Path("."),
    env: Annotated[str | None, typer.Option(help="Environment name (defaults to $LESSBUILD_ENV or development).")] = None,
    source: Annotated[Path | None, typer.Option(help="Source directory, relative to the root if not absolute.")] = None,
    destination: Annotated[str | None, typer.Option(help="Destination path below <root>/public.")] = None,
    compress: Annotated[bool | None, typer.Option("--compress/--no-compress", help="Strip line breaks.")] = None,
    header: Annotated[bool | None, typer.Option("--header/--no-header", help="Prepend a provenance comment.")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG level.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = ConfigResolver.from_environ(
        root.resolve(),
        environment=env,
        source_path=source,
        destination_path=destination,
        compression=compress,
        header=header,
    )


app.command("generate")(generate)
app.command("clean")(clean)
app.command("exists")(exists)
app.command("config")(show_config)


def main() -> None:
    app()
