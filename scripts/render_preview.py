#!/usr/bin/env python3
"""
AsciiDoc Preview CLI

Renders AsciiDoc files the same way the preview panel does and writes the
result as a standalone HTML page.

Commands:
    render   - Render a single .adoc file to a preview page
    fragment - Print the wrapped HTML fragment the preview panel would receive

Examples:\n

    render_preview.py render docs/index.adoc                     # Writes docs/index.preview.html

    render_preview.py render docs/index.adoc -o outs/index.html  # Custom output file

    render_preview.py render docs/index.adoc --images outs/img   # Write generated images to outs/img

    render_preview.py fragment docs/index.adoc                   # Fragment to stdout
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from adocview.contexts.notifications import get_bus
from adocview.contexts.rendering import (
    InitializationError,
    RenderError,
    render_file,
    render_preview_page,
)
from adocview.contexts.rendering.logger import setup_rendering_logger
from adocview.settings import get_settings
from adocview.utils.timestamp import now

app = typer.Typer(
    help="Render AsciiDoc files to HTML previews",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


def _render(source: Path, images: Optional[Path]) -> str:
    settings = get_settings()
    setup_rendering_logger(settings.logs_path / f"render_{now()}")
    try:
        return render_file(source, images_dir=images, settings=settings)
    except InitializationError as e:
        typer.secho(f"Could not start the rendering engine: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)
    except RenderError as e:
        typer.secho(str(e), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    finally:
        # Let notifications about this render reach the log before exiting
        get_bus().flush(timeout=5)


@app.command()
def render(
    source: Annotated[Path, typer.Argument(help="AsciiDoc file to render", exists=True, dir_okay=False)],
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Output HTML file")
    ] = None,
    images: Annotated[
        Optional[Path], typer.Option("--images", "-i", help="Directory for generated images")
    ] = None,
    style: Annotated[str, typer.Option("--style", help="Pygments style for source blocks")] = "default",
):
    """Render SOURCE to a standalone HTML preview page."""
    content = _render(source, images)

    if output is None:
        output = source.with_suffix(".preview.html")
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render_preview_page(content, title=source.stem, highlight_style=style), encoding="utf-8")

    typer.secho(f"Preview written to: {output}", fg=typer.colors.GREEN)


@app.command()
def fragment(
    source: Annotated[Path, typer.Argument(help="AsciiDoc file to render", exists=True, dir_okay=False)],
    images: Annotated[
        Optional[Path], typer.Option("--images", "-i", help="Directory for generated images")
    ] = None,
):
    """Print the wrapped HTML fragment for SOURCE."""
    typer.echo(_render(source, images))


if __name__ == "__main__":
    app()
