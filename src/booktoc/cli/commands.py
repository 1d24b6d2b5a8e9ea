"""CLI commands for booktoc.

Commands:
- init-db: Create the content database
- import-structure: Load a book structure file into the database
- toc: Print the table of contents
- check-media: Validate a media file for import
- wrap-images: Rewrite image-only paragraphs in an HTML file
- serve: Run the Web API
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.tree import Tree

from booktoc.config.app_config import AppConfig, load_app_config
from booktoc.core.links import LinkBuilder
from booktoc.core.media import force_wrap_images, is_valid_media
from booktoc.core.models import Part, StructureError, TocEntry
from booktoc.core.projector import project
from booktoc.core.structure_importer import StructureImportError, import_structure
from booktoc.core.visibility import is_visible
from booktoc.db.database import init_db
from booktoc.db.structure_repository import get_book_structure
from booktoc.utils.log_config import configure_logging
from booktoc.web.routes.toc import TOC_REST_BASE

app = typer.Typer(
    name="booktoc",
    help="Book table of contents API and import helpers.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Book table of contents API and import helpers."""
    configure_logging(verbose)


def _open_db(db: str | None) -> AppConfig:
    """Load config and point the database layer at the configured file."""
    config = load_app_config()
    init_db(Path(db) if db else config.db_path)
    return config


def _entry_label(entry: TocEntry | Part) -> str:
    item = entry.item
    label = f"{item.title or item.slug} [dim]#{item.id}[/dim]"
    if not is_visible(item, False):
        label += f" [yellow]({item.status})[/yellow]"
    return label


@app.command(name="init-db")
def init_db_command(
    db: str | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Create the content database if it does not exist."""
    config = load_app_config()
    db_path = Path(db) if db else config.db_path
    init_db(db_path)
    console.print(f"[green]✓ Database ready:[/green] {db_path}")


@app.command(name="import-structure")
def import_structure_command(
    file: str = typer.Argument(..., help="YAML or JSON book structure file"),
    replace: bool = typer.Option(False, "--replace", "-r", help="Delete existing posts first"),
    db: str | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Import a book structure into the content database."""
    _open_db(db)

    try:
        result = import_structure(Path(file).expanduser(), replace=replace)
    except StructureImportError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]✓ Imported {result.total} posts[/green]")
    console.print(f"  [dim]front-matter:[/dim] {result.front_matter}")
    console.print(f"  [dim]parts:[/dim]        {result.parts}")
    console.print(f"  [dim]chapters:[/dim]     {result.chapters}")
    console.print(f"  [dim]back-matter:[/dim]  {result.back_matter}")


@app.command()
def toc(
    elevated: bool = typer.Option(
        False, "--elevated", "-e", help="Include unpublished items"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the API response body"),
    db: str | None = typer.Option(None, "--db", help="Database file (default from config)"),
) -> None:
    """Print the table of contents of the stored book."""
    config = _open_db(db)
    links = LinkBuilder(base_url=config.api.base_url, namespace=config.api.namespace)

    try:
        view = project(
            get_book_structure(),
            elevated,
            links,
            filter_parts=config.site.filter_parts,
            self_path=TOC_REST_BASE,
        )
    except StructureError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(view.to_dict(), indent=2))
        return

    tree = Tree("[bold]Table of contents[/bold]")
    front = tree.add("Front matter")
    for entry in view.front_matter:
        front.add(_entry_label(entry))
    for part in view.parts:
        branch = tree.add(_entry_label(part))
        for chapter in part.chapters:
            branch.add(_entry_label(chapter))
    back = tree.add("Back matter")
    for entry in view.back_matter:
        back.add(_entry_label(entry))

    console.print(tree)


@app.command(name="check-media")
def check_media(
    path: str = typer.Argument(..., help="File to validate"),
    filename: str | None = typer.Option(
        None, "--filename", "-n", help="Original filename (defaults to the path's name)"
    ),
) -> None:
    """Check that a media file may be imported."""
    file_path = Path(path).expanduser()
    name = filename or file_path.name

    if is_valid_media(file_path, name):
        console.print(f"[green]✓ {name} is valid media[/green]")
    else:
        console.print(f"[red]✗ {name} is not an accepted media file[/red]")
        raise typer.Exit(code=1)


@app.command(name="wrap-images")
def wrap_images(
    file: str = typer.Argument(..., help="HTML file"),
    in_place: bool = typer.Option(False, "--in-place", "-i", help="Overwrite the file"),
) -> None:
    """Wrap image-only paragraphs of an HTML file in captionless divs."""
    file_path = Path(file).expanduser()
    if not file_path.exists():
        console.print(f"[red]✗ File not found: {file_path}[/red]")
        raise typer.Exit(code=1)

    wrapped = force_wrap_images(file_path.read_text(encoding="utf-8"))

    if in_place:
        file_path.write_text(wrapped, encoding="utf-8")
        console.print(f"[green]✓ Updated {file_path}[/green]")
    else:
        typer.echo(wrapped)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
) -> None:
    """Run the Web API with uvicorn."""
    import uvicorn

    uvicorn.run("booktoc.web.api:create_app", host=host, port=port, factory=True)


if __name__ == "__main__":
    app()
