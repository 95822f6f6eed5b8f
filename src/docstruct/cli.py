"""docstruct CLI."""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table as RichTable

from docstruct.config import settings
from docstruct.models import AnalyzeResponse, Document
from docstruct.output import OutputGenerator
from docstruct.pipeline import build_document
from docstruct.storage import LocalStorage

app = typer.Typer(
    name="docstruct",
    help="Build structured documents from document-analysis block responses",
    add_completion=False,
)
console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(settings.log_level, help="Logging level"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load(response_path: Path) -> AnalyzeResponse:
    try:
        return AnalyzeResponse.from_file(response_path)
    except FileNotFoundError:
        console.print(f"[red]Response file not found:[/red] {response_path}")
        raise typer.Exit(code=1)
    except ValidationError as e:
        console.print(f"[red]Invalid response file:[/red] {response_path}")
        console.print(f"[dim]{e}[/dim]")
        raise typer.Exit(code=1)


def _load_document(response_path: Path) -> Document:
    document = build_document(_load(response_path))
    if document.is_empty:
        console.print("[yellow]Document has no pages[/yellow]")
        raise typer.Exit(code=1)
    return document


@app.command()
def parse(
    response_path: Path = typer.Argument(..., help="Path to a raw response JSON file"),
    object_name: Optional[str] = typer.Option(
        None, help="Object name the outputs are written under (default: file stem)"
    ),
    output_dir: str = typer.Option(settings.output_dir, help="Output directory"),
    forms: bool = typer.Option(settings.include_forms, help="Write forms.csv per page"),
    tables: bool = typer.Option(settings.include_tables, help="Write tables.csv per page"),
) -> None:
    """Write text, form, table and raw JSON outputs for a response."""
    response = _load(response_path)
    name = object_name or response_path.stem
    console.print(f"[bold blue]Processing:[/bold blue] {response_path}")
    console.print(f"[dim]Output directory: {output_dir}[/dim]")

    generator = OutputGenerator(
        storage=LocalStorage(output_dir),
        document_id=name,
        object_name=name,
        responses=[response],
        include_forms=forms,
        include_tables=tables,
    )
    result = generator.write_outputs()

    if not result.success:
        console.print(f"[red]Failed:[/red] {result.error}")
        raise typer.Exit(code=1)

    console.print(
        f"[green]Wrote {len(result.written)} files for {result.page_count} page(s)[/green]"
    )
    for path in result.written:
        console.print(f"  [dim]{path}[/dim]")


@app.command()
def text(
    response_path: Path = typer.Argument(..., help="Path to a raw response JSON file"),
) -> None:
    """Print the text of every page."""
    document = _load_document(response_path)
    for page_number, page in enumerate(document.pages, start=1):
        console.rule(f"Page {page_number}")
        console.print(page.text, end="", markup=False, highlight=False)


@app.command()
def forms(
    response_path: Path = typer.Argument(..., help="Path to a raw response JSON file"),
    key: Optional[str] = typer.Option(None, help="Only show keys containing this text"),
) -> None:
    """Print the key/value pairs of every page."""
    document = _load_document(response_path)
    for page_number, page in enumerate(document.pages, start=1):
        fields = page.form.search_fields_by_key(key) if key else page.form.fields
        table = RichTable(title=f"Page {page_number} form")
        table.add_column("Key", style="bold")
        table.add_column("Value")
        for field in fields:
            table.add_row(field.key_text, field.value_text)
        console.print(table)


@app.command()
def tables(
    response_path: Path = typer.Argument(..., help="Path to a raw response JSON file"),
) -> None:
    """Print the tables of every page."""
    document = _load_document(response_path)
    for page_number, page in enumerate(document.pages, start=1):
        for table_number, table in enumerate(page.tables, start=1):
            grid = RichTable(
                title=f"Page {page_number} table {table_number}",
                show_header=False,
            )
            for _ in range(table.num_cols):
                grid.add_column()
            for row in table.rows:
                grid.add_row(*[t.strip() for t in row.texts])
            console.print(grid)
            if table.needs_audit:
                console.print(f"[yellow]Needs audit:[/yellow] {table.audit_reason}")


@app.command()
def summary(
    response_path: Path = typer.Argument(..., help="Path to a raw response JSON file"),
) -> None:
    """Show page, line, field and table counts."""
    document = _load_document(response_path)
    table = RichTable(title=f"{response_path.name}: {document.page_count} page(s)")
    table.add_column("Page", justify="right")
    table.add_column("Lines", justify="right")
    table.add_column("Fields", justify="right")
    table.add_column("Tables", justify="right")
    for page_number, page in enumerate(document.pages, start=1):
        table.add_row(
            str(page_number),
            str(len(page.lines)),
            str(len(page.form.fields)),
            str(len(page.tables)),
        )
    console.print(table)


if __name__ == "__main__":
    app()
