from __future__ import annotations

import asyncio
import logging
import os
from typing import List

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .api import parse_toc
from .export import write_tree_json, write_tree_md, write_entries_jsonl
from .models import TocEntry
from .pdf_extract import extract_toc_from_pdf
from .section_tree import tree_to_markdown
from .toc_detect import toc_line_stats, PAGE_NUMBER_RATIO, MIN_CHAPTER_LINES, MIN_TOC_LINES

app = typer.Typer(add_completion=False)
console = Console()


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
            force=True,
        )


def _read_text(path: str) -> str:
    if not os.path.isfile(path):
        raise typer.BadParameter(f"File not found: {path}")
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise typer.BadParameter(f"Not a UTF-8 text file: {path} ({e.reason} at byte {e.start})")


def _summarize_entries(entries: List[TocEntry], max_rows: int = 12) -> None:
    t = Table(title="Parsed TOC entries (preview)")
    t.add_column("Id")
    t.add_column("Level", justify="right")
    t.add_column("Title")
    t.add_column("Page", justify="right")

    for e in entries[:max_rows]:
        page = str(e.page_number) if e.page_number is not None else "-"
        t.add_row(e.id, str(e.level), e.title, page)
    if len(entries) > max_rows:
        t.add_row("…", "…", f"(+{len(entries) - max_rows} more)", "…")
    console.print(t)


@app.command()
def parse(
    path: str = typer.Argument(..., help="Path to a plain-text table of contents"),
    out: str = typer.Option("outputs/toc", "--out", help="Output directory"),
    force: bool = typer.Option(False, "--force", help="Parse even if the text does not look like a TOC"),
    preview: int = typer.Option(12, "--preview", help="Rows to show in the preview table"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Parse TOC text into a tree + flat entry exports.
    """
    _setup_logging(verbose)
    text = _read_text(path)

    console.print(f"[bold]Reading TOC text:[/bold] {path}")
    result = parse_toc(text, source=path)

    if not result.looks_like_toc:
        if not force:
            console.print("[red]Text does not look like a table of contents.[/red] Use --force to parse anyway.")
            raise typer.Exit(code=2)
        console.print("[yellow]Text does not look like a TOC; parsing anyway.[/yellow]")

    flat = result.toc.flat_entries
    if not flat:
        console.print("[red]No entries found.[/red]")
        raise typer.Exit(code=2)

    _summarize_entries(flat, max_rows=preview)
    console.print(f"[bold]Entries parsed:[/bold] {len(flat)} ({len(result.toc.entries)} top-level)")

    result.export(out)
    console.print(f"[green]Done.[/green] Outputs written to: {out}")


@app.command()
def detect(
    path: str = typer.Argument(..., help="Path to a text file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Report whether a text file looks like a table of contents.
    Exits 0 for a TOC, 1 otherwise.
    """
    _setup_logging(verbose)
    text = _read_text(path)
    stats = toc_line_stats(text)

    t = Table(title="TOC heuristics")
    t.add_column("Check")
    t.add_column("Value", justify="right")
    t.add_column("Threshold", justify="right")
    t.add_row("Non-blank lines", str(stats.total), f">= {MIN_TOC_LINES}")
    t.add_row("Page-numbered ratio", f"{stats.page_ratio:.2f}", f"> {PAGE_NUMBER_RATIO}")
    t.add_row("Chapter/section/part lines", str(stats.chapter_like), f">= {MIN_CHAPTER_LINES}")
    console.print(t)

    if stats.looks_like_toc:
        console.print("[green]Looks like a table of contents.[/green]")
        return
    console.print("[yellow]Does not look like a table of contents.[/yellow]")
    raise typer.Exit(code=1)


@app.command()
def sample(
    out: str = typer.Option("", "--out", help="Optional output directory"),
):
    """
    Show the outline returned by the placeholder PDF extractor.
    """
    toc = asyncio.run(extract_toc_from_pdf(b""))
    md = tree_to_markdown(toc.entries)
    console.print(md)

    if out:
        write_tree_json(out, toc)
        write_tree_md(out, md)
        write_entries_jsonl(out, toc)
        console.print(f"[green]Done.[/green] Outputs written to: {out}")


if __name__ == "__main__":
    app()
