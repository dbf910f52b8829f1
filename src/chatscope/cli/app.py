"""Main CLI application using Typer."""
import asyncio
import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..annotations import (
    AnnotationDecoder,
    CodeElement,
    FileChipStrategy,
    SourceQuoteStrategy,
    SyntaxBlockStrategy,
    format_line_range,
)
from ..markdown import CodeSegment, segment_markdown
from ..transcript import TranscriptContext, load_transcript, project_transcript

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chatscope",
    help="Render code-search assistant transcripts with annotated code quotes",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


def _read_transcript(path: Path):
    try:
        return load_transcript(path.read_bytes())
    except ValidationError as e:
        console.print(f"[red]Invalid transcript {path}:[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(code=1)


@app.command()
def view(
    transcript: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Transcript JSON file (re-read whenever it changes)"
    ),
    repo_name: str = typer.Option(
        os.getenv("CHATSCOPE_REPO_NAME", ""),
        "--repo-name",
        "-r",
        help="Repository display name shown in source quote breadcrumbs"
    ),
    repo_ref: str = typer.Option(
        os.getenv("CHATSCOPE_REPO_REF", ""),
        "--repo-ref",
        help="Repository reference the answers are about"
    ),
    thread_id: str = typer.Option(
        "",
        "--thread-id",
        "-t",
        help="Conversation thread identifier"
    ),
    history: bool = typer.Option(
        False,
        "--history",
        help="Treat the transcript as a stored conversation"
    ),
    loading: bool = typer.Option(
        False,
        "--loading",
        help="An answer is still being produced"
    ),
    hide_code: bool = typer.Option(
        False,
        "--hide-code",
        help="Show quoted code as compact file chips"
    ),
    log_level: str | None = typer.Option(
        os.getenv("CHATSCOPE_LOG_LEVEL"),
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug, info, warning, error)"
    ),
    poll_interval: float = typer.Option(
        1.0,
        "--poll-interval",
        help="Seconds between checks for transcript changes (0 disables)"
    ),
):
    """Open a transcript in the terminal UI."""
    from ..ui import run_textual_tui

    # Validate up front so errors print before the TUI takes the screen
    _read_transcript(transcript)

    asyncio.run(
        run_textual_tui(
            source=transcript,
            thread_id=thread_id,
            repo_ref=repo_ref,
            repo_name=repo_name,
            is_loading=loading,
            is_history=history,
            hide_code=hide_code,
            log_level=log_level,
            poll_interval=poll_interval,
        )
    )


@app.command()
def turns(
    transcript: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Transcript JSON file"
    ),
    loading: bool = typer.Option(False, "--loading", help="An answer is still being produced"),
    history: bool = typer.Option(False, "--history", help="Stored conversation"),
):
    """Show the props each turn would be rendered with."""
    data = _read_transcript(transcript)
    context = TranscriptContext(
        thread_id="",
        repo_ref="",
        repo_name="",
        is_loading=loading,
        is_history=history,
    )

    table = Table(title=f"{transcript.name} ({len(data)} turns)")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Author", style="cyan", no_wrap=True, min_width=6)
    table.add_column("Query ID", style="magenta", overflow="fold")
    table.add_column("Loading", justify="center")
    table.add_column("Steps", justify="right")
    table.add_column("Feedback", justify="center")
    table.add_column("Text", overflow="fold")

    for props in project_transcript(data, context):
        preview = props.text.replace("\n", " ")
        table.add_row(
            str(props.index),
            props.author.value,
            str(props.query_id),
            "yes" if props.is_loading else "",
            str(len(props.loading_steps)),
            "yes" if props.show_inline_feedback else "",
            escape(preview[:60] + ("..." if len(preview) > 60 else "")),
        )

    console.print(table)


@app.command()
def decode(
    class_name: str = typer.Argument(..., help="Class string of the code element"),
    content: str = typer.Argument("", help="Text content of the code element"),
    inline: bool = typer.Option(False, "--inline", help="Element is inline code"),
    hide_code: bool = typer.Option(False, "--hide-code", help="Prefer file chips"),
):
    """Decode one code element's annotation and show the chosen strategy."""
    decoder = AnnotationDecoder()
    element = CodeElement(class_name=class_name, children=(content,))
    strategy = decoder.decode(element, inline=inline, hide_code=hide_code)
    annotation = strategy.annotation

    table = Table(title="Annotation", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Strategy", annotation.kind.value)
    table.add_row("Language", escape(annotation.language) or "[dim]-[/dim]")
    table.add_row("Path", escape(annotation.path or "") or "[dim]-[/dim]")
    if annotation.line_range is not None:
        table.add_row(
            "Lines",
            f"{format_line_range(annotation.line_range)} "
            f"[dim](zero-indexed {annotation.line_range.as_tuple()})[/dim]",
        )
    else:
        table.add_row("Lines", "[dim]-[/dim]")
    if isinstance(strategy, FileChipStrategy) and strategy.line_range is not None:
        table.add_row("Scroll index", strategy.line_range.to_scroll_index())
    console.print(table)

    if isinstance(strategy, (SourceQuoteStrategy, SyntaxBlockStrategy)) and strategy.code:
        console.print(
            Panel(
                Syntax(strategy.code, strategy.language or "text", line_numbers=True),
                title=getattr(strategy, "path", "") or strategy.language,
            )
        )


@app.command()
def blocks(
    markdown_file: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Markdown answer to inspect"
    ),
    hide_code: bool = typer.Option(False, "--hide-code", help="Prefer file chips"),
):
    """List the code blocks of a markdown answer and how each would render."""
    decoder = AnnotationDecoder()
    table = Table(title=markdown_file.name)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Class", style="cyan", overflow="fold")
    table.add_column("Strategy", style="magenta", no_wrap=True, min_width=12)
    table.add_column("Path")
    table.add_column("Lines", justify="right")

    count = 0
    for segment in segment_markdown(markdown_file.read_text(encoding="utf-8")):
        if not isinstance(segment, CodeSegment):
            continue
        count += 1
        annotation = decoder.decode(segment.element, hide_code=hide_code).annotation
        table.add_row(
            str(count),
            escape(segment.element.class_name) or "[dim]-[/dim]",
            annotation.kind.value,
            escape(annotation.path or ""),
            format_line_range(annotation.line_range) if annotation.line_range else "",
        )

    if count == 0:
        console.print("[dim]No code blocks found.[/dim]")
        return
    console.print(table)


if __name__ == "__main__":
    app()
