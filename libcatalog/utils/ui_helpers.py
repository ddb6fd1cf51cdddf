import os
import json
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from libcatalog.book import Book
from libcatalog.config import settings
from libcatalog.user import User

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"
OUTPUT_MODES = ("plain", "json", "rich")

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in OUTPUT_MODES:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    mode = os.environ.get(OUTPUT_MODE_ENV, settings.output_mode).lower()
    return mode if mode in OUTPUT_MODES else "plain"


def print_books(books: List[Book], empty_message: str = "No book found.") -> None:
    """Print search results in the current output mode.
    - plain: one '<id>: <title> by <author>[ (Issued)]' line per book
    - json: array of book objects
    - rich: Rich table
    """
    if not books:
        print(empty_message)
        return

    mode = get_output_mode()
    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="Books", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True, justify="right")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Status", style="yellow")
        for b in books:
            table.add_row(str(b.id), escape(b.title), escape(b.author), "Issued" if b.issued else "Available")
        _console.print(table)
    else:
        for b in books:
            print(str(b))


def print_report(user: User) -> None:
    """Print the titles a user currently holds."""
    titles = [b.title for b in user.borrowed_books]
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps({"user_id": user.id, "name": user.name, "borrowed": titles}, ensure_ascii=False))
        return

    if mode == "rich":
        body = "\n".join(f"- {escape(t)}" for t in titles) if titles else "[dim]No books borrowed.[/]"
        _console.print(Panel.fit(body, title=f"Report for {escape(user.name)}", border_style="blue"))
        return

    print(f"=== Report for {user.name} ===")
    if titles:
        for title in titles:
            print(f"- {title}")
    else:
        print("No books borrowed.")


def print_message(message: str, style: Optional[str] = None) -> None:
    """Status line. Styled through Rich only in rich mode, so plain output stays byte-exact."""
    if get_output_mode() == "rich" and style:
        _console.print(f"[{style}]{escape(message)}[/]")
    else:
        print(message)
