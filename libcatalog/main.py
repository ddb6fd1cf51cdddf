import logging
from functools import wraps
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box

from libcatalog.config import settings
from libcatalog.library import Library, BookAlreadyIssuedError, DuplicateUserError
from libcatalog.session import Session
from libcatalog.utils.ui_helpers import (
    get_output_mode,
    print_books,
    print_message,
    print_report,
    set_output_mode,
)
from libcatalog.utils.validators import MenuValidator, TextValidator

logging.basicConfig(level=settings.log_level, format=settings.log_format)
logger = logging.getLogger(__name__)

APP_NAME = settings.app_name

MENU_ITEMS = [
    (0, "Register"),
    (1, "Login"),
    (2, "Search Book"),
    (3, "Issue Book"),
    (4, "Return Book"),
    (5, "Generate Report"),
    (6, "Add Book"),
    (7, "Exit"),
]
EXIT_CHOICE = 7

console = Console()


# Commands that need a logged-in user
def login_required(func):
    @wraps(func)
    def wrapper(lib: Library, session: Session, *args, **kwargs):
        if not session.is_authenticated:
            print_message("Login first.", "yellow")
            return None
        return func(lib, session, *args, **kwargs)
    return wrapper


def _ask(prompt: str) -> str:
    return input(prompt)


def _ask_id(prompt: str) -> Optional[int]:
    try:
        return MenuValidator.parse_int(_ask(prompt))
    except ValueError:
        print_message("Invalid input.", "red")
        return None


def _warn_unstorable(*values: str) -> None:
    for value in values:
        if not TextValidator.is_storable(value):
            logger.warning(f"{value!r} contains a comma or line break; its row will not reload.")


# --- Command handlers ---
def register(lib: Library, session: Session) -> None:
    """Create an account. Does not log the new user in."""
    user_id = _ask_id("Enter new user ID: ")
    if user_id is None:
        return
    name = _ask("Enter your name: ")
    password = _ask("Enter a password: ")
    try:
        lib.register_user(user_id, name, password)
    except DuplicateUserError:
        print_message("User ID already exists.", "yellow")
        return
    _warn_unstorable(name, password)
    lib.save_users()
    print_message("Registration successful.", "green")


def login(lib: Library, session: Session) -> None:
    user_id = _ask_id("Enter user ID: ")
    if user_id is None:
        return
    password = _ask("Enter password: ")
    user = lib.authenticate(user_id, password)
    if user is None:
        # Same message whether the id or the password was wrong
        print_message("Invalid credentials.", "red")
        return
    session.login(user)
    print_message(f"Login successful. Welcome, {user.name}", "green")


def search(lib: Library, session: Session) -> None:
    query = _ask("Enter book title or author to search: ")
    print_books(lib.search_books(query))


@login_required
def issue(lib: Library, session: Session) -> None:
    """Issue a book by exact title; offer to create it when it is unknown."""
    user = session.current_user
    title = _ask("Enter book title to issue: ")
    book = lib.find_book_by_title(title)
    if book is not None:
        try:
            lib.issue_book(book, user)
        except BookAlreadyIssuedError:
            print_message("Book is already issued.", "yellow")
            return
        lib.save_books()
        print_message("Book issued.", "green")
        return

    answer = _ask("Book not found. Add and issue it? (yes/no): ")
    if not MenuValidator.is_yes(answer):
        return
    author = _ask("Enter author: ")
    _warn_unstorable(title, author)
    book = lib.add_book(title, author)
    lib.issue_book(book, user)
    lib.save_books()
    print_message("Book added and issued.", "green")


@login_required
def return_book(lib: Library, session: Session) -> None:
    """Return one of the current user's own borrowed books by title."""
    user = session.current_user
    title = _ask("Enter book title to return: ")
    book = user.find_borrowed(title)
    if book is None:
        print_message("Book not in your list.", "yellow")
        return
    lib.return_book(book, user)
    lib.save_books()
    print_message("Book returned.", "green")


@login_required
def report(lib: Library, session: Session) -> None:
    print_report(session.current_user)


@login_required
def add_book(lib: Library, session: Session) -> None:
    title = _ask("Enter book title: ")
    author = _ask("Enter author: ")
    _warn_unstorable(title, author)
    lib.add_book(title, author)
    lib.save_books()
    print_message("Book added.", "green")


def exit_library(lib: Library) -> None:
    lib.save_all()
    print_message("Exiting...")


def render_menu() -> None:
    if get_output_mode() == "rich":
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label in MENU_ITEMS:
            table.add_row(f"[reverse]{key}[/]", label)
        console.print(Panel(table, title=APP_NAME, border_style="cyan", box=box.HEAVY, padding=(1, 2)))
        return

    print("\nMenu:")
    for key, label in MENU_ITEMS:
        print(f"{key}. {label}")


def run_menu(lib: Library, session: Optional[Session] = None) -> None:
    """Interactive menu loop; returns after Exit or when input ends."""
    session = session or Session()
    print_message(f"=== {APP_NAME} ===", "bold cyan")

    while True:
        render_menu()
        try:
            raw = _ask("Choose an option: ")
            try:
                choice = MenuValidator.parse_choice(raw, (key for key, _ in MENU_ITEMS))
            except ValueError:
                print_message("Invalid input.", "red")
                continue

            if choice == 0:
                register(lib, session)
            elif choice == 1:
                login(lib, session)
            elif choice == 2:
                search(lib, session)
            elif choice == 3:
                issue(lib, session)
            elif choice == 4:
                return_book(lib, session)
            elif choice == 5:
                report(lib, session)
            elif choice == 6:
                add_book(lib, session)
            elif choice == EXIT_CHOICE:
                exit_library(lib)
                break
            else:
                print_message("Invalid option.", "yellow")
        except (EOFError, KeyboardInterrupt):
            # Mutating commands already saved their file; skip the exit-time save.
            print()
            logger.info("Input closed. Leaving without final save.")
            break


# --- Typer CLI Application ---
app = typer.Typer(help=f"{APP_NAME} - interactive catalog menu", add_completion=False)


@app.command()
def cli(
    books_file: Optional[str] = typer.Option(None, "--books-file", help="Books file (default: LIBRARY_BOOKS_FILE or books.txt)"),
    users_file: Optional[str] = typer.Option(None, "--users-file", help="Users file (default: LIBRARY_USERS_FILE or users.txt)"),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    ),
):
    """Load the catalog and start the interactive menu."""
    if output:
        set_output_mode(output)
    lib = Library(books_file=books_file, users_file=users_file)
    run_menu(lib)


if __name__ == "__main__":
    app()
