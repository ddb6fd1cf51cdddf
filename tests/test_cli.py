import json
import os
from unittest.mock import MagicMock

from typer.testing import CliRunner

from libcatalog import main
from libcatalog.library import Library
from libcatalog.main import app
from libcatalog.session import Session

runner = CliRunner()


def run_cli(books_file, users_file, *answers, args=()):
    stdin = "\n".join(answers) + "\n"
    return runner.invoke(app, ["--books-file", books_file, "--users-file", users_file, *args], input=stdin)


def feed(monkeypatch, *answers):
    """Answer successive input() prompts with ``answers``."""
    it = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


def test_full_loan_cycle(books_file, users_file):
    result = run_cli(
        books_file, users_file,
        "0", "1", "Ann", "x",      # register
        "1", "1", "x",             # login
        "6", "Dune", "Herbert",    # add book
        "3", "dune",               # issue
        "5",                       # report
        "4", "DUNE",               # return
        "5",
        "7",
    )
    assert result.exit_code == 0
    out = result.stdout
    assert "Registration successful." in out
    assert "Login successful. Welcome, Ann" in out
    assert "Book added." in out
    assert "Book issued." in out
    assert "=== Report for Ann ===" in out
    assert "- Dune" in out
    assert "Book returned." in out
    assert "No books borrowed." in out
    assert "Exiting..." in out

    with open(books_file, encoding="utf-8") as f:
        assert f.read() == "1,Dune,Herbert,false\n"
    with open(users_file, encoding="utf-8") as f:
        assert f.read() == "1,Ann,x\n"


def test_commands_need_login(books_file, users_file):
    result = run_cli(books_file, users_file, "3", "4", "5", "6", "7")
    assert result.exit_code == 0
    assert result.stdout.count("Login first.") == 4


def test_registration_does_not_log_in(books_file, users_file):
    result = run_cli(books_file, users_file, "0", "1", "Ann", "x", "5", "7")
    assert "Registration successful." in result.stdout
    assert "Login first." in result.stdout


def test_invalid_menu_input(books_file, users_file):
    result = run_cli(books_file, users_file, "abc", "99", "7")
    assert result.exit_code == 0
    assert "Invalid input." in result.stdout
    assert "Invalid option." in result.stdout
    assert "Exiting..." in result.stdout


def test_search_prints_matches_or_not_found(books_file, users_file):
    with open(books_file, "w", encoding="utf-8") as f:
        f.write("1,Dune,Frank Herbert,true\n2,Emma,Jane Austen,false\n")

    result = run_cli(books_file, users_file, "2", "austen", "2", "nothing here", "7")
    assert "2: Emma by Jane Austen" in result.stdout
    assert "Dune" not in result.stdout
    assert "No book found." in result.stdout


def test_search_json_output(books_file, users_file):
    with open(books_file, "w", encoding="utf-8") as f:
        f.write("1,Dune,Frank Herbert,true\n")

    result = run_cli(books_file, users_file, "2", "dune", "7", args=("--output", "json"))
    line = next(l for l in result.stdout.splitlines() if l.startswith("["))
    assert json.loads(line) == [{"id": 1, "title": "Dune", "author": "Frank Herbert", "issued": True}]


def test_end_of_input_skips_exit_save(books_file, users_file):
    result = runner.invoke(app, ["--books-file", books_file, "--users-file", users_file], input="2\nx\n")
    assert result.exit_code == 0
    assert "No book found." in result.stdout
    assert not os.path.exists(books_file)
    assert not os.path.exists(users_file)


def test_login_wrong_password_or_unknown_id(lib, monkeypatch, capsys):
    lib.register_user(1, "Ann", "x")
    session = Session()

    feed(monkeypatch, "1", "wrong")
    main.login(lib, session)
    feed(monkeypatch, "42", "x")
    main.login(lib, session)

    assert capsys.readouterr().out.count("Invalid credentials.") == 2
    assert session.current_user is None


def test_non_numeric_user_id_is_rejected(lib, monkeypatch, capsys):
    feed(monkeypatch, "ann")
    main.register(lib, Session())
    assert "Invalid input." in capsys.readouterr().out
    assert lib.users == []


def test_duplicate_registration_is_not_saved(lib, monkeypatch, capsys):
    lib.register_user(1, "Ann", "x")
    save_mock = MagicMock(return_value=True)
    monkeypatch.setattr(Library, "save_users", save_mock)

    feed(monkeypatch, "1", "Mallory", "other")
    main.register(lib, Session())

    assert "User ID already exists." in capsys.readouterr().out
    save_mock.assert_not_called()
    assert lib.users[0].password == "x"


def test_issue_unknown_title_declined(lib, monkeypatch, capsys):
    session = Session()
    session.login(lib.register_user(1, "Ann", "x"))
    save_mock = MagicMock(return_value=True)
    monkeypatch.setattr(Library, "save_books", save_mock)

    feed(monkeypatch, "Unknown Title", "no")
    main.issue(lib, session)

    assert "Book added and issued." not in capsys.readouterr().out
    save_mock.assert_not_called()
    assert lib.books == []
    assert session.current_user.borrowed_books == []
    assert lib.next_book_id == 1


def test_issue_unknown_title_creates_and_issues(lib, monkeypatch, capsys):
    session = Session()
    ann = lib.register_user(1, "Ann", "x")
    session.login(ann)
    lib.add_book("Emma", "Austen")

    feed(monkeypatch, "Dune", "YES", "Herbert")
    main.issue(lib, session)

    assert "Book added and issued." in capsys.readouterr().out
    book = lib.find_book_by_title("Dune")
    assert book.id == 2
    assert book.issued is True
    assert ann.borrowed_books == [book]
    assert lib.next_book_id == 3


def test_issue_already_issued_reports(lib, monkeypatch, capsys):
    ann = lib.register_user(1, "Ann", "x")
    bob = lib.register_user(2, "Bob", "y")
    book = lib.add_book("Dune", "Herbert")
    lib.issue_book(book, ann)
    session = Session()
    session.login(bob)

    feed(monkeypatch, "Dune")
    main.issue(lib, session)

    assert "Book is already issued." in capsys.readouterr().out
    assert bob.borrowed_books == []


def test_return_only_looks_at_own_books(lib, monkeypatch, capsys):
    ann = lib.register_user(1, "Ann", "x")
    bob = lib.register_user(2, "Bob", "y")
    book = lib.add_book("Dune", "Herbert")
    lib.issue_book(book, ann)
    session = Session()
    session.login(bob)

    feed(monkeypatch, "Dune")
    main.return_book(lib, session)

    assert "Book not in your list." in capsys.readouterr().out
    assert book.issued is True
    assert ann.borrowed_books == [book]
