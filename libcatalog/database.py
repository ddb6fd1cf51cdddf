"""Flat-file persistence for books and users.

Each table is a plain text file with one comma-separated row per record and
no header:

    books.txt   id,title,author,true|false
    users.txt   id,name,password

Fields are not escaped. A value containing a comma produces a row with the
wrong number of fields, which is skipped (with a warning) on the next load.
Borrowed lists are not stored, so after a reload every user starts with an
empty list while issued flags on books are kept as written.
"""

import logging
import os
from typing import Callable, Iterable, List, Optional, TypeVar

from libcatalog.book import Book
from libcatalog.config import settings
from libcatalog.user import User

logger = logging.getLogger(__name__)

# Default file locations, relative to the process working directory.
BOOKS_FILE = settings.books_file
USERS_FILE = settings.users_file
DELIMITER = ","

T = TypeVar("T")


def _read_rows(path: str, parse: Callable[[List[str]], T], label: str) -> List[T]:
    """Parse every row of ``path`` with ``parse``; skip rows it rejects."""
    records: List[T] = []
    try:
        with open(path, "r", encoding=settings.file_encoding, errors="replace") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.rstrip("\r\n")
                if not line:
                    continue
                try:
                    records.append(parse(line.split(DELIMITER)))
                except ValueError as e:
                    logger.warning(f"Skipping malformed {label} row {path}:{line_no}: {e}")
    except OSError:
        logger.info(f"No existing {label} file found. Starting fresh.")
        return []
    logger.debug(f"Loaded {len(records)} {label}s from {path}")
    return records


def _write_rows(path: str, rows: Iterable[List[str]], label: str) -> bool:
    """Rewrite ``path`` completely. Returns False (after logging) on failure."""
    tmp_path = f"{path}.tmp"
    count = 0
    try:
        with open(tmp_path, "w", encoding=settings.file_encoding, newline="\n") as f:
            for row in rows:
                f.write(DELIMITER.join(row) + "\n")
                count += 1
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Error saving {label}s: {e}")
        if os.path.exists(tmp_path):
            try:
                os.remove(tmp_path)
            except OSError:
                logger.debug(f"Could not remove temporary file {tmp_path}")
        return False
    logger.debug(f"Saved {count} {label}s to {path}")
    return True


def load_books(path: Optional[str] = None) -> List[Book]:
    """Read all books in file order. A missing file yields an empty list."""
    return _read_rows(os.fspath(path or BOOKS_FILE), Book.from_row, "book")


def save_books(books: Iterable[Book], path: Optional[str] = None) -> bool:
    return _write_rows(os.fspath(path or BOOKS_FILE), (b.to_row() for b in books), "book")


def load_users(path: Optional[str] = None) -> List[User]:
    """Read all users; passwords come back exactly as stored."""
    return _read_rows(os.fspath(path or USERS_FILE), User.from_row, "user")


def save_users(users: Iterable[User], path: Optional[str] = None) -> bool:
    return _write_rows(os.fspath(path or USERS_FILE), (u.to_row() for u in users), "user")
