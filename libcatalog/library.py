import logging
import os
from typing import List, Optional

from libcatalog import database
from libcatalog.book import Book
from libcatalog.user import User

logger = logging.getLogger(__name__)


class LibraryError(Exception):
    """Base class for catalog rule violations reported back to the user."""


class BookAlreadyIssuedError(LibraryError, ValueError):
    pass


class BookNotBorrowedError(LibraryError, LookupError):
    pass


class DuplicateUserError(LibraryError, ValueError):
    pass


class Library:
    """Manages the in-memory books, users and loan state, and their persistence."""

    def __init__(self, books_file: Optional[str] = None, users_file: Optional[str] = None) -> None:
        self.books_file = os.fspath(books_file or database.BOOKS_FILE)
        self.users_file = os.fspath(users_file or database.USERS_FILE)
        self.books: List[Book] = database.load_books(self.books_file)
        self.users: List[User] = database.load_users(self.users_file)
        # Never persisted; always one past the highest loaded id.
        self.next_book_id: int = max((b.id for b in self.books), default=0) + 1

    # ------------------------- Lookups ------------------------- #
    def find_book_by_title(self, title: str) -> Optional[Book]:
        """First book (in list order) whose title equals ``title`` ignoring case."""
        wanted = title.lower()
        for book in self.books:
            if book.title.lower() == wanted:
                return book
        return None

    def find_user_by_id(self, user_id: int) -> Optional[User]:
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def search_books(self, query: str) -> List[Book]:
        """Search for books by title or author (case-insensitive substring)."""
        return [book for book in self.books if book.matches(query)]

    def authenticate(self, user_id: int, password: str) -> Optional[User]:
        """Return the user matching both id and password, or None."""
        for user in self.users:
            if user.id == user_id and user.check_password(password):
                return user
        return None

    # ------------------------- Core operations ------------------------- #
    def add_book(self, title: str, author: str) -> Book:
        """Append a new, unissued book under the next id. Does not persist."""
        book = Book(self.next_book_id, title, author)
        self.next_book_id += 1
        self.books.append(book)
        logger.info(f"Added book {book.id}: {book.title}")
        return book

    def issue_book(self, book: Book, user: User) -> None:
        if book.issued:
            raise BookAlreadyIssuedError(f"Book '{book.title}' is already issued.")
        book.issued = True
        user.borrow(book)
        logger.info(f"Issued book {book.id} to user {user.id}")

    def return_book(self, book: Book, user: User) -> None:
        """Take ``book`` back from ``user``.

        Membership is decided by title among the user's own borrowed books, so
        a book held by someone else (or issued in an earlier run) is rejected.
        """
        held = user.find_borrowed(book.title)
        if held is None:
            raise BookNotBorrowedError(f"Book '{book.title}' is not in the borrowed list of user {user.id}.")
        held.issued = False
        user.give_back(held)
        logger.info(f"User {user.id} returned book {held.id}")

    def register_user(self, user_id: int, name: str, password: str) -> User:
        if self.find_user_by_id(user_id) is not None:
            raise DuplicateUserError(f"User ID {user_id} already exists.")
        user = User(user_id, name, password)
        self.users.append(user)
        logger.info(f"Registered user {user_id}")
        return user

    # ------------------------- Persistence ------------------------- #
    def save_books(self) -> bool:
        return database.save_books(self.books, self.books_file)

    def save_users(self) -> bool:
        return database.save_users(self.users, self.users_file)

    def save_all(self) -> bool:
        books_ok = self.save_books()
        users_ok = self.save_users()
        return books_ok and users_ok
