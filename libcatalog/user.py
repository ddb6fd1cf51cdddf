from __future__ import annotations

from typing import List, Optional

from libcatalog.book import Book


class User:
    """A registered library user and the books they currently hold.

    The borrowed list lives only in memory; it is rebuilt empty on every load.
    """

    def __init__(self, user_id: int, name: str, password: str,
                 borrowed_books: Optional[List[Book]] = None) -> None:
        self.id = user_id
        self.name = name
        self.password = password
        self.borrowed_books: List[Book] = borrowed_books or []

    def __str__(self) -> str:
        return f"{self.id}: {self.name}"

    def check_password(self, password: str) -> bool:
        return self.password == password

    def borrow(self, book: Book) -> None:
        self.borrowed_books.append(book)

    def give_back(self, book: Book) -> None:
        self.borrowed_books.remove(book)

    def find_borrowed(self, title: str) -> Optional[Book]:
        """First borrowed book whose title equals ``title`` ignoring case."""
        wanted = title.lower()
        for book in self.borrowed_books:
            if book.title.lower() == wanted:
                return book
        return None

    def to_row(self) -> List[str]:
        return [str(self.id), self.name, self.password]

    @staticmethod
    def from_row(fields: List[str]) -> "User":
        if len(fields) != 3:
            raise ValueError(f"expected 3 fields, got {len(fields)}")
        raw_id, name, password = fields
        return User(int(raw_id), name, password)
