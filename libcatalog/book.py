from __future__ import annotations

from typing import List


class Book:
    """Represents a single book in the catalog."""

    def __init__(self, book_id: int, title: str, author: str, issued: bool = False) -> None:
        self.id = book_id
        self.title = title
        self.author = author
        self.issued = issued

    def __str__(self) -> str:
        suffix = " (Issued)" if self.issued else ""
        return f"{self.id}: {self.title} by {self.author}{suffix}"

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r}, issued={self.issued!r})"

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against title or author."""
        q = query.lower()
        return q in self.title.lower() or q in self.author.lower()

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "author": self.author, "issued": self.issued}

    def to_row(self) -> List[str]:
        return [str(self.id), self.title, self.author, "true" if self.issued else "false"]

    @staticmethod
    def from_row(fields: List[str]) -> "Book":
        """Build a Book from the four fields of a books-file row.

        Raises ValueError when the row does not hold exactly an integer id,
        a title, an author and a ``true``/``false`` flag.
        """
        if len(fields) != 4:
            raise ValueError(f"expected 4 fields, got {len(fields)}")
        raw_id, title, author, raw_flag = fields
        flag = raw_flag.strip().lower()
        if flag not in ("true", "false"):
            raise ValueError(f"invalid issued flag {raw_flag!r}")
        return Book(int(raw_id), title, author, issued=(flag == "true"))
