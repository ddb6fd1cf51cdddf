from typing import Iterable, Optional

from libcatalog.database import DELIMITER


class MenuValidator:
    """Parsing for the numeric answers typed at the menu and id prompts."""

    @staticmethod
    def parse_int(raw: Optional[str]) -> int:
        """Parse a whole-number answer. Raises ValueError for anything else."""
        if raw is None:
            raise ValueError("no input")
        token = raw.strip()
        if not token:
            raise ValueError("empty input")
        return int(token)

    @staticmethod
    def parse_choice(raw: Optional[str], valid: Iterable[int]) -> Optional[int]:
        """Return the chosen option, or None if it is an integer outside ``valid``.

        Non-integer input raises ValueError, like parse_int.
        """
        choice = MenuValidator.parse_int(raw)
        return choice if choice in set(valid) else None

    @staticmethod
    def is_yes(answer: Optional[str]) -> bool:
        # Only the full word counts; "y" is a no.
        return (answer or "").strip().lower() == "yes"


class TextValidator:
    """Checks on free text before it goes into a flat-file row."""

    @staticmethod
    def is_storable(text: Optional[str]) -> bool:
        if text is None:
            return False
        return DELIMITER not in text and "\n" not in text and "\r" not in text
