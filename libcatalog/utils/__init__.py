"""Input parsing and output rendering helpers for the menu CLI."""
