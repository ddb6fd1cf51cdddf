"""Library Catalog - Core Application Package

This package contains the core application modules including:
- Book and user records (book.py, user.py)
- Flat-file persistence (database.py)
- Catalog and loan logic (library.py)
- Login session state (session.py)
- Interactive menu CLI (main.py)
"""

__version__ = "1.0.0"
