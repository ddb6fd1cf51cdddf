import pytest

from libcatalog.library import Library
from libcatalog.utils.ui_helpers import OUTPUT_MODE_ENV


@pytest.fixture(autouse=True)
def plain_output(monkeypatch):
    # The CLI --output option writes to os.environ; start every test in plain mode
    monkeypatch.delenv(OUTPUT_MODE_ENV, raising=False)


@pytest.fixture
def books_file(tmp_path):
    return str(tmp_path / "books.txt")


@pytest.fixture
def users_file(tmp_path):
    return str(tmp_path / "users.txt")


@pytest.fixture
def lib(books_file, users_file):
    # Her test için ayrı veri dosyaları
    return Library(books_file=books_file, users_file=users_file)
