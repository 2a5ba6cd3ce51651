"""Pytest fixtures for book-search tests."""

import logging
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from book_search.config import reset_config
from book_search.config.defaults import ENV_CONFIG_PATH
from book_search.config.schema import BookSearchConfig

SAMPLE_BOOK = """\
A short note before the story begins.

Chapter 1
It was a quiet morning. Nothing moved in the valley.

Chapter 2
The fox jumped over the dog. Then the fox ran away.

Chapter 3
Mr. Smith saw the Fox at noon. He said nothing.
"""


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_book(temp_dir: Path) -> Path:
    """Create a plain-text book with a preamble and three chapters."""
    path = temp_dir / "story.txt"
    path.write_text(SAMPLE_BOOK)
    return path


@pytest.fixture
def book_dir(temp_dir: Path) -> Path:
    """Create a directory book with one file per chapter."""
    root = temp_dir / "chapters"
    root.mkdir()
    for i in range(1, 6):
        (root / f"{i:02d}.txt").write_text(
            f"Chapter {i} opens here. A fox appears in part {i}.\n"
        )
    (root / "notes.json").write_text("{}")
    return root


@pytest.fixture
def default_config() -> BookSearchConfig:
    """Get default configuration."""
    return BookSearchConfig()


@pytest.fixture(autouse=True)
def reset_config_fixture(
    temp_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Reset config singleton between tests and keep it off the real home dir."""
    monkeypatch.setenv(ENV_CONFIG_PATH, str(temp_dir / "missing-config.toml"))
    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo setup_logging so caplog sees package records."""
    yield
    package_logger = logging.getLogger("book_search")
    for handler in package_logger.handlers:
        handler.close()
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Create a test config file."""
    config_path = temp_dir / "config.toml"
    config_path.write_text("""
[search]
max_results = 50
min_query_length = 3
snippet_window = 40
whole_word = true

[loading]
retry_attempts = 2
retry_min_wait = 0.0
retry_max_wait = 0.0

[output]
default_format = "plain"
color = false

[logging]
level = "WARNING"
""")
    return config_path
