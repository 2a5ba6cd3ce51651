"""Configuration management."""

from book_search.config.loader import get_config, load_config, reload_config, reset_config
from book_search.config.schema import BookSearchConfig

__all__ = [
    "BookSearchConfig",
    "get_config",
    "load_config",
    "reload_config",
    "reset_config",
]
