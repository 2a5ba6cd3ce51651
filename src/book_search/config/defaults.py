"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "book-search"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "BOOKSEARCH_CONFIG"
ENV_LOG_LEVEL: Final[str] = "BOOKSEARCH_LOG_LEVEL"
ENV_MAX_RESULTS: Final[str] = "BOOKSEARCH_MAX_RESULTS"
ENV_FORMAT: Final[str] = "BOOKSEARCH_FORMAT"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# book-search configuration

[search]
max_results = 200
min_query_length = 2
snippet_window = 80
case_sensitive = false
whole_word = false

[loading]
retry_attempts = 1
retry_min_wait = 0.5
retry_max_wait = 4.0

[output]
default_format = "rich"
color = true

[logging]
level = "INFO"
json_format = false
"""


def ensure_directories() -> None:
    """Ensure all default directories exist."""
    DEFAULT_CONFIG_DIR.mkdir(parents=True, exist_ok=True)


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
