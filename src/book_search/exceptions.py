"""Exception hierarchy for book-search."""


class BookSearchError(Exception):
    """Base exception for all book-search errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Config Errors
class ConfigError(BookSearchError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    exit_code = 21
    user_message = "Configuration file not found"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Search Errors
class SearchError(BookSearchError):
    """Search-related errors."""

    exit_code = 30
    user_message = "Search error"


class SessionStateError(SearchError):
    """A search session was driven through an invalid transition."""

    exit_code = 31
    user_message = "Search session cannot be restarted"


# Book Errors
class BookError(BookSearchError):
    """Book loading errors."""

    exit_code = 40
    user_message = "Book error"


class BookNotFoundError(BookError):
    """Book file or directory not found."""

    exit_code = 41
    user_message = "Book file or directory not found"


class UnsupportedFormatError(BookError):
    """Book file has a format we cannot read."""

    exit_code = 42
    user_message = "Unsupported book format"


class ChapterLoadError(BookError):
    """A chapter could not be materialized."""

    exit_code = 43
    user_message = "Failed to load chapter"

    def __init__(
        self,
        message: str | None = None,
        *,
        chapter_index: int | None = None,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message, user_message=user_message)
        self.chapter_index = chapter_index


# Argument Errors
class InvalidArgumentError(BookSearchError):
    """Invalid argument provided."""

    exit_code = 50
    user_message = "Invalid argument"
