"""book-search: incremental, cancellable full-text search across book chapters."""

__version__ = "0.1.0"
