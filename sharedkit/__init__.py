"""File storage, a small typed data frame, a file cache and rate-limited page fetching."""

__version__ = "0.1.0"