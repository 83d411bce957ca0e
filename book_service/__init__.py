"""Book inventory API with offset and cursor pagination."""

__version__ = "0.1.0"
