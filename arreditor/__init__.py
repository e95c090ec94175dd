"""ARR Editor - codec and document model for legacy .arr typed-array files."""

__version__ = "1.0.0"
