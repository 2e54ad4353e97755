"""flowtext - inline markup and structural editing for task text."""

__version__ = "0.3.0"
