"""Interactive force-directed graph layout and editing."""

__version__ = "1.0.0"
