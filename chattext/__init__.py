"""chattext - immutable styled chat text components."""

__version__ = "0.1.0"
