"""Utility modules for chattext."""

from chattext.utils.logging import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
