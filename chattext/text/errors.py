"""Exceptions raised by the text component model."""

from __future__ import annotations


class ChatTextError(Exception):
    """Base class for every error raised by chattext."""


class InvalidInputError(ChatTextError, ValueError):
    """Rich-text input has an unsupported shape or lacks a required key."""


class InvalidStyleValueError(ChatTextError, ValueError):
    """A style attribute, color, or click/hover action could not be built."""


class OutOfRangeError(ChatTextError, IndexError):
    """A part index fell outside the component's bounds."""


class UnsupportedVariantError(ChatTextError, RuntimeError):
    """An event kind reached code that has no branch for it."""
