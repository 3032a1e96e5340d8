"""Input validation for user-supplied request parameters."""

from .sanitizer import InputSanitizer

__all__ = ["InputSanitizer"]
