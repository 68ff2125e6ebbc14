"""Helpers shared across basichttp."""

from .url import UrlUtil, UrlValidationResult

__all__ = ["UrlUtil", "UrlValidationResult"]
