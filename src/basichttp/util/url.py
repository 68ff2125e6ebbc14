"""Syntactic URL validation and scheme extraction."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass
class UrlValidationResult:
    """Result of URL validation."""

    is_valid: bool
    rejection_reason: str | None = None

    @staticmethod
    def valid() -> UrlValidationResult:
        """Create a valid result."""
        return UrlValidationResult(is_valid=True)

    @staticmethod
    def invalid(reason: str) -> UrlValidationResult:
        """Create an invalid result with reason."""
        return UrlValidationResult(is_valid=False, rejection_reason=reason)


class UrlUtil:
    """
    Validates absolute URLs and extracts their parts.

    Validation is purely syntactic: any scheme is accepted as long as the
    URL carries one together with a host. Scheme policy (HTTP vs HTTPS) is
    enforced later, when a request is performed.

    Example:
        util = UrlUtil()
        util.validate_url("https://example.com/path")  # True
        util.get_scheme("https://example.com/path")    # "HTTPS"
    """

    def validate(self, url: str) -> UrlValidationResult:
        """
        Validate that a string is an absolute URL.

        Args:
            url: The URL to validate

        Returns:
            UrlValidationResult with is_valid and optional rejection_reason
        """
        if not isinstance(url, str):
            return UrlValidationResult.invalid(f"Expected a string, got {type(url).__name__}")

        if not url or url != url.strip() or any(ch.isspace() for ch in url):
            return UrlValidationResult.invalid("URL must not be empty or contain whitespace")

        try:
            parsed = urlsplit(url)
            # Accessing the port triggers range validation
            parsed.port
        except ValueError as e:
            return UrlValidationResult.invalid(f"Invalid URL format: {e}")

        if not parsed.scheme:
            return UrlValidationResult.invalid("URL has no scheme")

        if not parsed.hostname:
            return UrlValidationResult.invalid("URL has no host")

        return UrlValidationResult.valid()

    def validate_url(self, url: str) -> bool:
        """Quick check if URL is a valid absolute URL."""
        return self.validate(url).is_valid

    def get_scheme(self, url: str) -> str:
        """
        Get the uppercased scheme of a URL.

        Args:
            url: The URL to inspect

        Returns:
            Scheme token such as "HTTP" or "HTTPS", empty string if absent
        """
        return urlsplit(url).scheme.upper()

    def get_host(self, url: str) -> str | None:
        """Extract the lowercased host name from a URL."""
        return urlsplit(url).hostname
