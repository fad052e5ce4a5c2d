"""
Exception classes for the europmc library.

Callers can distinguish the failure modes:
- ParseError: the document is not well-formed article XML
- HTTPError: Europe PMC answered with a non-success status
- InvalidArgumentError: an identifier was empty
- TransportError: the request never got a response

Missing files are reported with the built-in FileNotFoundError/OSError.
"""

from __future__ import annotations


class EuroPMCError(Exception):
    """Base exception for europmc errors."""

    pass


class ParseError(EuroPMCError):
    """
    Raised when a paper cannot be parsed.

    Examples:
        - Malformed XML
        - Root element is not <article>
        - The underlying stream failed while being read
    """

    pass


class HTTPError(EuroPMCError):
    """Raised when the API returns a non-success status code."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        if body:
            message = f"Status code {status_code}: {body}"
        else:
            message = f"Status code {status_code}"
        super().__init__(message)


class InvalidArgumentError(EuroPMCError, ValueError):
    """Raised when a required identifier is empty."""

    pass


class TransportError(EuroPMCError, OSError):
    """
    Raised when the HTTP request fails before a response arrives.

    Examples:
        - DNS or connection failure
        - Timeout
    """

    pass
