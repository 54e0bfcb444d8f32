"""Exception hierarchy shared by parsers, builders, providers and transports.

A resource that is simply not configured on the node is never an error:
readers return ``None`` (or an empty collection) for it.
"""
from typing import Optional


class EosError(Exception):
    """Base class for all eos-converge errors."""
    pass


class ValidationError(EosError, ValueError):
    """Malformed input, unparseable device state or an unidentifiable resource.

    Raised synchronously; aborts convergence of the affected resource only.
    """
    pass


class ParseError(ValidationError):
    """Error parsing a desired-state manifest."""
    pass


class TransportError(EosError):
    """The node could not be reached or rejected a request."""
    pass


class ConnectionFailed(TransportError):
    """Connection level failure (refused, reset, timed out, HTTP error)."""
    pass


class CommandError(TransportError):
    """The node rejected one or more commands."""

    def __init__(
        self,
        message: str,
        command: Optional[str] = None,
        code: Optional[int] = None,
        output: Optional[list] = None,
    ):
        super().__init__(message)
        self.command = command
        self.code = code
        self.output = output or []

    def __str__(self) -> str:
        text = super().__str__()
        if self.command:
            text = f"{text} (command: {self.command!r})"
        return text
