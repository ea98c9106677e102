"""
Exception types and cause-chain rendering for FlowTracker2 conversion.

Failures are reported with their full cause chain: an exception raised
``from`` another (or while handling another) is rendered together with
every underlying cause, innermost last.
"""

import logging
import traceback
from dataclasses import dataclass
from typing import Any, Optional


class FlowTrackerError(Exception):
    """Base class for conversion errors."""


class FormatMismatchError(FlowTrackerError):
    """The input is not a FlowTracker2 measurement at all."""


class MalformedContentError(FlowTrackerError):
    """The input looks like a FlowTracker2 measurement but lacks expected structure."""


class UnsupportedConfigurationError(FlowTrackerError, ValueError):
    """A recognized instrument setting has no standardized equivalent."""


class LocationNotFoundError(FlowTrackerError, KeyError):
    """A site identifier could not be resolved to a location."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


@dataclass
class ErrorDetail:
    """
    Structured view of an exception and its causes.

    Attributes:
        type: Exception class name
        message: str() of the exception
        traceback: Formatted traceback of this exception only
        cause: The next exception in the chain, if any
    """

    type: str
    message: str
    traceback: str
    cause: Optional["ErrorDetail"] = None

    @classmethod
    def from_exception(cls, exception: BaseException) -> "ErrorDetail":
        """
        Build the chain for an exception.

        Follows ``__cause__`` first, then ``__context__`` unless context
        was suppressed with ``raise ... from None``.
        """
        seen: set[int] = set()
        return cls._build(exception, seen)

    @classmethod
    def _build(cls, exception: BaseException, seen: set[int]) -> "ErrorDetail":
        seen.add(id(exception))

        inner = exception.__cause__
        if inner is None and not exception.__suppress_context__:
            inner = exception.__context__

        cause = None
        if inner is not None and id(inner) not in seen:
            cause = cls._build(inner, seen)

        return cls(
            type=type(exception).__name__,
            message=str(exception),
            traceback="".join(traceback.format_tb(exception.__traceback__)),
            cause=cause,
        )

    def chain(self) -> list["ErrorDetail"]:
        """Return this detail followed by all of its causes."""
        details = []
        current: Optional[ErrorDetail] = self
        while current is not None:
            details.append(current)
            current = current.cause
        return details

    def render(self, label: str) -> str:
        """Render the chain recursively, one block per cause."""
        text = f"{label}: {self.type}: {self.message}"
        if self.traceback:
            text += f"\n{self.traceback.rstrip()}"
        if self.cause is not None:
            text += "\n" + self.cause.render("InnerException")
        return text

    def to_dicts(self) -> list[dict[str, Any]]:
        """Error detail dicts for result reporting, outermost first."""
        return [
            {"type": detail.type, "error": detail.message, "traceback": detail.traceback}
            for detail in self.chain()
        ]


def log_error_chain(logger: logging.Logger, label: str, exception: BaseException) -> ErrorDetail:
    """Log an exception with its full cause chain and return the structured detail."""
    detail = ErrorDetail.from_exception(exception)
    logger.error(detail.render(label))
    return detail
