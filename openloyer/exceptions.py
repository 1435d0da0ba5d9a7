"""Exception hierarchy for OpenLoyer.

The matching engine itself degrades messy bank data toward a score of 0 and
never raises. Exceptions are reserved for invalid configuration and for
malformed input documents handed to the CLI.

Usage:
    from openloyer.exceptions import ConfigurationError

    try:
        matcher = CompositeMatcher(settings)
    except ConfigurationError as e:
        logger.error("matcher_configuration_invalid", error=str(e), context=e.context)
"""

from __future__ import annotations

from typing import Any


class OpenLoyerError(Exception):
    """Base exception for all OpenLoyer errors.

    Attributes:
        message: Human-readable error message
        context: Additional context for debugging (dict)
        original_error: Original exception if wrapped
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.original_error = original_error

    def __str__(self) -> str:
        """Format exception with context for logging."""
        base = self.message
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base = f"{base} ({ctx_str})"
        if self.original_error:
            base = f"{base} [caused by: {type(self.original_error).__name__}]"
        return base

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, context={self.context!r})"


class ValidationError(OpenLoyerError):
    """Raised when an input document cannot be turned into domain objects."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        """Initialize validation error.

        Args:
            message: Error description
            field: Name of the invalid field
            value: The invalid value (truncated in context)
            **kwargs: Additional context
        """
        context = kwargs.get("context", {})
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)[:100]
        kwargs["context"] = context
        super().__init__(message, **kwargs)


class ConfigurationError(OpenLoyerError):
    """Raised when matching weights or thresholds are inconsistent."""

    def __init__(
        self,
        message: str,
        *,
        setting: str | None = None,
        expected: str | None = None,
        **kwargs: Any,
    ) -> None:
        context = kwargs.get("context", {})
        if setting:
            context["setting"] = setting
        if expected:
            context["expected"] = expected
        kwargs["context"] = context
        super().__init__(message, **kwargs)


def wrap_exception(
    error: Exception,
    message: str,
    *,
    exception_class: type[OpenLoyerError] = OpenLoyerError,
    **context: Any,
) -> OpenLoyerError:
    """Wrap an external exception in the OpenLoyer hierarchy.

    Example:
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as e:
            raise wrap_exception(e, "Invalid JSON", exception_class=ValidationError, path=str(path))
    """
    return exception_class(
        message,
        context=context,
        original_error=error,
    )


__all__ = [
    "OpenLoyerError",
    "ValidationError",
    "ConfigurationError",
    "wrap_exception",
]
