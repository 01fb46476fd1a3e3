"""Fade exception hierarchy.

Shared by the route table, the named-route registry and the dispatcher so
every module raises and catches the same types.
"""

from __future__ import annotations


class FadeError(Exception):
    """Base for all fade-specific errors."""

    default_message = "Router error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


# ---------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------


class ConfigurationError(FadeError):
    """Raised when the router is misconfigured.

    Always raised before any request is matched.
    """

    default_message = "Invalid router configuration"


class FallbackNotFoundControllerUndefined(ConfigurationError):  # noqa: N818
    default_message = "Fallback not found controller undefined"


class FallbackNotFoundMethodUndefined(ConfigurationError):  # noqa: N818
    default_message = "Fallback not found method undefined"


class FallbackInternalServerErrorControllerUndefined(ConfigurationError):  # noqa: N818
    default_message = "Fallback internal server error controller undefined"


class FallbackInternalServerErrorMethodUndefined(ConfigurationError):  # noqa: N818
    default_message = "Fallback internal server error method undefined"


class InvalidTypeMiddleware(ConfigurationError, TypeError):  # noqa: N818
    """A middleware does not expose ``handle()`` and ``set_params(params)``."""

    default_message = (
        "Every middleware must implement fade.middleware.Middleware "
        "(handle() and set_params(params))"
    )


# ---------------------------------------------------------------------
# Named routes
# ---------------------------------------------------------------------


class NamedRouteError(FadeError):
    """Base for reverse URL generation and name registration errors."""

    default_message = "Named route error"


class DuplicateNamedRoute(NamedRouteError):  # noqa: N818
    default_message = "Duplicate named route"


class UndefinedNamedRoute(NamedRouteError):  # noqa: N818
    default_message = "Undefined named route"


class InsufficientArgumentsForTheRoute(NamedRouteError):  # noqa: N818
    default_message = "Insufficient arguments for the route"


# ---------------------------------------------------------------------
# Dispatch signals
# ---------------------------------------------------------------------


class NotFound(FadeError):  # noqa: N818
    """Raised by a handler or middleware to answer with the not-found fallback."""

    default_message = "Not Found"
