"""Middleware protocol and the params mixin.

A middleware is any class exposing::

    def set_params(self, params: list[str]) -> None: ...
    def handle(self) -> None: ...

No base class is required; the router checks the shape when the middleware
is attached to a route, not when a request is dispatched. The dispatcher
builds a fresh instance per request, hands it the path parameters, then calls
``handle()``. Raising :class:`fade.errors.NotFound` from ``handle()`` answers
with the not-found fallback; any other exception answers with the
internal-error fallback.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Middleware(Protocol):
    """Protocol for fade middleware.

    Example::

        class Authenticated(ParamsMiddleware):
            def handle(self) -> None:
                if not session.user:
                    raise NotFound()
    """

    def set_params(self, params: list[str]) -> None: ...

    def handle(self) -> None: ...


class ParamsMiddleware:
    """Mixin storing the extracted path parameters on ``self.params``."""

    def __init__(self) -> None:
        self.params: list[str] = []

    def set_params(self, params: list[str]) -> None:
        self.params = list(params)
