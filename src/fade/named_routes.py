"""Named routes and reverse URL generation."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from fade.errors import DuplicateNamedRoute, InsufficientArgumentsForTheRoute, UndefinedNamedRoute
from fade.logs import get_logger, log_error

logger = get_logger(__name__)

PARAM_SEGMENT_RE = re.compile(r"\{\w+\}")


def is_param_segment(segment: str) -> bool:
    """Return True if *segment* holds an ``{identifier}`` placeholder.

    The whole segment stands for the parameter: ``{name}.json`` captures
    ``report.json`` and is replaced wholesale when building a URL.
    """
    return PARAM_SEGMENT_RE.search(segment) is not None


class NamedRouteRegistry:
    """Globally unique route names mapped to their full patterns."""

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: dict[str, str] = {}

    @property
    def routes(self) -> dict[str, str]:
        return dict(self._routes)

    def __contains__(self, name: object) -> bool:
        return name in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def get_route(self, name: str) -> str:
        """Return the pattern registered under *name*, or ``""``."""
        return self._routes.get(name, "")

    def set_route(self, name: str, pattern: str) -> None:
        """Register *pattern* under *name*.

        Raises :class:`DuplicateNamedRoute` and leaves the registry untouched
        if the name is taken.
        """
        if name in self._routes:
            exc = DuplicateNamedRoute(f"Duplicate named route: {name!r}")
            log_error(logger, exc)
            raise exc
        self._routes[name] = pattern
        logger.debug("Named route %r -> %s", name, pattern)

    def get_named_route(self, name: str, params: Any = ()) -> str:
        """Build the URL of route *name*, filling placeholders positionally.

        *params* must hold exactly one value per ``{param}`` segment. Mapping
        keys are ignored; only the values are used, in order. A single string
        or other scalar counts as one value.
        """
        if name not in self._routes:
            exc = UndefinedNamedRoute(f"Undefined named route: {name!r}")
            log_error(logger, exc)
            raise exc

        if params is None:
            values = []
        elif isinstance(params, Mapping):
            values = list(params.values())
        elif isinstance(params, (str, bytes)) or not isinstance(params, Iterable):
            values = [params]
        else:
            values = list(params)
        segments = self._routes[name].split("/")
        expected = sum(1 for segment in segments if is_param_segment(segment))

        if len(values) != expected:
            exc = InsufficientArgumentsForTheRoute(
                f"{len(values)} arguments were provided, but the route expects {expected}"
            )
            log_error(logger, exc)
            raise exc

        fill = iter(values)
        return "/".join(str(next(fill)) if is_param_segment(segment) else segment for segment in segments)
