"""Route table, group scopes and segment matching."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict

from fade.errors import ConfigurationError
from fade.logs import get_logger, log_error
from fade.named_routes import NamedRouteRegistry, is_param_segment

if TYPE_CHECKING:
    from fade._types import ActionTarget, MiddlewareList, MiddlewareRef

logger = get_logger(__name__)


def split_path(path: str) -> list[str]:
    """Split a path or pattern into segments, ignoring outer slashes.

    ``"/blog/{id}/"`` -> ``["blog", "{id}"]``; ``"/"`` -> ``[""]``.
    """
    return path.strip("/").split("/")


def match_segments(pattern_parts: list[str], path_parts: list[str]) -> list[str] | None:
    """Return the parameter values if the segments line up, else ``None``."""
    if len(pattern_parts) != len(path_parts):
        return None
    params: list[str] = []
    for expected, actual in zip(pattern_parts, path_parts):
        if is_param_segment(expected):
            if not actual:
                return None
            params.append(actual)
        elif expected != actual:
            return None
    return params


@dataclass(frozen=True, slots=True)
class Action:
    """What runs for a (method, pattern): middlewares first, then the target."""

    target: ActionTarget
    middlewares: tuple[MiddlewareRef, ...] = ()

    def __repr__(self) -> str:
        return f"Action({_describe(self.target)}, middlewares={[_describe(m) for m in self.middlewares]})"


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match."""

    method: str
    pattern: str
    action: Action
    params: tuple[str, ...]


class GroupOptions(BaseModel):
    """Options accepted by ``Fade.group``.

    ``middleware`` is checked by :func:`fade.validation.validate_middleware`,
    not by the model.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = None
    prefix: str | None = None
    middleware: Any = None


@dataclass(frozen=True, slots=True)
class _GroupScope:
    name: str = ""
    prefix: str = ""
    middleware: tuple[MiddlewareRef, ...] = ()


class RouteHandle:
    """A registered route, used to name it after the fact.

    The handle remembers the group scope it was registered under, so naming
    does not depend on what was registered last.
    """

    __slots__ = ("_table", "group_name", "method", "pattern")

    def __init__(self, table: RouteTable, method: str, pattern: str, group_name: str) -> None:
        self._table = table
        self.method = method
        self.pattern = pattern
        self.group_name = group_name

    def name(self, name: str) -> RouteHandle:
        """Register this route under ``group name + name``."""
        self._table.set_named_route(self, name)
        return self

    def __repr__(self) -> str:
        return f"RouteHandle({self.method!r}, {self.pattern!r})"


class RouteTable:
    """Per-method ordered mapping of pattern to :class:`Action`.

    Insertion order is matching order: the first compatible pattern wins, so
    specific routes must be registered before general ones of the same depth.
    """

    __slots__ = ("_frozen", "_groups", "_routes", "_single_middleware", "named_routes")

    def __init__(self, named_routes: NamedRouteRegistry | None = None) -> None:
        self._routes: dict[str, dict[str, Action]] = {}
        self._groups: list[_GroupScope] = []
        self._single_middleware: list[MiddlewareRef] = []
        self._frozen = False
        self.named_routes = named_routes if named_routes is not None else NamedRouteRegistry()

    # ------------------------------------------------------------------
    # Group scope
    # ------------------------------------------------------------------

    @property
    def group_name(self) -> str:
        return "".join(scope.name for scope in self._groups)

    @property
    def group_prefix(self) -> str:
        return "".join(scope.prefix for scope in self._groups)

    @property
    def group_middleware(self) -> tuple[MiddlewareRef, ...]:
        return tuple(mw for scope in self._groups for mw in scope.middleware)

    def push_group(self, options: GroupOptions) -> None:
        self._groups.append(
            _GroupScope(
                name=options.name or "",
                prefix=options.prefix or "",
                middleware=tuple(options.middleware or ()),
            )
        )

    def pop_group(self) -> None:
        if self._groups:
            self._groups.pop()

    def clear_group(self) -> None:
        self._groups.clear()

    def set_single_middleware(self, middlewares: MiddlewareList) -> None:
        """Queue middleware for the next registered route only."""
        self._single_middleware.extend(middlewares)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def set_route(self, method: str, pattern: str, target: ActionTarget) -> RouteHandle:
        """Store *target* under ``group prefix + pattern`` for *method*.

        Pending single-route middleware replaces the group middleware for
        this route and is consumed by the call.
        """
        if self._frozen:
            exc = ConfigurationError(f"Cannot register {method} {pattern!r}: the route table is frozen")
            log_error(logger, exc)
            raise exc

        full_pattern = self.group_prefix + pattern
        middlewares = tuple(self._single_middleware) or self.group_middleware
        self._routes.setdefault(method, {})[full_pattern] = Action(target, middlewares)
        self._single_middleware = []
        logger.debug("Registered %s %s", method, full_pattern)
        return RouteHandle(self, method, full_pattern, self.group_name)

    def set_named_route(self, handle: RouteHandle, name: str) -> None:
        self.named_routes.set_route(handle.group_name + name, handle.pattern)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def routes(self) -> dict[str, dict[str, Action]]:
        return {method: dict(table) for method, table in self._routes.items()}

    def get_routes_by_method(self, method: str) -> dict[str, Action]:
        return self._routes.get(method, {})

    def get_route(self, method: str, pattern: str) -> Action | None:
        return self._routes.get(method, {}).get(pattern)

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Return the first route of *method* whose segments fit *path*."""
        routes = self.get_routes_by_method(method)
        if not routes:
            return None
        path_parts = split_path(path)
        for pattern, action in routes.items():
            params = match_segments(split_path(pattern), path_parts)
            if params is not None:
                return RouteMatch(method, pattern, action, tuple(params))
        return None


def _describe(ref: Any) -> str:
    if isinstance(ref, tuple) and len(ref) == 2:
        controller, method_name = ref
        return f"{_describe(controller)}.{method_name}"
    if isinstance(ref, type):
        return ref.__qualname__
    return getattr(ref, "__qualname__", None) or type(ref).__qualname__
