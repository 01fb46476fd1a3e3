"""Fade router: route registration and dispatch."""

from __future__ import annotations

import enum
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fade.config import RouterConfig
from fade.errors import (
    FallbackInternalServerErrorControllerUndefined,
    FallbackInternalServerErrorMethodUndefined,
    FallbackNotFoundControllerUndefined,
    FallbackNotFoundMethodUndefined,
    NotFound,
)
from fade.logs import configure_logging, get_logger, log_error
from fade.request import Request
from fade.routing import GroupOptions, RouteHandle, RouteMatch, RouteTable
from fade.validation import validate_action, validate_middleware

if TYPE_CHECKING:
    from fade._types import ActionTarget, MiddlewareList

logger = get_logger(__name__)

HTTP_SUCCESS_CODE = "200"
HTTP_NOT_FOUND_CODE = "404"
HTTP_INTERNAL_SERVER_ERROR_CODE = "500"


class Outcome(enum.Enum):
    """Why a dispatch ended the way it did."""

    SUCCESS = "success"
    ROUTE_NOT_MATCHED = "route_not_matched"
    HANDLER_REPORTED_NOT_FOUND = "handler_reported_not_found"
    HANDLER_FAULT = "handler_fault"


@dataclass(frozen=True, slots=True)
class DispatchResult:
    """Status code plus the internal outcome of one dispatch."""

    status: str
    outcome: Outcome
    error: BaseException | None = None
    match: RouteMatch | None = None


class Fade:
    """Segment-matching HTTP router.

    Parameters
    ----------
    config:
        Router configuration; defaults to :class:`RouterConfig()`.
    strict:
        When ``True``, every action is validated when it is registered.
        Overrides ``config.strict``.
    table:
        An existing :class:`RouteTable` to register into.

    Usage::

        router = Fade()
        router.get("/blog/{id}", (BlogController, "show")).name("blog.show")
        router.fallback_not_found(Errors, "not_found")
        router.fallback_internal_server_error(Errors, "server_error")
        router.dispatch(Request("GET", "/blog/7"))  # "200"
    """

    def __init__(
        self,
        config: RouterConfig | None = None,
        *,
        strict: bool | None = None,
        table: RouteTable | None = None,
    ) -> None:
        self.config = config or RouterConfig()
        self.strict = self.config.strict if strict is None else strict
        self.table = table if table is not None else RouteTable()
        self._not_found_controller: Any = None
        self._not_found_method: str | None = None
        self._error_controller: Any = None
        self._error_method: str | None = None

        if self.config.configure_logging:
            configure_logging(
                log_file=self.config.log_file,
                level=self.config.log_level,
                json_logs=self.config.log_format == "json",
                to_console=self.config.log_to_console,
            )

    # ------------------------------------------------------------------
    # Route registration
    # ------------------------------------------------------------------

    def _route(self, method: str, pattern: str, action: ActionTarget) -> RouteHandle:
        if self.strict:
            validate_action(action, pattern, method)
        return self.table.set_route(method, pattern, action)

    def get(self, pattern: str, action: ActionTarget) -> RouteHandle:
        return self._route("GET", pattern, action)

    def post(self, pattern: str, action: ActionTarget) -> RouteHandle:
        return self._route("POST", pattern, action)

    def put(self, pattern: str, action: ActionTarget) -> RouteHandle:
        return self._route("PUT", pattern, action)

    def delete(self, pattern: str, action: ActionTarget) -> RouteHandle:
        return self._route("DELETE", pattern, action)

    def middleware(self, middlewares: MiddlewareList) -> Fade:
        """Attach *middlewares* to the next registered route only."""
        validate_middleware(middlewares)
        self.table.set_single_middleware(middlewares)
        return self

    def group(self, options: GroupOptions | Mapping[str, Any], callback: Callable[[], Any]) -> None:
        """Register the routes created by *callback* under a shared scope.

        *options* may set ``name`` (name prefix), ``prefix`` (path prefix) and
        ``middleware``. The scope is dropped when *callback* returns or raises.
        """
        if not isinstance(options, GroupOptions):
            options = GroupOptions.model_validate(dict(options))
        if options.middleware is not None:
            validate_middleware(options.middleware)

        self.table.push_group(options)
        try:
            callback()
        finally:
            self.table.pop_group()

    def freeze(self) -> None:
        """Reject any further registration."""
        self.table.freeze()

    # ------------------------------------------------------------------
    # Fallbacks
    # ------------------------------------------------------------------

    def fallback_not_found(self, controller: Any, method: str) -> None:
        self._not_found_controller = controller
        self._not_found_method = method

    def fallback_internal_server_error(self, controller: Any, method: str) -> None:
        self._error_controller = controller
        self._error_method = method

    # ------------------------------------------------------------------
    # Named routes
    # ------------------------------------------------------------------

    def url_for(self, name: str, params: Any = ()) -> str:
        """Build the URL of the route registered as *name*."""
        return self.table.named_routes.get_named_route(name, params)

    get_named_route = url_for

    @property
    def named_routes(self) -> dict[str, str]:
        return self.table.named_routes.routes

    @property
    def routes(self) -> dict[str, dict[str, Any]]:
        return self.table.routes

    @staticmethod
    def method_put() -> str:
        """Hidden form field routing a POST form as PUT."""
        return "<input type='hidden' name='_method' value='PUT'>"

    @staticmethod
    def method_delete() -> str:
        """Hidden form field routing a POST form as DELETE."""
        return "<input type='hidden' name='_method' value='DELETE'>"

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def build_request(self, method: str, path: str, form: Mapping[str, Any] | None = None) -> Request:
        return Request(method, path, form, override_field=self.config.method_override_field)

    def dispatch(self, request: Request) -> str:
        """Run *request* through the router and return ``"200"``, ``"404"`` or ``"500"``."""
        return self.resolve(request).status

    def resolve(self, request: Request) -> DispatchResult:
        """Like :meth:`dispatch`, keeping the outcome, error and match."""
        self._verify_fallbacks()

        method = request.effective_method
        match = self.table.match(method, request.path)
        action = self.table.get_route(method, match.pattern) if match is not None else None
        if match is None or action is None:
            logger.info("No route matches %s %r", method, request.path)
            self._exec_fallback_not_found()
            return DispatchResult(HTTP_NOT_FOUND_CODE, Outcome.ROUTE_NOT_MATCHED)

        params = list(match.params)
        try:
            for ref in action.middlewares:
                middleware = ref()
                middleware.set_params(list(params))
                middleware.handle()
            _invoke(action.target, params)
        except NotFound as exc:
            log_error(logger, exc)
            self._exec_fallback_not_found()
            return DispatchResult(HTTP_NOT_FOUND_CODE, Outcome.HANDLER_REPORTED_NOT_FOUND, exc, match)
        except Exception as exc:
            log_error(logger, exc)
            self._exec_fallback_internal_server_error(exc)
            return DispatchResult(HTTP_INTERNAL_SERVER_ERROR_CODE, Outcome.HANDLER_FAULT, exc, match)

        return DispatchResult(HTTP_SUCCESS_CODE, Outcome.SUCCESS, None, match)

    def _verify_fallbacks(self) -> None:
        checks = (
            (self._not_found_controller, FallbackNotFoundControllerUndefined),
            (self._not_found_method, FallbackNotFoundMethodUndefined),
            (self._error_controller, FallbackInternalServerErrorControllerUndefined),
            (self._error_method, FallbackInternalServerErrorMethodUndefined),
        )
        for value, exc_class in checks:
            if not value:
                exc = exc_class()
                log_error(logger, exc)
                raise exc

    def _exec_fallback_not_found(self) -> None:
        _invoke((self._not_found_controller, self._not_found_method), [])

    def _exec_fallback_internal_server_error(self, error: BaseException) -> None:
        _invoke((self._error_controller, self._error_method), [error])


# ------------------------------------------------------------------
# Module-level helpers
# ------------------------------------------------------------------


def _invoke(target: Any, args: list[Any]) -> Any:
    """Call a ``(controller, "method")`` pair or a plain callable.

    Controller classes are instantiated with no arguments on every call.
    """
    if isinstance(target, tuple):
        controller, method_name = target
        instance = controller() if isinstance(controller, type) else controller
        return getattr(instance, method_name)(*args)
    return target(*args)
