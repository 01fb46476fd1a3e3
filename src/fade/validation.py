"""Registration-time checks for middleware and route actions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fade.errors import InvalidTypeMiddleware
from fade.logs import get_logger, log_error
from fade.middleware import Middleware

if TYPE_CHECKING:
    from fade._types import MiddlewareList

logger = get_logger(__name__)


def is_middleware(ref: Any) -> bool:
    """Return True if *ref* is a middleware class.

    Instances are rejected: a fresh middleware is built for every dispatch.
    """
    return isinstance(ref, type) and issubclass(ref, Middleware)


def validate_middleware(middlewares: MiddlewareList) -> None:
    """Raise :class:`InvalidTypeMiddleware` for the first entry lacking the protocol."""
    if isinstance(middlewares, (str, bytes)) or not hasattr(middlewares, "__iter__"):
        exc = InvalidTypeMiddleware(f"Middleware must be given as a list, got {middlewares!r}")
        log_error(logger, exc)
        raise exc
    for ref in middlewares:
        if not is_middleware(ref):
            name = getattr(ref, "__qualname__", None) or repr(ref)
            exc = InvalidTypeMiddleware(
                f"{name} is not a middleware class: implement fade.middleware.Middleware "
                f"(handle() and set_params(params))"
            )
            log_error(logger, exc)
            raise exc


def validate_action(target: Any, pattern: str, method: str) -> None:
    """Validate a route action at registration time (strict mode).

    Raises :class:`TypeError` with an actionable message when the action
    cannot be invoked.
    """
    if isinstance(target, tuple):
        if len(target) != 2 or not isinstance(target[1], str):
            _strict_violation(
                f"\n\nStrict-mode violation in route [{method} {pattern}]\n"
                f"  Current: {target!r}\n"
                f"  Problem: A controller action must be a (controller, 'method') pair.\n"
                f"  Fix:     Use (MyController, 'index') or pass a function.\n"
            )
        controller, method_name = target
        label = controller.__qualname__ if isinstance(controller, type) else type(controller).__qualname__
        if not callable(getattr(controller, method_name, None)):
            _strict_violation(
                f"\n\nStrict-mode violation in route [{method} {pattern}]\n"
                f"  Current: ({label}, {method_name!r})\n"
                f"  Problem: {label} has no callable attribute {method_name!r}.\n"
                f"  Fix:     Define {label}.{method_name}() or fix the method name.\n"
            )
        return

    if not callable(target):
        _strict_violation(
            f"\n\nStrict-mode violation in route [{method} {pattern}]\n"
            f"  Current: {target!r}\n"
            f"  Problem: The action is neither callable nor a (controller, 'method') pair.\n"
            f"  Fix:     Pass a function or a (MyController, 'index') pair.\n"
        )


def _strict_violation(message: str) -> None:
    exc = TypeError(message)
    log_error(logger, exc)
    raise exc
