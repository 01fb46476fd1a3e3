"""Segment-matching HTTP router with named routes and fallback handlers."""

__version__ = "0.1.0"

from fade.app import DispatchResult, Fade, Outcome
from fade.config import RouterConfig
from fade.errors import NotFound
from fade.middleware import Middleware, ParamsMiddleware
from fade.named_routes import NamedRouteRegistry
from fade.request import Request
from fade.routing import Action, GroupOptions, RouteHandle, RouteMatch, RouteTable

__all__ = [
    "Action",
    "DispatchResult",
    "Fade",
    "GroupOptions",
    "Middleware",
    "NamedRouteRegistry",
    "NotFound",
    "Outcome",
    "ParamsMiddleware",
    "Request",
    "RouteHandle",
    "RouteMatch",
    "RouteTable",
    "RouterConfig",
]
