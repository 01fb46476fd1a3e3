"""Route action type definitions."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

Handler = Callable[..., Any]
# (ControllerClass, "method") or (controller_instance, "method")
ControllerBinding = tuple[Any, str]
ActionTarget = ControllerBinding | Handler
MiddlewareRef = Any
MiddlewareList = Sequence[MiddlewareRef]
