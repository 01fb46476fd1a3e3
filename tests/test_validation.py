"""Tests for registration-time middleware and strict-mode action validation."""

from __future__ import annotations

import pytest

from fade.errors import ConfigurationError, InvalidTypeMiddleware
from fade.middleware import Middleware, ParamsMiddleware
from fade.validation import is_middleware, validate_action, validate_middleware

# -- Test doubles -----------------------------------------------------------


class Good(ParamsMiddleware):
    def handle(self) -> None: ...


class DuckTyped:
    def set_params(self, params: list[str]) -> None: ...

    def handle(self) -> None: ...


class MissingSetParams:
    def handle(self) -> None: ...


class Controller:
    not_callable = "x"

    def index(self) -> None: ...


# -- Middleware shape -------------------------------------------------------


def test_params_middleware_is_a_middleware() -> None:
    assert is_middleware(Good)
    assert isinstance(Good(), Middleware)


def test_duck_typed_middleware_accepted() -> None:
    validate_middleware([DuckTyped])


def test_middleware_instance_rejected() -> None:
    assert not is_middleware(Good())
    with pytest.raises(InvalidTypeMiddleware, match="not a middleware class"):
        validate_middleware([Good()])


def test_missing_method_rejected() -> None:
    with pytest.raises(InvalidTypeMiddleware, match="MissingSetParams"):
        validate_middleware([Good, MissingSetParams])


def test_rejection_is_configuration_and_type_error() -> None:
    with pytest.raises(ConfigurationError):
        validate_middleware([int])
    with pytest.raises(TypeError):
        validate_middleware([int])


def test_middleware_must_be_a_list() -> None:
    with pytest.raises(InvalidTypeMiddleware, match="list"):
        validate_middleware("Good")


def test_params_mixin_copies_params() -> None:
    params = ["1"]
    middleware = Good()
    middleware.set_params(params)
    params.append("2")
    assert middleware.params == ["1"]


# -- Strict-mode actions ----------------------------------------------------


def test_controller_pair_ok() -> None:
    validate_action((Controller, "index"), "/x", "GET")
    validate_action((Controller(), "index"), "/x", "GET")


def test_plain_callable_ok() -> None:
    validate_action(lambda: None, "/x", "GET")


def test_unknown_controller_method_raises() -> None:
    with pytest.raises(TypeError, match="has no callable attribute 'show'"):
        validate_action((Controller, "show"), "/x", "GET")


def test_non_callable_attribute_raises() -> None:
    with pytest.raises(TypeError, match="has no callable attribute 'not_callable'"):
        validate_action((Controller, "not_callable"), "/x", "GET")


def test_malformed_pair_raises() -> None:
    with pytest.raises(TypeError, match=r"must be a \(controller, 'method'\) pair"):
        validate_action((Controller, "index", "extra"), "/x", "GET")


def test_not_callable_raises() -> None:
    with pytest.raises(TypeError, match="neither callable"):
        validate_action("Controller@index", "/x", "POST")


def test_message_names_route() -> None:
    with pytest.raises(TypeError, match=r"\[PUT /blog/\{id\}\]"):
        validate_action((Controller, "update"), "/blog/{id}", "PUT")
