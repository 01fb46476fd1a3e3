"""Request context handed to the dispatcher."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

METHOD_OVERRIDE_FIELD = "_method"


class Request:
    """The method and path of one inbound request.

    The transport layer builds it; fade only reads it. HTML forms can only
    send GET and POST, so a POST body carrying an override field (``_method``
    by default) is routed as the method it names.
    """

    __slots__ = ("form", "method", "override_field", "path")

    def __init__(
        self,
        method: str,
        path: str,
        form: Mapping[str, Any] | None = None,
        *,
        override_field: str = METHOD_OVERRIDE_FIELD,
    ) -> None:
        self.method = method.upper()
        self.path = path
        self.form: Mapping[str, Any] = form or {}
        self.override_field = override_field

    @property
    def effective_method(self) -> str:
        """The method used for routing, after the form override."""
        if self.method == "POST":
            override = self.form.get(self.override_field)
            if override:
                return str(override).upper()
        return self.method

    @classmethod
    def from_scope(
        cls,
        scope: Mapping[str, Any],
        form: Mapping[str, Any] | None = None,
        *,
        override_field: str = METHOD_OVERRIDE_FIELD,
    ) -> Request:
        """Build a request from an ASGI/WSGI-like mapping.

        Reads ``method``/``path`` first, then the CGI names
        ``REQUEST_METHOD``/``PATH_INFO``.
        """
        method = scope.get("method") or scope.get("REQUEST_METHOD") or "GET"
        path = scope.get("path") or scope.get("PATH_INFO") or "/"
        return cls(method, path, form, override_field=override_field)

    def __repr__(self) -> str:
        return f"Request({self.effective_method!r}, {self.path!r})"
