"""Tests for the fade CLI."""

from __future__ import annotations

import itertools
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fade.cli import app

runner = CliRunner()
_counter = itertools.count()

ROUTES_SOURCE = '''
from fade import Fade, NotFound, ParamsMiddleware


class Pages:
    def index(self):
        pass

    def show(self, slug):
        if slug == "missing":
            raise NotFound()


class Errors:
    def not_found(self):
        pass

    def server_error(self, error):
        pass


class Auth(ParamsMiddleware):
    def handle(self):
        pass


router = Fade()
router.get("/", (Pages, "index")).name("home")
router.middleware([Auth]).get("/pages/{slug}", (Pages, "show")).name("pages.show")
router.put("/pages/{slug}", (Pages, "show"))
router.fallback_not_found(Errors, "not_found")
router.fallback_internal_server_error(Errors, "server_error")
'''


def _last_line(result) -> str:
    return result.output.strip().splitlines()[-1]


@pytest.fixture
def routes_file(tmp_path: Path) -> Path:
    path = tmp_path / f"fade_cli_routes_{next(_counter)}.py"
    path.write_text(ROUTES_SOURCE, encoding="utf-8")
    yield path
    sys.modules.pop(path.stem, None)


def test_routes_lists_table(routes_file: Path) -> None:
    result = runner.invoke(app, ["routes", str(routes_file)])
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert lines[0].split() == ["GET", "/"]
    assert lines[1].split() == ["GET", "/pages/{slug}", "Auth"]
    assert lines[2].split() == ["PUT", "/pages/{slug}"]


def test_url(routes_file: Path) -> None:
    result = runner.invoke(app, ["url", "pages.show", "about", "--target", str(routes_file)])
    assert result.exit_code == 0
    assert result.output.strip() == "/pages/about"


def test_url_without_params(routes_file: Path) -> None:
    result = runner.invoke(app, ["url", "home", "-t", str(routes_file)])
    assert result.exit_code == 0
    assert result.output.strip() == "/"


def test_url_error_exits_1(routes_file: Path) -> None:
    result = runner.invoke(app, ["url", "pages.show", "-t", str(routes_file)])
    assert result.exit_code == 1


def test_dispatch(routes_file: Path) -> None:
    ok = runner.invoke(app, ["dispatch", "GET", "/pages/about", "-t", str(routes_file)])
    assert _last_line(ok) == "200"

    missing = runner.invoke(app, ["dispatch", "GET", "/pages/missing", "-t", str(routes_file)])
    assert _last_line(missing) == "404"

    override = runner.invoke(app, ["dispatch", "POST", "/pages/x", "--override", "PUT", "-t", str(routes_file)])
    assert _last_line(override) == "200"


def test_module_var_target(routes_file: Path) -> None:
    sys.path.insert(0, str(routes_file.parent))
    try:
        result = runner.invoke(app, ["routes", f"{routes_file.stem}:router"])
    finally:
        sys.path.remove(str(routes_file.parent))
    assert result.exit_code == 0
    assert "/pages/{slug}" in result.output


def test_missing_file() -> None:
    result = runner.invoke(app, ["routes", "does_not_exist.py"])
    assert result.exit_code == 1


def test_file_without_router(tmp_path: Path) -> None:
    path = tmp_path / f"fade_cli_empty_{next(_counter)}.py"
    path.write_text("value = 1\n", encoding="utf-8")
    result = runner.invoke(app, ["routes", str(path)])
    sys.modules.pop(path.stem, None)
    assert result.exit_code == 1


def test_file_scanned_for_any_router_name(tmp_path: Path) -> None:
    path = tmp_path / f"fade_cli_named_{next(_counter)}.py"
    path.write_text(ROUTES_SOURCE.replace("router", "site"), encoding="utf-8")
    result = runner.invoke(app, ["routes", str(path)])
    sys.modules.pop(path.stem, None)
    assert result.exit_code == 0
    assert "/pages/{slug}" in result.output
