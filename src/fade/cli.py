"""Fade command-line interface powered by Typer."""

import importlib
import sys
from pathlib import Path
from typing import Annotated

import typer

from fade.errors import NamedRouteError

app = typer.Typer(name="fade", add_completion=False, no_args_is_help=True)


# ------------------------------------------------------------------
# Target resolution
# ------------------------------------------------------------------


def _load_router(path: str):
    """Turn a CLI *path* argument into a ``Fade`` instance.

    Accepted forms:
    - ``module:var``   → imports ``module`` and reads ``var``
    - ``file.py``      → imports ``file``, scans for a Fade instance
    """
    from fade.app import Fade

    if ":" in path:
        module_name, var_name = path.split(":", 1)
        mod = _import(module_name)
        router = getattr(mod, var_name, None)
        if not isinstance(router, Fade):
            typer.echo(f"Error: {path!r} is not a Fade instance.", err=True)
            raise typer.Exit(1)
        return router

    file = Path(path)
    if not file.exists():
        typer.echo(f"Error: file {path!r} not found.", err=True)
        raise typer.Exit(1)

    # Ensure the file's directory is on sys.path so we can import it.
    parent = str(file.resolve().parent)
    if parent not in sys.path:
        sys.path.insert(0, parent)

    mod = _import(file.stem)
    # "router" and "app" win over any other module attribute.
    names = ["router", "app", *(name for name in dir(mod) if not name.startswith("_"))]
    router = next((getattr(mod, name) for name in names if isinstance(getattr(mod, name, None), Fade)), None)
    if router is None:
        typer.echo(
            f"Error: no Fade instance found in {path!r}. Provide an explicit target, e.g. routes:router",
            err=True,
        )
        raise typer.Exit(1)
    return router


def _import(module_name: str) -> object:
    try:
        return importlib.import_module(module_name)
    except Exception as exc:
        typer.echo(f"Error importing {module_name!r}: {exc}", err=True)
        raise typer.Exit(1) from exc


# ------------------------------------------------------------------
# Commands
# ------------------------------------------------------------------


@app.command()
def routes(
    path: Annotated[str, typer.Argument(help="Python file or module:var target.")] = "routes.py",
) -> None:
    """List every registered route in matching order."""
    router = _load_router(path)
    for method, table in router.routes.items():
        for pattern, action in table.items():
            middlewares = ", ".join(getattr(m, "__qualname__", type(m).__qualname__) for m in action.middlewares)
            typer.echo(f"{method:<7} {pattern:<30} {middlewares}".rstrip())


@app.command()
def url(
    name: Annotated[str, typer.Argument(help="Route name.")],
    params: Annotated[list[str] | None, typer.Argument(help="Positional route parameters.")] = None,
    path: Annotated[str, typer.Option("--target", "-t", help="Python file or module:var target.")] = "routes.py",
) -> None:
    """Print the URL of a named route."""
    router = _load_router(path)
    try:
        typer.echo(router.url_for(name, params or []))
    except NamedRouteError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


@app.command()
def dispatch(
    method: Annotated[str, typer.Argument(help="HTTP method.")],
    request_path: Annotated[str, typer.Argument(help="Request path.")],
    override: Annotated[str | None, typer.Option(help="Method override sent in the POST form.")] = None,
    path: Annotated[str, typer.Option("--target", "-t", help="Python file or module:var target.")] = "routes.py",
) -> None:
    """Dispatch a request and print the resulting status code."""
    router = _load_router(path)
    form = {router.config.method_override_field: override} if override else None
    typer.echo(router.dispatch(router.build_request(method, request_path, form)))
