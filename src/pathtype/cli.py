"""CLI commands using Typer."""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from pathtype import __version__
from pathtype.context import create_context
from pathtype.display import Display
from pathtype.errors import PathTypeError
from pathtype.path import Path, split_list as split_path_list
from pathtype.settings import Settings
from pathtype.walk import SKIP_SUBTREE, Abort

if TYPE_CHECKING:
    from pathtype.context import PathContext
    from pathtype.types import DirEntry

app = typer.Typer(
    name="pathtype",
    help="Lexical path operations and read-only traversal",
    no_args_is_help=True,
)

display = Display()


@dataclass
class _Options:
    """Global options collected by the app callback."""

    flavor: str | None = None
    config: pathlib.Path | None = None


_options = _Options()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        display.console.print(f"pathtype v{__version__}")
        raise typer.Exit()


def setup_logging(verbose: bool) -> None:
    """Send library debug records to stderr through Rich."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    logging.getLogger("pathtype").setLevel(logging.DEBUG)


@app.callback()
def main(
    flavor: Annotated[
        str | None,
        typer.Option("--flavor", "-f", help="Path flavor: auto, posix, darwin or windows"),
    ] = None,
    config: Annotated[
        pathlib.Path | None,
        typer.Option("--config", "-c", help="YAML settings file"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log debug output")] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """Lexical path operations and read-only traversal."""
    _options.flavor = flavor
    _options.config = config
    setup_logging(verbose)


def _load_settings() -> Settings:
    settings = Settings.load(_options.config)
    if _options.flavor:
        settings = Settings.model_validate(
            {**settings.model_dump(), "flavor": _options.flavor}
        )
    return settings


def _get_context(context: PathContext | None) -> PathContext:
    """Return the injected context or build one from the global options.

    Raises:
        typer.Exit: If the settings cannot be loaded.
    """
    if context is not None:
        return context
    try:
        return create_context(_load_settings())
    except (FileNotFoundError, ValueError) as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Turn library errors into an error line and exit status 1."""
    try:
        yield
    except PathTypeError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e


# ============================================================================
# Lexical Commands
# ============================================================================


def _each(paths: list[str], ctx: PathContext, op: Callable[[Path], object]) -> None:
    for text in paths:
        display.show_value(op(Path(text, ctx)))


@app.command()
def clean(
    paths: Annotated[list[str], typer.Argument(help="Paths to clean")],
    _context=None,
) -> None:
    """Print the shortest equivalent of each path."""
    ctx = _get_context(_context)
    _each(paths, ctx, Path.clean)


@app.command()
def base(
    paths: Annotated[list[str], typer.Argument(help="Paths")],
    _context=None,
) -> None:
    """Print the last element of each path."""
    ctx = _get_context(_context)
    _each(paths, ctx, Path.base)


@app.command("dir")
def dir_(
    paths: Annotated[list[str], typer.Argument(help="Paths")],
    _context=None,
) -> None:
    """Print all but the last element of each path."""
    ctx = _get_context(_context)
    _each(paths, ctx, Path.dir)


@app.command()
def ext(
    paths: Annotated[list[str], typer.Argument(help="Paths")],
    _context=None,
) -> None:
    """Print the extension of each path (empty line if none)."""
    ctx = _get_context(_context)
    _each(paths, ctx, Path.ext)


@app.command()
def split(
    path: Annotated[str, typer.Argument(help="Path to split")],
    _context=None,
) -> None:
    """Split a path after its final separator."""
    ctx = _get_context(_context)
    directory, file = Path(path, ctx).split()
    display.show_value(f"dir: {directory.text!r}, file: {file.text!r}")


@app.command()
def join(
    elems: Annotated[list[str], typer.Argument(help="Elements to join")],
    _context=None,
) -> None:
    """Join elements with the separator and clean the result."""
    ctx = _get_context(_context)
    display.show_value(Path(elems[0], ctx).join(*elems[1:]))


@app.command()
def rel(
    basepath: Annotated[str, typer.Argument(help="Base path")],
    targpath: Annotated[str, typer.Argument(help="Target path")],
    _context=None,
) -> None:
    """Print the target relative to the base."""
    ctx = _get_context(_context)
    with _reporting_errors():
        display.show_value(Path(basepath, ctx).rel(targpath))


@app.command()
def match(
    pattern: Annotated[str, typer.Argument(help="Shell pattern")],
    name: Annotated[str, typer.Argument(help="Name to test")],
    _context=None,
) -> None:
    """Report whether a name matches a shell pattern."""
    ctx = _get_context(_context)
    with _reporting_errors():
        matched = Path(name, ctx).match(pattern)
    display.show_value("true" if matched else "false")


@app.command("abs")
def abs_(
    paths: Annotated[list[str], typer.Argument(help="Paths")],
    _context=None,
) -> None:
    """Print the absolute form of each path."""
    ctx = _get_context(_context)
    with _reporting_errors():
        _each(paths, ctx, Path.abs)


@app.command("split-list")
def split_list(
    value: Annotated[str, typer.Argument(help="PATH-style list")],
    _context=None,
) -> None:
    """Print each entry of a PATH-style list."""
    ctx = _get_context(_context)
    for path in split_path_list(value, ctx):
        display.show_value(path)


# ============================================================================
# Filesystem Commands
# ============================================================================


@app.command()
def info(
    path: Annotated[str, typer.Argument(help="Path to describe")],
    _context=None,
) -> None:
    """Show the lexical parts of a path and its metadata if it exists."""
    ctx = _get_context(_context)
    p = Path(path, ctx)
    display.show_lexical(p)
    try:
        file_info = p.lstat()
    except FileNotFoundError:
        display.show_note(f"{path} does not exist")
        return
    except PathTypeError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    display.show_info(p, file_info)


@app.command()
def glob(
    pattern: Annotated[str, typer.Argument(help="Glob pattern")],
    root: Annotated[str, typer.Option("--root", "-r", help="Directory to glob in")] = "",
    _context=None,
) -> None:
    """List paths matching a pattern."""
    ctx = _get_context(_context)
    with _reporting_errors():
        matches = Path(root, ctx).glob(pattern)
    display.show_paths(matches)


@app.command()
def walk(
    root: Annotated[str, typer.Argument(help="Directory to walk")] = ".",
    skip: Annotated[
        list[str] | None, typer.Option("--skip", "-s", help="Directory names to skip")
    ] = None,
    flat: Annotated[bool, typer.Option("--flat", help="Print one path per line")] = False,
    _context=None,
) -> None:
    """Walk a tree in lexical order."""
    ctx = _get_context(_context)
    skipped = set(skip or [])
    entries: list[tuple[Path, bool]] = []

    def visit(path: Path, entry: DirEntry | None, err: BaseException | None):
        if entry is None:
            return Abort(err)
        if err is not None:
            display.show_warning(str(err))
            return None
        if entry.is_dir and path.text != root and entry.name in skipped:
            return SKIP_SUBTREE
        entries.append((path, entry.is_dir))
        return None

    start = Path(root, ctx)
    with _reporting_errors():
        start.walk_dir(visit)
    if flat:
        display.show_paths([p for p, _ in entries])
    else:
        display.show_tree(start, entries)


@app.command("eval")
def eval_(
    path: Annotated[str, typer.Argument(help="Path to evaluate")],
    _context=None,
) -> None:
    """Print a path with every symbolic link resolved."""
    ctx = _get_context(_context)
    with _reporting_errors():
        display.show_value(Path(path, ctx).eval_symlinks())


# ============================================================================
# Config Commands
# ============================================================================


@app.command()
def config(
    _context=None,
) -> None:
    """Show the effective configuration."""
    try:
        settings = _load_settings()
    except (FileNotFoundError, ValueError) as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    ctx = _get_context(_context)
    display.show_settings(settings, ctx.flavor.name)


if __name__ == "__main__":
    app()
