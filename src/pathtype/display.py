"""Rich output for the command line interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

if TYPE_CHECKING:
    from pathtype.path import Path
    from pathtype.settings import Settings
    from pathtype.types import FileInfo


class Display:
    """Console output for pathtype commands."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize display.

        Args:
            console: Console to print to; a new one writing to stdout if None.
        """
        self.console = console or Console()

    def show_value(self, value: object) -> None:
        """Print a single result without markup processing."""
        self.console.print(str(value), markup=False, highlight=False, soft_wrap=True)

    def show_paths(self, paths: list[Path]) -> None:
        """Print one path per line.

        Args:
            paths: Paths to print.
        """
        if not paths:
            self.console.print("[yellow]No matches[/yellow]")
            return
        for path in paths:
            self.show_value(path)

    def show_info(self, path: Path, info: FileInfo) -> None:
        """Display a file's metadata table.

        Args:
            path: Path that was stat'ed.
            info: Its metadata.
        """
        kind = "directory" if info.is_dir else "symlink" if info.is_symlink else "file"
        table = Table(title=escape(path.text), show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Name", escape(info.name))
        table.add_row("Type", kind)
        table.add_row("Size", str(info.size))
        table.add_row("Mode", f"{info.perm:04o}")
        table.add_row("Modified", info.mtime.strftime("%Y-%m-%d %H:%M:%S"))
        self.console.print(table)

    def show_lexical(self, path: Path) -> None:
        """Display every lexical view of a path.

        Args:
            path: Path to describe.
        """
        directory, file = path.split()
        table = Table(title=escape(repr(path.text)), show_header=False)
        table.add_column("Operation", style="cyan")
        table.add_column("Result")
        table.add_row("clean", escape(path.clean().text))
        table.add_row("base", escape(path.base().text))
        table.add_row("dir", escape(path.dir().text))
        table.add_row("ext", escape(path.ext()))
        table.add_row("split", escape(f"{directory.text!r} {file.text!r}"))
        table.add_row("volume", escape(path.volume_name().text))
        table.add_row("absolute", "yes" if path.is_abs() else "no")
        self.console.print(table)

    def show_tree(self, root: Path, entries: list[tuple[Path, bool]]) -> None:
        """Display walked entries as a tree.

        Args:
            root: Walk root.
            entries: (path, is_dir) pairs in walk order, root first.
        """
        tree = Tree(f"[bold]{escape(root.text)}[/bold]")
        nodes = {root.text: tree}
        for path, is_dir in entries:
            if path.text == root.text:
                continue
            parent = nodes.get(path.dir().text, tree)
            name = escape(path.base().text)
            label = f"[blue]{name}/[/blue]" if is_dir else name
            nodes[path.text] = parent.add(label)
        self.console.print(tree)

    def show_settings(self, settings: Settings, flavor: str) -> None:
        """Display effective settings.

        Args:
            settings: Loaded settings.
            flavor: Name of the flavor in use.
        """
        self.console.print("\n[bold]Configuration[/bold]")
        self.console.print(f"  Flavor: {settings.flavor} ({flavor})")
        self.console.print(f"  Max symlinks: {settings.max_symlinks}")
        self.console.print(f"  Glob depth limit: {settings.glob_depth_limit}")
        self.console.print(f"  Working directory: {settings.cwd or '(process)'}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {escape(message)}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {escape(message)}")

    def show_note(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {escape(message)}")
