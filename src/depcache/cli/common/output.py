"""Output formatting utilities for the CLI."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from depcache.core.tags import UNKNOWN_DEPENDENCY

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def tags_table(self, tags: Iterable[str], title: str = "Dependency tags") -> None:
        """
        Render a sorted list of dependency tags.

        The `UnknownDependency` sentinel is highlighted, since it means the
        entry is purged by every write.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Tag", style="ok")
        t.add_column("Kind", style="meta")

        for tag in sorted(tags):
            if tag == UNKNOWN_DEPENDENCY:
                t.add_row(f"[warn]{tag}[/]", "sentinel")
            else:
                t.add_row(tag, "resource")

        console.print(t)

    def resolution_table(
        self,
        known: Iterable[str],
        candidates: Iterable[str],
        dependencies: Iterable[str],
        title: str = "Resolution",
    ) -> None:
        """Render the three sets of a dependency resolution side by side."""
        t = Table(title=title, show_lines=False)
        t.add_column("Known resources", style="meta")
        t.add_column("Candidates")
        t.add_column("Dependencies", style="ok")

        t.add_row(
            "\n".join(sorted(known)) or "-",
            "\n".join(sorted(candidates)) or "-",
            "\n".join(sorted(dependencies)),
        )

        console.print(t)


out = Out()
