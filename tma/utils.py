"""Shared utility functions for tma.

Provides Rich-based console reporting, file-system helpers (directory
creation, atomic text writes) and identifier validation used by the
scaffolder and the manifest editor.
"""

from __future__ import annotations

import os
import re
import shutil
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Name helpers
# ---------------------------------------------------------------------------

_IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


def is_valid_identifier(name: str) -> bool:
    """Return ``True`` if *name* can be used as a module or project name.

    Names end up as directory names, Swift type names (``<Name>App``) and
    bundle identifier components, so only ASCII letters, digits and
    underscores are accepted, and the first character must not be a digit.

    Examples::

        is_valid_identifier("Profile")      -> True
        is_valid_identifier("user_feed2")   -> True
        is_valid_identifier("2FA")          -> False
        is_valid_identifier("../escape")    -> False
    """
    return _IDENTIFIER_RE.fullmatch(name) is not None


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The resolved ``Path`` object.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path.resolve()


def write_text_atomic(path: str | Path, content: str) -> Path:
    """Write *content* to *path* so readers never observe a partial file.

    The text goes to a sibling temporary file first, which is then renamed
    over the destination.  ``Path.replace`` is atomic on POSIX and Windows as
    long as both paths live on the same filesystem, which is guaranteed by
    keeping the temporary file in the destination directory.

    Args:
        path: Destination file.  Parent directories are created.
        content: Text to write (UTF-8).

    Returns:
        The destination path.
    """
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_name(f".{target.name}.{os.getpid()}.tmp")
    try:
        # newline="" keeps the document's own line endings untouched.
        with tmp_path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        if target.exists():
            shutil.copymode(target, tmp_path)
        tmp_path.replace(target)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return target


def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file without translating line endings."""
    with Path(path).open("r", encoding="utf-8", newline="") as fh:
        return fh.read()


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a dim progress line (directory or file created)."""
    console.print(f"[dim]-[/dim] {escape(message)}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_warning(message: str) -> None:
    """Print a yellow warning message on stderr."""
    err_console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
