"""
Console output utilities for trainkeeper using Rich.

This module renders upgrade proposals for humans. For diagnostic or debug
output, use :mod:`trainkeeper.utils.logger`.

Guidelines:
- print_proposals: the upgrade report of a release train
- print_table: generic structured output
- Logging should never go through this module
"""

from __future__ import annotations

import os
import sys
import threading
from typing import Any, Callable, Dict, List, Optional

from rich.table import Table
from rich.theme import Theme
from rich.console import Console

from trainkeeper.models.proposal import UpgradeProposals

# ---------------------------------------------------------------------------
# Theme configuration
# ---------------------------------------------------------------------------

TRAINKEEPER_THEME = Theme(
    {
        "success": "bold green",
        "error": "bold red",
        "warning": "bold yellow",
        "info": "bold cyan",
        "dim": "dim",
        "upgrade": "bold magenta",
    }
)

PROPOSAL_HEADERS = ["Dependency", "Current", "Available", "Proposed"]

# ---------------------------------------------------------------------------
# Console lifecycle management
# ---------------------------------------------------------------------------

_console: Optional[Console] = None
_console_lock = threading.Lock()


def _should_use_color() -> bool:
    """Return True if colored output should be enabled."""
    if "NO_COLOR" in os.environ:
        return False
    if os.environ.get("CI"):
        return False
    try:
        return sys.stdout.isatty()
    except (AttributeError, OSError):
        return False


def _get_console() -> Console:
    """Return a singleton Rich Console instance."""
    global _console

    if _console is None:
        with _console_lock:
            if _console is None:
                use_color = _should_use_color()
                _console = Console(
                    theme=TRAINKEEPER_THEME,
                    no_color=not use_color,
                    highlight=use_color,
                )
    return _console


def reconfigure_console() -> None:
    """Reset the global console instance.

    Useful if environment variables (e.g. NO_COLOR) change at runtime.
    """
    global _console
    with _console_lock:
        _console = None


def get_raw_console() -> Console:
    """Return the underlying Rich Console instance."""
    return _get_console()


# ---------------------------------------------------------------------------
# Structured output
# ---------------------------------------------------------------------------


def print_table(
    data: List[Dict[str, Any]],
    *,
    headers: Optional[List[str]] = None,
    title: Optional[str] = None,
    caption: Optional[str] = None,
    column_styles: Optional[Dict[str, Dict[str, Any]]] = None,
    row_styler: Optional[Callable[[Dict[str, Any]], Optional[str]]] = None,
) -> None:
    """Render structured data as a Rich table.

    Args:
        data: List of row dictionaries.
        headers: Column order. Defaults to keys of the first row.
        title: Optional table title.
        caption: Optional table caption.
        column_styles: Per-column style configuration.
        row_styler: Optional callback returning a row style.
    """
    if not data:
        return

    if headers is None:
        headers = list(data[0].keys())

    table = Table(
        title=title,
        caption=caption,
        show_header=True,
        header_style="bold",
    )

    column_styles = column_styles or {}
    for header in headers:
        config = column_styles.get(header, {})
        table.add_column(
            header,
            style=config.get("style"),
            justify=config.get("justify", "default"),
            no_wrap=config.get("no_wrap", False),
            overflow=config.get("overflow", "fold"),
        )

    for row in data:
        values = [str(row.get(h, "")) for h in headers]
        style = row_styler(row) if row_styler else None
        table.add_row(*values, style=style)

    _get_console().print(table)


def _upgrade_row_style(row: Dict[str, Any]) -> Optional[str]:
    return "upgrade" if row.get("Current") != row.get("Proposed") else None


def print_proposals(
    proposals: UpgradeProposals,
    include_all: bool = False,
    *,
    title: Optional[str] = None,
) -> None:
    """Render upgrade proposals as a table.

    Rows whose proposed version differs from the current one are
    highlighted. Prints a short notice instead when nothing is listed.

    Args:
        proposals: Proposals to render.
        include_all: Also list dependencies without an available upgrade,
            with every newer version.
        title: Optional table title, e.g. ``"Moore SR1"``.
    """
    rows = proposals.to_rows(include_all)
    if not rows:
        _get_console().print("All dependencies are up to date.", style="success")
        return

    print_table(
        rows,
        headers=PROPOSAL_HEADERS,
        title=title,
        column_styles={
            "Dependency": {"style": "bold", "no_wrap": True},
            "Current": {"style": "dim"},
            "Proposed": {"no_wrap": True},
        },
        row_styler=_upgrade_row_style,
    )
