# autoresume/tui/layout.py
"""Small rich building blocks shared by the screens and overlays."""
from __future__ import annotations

from typing import Iterable, Optional

from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from autoresume.tui.theme import Theme


def truncate(value: str, limit: int = 10) -> str:
    return value if len(value) <= limit else value[:limit] + "..."


def title(text: str, theme: Theme) -> Text:
    return Text(text, style=theme.title)


def help_line(text: str, theme: Theme) -> Text:
    return Text(text, style=theme.help)


def item(text: str, selected: bool, theme: Theme) -> Text:
    """List row with the selection pointer."""
    if selected:
        return Text(theme.pointer + text, style=theme.selected)
    return Text("  " + text)


def section(
    heading: str,
    lines: Iterable[RenderableType],
    theme: Theme,
    height: Optional[int] = None,
) -> Panel:
    return Panel(
        Group(title(heading, theme), Text(""), *lines),
        box=theme.border,
        border_style=theme.subtle,
        padding=(1, 1),
        height=height,
    )


def two_columns(left: RenderableType, right: RenderableType, ratio: tuple[int, int] = (1, 2)) -> Table:
    grid = Table.grid(expand=True, padding=(0, 1))
    grid.add_column(ratio=ratio[0])
    grid.add_column(ratio=ratio[1])
    grid.add_row(left, right)
    return grid


def pane_height(height: int) -> Optional[int]:
    # leave room for the help line below the panes
    return height - 4 if height > 8 else None


def centered(renderable: RenderableType, height: int) -> Align:
    return Align.center(renderable, vertical="middle", height=height or None)


def float_box(content: RenderableType, theme: Theme, border_style: Optional[str] = None, width: int = 60) -> Panel:
    return Panel(
        content,
        box=theme.border,
        border_style=border_style or theme.title,
        padding=(1, 2),
        width=width,
    )
