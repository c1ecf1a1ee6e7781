from __future__ import annotations

from dataclasses import dataclass

from rich import box


@dataclass(frozen=True)
class Theme:
    """Styles for every render call; passed in, never read from module state."""
    subtle: str = "#383838"
    title: str = "bold #7D56F4"
    selected: str = "bold #73F59F"
    help: str = "#6c6c6c"
    error: str = "#FF4444"
    error_title: str = "bold #FF4444"
    text: str = "#FFFFFF"
    input: str = "bold white"
    border: box.Box = box.ROUNDED
    pointer: str = "► "


DEFAULT_THEME = Theme()
