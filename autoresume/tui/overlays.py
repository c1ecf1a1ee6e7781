# autoresume/tui/overlays.py
"""
Overlays stacked above the active screen. While one is shown it receives every
key; the screen underneath sees nothing until it is dismissed.
"""
from __future__ import annotations

from enum import Enum

from rich.console import Group, RenderableType
from rich.text import Text

from autoresume.tui.layout import centered, float_box, help_line, title
from autoresume.tui.messages import KeyEvent, PromptTarget, ScreenKind
from autoresume.tui.theme import Theme


class OverlayOutcome(Enum):
    KEEP = "keep"
    DISMISS = "dismiss"
    CONFIRM = "confirm"


class Overlay:
    def __init__(self) -> None:
        self.width = 0
        self.height = 0

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def handle_key(self, event: KeyEvent) -> OverlayOutcome:
        raise NotImplementedError

    def render(self, theme: Theme) -> RenderableType:
        raise NotImplementedError


class ErrorBanner(Overlay):
    """Shows one error until acknowledged with enter or escape."""

    ACKNOWLEDGE_KEYS = {"enter", "escape"}

    def __init__(self, error: BaseException):
        super().__init__()
        self.error = error

    @property
    def message(self) -> str:
        return str(self.error)

    def handle_key(self, event: KeyEvent) -> OverlayOutcome:
        if event.key in self.ACKNOWLEDGE_KEYS:
            return OverlayOutcome.DISMISS
        return OverlayOutcome.KEEP

    def render(self, theme: Theme) -> RenderableType:
        content = Group(
            Text("Error", style=theme.error_title),
            Text(""),
            Text(self.message),
            Text(""),
            help_line("press esc or enter to dismiss", theme),
        )
        return centered(float_box(content, theme, border_style=theme.error, width=50), self.height)


class TextPrompt(Overlay):
    """
    Single-line text entry. Confirming hands `value` back to the controller,
    which applies it to `target` on the `owner` screen.
    """

    def __init__(self, prompt: str, initial: str, target: PromptTarget, owner: ScreenKind):
        super().__init__()
        self.prompt = prompt
        self.value = initial
        self.target = target
        self.owner = owner

    def handle_key(self, event: KeyEvent) -> OverlayOutcome:
        if event.key == "escape":
            return OverlayOutcome.DISMISS
        if event.key == "enter":
            return OverlayOutcome.CONFIRM
        if event.key == "backspace":
            self.value = self.value[:-1]
        elif event.key == "ctrl+u":
            self.value = ""
        elif event.is_printable:
            self.value += event.character
        return OverlayOutcome.KEEP

    def render(self, theme: Theme) -> RenderableType:
        content = Group(
            title(self.prompt, theme),
            Text(""),
            Text(self.value + "█", style=theme.input),
            Text(""),
            help_line("enter: confirm • esc: cancel", theme),
        )
        return centered(float_box(content, theme), self.height)
