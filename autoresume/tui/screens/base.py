from __future__ import annotations

from typing import Any, List

from rich.console import RenderableType

from autoresume.tui.messages import Action, KeyEvent, PromptTarget
from autoresume.tui.theme import Theme

UP_KEYS = {"k", "up"}
DOWN_KEYS = {"j", "down"}


def clamp(index: int, size: int) -> int:
    """Keep a cursor inside [0, size); an empty list pins it at 0."""
    if size <= 0:
        return 0
    return max(0, min(index, size - 1))


def step(index: int, event_key: str, size: int) -> int:
    """Move a cursor one step for an up/down key, without wrapping."""
    if event_key in UP_KEYS:
        return clamp(index - 1, size)
    if event_key in DOWN_KEYS:
        return clamp(index + 1, size)
    return clamp(index, size)


class Screen:
    """
    A top-level UI mode. Handlers return the actions the controller should
    apply and raise AutoResumeError subclasses for anything the user must see.
    """

    def __init__(self) -> None:
        self.width = 0
        self.height = 0

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def enter(self, payload: Any = None) -> List[Action]:
        """Called every time the controller switches to this screen."""
        return []

    def handle_key(self, event: KeyEvent) -> List[Action]:
        raise NotImplementedError

    def apply_prompt(self, target: PromptTarget, value: str) -> List[Action]:
        """Apply a confirmed text prompt this screen opened."""
        return []

    def render(self, theme: Theme) -> RenderableType:
        raise NotImplementedError
