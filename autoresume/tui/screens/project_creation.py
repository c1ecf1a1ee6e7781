from __future__ import annotations

from typing import Any, List

from rich.console import Group, RenderableType
from rich.text import Text

from autoresume.errors import EmptyNameError
from autoresume.storage.config_store import ConfigStore
from autoresume.tui.layout import centered, float_box, help_line, title
from autoresume.tui.messages import Action, KeyEvent, PromptTarget, ScreenKind, ShowPrompt, Transition
from autoresume.tui.screens.base import Screen
from autoresume.tui.theme import Theme

NAME_TARGET = PromptTarget("project_name")


class ProjectCreationScreen(Screen):
    def __init__(self, store: ConfigStore):
        super().__init__()
        self.store = store
        self.pending_name = ""

    def _prompt(self) -> ShowPrompt:
        return ShowPrompt("Enter Project Name", self.pending_name, NAME_TARGET)

    def enter(self, payload: Any = None) -> List[Action]:
        return [self._prompt()]

    def handle_key(self, event: KeyEvent) -> List[Action]:
        if event.key in {"escape", "ctrl+c", "q"}:
            return [Transition(ScreenKind.LANDING)]
        if event.key in {"enter", "i"}:
            return [self._prompt()]
        return []

    def apply_prompt(self, target: PromptTarget, value: str) -> List[Action]:
        if target != NAME_TARGET:
            return []
        self.pending_name = value
        if not value:
            raise EmptyNameError("project")
        # errors propagate and keep us on this screen with the name still pending
        self.store.add_project(value)
        self.pending_name = ""
        return [Transition(ScreenKind.LANDING)]

    def render(self, theme: Theme) -> RenderableType:
        content = Group(
            title("New Project", theme),
            Text(""),
            Text(f"Project Name: {self.pending_name}"),
            Text(""),
            help_line("enter: edit name • esc: back", theme),
        )
        return centered(float_box(content, theme), self.height)
