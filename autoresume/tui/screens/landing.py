from __future__ import annotations

from typing import List

from rich.console import Group, RenderableType
from rich.text import Text

from autoresume.storage.config_store import ConfigStore
from autoresume.tui.layout import help_line, item, pane_height, section, two_columns
from autoresume.tui.messages import Action, KeyEvent, Quit, ScreenKind, Transition
from autoresume.tui.screens.base import Screen, clamp, step
from autoresume.tui.theme import Theme
from autoresume.utils.dates import short_date


class LandingScreen(Screen):
    """Project list with details for the selected project."""

    def __init__(self, store: ConfigStore):
        super().__init__()
        self.store = store
        self.selected = 0

    def handle_key(self, event: KeyEvent) -> List[Action]:
        projects = self.store.projects
        self.selected = clamp(self.selected, len(projects))
        key = event.key
        if key in {"q", "ctrl+c"}:
            return [Quit()]
        if key == "n":
            return [Transition(ScreenKind.PROJECT_CREATION)]
        if key in {"M", "m", "shift+m"}:
            return [Transition(ScreenKind.MODEL_MANAGER)]
        if key == "enter":
            if not projects:
                return []
            return [Transition(ScreenKind.PROJECT_DETAIL, projects[self.selected])]
        self.selected = step(self.selected, key, len(projects))
        return []

    def render(self, theme: Theme) -> RenderableType:
        projects = self.store.projects
        self.selected = clamp(self.selected, len(projects))

        if projects:
            rows = [item(p.name, i == self.selected, theme) for i, p in enumerate(projects)]
        else:
            rows = [Text("No projects yet")]

        if projects:
            p = projects[self.selected]
            details = [
                Text(f"Name: {p.name}"),
                Text(f"Created: {short_date(p.created_at)}"),
                Text(f"Last Opened: {short_date(p.last_opened)}"),
                Text(f"Path: {p.path}"),
            ]
        else:
            details = [Text("Select a project to view details")]

        height = pane_height(self.height)
        body = two_columns(
            section("Projects", rows, theme, height),
            section("Project Details", details, theme, height),
        )
        return Group(
            body,
            help_line("n: New Project • M: Manage Models • enter: Open • q: Quit • ↑/↓: Navigate", theme),
        )
