# autoresume/tui/screens/model_manager.py
from __future__ import annotations

from dataclasses import replace
from enum import Enum
from typing import Any, List

from rich.console import Group, RenderableType
from rich.text import Text

from autoresume.errors import DuplicateNameError, EmptyNameError
from autoresume.storage.config_store import ConfigStore
from autoresume.storage.models import ModelCredential
from autoresume.tui.layout import help_line, item, pane_height, section, two_columns
from autoresume.tui.messages import Action, KeyEvent, PromptTarget, ScreenKind, ShowPrompt, Transition
from autoresume.tui.screens.base import Screen, clamp, step
from autoresume.tui.theme import Theme


class Mode(Enum):
    BROWSING = "browsing"
    EDITING = "editing"


# (attribute on ModelCredential, label); the Submit button follows the last one
EDIT_FIELDS = [
    ("name", "Name"),
    ("provider", "Provider"),
    ("model", "Model"),
    ("api_key", "API Key"),
]
SUBMIT = len(EDIT_FIELDS)


class ModelManagerScreen(Screen):
    """
    Credential list on the left, details or the edit form on the right.

    Editing works on a scratch copy; nothing reaches the list or the config
    file until Submit passes validation.
    """

    def __init__(self, store: ConfigStore):
        super().__init__()
        self.store = store
        self.models: List[ModelCredential] = store.get_models()
        self.selected = 0
        self.mode = Mode.BROWSING
        self.field = 0
        self.scratch = ModelCredential()
        self.is_new = False

    def enter(self, payload: Any = None) -> List[Action]:
        if self.mode is Mode.BROWSING:
            # pick up credentials edited outside the app
            self.models = self.store.get_models()
            self.selected = clamp(self.selected, len(self.models))
        return []

    def handle_key(self, event: KeyEvent) -> List[Action]:
        if self.mode is Mode.EDITING:
            return self._handle_editing(event)
        return self._handle_browsing(event)

    def _handle_browsing(self, event: KeyEvent) -> List[Action]:
        key = event.key
        if key in {"q", "escape", "ctrl+c"}:
            return [Transition(ScreenKind.LANDING)]
        if key == "a":
            self._start_editing(ModelCredential(), is_new=True)
        elif key in {"e", "enter"}:
            if self.models:
                self._start_editing(self.models[self.selected], is_new=False)
        else:
            self.selected = step(self.selected, key, len(self.models))
        return []

    def _start_editing(self, record: ModelCredential, is_new: bool) -> None:
        self.mode = Mode.EDITING
        self.is_new = is_new
        self.field = 0
        self.scratch = replace(record)

    def _handle_editing(self, event: KeyEvent) -> List[Action]:
        key = event.key
        if key == "escape":
            self.mode = Mode.BROWSING
            return []
        if key in {"enter", "i"}:
            if self.field == SUBMIT:
                self.submit()
                return []
            attr, label = EDIT_FIELDS[self.field]
            return [ShowPrompt(f"Enter {label}", getattr(self.scratch, attr), PromptTarget(attr))]
        self.field = step(self.field, key, SUBMIT + 1)
        return []

    def apply_prompt(self, target: PromptTarget, value: str) -> List[Action]:
        if self.mode is Mode.EDITING and target.field in dict(EDIT_FIELDS):
            setattr(self.scratch, target.field, value)
        return []

    def submit(self) -> None:
        """Validate the scratch record, commit it and persist the whole list."""
        candidate = replace(self.scratch)
        if not candidate.name:
            raise EmptyNameError("model")
        for i, existing in enumerate(self.models):
            if existing.name == candidate.name and (self.is_new or i != self.selected):
                raise DuplicateNameError(candidate.name, what="model")

        models = list(self.models)
        if self.is_new:
            models.append(candidate)
            selected = len(models) - 1
        else:
            models[self.selected] = candidate
            selected = self.selected
        # a failed save leaves the list and the form as they were
        self.store.save_models(models)
        self.models = models
        self.selected = selected
        self.mode = Mode.BROWSING

    def render(self, theme: Theme) -> RenderableType:
        self.selected = clamp(self.selected, len(self.models))
        if self.models:
            rows = [item(m.name, i == self.selected, theme) for i, m in enumerate(self.models)]
        else:
            rows = [Text("No models available")]

        if self.mode is Mode.EDITING:
            heading = "Editing New Model" if self.is_new else "Editing Model"
            details = []
            for i, (attr, label) in enumerate(EDIT_FIELDS):
                details.append(item(f"{label}: {getattr(self.scratch, attr)}", i == self.field, theme))
            details.append(item("[Submit]", self.field == SUBMIT, theme))
            details.append(Text(""))
            details.append(help_line("enter: edit field or submit • j/k: move • esc: cancel", theme))
        else:
            heading = "Model Details"
            if self.models:
                current = self.models[self.selected]
                details = [
                    Text(f"Name: {current.name}"),
                    Text(f"Provider: {current.provider}"),
                    Text(f"Model: {current.model}"),
                    Text(f"API Key: {current.api_key}"),
                ]
            else:
                details = [Text("Select a model or press 'a' to add a new one")]

        height = pane_height(self.height)
        body = two_columns(
            section("AI Models", rows, theme, height),
            section(heading, details, theme, height),
        )
        return Group(
            body,
            help_line("a: add • e: edit • j/k: navigate • enter: edit/submit • esc: cancel • q: back", theme),
        )
