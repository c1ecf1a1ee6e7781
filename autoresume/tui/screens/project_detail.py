# autoresume/tui/screens/project_detail.py
"""
Project detail: overview form and outputs list on the left, the selected
output's job fields on the right.

Focus cycles (wrapping) through three regions; inside a region the cursor is
clamped. While a generation is in flight every action except leaving the
screen is ignored, and the flag drops when the completion event arrives.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from enum import IntEnum
from typing import Any, List, Optional

from rich.console import Group, RenderableType
from rich.text import Text

from autoresume.errors import NoOutputSelectedError, PersistenceError
from autoresume.orchestrator.generation import GenerationFinished, GenerationRequest, GenerationService
from autoresume.storage.config_store import ConfigStore
from autoresume.storage.models import ModelCredential, Output, Project, ProjectConfig, find_model
from autoresume.storage.project_store import ProjectStore
from autoresume.tui.layout import (
    centered,
    float_box,
    help_line,
    item,
    section,
    title,
    truncate,
    two_columns,
)
from autoresume.tui.messages import (
    Action,
    KeyEvent,
    PromptTarget,
    ScreenKind,
    ShowPrompt,
    StartTask,
    Transition,
)
from autoresume.tui.screens.base import DOWN_KEYS, UP_KEYS, Screen, clamp, step
from autoresume.tui.theme import Theme

logger = logging.getLogger(__name__)


class Region(IntEnum):
    OVERVIEW = 0
    OUTPUTS = 1
    JOB = 2


class OverviewField(IntEnum):
    PROJECT_NAME = 0
    RESUME_INPUT = 1
    MODEL = 2


class JobField(IntEnum):
    NAME = 0
    DESCRIPTION = 1
    GENERATE = 2
    SAVE = 3


BACK_KEYS = {"q", "escape", "ctrl+c"}
ACTIVATE_KEYS = {"enter", "i"}


class ProjectDetailScreen(Screen):
    def __init__(
        self,
        store: ConfigStore,
        project_store: Optional[ProjectStore] = None,
        service: Optional[GenerationService] = None,
    ):
        super().__init__()
        self.store = store
        self.project_store = project_store or store.project_store
        self.service = service or GenerationService(project_store=self.project_store)

        self.project: Optional[Project] = None
        self.config = ProjectConfig()
        self.models: List[ModelCredential] = []

        self.region = Region.OVERVIEW
        self.overview_field = OverviewField.PROJECT_NAME
        self.output_index = 0
        self.job_field = JobField.NAME

        self.picker_open = False
        self.picker_models: List[ModelCredential] = []
        self.picker_index = 0

        self.generating = False

    # --- lifecycle ---
    def enter(self, payload: Any = None) -> List[Action]:
        if isinstance(payload, Project) and (self.project is None or payload.path != self.project.path):
            self._open(payload)
        self.models = self.store.get_models()
        if self.project is not None:
            self.store.touch_project(self.project.name)
        return []

    def _open(self, project: Project) -> None:
        self.project = project
        try:
            self.config = self.project_store.load(project.path)
        except PersistenceError as e:
            logger.warning("Could not load %s, starting empty: %s", project.path, e)
            self.config = ProjectConfig(name=project.name)
        self.region = Region.OVERVIEW
        self.overview_field = OverviewField.PROJECT_NAME
        self.output_index = 0
        self.job_field = JobField.NAME
        self.picker_open = False

    # --- input ---
    def handle_key(self, event: KeyEvent) -> List[Action]:
        key = event.key
        if key in BACK_KEYS and not self.picker_open:
            return [Transition(ScreenKind.LANDING)]
        if self.generating or self.project is None:
            return []
        if self.picker_open:
            self._handle_picker(key)
            return []

        if key == "tab":
            self.region = Region((self.region + 1) % len(Region))
            return []
        if key == "shift+tab":
            self.region = Region((self.region - 1) % len(Region))
            return []
        if key == "ctrl+s":
            self.save()
            return []
        if key in UP_KEYS or key in DOWN_KEYS:
            self._move(key)
            return []

        if self.region is Region.OVERVIEW:
            return self._activate_overview(key)
        if self.region is Region.OUTPUTS:
            return self._activate_outputs(key)
        return self._activate_job(key)

    def _move(self, key: str) -> None:
        if self.region is Region.OVERVIEW:
            self.overview_field = OverviewField(step(self.overview_field, key, len(OverviewField)))
        elif self.region is Region.OUTPUTS:
            self.output_index = step(self.output_index, key, len(self.config.outputs))
        else:
            self.job_field = JobField(step(self.job_field, key, len(JobField)))

    def _activate_overview(self, key: str) -> List[Action]:
        field = self.overview_field
        if field is OverviewField.MODEL:
            if key in ACTIVATE_KEYS or key == "l":
                self._open_picker()
            return []
        if key not in ACTIVATE_KEYS:
            return []
        if field is OverviewField.PROJECT_NAME:
            return [ShowPrompt("Enter Project Name", self.config.name, PromptTarget("config.name"))]
        return [ShowPrompt("Enter Resume Input", self.config.resume_input, PromptTarget("config.resume_input"))]

    def _activate_outputs(self, key: str) -> List[Action]:
        if key == "a":
            self.add_output()
        elif key == "enter" and self.config.outputs:
            self.region = Region.JOB
        return []

    def _activate_job(self, key: str) -> List[Action]:
        if key not in ACTIVATE_KEYS:
            return []
        field = self.job_field
        if field is JobField.GENERATE:
            return self.start_generation()
        if field is JobField.SAVE:
            self.export_selected()
            return []
        output = self._selected_output("edit")
        if field is JobField.NAME:
            return [ShowPrompt("Enter Job Name", output.name, PromptTarget("output.name", self.output_index))]
        return [
            ShowPrompt(
                "Enter Job Description",
                output.job_description,
                PromptTarget("output.job_description", self.output_index),
            )
        ]

    def apply_prompt(self, target: PromptTarget, value: str) -> List[Action]:
        if target.field == "config.name":
            self.config.name = value
        elif target.field == "config.resume_input":
            self.config.resume_input = value
        elif target.field in {"output.name", "output.job_description"}:
            # the list may have changed since the prompt opened; drop stale addresses
            if target.index is None or not 0 <= target.index < len(self.config.outputs):
                logger.info("Dropping edit for missing output #%s", target.index)
                return []
            output = self.config.outputs[target.index]
            if target.field == "output.name":
                output.name = value
            else:
                output.job_description = value
        return []

    # --- model picker ---
    def _open_picker(self) -> None:
        self.picker_models = self.store.get_models()
        self.models = self.picker_models
        self.picker_index = 0
        for i, m in enumerate(self.picker_models):
            if m.name == self.config.selected_model:
                self.picker_index = i
                break
        self.picker_open = True

    def _handle_picker(self, key: str) -> None:
        if key == "escape":
            self.picker_open = False
        elif key == "enter":
            if self.picker_models:
                self.config.selected_model = self.picker_models[self.picker_index].name
            self.picker_open = False
        else:
            self.picker_index = step(self.picker_index, key, len(self.picker_models))

    # --- commands ---
    def _selected_output(self, action: str) -> Output:
        if not self.config.outputs:
            raise NoOutputSelectedError(action)
        self.output_index = clamp(self.output_index, len(self.config.outputs))
        return self.config.outputs[self.output_index]

    def save(self) -> None:
        self.project_store.save(self.project.path, self.config)

    def add_output(self) -> None:
        updated = replace(self.config, outputs=[*self.config.outputs, Output()])
        # a failed save leaves the list and the cursor as they were
        self.project_store.save(self.project.path, updated)
        self.config = updated
        self.output_index = len(updated.outputs) - 1

    def export_selected(self) -> None:
        self.project_store.export_output(self.project.path, self._selected_output("save"))

    def start_generation(self) -> List[Action]:
        if self.generating:
            return []
        output = self._selected_output("generate for")
        credential = find_model(self.store.get_models(), self.config.selected_model)
        request = GenerationRequest(
            project_path=self.project.path,
            resume_text=self.config.resume_input,
            job_description=output.job_description,
            credential=replace(credential) if credential is not None else None,
        )
        self.generating = True
        logger.info("Starting generation for %s", self.project.name)
        return [StartTask(request)]

    def finish_generation(self, event: GenerationFinished) -> None:
        """Apply a completion event; the flag is cleared before anything can fail."""
        self.generating = False
        if event.error is not None:
            raise event.error
        if self.project is not None and event.project_path == self.project.path:
            self.config = self.service.record(self.project.path, self.config, event.output)
            self.output_index = len(self.config.outputs) - 1
            return
        # the user opened another project meanwhile; record into the one that asked
        launched = self.project_store.load(event.project_path)
        self.service.record(event.project_path, launched, event.output)

    # --- rendering ---
    def _model_label(self) -> str:
        model = find_model(self.models, self.config.selected_model)
        return model.name if model is not None else "None"

    def render(self, theme: Theme) -> RenderableType:
        if self.generating:
            box = float_box(Text("Generating resume...\nPlease stand by..."), theme, width=40)
            return centered(box, self.height)
        if self.picker_open:
            return self._render_picker(theme)

        left = Group(self._render_overview(theme), self._render_outputs(theme))
        body = two_columns(left, self._render_job(theme), ratio=(1, 1))
        return Group(
            body,
            help_line("tab: switch section • j/k: navigate • i: input • enter: action • a: add output • ctrl+s: save • q: back", theme),
        )

    def _render_overview(self, theme: Theme) -> RenderableType:
        focused = self.region is Region.OVERVIEW
        fields = [
            f"Project Name: {self.config.name}",
            f"Resume Input: {truncate(self.config.resume_input)}",
            f"LLM: {self._model_label()}",
        ]
        lines = [item(text, focused and i == self.overview_field, theme) for i, text in enumerate(fields)]
        return section("Project Overview", lines, theme)

    def _render_outputs(self, theme: Theme) -> RenderableType:
        focused = self.region is Region.OUTPUTS
        if not self.config.outputs:
            lines = [Text("No outputs. Press 'a' to add.")]
        else:
            lines = [
                item(out.name or "(unnamed)", focused and i == self.output_index, theme)
                for i, out in enumerate(self.config.outputs)
            ]
        return section("Outputs", lines, theme)

    def _render_job(self, theme: Theme) -> RenderableType:
        focused = self.region is Region.JOB
        current = Output()
        if self.config.outputs:
            current = self.config.outputs[clamp(self.output_index, len(self.config.outputs))]

        def mark(field: JobField, text: str) -> Text:
            return item(text, focused and self.job_field is field, theme)

        lines = [
            mark(JobField.NAME, f"Output Name: {current.name}"),
            mark(JobField.DESCRIPTION, f"Job Description: {truncate(current.job_description)}"),
            Text(f"  Generated Output: {truncate(current.generated_text)}"),
            Text(""),
            mark(JobField.GENERATE, "[ Generate ]"),
            mark(JobField.SAVE, "[ Save to PDF ]"),
        ]
        return section("Job Specific Fields", lines, theme)

    def _render_picker(self, theme: Theme) -> RenderableType:
        if self.picker_models:
            rows = [item(m.name, i == self.picker_index, theme) for i, m in enumerate(self.picker_models)]
        else:
            rows = [Text("No models configured")]
        content = Group(
            title("Select LLM Model", theme),
            Text(""),
            *rows,
            Text(""),
            help_line("↑/↓: Navigate • enter: Select • esc: Cancel", theme),
        )
        return centered(float_box(content, theme), self.height)
