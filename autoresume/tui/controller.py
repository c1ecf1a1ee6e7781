# autoresume/tui/controller.py
"""
Root state machine: one active screen, at most one overlay.

Every event goes through `dispatch`, on one thread. An overlay, when present,
gets keys first and the screen underneath sees nothing. Errors raised by any
screen end up in the error banner; errors that arrive while an overlay is
already up wait in a queue until it is dismissed.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Iterable, List, Optional

from rich.console import RenderableType

from autoresume.errors import AutoResumeError
from autoresume.orchestrator.generation import GenerationFinished, GenerationRequest, GenerationService
from autoresume.storage.config_store import ConfigStore
from autoresume.tui.messages import (
    Action,
    Event,
    KeyEvent,
    Quit,
    ResizeEvent,
    ScreenKind,
    ShowPrompt,
    StartTask,
    Transition,
)
from autoresume.tui.overlays import ErrorBanner, Overlay, OverlayOutcome, TextPrompt
from autoresume.tui.screens.base import Screen
from autoresume.tui.screens.landing import LandingScreen
from autoresume.tui.screens.model_manager import ModelManagerScreen
from autoresume.tui.screens.project_creation import ProjectCreationScreen
from autoresume.tui.screens.project_detail import ProjectDetailScreen
from autoresume.tui.theme import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BackgroundTask:
    """Handle for work that must run off the input loop; its result is fed back through dispatch."""
    request: GenerationRequest
    service: GenerationService

    async def run(self) -> GenerationFinished:
        return await self.service.run(self.request)


class AppController:
    def __init__(
        self,
        store: ConfigStore,
        service: Optional[GenerationService] = None,
        theme: Theme = DEFAULT_THEME,
    ):
        self.store = store
        self.service = service or GenerationService(project_store=store.project_store)
        self.theme = theme

        self.active = ScreenKind.LANDING
        self.screens: Dict[ScreenKind, Screen] = {}
        self.overlay: Optional[Overlay] = None
        self.pending_errors: Deque[AutoResumeError] = deque()
        self.should_quit = False
        self.width = 0
        self.height = 0

        self._factories: Dict[ScreenKind, Callable[[], Screen]] = {
            ScreenKind.LANDING: lambda: LandingScreen(self.store),
            ScreenKind.PROJECT_CREATION: lambda: ProjectCreationScreen(self.store),
            ScreenKind.MODEL_MANAGER: lambda: ModelManagerScreen(self.store),
            ScreenKind.PROJECT_DETAIL: lambda: ProjectDetailScreen(
                self.store, self.store.project_store, self.service
            ),
        }

    # --- screens ---
    def screen_for(self, kind: ScreenKind) -> Screen:
        """Build a screen on first visit and keep it for the rest of the session."""
        screen = self.screens.get(kind)
        if screen is None:
            screen = self._factories[kind]()
            screen.resize(self.width, self.height)
            self.screens[kind] = screen
        return screen

    @property
    def screen(self) -> Screen:
        return self.screen_for(self.active)

    # --- dispatch ---
    def dispatch(self, event: Event) -> Optional[BackgroundTask]:
        """Apply one event; returns a task for the host to run, if one was started."""
        tasks: List[BackgroundTask] = []
        try:
            if isinstance(event, ResizeEvent):
                self._resize(event)
            elif isinstance(event, GenerationFinished):
                self._finish_generation(event)
            elif isinstance(event, KeyEvent):
                if self.overlay is not None:
                    self._overlay_key(event, tasks)
                else:
                    self._apply(self.screen.handle_key(event), tasks)
            else:
                raise TypeError(f"unknown event {event!r}")
        except AutoResumeError as e:
            self.show_error(e)
        if self.overlay is None and self.pending_errors:
            self._set_overlay(ErrorBanner(self.pending_errors.popleft()))
        return tasks[0] if tasks else None

    def _resize(self, event: ResizeEvent) -> None:
        self.width, self.height = event.width, event.height
        self.screen.resize(event.width, event.height)
        if self.overlay is not None:
            self.overlay.resize(event.width, event.height)

    def _finish_generation(self, event: GenerationFinished) -> None:
        screen = self.screen_for(ScreenKind.PROJECT_DETAIL)
        if not isinstance(screen, ProjectDetailScreen):
            raise TypeError(f"unexpected screen {screen!r} for a generation result")
        screen.finish_generation(event)

    def _overlay_key(self, event: KeyEvent, tasks: List[BackgroundTask]) -> None:
        overlay = self.overlay
        outcome = overlay.handle_key(event)
        if outcome is OverlayOutcome.KEEP:
            return
        self._dismiss_overlay()
        if outcome is OverlayOutcome.CONFIRM and isinstance(overlay, TextPrompt):
            owner = self.screen_for(overlay.owner)
            self._apply(owner.apply_prompt(overlay.target, overlay.value), tasks)

    def _dismiss_overlay(self) -> None:
        # queued errors are shown once the whole event has been applied
        self.overlay = None

    def _set_overlay(self, overlay: Overlay) -> None:
        overlay.resize(self.width, self.height)
        self.overlay = overlay

    def show_error(self, error: AutoResumeError) -> None:
        logger.warning("Showing error (%s): %s", type(error).__name__, error)
        if self.overlay is None and not self.pending_errors:
            self._set_overlay(ErrorBanner(error))
        else:
            self.pending_errors.append(error)

    def _apply(self, actions: Iterable[Action], tasks: List[BackgroundTask]) -> None:
        for action in actions:
            if isinstance(action, Transition):
                self._transition(action, tasks)
            elif isinstance(action, ShowPrompt):
                self._set_overlay(TextPrompt(action.title, action.initial, action.target, self.active))
            elif isinstance(action, StartTask):
                tasks.append(BackgroundTask(action.request, self.service))
            elif isinstance(action, Quit):
                self.should_quit = True
            else:
                raise TypeError(f"unknown action {action!r}")

    def _transition(self, action: Transition, tasks: List[BackgroundTask]) -> None:
        logger.debug("Transition %s -> %s", self.active.value, action.to.value)
        self.active = action.to
        screen = self.screen_for(action.to)
        screen.resize(self.width, self.height)
        self._apply(screen.enter(action.payload), tasks)

    # --- rendering ---
    def render(self) -> RenderableType:
        if self.overlay is not None:
            return self.overlay.render(self.theme)
        return self.screen.render(self.theme)
