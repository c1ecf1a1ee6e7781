# autoresume/tui/messages.py
"""
Values flowing through the controller.

Events come in from the terminal host (keys, resizes) or from a finished
background task. Actions go out of a screen's handlers and are applied by the
controller: switch screen, open a text prompt, start a task, quit. Errors are
not actions; screens raise them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

from autoresume.orchestrator.generation import GenerationFinished, GenerationRequest


class ScreenKind(Enum):
    LANDING = "landing"
    PROJECT_CREATION = "project_creation"
    MODEL_MANAGER = "model_manager"
    PROJECT_DETAIL = "project_detail"


# --- events ---
@dataclass(frozen=True)
class KeyEvent:
    key: str
    character: Optional[str] = None

    @property
    def is_printable(self) -> bool:
        return self.character is not None and len(self.character) == 1 and self.character.isprintable()


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


Event = Union[KeyEvent, ResizeEvent, GenerationFinished]


# --- actions ---
@dataclass(frozen=True)
class PromptTarget:
    """Address of the value a text prompt edits; resolved by the owning screen on confirm."""
    field: str
    index: Optional[int] = None


@dataclass(frozen=True)
class Transition:
    to: ScreenKind
    payload: Any = None


@dataclass(frozen=True)
class ShowPrompt:
    title: str
    initial: str
    target: PromptTarget


@dataclass(frozen=True)
class StartTask:
    request: GenerationRequest


@dataclass(frozen=True)
class Quit:
    pass


Action = Union[Transition, ShowPrompt, StartTask, Quit]
