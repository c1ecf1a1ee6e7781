from __future__ import annotations

import logging

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Static

from autoresume.tui.controller import AppController, BackgroundTask
from autoresume.tui.messages import Event, KeyEvent, ResizeEvent

logger = logging.getLogger(__name__)


class Canvas(Static, can_focus=True):
    """The only widget: shows the controller's render and forwards keys and resizes."""

    def on_key(self, event: events.Key) -> None:
        # stop here so textual's own bindings (tab focus etc.) never see the key
        event.stop()
        event.prevent_default()
        self.app.feed(KeyEvent(event.key, event.character))

    def on_resize(self, event: events.Resize) -> None:
        self.app.feed(ResizeEvent(event.size.width, event.size.height))


class AutoResumeApp(App):
    CSS = """
    Canvas {
        width: 100%;
        height: 100%;
    }
    """
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, controller: AppController):
        super().__init__()
        self.controller = controller

    def compose(self) -> ComposeResult:
        yield Canvas(id="canvas")

    def on_mount(self) -> None:
        self.query_one(Canvas).focus()
        self.feed(ResizeEvent(self.size.width, self.size.height))

    def feed(self, event: Event) -> None:
        """Single entry point into the controller; always runs on the app's event loop."""
        task = self.controller.dispatch(event)
        if task is not None:
            self.run_worker(self._run_task(task), group="generation")
        if self.controller.should_quit:
            self.exit(return_code=0)
            return
        self.query_one(Canvas).update(self.controller.render())

    async def _run_task(self, task: BackgroundTask) -> None:
        finished = await task.run()
        logger.debug("Background task finished (ok=%s)", finished.ok)
        self.feed(finished)
