# autoresume/cli.py
from __future__ import annotations

import logging
from typing import NoReturn

import typer
from rich.console import Console
from rich.theme import Theme

from dotenv import load_dotenv
load_dotenv()  # load .env early

from autoresume.errors import AutoResumeError
from autoresume.settings import SETTINGS
from autoresume.storage.config_store import ConfigStore
from autoresume.tui.app import AutoResumeApp
from autoresume.tui.controller import AppController
from autoresume.utils.logging import setup_logger

app = typer.Typer(add_completion=False)

logger = logging.getLogger("autoresume")

# -----------------------
# Rich theme for the few lines printed outside the full-screen UI
# -----------------------
CLI_THEME = Theme({
    "info": "blue",
    "error": "bold red",
})
err_console = Console(theme=CLI_THEME, stderr=True)


def _fail(message: str) -> NoReturn:
    err_console.print(f"[error]{message}[/error]")
    raise typer.Exit(code=1)


@app.command()
def main() -> None:
    """Manage resume projects and tailor them to job descriptions with an LLM."""
    try:
        data_dir = SETTINGS.data_dir()
        setup_logger(SETTINGS.log_level, SETTINGS.log_json, SETTINGS.log_path())
    except (OSError, RuntimeError) as e:
        _fail(f"Failed to init application directory: {e}")

    store = ConfigStore(data_dir)
    try:
        store.load()
    except AutoResumeError as e:
        logger.error("Startup failed: %s", e)
        _fail(f"Failed to init config: {e}")

    tui = AutoResumeApp(AppController(store))
    try:
        tui.run()
    except Exception as e:
        logger.exception("Render loop failed")
        _fail(f"Unexpected failure: {e}")

    if tui.return_code:
        logger.error("Render loop exited with status %s", tui.return_code)
        raise typer.Exit(code=1)
    logger.info("Bye")


if __name__ == "__main__":
    app()
