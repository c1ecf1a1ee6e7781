import re
import shutil

import pytest

from autoresume.errors import (
    EmptyNameError,
    InvalidCredentialError,
    NoModelSelectedError,
    NoOutputSelectedError,
    PersistenceError,
)
from autoresume.storage.models import ModelCredential, Output, ProjectConfig
from autoresume.tui.messages import PromptTarget, ScreenKind
from autoresume.tui.overlays import ErrorBanner, TextPrompt
from autoresume.tui.screens.project_detail import JobField, OverviewField, Region

GPT = ModelCredential("gpt", "acme", "x", "key")


def _open(ui, store, name="Resume A", config=None):
    project = store.add_project(name)
    if config is not None:
        store.project_store.save(project.path, config)
    ui.press("enter")
    assert ui.controller.active is ScreenKind.PROJECT_DETAIL
    return project, ui.controller.screen


def test_opening_loads_config_and_touches_project(ui, store):
    project, detail = _open(ui, store, config=ProjectConfig(name="Resume A", resume_input="\\cv"))
    assert detail.config.resume_input == "\\cv"
    assert store.projects[0].last_opened >= project.last_opened


def test_broken_project_file_falls_back_to_empty(ui, store):
    project = store.add_project("Resume A")
    (project.path / "project.toml").write_text("not toml [")
    ui.press("enter")
    detail = ui.controller.screen
    assert detail.config == ProjectConfig(name="Resume A")
    assert ui.controller.overlay is None


def test_regions_wrap(ui, store):
    _, detail = _open(ui, store)
    ui.press("tab", "tab", "tab")
    assert detail.region is Region.OVERVIEW
    ui.press("shift+tab")
    assert detail.region is Region.JOB


@pytest.mark.parametrize("moves", [1, 2, 3, 9])
def test_field_cursors_are_clamped(ui, store, moves):
    _, detail = _open(ui, store, config=ProjectConfig(outputs=[Output("a"), Output("b")]))
    ui.press(*["j"] * moves)
    assert detail.overview_field == min(moves, OverviewField.MODEL)
    ui.press(*["k"] * (moves + 2))
    assert detail.overview_field == OverviewField.PROJECT_NAME

    ui.press("tab", *["j"] * moves)
    assert detail.output_index == min(moves, 1)
    ui.press(*["k"] * moves)
    assert detail.output_index == 0

    ui.press("tab", *["j"] * moves)
    assert detail.job_field == min(moves, JobField.SAVE)
    ui.press(*["k"] * (moves + 1))
    assert detail.job_field == JobField.NAME


def test_edit_resume_input(ui, store):
    _, detail = _open(ui, store)
    ui.press("j", "i")
    assert ui.controller.overlay.prompt == "Enter Resume Input"
    ui.type("\\section{Skills}")
    ui.press("enter", "ctrl+s")
    assert store.project_store.load(detail.project.path).resume_input == "\\section{Skills}"


def test_add_output_selects_and_saves(ui, store):
    project, detail = _open(ui, store, config=ProjectConfig(outputs=[Output("first")]))
    ui.press("tab", "a")
    assert detail.output_index == 1
    assert detail.config.outputs[1] == Output()
    assert len(store.project_store.load(project.path).outputs) == 2


def test_failed_add_output_leaves_list_alone(ui, store):
    project, detail = _open(ui, store, config=ProjectConfig(outputs=[Output("first")]))
    shutil.rmtree(project.path)
    ui.press("tab", "a")
    assert isinstance(ui.controller.overlay.error, PersistenceError)
    assert [o.name for o in detail.config.outputs] == ["first"]
    assert detail.output_index == 0


def test_job_prompt_edits_list_entry(ui, store):
    _, detail = _open(ui, store, config=ProjectConfig(outputs=[Output("first")]))
    ui.press("tab", "tab", "i", "ctrl+u")
    ui.type("Backend")
    ui.press("enter")
    assert detail.config.outputs[0].name == "Backend"


def test_stale_output_address_is_dropped(ui, store):
    _, detail = _open(ui, store, config=ProjectConfig(outputs=[Output("first")]))
    detail.apply_prompt(PromptTarget("output.name", 3), "lost")
    assert [o.name for o in detail.config.outputs] == ["first"]


def test_job_fields_need_an_output(ui, store):
    _open(ui, store)
    ui.press("tab", "tab", "i")
    assert isinstance(ui.controller.overlay.error, NoOutputSelectedError)


def test_model_picker(ui, store):
    store.save_models([GPT, ModelCredential("claude", "anthropic", "c", "k")])
    _, detail = _open(ui, store)
    ui.press("j", "j", "enter")
    assert detail.picker_open
    ui.press("j", "enter")
    assert not detail.picker_open
    assert detail.config.selected_model == "claude"

    ui.press("enter", "k", "escape")
    assert detail.config.selected_model == "claude"


def test_stale_model_renders_as_none(ui, store):
    from rich.console import Console

    _, detail = _open(ui, store, config=ProjectConfig(name="A", selected_model="deleted"))
    console = Console(record=True, width=120)
    console.print(ui.controller.render())
    assert "LLM: None" in console.export_text()


def test_save_button_writes_pdf_named_file(ui, store):
    project, _ = _open(ui, store, config=ProjectConfig(outputs=[Output("Backend", "jd", "tailored text")]))
    ui.press("tab", "tab", "j", "j", "j", "enter")
    assert ui.controller.overlay is None
    assert (project.path / "Backend.pdf").read_text() == "tailored text"


def test_save_button_with_blank_name(ui, store):
    _open(ui, store, config=ProjectConfig(outputs=[Output("", "jd", "text")]))
    ui.press("tab", "tab", "j", "j", "j", "enter")
    assert isinstance(ui.controller.overlay.error, EmptyNameError)


def _start_generation(ui, store, config):
    project, detail = _open(ui, store, config=config)
    ui.press("tab", "tab", "j", "j", "enter")
    assert detail.job_field is JobField.GENERATE
    return project, detail


@pytest.mark.asyncio
async def test_generation_appends_output_and_persists(ui, store):
    store.save_models([GPT])
    project, detail = _open(ui, store, config=ProjectConfig(name="Resume A", selected_model="gpt", resume_input="\\cv"))
    ui.press("tab", "a", "tab", "j", "i")
    ui.type("Backend Engineer")
    ui.press("enter", "j", "enter")

    [task] = ui.tasks
    assert detail.generating
    assert task.request.job_description == "Backend Engineer"
    assert task.request.credential == GPT

    ui.controller.dispatch(await task.run())
    assert not detail.generating
    assert ui.controller.overlay is None
    new = detail.config.outputs[-1]
    assert len(detail.config.outputs) == 2
    assert new.job_description == "Backend Engineer"
    assert new.generated_text
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}-\d{2}-\d{2}-\d{2}", new.name)
    assert detail.output_index == 1
    assert len(store.project_store.load(project.path).outputs) == 2


@pytest.mark.asyncio
async def test_generating_blocks_actions(ui, store):
    store.save_models([GPT])
    _, detail = _start_generation(
        ui, store, ProjectConfig(selected_model="gpt", outputs=[Output("o", "jd", "")])
    )
    assert len(ui.tasks) == 1
    ui.press("enter", "k", "tab", "shift+tab", "ctrl+s", "a", "i")
    assert len(ui.tasks) == 1
    assert detail.region is Region.JOB
    assert detail.job_field is JobField.GENERATE
    assert ui.controller.overlay is None

    ui.controller.dispatch(await ui.tasks[0].run())
    assert not detail.generating
    ui.press("k")
    assert detail.job_field is JobField.DESCRIPTION


@pytest.mark.asyncio
async def test_snapshot_ignores_later_edits(ui, store, fake_client):
    store.save_models([GPT])
    _, detail = _start_generation(
        ui, store, ProjectConfig(selected_model="gpt", resume_input="before", outputs=[Output("o", "jd", "")])
    )
    detail.config.resume_input = "after"
    await ui.tasks[0].run()
    _, prompt = fake_client.calls[0]
    assert "before" in prompt
    assert "after" not in prompt


@pytest.mark.asyncio
async def test_failed_generation_shows_error_and_clears_flag(ui, store, fake_client):
    fake_client.error = RuntimeError("Error code: 401 - invalid API key provided")
    store.save_models([GPT])
    project, detail = _start_generation(
        ui, store, ProjectConfig(selected_model="gpt", outputs=[Output("o", "jd", "")])
    )
    ui.controller.dispatch(await ui.tasks[0].run())
    assert not detail.generating
    banner = ui.controller.overlay
    assert isinstance(banner, ErrorBanner)
    assert isinstance(banner.error, InvalidCredentialError)
    assert banner.message == "invalid API key for acme"
    assert len(detail.config.outputs) == 1
    assert len(store.project_store.load(project.path).outputs) == 1


@pytest.mark.asyncio
async def test_deleted_model_means_no_model_selected(ui, store):
    _, detail = _start_generation(
        ui, store, ProjectConfig(selected_model="deleted", outputs=[Output("o", "jd", "")])
    )
    ui.controller.dispatch(await ui.tasks[0].run())
    assert not detail.generating
    assert isinstance(ui.controller.overlay.error, NoModelSelectedError)


@pytest.mark.asyncio
async def test_result_lands_in_launching_project(ui, store):
    store.save_models([GPT])
    first, detail = _start_generation(
        ui, store, ProjectConfig(name="A", selected_model="gpt", outputs=[Output("o", "jd", "")])
    )
    second = store.add_project("Resume B")

    ui.press("q")
    assert ui.controller.active is ScreenKind.LANDING
    ui.press("j", "enter")
    assert detail.project.name == "Resume B"
    assert detail.generating

    ui.controller.dispatch(await ui.tasks[0].run())
    assert not detail.generating
    assert detail.config.outputs == []
    assert len(store.project_store.load(first.path).outputs) == 2
    assert store.project_store.load(second.path).outputs == []


def test_prompt_overlay_is_owned_by_detail(ui, store):
    _open(ui, store)
    ui.press("i")
    prompt = ui.controller.overlay
    assert isinstance(prompt, TextPrompt)
    assert prompt.owner is ScreenKind.PROJECT_DETAIL
    assert prompt.target == PromptTarget("config.name")
