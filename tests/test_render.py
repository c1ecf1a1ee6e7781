from rich.console import Console

from autoresume.errors import PersistenceError
from autoresume.storage.models import ModelCredential, Output, ProjectConfig
from autoresume.tui.messages import ResizeEvent


def screen_text(controller, width=120):
    console = Console(record=True, width=width, color_system=None)
    console.print(controller.render())
    return console.export_text()


def test_empty_landing(controller):
    text = screen_text(controller)
    assert "No projects yet" in text
    assert "Select a project to view details" in text


def test_landing_shows_selected_project_details(ui, store):
    store.add_project("Resume A")
    store.add_project("Resume B")
    ui.press("j")
    text = screen_text(ui.controller)
    assert "► Resume B" in text
    assert "Name: Resume B" in text
    assert "Last Opened:" in text


def test_panes_fill_terminal_height(controller):
    controller.dispatch(ResizeEvent(100, 30))
    assert len(screen_text(controller, width=100).splitlines()) >= 26


def test_model_manager(ui, store):
    store.save_models([ModelCredential("gpt", "openai", "gpt-4o", "k")])
    ui.press("M")
    text = screen_text(ui.controller)
    assert "► gpt" in text
    assert "Provider: openai" in text


def test_error_banner(controller):
    controller.show_error(PersistenceError("disk full"))
    text = screen_text(controller)
    assert "Error" in text
    assert "disk full" in text


def test_prompt_shows_value(ui):
    ui.press("n")
    ui.type("Resume")
    text = screen_text(ui.controller)
    assert "Enter Project Name" in text
    assert "Resume█" in text


def test_project_detail(ui, store):
    store.save_models([ModelCredential("gpt", "openai", "gpt-4o", "k")])
    project = store.add_project("Resume A")
    store.project_store.save(
        project.path,
        ProjectConfig(name="Resume A", selected_model="gpt", outputs=[Output("Backend", "Go services", "")]),
    )
    ui.press("enter")
    text = screen_text(ui.controller)
    assert "Project Name: Resume A" in text
    assert "LLM: gpt" in text
    assert "Backend" in text
    assert "[ Generate ]" in text


def test_generating_box(ui, store):
    store.save_models([ModelCredential("gpt", "openai", "gpt-4o", "k")])
    project = store.add_project("Resume A")
    store.project_store.save(project.path, ProjectConfig(selected_model="gpt", outputs=[Output("o", "jd", "")]))
    ui.press("enter", "tab", "tab", "j", "j", "enter")
    text = screen_text(ui.controller)
    assert "Generating resume..." in text
    assert "Please stand by..." in text
