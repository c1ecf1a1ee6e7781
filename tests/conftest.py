import pytest

from autoresume.orchestrator.generation import GenerationService
from autoresume.storage.config_store import ConfigStore
from autoresume.tui.controller import AppController
from autoresume.tui.messages import KeyEvent


class FakeClient:
    """Stands in for the LLM; never touches the network."""

    def __init__(self, reply="\\section{Experience} tailored", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def __call__(self, credential, prompt):
        self.calls.append((credential, prompt))
        if self.error is not None:
            raise self.error
        return self.reply


class Driver:
    """Feeds keys to a controller the way the terminal host would."""

    def __init__(self, controller):
        self.controller = controller
        self.tasks = []

    def press(self, *keys):
        for key in keys:
            self._feed(KeyEvent(key, key if len(key) == 1 else None))

    def type(self, text):
        for ch in text:
            self._feed(KeyEvent("space" if ch == " " else ch, ch))

    def _feed(self, event):
        task = self.controller.dispatch(event)
        if task is not None:
            self.tasks.append(task)


@pytest.fixture
def store(tmp_path):
    s = ConfigStore(tmp_path / "auto-resume")
    s.load()
    return s


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def service(store, fake_client):
    return GenerationService(client=fake_client, project_store=store.project_store, timeout=0)


@pytest.fixture
def controller(store, service):
    return AppController(store, service)


@pytest.fixture
def ui(controller):
    return Driver(controller)
