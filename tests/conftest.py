"""Shared test fixtures for the extsecret test suite."""

from collections.abc import Mapping

import pytest

from extsecret.secrets.application import (
    RequirementsCache,
    SecretReader,
    TemplateEvaluator,
    TemplateFunctionLibrary,
)
from extsecret.secrets.domain.exceptions import PromptError, SecretNotFoundError
from extsecret.secrets.domain.models import BackendType, ExternalSecretRef, KeyPropertyBatch
from extsecret.secrets.editors import EditorRegistry, SecretEditor
from extsecret.shared.infrastructure.resilience import RetryConfig

FAST_RETRY = RetryConfig(max_attempts=4, initial_delay=0.01, exponential_base=5.0, jitter=False)


class InMemorySecretStore:
    """SecretStore keeping secrets in a dict keyed by (namespace, name)."""

    def __init__(self):
        self.secrets: dict[tuple[str, str], dict[str, bytes]] = {}
        self.get_calls: list[tuple[str, str]] = []
        self.put_calls: list[tuple[str, str, dict[str, bytes]]] = []

    def add(self, name: str, namespace: str = "jx", **data: str) -> None:
        self.secrets[(namespace, name)] = {k: v.encode("utf-8") for k, v in data.items()}

    def get(self, name: str, namespace: str) -> dict[str, bytes]:
        self.get_calls.append((name, namespace))
        try:
            return dict(self.secrets[(namespace, name)])
        except KeyError:
            raise SecretNotFoundError(name, namespace) from None

    def put(self, name: str, namespace: str, data: Mapping[str, bytes]) -> None:
        self.put_calls.append((name, namespace, dict(data)))
        self.secrets[(namespace, name)] = dict(data)

    def text(self, name: str, namespace: str = "jx") -> dict[str, str]:
        return {k: v.decode("utf-8") for k, v in self.secrets[(namespace, name)].items()}


class ScriptedInput:
    """InputSurface replaying canned answers and recording every question."""

    def __init__(self, answers=None, confirms=None):
        self.answers = list(answers or [])
        self.confirms = list(confirms or [])
        self.prompts: list[tuple[str, str]] = []

    def pick_password(self, message: str, help: str) -> str:
        self.prompts.append((message, help))
        if not self.answers:
            raise PromptError(f"no answer scripted for {message}")
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def confirm(self, message: str, help: str) -> bool:
        self.prompts.append((message, help))
        if not self.confirms:
            raise PromptError(f"no confirmation scripted for {message}")
        return self.confirms.pop(0)


class StaticRequirementsLoader:
    """RequirementsLoader returning fixed data, optionally failing first."""

    def __init__(self, data=None, errors=None):
        self.data = data if data is not None else {}
        self.errors = list(errors or [])
        self.calls = 0

    def load(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.data


class RecordingEditor(SecretEditor):
    """Editor keeping every written batch in memory."""

    def __init__(self, backend: BackendType = BackendType.LOCAL, fail_keys=()):
        self._backend = backend
        self.fail_keys = set(fail_keys)
        self.batches: list[KeyPropertyBatch] = []

    @property
    def backend_type(self) -> BackendType:
        return self._backend

    def write(self, batch: KeyPropertyBatch) -> None:
        from extsecret.secrets.domain.exceptions import BackendWriteError

        if batch.key in self.fail_keys:
            raise BackendWriteError(f"failed to save {batch}")
        self.batches.append(batch)


@pytest.fixture
def store():
    return InMemorySecretStore()


@pytest.fixture
def sleeps():
    """Recorded sleep calls; pass ``sleeps.append`` as the sleep function."""
    return []


@pytest.fixture
def reader(store, sleeps):
    return SecretReader(store, FAST_RETRY, sleep=sleeps.append)


@pytest.fixture
def library(reader):
    # low bcrypt cost keeps the suite fast
    return TemplateFunctionLibrary(reader, htpasswd_rounds=4)


@pytest.fixture
def requirements_loader():
    return StaticRequirementsLoader({"cluster": {"clusterName": "mycluster", "project": "myproject"}})


@pytest.fixture
def evaluator(library, requirements_loader):
    return TemplateEvaluator(library, RequirementsCache(requirements_loader))


@pytest.fixture
def jx_secret():
    return ExternalSecretRef(name="jenkins-x-bucketrepo", namespace="jx", backend_type=BackendType.LOCAL)


@pytest.fixture
def isolated_registry(monkeypatch):
    """Give each test its own copy of the editor factories."""
    monkeypatch.setattr(EditorRegistry, "_factories", dict(EditorRegistry._factories))
    return EditorRegistry


@pytest.fixture
def make_input():
    """Factory for ScriptedInput(answers, confirms)."""
    return ScriptedInput


@pytest.fixture
def make_loader():
    """Factory for StaticRequirementsLoader(data, errors)."""
    return StaticRequirementsLoader


@pytest.fixture
def recording_editors(isolated_registry):
    """Register a RecordingEditor factory for the local backend; returns the created editors."""
    created: list[RecordingEditor] = []

    def factory(context):
        editor = RecordingEditor(BackendType.LOCAL)
        created.append(editor)
        return editor

    isolated_registry.register(BackendType.LOCAL, factory)
    return created
