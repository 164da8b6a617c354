import itertools

import pytest

from quizgen.config import Settings

DIFY_ENV_VARS = (
    "DIFY_HOST",
    "NEXT_PUBLIC_DIFY_HOST",
    "DIFY_API_KEY",
    "NEXT_PUBLIC_DIFY_EXAMS_QUESTIONS_GENERATOR_TOKEN",
)


class FakeDifyClient:
    """Подмена DifyApiClient: запоминает промпты, отдаёт заготовленный ответ."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else {}
        self.error = error
        self.prompts = []

    def run_workflow(self, prompt, user=None):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def clean_dify_env(monkeypatch):
    for name in DIFY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        dify_host="https://dify.test/v1/",
        dify_api_key="secret",
        dify_timeout=5.0,
    )


@pytest.fixture
def unconfigured_settings():
    return Settings(_env_file=None, dify_host=None, dify_api_key=None)


@pytest.fixture
def id_factory():
    counter = itertools.count(1)
    return lambda: f"q-{next(counter)}"


@pytest.fixture
def make_fake_client():
    return FakeDifyClient
