import json

import pytest
import requests
from typer.testing import CliRunner

from quizgen import cli
from quizgen.errors import ConfigurationError
from quizgen.models.question import QuestionRecord
from quizgen.services.quiz_generation_service import GenerationResult

runner = CliRunner()


@pytest.fixture(autouse=True)
def no_log_files(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "setup_logging", lambda settings: None)


def test_parse_file(tmp_path):
    source = tmp_path / "raw.txt"
    source.write_text("Q1|->['a', 'b']|->a|->Math|->Multiple Choice<_>Q2|->B", encoding="utf-8")

    result = runner.invoke(cli.app, ["parse", str(source), "--skill", "Reading", "--type", "Essay"])

    assert result.exit_code == 0
    records = json.loads(result.stdout)
    assert [(r["description"], r["options"], r["type"]) for r in records] == [
        ("Q1", ["a", "b"], "Multiple Choice"),
        ("Q2", None, "Essay"),
    ]


def test_parse_stdin():
    result = runner.invoke(
        cli.app,
        ["parse", "-", "--skill", "Reading", "--type", "Short Answer"],
        input="Description: X Answer: Y",
    )

    assert result.exit_code == 0
    records = json.loads(result.stdout)
    assert records[0]["description"] == "X"
    assert records[0]["answer"] == "Y"


def test_parse_missing_file():
    result = runner.invoke(cli.app, ["parse", "nope.txt", "--skill", "Reading", "--type", "Essay"])
    assert result.exit_code == 1


class _FakeService:
    error = None

    def __init__(self, settings):
        self.settings = settings

    def generate(self, topic_range, skill, qtype):
        if self.error is not None:
            raise self.error
        record = QuestionRecord(
            id="q-1", description="Q", options=None, answer="A", skill=skill, type=qtype
        )
        return GenerationResult(questions=[record], raw="Q|->A")


def test_generate_prints_payload(monkeypatch):
    monkeypatch.setattr(cli, "QuizGenerationService", _FakeService)

    result = runner.invoke(
        cli.app, ["generate", "--range", "Unit 1", "--skill", "Reading", "--type", "Essay"]
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["raw"] == "Q|->A"
    assert payload["questions"][0]["type"] == "Essay"


def test_generate_no_raw(monkeypatch):
    monkeypatch.setattr(cli, "QuizGenerationService", _FakeService)

    result = runner.invoke(
        cli.app, ["generate", "--range", "Unit 1", "--skill", "Reading", "--type", "Essay", "--no-raw"]
    )

    assert result.exit_code == 0
    assert "raw" not in json.loads(result.stdout)


def test_generate_error_exits_with_1(monkeypatch):
    class _Failing(_FakeService):
        error = ConfigurationError("Dify configuration is missing")

    monkeypatch.setattr(cli, "QuizGenerationService", _Failing)

    result = runner.invoke(
        cli.app, ["generate", "--range", "Unit 1", "--skill", "Reading", "--type", "Essay"]
    )

    assert result.exit_code == 1


def test_generate_network_error_exits_with_1(monkeypatch):
    class _Unreachable(_FakeService):
        error = requests.ConnectionError("Connection refused")

    monkeypatch.setattr(cli, "QuizGenerationService", _Unreachable)

    result = runner.invoke(
        cli.app, ["generate", "--range", "Unit 1", "--skill", "Reading", "--type", "Essay"]
    )

    assert result.exit_code == 1
    assert not isinstance(result.exception, requests.ConnectionError)
