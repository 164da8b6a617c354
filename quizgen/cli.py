# quizgen/cli.py
import json
import sys
from pathlib import Path
from typing import Optional

import requests
import typer
import logging

from quizgen.config import Settings
from quizgen.errors import QuizGenError
from quizgen.logging_config import setup_logging
from quizgen.services.question_parser import parse_questions
from quizgen.services.quiz_generation_service import QuizGenerationService

log = logging.getLogger(__name__)
app = typer.Typer(add_completion=False)


def _echo_json(payload) -> None:
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command()
def generate(
    topic_range: str = typer.Option(..., "--range", help="Диапазон тем, например 'Unit 1-3'"),
    skill: str = typer.Option(..., "--skill", help="Навык: Reading, Math, ..."),
    qtype: str = typer.Option(..., "--type", help="Тип вопроса: 'Multiple Choice', 'Short Answer', ..."),
    show_raw: bool = typer.Option(True, "--raw/--no-raw", help="Включать сырой ответ Dify в вывод"),
):
    """
    Сгенерировать вопросы через Dify workflow и напечатать их как JSON.
    """
    settings = Settings()
    setup_logging(settings)
    log.info("Запуск команды generate (range=%r, skill=%r, type=%r)", topic_range, skill, qtype)

    service = QuizGenerationService(settings)
    try:
        result = service.generate(topic_range, skill, qtype)
    except QuizGenError as e:
        typer.echo(f"❌ {e.message} (status={e.status_code})", err=True)
        raise typer.Exit(code=1)
    except requests.RequestException as e:
        log.exception("Dify недоступен: %s", e)
        typer.echo(f"❌ Dify недоступен: {e}", err=True)
        raise typer.Exit(code=1)

    payload = result.to_payload()
    if not show_raw:
        payload.pop("raw")
    _echo_json(payload)
    log.info("Команда generate завершена: вопросов=%d", len(result.questions))


@app.command()
def parse(
    source: str = typer.Argument(..., help="Файл с сырым ответом workflow, '-' — stdin"),
    skill: str = typer.Option(..., "--skill", help="Навык по умолчанию"),
    qtype: str = typer.Option(..., "--type", help="Тип вопроса по умолчанию"),
):
    """
    Разобрать сохранённый ответ workflow без обращения к Dify.
    """
    if source == "-":
        raw = sys.stdin.read()
    else:
        path = Path(source)
        if not path.is_file():
            typer.echo(f"❌ Файл не найден: {source}", err=True)
            raise typer.Exit(code=1)
        raw = path.read_text(encoding="utf-8")

    questions = parse_questions(raw, skill, qtype)
    _echo_json([q.to_dict() for q in questions])


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Адрес (по умолчанию settings.api_host)"),
    port: Optional[int] = typer.Option(None, help="Порт (по умолчанию settings.api_port)"),
):
    """
    Запустить HTTP API (POST /api/generate).
    """
    import uvicorn

    from quizgen.api import create_app

    settings = Settings()
    setup_logging(settings)
    if not settings.is_dify_configured:
        typer.echo("⚠️ DIFY_HOST / DIFY_API_KEY не заданы (.env) — /api/generate будет отвечать 500.")

    log.info("Запуск HTTP API на %s:%s", host or settings.api_host, port or settings.api_port)
    uvicorn.run(
        create_app(settings),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
    )


def main():
    app()


if __name__ == "__main__":
    main()
