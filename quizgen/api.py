# quizgen/api.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from quizgen.config import Settings
from quizgen.errors import QuizGenError, RequestValidationError
from quizgen.services.quiz_generation_service import QuizGenerationService

log = logging.getLogger(__name__)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def create_app(
    settings: Optional[Settings] = None,
    service: Optional[QuizGenerationService] = None,
) -> FastAPI:
    """
    Фабрика FastAPI-приложения.
    settings/service можно подменить (тесты, другой Dify).
    Любая ошибка превращается в JSON {"error": ...} с нужным статусом.
    """
    if service is None:
        service = QuizGenerationService(settings or Settings())

    app = FastAPI(
        title="Quiz Generator API",
        description="Generates exam questions via a Dify workflow and parses them into structured records.",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", status_code=200)
    async def health():
        return {"status": "ok", "dify_configured": service.settings.is_dify_configured}

    @app.post("/api/generate")
    async def generate(request: Request):
        try:
            # конфиг проверяем до разбора тела запроса
            service.ensure_configured()
            try:
                body = await request.json()
            except ValueError:
                raise RequestValidationError("Request body must be valid JSON")
            if not isinstance(body, dict):
                raise RequestValidationError("Request body must be a JSON object")

            result = await run_in_threadpool(
                service.generate,
                body.get("range"),
                body.get("skill"),
                body.get("type"),
            )
            return result.to_payload()
        except QuizGenError as e:
            log.warning("Ошибка генерации (%d): %s", e.status_code, e.message)
            return _error(e.message, e.status_code)
        except Exception as e:
            log.exception("Internal Server Error: %s", e)
            return _error(str(e) or "Internal Server Error", 500)

    return app
