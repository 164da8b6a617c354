# quizgen/services/quiz_generation_service.py

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from quizgen.config import Settings
from quizgen.datasources.dify_api import DifyApiClient, extract_result_text
from quizgen.errors import ConfigurationError, RequestValidationError
from quizgen.mappers.question_mapper import IdFactory, new_question_id
from quizgen.models.question import QuestionRecord
from quizgen.services.question_parser import parse_questions

log = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    questions: List[QuestionRecord] = field(default_factory=list)
    raw: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return {
            "questions": [q.to_dict() for q in self.questions],
            "raw": self.raw,
        }


def build_prompt(topic_range: str, skill: str, qtype: str) -> str:
    """
    Формат запроса, который ожидает workflow:
        "Unit 1-3, ['Reading'], ['Multiple Choice']"
    """
    return f"{topic_range}, ['{skill}'], ['{qtype}']"


class QuizGenerationService:
    """
    Генерация вопросов через Dify workflow.

    Основной сценарий:
      - проверяет, что Dify настроен (иначе ConfigurationError, до любых запросов),
      - проверяет поля запроса (иначе RequestValidationError),
      - отправляет промпт в workflow (UpstreamError при не-2xx),
      - достаёт сырой текст и разбирает его в QuestionRecord,
        навык/тип из запроса идут как значения по умолчанию.
    """

    def __init__(
        self,
        settings: Settings,
        client: Optional[DifyApiClient] = None,
        id_factory: IdFactory = new_question_id,
    ) -> None:
        self.settings = settings
        self.client = client if client is not None else DifyApiClient(settings)
        self.id_factory = id_factory

    # --- Публичный API ---

    def ensure_configured(self) -> None:
        if not self.settings.is_dify_configured:
            log.error("Dify не настроен: нет DIFY_HOST или DIFY_API_KEY")
            raise ConfigurationError("Dify configuration is missing")

    def generate(
        self,
        topic_range: Optional[str],
        skill: Optional[str],
        qtype: Optional[str],
    ) -> GenerationResult:
        self.ensure_configured()

        if not self._filled(topic_range) or not self._filled(skill) or not self._filled(qtype):
            log.warning(
                "Запрос без обязательных полей: range=%r, skill=%r, type=%r",
                topic_range,
                skill,
                qtype,
            )
            raise RequestValidationError("Missing required fields")

        prompt = build_prompt(topic_range, skill, qtype)
        log.info("Запрос к Dify workflow: %s", prompt)

        data = self.client.run_workflow(prompt)
        log.debug("Ответ Dify:\n%s", json.dumps(data, ensure_ascii=False, indent=2))

        raw = extract_result_text(data)
        if not raw:
            log.warning("В ответе Dify не найден текст результата")

        questions = parse_questions(raw, skill, qtype, id_factory=self.id_factory)
        return GenerationResult(questions=questions, raw=raw)

    # --- Внутренние помощники ---

    @staticmethod
    def _filled(value: Any) -> bool:
        # только непустые строки; числа/списки в этих полях workflow не поймёт
        return isinstance(value, str) and bool(value.strip())
