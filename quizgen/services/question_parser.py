# quizgen/services/question_parser.py

from __future__ import annotations

import logging
from typing import List, Tuple

from quizgen.mappers.question_mapper import (
    ROW_STRATEGIES,
    IdFactory,
    RowStrategy,
    fields_to_record,
    new_question_id,
    parse_row,
)
from quizgen.models.question import QuestionRecord, RowDefaults
from quizgen.utils.parsing import split_rows
from quizgen.utils.text import strip_code_fences

log = logging.getLogger(__name__)


def parse_questions(
    raw: str,
    default_skill: str,
    default_type: str,
    *,
    id_factory: IdFactory = new_question_id,
    strategies: Tuple[RowStrategy, ...] = ROW_STRATEGIES,
) -> List[QuestionRecord]:
    """
    Разбирает свободный текстовый ответ workflow в список вопросов.

    Этапы:
      1) убираем ``` ограждения и пробелы по краям;
      2) режем на строки ('<_>', запасной вариант — построчно);
      3) каждую строку — стратегиями (поля '|->', затем метки "Description:" ...);
      4) варианты для "Multiple Choice";
      5) QuestionRecord с новым id.

    Нераспознанная строка молча пропускается (пишем только в DEBUG),
    партия из-за неё не падает. Порядок вопросов = порядок строк.
    """
    defaults = RowDefaults(skill=default_skill, qtype=default_type)
    rows = split_rows(strip_code_fences(raw))

    questions: List[QuestionRecord] = []
    skipped = 0

    for idx, row in enumerate(rows, start=1):
        fields = parse_row(row, defaults, strategies)
        if fields is None:
            skipped += 1
            log.debug("Строка #%d не распознана, пропускаем: %r", idx, row[:200])
            continue
        questions.append(fields_to_record(fields, id_factory))

    log.info(
        "Разбор ответа: строк=%d, вопросов=%d, пропущено=%d",
        len(rows),
        len(questions),
        skipped,
    )
    return questions
