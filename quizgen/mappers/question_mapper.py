# quizgen/mappers/question_mapper.py

from __future__ import annotations

import logging
import re
import uuid
from typing import Callable, Optional, Tuple

from quizgen.models.enums import coerce_question_type, coerce_skill, is_multiple_choice
from quizgen.models.question import ParsedFields, QuestionRecord, RowDefaults
from quizgen.utils.parsing import FIELD_DELIMITER, decode_options, split_fields

log = logging.getLogger(__name__)

IdFactory = Callable[[], str]
RowStrategy = Callable[[str, RowDefaults], Optional[ParsedFields]]

_LABEL_FLAGS = re.IGNORECASE | re.DOTALL | re.MULTILINE

# "Description:" или нумерация "1." .. "5." в начале строки (можно вместе: "1. Description:")
_DESCRIPTION_RE = re.compile(
    r"(?:Description:|^[ \t]*[1-5]\.(?!\d):?(?:\s*Description:)?)\s*(.*?)(?=Options:|Answer:|\Z)",
    _LABEL_FLAGS,
)
_OPTIONS_RE = re.compile(r"Options:\s*(.*?)(?=Answer:|\Z)", _LABEL_FLAGS)
_ANSWER_RE = re.compile(r"Answer:\s*(.*?)(?=Skill:|Type:|\Z)", _LABEL_FLAGS)


def new_question_id() -> str:
    return str(uuid.uuid4())


# --- Стратегии разбора строки -------------------------------------------------


def parse_delimited_row(row: str, defaults: RowDefaults) -> Optional[ParsedFields]:
    """
    Стратегия A: поля через '|->'.

      - 5+ частей: описание |-> варианты |-> ответ |-> навык |-> тип
        (всё, что после пятой части, игнорируем);
      - 2-4 части: описание |-> ответ, навык/тип — из запроса.

    Пустые поля не проверяются: строка "|->" даёт вопрос с пустыми полями.
    """
    if FIELD_DELIMITER not in row:
        return None

    parts = split_fields(row)
    if len(parts) < 2:
        return None

    if len(parts) >= 5:
        return ParsedFields(
            description=parts[0],
            options_text=parts[1],
            answer=parts[2],
            skill=coerce_skill(parts[3]),
            qtype=coerce_question_type(parts[4]),
        )

    return ParsedFields(
        description=parts[0],
        options_text="",
        answer=parts[1],
        skill=coerce_skill(defaults.skill),
        qtype=coerce_question_type(defaults.qtype),
    )


def parse_labeled_row(row: str, defaults: RowDefaults) -> Optional[ParsedFields]:
    """
    Стратегия B (запасная): метки "Description:" / "Options:" / "Answer:".
    Навык и тип всегда из запроса, в строке их не ищем.
    Без непустых описания и ответа строка не принимается.
    """
    desc_match = _DESCRIPTION_RE.search(row)
    answer_match = _ANSWER_RE.search(row)
    if not desc_match or not answer_match:
        return None

    description = desc_match.group(1).strip()
    answer = answer_match.group(1).strip()
    if not description or not answer:
        return None

    options_text = ""
    if is_multiple_choice(defaults.qtype):
        opt_match = _OPTIONS_RE.search(row)
        if opt_match:
            options_text = opt_match.group(1).strip()

    return ParsedFields(
        description=description,
        options_text=options_text,
        answer=answer,
        skill=coerce_skill(defaults.skill),
        qtype=coerce_question_type(defaults.qtype),
    )


ROW_STRATEGIES: Tuple[RowStrategy, ...] = (parse_delimited_row, parse_labeled_row)


def parse_row(
    row: str,
    defaults: RowDefaults,
    strategies: Tuple[RowStrategy, ...] = ROW_STRATEGIES,
) -> Optional[ParsedFields]:
    """
    Пробует стратегии по порядку, первая сработавшая побеждает.
    None — строка не распознана ни одной стратегией.
    """
    for strategy in strategies:
        fields = strategy(row, defaults)
        if fields is not None:
            return fields
    return None


# --- Сборка QuestionRecord ----------------------------------------------------


def fields_to_record(fields: ParsedFields, id_factory: IdFactory = new_question_id) -> QuestionRecord:
    """
    options: список (возможно пустой) для "Multiple Choice", иначе None.
    """
    options = decode_options(fields.options_text) if is_multiple_choice(fields.qtype) else None

    return QuestionRecord(
        id=id_factory(),
        description=fields.description,
        options=options,
        answer=fields.answer,
        skill=fields.skill,
        type=fields.qtype,
    )
