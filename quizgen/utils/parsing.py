from __future__ import annotations

import json
import logging
import re
from typing import List

log = logging.getLogger(__name__)

ROW_DELIMITER = "<_>"
FIELD_DELIMITER = "|->"

_OPTION_JUNK_RE = re.compile(r"[\[\]'\"]")


def split_rows(text: str) -> List[str]:
    """
    Делит нормализованный текст на строки-кандидаты (по одной на вопрос).

    Основной путь — разделитель '<_>', пустые куски отбрасываются.
    Запасной путь: если кусок получился один (или ни одного), но в тексте
    есть '|->' и переводы строк — генератор забыл '<_>', тогда берём
    построчно только строки с '|->'.
    Порядок строк сохраняется.
    """
    text = text or ""
    rows = [row for row in text.split(ROW_DELIMITER) if row.strip()]
    if len(rows) <= 1 and FIELD_DELIMITER in text and "\n" in text:
        rows = [line for line in text.split("\n") if FIELD_DELIMITER in line]
        log.debug("Нет разделителя строк %r, построчный разбор: %d строк(и)", ROW_DELIMITER, len(rows))
    return rows


def split_fields(row: str) -> List[str]:
    """
    'Q1 |-> A |-> B' -> ['Q1', 'A', 'B'].
    """
    return [part.strip() for part in row.split(FIELD_DELIMITER)]


def decode_options(options_text: str) -> List[str]:
    """
    Варианты ответа для "Multiple Choice".

    1) Пробуем как JSON-список, заменив одинарные кавычки на двойные:
       "['A', 'B']" -> ['A', 'B'].
    2) Иначе — выкидываем скобки и кавычки, режем по запятым:
       "[A, B, C]" -> ['A', 'B', 'C'].
    Пустой вход -> []. Исключения наружу не выходят.
    """
    text = (options_text or "").strip()
    if not text:
        return []

    try:
        decoded = json.loads(text.replace("'", '"'))
        if isinstance(decoded, list):
            return [item if isinstance(item, str) else json.dumps(item) for item in decoded]
    except (ValueError, RecursionError):
        # глубокая вложенность скобок валит json рекурсией
        log.debug("Варианты не разобраны как JSON, запасной разбор: %r", text[:100])

    return [p.strip() for p in _OPTION_JUNK_RE.sub("", text).split(",") if p.strip()]
