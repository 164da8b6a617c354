from __future__ import annotations

from enum import Enum

from quizgen.utils.text import squash_spaces


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "Multiple Choice"
    SHORT_ANSWER = "Short Answer"
    TRUE_FALSE = "True/False"
    FILL_IN_THE_BLANK = "Fill in the Blank"
    ESSAY = "Essay"


class SkillType(str, Enum):
    READING = "Reading"
    WRITING = "Writing"
    LISTENING = "Listening"
    SPEAKING = "Speaking"
    GRAMMAR = "Grammar"
    VOCABULARY = "Vocabulary"
    MATH = "Math"


def _canonical(enum_cls: type[Enum], value: str) -> str:
    """
    Приводит литерал к значению enum без учёта регистра и лишних пробелов.
    Неизвестный литерал возвращается как есть (trim): строку не отбрасываем.
    """
    lowered = squash_spaces(value).lower()
    for member in enum_cls:
        if member.value.lower() == lowered:
            return member.value
    return (value or "").strip()


def coerce_question_type(value: str) -> str:
    return _canonical(QuestionType, value)


def coerce_skill(value: str) -> str:
    return _canonical(SkillType, value)


def is_multiple_choice(value: str) -> bool:
    return coerce_question_type(value) == QuestionType.MULTIPLE_CHOICE.value
