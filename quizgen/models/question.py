from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass(slots=True, frozen=True)
class RowDefaults:
    """
    Навык и тип из запроса: подставляются, когда строка их не содержит.
    """

    skill: str
    qtype: str


@dataclass(slots=True, frozen=True)
class ParsedFields:
    """
    Поля, извлечённые из одной строки (RawRow) одной из стратегий разбора.
    Отсутствие совпадения стратегии выражается через None, а не через этот объект.
    """

    description: str
    options_text: str
    answer: str
    skill: str
    qtype: str


@dataclass(slots=True)
class QuestionRecord:
    """
    Готовый вопрос.
    options — список (возможно пустой) для "Multiple Choice", иначе None.
    """

    id: str
    description: str
    options: Optional[List[str]]
    answer: str
    skill: str
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
