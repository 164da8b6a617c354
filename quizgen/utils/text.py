import re

# ``` + необязательный тег языка + один перевод строки
_FENCE_OPEN_RE = re.compile(r"```[a-z]*\n?", re.IGNORECASE)


def squash_spaces(s: str) -> str:
    """
    Трим + схлопывание любых пробельных последовательностей в один пробел.
    """
    return " ".join((s or "").split())


def strip_code_fences(raw: str) -> str:
    """
    Убирает markdown-ограждения кода (```json ... ```) в любом месте текста
    и обрезает пробелы по краям. Никогда не бросает исключений.

    Пример:
        >>> strip_code_fences("```text\\nQ1|->A\\n```")
        'Q1|->A'
    """
    if not raw:
        return ""
    cleaned = _FENCE_OPEN_RE.sub("", raw)
    cleaned = cleaned.replace("```", "")
    return cleaned.strip()
