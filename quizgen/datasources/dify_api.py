# quizgen/datasources/dify_api.py
from __future__ import annotations

import logging
import random
import string
from typing import Any, Dict, Optional

import requests
from requests import Response

from quizgen.config import Settings
from quizgen.errors import UpstreamError

# Где workflow может вернуть текст — берём первое непустое, в этом порядке
RESULT_PATHS = (
    ("result",),
    ("outputs", "result"),
    ("outputs", "text"),
    ("data", "outputs", "result"),
    ("data", "outputs", "text"),
    ("answer",),
)

_USER_ALPHABET = string.ascii_lowercase + string.digits


def make_user_id(prefix: str = "user-", length: int = 7) -> str:
    """
    Случайный идентификатор конечного пользователя для Dify ('user-k3j9x0a').
    """
    return prefix + "".join(random.choices(_USER_ALPHABET, k=length))


def _dig(data: Any, path: tuple) -> Any:
    node = data
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def extract_result_text(data: Dict[str, Any]) -> str:
    """
    Достаёт сырой текст из ответа workflow.
    Форматы ответа у разных версий Dify отличаются, поэтому перебираем
    RESULT_PATHS. Если ничего нет — пустая строка.
    """
    for path in RESULT_PATHS:
        value = _dig(data, path)
        if value:
            return value if isinstance(value, str) else str(value)
    return ""


class DifyApiClient:
    """
    HTTP-клиент для Dify Workflow API.
    Одна попытка, без ретраев; таймаут из settings.dify_timeout.
    """

    def __init__(self, settings: Settings) -> None:
        self.base_url: str = str(settings.dify_host or "").rstrip("/")
        self.api_key: Optional[str] = settings.dify_api_key
        self.timeout: float = settings.dify_timeout
        self.user_prefix: str = settings.dify_user_prefix

        self.log = logging.getLogger(self.__class__.__name__)

        if not self.base_url:
            self.log.warning("⚠️ Dify host is not configured.")
        if not self.api_key:
            self.log.warning("⚠️ Dify API key is not configured.")

    # -------------------------------------------------------------
    # Internal helper
    # -------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict] = None,
    ) -> Response:
        """
        Унифицированный метод запросов.
        Добавляет Bearer-токен, логирует запрос и ответ.
        На не-2xx бросает UpstreamError со статусом и телом ответа.
        """
        url = f"{self.base_url}{path}"
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        self.log.debug(f"HTTP {method} {url} json={json}")

        resp = requests.request(
            method=method,
            url=url,
            headers=headers,
            json=json,
            timeout=self.timeout,
        )

        self.log.debug(
            f"Response {resp.status_code} {resp.text[:300]}..."
        )

        if not resp.ok:
            self.log.error("Dify API error: %s %s", resp.status_code, resp.text)
            raise UpstreamError(resp.status_code, resp.text)
        return resp

    # -------------------------------------------------------------
    # Public API methods
    # -------------------------------------------------------------

    def run_workflow(self, prompt: str, user: Optional[str] = None) -> Dict[str, Any]:
        """
        POST /workflows/run (blocking).
        prompt уходит и в inputs.query, и в inputs.request — разные версии
        workflow читают разные переменные.
        """
        payload = {
            "inputs": {
                "query": prompt,
                "request": prompt,
            },
            "response_mode": "blocking",
            "user": user or make_user_id(self.user_prefix),
        }
        resp = self._request("POST", "/workflows/run", json=payload)
        return resp.json()
