"""
Ошибки генерации вопросов. У каждой есть HTTP-статус, с которым она
отдаётся клиенту на границе API.
"""


class QuizGenError(Exception):
    """Базовая ошибка сервиса"""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(QuizGenError):
    """Не заданы адрес или токен Dify"""

    status_code = 500


class RequestValidationError(QuizGenError):
    """В запросе нет обязательных полей"""

    status_code = 400


class UpstreamError(QuizGenError):
    """Dify ответил не-2xx; статус и тело пробрасываются как есть"""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Dify API error: {body}", status_code=status_code)
        self.body = body
