# quizgen/config.py
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Конфиг приложения. Читается из переменных окружения и .env
    (pydantic-settings). Передаётся в клиент и сервис при создании,
    ad hoc os.environ нигде не читаем.
    """

    # --------- Dify ----------
    dify_host: str | None = Field(
        default=None,
        validation_alias=AliasChoices("DIFY_HOST", "NEXT_PUBLIC_DIFY_HOST"),
        description="Базовый URL Dify API, например: https://api.dify.ai/v1",
    )
    dify_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "DIFY_API_KEY",
            "NEXT_PUBLIC_DIFY_EXAMS_QUESTIONS_GENERATOR_TOKEN",
        ),
        description="Bearer-токен workflow генерации вопросов",
    )
    dify_timeout: float = Field(
        default=60.0,
        validation_alias=AliasChoices("DIFY_TIMEOUT"),
        description="Таймаут HTTP-запроса к Dify, сек. Workflow в blocking-режиме бывает медленным.",
    )
    dify_user_prefix: str = Field(
        default="user-",
        validation_alias=AliasChoices("DIFY_USER_PREFIX"),
    )

    # --------- HTTP API ----------
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # --------- Logging ----------
    log_dir: str = "logs"
    log_level: str = "INFO"
    log_file: str = "quizgen.log"
    log_max_bytes: int = 5 * 1024 * 1024  # 5 MB
    log_backup_count: int = 3

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # лишние переменные окружения игнорируем
        populate_by_name=True,
    )

    @property
    def is_dify_configured(self) -> bool:
        return bool(self.dify_host) and bool(self.dify_api_key)
