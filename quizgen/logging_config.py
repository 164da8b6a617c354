import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Iterable

from .config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Сторонние логгеры, которые ставят свои хендлеры; переводим их на root
LIBRARY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")
# Болтливые на DEBUG: requests/urllib3 пишут каждое соединение
NOISY_LOGGERS = ("urllib3",)


def route_library_loggers(names: Iterable[str] = LIBRARY_LOGGERS) -> None:
    """
    Снимает собственные хендлеры с логгеров библиотек и включает propagate,
    чтобы их записи шли в тот же файл и консоль, что и наши.
    """
    for name in names:
        lib_log = logging.getLogger(name)
        lib_log.handlers.clear()
        lib_log.propagate = True


def quiet_noisy_loggers(level: int, names: Iterable[str] = NOISY_LOGGERS) -> None:
    """
    urllib3 поднимаем до WARNING, если только приложение само не на DEBUG.
    """
    for name in names:
        logging.getLogger(name).setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)


def _file_handler(settings: Settings, formatter: logging.Formatter) -> RotatingFileHandler:
    os.makedirs(settings.log_dir, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(settings.log_dir, settings.log_file),
        maxBytes=settings.log_max_bytes,
        backupCount=settings.log_backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(settings: Settings) -> None:
    """
    Конфигурирует логирование для CLI и HTTP API:
    - уровень из settings.log_level (неизвестное значение -> INFO);
    - файл с ротацией (settings.log_max_bytes, settings.log_backup_count) + консоль;
    - логгеры uvicorn пишут через root, urllib3 приглушён.
    Повторный вызов не дублирует хендлеры.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(_file_handler(settings, formatter))

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    route_library_loggers()
    quiet_noisy_loggers(level)
