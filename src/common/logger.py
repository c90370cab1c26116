# src/common/logger.py
"""
Логирование микросервисов.

Формат задаётся LOG_FORMAT: json (для сбора логов) или colored (локально).
Имя сервиса берётся из SERVICE_NAME и попадает в JSON и в имя файла лога.
Асинхронные помощники log_* добавляют в запись место вызова.
"""

from __future__ import annotations

import inspect
import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from src.common.constants import TypeMsg


DEFAULT_LOGGER_NAME = "commerce"

_loggers: dict[str, logging.Logger] = {}
_file_handler: logging.Handler | None = None
_logging_initialized = False


def _service_name() -> str:
    return os.getenv("SERVICE_NAME", "")


# =============================================================================
# ФОРМАТТЕРЫ
# =============================================================================

class JsonFormatter(logging.Formatter):
    """Одна запись = одна JSON-строка."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat(timespec="milliseconds")
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "service": _service_name() or None,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            entry["extra"] = extra_data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Цветной вывод для консоли разработчика."""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }
    DIM = "\033[2m"
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, self.DIM)
        time = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]

        where = ""
        extra_data = getattr(record, "extra_data", None) or {}
        if extra_data.get("caller_function"):
            where = (
                f" {self.DIM}{extra_data['caller_module']}.{extra_data['caller_function']}() "
                f"{extra_data['caller_file']}:{extra_data['caller_line']}{self.RESET}"
            )

        line = f"{self.DIM}{time}{self.RESET} {color}{record.levelname:<8}{self.RESET}{where} {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


# =============================================================================
# ЛОГГЕР
# =============================================================================

def _read_logging_config() -> dict[str, Any]:
    """Параметры логирования из settings; до загрузки конфига работают значения по умолчанию."""
    cfg: dict[str, Any] = {
        "level": "DEBUG",
        "format": "colored",
        "to_file": False,
        "file_path": "logs/app.log",
        "max_bytes": 10485760,
        "backup_count": 5,
    }
    try:
        from src.config import settings
    except (ImportError, FileNotFoundError):
        return cfg

    cfg.update(
        level=settings.logging.LOG_LEVEL,
        format=settings.logging.LOG_FORMAT,
        to_file=settings.logging.LOG_TO_FILE,
        file_path=settings.logging.LOG_FILE_PATH,
        max_bytes=settings.logging.LOG_MAX_BYTES,
        backup_count=settings.logging.LOG_BACKUP_COUNT,
    )
    return cfg


def _make_formatter(log_format: str) -> logging.Formatter:
    return JsonFormatter() if log_format == "json" else ColoredFormatter()


def _shared_file_handler(cfg: dict[str, Any]) -> logging.Handler:
    """Файл logs/app_<SERVICE_NAME>.log, общий для всех логгеров процесса."""
    global _file_handler
    if _file_handler is None:
        log_path = Path(cfg["file_path"])
        if _service_name():
            log_path = log_path.with_name(f"{log_path.stem}_{_service_name()}{log_path.suffix}")
        log_path.parent.mkdir(parents=True, exist_ok=True)

        _file_handler = RotatingFileHandler(
            log_path,
            maxBytes=cfg["max_bytes"],
            backupCount=cfg["backup_count"],
            encoding="utf-8",
        )
        _file_handler.setFormatter(_make_formatter(cfg["format"]))
    return _file_handler


def setup_logging() -> None:
    """Идемпотентна; вызывается из lifespan каждого сервиса."""
    global _logging_initialized
    if _logging_initialized:
        return
    _logging_initialized = True

    get_logger(DEFAULT_LOGGER_NAME)

    for noisy in ("asyncpg", "aio_pika", "aiormq", "httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Возвращает настроенный логгер; хендлеры добавляются один раз на имя."""
    if name in _loggers:
        return _loggers[name]

    cfg = _read_logging_config()

    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, str(cfg["level"]).upper(), logging.DEBUG))
    logger.propagate = False

    if not logger.handlers:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(_make_formatter(cfg["format"]))
        logger.addHandler(console)
        if cfg["to_file"]:
            logger.addHandler(_shared_file_handler(cfg))

    _loggers[name] = logger
    return logger


# =============================================================================
# АСИНХРОННЫЕ ПОМОЩНИКИ
# =============================================================================

def _get_caller_info() -> dict[str, Any]:
    """Место вызова log_*: первая рамка стека вне этого модуля."""
    frame = inspect.currentframe()
    try:
        caller = frame.f_back if frame is not None else None
        while caller is not None and caller.f_globals.get("__name__") == __name__:
            caller = caller.f_back
        if caller is None:
            return {}
        return {
            "caller_function": caller.f_code.co_name,
            "caller_module": caller.f_globals.get("__name__", "unknown"),
            "caller_file": Path(caller.f_code.co_filename).name,
            "caller_line": caller.f_lineno,
        }
    finally:
        del frame


def _record_extra(extra: dict[str, Any] | None) -> dict[str, Any]:
    return {"extra_data": {**_get_caller_info(), **(extra or {})}}


async def log_info(
    message: str,
    *,
    type_msg: TypeMsg = TypeMsg.INFO,
    logger_name: str = DEFAULT_LOGGER_NAME,
    extra: dict[str, Any] | None = None,
) -> None:
    """
    Пишет сообщение с уровнем type_msg.

    Args:
        message: Текст сообщения
        type_msg: Уровень (TypeMsg)
        logger_name: Имя логгера
        extra: Дополнительные поля записи (delivery_id, order_id, ...)
    """
    logger = get_logger(logger_name)
    record_extra = _record_extra(extra)

    match type_msg:
        case TypeMsg.DEBUG:
            logger.debug(message, extra=record_extra)
        case TypeMsg.WARNING:
            logger.warning(message, extra=record_extra)
        case TypeMsg.ERROR:
            logger.error(message, extra=record_extra)
        case TypeMsg.CRITICAL:
            logger.critical(message, extra=record_extra)
        case _:
            logger.info(message, extra=record_extra)


async def log_debug(message: str, logger_name: str = DEFAULT_LOGGER_NAME, extra: dict[str, Any] | None = None) -> None:
    await log_info(message, type_msg=TypeMsg.DEBUG, logger_name=logger_name, extra=extra)


async def log_warning(message: str, logger_name: str = DEFAULT_LOGGER_NAME, extra: dict[str, Any] | None = None) -> None:
    await log_info(message, type_msg=TypeMsg.WARNING, logger_name=logger_name, extra=extra)


async def log_error(
    message: str,
    logger_name: str = DEFAULT_LOGGER_NAME,
    extra: dict[str, Any] | None = None,
    exc_info: bool = False,
) -> None:
    """ERROR; exc_info=True добавляет трейсбек текущего исключения."""
    get_logger(logger_name).error(message, extra=_record_extra(extra), exc_info=exc_info)
