# 📜 giftlist/shared/utils/logger.py
"""
📜 Єдина схема логування сервісу превʼю.

🔹 Налаштовує іменований кореневий логер `giftlist` (консоль + файл з ротацією).
🔹 Підтримує JSON-формат файлу та приглушення шумних бібліотек (httpx, uvicorn).
🔹 `get_logger()` видає дочірні логери з єдиним префіксом.
"""
from __future__ import annotations

# 🔠 Системні імпорти
import json									# 📦 Серіалізація payload логів
import logging									# 🪵 Робота з логерами Python
import sys									# 🧵 Потік stdout
import threading								# 🧵 Захист ініціалізації
from dataclasses import dataclass, field					# 🧱 DTO-конфіг логування
from logging.handlers import TimedRotatingFileHandler			# 📁 Ротація файлів
from pathlib import Path							# 📂 Шляхи
from typing import Any, Dict, Mapping, Optional, Union			# 🧰 Типи

# ================================
# 🧾 КОНСТАНТИ МОДУЛЯ
# ================================
LOG_NAME: str = "giftlist"							# 🏷️ Базовий префікс логерів
PLAIN_FORMAT: str = "%(asctime)s [%(levelname)s] - (%(name)s).%(funcName)s(%(lineno)d) - %(message)s"
CONSOLE_FORMAT: str = "[%(levelname).1s] %(name)s: %(message)s"

_DEFAULT_SUPPRESS: Dict[str, str] = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
    "uvicorn.access": "WARNING",
}											# 🙊 Бібліотеки, що засмічують DEBUG

_RESERVED_ATTRS = frozenset(
    (
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "levelno", "lineno", "module", "msecs", "message", "msg", "name",
        "pathname", "process", "processName", "relativeCreated", "stack_info",
        "thread", "threadName", "levelname", "funcName", "taskName",
    )
)											# 🚫 Стандартні поля LogRecord

_lock = threading.Lock()							# 🔒 Одна ініціалізація за раз


# ================================
# 🧾 DTO КОНФІГУРАЦІЇ
# ================================
@dataclass
class LoggingConfig:
    """Налаштування логування з дефолтами."""
    level: str = "INFO"
    console: bool = True
    json: bool = False
    file: Optional[str] = "logs/preview.log"				# 📁 None → без файлового виводу
    when: str = "midnight"
    interval: int = 1
    backup_count: int = 7
    encoding: str = "utf-8"
    suppress: Dict[str, str] = field(default_factory=lambda: dict(_DEFAULT_SUPPRESS))
    console_level: str = "INFO"
    file_level: str = "DEBUG"


# ================================
# 🧰 ФОРМАТТЕР
# ================================
class JsonFormatter(logging.Formatter):
    """Пласкі JSON-рядки з підтримкою `extra`."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, datefmt="%Y-%m-%d %H:%M:%S"),
            "level": record.levelname,
            "name": record.name,
            "func": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        for key, value in record.__dict__.items():			# 🔎 Custom extra-поля
            if key.startswith("_") or key in _RESERVED_ATTRS or key in payload:
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = str(value)				# 🔄 Несеріалізоване → рядок
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _to_level(value: Union[str, int, None], default: int) -> int:
    """Рядок/число → числовий рівень."""
    if value is None:
        return default
    if isinstance(value, int):
        return value
    return getattr(logging, str(value).upper(), default)


def _make_file_handler(cfg: LoggingConfig, fmt: logging.Formatter) -> logging.Handler:
    """Файловий хендлер із ротацією за часом."""
    log_path = Path(str(cfg.file))
    log_path.parent.mkdir(parents=True, exist_ok=True)		# 🧱 Директорія має існувати
    handler = TimedRotatingFileHandler(
        filename=str(log_path),
        when=cfg.when,
        interval=cfg.interval,
        backupCount=cfg.backup_count,
        encoding=cfg.encoding,
    )
    handler.setFormatter(fmt)
    return handler


def _suppress_third_party(suppress: Mapping[str, str]) -> None:
    """Знижує рівні логування сторонніх бібліотек."""
    for name, level in suppress.items():
        logging.getLogger(name).setLevel(_to_level(level, logging.WARNING))


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def init_logging(cfg: Optional[LoggingConfig] = None) -> logging.Logger:
    """Ініціалізує логер `giftlist`; повторний виклик замінює наші хендлери."""
    cfg = cfg or LoggingConfig()
    with _lock:
        root_logger = logging.getLogger(LOG_NAME)
        root_logger.setLevel(
            min(
                _to_level(cfg.level, logging.INFO),
                _to_level(cfg.console_level, logging.INFO),
                _to_level(cfg.file_level, logging.DEBUG) if cfg.file else logging.CRITICAL,
            )
        )

        for handler in list(root_logger.handlers):			# 🧹 Прибираємо старі хендлери
            root_logger.removeHandler(handler)
            handler.close()

        if cfg.console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
            console_handler.setLevel(_to_level(cfg.console_level, logging.INFO))
            root_logger.addHandler(console_handler)

        if cfg.file:
            fmt_file = JsonFormatter() if cfg.json else logging.Formatter(PLAIN_FORMAT)
            file_handler = _make_file_handler(cfg, fmt_file)
            file_handler.setLevel(_to_level(cfg.file_level, logging.DEBUG))
            root_logger.addHandler(file_handler)

        _suppress_third_party(cfg.suppress)

        root_logger.info(
            "✅ Logging initialized | level=%s console=%s json=%s file=%s",
            cfg.level.upper(),
            "ON" if cfg.console else "OFF",
            "ON" if cfg.json else "OFF",
            cfg.file or "OFF",
        )
        return root_logger


def init_logging_from_config(config: Optional[Mapping[str, Any]]) -> logging.Logger:
    """
    Ініціалізує логування з розділу `logging` ConfigService.

    Args:
        config: Словник налаштувань (невідомі ключі ігноруються).

    Returns:
        logging.Logger: Налаштований логер `giftlist`.
    """
    node = dict(config or {})
    defaults = LoggingConfig()
    suppress = dict(defaults.suppress)
    suppress.update(node.get("suppress") or {})			# 🙊 Доповнюємо дефолтний список
    level = str(node.get("level") or defaults.level)
    cfg = LoggingConfig(
        level=level,
        console=defaults.console if node.get("console") is None else bool(node["console"]),
        json=bool(node.get("json", defaults.json)),
        file=node.get("file", defaults.file) or None,
        when=str(node.get("when") or defaults.when),
        interval=int(node.get("interval") or defaults.interval),
        backup_count=int(node.get("backup_count") or defaults.backup_count),
        suppress=suppress,
        console_level=str(node.get("console_level") or level),
        file_level=str(node.get("file_level") or level),
    )
    return init_logging(cfg)


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """Дочірній логер із префіксом `LOG_NAME`."""
    return logging.getLogger(LOG_NAME if not suffix else f"{LOG_NAME}.{suffix}")


__all__ = [
    "LOG_NAME",
    "LoggingConfig",
    "JsonFormatter",
    "init_logging",
    "init_logging_from_config",
    "get_logger",
]
