# 🧾 giftlist/infrastructure/parsers/_infra_options.py
"""
🧾 Налаштування інфраструктурного шару превʼю.

🔹 Визначає іммутабельні опції (HTML-парсер, таймаути, заголовки, ліміт тіла).
🔹 Підтримує зчитування з ENV (префікс `PREVIEW_`) та зі словника конфігурації.
🔹 Експортує дефолтний обʼєкт `DEFAULT_PREVIEW_INFRA_OPTIONS`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging	# 🧾 Логування ініціалізації та валідації
import os	# 🌱 Зчитування ENV
from dataclasses import dataclass, fields	# 🧱 Dataclass для опцій
from typing import Any, Dict, Literal, Mapping, Optional	# 🧰 Типи для статичного аналізу

# 🧩 Внутрішні модулі проєкту
from giftlist.shared.utils.logger import LOG_NAME	# 🏷️ Базове імʼя логера

# ================================
# 🧾 ЛОГЕР ТА КОНСТАНТИ
# ================================
logger = logging.getLogger(f"{LOG_NAME}.parsers.infra_options")	# 🧾 Модульний логер

_BOOL_TRUE = {"1", "true", "yes", "on", "y", "t"}	# ✅ Булеві true-представлення
_BOOL_FALSE = {"0", "false", "no", "off", "n", "f"}	# ❌ Булеві false-представлення

_LOG_LEVELS: Dict[str, int] = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}	# 🎚️ Підтримувані рівні логів

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)	# 🕵️ Браузерний UA зменшує шанс бот-блокування
DEFAULT_ACCEPT = "text/html,application/xhtml+xml"	# 📄 Просимо саме HTML


# ================================
# 🛠️ ХЕЛПЕРИ КОНВЕРСІЙ
# ================================

def _parse_bool(val: Optional[str], default: bool) -> bool:
    """🔀 Перетворює ENV-рядок у bool з fallback."""
    if val is None:
        return default
    cleaned = val.strip().lower()
    if cleaned in _BOOL_TRUE:
        return True
    if cleaned in _BOOL_FALSE:
        return False
    logger.warning("⚠️ Некоректне булеве значення '%s' → fallback=%s.", val, default)
    return default


def _to_int(val: Optional[str], default_val: int) -> int:
    """🔢 Конвертує рядок у int із захистом від помилок."""
    try:
        return int(val) if val is not None else default_val
    except ValueError:
        logger.warning("⚠️ Неможливо перетворити '%s' у int → fallback=%s.", val, default_val)
        return default_val


# ================================
# 🧱 МОДЕЛЬ ОПЦІЙ
# ================================
@dataclass(frozen=True, slots=True)
class PreviewInfraOptions:
    """🧱 Іммутабельні параметри завантаження та розбору сторінок."""

    html_parser: Literal["lxml", "html.parser", "html5lib"] = "lxml"	# 🥣 Парсер DOM
    fetch_timeout_ms: int = 8_000	# ⏱️ Внутрішній таймаут запиту
    deadline_ms: int = 9_000	# ⏰ Зовнішній жорсткий дедлайн
    max_html_bytes: int = 5_000_000	# 📏 Обрізаємо тіло після цього розміру
    user_agent: str = DEFAULT_USER_AGENT	# 🕵️ User-Agent
    accept: str = DEFAULT_ACCEPT	# 📄 Accept
    accept_language: Optional[str] = "es-CL,es;q=0.9,en;q=0.8"	# 🌍 Accept-Language
    marketplace_enabled: bool = True	# 🛒 API-стратегії маркетплейсів
    log_level: Optional[str] = None	# 🎚️ Додатковий рівень логів

    def __post_init__(self) -> None:
        """🛡️ Валідує інваріанти одразу після створення."""
        allowed_parsers = {"lxml", "html.parser", "html5lib"}
        if self.html_parser not in allowed_parsers:
            raise ValueError(f"html_parser must be one of {allowed_parsers}, got: {self.html_parser!r}")
        if self.fetch_timeout_ms <= 0:
            raise ValueError("fetch_timeout_ms must be > 0")
        if self.deadline_ms < self.fetch_timeout_ms:
            raise ValueError("deadline_ms must be >= fetch_timeout_ms")
        if self.max_html_bytes <= 0:
            raise ValueError("max_html_bytes must be > 0")
        if not self.user_agent:
            raise ValueError("user_agent must not be empty")
        if self.log_level is not None and self.log_level.upper() not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {set(_LOG_LEVELS)}, got: {self.log_level!r}")

    # ================================
    # 🧱 КОНСТРУКТОРИ
    # ================================
    @classmethod
    def default(cls) -> "PreviewInfraOptions":
        """🧾 Повертає дефолтний набір опцій."""
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "PREVIEW_", base: Optional["PreviewInfraOptions"] = None) -> "PreviewInfraOptions":
        """🌱 Будує опції з ENV поверх `base` (невалідні значення → значення `base`)."""
        defaults = base or cls.default()

        candidate = cls.from_dict(
            {
                "html_parser": os.getenv(f"{prefix}HTML_PARSER", defaults.html_parser),
                "fetch_timeout_ms": _to_int(os.getenv(f"{prefix}FETCH_TIMEOUT_MS"), defaults.fetch_timeout_ms),
                "deadline_ms": _to_int(os.getenv(f"{prefix}DEADLINE_MS"), defaults.deadline_ms),
                "max_html_bytes": _to_int(os.getenv(f"{prefix}MAX_HTML_BYTES"), defaults.max_html_bytes),
                "user_agent": os.getenv(f"{prefix}USER_AGENT", defaults.user_agent),
                "accept": os.getenv(f"{prefix}ACCEPT", defaults.accept),
                "accept_language": os.getenv(f"{prefix}ACCEPT_LANGUAGE", defaults.accept_language),
                "marketplace_enabled": _parse_bool(
                    os.getenv(f"{prefix}MARKETPLACE_ENABLED"), defaults.marketplace_enabled
                ),
                "log_level": os.getenv(f"{prefix}LOG_LEVEL", defaults.log_level),
            },
            fallback=defaults,
        )
        logger.info("🌱 PreviewInfraOptions зібрано з ENV (prefix=%s).", prefix)
        return candidate

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping[str, Any]],
        *,
        fallback: Optional["PreviewInfraOptions"] = None,
    ) -> "PreviewInfraOptions":
        """🧾 Складання опцій із словника (зайві ключі ігноруються; невалідні → `fallback`)."""
        if not data:
            return fallback or cls.default()

        keys = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {key: data[key] for key in keys if key in data and data[key] is not None}
        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as exc:
            if fallback is None:
                raise
            logger.warning("⚠️ Невалідні опції превʼю (%s) → використовуємо попередні.", exc)
            return fallback

    # ================================
    # 🧰 УТИЛІТИ ЕКЗЕМПЛЯРА
    # ================================
    def merge(self, **overrides: Any) -> "PreviewInfraOptions":
        """🔀 Повертає новий екземпляр із підмінними полями (immutability)."""
        base = self.to_kwargs()
        base.update({key: value for key, value in overrides.items() if value is not None})
        return PreviewInfraOptions.from_dict(base)

    def to_kwargs(self) -> Dict[str, Any]:
        """📦 Представляє опції як dict для передавання/логування."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @property
    def fetch_timeout_sec(self) -> float:
        return self.fetch_timeout_ms / 1000.0

    @property
    def deadline_sec(self) -> float:
        return self.deadline_ms / 1000.0

    def request_headers(self) -> Dict[str, str]:
        """📨 Фіксовані заголовки запиту сторінки."""
        headers = {"User-Agent": self.user_agent, "Accept": self.accept}
        if self.accept_language:
            headers["Accept-Language"] = self.accept_language
        return headers

    def effective_log_level(self) -> int:
        """🎚️ Повертає числовий logging level (за відсутності → INFO)."""
        if self.log_level is None:
            return logging.INFO
        return _LOG_LEVELS.get(self.log_level.upper(), logging.INFO)


# ================================
# 📦 ГЛОБАЛЬНИЙ ДЕФОЛТ
# ================================
DEFAULT_PREVIEW_INFRA_OPTIONS = PreviewInfraOptions.default()	# 📦 Базовий екземпляр

__all__ = ["PreviewInfraOptions", "DEFAULT_PREVIEW_INFRA_OPTIONS", "DEFAULT_USER_AGENT", "DEFAULT_ACCEPT"]
