# 🧰 giftlist/shared/utils/__init__.py
"""
🧰 Пакет узгоджених утиліт: логування, URL, ціни.

🔹 `logger` — єдина схема логування (`init_logging`, `get_logger`).
🔹 `url_tools` — очищення трекінгу, валідація http(s), хост-фолбек.
🔹 `number` — евристика розбору рядків ціни.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

# 💵 Ціни
from .number import parse_price_string, price_to_text

# 🌐 URL
from .url_tools import (
    TRACKING_PARAMS,
    clean_tracking_params,
    hostname_fallback,
    to_absolute_url,
    validate_http_url,
)

__all__ = [
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    "parse_price_string",
    "price_to_text",
    "TRACKING_PARAMS",
    "clean_tracking_params",
    "hostname_fallback",
    "to_absolute_url",
    "validate_http_url",
]
