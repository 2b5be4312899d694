# 🚨 giftlist/errors/__init__.py
"""
🚨 Класифікація збоїв та обгортка HTTP-хендлерів.

🔹 `reason_codes` / `reason_mapper` — виняток → `ReasonCode` + контекст для логів.
🔹 `error_handler` — декоратор, що перетворює несподівані винятки на 500.
"""

from .error_handler import GENERIC_ERROR_MESSAGE, NO_STORE_HEADERS, make_error_handler
from .reason_codes import ReasonCode
from .reason_mapper import map_error_to_reason

__all__ = [
    "GENERIC_ERROR_MESSAGE",
    "NO_STORE_HEADERS",
    "ReasonCode",
    "make_error_handler",
    "map_error_to_reason",
]
