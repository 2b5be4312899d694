# 🧭 giftlist/errors/reason_mapper.py
"""
🧭 Мапить винятки → `ReasonCode` + контекст для логів fallback-превʼю.

🔹 Розрізняє помилки вводу (`InvalidUrlError`) і технічні збої.
🔹 Інкапсулює специфіку httpx та asyncio-таймаутів.
🔹 Повертає словник `ctx` (status_code, url), що йде у `logger.extra`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx															# 🌐 HTTP-клієнт (винятки)

# 🔠 Системні імпорти
import asyncio															# ⏱️ TimeoutError
import logging															# 🧾 Логування процесу мапінгу
from typing import Any, Dict, Optional, Tuple							# 📐 Типи

# 🧩 Внутрішні модулі проєкту
from giftlist.shared.errors import AppError, InvalidUrlError, NetworkError, ParseError	# ⚠️ Доменні помилки
from giftlist.shared.utils.logger import LOG_NAME						# 🏷️ Імʼя базового логера
from .reason_codes import ReasonCode									# 🧮 Перелік причин

logger = logging.getLogger(f"{LOG_NAME}.errors.reason_mapper")


# ================================
# 🧭 ОСНОВНИЙ МАПЕР
# ================================
def map_error_to_reason(exc: BaseException) -> Tuple[ReasonCode, Dict[str, Any]]:
    """Повертає (reason_code, ctx) для винятку."""
    if isinstance(exc, AppError):
        return _map_app_error(exc), exc.to_log_extra()

    httpx_result = _map_httpx_errors(exc)
    if httpx_result:
        return httpx_result

    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return ReasonCode.HTTP_TIMEOUT, {}

    logger.debug("❓ Unknown error mapped to INTERNAL", extra={"exc_type": type(exc).__name__})
    return ReasonCode.INTERNAL, {}


# ================================
# 🧩 ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _map_app_error(exc: AppError) -> ReasonCode:
    """ReasonCode для доменних винятків."""
    if isinstance(exc, InvalidUrlError):
        return ReasonCode.INVALID_URL
    if isinstance(exc, NetworkError):
        return ReasonCode.HTTP_STATUS if exc.status_code is not None else ReasonCode.HTTP_CONNECTION
    if isinstance(exc, ParseError):
        return ReasonCode.PARSE_FAILED
    return ReasonCode.INTERNAL


def _request_url(exc: httpx.HTTPError) -> Optional[str]:
    """URL запиту, якщо httpx його прикріпив."""
    try:
        return str(exc.request.url)
    except RuntimeError:												# 🚫 `.request` не встановлено
        return None


def _map_httpx_errors(exc: BaseException) -> Optional[Tuple[ReasonCode, Dict[str, Any]]]:
    """Повертає ReasonCode для httpx-винятків або None."""
    if isinstance(exc, httpx.TimeoutException):
        return ReasonCode.HTTP_TIMEOUT, {"url": _request_url(exc)}
    if isinstance(exc, httpx.HTTPStatusError):
        return ReasonCode.HTTP_STATUS, {"status_code": exc.response.status_code, "url": _request_url(exc)}
    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol)):
        return ReasonCode.INVALID_URL, {}
    if isinstance(exc, httpx.TransportError):
        return ReasonCode.HTTP_CONNECTION, {"url": _request_url(exc)}
    if isinstance(exc, httpx.HTTPError):
        return ReasonCode.HTTP_CONNECTION, {"url": _request_url(exc)}
    return None


__all__ = ["map_error_to_reason"]										# 📤 Публічний API
