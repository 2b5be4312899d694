# 🧮 giftlist/errors/reason_codes.py
"""🧮 Перелік причин, з яких превʼю могло деградувати до fallback."""

from __future__ import annotations

from enum import Enum


class ReasonCode(str, Enum):
    """Причина збою (значення потрапляють у логи як `reason`)."""

    INVALID_URL = "invalid_url"
    HTTP_TIMEOUT = "http_timeout"
    HTTP_CONNECTION = "http_connection"
    HTTP_STATUS = "http_status"
    PARSE_FAILED = "parse_failed"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    INTERNAL = "internal"


__all__ = ["ReasonCode"]
