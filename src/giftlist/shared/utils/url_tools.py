# 🔗 giftlist/shared/utils/url_tools.py
"""
🔗 Утиліти для роботи з URL, які вставляє користувач.

🔹 `clean_tracking_params` — прибирає маркетингові параметри (utm_*, fbclid…).
🔹 `validate_http_url` — валідація вводу на межі HTTP (лише http/https).
🔹 `hostname_fallback` / `to_absolute_url` — хелпери для каскадів превʼю.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import FrozenSet											# 🧰 Типізація
from urllib.parse import SplitResult, unquote_plus, urljoin, urlsplit, urlunsplit	# 🌐 Розбір URL

# 🧩 Внутрішні модулі проєкту
from giftlist.shared.errors import InvalidUrlError						# 🚨 Помилка вводу
from giftlist.shared.utils.logger import get_logger						# 🧾 Логер

logger = get_logger("url")


# ================================
# 🧾 КОНСТАНТИ
# ================================
TRACKING_PARAMS: FrozenSet[str] = frozenset(
    (
        "fbclid",
        "gclid",
        "dclid",
        "msclkid",
        "igshid",
        "mc_cid",
        "mc_eid",
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
    )
)																		# 🙊 Denylist трекінгу

ALLOWED_SCHEMES: FrozenSet[str] = frozenset(("http", "https"))			# ✅ Схеми для превʼю
_FORBIDDEN_HOST_CHARS: FrozenSet[str] = frozenset("<>^|\\\"")				# 🚫 Заборонені символи хоста


# ================================
# 🛠️ ПРИВАТНІ ХЕЛПЕРИ
# ================================
def _split_absolute(raw_url: str) -> SplitResult:
    """Розбирає абсолютний URL або кидає `InvalidUrlError`."""
    candidate = (raw_url or "").strip()
    try:
        parts = urlsplit(candidate)
        parts.port														# 🔢 Невалідний порт → ValueError
    except ValueError as exc:
        raise InvalidUrlError("Invalid URL.", url=raw_url, details=str(exc)) from exc
    if not parts.scheme or not parts.hostname:
        raise InvalidUrlError("Invalid URL.", url=raw_url, details="URL must be absolute")
    if any(ch.isspace() or ch in _FORBIDDEN_HOST_CHARS for ch in parts.hostname):
        raise InvalidUrlError("Invalid URL.", url=raw_url, details="Forbidden character in host")
    return parts


def _param_key(segment: str) -> str:
    """Декодований ключ сегмента `key=value`."""
    return unquote_plus(segment.split("=", 1)[0])


# ================================
# 🚀 ПУБЛІЧНИЙ API
# ================================
def clean_tracking_params(raw_url: str) -> str:
    """
    Прибирає трекінгові query-параметри, зберігаючи решту без перекодування.

    Порядок і значення інших параметрів, шлях і фрагмент лишаються як були.

    Raises:
        InvalidUrlError: URL не розбирається або не абсолютний.
    """
    parts = _split_absolute(raw_url)
    kept = [
        segment
        for segment in parts.query.split("&")
        if segment and _param_key(segment) not in TRACKING_PARAMS
    ]
    cleaned = urlunsplit((parts.scheme, parts.netloc, parts.path or "/", "&".join(kept), parts.fragment))
    if cleaned != raw_url:
        logger.debug("🧼 URL очищено: %s → %s", raw_url, cleaned)
    return cleaned


def validate_http_url(raw_url: str) -> str:
    """Перевіряє, що URL абсолютний http(s); повертає обрізаний рядок."""
    parts = _split_absolute(raw_url)
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise InvalidUrlError("Only http/https URLs are supported.", url=raw_url)
    return raw_url.strip()


def hostname_fallback(url: str) -> str:
    """Хост без початкового `www.`; порожній рядок, якщо хоста нема."""
    try:
        host = urlsplit((url or "").strip()).hostname or ""
    except ValueError:
        return ""
    return host[4:] if host.startswith("www.") else host


def to_absolute_url(ref: str, base_url: str) -> str:
    """Резолвить посилання відносно сторінки; при збої повертає `ref` як є."""
    try:
        return urljoin(base_url, ref)
    except ValueError:
        logger.debug("⚠️ Не вдалося зрезолвити %r відносно %s", ref, base_url)
        return ref


__all__ = [
    "TRACKING_PARAMS",
    "ALLOWED_SCHEMES",
    "clean_tracking_params",
    "validate_http_url",
    "hostname_fallback",
    "to_absolute_url",
]
