# 💵 giftlist/shared/utils/number.py
"""
💵 Нормалізація цін, витягнутих із HTML/JSON-LD.

Евристика без визначення локалі: справжня дробова частина має рівно дві цифри.
`"1.234,56"` і `"1,234.56"` → 1234.56, а `"19.990"` → 19990.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import math																# ♾️ Перевірка скінченності
import re																# 🧵 Очищення рядка
from typing import Any, Mapping, Optional								# 🧰 Типізація

_NOT_PRICE_CHARS = re.compile(r"[^\d.,]")
_SEPARATORS = re.compile(r"[.,]")


def parse_price_string(raw: str) -> Optional[float]:
    """Рядок ціни → float або None."""
    cleaned = _NOT_PRICE_CHARS.sub("", raw or "")
    if not any(ch.isdigit() for ch in cleaned):						# 🪣 Цифр нема → не ціна
        return None

    last_sep = max(cleaned.rfind("."), cleaned.rfind(","))
    normalized = cleaned
    if last_sep != -1:
        fraction = cleaned[last_sep + 1:]
        if len(fraction) == 2:											# 💶 Десяткова кома/крапка
            normalized = _SEPARATORS.sub("", cleaned[:last_sep]) + "." + fraction
        else:															# 🔢 Усі роздільники: тисячі
            normalized = _SEPARATORS.sub("", cleaned)

    try:
        value = float(normalized)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def price_to_text(value: Any) -> str:
    """
    Приводить сире значення ціни з JSON до рядка так, як це зробив би браузер.

    `19990.0` → `"19990"` (а не `"19990.0"`), `True` → `"true"`.
    Обʼєкт → `"[object Object]"` (без цифр), список → елементи через кому.
    """
    if value is None:
        return ""
    if isinstance(value, Mapping):
        return "[object Object]"
    if isinstance(value, (list, tuple)):
        return ",".join(price_to_text(item) for item in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


__all__ = ["parse_price_string", "price_to_text"]
