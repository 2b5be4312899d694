# 🧾 giftlist/infrastructure/parsers/extractors/base.py
"""
🧾 Спільні утиліти для mixin-екстракторів превʼю.

🔹 Нормалізують пробіли та значення атрибутів BeautifulSoup.
🔹 Безпечно десеріалізують JSON-LD.
🔹 Описують `CascadeTier` — один рівень каскаду «екстрактор → тег походження».
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup	# 🥣 Парсимо HTML-документи
from bs4.element import Tag	# 🧱 Тип DOM-вузла

# 🔠 Системні імпорти
import json	# 🧾 Десеріалізація JSON
import logging	# 🧾 Логування подій
import re	# 🧵 Регулярні вирази
from dataclasses import dataclass	# 🧱 Опис рівня каскаду
from enum import Enum	# 🔖 Тег походження
from typing import Any, Callable, Iterable, List, Optional, Tuple	# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from giftlist.shared.utils.logger import LOG_NAME	# 🏷️ Базова назва логера

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.parser.extractor")

_WS = re.compile(r"\s+")


# ================================
# 🪜 РІВЕНЬ КАСКАДУ
# ================================
@dataclass(frozen=True, slots=True)
class CascadeTier:
    """Один рівень каскаду: тег походження та екстрактор значення."""

    source: Enum
    extract: Callable[[], Optional[str]]


def _run_cascade(tiers: Iterable[CascadeTier], default: Enum) -> Tuple[Optional[str], Enum]:
    """Перший рівень із непорожнім значенням перемагає; інакше `(None, default)`."""
    for tier in tiers:
        value = tier.extract()
        if value:
            return value, tier.source
    return None, default


# ================================
# 🛠️ УТИЛІТИ
# ================================
def _norm_ws(text: Optional[str]) -> str:
    """Нормалізує пробіли у переданому рядку."""
    if not text:
        return ""
    return _WS.sub(" ", text).strip()


def _attr_to_str(value: Any) -> str:
    """Повертає перше непорожнє текстове значення атрибута."""
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):	# 📚 Мультизначні атрибути bs4
        return " ".join(str(v) for v in value if v)
    return str(value)


def _as_list(x: Any) -> List[Any]:
    """Гарантує отримання списку елементів."""
    if x is None:
        return []
    if isinstance(x, list):
        return x
    return [x]


def _try_json_loads(raw: str) -> Optional[Any]:
    """Безпечно десеріалізує JSON, повертаючи None у разі помилок."""
    raw_clean = (raw or "").strip()
    if not raw_clean:
        return None
    try:
        return json.loads(raw_clean)
    except ValueError as exc:	# ⚠️ Зламаний JSON-LD: пропускаємо блок
        logger.debug("🐛 Помилка декодування JSON: %s", exc)
        return None


__all__ = [
    "BeautifulSoup",
    "Tag",
    "CascadeTier",
    "_run_cascade",
    "logger",
    "_norm_ws",
    "_attr_to_str",
    "_as_list",
    "_try_json_loads",
]
