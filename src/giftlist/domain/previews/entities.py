# 📦 giftlist/domain/previews/entities.py
"""
📦 Доменні сутності превʼю посилання.

🔹 `UrlPreviewResult` — іммʼютабельний результат одного виклику превʼю.
🔹 `PreviewSource` — теги походження кожного поля (og/twitter/title/jsonld…).
🔹 Фабрика `UrlPreviewResult.fallback()` — форма результату при повному збої.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування валідації
import math                                                         # ♾️ Перевірка ціни
from dataclasses import dataclass, field                            # 🧱 Опис сутностей
from enum import Enum                                               # 🔖 Теги походження
from typing import Any, Dict, Optional                              # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from giftlist.shared.utils.logger import LOG_NAME                      # 🏷️ Імʼя базового логера
from giftlist.shared.utils.url_tools import hostname_fallback       # 🌐 Назва з хоста

logger = logging.getLogger(f"{LOG_NAME}.domain.previews")


# ================================
# 🔖 ТЕГИ ПОХОДЖЕННЯ
# ================================
class TitleSource(str, Enum):
    """Звідки взято назву."""

    OG = "og"
    TWITTER = "twitter"
    TITLE = "title"
    FALLBACK = "fallback"
    API = "api"


class ImageSource(str, Enum):
    """Звідки взято зображення."""

    OG = "og"
    TWITTER = "twitter"
    NONE = "none"
    API = "api"


class PriceSource(str, Enum):
    """Звідки взято ціну."""

    META = "meta"
    JSONLD = "jsonld"
    NONE = "none"
    API = "api"


@dataclass(frozen=True, slots=True)
class PreviewSource:
    """Походження полів превʼю; дефолт — «нічого не знайдено»."""

    title: TitleSource = TitleSource.FALLBACK
    image: ImageSource = ImageSource.NONE
    price: PriceSource = PriceSource.NONE

    def to_dict(self) -> Dict[str, str]:
        return {"title": self.title.value, "image": self.image.value, "price": self.price.value}


# ================================
# 🧾 РЕЗУЛЬТАТ ПРЕВʼЮ
# ================================
@dataclass(frozen=True, slots=True)
class UrlPreviewResult:
    """
    Іммʼютабельний результат превʼю.

    `url` — введена адреса без трекінгових параметрів (не ціль редіректу).
    `price` — у базових одиницях сторінки, без конвертації валют.
    """

    url: str
    title: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = None
    currency: Optional[str] = None
    source: PreviewSource = field(default_factory=PreviewSource)

    def __post_init__(self) -> None:
        if self.price is not None and not math.isfinite(self.price):
            logger.error("❌ UrlPreviewResult: нескінченна ціна %r", self.price)
            raise ValueError(f"price must be finite, got {self.price!r}")
        if self.currency is not None:
            object.__setattr__(self, "currency", self.currency.upper())   # 🔠 Валюта завжди у верхньому регістрі

    @classmethod
    def fallback(cls, url: str) -> "UrlPreviewResult":
        """Результат повного збою: назва з хоста, решта порожня."""
        return cls(url=url, title=hostname_fallback(url) or None)

    @property
    def is_fallback(self) -> bool:
        return (
            self.source.title is TitleSource.FALLBACK
            and self.source.image is ImageSource.NONE
            and self.source.price is PriceSource.NONE
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-тіло відповіді `/api/preview`."""
        return {
            "title": self.title,
            "image": self.image,
            "price": self.price,
            "currency": self.currency,
            "url": self.url,
            "source": self.source.to_dict(),
        }


__all__ = [
    "TitleSource",
    "ImageSource",
    "PriceSource",
    "PreviewSource",
    "UrlPreviewResult",
]
