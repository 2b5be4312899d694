# 🧩 giftlist/domain/previews/__init__.py
"""
🧩 Пакет `domain.previews` публікує сутності та контракти превʼю посилань.

🔹 `entities.py` — `UrlPreviewResult`, `PreviewSource` і теги походження.
🔹 `interfaces.py` — провайдер превʼю та стратегії маркетплейсів.
"""

from .entities import (
    ImageSource,
    PreviewSource,
    PriceSource,
    TitleSource,
    UrlPreviewResult,
)
from .interfaces import IMarketplacePreviewStrategy, IUrlPreviewProvider

__all__ = [
    "ImageSource",
    "PreviewSource",
    "PriceSource",
    "TitleSource",
    "UrlPreviewResult",
    "IMarketplacePreviewStrategy",
    "IUrlPreviewProvider",
]
