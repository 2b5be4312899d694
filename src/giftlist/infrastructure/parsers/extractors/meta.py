# 🧾 giftlist/infrastructure/parsers/extractors/meta.py
"""
🧾 MetaTagsMixin — каскади назви, зображення та ціни з `<meta>`-тегів.

🔹 Індексує `<meta property|name="KEY" content="VALUE">` (ключ без регістру).
🔹 Назва: og:title → twitter:title → <title> → хост сторінки.
🔹 Зображення: og:image → twitter:image (відносні адреси резолвляться).
🔹 Ціна: product:price:amount → og:price:amount → product:price → og:price → twitter:data1.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Dict, List, Optional, Tuple	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from giftlist.domain.previews.entities import ImageSource, TitleSource	# 🔖 Теги походження
from giftlist.shared.utils.number import parse_price_string	# 💰 Розбір ціни
from giftlist.shared.utils.url_tools import hostname_fallback, to_absolute_url	# 🌐 URL-хелпери
from .base import (	# 🔗 Спільні утиліти екстракторів
    BeautifulSoup,
    CascadeTier,
    Tag,
    _attr_to_str,
    _norm_ws,
    _run_cascade,
    logger,
)

# ================================
# 🔑 КЛЮЧІ META-ТЕГІВ
# ================================
PRICE_META_KEYS: Tuple[str, ...] = (
    "product:price:amount",
    "og:price:amount",
    "product:price",
    "og:price",
    "twitter:data1",
)
CURRENCY_META_KEYS: Tuple[str, ...] = ("product:price:currency", "og:price:currency")


class MetaTagsMixin:
    """🏷️ Витягує дані з OpenGraph / Twitter Card / `<title>`."""

    soup: BeautifulSoup	# 🥣 DOM-дерево (інʼєктується HtmlDataExtractor)
    page_url: str	# 🌐 Фінальна адреса сторінки (після редіректів)
    source_url: str	# 🔗 Очищена введена адреса
    _meta_cache: Optional[Dict[str, str]]

    # ================================
    # 📇 ІНДЕКС META
    # ================================
    def _meta_index(self) -> Dict[str, str]:
        """📇 Перше непорожнє `content` для кожного ключа property/name."""
        if self._meta_cache is not None:
            return self._meta_cache

        index: Dict[str, str] = {}
        for tag in self.soup.find_all("meta"):
            if not isinstance(tag, Tag):
                continue
            content = _norm_ws(_attr_to_str(tag.get("content")))
            if not content:	# 🚫 Порожній content не «займає» ключ
                continue
            for attr in ("property", "name"):
                key = _norm_ws(_attr_to_str(tag.get(attr))).lower()
                if key and key not in index:
                    index[key] = content
        self._meta_cache = index
        logger.debug("📇 Meta-індекс: %d ключів.", len(index))
        return index

    def meta_content(self, key: str) -> Optional[str]:
        """🔍 Значення meta-тегу за ключем або None."""
        return self._meta_index().get(key.lower()) or None

    def _title_tag_text(self) -> Optional[str]:
        tag = self.soup.find("title")
        if not isinstance(tag, Tag):
            return None
        return _norm_ws(tag.get_text(" ", strip=True)) or None

    # ================================
    # 🏷️ НАЗВА
    # ================================
    def _title_tiers(self) -> List[CascadeTier]:
        return [
            CascadeTier(TitleSource.OG, lambda: self.meta_content("og:title")),
            CascadeTier(TitleSource.TWITTER, lambda: self.meta_content("twitter:title")),
            CascadeTier(TitleSource.TITLE, self._title_tag_text),
            CascadeTier(TitleSource.FALLBACK, lambda: hostname_fallback(self.source_url) or None),
        ]

    def _title_from_meta(self) -> Tuple[Optional[str], TitleSource]:
        value, source = _run_cascade(self._title_tiers(), TitleSource.FALLBACK)
        logger.debug("🏷️ Назва: джерело=%s", source.value)
        return value, TitleSource(source)

    # ================================
    # 🖼️ ЗОБРАЖЕННЯ
    # ================================
    def _absolute_meta_image(self, key: str) -> Optional[str]:
        raw = self.meta_content(key)
        if not raw:
            return None
        return to_absolute_url(raw, self.page_url)

    def _image_tiers(self) -> List[CascadeTier]:
        return [
            CascadeTier(ImageSource.OG, lambda: self._absolute_meta_image("og:image")),
            CascadeTier(ImageSource.TWITTER, lambda: self._absolute_meta_image("twitter:image")),
        ]

    def _image_from_meta(self) -> Tuple[Optional[str], ImageSource]:
        value, source = _run_cascade(self._image_tiers(), ImageSource.NONE)
        logger.debug("🖼️ Зображення: джерело=%s", source.value)
        return value, ImageSource(source)

    # ================================
    # 💰 ЦІНА
    # ================================
    def _currency_from_meta(self) -> Optional[str]:
        for key in CURRENCY_META_KEYS:
            value = self.meta_content(key)
            if value:
                return value.upper()
        return None

    def _price_from_meta(self) -> Optional[float]:
        """💰 Перший кандидат, що розбирається в число."""
        for key in PRICE_META_KEYS:
            raw = self.meta_content(key)
            if not raw:
                continue
            price = parse_price_string(raw)
            if price is not None:
                logger.debug("💰 Ціна з meta '%s': %s", key, price)
                return price
        return None


__all__ = ["MetaTagsMixin", "PRICE_META_KEYS", "CURRENCY_META_KEYS"]
