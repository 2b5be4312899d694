# 🧾 giftlist/infrastructure/parsers/html_data_extractor.py
"""
🧾 HtmlDataExtractor — композиція meta- та JSON-LD екстракторів для однієї сторінки.

🔹 Забезпечує єдиний API витягування (title / image / price).
🔹 Кожне поле повертається разом із тегом походження.
🔹 Ніколи не кидає на неповних даних: відсутнє поле → None + `none`/`fallback`.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup	# 🥣 DOM-дерево сторінки

# 🔠 Системні імпорти
import logging	# 🧾 Логування сценаріїв
from typing import Dict, Optional, Tuple	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from giftlist.domain.previews.entities import (	# 📦 Доменні сутності
    ImageSource,
    PreviewSource,
    PriceSource,
    TitleSource,
    UrlPreviewResult,
)
from giftlist.shared.utils.logger import LOG_NAME	# 🏷️ Імʼя базового логера
from .extractors.json_ld import JsonLdMixin	# 📄 Робота з JSON-LD
from .extractors.meta import MetaTagsMixin	# 🏷️ OpenGraph / Twitter / <title>

# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.parser.extractor")	# 🧾 Модульний логер


# ================================
# 🏛️ ОСНОВНИЙ ЕКСТРАКТОР
# ================================
class HtmlDataExtractor(MetaTagsMixin, JsonLdMixin):
    """🏛️ Оркеструє mixin-класи для побудови превʼю сторінки."""

    def __init__(self, soup: BeautifulSoup, page_url: str, *, source_url: Optional[str] = None) -> None:
        """
        ⚙️ Зберігає DOM та адреси.

        Args:
            soup: Розібраний документ.
            page_url: Фінальна адреса після редіректів (база для відносних зображень).
            source_url: Очищена введена адреса (для fallback-назви); за замовчуванням `page_url`.
        """
        self.soup = soup	# 🥣 DOM-дерево
        self.page_url = page_url	# 🌐 База для резолву
        self.source_url = source_url or page_url	# 🔗 Для назви з хоста
        self._meta_cache: Optional[Dict[str, str]] = None	# 📇 Лінивий індекс meta
        logger.debug("🧾 HtmlDataExtractor ініціалізовано (page_url=%s).", page_url)

    @classmethod
    def from_html(
        cls,
        html: str,
        page_url: str,
        *,
        source_url: Optional[str] = None,
        parser: str = "lxml",
    ) -> "HtmlDataExtractor":
        """🥣 Парсить HTML та створює екстрактор."""
        return cls(BeautifulSoup(html or "", parser), page_url, source_url=source_url)

    # ================================
    # 🏷️ НАЗВА / 🖼️ ЗОБРАЖЕННЯ
    # ================================
    def extract_title(self) -> Tuple[Optional[str], TitleSource]:
        """🏷️ og:title → twitter:title → <title> → хост."""
        return self._title_from_meta()

    def extract_image(self) -> Tuple[Optional[str], ImageSource]:
        """🖼️ og:image → twitter:image → нічого."""
        return self._image_from_meta()

    # ================================
    # 💰 ЦІНА
    # ================================
    def extract_price(self) -> Tuple[Optional[float], Optional[str], PriceSource]:
        """💰 Meta-кандидати → JSON-LD → (None, валюта з meta, none)."""
        currency = self._currency_from_meta()	# 💱 Валюта з meta: базове значення

        meta_price = self._price_from_meta()
        if meta_price is not None:
            return meta_price, currency, PriceSource.META

        ld_price, ld_currency = self._price_from_json_ld()
        if ld_price is not None:
            return ld_price, (ld_currency or currency), PriceSource.JSONLD

        logger.debug("💰 Ціну не знайдено.")
        return None, currency, PriceSource.NONE

    # ================================
    # 📦 ЗБІРКА РЕЗУЛЬТАТУ
    # ================================
    def to_preview(self, url: str) -> UrlPreviewResult:
        """📦 Повний результат превʼю; `url` — очищена введена адреса."""
        title, title_source = self.extract_title()
        image, image_source = self.extract_image()
        price, currency, price_source = self.extract_price()
        return UrlPreviewResult(
            url=url,
            title=title,
            image=image,
            price=price,
            currency=currency,
            source=PreviewSource(title=title_source, image=image_source, price=price_source),
        )


__all__ = ["HtmlDataExtractor"]
