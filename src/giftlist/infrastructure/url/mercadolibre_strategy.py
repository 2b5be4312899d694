# 🛒 giftlist/infrastructure/url/mercadolibre_strategy.py
"""
🛒 Превʼю для MercadoLibre через публічне API замість HTML-скрейпінгу.

🔹 Визначає `item_id` / `product_id` з URL (wid у query або fragment → шлях → pdp_filters).
🔹 Порядок запитів: items/{id} → products/{id} → buy_box_winner → items/{winner} → дані продукту.
🔹 Повертає `UrlPreviewResult` з тегами `api` або None, якщо даних недостатньо.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging															# 🧾 Логування
import re																# 🧵 Патерни ідентифікаторів
from dataclasses import dataclass										# 🧱 DTO ідентифікаторів
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple		# 🧰 Типи
from urllib.parse import parse_qs, urlsplit								# 🔗 Розбір URL

# 🧩 Внутрішні модулі проєкту
from giftlist.domain.previews.entities import (						# 📦 Доменні сутності
    ImageSource,
    PreviewSource,
    PriceSource,
    TitleSource,
    UrlPreviewResult,
)
from giftlist.domain.previews.interfaces import IMarketplacePreviewStrategy	# 🧩 Контракт
from giftlist.infrastructure.web.page_fetcher import HtmlPageFetcher	# 🌐 fetch_json
from giftlist.shared.utils.logger import LOG_NAME						# 🏷️ Імʼя базового логера

logger = logging.getLogger(f"{LOG_NAME}.marketplace.mercadolibre")

DEFAULT_DOMAINS: Tuple[str, ...] = ("mercadolibre.cl",)
DEFAULT_API_BASE_URL = "https://api.mercadolibre.com"
DEFAULT_API_USER_AGENT = "Mozilla/5.0 (compatible; GiftlistPreview/1.0)"

_PATH_PRODUCT_RE = re.compile(r"/p/(ML[A-Z]-?\d{6,})", re.IGNORECASE)
_PATH_ITEM_RE = re.compile(r"(?<!/p)/(ML[A-Z]-?\d{6,})", re.IGNORECASE)	# 🚫 /p/…: це продукт
_PDP_ITEM_RE = re.compile(r"item_id:([A-Z0-9-]+)", re.IGNORECASE)
_FRAGMENT_WID_RE = re.compile(r"(?:^|[&#])wid=([A-Z0-9-]+)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class MercadoLibreIds:
    item_id: Optional[str] = None
    product_id: Optional[str] = None


def _normalize_id(raw: Optional[str]) -> Optional[str]:
    """MLC-123 → MLC123."""
    if not raw:
        return None
    return raw.replace("-", "").upper()


def _first_query_value(query: Mapping[str, Any], key: str) -> Optional[str]:
    values = query.get(key) or []
    for value in values:
        if value:
            return value
    return None


def pick_mercadolibre_ids(raw_url: str) -> MercadoLibreIds:
    """
    Витягує ідентифікатори товару/продукту.

    Пріоритет item_id: `wid` у query → `wid` у fragment → `/MLX…` у шляху → `pdp_filters=item_id:…`.
    `product_id` береться лише з `/p/MLX…`.
    """
    try:
        parts = urlsplit(raw_url.strip())
    except ValueError:
        return MercadoLibreIds()

    query = parse_qs(parts.query, keep_blank_values=True)
    wid_query = _first_query_value(query, "wid")
    fragment_match = _FRAGMENT_WID_RE.search(parts.fragment or "")
    wid_fragment = fragment_match.group(1) if fragment_match else None

    path_item_match = _PATH_ITEM_RE.search(parts.path or "")
    path_item = path_item_match.group(1) if path_item_match else None

    pdp = _first_query_value(query, "pdp_filters") or ""
    pdp_match = _PDP_ITEM_RE.search(pdp)
    pdp_item = pdp_match.group(1) if pdp_match else None

    product_match = _PATH_PRODUCT_RE.search(parts.path or "")

    return MercadoLibreIds(
        item_id=_normalize_id(wid_query or wid_fragment or path_item or pdp_item),
        product_id=_normalize_id(product_match.group(1) if product_match else None),
    )


# ================================
# 🧩 ХЕЛПЕРИ ВІДПОВІДЕЙ API
# ================================
def _picture_from(payload: Mapping[str, Any], *, allow_thumbnail: bool) -> Optional[str]:
    pictures = payload.get("pictures")
    if isinstance(pictures, list) and pictures and isinstance(pictures[0], dict):
        first = pictures[0]
        for key in ("secure_url", "url"):
            value = first.get(key)
            if isinstance(value, str) and value:
                return value
    if allow_thumbnail:
        thumbnail = payload.get("thumbnail")
        if isinstance(thumbnail, str) and thumbnail:
            return thumbnail
    return None


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _as_dict(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


# ================================
# 🛒 СТРАТЕГІЯ
# ================================
class MercadoLibrePreviewStrategy(IMarketplacePreviewStrategy):
    """🛒 Превʼю з API MercadoLibre для налаштованих доменів."""

    def __init__(
        self,
        fetcher: HtmlPageFetcher,
        *,
        domains: Iterable[str] = DEFAULT_DOMAINS,
        api_base_url: str = DEFAULT_API_BASE_URL,
        user_agent: str = DEFAULT_API_USER_AGENT,
    ) -> None:
        self.fetcher = fetcher
        self.domains = tuple(d.lower().lstrip(".") for d in domains if d)
        self.api_base_url = api_base_url.rstrip("/")
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, section: Optional[Mapping[str, Any]], fetcher: HtmlPageFetcher) -> "MercadoLibrePreviewStrategy":
        """⚙️ Будує стратегію з секції `preview.marketplaces.mercadolibre`."""
        section = section or {}
        return cls(
            fetcher,
            domains=section.get("domains") or DEFAULT_DOMAINS,
            api_base_url=section.get("api_base_url") or DEFAULT_API_BASE_URL,
            user_agent=section.get("user_agent") or DEFAULT_API_USER_AGENT,
        )

    def supports(self, url: str) -> bool:
        try:
            host = (urlsplit(url).hostname or "").lower()
        except ValueError:
            return False
        return any(host == domain or host.endswith(f".{domain}") for domain in self.domains)

    async def _get(self, resource: str, ident: str) -> Optional[Dict[str, Any]]:
        payload = await self.fetcher.fetch_json(
            f"{self.api_base_url}/{resource}/{ident}",
            headers={"User-Agent": self.user_agent},
        )
        return _as_dict(payload)

    async def fetch(self, raw_url: str, cleaned_url: str) -> Optional[UrlPreviewResult]:
        """🛒 items → products → buy_box_winner → дані продукту; None, якщо нічого."""
        ids = pick_mercadolibre_ids(raw_url)
        logger.debug("🛒 MercadoLibre ids: item=%s product=%s", ids.item_id, ids.product_id)

        if ids.item_id:
            item = await self._get("items", ids.item_id)
            if item and _text(item.get("title")):
                logger.info("🛒 Превʼю з items/%s", ids.item_id)
                return self._build(
                    cleaned_url,
                    title=_text(item.get("title")),
                    image=_picture_from(item, allow_thumbnail=True),
                    price=_number(item.get("price")),
                    currency=_text(item.get("currency_id")),
                )

        if not ids.product_id:
            return None

        product = await self._get("products", ids.product_id)
        if not product:
            return None
        winner = _as_dict(product.get("buy_box_winner")) or {}
        winner_item_id = _text(winner.get("item_id"))

        if winner_item_id:
            item = await self._get("items", winner_item_id)
            if item and _text(item.get("title")):
                logger.info("🛒 Превʼю з buy_box_winner %s", winner_item_id)
                price = _number(item.get("price"))
                return self._build(
                    cleaned_url,
                    title=_text(item.get("title")),
                    image=_picture_from(item, allow_thumbnail=True) or _picture_from(product, allow_thumbnail=False),
                    price=price if price is not None else _number(winner.get("price")),
                    currency=_text(item.get("currency_id")) or _text(winner.get("currency_id")),
                )

        name = _text(product.get("name"))
        if name:
            logger.info("🛒 Превʼю з products/%s", ids.product_id)
            return self._build(
                cleaned_url,
                title=name,
                image=_picture_from(product, allow_thumbnail=False),
                price=_number(winner.get("price")),
                currency=_text(winner.get("currency_id")),
            )
        return None

    @staticmethod
    def _build(
        url: str,
        *,
        title: Optional[str],
        image: Optional[str],
        price: Optional[float],
        currency: Optional[str],
    ) -> UrlPreviewResult:
        source = PreviewSource(
            title=TitleSource.API if title else TitleSource.FALLBACK,
            image=ImageSource.API if image else ImageSource.NONE,
            price=PriceSource.API if price is not None else PriceSource.NONE,
        )
        return UrlPreviewResult(url=url, title=title, image=image, price=price, currency=currency, source=source)


__all__ = ["MercadoLibreIds", "MercadoLibrePreviewStrategy", "pick_mercadolibre_ids"]
