# 🧾 giftlist/infrastructure/parsers/extractors/json_ld.py
"""
🧾 JsonLdMixin — ціна та валюта товару з JSON-LD блоків.

🔹 Збирає усі `<script type="application/ld+json">` (зламані блоки пропускає).
🔹 Розгортає масиви та `@graph`, фільтрує вузли з `@type` ~ "product".
🔹 Повертає першу ціну, що розбирається, у порядку появи на сторінці.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Any, Dict, Iterator, List, Optional, Tuple	# 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from giftlist.shared.utils.number import parse_price_string, price_to_text	# 💰 Розбір ціни
from .base import (	# 🔗 Спільні утиліти екстракторів
    BeautifulSoup,
    Tag,
    _as_list,
    _attr_to_str,
    _try_json_loads,
    logger,
)

_LD_JSON_TYPE = "application/ld+json"


class JsonLdMixin:
    """📦 Методи для парсингу пропозицій продукту з JSON-LD."""

    soup: BeautifulSoup	# 🥣 DOM-дерево (інʼєктується HtmlDataExtractor)

    # ================================
    # 📄 БЛОКИ JSON-LD
    # ================================
    def _json_ld_documents(self) -> List[Any]:
        """📄 Десеріалізовані документи з усіх JSON-LD скриптів."""
        documents: List[Any] = []
        for script in self.soup.find_all("script"):
            if not isinstance(script, Tag):
                continue
            script_type = _attr_to_str(script.get("type")).split(";")[0].strip().lower()	# 🧾 "application/ld+json; charset=utf-8"
            if script_type != _LD_JSON_TYPE:
                continue
            doc = _try_json_loads(script.string or script.get_text() or "")
            if doc is None:	# 🚫 Зламаний JSON: наступний блок
                continue
            documents.append(doc)
        logger.debug("📄 JSON-LD: знайдено %d документів.", len(documents))
        return documents

    def _json_ld_nodes(self) -> Iterator[Any]:
        """🔁 Вузли документів: кандидати або їхні `@graph`."""
        for doc in self._json_ld_documents():
            for candidate in _as_list(doc):
                graph = candidate.get("@graph") if isinstance(candidate, dict) else None
                if isinstance(graph, list):
                    yield from graph
                else:
                    yield candidate

    @staticmethod
    def _is_product(node: Any) -> bool:
        if not isinstance(node, dict):
            return False
        raw_type = node.get("@type")
        if isinstance(raw_type, list):
            type_text = ",".join(str(t) for t in raw_type)
        else:
            type_text = "" if raw_type is None else str(raw_type)
        return "product" in type_text.lower()

    def _json_ld_products(self) -> Iterator[Dict[str, Any]]:
        for node in self._json_ld_nodes():
            if self._is_product(node):
                yield node

    # ================================
    # 💰 ЦІНА
    # ================================
    @staticmethod
    def _first_offer(offers: Any) -> Optional[Dict[str, Any]]:
        if isinstance(offers, list):
            offers = offers[0] if offers else None
        return offers if isinstance(offers, dict) else None

    def _price_from_json_ld(self) -> Tuple[Optional[float], Optional[str]]:
        """💰 (ціна, валюта) першої пропозиції з ціною, що розбирається."""
        for idx, product in enumerate(self._json_ld_products(), start=1):
            offer = self._first_offer(product.get("offers"))
            if offer is None:
                logger.debug("📦 JSON-LD продукт #%d без offers.", idx)
                continue
            raw_price = offer.get("price")
            if raw_price is None:
                raw_price = offer.get("lowPrice")
            if raw_price is None:
                continue
            price = parse_price_string(price_to_text(raw_price))
            if price is None:
                continue
            currency = offer.get("priceCurrency")
            logger.debug("💰 JSON-LD ціна продукту #%d: %s %s", idx, price, currency)
            return price, (str(currency) if currency is not None else None)
        return None, None


__all__ = ["JsonLdMixin"]
