# 🧾 giftlist/infrastructure/parsers/__init__.py
"""🧾 Парсинг сторінок: опції інфраструктури та `HtmlDataExtractor`."""

from __future__ import annotations

from ._infra_options import DEFAULT_PREVIEW_INFRA_OPTIONS, PreviewInfraOptions	# ⚙️ Опції
from .html_data_extractor import HtmlDataExtractor								# 🏛️ Екстрактор

__all__ = ["DEFAULT_PREVIEW_INFRA_OPTIONS", "PreviewInfraOptions", "HtmlDataExtractor"]
