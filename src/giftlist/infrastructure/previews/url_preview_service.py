# 🔗 giftlist/infrastructure/previews/url_preview_service.py
"""
🔗 UrlPreviewService — оркестрація превʼю посилання з гарантованим fallback.

🔹 Очищає URL від трекінгових параметрів.
🔹 Для маркетплейсів із API пробує стратегію, далі — HTML-скрейпінг.
🔹 Увесь етап завантаження обмежено внутрішнім таймаутом (`fetch_timeout_ms`).
🔹 `preview_with_deadline` додає зовнішній жорсткий дедлайн (`deadline_ms`).
🔹 Ніколи не кидає винятків, окрім `asyncio.CancelledError`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio															# ⏱️ wait_for / CancelledError
import logging															# 🧾 Логування
from typing import Optional, Sequence									# 🧰 Типи

# 🧩 Внутрішні модулі проєкту
from giftlist.domain.previews.entities import UrlPreviewResult			# 📦 Результат
from giftlist.domain.previews.interfaces import (						# 🧩 Контракти
    IMarketplacePreviewStrategy,
    IUrlPreviewProvider,
)
from giftlist.errors.reason_codes import ReasonCode						# 🧮 Причини fallback
from giftlist.errors.reason_mapper import map_error_to_reason			# 🧭 Класифікація збою
from giftlist.infrastructure.parsers._infra_options import (			# ⚙️ Опції
    DEFAULT_PREVIEW_INFRA_OPTIONS,
    PreviewInfraOptions,
)
from giftlist.infrastructure.parsers.html_data_extractor import HtmlDataExtractor	# 🏛️ Екстрактор
from giftlist.infrastructure.web.page_fetcher import HtmlPageFetcher	# 🌐 Завантаження
from giftlist.shared.errors import InvalidUrlError						# ⚠️ Некоректний URL
from giftlist.shared.utils.logger import LOG_NAME						# 🏷️ Імʼя базового логера
from giftlist.shared.utils.url_tools import clean_tracking_params		# 🧼 Очищення URL

logger = logging.getLogger(f"{LOG_NAME}.preview.service")


def _best_effort_clean(raw_url: str) -> str:
    """🧼 Очищений URL або обрізаний сирий рядок, якщо очищення неможливе."""
    try:
        return clean_tracking_params(raw_url)
    except InvalidUrlError:
        return (raw_url or "").strip()


class UrlPreviewService(IUrlPreviewProvider):
    """🔗 Будує `UrlPreviewResult` для довільного URL."""

    def __init__(
        self,
        options: PreviewInfraOptions = DEFAULT_PREVIEW_INFRA_OPTIONS,
        *,
        fetcher: Optional[HtmlPageFetcher] = None,
        strategies: Sequence[IMarketplacePreviewStrategy] = (),
    ) -> None:
        self.options = options
        self.fetcher = fetcher or HtmlPageFetcher(options)
        self.strategies = tuple(strategies)
        logger.debug(
            "⚙️ UrlPreviewService init timeout=%dms deadline=%dms strategies=%d",
            options.fetch_timeout_ms,
            options.deadline_ms,
            len(self.strategies),
        )

    # ================================
    # 🚀 ПУБЛІЧНИЙ API
    # ================================
    async def fetch_preview(self, raw_url: str) -> UrlPreviewResult:
        """🚀 Превʼю з внутрішнім таймаутом; будь-який збій → fallback."""
        try:
            cleaned = clean_tracking_params(raw_url)
        except InvalidUrlError as exc:
            self._log_fallback(exc, raw_url)
            return UrlPreviewResult.fallback((raw_url or "").strip())

        try:
            return await asyncio.wait_for(
                self._build_preview(raw_url, cleaned),
                timeout=self.options.fetch_timeout_sec,
            )
        except asyncio.CancelledError:
            raise														# ⚠️ Скасування завжди пропускаємо
        except Exception as exc:										# noqa: BLE001
            self._log_fallback(exc, cleaned)
            return UrlPreviewResult.fallback(cleaned)

    async def preview_with_deadline(self, raw_url: str) -> UrlPreviewResult:
        """⏰ `fetch_preview` під зовнішнім дедлайном; прострочення → fallback."""
        try:
            return await asyncio.wait_for(self.fetch_preview(raw_url), timeout=self.options.deadline_sec)
        except asyncio.TimeoutError:
            logger.warning(
                "⏰ Перевищено дедлайн %dms для %s",
                self.options.deadline_ms,
                raw_url,
                extra={"reason": ReasonCode.DEADLINE_EXCEEDED.value},
            )
            return UrlPreviewResult.fallback(_best_effort_clean(raw_url))

    # ================================
    # 🧩 ВНУТРІШНЄ
    # ================================
    async def _build_preview(self, raw_url: str, cleaned: str) -> UrlPreviewResult:
        marketplace_result = await self._try_marketplaces(raw_url, cleaned)
        if marketplace_result is not None:
            return marketplace_result

        page = await self.fetcher.fetch(cleaned)
        extractor = HtmlDataExtractor.from_html(
            page.html,
            page.url,
            source_url=cleaned,
            parser=self.options.html_parser,
        )
        result = extractor.to_preview(cleaned)
        logger.info(
            "🔗 Превʼю готове: %s (title=%s image=%s price=%s)",
            cleaned,
            result.source.title.value,
            result.source.image.value,
            result.source.price.value,
        )
        return result

    async def _try_marketplaces(self, raw_url: str, cleaned: str) -> Optional[UrlPreviewResult]:
        if not self.options.marketplace_enabled:
            return None
        for strategy in self.strategies:
            if not strategy.supports(cleaned):
                continue
            try:
                result = await strategy.fetch(raw_url, cleaned)
            except Exception as exc:									# noqa: BLE001
                logger.warning(
                    "⚠️ Стратегія %s впала → HTML-скрейпінг: %s",
                    type(strategy).__name__,
                    exc,
                )
                continue
            if result is not None:
                return result
            logger.debug("🛒 Стратегія %s без даних для %s", type(strategy).__name__, cleaned)
        return None

    @staticmethod
    def _log_fallback(exc: BaseException, url: str) -> None:
        reason, ctx = map_error_to_reason(exc)
        if ctx.get("url") is None:
            ctx["url"] = url
        logger.warning(
            "🪂 Fallback-превʼю (%s): %s",
            reason.value,
            exc,
            extra={"reason": reason.value, **ctx},
        )


__all__ = ["UrlPreviewService"]
