# tests/infrastructure/previews/test_url_preview_service.py
import asyncio
import json
import time
from typing import Optional

import httpx
import pytest

from giftlist.domain.previews.entities import (
    ImageSource,
    PreviewSource,
    PriceSource,
    TitleSource,
    UrlPreviewResult,
)
from giftlist.domain.previews.interfaces import IMarketplacePreviewStrategy
from giftlist.infrastructure.parsers._infra_options import PreviewInfraOptions
from giftlist.infrastructure.previews.url_preview_service import UrlPreviewService


# ──────────────────────────────────────────────────────────────────────────────
#                          🔧 Тестовые заглушки/фейки
# ──────────────────────────────────────────────────────────────────────────────

PRODUCT_HTML = (
    "<html><head>"
    '<meta property="og:title" content="Taza Nórdica">'
    '<meta property="og:image" content="/img/taza.jpg">'
    '<script type="application/ld+json">'
    + json.dumps({"@type": "Product", "offers": {"price": "19.990", "priceCurrency": "CLP"}})
    + "</script></head><body></body></html>"
)


class _StaticStrategy(IMarketplacePreviewStrategy):
    """Стратегия маркетплейса с заранее заданным ответом."""

    def __init__(self, result: Optional[UrlPreviewResult] = None, *, error: Exception = None):
        self.result = result
        self.error = error
        self.calls = []

    def supports(self, url: str) -> bool:
        return "mercadolibre.cl" in url

    async def fetch(self, raw_url: str, cleaned_url: str) -> Optional[UrlPreviewResult]:
        self.calls.append((raw_url, cleaned_url))
        if self.error is not None:
            raise self.error
        return self.result


def _service(make_fetcher, handler, options: PreviewInfraOptions, strategies=()) -> UrlPreviewService:
    return UrlPreviewService(options, fetcher=make_fetcher(handler, options), strategies=strategies)


# ──────────────────────────────────────────────────────────────────────────────
#                                   ✅ Успех
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_fetch_preview_success(make_fetcher, fast_options):
    requested = []

    def handler(request):
        requested.append(str(request.url))
        return httpx.Response(200, html=PRODUCT_HTML)

    service = _service(make_fetcher, handler, fast_options)
    result = await service.fetch_preview("https://www.shop.cl/taza?id=7&utm_source=ig")

    assert requested == ["https://www.shop.cl/taza?id=7"]
    assert result.url == "https://www.shop.cl/taza?id=7"
    assert result.title == "Taza Nórdica"
    assert result.image == "https://www.shop.cl/img/taza.jpg"
    assert result.price == 19990
    assert result.currency == "CLP"
    assert result.source == PreviewSource(TitleSource.OG, ImageSource.OG, PriceSource.JSONLD)


@pytest.mark.asyncio
async def test_image_resolved_against_final_url_after_redirect(make_fetcher, fast_options):
    def handler(request):
        if request.url.host == "short.ly":
            return httpx.Response(302, headers={"Location": "https://cdn-shop.cl/p/1/"})
        return httpx.Response(200, html='<meta property="og:image" content="img.png">')

    result = await _service(make_fetcher, handler, fast_options).fetch_preview("https://short.ly/abc")

    assert result.url == "https://short.ly/abc"
    assert result.image == "https://cdn-shop.cl/p/1/img.png"
    assert result.title == "short.ly"


# ──────────────────────────────────────────────────────────────────────────────
#                                🪂 Fallback
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_http_error_status_gives_fallback(make_fetcher, fast_options):
    service = _service(make_fetcher, lambda r: httpx.Response(404, html=PRODUCT_HTML), fast_options)
    result = await service.fetch_preview("https://www.falabella.com/x?fbclid=1")

    assert result == UrlPreviewResult.fallback("https://www.falabella.com/x")
    assert result.title == "falabella.com"
    assert result.is_fallback


@pytest.mark.asyncio
async def test_connection_error_gives_fallback(make_fetcher, fast_options):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    result = await _service(make_fetcher, handler, fast_options).fetch_preview("https://shop.cl/a")
    assert result.is_fallback
    assert result.title == "shop.cl"


@pytest.mark.asyncio
async def test_invalid_url_gives_fallback_without_raising(make_fetcher, fast_options):
    service = _service(make_fetcher, lambda r: httpx.Response(200), fast_options)
    result = await service.fetch_preview("  not a url ")
    assert result.url == "not a url"
    assert result.title is None
    assert result.is_fallback


@pytest.mark.asyncio
async def test_inner_timeout_gives_fallback_within_outer_bound(make_fetcher):
    options = PreviewInfraOptions(fetch_timeout_ms=100, deadline_ms=1000)

    async def slow_handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, html=PRODUCT_HTML)

    service = _service(make_fetcher, slow_handler, options)
    started = time.monotonic()
    result = await service.preview_with_deadline("https://slow.cl/item")
    elapsed = time.monotonic() - started

    assert result.is_fallback
    assert result.title == "slow.cl"
    assert elapsed < 1.0


@pytest.mark.asyncio
async def test_outer_deadline_returns_fallback(fast_options):
    class _HangingService(UrlPreviewService):
        async def fetch_preview(self, raw_url):
            await asyncio.sleep(5)
            raise AssertionError("unreachable")

    options = PreviewInfraOptions(fetch_timeout_ms=50, deadline_ms=100)
    result = await _HangingService(options).preview_with_deadline("https://www.hang.cl/a?utm_term=x")
    assert result == UrlPreviewResult.fallback("https://www.hang.cl/a")


@pytest.mark.asyncio
async def test_cancellation_is_propagated(make_fetcher, fast_options):
    options = PreviewInfraOptions(fetch_timeout_ms=5000, deadline_ms=6000)

    async def slow_handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200)

    service = _service(make_fetcher, slow_handler, options)
    task = asyncio.ensure_future(service.fetch_preview("https://shop.cl/a"))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task


# ──────────────────────────────────────────────────────────────────────────────
#                          🛒 Стратегии маркетплейсов
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_marketplace_result_short_circuits_scraping(make_fetcher, fast_options):
    api_result = UrlPreviewResult(
        url="https://articulo.mercadolibre.cl/MLC-1",
        title="Bicicleta",
        source=PreviewSource(title=TitleSource.API),
    )
    strategy = _StaticStrategy(api_result)

    def handler(request):
        raise AssertionError("HTML must not be fetched")

    service = _service(make_fetcher, handler, fast_options, strategies=[strategy])
    result = await service.fetch_preview("https://articulo.mercadolibre.cl/MLC-1#wid=MLC1")

    assert result is api_result
    assert strategy.calls == [
        ("https://articulo.mercadolibre.cl/MLC-1#wid=MLC1", "https://articulo.mercadolibre.cl/MLC-1#wid=MLC1")
    ]


@pytest.mark.asyncio
async def test_marketplace_failure_falls_through_to_scraping(make_fetcher, fast_options):
    strategy = _StaticStrategy(error=RuntimeError("api down"))
    service = _service(
        make_fetcher, lambda r: httpx.Response(200, html=PRODUCT_HTML), fast_options, strategies=[strategy]
    )
    result = await service.fetch_preview("https://www.mercadolibre.cl/taza")
    assert result.source.title is TitleSource.OG
    assert len(strategy.calls) == 1


@pytest.mark.asyncio
async def test_marketplace_disabled_skips_strategy(make_fetcher, fast_options):
    strategy = _StaticStrategy(UrlPreviewResult(url="x", title="never"))
    options = fast_options.merge(marketplace_enabled=False)
    service = _service(make_fetcher, lambda r: httpx.Response(200, html=PRODUCT_HTML), options, strategies=[strategy])

    result = await service.fetch_preview("https://www.mercadolibre.cl/taza")

    assert strategy.calls == []
    assert result.title == "Taza Nórdica"
