# tests/infrastructure/url/test_mercadolibre_strategy.py
import httpx
import pytest

from giftlist.domain.previews.entities import ImageSource, PriceSource, TitleSource
from giftlist.infrastructure.url.mercadolibre_strategy import (
    MercadoLibrePreviewStrategy,
    pick_mercadolibre_ids,
)


# ──────────────────────────────────────────────────────────────────────────────
#                          🔎 Извлечение идентификаторов
# ──────────────────────────────────────────────────────────────────────────────

def test_wid_in_fragment_wins_over_path_ids():
    ids = pick_mercadolibre_ids("https://www.mercadolibre.cl/bici-aro-29/p/MLC61403702#wid=mlc1706170179&sid=x")
    assert ids.item_id == "MLC1706170179"
    assert ids.product_id == "MLC61403702"


def test_wid_in_query_wins_over_fragment():
    ids = pick_mercadolibre_ids("https://www.mercadolibre.cl/p/MLC61403702?wid=MLC111111111#wid=MLC222222222")
    assert ids.item_id == "MLC111111111"


def test_item_id_from_path_with_dash():
    ids = pick_mercadolibre_ids("https://articulo.mercadolibre.cl/MLC-1706170179-bicicleta-_JM")
    assert ids.item_id == "MLC1706170179"
    assert ids.product_id is None


def test_item_id_from_pdp_filters():
    ids = pick_mercadolibre_ids("https://www.mercadolibre.cl/p/MLC61403702?pdp_filters=item_id:MLC999999999")
    assert ids.item_id == "MLC999999999"
    assert ids.product_id == "MLC61403702"


def test_product_path_is_not_an_item_id():
    ids = pick_mercadolibre_ids("https://www.mercadolibre.cl/p/MLC61403702")
    assert ids.item_id is None
    assert ids.product_id == "MLC61403702"


# ──────────────────────────────────────────────────────────────────────────────
#                                 🛒 Запросы к API
# ──────────────────────────────────────────────────────────────────────────────

API = "https://api.test"


def _strategy(make_fetcher, routes: dict) -> MercadoLibrePreviewStrategy:
    def handler(request: httpx.Request) -> httpx.Response:
        payload = routes.get(request.url.path)
        if payload is None:
            return httpx.Response(404, json={"error": "not_found"})
        return httpx.Response(200, json=payload)

    return MercadoLibrePreviewStrategy(make_fetcher(handler), domains=["mercadolibre.cl"], api_base_url=API)


def test_supports_configured_domain_and_subdomains(make_fetcher):
    strategy = _strategy(make_fetcher, {})
    assert strategy.supports("https://www.mercadolibre.cl/p/MLC1")
    assert strategy.supports("https://articulo.mercadolibre.cl/MLC-1")
    assert not strategy.supports("https://mercadolibre.com.ar/p/MLA1")
    assert not strategy.supports("https://fakemercadolibre.cl/")


@pytest.mark.asyncio
async def test_item_lookup_builds_api_result(make_fetcher):
    routes = {
        "/items/MLC1706170179": {
            "title": "Bicicleta Aro 29",
            "price": 199990,
            "currency_id": "CLP",
            "thumbnail": "http://thumb.jpg",
            "pictures": [{"url": "http://pic.jpg", "secure_url": "https://pic.jpg"}],
        }
    }
    url = "https://www.mercadolibre.cl/bici/p/MLC61403702#wid=MLC1706170179"
    result = await _strategy(make_fetcher, routes).fetch(url, url)

    assert result.url == url
    assert result.title == "Bicicleta Aro 29"
    assert result.image == "https://pic.jpg"
    assert result.price == 199990
    assert result.currency == "CLP"
    assert (result.source.title, result.source.image, result.source.price) == (
        TitleSource.API,
        ImageSource.API,
        PriceSource.API,
    )


@pytest.mark.asyncio
async def test_product_buy_box_winner_lookup(make_fetcher):
    routes = {
        "/products/MLC61403702": {
            "name": "Bicicleta genérica",
            "buy_box_winner": {"item_id": "MLC555555555", "price": 150000, "currency_id": "CLP"},
            "pictures": [{"url": "http://prod.jpg"}],
        },
        "/items/MLC555555555": {"title": "Bicicleta ganadora", "thumbnail": "http://t.jpg"},
    }
    url = "https://www.mercadolibre.cl/p/MLC61403702"
    result = await _strategy(make_fetcher, routes).fetch(url, url)

    assert result.title == "Bicicleta ganadora"
    assert result.image == "http://t.jpg"
    assert result.price == 150000
    assert result.currency == "CLP"


@pytest.mark.asyncio
async def test_product_own_data_when_no_winner_item(make_fetcher):
    routes = {"/products/MLC61403702": {"name": "Bicicleta genérica", "pictures": [{"url": "http://prod.jpg"}]}}
    url = "https://www.mercadolibre.cl/p/MLC61403702"
    result = await _strategy(make_fetcher, routes).fetch(url, url)

    assert result.title == "Bicicleta genérica"
    assert result.image == "http://prod.jpg"
    assert result.price is None
    assert result.source.price is PriceSource.NONE


@pytest.mark.asyncio
async def test_nothing_usable_returns_none(make_fetcher):
    url = "https://www.mercadolibre.cl/MLC-1706170179-bici"
    assert await _strategy(make_fetcher, {}).fetch(url, url) is None
    assert await _strategy(make_fetcher, {}).fetch("https://www.mercadolibre.cl/ofertas", "x") is None
