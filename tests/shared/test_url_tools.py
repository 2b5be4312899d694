# tests/shared/test_url_tools.py
import pytest

from giftlist.shared.errors import InvalidUrlError
from giftlist.shared.utils.url_tools import (
    clean_tracking_params,
    hostname_fallback,
    to_absolute_url,
    validate_http_url,
)


# ──────────────────────────────────────────────────────────────────────────────
#                        🧼 Очистка трекинговых параметров
# ──────────────────────────────────────────────────────────────────────────────

def test_clean_removes_denylisted_params():
    assert clean_tracking_params("https://x.com/p?id=1&utm_source=ig&fbclid=abc") == "https://x.com/p?id=1"


def test_clean_keeps_other_params_order_and_fragment():
    raw = "https://shop.cl/item?b=2&gclid=zz&a=1&utm_medium=cpc#reviews"
    assert clean_tracking_params(raw) == "https://shop.cl/item?b=2&a=1#reviews"


def test_clean_drops_query_entirely_when_only_tracking():
    assert clean_tracking_params("https://shop.cl/item?utm_campaign=x&mc_eid=1") == "https://shop.cl/item"


def test_clean_does_not_reencode_values():
    raw = "https://shop.cl/s?q=taza%20roja&color=rojo+oscuro"
    assert clean_tracking_params(raw) == raw


@pytest.mark.parametrize(
    "raw",
    [
        "https://x.com/p?id=1&utm_source=ig&fbclid=abc",
        "https://www.falabella.com/falabella-cl/product/123?igshid=1#frag",
        "http://example.org",
    ],
)
def test_clean_is_idempotent(raw):
    once = clean_tracking_params(raw)
    assert clean_tracking_params(once) == once


@pytest.mark.parametrize("raw", ["", "not a url", "/relative/path", "https://"])
def test_clean_rejects_non_absolute(raw):
    with pytest.raises(InvalidUrlError):
        clean_tracking_params(raw)


@pytest.mark.parametrize("raw", ["http://exa mple.com", "https://shop<cl>.cl/x", "http://a|b.cl"])
def test_host_with_forbidden_characters_is_invalid(raw):
    with pytest.raises(InvalidUrlError):
        validate_http_url(raw)


def test_invalid_url_error_is_value_error():
    with pytest.raises(ValueError):
        clean_tracking_params("::::")


# ──────────────────────────────────────────────────────────────────────────────
#                      ✅ Валидация на границе HTTP и хелперы
# ──────────────────────────────────────────────────────────────────────────────

def test_validate_http_url_strips_and_accepts_http_https():
    assert validate_http_url("  https://shop.cl/a  ") == "https://shop.cl/a"
    assert validate_http_url("http://shop.cl") == "http://shop.cl"


def test_validate_http_url_rejects_other_schemes():
    with pytest.raises(InvalidUrlError) as exc_info:
        validate_http_url("ftp://shop.cl/file")
    assert exc_info.value.message == "Only http/https URLs are supported."


def test_hostname_fallback_strips_www():
    assert hostname_fallback("https://www.paris.cl/taza") == "paris.cl"
    assert hostname_fallback("https://ripley.cl") == "ripley.cl"
    assert hostname_fallback("garbage") == ""


def test_to_absolute_url_resolves_relative_reference():
    assert to_absolute_url("/img/a.jpg", "https://shop.com/item") == "https://shop.com/img/a.jpg"
    assert to_absolute_url("https://cdn.shop.com/a.jpg", "https://shop.com/item") == "https://cdn.shop.com/a.jpg"
