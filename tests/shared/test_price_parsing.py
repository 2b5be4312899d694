# tests/shared/test_price_parsing.py
import math

import pytest

from giftlist.shared.utils.number import parse_price_string, price_to_text


# ──────────────────────────────────────────────────────────────────────────────
#                    💵 Эвристика «ровно 2 знака = дробная часть»
# ──────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1.234,56", 1234.56),
        ("1,234.56", 1234.56),
        ("12990", 12990.0),
        ("19.990", 19990.0),      # CLP: точка — разделитель тысяч
        ("$ 19.990", 19990.0),
        ("19,99 €", 19.99),
        ("1.299.990", 1299990.0),
        ("0.5", 5.0),             # одна цифра после точки → тоже тысячи
    ],
)
def test_parse_price_string_heuristic(raw, expected):
    assert parse_price_string(raw) == pytest.approx(expected)


@pytest.mark.parametrize("raw", ["free", "", "   ", ".", ",,", "precio: consultar"])
def test_parse_price_string_returns_none_without_digits(raw):
    assert parse_price_string(raw) is None


def test_parse_price_string_result_is_finite():
    value = parse_price_string("9" * 400)
    assert value is None or math.isfinite(value)


# ──────────────────────────────────────────────────────────────────────────────
#                    🧾 JSON-значения → строка как в браузере
# ──────────────────────────────────────────────────────────────────────────────

def test_price_to_text_drops_trailing_zero_fraction():
    assert price_to_text(19990.0) == "19990"
    assert parse_price_string(price_to_text(19990.0)) == 19990.0


def test_price_to_text_keeps_real_fraction():
    assert price_to_text(19.99) == "19.99"
    assert price_to_text(12990) == "12990"
    assert price_to_text("19.990") == "19.990"
    assert price_to_text(True) == "true"


def test_price_to_text_objects_and_lists_like_browser():
    assert price_to_text({"v": 5}) == "[object Object]"
    assert parse_price_string(price_to_text({"v": 5})) is None
    assert price_to_text([1, 2.0, None]) == "1,2,"
    assert price_to_text(None) == ""
