from __future__ import annotations

from decimal import Decimal

import pytest

from store_service.app.models.pricing import (
    credits_to_mmk,
    format_credits,
    parse_credits,
    quote,
)


def test_quote_for_500_credits_matches_buy_credits_screen() -> None:
    result = quote(Decimal("500"), rate_mmk=100)

    assert result.credits == "500"
    assert result.amount_mmk == 50000


def test_quote_keeps_decimal_credits_without_trailing_zeros() -> None:
    result = quote(parse_credits("12.50"), rate_mmk=100)

    assert result.credits == "12.5"
    assert result.amount_mmk == 1250


def test_credits_to_mmk_uses_configured_rate() -> None:
    assert credits_to_mmk(250, 100) == 25000
    assert credits_to_mmk(1.25, 120) == 150


@pytest.mark.parametrize("raw", ["0", "-5", "abc", "1.234", "", "nan"])
def test_parse_credits_rejects_invalid_amounts(raw: str) -> None:
    with pytest.raises(ValueError):
        parse_credits(raw)


def test_format_credits_drops_fraction_for_whole_numbers() -> None:
    assert format_credits(Decimal("1000.00")) == "1000"
    assert format_credits(0.1) == "0.1"
