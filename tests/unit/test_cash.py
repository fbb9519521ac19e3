"""Unit tests for cash settlement and rent-to-own quotes"""

import pytest
from trailer_desk.domain.cash import (
    calculate_cash,
    calculate_cash_discount,
    calculate_out_the_door,
    calculate_tax,
)
from trailer_desk.domain.exceptions import InvalidInputError
from trailer_desk.domain.rent_to_own import (
    calculate_rto,
    build_rto_matrix,
    calculate_rto_monthly,
    compare_rto_vs_finance,
)


def test_calculate_cash_additivity():
    """Options are taxed with the trailer; fees are added untaxed"""
    settlement = calculate_cash(25000, 7, 500, 1200)

    assert settlement.base_price == 25000
    assert settlement.added_options == 1200
    assert settlement.subtotal == 26200
    assert settlement.taxes == pytest.approx(1834)
    assert settlement.fees == 500
    assert settlement.total_cash == pytest.approx(28254.00)
    assert settlement.total_cash == pytest.approx(25000 + 1200 + (25000 + 1200) * 7 / 100 + 500)


def test_calculate_cash_without_options():
    settlement = calculate_cash(10000, 6, 250)

    assert settlement.added_options == 0
    assert settlement.subtotal == 10000
    assert settlement.total_cash == pytest.approx(10850)


def test_calculate_cash_clamps_negative_fees(caplog):
    settlement = calculate_cash(10000, 0, -300)

    assert settlement.fees == 0
    assert settlement.total_cash == 10000
    assert "Negative fees clamped to zero" in caplog.text


def test_calculate_cash_rejects_nan():
    with pytest.raises(InvalidInputError):
        calculate_cash(10000, float("nan"), 0)


def test_calculate_cash_discount():
    discount = calculate_cash_discount(10000, 5)

    assert discount.original_price == 10000
    assert discount.discount == pytest.approx(500)
    assert discount.discounted_price == pytest.approx(9500)


def test_tax_and_out_the_door():
    assert calculate_tax(10000, 7) == pytest.approx(700)
    assert calculate_out_the_door(10000, 7, 399) == pytest.approx(11099)


def test_calculate_rto_applies_minimum_down():
    """$8,600 trailer → $10,000 RTO price, 3.5% rent, 7% tax on rent"""
    quote = calculate_rto(8600, 0, 7, 36)

    assert quote.rto_price == 10000
    assert quote.down == 200  # minimum down
    assert quote.monthly_rent == pytest.approx(350)
    assert quote.monthly_tax == pytest.approx(24.5)
    assert quote.monthly_total == pytest.approx(374.5)
    assert quote.due_at_signing == pytest.approx(200 + 99 + 374.5)
    assert quote.total_paid == pytest.approx(374.5 * 36 + 200 + 99)
    assert quote.buyout_fee == 250
    assert quote.doc_fee == 99


def test_calculate_rto_keeps_larger_down():
    quote = calculate_rto(8600, 1500, 7, 24)

    assert quote.down == 1500


def test_calculate_rto_monthly_matches_full_quote():
    assert calculate_rto_monthly(8600, 7) == pytest.approx(calculate_rto(8600, 0, 7, 36).monthly_total)


def test_compare_rto_vs_finance():
    quote = calculate_rto(8600, 0, 7, 36)

    comparison = compare_rto_vs_finance(quote, finance_monthly=300, finance_term=36, finance_down=1000)

    assert comparison.finance_total_cost == 11800
    assert comparison.rto_total_cost == pytest.approx(13781)
    assert comparison.difference == pytest.approx(1981)
    assert comparison.rto_is_more_expensive is True


def test_build_rto_matrix_defaults():
    """Fixed 24/36/48 month terms; rent ignores the down payment"""
    rows = build_rto_matrix(8600, 7)

    assert [row.term_months for row in rows] == [24, 36, 48]
    assert all(row.monthly_total == pytest.approx(374.5) for row in rows)
    assert all(len(row.totals_paid) == 4 for row in rows)

    row_36 = rows[1]
    assert row_36.totals_paid[0] == pytest.approx(374.5 * 36 + 200 + 99)  # minimum down applies
    assert row_36.totals_paid[2] == pytest.approx(374.5 * 36 + 2500 + 99)
    assert row_36.totals_paid[0] == calculate_rto(8600, 0, 7, 36).total_paid


def test_build_rto_matrix_matches_monthly_helper():
    rows = build_rto_matrix(12000, 6, terms=[48, 24, 24], down_payments=[500])

    assert [row.term_months for row in rows] == [24, 48]
    assert rows[0].monthly_total == pytest.approx(calculate_rto_monthly(12000, 6))


@pytest.mark.parametrize("bad_term", [12, 60])
def test_build_rto_matrix_rejects_custom_terms(bad_term):
    with pytest.raises(InvalidInputError):
        build_rto_matrix(8600, 7, terms=[24, bad_term])
