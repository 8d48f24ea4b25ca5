from datetime import datetime
from decimal import Decimal

import pytest

from gestor_ordenes.services import billing


def test_year_month_key_is_zero_padded():
    assert billing.year_month_key(datetime(2024, 3, 15)) == "202403"


def test_first_invoice_of_the_month_starts_at_one():
    assert billing.next_invoice_number(None, datetime(2024, 3, 1)) == "FACT-202403-0001"


def test_next_invoice_number_increments_last_sequence():
    assert billing.next_invoice_number("FACT-202403-0041", datetime(2024, 3, 20)) == "FACT-202403-0042"


def test_sequence_grows_past_four_digits():
    assert billing.next_invoice_number("FACT-202403-9999", datetime(2024, 3, 20)) == "FACT-202403-10000"
    assert billing.parse_invoice_sequence("FACT-202403-10000") == 10000


def test_parse_invoice_sequence_rejects_garbage():
    with pytest.raises(ValueError):
        billing.parse_invoice_sequence("FACTURA")


def test_tax_is_nineteen_percent_rounded_to_cents():
    assert billing.calculate_tax(Decimal("20.00")) == Decimal("3.80")
    assert billing.calculate_tax(Decimal("0.05")) == Decimal("0.01")


def test_invoice_totals_add_up():
    subtotal, tax, total = billing.invoice_totals(Decimal("123.45"))
    assert subtotal == Decimal("123.45")
    assert tax == Decimal("23.46")
    assert total == subtotal + tax
    assert abs(float(total) - 123.45 * 1.19) < 0.01


def test_custom_tax_rate():
    assert billing.calculate_tax(100, rate=0.1) == Decimal("10.00")
