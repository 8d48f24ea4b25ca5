# backend/gestor_ordenes/services/billing.py
"""
Numeración de facturas y cálculo de impuestos.

Funciones puras, sin acceso a base de datos:
- Número de factura: FACT-<YYYYMM>-<NNNN>, secuencial dentro de cada mes natural.
- Impuesto: tasa fija (19% por defecto) sobre el subtotal, redondeada a céntimos.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from gestor_ordenes.core.config import settings

INVOICE_PREFIX = "FACT"
SEQUENCE_WIDTH = 4
CENT = Decimal("0.01")


def year_month_key(current_date: datetime) -> str:
    return f"{current_date.year}{current_date.month:02d}"


def invoice_prefix(year_month: str) -> str:
    return f"{INVOICE_PREFIX}-{year_month}-"


def format_invoice_number(year_month: str, sequence: int) -> str:
    """format_invoice_number("202405", 7) -> "FACT-202405-0007"."""
    return f"{invoice_prefix(year_month)}{sequence:0{SEQUENCE_WIDTH}d}"


def parse_invoice_sequence(number: str) -> int:
    """Devuelve la secuencia numérica (último segmento) de un número de factura."""
    try:
        return int(number.rsplit("-", 1)[1])
    except (IndexError, ValueError):
        raise ValueError(f"Número de factura con formato inválido: {number!r}")


def next_invoice_number(last_number: Optional[str], current_date: datetime) -> str:
    """
    Siguiente número del mes de `current_date` a partir del último emitido.

    Si `last_number` es None (primera factura del mes) empieza en 1.
    """
    year_month = year_month_key(current_date)
    sequence = parse_invoice_sequence(last_number) + 1 if last_number else 1
    return format_invoice_number(year_month, sequence)


def calculate_tax(subtotal, rate=None) -> Decimal:
    if rate is None:
        rate = settings.TAX_RATE
    amount = Decimal(str(subtotal)) * Decimal(str(rate))
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def invoice_totals(subtotal, rate=None) -> Tuple[Decimal, Decimal, Decimal]:
    """(subtotal, impuesto, total) con total = subtotal + impuesto."""
    subtotal = Decimal(str(subtotal)).quantize(CENT, rounding=ROUND_HALF_UP)
    tax = calculate_tax(subtotal, rate)
    return subtotal, tax, subtotal + tax
