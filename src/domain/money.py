"""Monetary arithmetic for invoices

Pure functions over Decimal. No rounding is applied: callers get the exact
result of the arithmetic and decide on presentation themselves.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Union
from src.domain.exceptions import InvalidAmount

Number = Union[Decimal, int, str]

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def to_decimal(value: Number, field: str = "amount") -> Decimal:
    """Convert an input to Decimal, refusing floats and non-finite values"""
    if isinstance(value, float):
        # str() keeps the shortest repr, e.g. 0.1 -> Decimal("0.1")
        value = str(value)
    try:
        result = Decimal(value)
    except (ArithmeticError, TypeError, ValueError):
        raise InvalidAmount(f"{field} is not a valid number: {value!r}", field=field)
    if not result.is_finite():
        raise InvalidAmount(f"{field} must be a finite number", field=field)
    return result


def line_subtotal(quantity: Number, unit_price: Number, discount: Number = ZERO) -> Decimal:
    """
    Subtotal of one line item: quantity * unit_price - discount

    Raises:
        InvalidAmount: quantity <= 0, unit_price < 0 or discount < 0
    """
    quantity = to_decimal(quantity, "quantity")
    unit_price = to_decimal(unit_price, "unit_price")
    discount = to_decimal(discount, "discount")

    if quantity <= ZERO:
        raise InvalidAmount("Quantity must be greater than 0", field="quantity")
    if unit_price < ZERO:
        raise InvalidAmount("Unit price cannot be negative", field="unit_price")
    if discount < ZERO:
        raise InvalidAmount("Discount cannot be negative", field="discount")

    return quantity * unit_price - discount


def invoice_totals(
    item_subtotals: Iterable[Number],
    tax_rate: Number,
    discount_amount: Number = ZERO,
) -> InvoiceTotals:
    """
    Whole-invoice totals from the item subtotals

    subtotal   = sum(item_subtotals)
    tax_amount = subtotal * tax_rate / 100
    total      = subtotal + tax_amount - discount_amount

    total is not floored at zero: a discount larger than subtotal + tax
    yields a negative total.

    Raises:
        InvalidAmount: tax_rate outside [0, 100] or discount_amount < 0
    """
    tax_rate = to_decimal(tax_rate, "tax_rate")
    discount_amount = to_decimal(discount_amount, "discount_amount")

    if tax_rate < ZERO or tax_rate > HUNDRED:
        raise InvalidAmount("Tax rate must be between 0 and 100", field="tax_rate")
    if discount_amount < ZERO:
        raise InvalidAmount("Discount amount cannot be negative", field="discount_amount")

    subtotal = ZERO
    for value in item_subtotals:
        subtotal += to_decimal(value, "subtotal")

    tax_amount = subtotal * tax_rate / HUNDRED
    total = subtotal + tax_amount - discount_amount

    return InvoiceTotals(subtotal=subtotal, tax_amount=tax_amount, total=total)
