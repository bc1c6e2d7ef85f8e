from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from app.domain.entities.booking import BookingAmounts

CENTS = Decimal("0.01")


def format_money(amount: Decimal, currency: str = "RM") -> str:
    """Format an amount for display, e.g. Decimal("1060") -> "RM 1060.00"."""
    return f"{currency} {amount.quantize(CENTS, rounding=ROUND_HALF_UP)}"


def receipt_lines(amounts: BookingAmounts, currency: str = "RM") -> list[str]:
    return [
        f"Total: {format_money(amounts.total, currency)}",
        f"Deposit Paid: {format_money(amounts.deposit, currency)}",
        f"Balance: {format_money(amounts.balance, currency)}",
    ]
