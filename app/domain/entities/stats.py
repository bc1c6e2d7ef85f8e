from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class MonthlySummary:
    month: str  # YYYY-MM
    total_bookings: int
    completed: int
    pending: int
    collected: Decimal
    outstanding: Decimal
