from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RoomType:
    room_id: str
    display_name: str
    description: str
    nightly_rate: Decimal
