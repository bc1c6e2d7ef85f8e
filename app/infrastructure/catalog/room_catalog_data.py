from __future__ import annotations

from decimal import Decimal

from app.domain.entities.room_type import RoomType

ROOM_CATALOG: dict[str, RoomType] = {
    "seroja": RoomType(
        room_id="seroja",
        display_name="Seroja",
        description="Elegant room with garden view",
        nightly_rate=Decimal("350"),
    ),
    "dahlia": RoomType(
        room_id="dahlia",
        display_name="Dahlia",
        description="Spacious room with balcony",
        nightly_rate=Decimal("180"),
    ),
    "adelia": RoomType(
        room_id="adelia",
        display_name="Adelia",
        description="Luxury suite with premium amenities",
        nightly_rate=Decimal("150"),
    ),
}
