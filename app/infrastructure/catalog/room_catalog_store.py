from __future__ import annotations

from decimal import Decimal

from app.application.ports.room_catalog import RoomCatalogPort
from app.domain.entities.room_type import RoomType
from app.infrastructure.catalog.room_catalog_data import ROOM_CATALOG


class RoomCatalogStore(RoomCatalogPort):
    def __init__(self, catalog: dict[str, RoomType] | None = None) -> None:
        self._catalog = catalog if catalog is not None else ROOM_CATALOG

    def get_room(self, room_id: str) -> RoomType | None:
        normalized_id = room_id.lower().strip()
        return self._catalog.get(normalized_id)

    def list_rooms(self) -> list[RoomType]:
        return list(self._catalog.values())

    def get_rate(self, room_id: str) -> Decimal | None:
        room = self.get_room(room_id)
        if not room:
            return None
        return room.nightly_rate
