from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from app.domain.entities.room_type import RoomType


class RoomCatalogPort(ABC):
    @abstractmethod
    def get_room(self, room_id: str) -> RoomType | None:
        """Get room type by id. Returns None if unknown."""
        raise NotImplementedError

    @abstractmethod
    def list_rooms(self) -> list[RoomType]:
        """All room types in display order."""
        raise NotImplementedError

    @abstractmethod
    def get_rate(self, room_id: str) -> Decimal | None:
        """Get nightly rate for a room. Returns None if unknown."""
        raise NotImplementedError
