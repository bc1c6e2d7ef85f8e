from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.entities.booking import BookingRequest


@dataclass(frozen=True)
class ValidationResult:
    errors: dict[str, str] = field(default_factory=dict)
    request: BookingRequest | None = None  # only set when there are no errors

    @property
    def is_valid(self) -> bool:
        return not self.errors
