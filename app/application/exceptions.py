class PricingPreconditionError(ValueError):
    """Raised when pricing is invoked with input that validation should have rejected."""
    pass


class BookingStoreError(RuntimeError):
    """Raised when the booking store fails (network errors, rejected writes, bad responses)."""
    pass


class BookingNotFoundError(BookingStoreError):
    """Raised when a booking id does not exist in the store."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking not found: {booking_id}")
        self.booking_id = booking_id
