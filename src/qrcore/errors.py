from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import EncodingMode, ErrorCorrectionLevel


class QRCodeError(Exception):
    pass


class EmptyInputError(QRCodeError):
    def __init__(self) -> None:
        super().__init__("data cannot be empty")


class UnsupportedModeError(QRCodeError):
    pass


class CapacityExceededError(QRCodeError):
    """Raised when the text does not fit any permitted version."""

    def __init__(
        self,
        length: int,
        mode: "EncodingMode",
        level: "ErrorCorrectionLevel",
        capacity: int,
    ) -> None:
        self.length = length
        self.mode = mode
        self.level = level
        self.capacity = capacity
        super().__init__(
            f"{length} {mode.name.lower()} characters exceed capacity {capacity} "
            f"at level {level.letter}"
        )
