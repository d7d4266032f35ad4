"""QR Code symbol encoder."""

from .encoder import encode, encode_with_logo, encode_with_reserved_region
from .errors import CapacityExceededError, EmptyInputError, QRCodeError, UnsupportedModeError
from .models import EncodingMode, ErrorCorrectionLevel, QRSymbol, Rect

__all__ = [
    "encode",
    "encode_with_logo",
    "encode_with_reserved_region",
    "CapacityExceededError",
    "EmptyInputError",
    "QRCodeError",
    "UnsupportedModeError",
    "EncodingMode",
    "ErrorCorrectionLevel",
    "QRSymbol",
    "Rect",
]
