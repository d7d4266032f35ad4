from __future__ import annotations

from typing import Iterator, List

from . import config
from .errors import UnsupportedModeError
from .models import EncodingMode, ErrorCorrectionLevel
from .version_table import total_data_codewords

_ALPHANUMERIC_INDEX = {c: i for i, c in enumerate(config.ALPHANUMERIC_CHARS)}

# character count indicator widths for versions 1-9, 10-26, 27-40
_COUNT_BITS = {
    EncodingMode.NUMERIC: (10, 12, 14),
    EncodingMode.ALPHANUMERIC: (9, 11, 13),
    EncodingMode.BYTE: (8, 16, 16),
}


class BitBuffer:
    """Append-only sequence of bits, most significant bit first."""

    def __init__(self, bits: List[int] | None = None) -> None:
        self.bits: List[int] = list(bits) if bits else []

    def __len__(self) -> int:
        return len(self.bits)

    def __iter__(self) -> Iterator[int]:
        return iter(self.bits)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BitBuffer):
            return self.bits == other.bits
        return NotImplemented

    def put(self, value: int, length: int) -> None:
        if value >> length:
            raise ValueError(f"value {value} does not fit in {length} bits")
        self.bits.extend((value >> (length - 1 - i)) & 1 for i in range(length))

    def put_bytes(self, data: bytes) -> None:
        for byte in data:
            self.put(byte, 8)

    def to_bytes(self) -> bytes:
        out = bytearray()
        for i in range(0, len(self.bits), 8):
            chunk = self.bits[i : i + 8]
            byte = 0
            for bit in chunk:
                byte = (byte << 1) | bit
            out.append(byte << (8 - len(chunk)))
        return bytes(out)

    def __repr__(self) -> str:
        return f"BitBuffer({''.join(map(str, self.bits))})"


def is_numeric(text: str) -> bool:
    return all("0" <= c <= "9" for c in text)


def is_alphanumeric(text: str) -> bool:
    return all(c in _ALPHANUMERIC_INDEX for c in text)


def detect_mode(text: str) -> EncodingMode:
    """Return the most compact mode able to represent ``text``."""
    if is_numeric(text):
        return EncodingMode.NUMERIC
    if is_alphanumeric(text):
        return EncodingMode.ALPHANUMERIC
    return EncodingMode.BYTE


def supports(mode: EncodingMode, text: str) -> bool:
    if mode == EncodingMode.NUMERIC:
        return is_numeric(text)
    if mode == EncodingMode.ALPHANUMERIC:
        return is_alphanumeric(text)
    return True


def char_count_bits(mode: EncodingMode, version: int) -> int:
    if version <= 9:
        return _COUNT_BITS[mode][0]
    if version <= 26:
        return _COUNT_BITS[mode][1]
    return _COUNT_BITS[mode][2]


def payload_length(text: str, mode: EncodingMode) -> int:
    """Value of the character count indicator: bytes for byte mode."""
    if mode == EncodingMode.BYTE:
        return len(text.encode(config.BYTE_ENCODING))
    return len(text)


def encoded_length(text: str, mode: EncodingMode, version: int) -> int:
    """Exact number of bits ``pack`` produces, without building them."""
    n = payload_length(text, mode)
    if mode == EncodingMode.NUMERIC:
        payload = 10 * (n // 3) + (0, 4, 7)[n % 3]
    elif mode == EncodingMode.ALPHANUMERIC:
        payload = 11 * (n // 2) + 6 * (n % 2)
    else:
        payload = 8 * n
    return config.MODE_INDICATOR_BITS + char_count_bits(mode, version) + payload


def _put_numeric(buf: BitBuffer, text: str) -> None:
    for i in range(0, len(text), 3):
        group = text[i : i + 3]
        buf.put(int(group), (0, 4, 7, 10)[len(group)])


def _put_alphanumeric(buf: BitBuffer, text: str) -> None:
    for i in range(0, len(text) - 1, 2):
        buf.put(_ALPHANUMERIC_INDEX[text[i]] * 45 + _ALPHANUMERIC_INDEX[text[i + 1]], 11)
    if len(text) % 2:
        buf.put(_ALPHANUMERIC_INDEX[text[-1]], 6)


def pack(text: str, mode: EncodingMode, version: int) -> BitBuffer:
    """Mode indicator, character count and payload for a single segment."""
    if not supports(mode, text):
        raise UnsupportedModeError(f"text cannot be encoded in {mode.name.lower()} mode")
    count = payload_length(text, mode)
    count_bits = char_count_bits(mode, version)
    if count >> count_bits:
        raise UnsupportedModeError(
            f"{count} characters overflow the {count_bits}-bit count indicator"
        )
    buf = BitBuffer()
    buf.put(int(mode), config.MODE_INDICATOR_BITS)
    buf.put(count, count_bits)
    if mode == EncodingMode.NUMERIC:
        _put_numeric(buf, text)
    elif mode == EncodingMode.ALPHANUMERIC:
        _put_alphanumeric(buf, text)
    else:
        buf.put_bytes(text.encode(config.BYTE_ENCODING))
    return buf


def terminate_and_pad(bits: BitBuffer, version: int, level: ErrorCorrectionLevel) -> BitBuffer:
    capacity = total_data_codewords(version, level) * 8
    out = BitBuffer(bits.bits)
    out.bits.extend([0] * min(config.TERMINATOR_BITS, max(0, capacity - len(out))))
    out.bits.extend([0] * (-len(out) % 8))
    pad_index = 0
    while len(out) < capacity:
        out.put(config.PAD_BYTES[pad_index % 2], 8)
        pad_index += 1
    # only reachable when the caller picked too small a version
    del out.bits[capacity:]
    return out
