from __future__ import annotations

import dataclasses
import enum
from typing import List

import numpy as np


class EncodingMode(enum.IntEnum):
    """Data modes; the value is the 4-bit mode indicator."""

    NUMERIC = 0b0001
    ALPHANUMERIC = 0b0010
    BYTE = 0b0100


class ErrorCorrectionLevel(enum.IntEnum):
    LOW = 0
    MEDIUM = 1
    QUARTILE = 2
    HIGH = 3

    @property
    def letter(self) -> str:
        return "LMQH"[self]

    @property
    def format_bits(self) -> int:
        # 2-bit indicator stored in the format information
        return (0b01, 0b00, 0b11, 0b10)[self]

    @classmethod
    def parse(cls, value: "str | int | ErrorCorrectionLevel") -> "ErrorCorrectionLevel":
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        text = value.strip().upper()
        if len(text) == 1 and text in "LMQH":
            return cls("LMQH".index(text))
        try:
            return cls[text]
        except KeyError:
            raise ValueError(f"unknown error correction level {value!r}") from None


@dataclasses.dataclass(frozen=True)
class BlockGroup:
    num_blocks: int
    data_codewords: int
    total_codewords: int

    @property
    def ec_codewords(self) -> int:
        return self.total_codewords - self.data_codewords


@dataclasses.dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height


@dataclasses.dataclass(frozen=True)
class QRSymbol:
    version: int
    level: ErrorCorrectionLevel
    mode: EncodingMode
    mask: int
    size: int
    matrix: np.ndarray  # bool, indexed [y, x], read-only

    def module_at(self, x: int, y: int) -> bool:
        return bool(self.matrix[y, x])

    def rows(self) -> List[List[bool]]:
        return [[bool(v) for v in row] for row in self.matrix]

    def __str__(self) -> str:
        return f"QRSymbol(version={self.version}, level={self.level.letter}, size={self.size})"
