from __future__ import annotations

from typing import Dict, Tuple

import numpy as np

from . import version_table
from .models import ErrorCorrectionLevel

# BCH(15,5) format information, XOR-ed with 0x5412, keyed by (level, mask)
FORMAT_INFO: Dict[Tuple[ErrorCorrectionLevel, int], int] = {
    (ErrorCorrectionLevel.LOW, 0): 0x77C4,
    (ErrorCorrectionLevel.LOW, 1): 0x72F3,
    (ErrorCorrectionLevel.LOW, 2): 0x7DAA,
    (ErrorCorrectionLevel.LOW, 3): 0x789D,
    (ErrorCorrectionLevel.LOW, 4): 0x662F,
    (ErrorCorrectionLevel.LOW, 5): 0x6318,
    (ErrorCorrectionLevel.LOW, 6): 0x6C41,
    (ErrorCorrectionLevel.LOW, 7): 0x6976,
    (ErrorCorrectionLevel.MEDIUM, 0): 0x5412,
    (ErrorCorrectionLevel.MEDIUM, 1): 0x5125,
    (ErrorCorrectionLevel.MEDIUM, 2): 0x5E7C,
    (ErrorCorrectionLevel.MEDIUM, 3): 0x5B4B,
    (ErrorCorrectionLevel.MEDIUM, 4): 0x45F9,
    (ErrorCorrectionLevel.MEDIUM, 5): 0x40CE,
    (ErrorCorrectionLevel.MEDIUM, 6): 0x4F97,
    (ErrorCorrectionLevel.MEDIUM, 7): 0x4AA0,
    (ErrorCorrectionLevel.QUARTILE, 0): 0x355F,
    (ErrorCorrectionLevel.QUARTILE, 1): 0x3068,
    (ErrorCorrectionLevel.QUARTILE, 2): 0x3F31,
    (ErrorCorrectionLevel.QUARTILE, 3): 0x3A06,
    (ErrorCorrectionLevel.QUARTILE, 4): 0x24B4,
    (ErrorCorrectionLevel.QUARTILE, 5): 0x2183,
    (ErrorCorrectionLevel.QUARTILE, 6): 0x2EDA,
    (ErrorCorrectionLevel.QUARTILE, 7): 0x2BED,
    (ErrorCorrectionLevel.HIGH, 0): 0x1689,
    (ErrorCorrectionLevel.HIGH, 1): 0x13BE,
    (ErrorCorrectionLevel.HIGH, 2): 0x1CE7,
    (ErrorCorrectionLevel.HIGH, 3): 0x19D0,
    (ErrorCorrectionLevel.HIGH, 4): 0x0762,
    (ErrorCorrectionLevel.HIGH, 5): 0x0255,
    (ErrorCorrectionLevel.HIGH, 6): 0x0D0C,
    (ErrorCorrectionLevel.HIGH, 7): 0x083B,
}

VERSION_INFO_GENERATOR = 0x1F25

FINDER_PATTERN = np.array(
    [
        [1, 1, 1, 1, 1, 1, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 0, 1, 1, 1, 0, 1],
        [1, 0, 1, 1, 1, 0, 1],
        [1, 0, 1, 1, 1, 0, 1],
        [1, 0, 0, 0, 0, 0, 1],
        [1, 1, 1, 1, 1, 1, 1],
    ],
    dtype=bool,
)


def format_bits(level: ErrorCorrectionLevel, mask: int) -> int:
    return FORMAT_INFO[(ErrorCorrectionLevel(level), mask)]


def version_bits(version: int) -> int:
    """18-bit version information: 6 data bits and a BCH(18,6) remainder."""
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * VERSION_INFO_GENERATOR)
    return version << 12 | rem


class SymbolMatrix:
    """Module grid plus a parallel mask of cells owned by function patterns.

    Coordinates are ``(x, y)`` with x the column; the arrays are indexed
    ``[y, x]``. Reads outside the grid return light / reserved, writes outside
    are ignored.
    """

    def __init__(self, version: int) -> None:
        self.version = version_table.check_version(version)
        self.size = version_table.size(version)
        self.modules = np.zeros((self.size, self.size), dtype=bool)
        self.reserved = np.zeros((self.size, self.size), dtype=bool)
        # cells handed to an external overlay; a subset of reserved
        self.claimed = np.zeros((self.size, self.size), dtype=bool)

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> bool:
        if self._inside(x, y):
            return bool(self.modules[y, x])
        return False

    def set(self, x: int, y: int, value: bool) -> None:
        if self._inside(x, y):
            self.modules[y, x] = value

    def is_reserved(self, x: int, y: int) -> bool:
        if self._inside(x, y):
            return bool(self.reserved[y, x])
        return True

    def set_reserved(self, x: int, y: int) -> None:
        if self._inside(x, y):
            self.reserved[y, x] = True

    def _set_function(self, x: int, y: int, value: bool) -> None:
        self.set(x, y, value)
        self.set_reserved(x, y)

    def copy(self) -> "SymbolMatrix":
        other = SymbolMatrix.__new__(SymbolMatrix)
        other.version = self.version
        other.size = self.size
        other.modules = self.modules.copy()
        other.reserved = self.reserved.copy()
        other.claimed = self.claimed.copy()
        return other

    def data_module_count(self) -> int:
        return int(self.size * self.size - self.reserved.sum())

    def add_finder_patterns(self) -> None:
        for x, y in ((0, 0), (self.size - 7, 0), (0, self.size - 7)):
            self._add_finder_pattern(x, y)

    def _add_finder_pattern(self, x: int, y: int) -> None:
        # separator ring first, then the pattern itself
        for dy in range(-1, 8):
            for dx in range(-1, 8):
                if dx in (-1, 7) or dy in (-1, 7):
                    self._set_function(x + dx, y + dy, False)
        for dy in range(7):
            for dx in range(7):
                self._set_function(x + dx, y + dy, bool(FINDER_PATTERN[dy, dx]))

    def add_timing_patterns(self) -> None:
        for i in range(8, self.size - 8):
            self._set_function(i, 6, i % 2 == 0)
            self._set_function(6, i, i % 2 == 0)

    def add_alignment_patterns(self) -> None:
        positions = version_table.alignment_positions(self.version)
        last = len(positions) - 1
        for i, cy in enumerate(positions):
            for j, cx in enumerate(positions):
                # the three corners are taken by finder patterns
                if (i, j) in ((0, 0), (0, last), (last, 0)):
                    continue
                for dy in range(-2, 3):
                    for dx in range(-2, 3):
                        self._set_function(cx + dx, cy + dy, max(abs(dx), abs(dy)) != 1)

    def add_dark_module(self) -> None:
        self._set_function(8, 4 * self.version + 9, True)

    def _format_positions(self):
        size = self.size
        first = [(8, i) for i in range(6)] + [(8, 7), (8, 8), (7, 8)]
        first += [(14 - i, 8) for i in range(9, 15)]
        second = [(size - 1 - i, 8) for i in range(8)]
        second += [(8, size - 15 + i) for i in range(8, 15)]
        return first, second

    def reserve_format_areas(self) -> None:
        """Claim both format strips so data placement skips them."""
        first, second = self._format_positions()
        for x, y in first + second:
            self.set_reserved(x, y)

    def add_format_info(self, level: ErrorCorrectionLevel, mask: int) -> None:
        bits = format_bits(level, mask)
        for positions in self._format_positions():
            for i, (x, y) in enumerate(positions):
                self._set_function(x, y, (bits >> i) & 1 == 1)

    def add_version_info(self) -> None:
        if self.version < 7:
            return
        bits = version_bits(self.version)
        for i in range(18):
            value = (bits >> i) & 1 == 1
            a = self.size - 11 + i % 3
            b = i // 3
            self._set_function(a, b, value)
            self._set_function(b, a, value)

    def add_function_patterns(self) -> None:
        self.add_finder_patterns()
        self.add_timing_patterns()
        self.add_alignment_patterns()
        self.add_dark_module()
        self.reserve_format_areas()
        self.add_version_info()

    def reserve_region(self, x0: int, y0: int, width: int, height: int) -> None:
        """Mark a rectangle reserved and light, e.g. to leave room for a logo.

        Placement still steps over the data bits that would have landed in
        the rectangle, so standard readers see the hidden codewords as
        erasures rather than a shifted stream.
        """
        for y in range(y0, y0 + height):
            for x in range(x0, x0 + width):
                if self._inside(x, y) and not self.reserved[y, x]:
                    self.claimed[y, x] = True
                self._set_function(x, y, False)

    def __repr__(self) -> str:
        return f"SymbolMatrix(version={self.version}, size={self.size})"
