from __future__ import annotations

from typing import List

from .matrix import SymbolMatrix


def bytes_to_bits(data: bytes) -> List[int]:
    return [(byte >> (7 - i)) & 1 for byte in data for i in range(8)]


def place(matrix: SymbolMatrix, codewords: bytes) -> int:
    """Deposit codeword bits into every free cell in zigzag order.

    Column pairs are visited right to left, skipping the vertical timing
    column, alternating upward and downward starting upward at the bottom
    right. Within a row the right cell is filled before the left one. Cells
    left over after the last bit are set light. A cell claimed by
    ``reserve_region`` keeps its light value but still uses up its bit.
    Returns the number of bits written.
    """
    bits = bytes_to_bits(codewords)
    size = matrix.size
    index = 0
    written = 0
    upward = True
    col = size - 1
    while col > 0:
        if col == 6:
            col -= 1
        rows = range(size - 1, -1, -1) if upward else range(size)
        for y in rows:
            for x in (col, col - 1):
                if matrix.is_reserved(x, y):
                    if matrix.claimed[y, x]:
                        index += 1
                    continue
                if index < len(bits):
                    matrix.set(x, y, bits[index] == 1)
                    index += 1
                    written += 1
                else:
                    matrix.set(x, y, False)
        upward = not upward
        col -= 2
    return written
