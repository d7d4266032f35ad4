"""Per-version symbol dimensions and Reed-Solomon block structure.

Rows are indexed by version; each holds one entry per error correction level
(L, M, Q, H), and each entry lists one or two block groups as
``(num_blocks, data_codewords, total_codewords)``.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Tuple

from . import config
from .models import BlockGroup, ErrorCorrectionLevel

_BLOCK_TABLE: Dict[int, Tuple[Tuple[Tuple[int, int, int], ...], ...]] = {
    1: (((1, 19, 26),), ((1, 16, 26),), ((1, 13, 26),), ((1, 9, 26),)),
    2: (((1, 34, 44),), ((1, 28, 44),), ((1, 22, 44),), ((1, 16, 44),)),
    3: (((1, 55, 70),), ((1, 44, 70),), ((2, 17, 35),), ((2, 13, 35),)),
    4: (((1, 80, 100),), ((2, 32, 50),), ((2, 24, 50),), ((4, 9, 25),)),
    5: (((1, 108, 134),), ((2, 43, 67),), ((2, 15, 33), (2, 16, 34),), ((2, 11, 33), (2, 12, 34),)),
    6: (((2, 68, 86),), ((4, 27, 43),), ((4, 19, 43),), ((4, 15, 43),)),
    7: (((2, 78, 98),), ((4, 31, 49),), ((2, 14, 32), (4, 15, 33),), ((4, 13, 39), (1, 14, 40),)),
    8: (((2, 97, 121),), ((2, 38, 60), (2, 39, 61),), ((4, 18, 40), (2, 19, 41),), ((4, 14, 40), (2, 15, 41),)),
    9: (((2, 116, 146),), ((3, 36, 58), (2, 37, 59),), ((4, 16, 36), (4, 17, 37),), ((4, 12, 36), (4, 13, 37),)),
    10: (((2, 68, 86), (2, 69, 87),), ((4, 43, 69), (1, 44, 70),), ((6, 19, 43), (2, 20, 44),), ((6, 15, 43), (2, 16, 44),)),
    11: (((4, 81, 101),), ((1, 50, 80), (4, 51, 81),), ((4, 22, 50), (4, 23, 51),), ((3, 12, 36), (8, 13, 37),)),
    12: (((2, 92, 116), (2, 93, 117),), ((6, 36, 58), (2, 37, 59),), ((4, 20, 46), (6, 21, 47),), ((7, 14, 42), (4, 15, 43),)),
    13: (((4, 107, 133),), ((8, 37, 59), (1, 38, 60),), ((8, 20, 44), (4, 21, 45),), ((12, 11, 33), (4, 12, 34),)),
    14: (((3, 115, 145), (1, 116, 146),), ((4, 40, 64), (5, 41, 65),), ((11, 16, 36), (5, 17, 37),), ((11, 12, 36), (5, 13, 37),)),
    15: (((5, 87, 109), (1, 88, 110),), ((5, 41, 65), (5, 42, 66),), ((5, 24, 54), (7, 25, 55),), ((11, 12, 36), (7, 13, 37),)),
    16: (((5, 98, 122), (1, 99, 123),), ((7, 45, 73), (3, 46, 74),), ((15, 19, 43), (2, 20, 44),), ((3, 15, 45), (13, 16, 46),)),
    17: (((1, 107, 135), (5, 108, 136),), ((10, 46, 74), (1, 47, 75),), ((1, 22, 50), (15, 23, 51),), ((2, 14, 42), (17, 15, 43),)),
    18: (((5, 120, 150), (1, 121, 151),), ((9, 43, 69), (4, 44, 70),), ((17, 22, 50), (1, 23, 51),), ((2, 14, 42), (19, 15, 43),)),
    19: (((3, 113, 141), (4, 114, 142),), ((3, 44, 70), (11, 45, 71),), ((17, 21, 47), (4, 22, 48),), ((9, 13, 39), (16, 14, 40),)),
    20: (((3, 107, 135), (5, 108, 136),), ((3, 41, 67), (13, 42, 68),), ((15, 24, 54), (5, 25, 55),), ((15, 15, 43), (10, 16, 44),)),
    21: (((4, 116, 144), (4, 117, 145),), ((17, 42, 68),), ((17, 22, 50), (6, 23, 51),), ((19, 16, 46), (6, 17, 47),)),
    22: (((2, 111, 139), (7, 112, 140),), ((17, 46, 74),), ((7, 24, 54), (16, 25, 55),), ((34, 13, 37),)),
    23: (((4, 121, 151), (5, 122, 152),), ((4, 47, 75), (14, 48, 76),), ((11, 24, 54), (14, 25, 55),), ((16, 15, 45), (14, 16, 46),)),
    24: (((6, 117, 147), (4, 118, 148),), ((6, 45, 73), (14, 46, 74),), ((11, 24, 54), (16, 25, 55),), ((30, 16, 46), (2, 17, 47),)),
    25: (((8, 106, 132), (4, 107, 133),), ((8, 47, 75), (13, 48, 76),), ((7, 24, 54), (22, 25, 55),), ((22, 15, 45), (13, 16, 46),)),
    26: (((10, 114, 142), (2, 115, 143),), ((19, 46, 74), (4, 47, 75),), ((28, 22, 50), (6, 23, 51),), ((33, 16, 46), (4, 17, 47),)),
    27: (((8, 122, 152), (4, 123, 153),), ((22, 45, 73), (3, 46, 74),), ((8, 23, 53), (26, 24, 54),), ((12, 15, 45), (28, 16, 46),)),
    28: (((3, 117, 147), (10, 118, 148),), ((3, 45, 73), (23, 46, 74),), ((4, 24, 54), (31, 25, 55),), ((11, 15, 45), (31, 16, 46),)),
    29: (((7, 116, 146), (7, 117, 147),), ((21, 45, 73), (7, 46, 74),), ((1, 23, 53), (37, 24, 54),), ((19, 15, 45), (26, 16, 46),)),
    30: (((5, 115, 145), (10, 116, 146),), ((19, 47, 75), (10, 48, 76),), ((15, 24, 54), (25, 25, 55),), ((23, 15, 45), (25, 16, 46),)),
    31: (((13, 115, 145), (3, 116, 146),), ((2, 46, 74), (29, 47, 75),), ((42, 24, 54), (1, 25, 55),), ((23, 15, 45), (28, 16, 46),)),
    32: (((17, 115, 145),), ((10, 46, 74), (23, 47, 75),), ((10, 24, 54), (35, 25, 55),), ((19, 15, 45), (35, 16, 46),)),
    33: (((17, 115, 145), (1, 116, 146),), ((14, 46, 74), (21, 47, 75),), ((29, 24, 54), (19, 25, 55),), ((11, 15, 45), (46, 16, 46),)),
    34: (((13, 115, 145), (6, 116, 146),), ((14, 46, 74), (23, 47, 75),), ((44, 24, 54), (7, 25, 55),), ((59, 16, 46), (1, 17, 47),)),
    35: (((12, 121, 151), (7, 122, 152),), ((12, 47, 75), (26, 48, 76),), ((39, 24, 54), (14, 25, 55),), ((22, 15, 45), (41, 16, 46),)),
    36: (((6, 121, 151), (14, 122, 152),), ((6, 47, 75), (34, 48, 76),), ((46, 24, 54), (10, 25, 55),), ((2, 15, 45), (64, 16, 46),)),
    37: (((17, 122, 152), (4, 123, 153),), ((29, 46, 74), (14, 47, 75),), ((49, 24, 54), (10, 25, 55),), ((24, 15, 45), (46, 16, 46),)),
    38: (((4, 122, 152), (18, 123, 153),), ((13, 46, 74), (32, 47, 75),), ((48, 24, 54), (14, 25, 55),), ((42, 15, 45), (32, 16, 46),)),
    39: (((20, 117, 147), (4, 118, 148),), ((40, 47, 75), (7, 48, 76),), ((43, 24, 54), (22, 25, 55),), ((10, 15, 45), (67, 16, 46),)),
    40: (((19, 118, 148), (6, 119, 149),), ((18, 47, 75), (31, 48, 76),), ((34, 24, 54), (34, 25, 55),), ((20, 15, 45), (61, 16, 46),)),
}


def check_version(version: int) -> int:
    if not config.MIN_VERSION <= version <= config.MAX_VERSION:
        raise ValueError(f"version must be in [1, 40], got {version}")
    return version


def size(version: int) -> int:
    return 17 + 4 * version


@lru_cache(maxsize=None)
def block_structure(version: int, level: ErrorCorrectionLevel) -> Tuple[BlockGroup, ...]:
    rows = _BLOCK_TABLE[check_version(version)][ErrorCorrectionLevel(level)]
    return tuple(BlockGroup(*row) for row in rows)


def total_data_codewords(version: int, level: ErrorCorrectionLevel) -> int:
    return sum(g.num_blocks * g.data_codewords for g in block_structure(version, level))


def total_codewords(version: int) -> int:
    return sum(
        g.num_blocks * g.total_codewords
        for g in block_structure(version, ErrorCorrectionLevel.LOW)
    )


def ec_codewords_per_block(version: int, level: ErrorCorrectionLevel) -> int:
    # every group of a level shares the same EC length
    return block_structure(version, level)[0].ec_codewords


def alignment_positions(version: int) -> List[int]:
    """Centre coordinates shared by rows and columns of alignment patterns."""
    check_version(version)
    if version == 1:
        return []
    count = version // 7 + 2
    last = size(version) - 7
    if version == 32:
        step = 26
    else:
        step = (version * 4 + count * 2 + 1) // (count * 2 - 2) * 2
    positions = [last - i * step for i in range(count - 1)]
    positions.append(6)
    return sorted(positions)
