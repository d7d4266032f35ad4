"""Data masking and mask selection.

Each of the eight mask patterns flips the non-reserved modules for which its
condition holds at column ``x`` and row ``y``. The selector tries all eight,
writes the matching format information, and keeps the candidate with the
lowest penalty score.
"""
from __future__ import annotations

import logging
from typing import Callable, List, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from . import config
from .matrix import SymbolMatrix
from .models import ErrorCorrectionLevel

logger = logging.getLogger(__name__)

MaskFunction = Callable[[np.ndarray, np.ndarray], np.ndarray]

MASK_PATTERNS: List[MaskFunction] = [
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (y // 2 + x // 3) % 2 == 0,
    lambda x, y: (x * y) % 2 + (x * y) % 3 == 0,
    lambda x, y: ((x * y) % 2 + (x * y) % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + (x * y) % 3) % 2 == 0,
]

_FINDER_LIKE = (
    np.array([0, 0, 0, 0, 1, 0, 1, 1, 1, 0, 1], dtype=bool),
    np.array([1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0], dtype=bool),
)


def mask_grid(size: int, pattern: int) -> np.ndarray:
    """Boolean grid, indexed [y, x], of the cells ``pattern`` would flip."""
    y, x = np.indices((size, size))
    return MASK_PATTERNS[pattern](x, y)


def apply_mask(matrix: SymbolMatrix, pattern: int) -> SymbolMatrix:
    if not 0 <= pattern < config.MASK_COUNT:
        raise ValueError(f"mask pattern must be in [0, 7], got {pattern}")
    masked = matrix.copy()
    flip = mask_grid(matrix.size, pattern) & ~matrix.reserved
    masked.modules ^= flip
    return masked


def _run_penalty(lines: np.ndarray) -> int:
    score = 0
    for line in lines.tolist():
        run = 1
        for prev, cur in zip(line, line[1:]):
            if cur == prev:
                run += 1
                continue
            if run >= 5:
                score += run - 2
            run = 1
        if run >= 5:
            score += run - 2
    return score


def _finder_like_penalty(modules: np.ndarray) -> int:
    if modules.shape[1] < 11:
        return 0
    windows = sliding_window_view(modules, 11, axis=1)
    count = sum(int((windows == pattern).all(axis=2).sum()) for pattern in _FINDER_LIKE)
    return count * 40


def penalty_breakdown(modules: np.ndarray) -> Tuple[int, int, int, int]:
    """Scores of the four penalty rules for a module grid."""
    rule1 = _run_penalty(modules) + _run_penalty(modules.T)
    block = modules[:-1, :-1]
    same = (block == modules[1:, :-1]) & (block == modules[:-1, 1:]) & (block == modules[1:, 1:])
    rule2 = 3 * int(same.sum())
    rule3 = _finder_like_penalty(modules)
    percent = int(modules.sum()) * 100 // modules.size
    rule4 = 10 * (abs(percent - 50) // 5)
    return rule1, rule2, rule3, rule4


def penalty(modules: np.ndarray) -> int:
    return sum(penalty_breakdown(modules))


def select_best(matrix: SymbolMatrix, level: ErrorCorrectionLevel) -> Tuple[SymbolMatrix, int]:
    """Try every mask and return the lowest-penalty result and its index.

    Ties go to the lower mask index.
    """
    best: SymbolMatrix | None = None
    best_mask = 0
    best_score = 0
    for pattern in range(config.MASK_COUNT):
        candidate = apply_mask(matrix, pattern)
        candidate.add_format_info(level, pattern)
        score = penalty(candidate.modules)
        logger.debug("mask %d penalty %d", pattern, score)
        if best is None or score < best_score:
            best, best_mask, best_score = candidate, pattern, score
    assert best is not None
    return best, best_mask
