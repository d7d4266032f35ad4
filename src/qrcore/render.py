from __future__ import annotations

import numpy as np

from . import config
from .models import QRSymbol


def is_finder_module(x: int, y: int, size: int) -> bool:
    """True for cells of the three 7x7 finder patterns."""
    return (x < 7 and y < 7) or (x >= size - 7 and y < 7) or (x < 7 and y >= size - 7)


def to_array(
    symbol: QRSymbol,
    scale: int = config.DEFAULT_SCALE,
    border: int = config.DEFAULT_BORDER,
    fg: int = config.DEFAULT_COLOR_FG,
    bg: int = config.DEFAULT_COLOR_BG,
) -> np.ndarray:
    """Greyscale image with ``border`` light modules of quiet zone."""
    if scale <= 0:
        raise ValueError("scale must be > 0")
    if border < 0:
        raise ValueError("border must be >= 0")
    matrix = np.pad(symbol.matrix.astype(np.uint8), border, constant_values=0)
    arr = np.repeat(np.repeat(matrix, scale, axis=0), scale, axis=1)
    return np.where(arr > 0, fg, bg).astype(np.uint8)


def to_text(symbol: QRSymbol, border: int = config.DEFAULT_BORDER) -> str:
    """Two characters per module so the symbol stays roughly square."""
    matrix = np.pad(symbol.matrix, border, constant_values=False)
    return "\n".join("".join("██" if cell else "  " for cell in row) for row in matrix)
