from __future__ import annotations

from typing import Optional

from . import config, version_table
from .models import ErrorCorrectionLevel, Rect

# minimum correction fraction that calls for each level, strongest first
_LEVEL_THRESHOLDS = (
    (0.25, ErrorCorrectionLevel.HIGH),
    (0.15, ErrorCorrectionLevel.QUARTILE),
    (0.07, ErrorCorrectionLevel.MEDIUM),
)


def calculate_logo_placement(size: int, percent: int) -> Rect:
    """Centred square covering ``percent`` of the symbol width, odd-sized."""
    width = size * percent // 100
    if width % 2 == 0:
        width += 1
    width = min(width, size)
    offset = (size - width) // 2
    return Rect(offset, offset, width, width)


def is_critical_area(x: int, y: int, size: int) -> bool:
    """Cells owned by function patterns that a logo must not cover."""
    if (x < 9 and y < 9) or (x >= size - 8 and y < 9) or (x < 9 and y >= size - 8):
        return True
    if x == 6 or y == 6:
        return True
    if x == 8 and y == size - 8:
        return True
    if (x == 8 and (y < 9 or y >= size - 8)) or (y == 8 and (x < 9 or x >= size - 8)):
        return True
    version = (size - 17) // 4
    if version >= 7 and ((x >= size - 11 and y < 6) or (y >= size - 11 and x < 6)):
        return True
    centres = version_table.alignment_positions(version)
    corners = {(0, 0), (0, len(centres) - 1), (len(centres) - 1, 0)}
    return any(
        abs(x - cx) <= 2 and abs(y - cy) <= 2
        for i, cy in enumerate(centres)
        for j, cx in enumerate(centres)
        if (i, j) not in corners
    )


def count_critical_overlap(rect: Rect, size: int) -> int:
    return sum(
        1
        for y in range(rect.y, rect.y + rect.height)
        for x in range(rect.x, rect.x + rect.width)
        if is_critical_area(x, y, size)
    )


def optimize_logo_placement(size: int, percent: int) -> Rect:
    """Shift the centred placement a few modules to avoid critical cells."""
    centre = calculate_logo_placement(size, percent)
    best = centre
    best_overlap = count_critical_overlap(best, size)
    reach = config.LOGO_MAX_OFFSET
    for dx in range(-reach, reach + 1):
        for dy in range(-reach, reach + 1):
            rect = Rect(centre.x + dx, centre.y + dy, centre.width, centre.height)
            if rect.x < 0 or rect.y < 0 or rect.x + rect.width > size or rect.y + rect.height > size:
                continue
            overlap = count_critical_overlap(rect, size)
            if overlap < best_overlap:
                best, best_overlap = rect, overlap
    return best


def obscured_fraction(rect: Rect, size: int) -> float:
    return rect.area / float(size * size)


def required_level_for_region(rect: Rect, size: int) -> Optional[ErrorCorrectionLevel]:
    required = min(obscured_fraction(rect, size) * config.LOGO_SAFETY_MARGIN, config.LOGO_MAX_CORRECTION)
    for threshold, level in _LEVEL_THRESHOLDS:
        if required > threshold:
            return level
    return None


def escalate_level(level: ErrorCorrectionLevel, rect: Rect, size: int) -> ErrorCorrectionLevel:
    """Raise ``level`` far enough to survive losing ``rect``; never lower it."""
    required = required_level_for_region(rect, size)
    if required is None or required <= level:
        return level
    return required
