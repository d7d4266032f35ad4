from __future__ import annotations

import enum
import logging
from typing import Callable, Optional, Union

from . import config, version_table
from .bitpacker import char_count_bits, detect_mode, pack, payload_length, supports, terminate_and_pad
from .errors import CapacityExceededError, EmptyInputError, UnsupportedModeError
from .logo import escalate_level, optimize_logo_placement
from .masking import apply_mask, select_best
from .matrix import SymbolMatrix
from .models import EncodingMode, ErrorCorrectionLevel, QRSymbol, Rect
from .placement import place
from .reed_solomon import build_codeword_stream

logger = logging.getLogger(__name__)

LevelLike = Union[ErrorCorrectionLevel, str, int]


class Stage(enum.IntEnum):
    CREATED = 0
    MODE_SELECTED = 1
    VERSION_SELECTED = 2
    PACKED = 3
    ERROR_CORRECTED = 4
    MATRIX_ASSEMBLED = 5
    MASKED = 6


def capacity(version: int, mode: EncodingMode, level: ErrorCorrectionLevel) -> int:
    """Largest character (byte, for byte mode) count that fits."""
    count_bits = char_count_bits(mode, version)
    available = (
        version_table.total_data_codewords(version, level) * 8
        - config.MODE_INDICATOR_BITS
        - count_bits
    )
    if mode == EncodingMode.NUMERIC:
        rest = available % 10
        chars = 3 * (available // 10) + (2 if rest >= 7 else 1 if rest >= 4 else 0)
    elif mode == EncodingMode.ALPHANUMERIC:
        chars = 2 * (available // 11) + (1 if available % 11 >= 6 else 0)
    else:
        chars = available // 8
    return max(0, min(chars, (1 << count_bits) - 1))


def fits(text: str, mode: EncodingMode, version: int, level: ErrorCorrectionLevel) -> bool:
    return payload_length(text, mode) <= capacity(version, mode, level)


def choose_version(
    text: str,
    mode: EncodingMode,
    level: ErrorCorrectionLevel,
    minimum: int = config.MIN_VERSION,
) -> int:
    """Smallest version from ``minimum`` up whose capacity holds ``text``."""
    for version in range(minimum, config.MAX_VERSION + 1):
        if fits(text, mode, version, level):
            return version
    raise CapacityExceededError(
        payload_length(text, mode), mode, level, capacity(config.MAX_VERSION, mode, level)
    )


class Encoder:
    """Runs the encoding pipeline once, stage by stage.

    ``placement`` maps a symbol size to the rectangle that must stay free of
    data (for a logo); it is re-evaluated whenever the version grows.
    """

    def __init__(
        self,
        text: str,
        level: LevelLike = config.DEFAULT_LEVEL,
        mode: Optional[EncodingMode] = None,
        version: Optional[int] = None,
        mask: Optional[int] = None,
        placement: Optional[Callable[[int], Rect]] = None,
    ) -> None:
        self.text = text
        self.level = ErrorCorrectionLevel.parse(level)
        self.mode = mode
        self.version = version
        self.mask = mask
        self.placement = placement
        self.region: Optional[Rect] = None
        self.stage = Stage.CREATED
        self.data_codewords = b""
        self.codewords = b""
        self.matrix: Optional[SymbolMatrix] = None

    def _advance(self, stage: Stage) -> None:
        if stage != self.stage + 1:
            raise RuntimeError(f"cannot move from {self.stage.name} to {stage.name}")
        self.stage = stage

    def select_mode(self) -> None:
        if not self.text:
            raise EmptyInputError()
        if self.mode is None:
            self.mode = detect_mode(self.text)
        elif not supports(self.mode, self.text):
            raise UnsupportedModeError(f"text cannot be encoded in {self.mode.name.lower()} mode")
        logger.debug("mode %s for %d characters", self.mode.name, len(self.text))
        self._advance(Stage.MODE_SELECTED)

    def select_version(self) -> None:
        assert self.mode is not None
        if self.mask is not None and not 0 <= self.mask < config.MASK_COUNT:
            raise ValueError(f"mask pattern must be in [0, 7], got {self.mask}")
        if self.version is None:
            self.version = choose_version(self.text, self.mode, self.level)
        else:
            version_table.check_version(self.version)
            if not fits(self.text, self.mode, self.version, self.level):
                raise CapacityExceededError(
                    payload_length(self.text, self.mode),
                    self.mode,
                    self.level,
                    capacity(self.version, self.mode, self.level),
                )
        if self.placement is not None:
            self._settle_region()
        logger.debug("version %d level %s", self.version, self.level.letter)
        self._advance(Stage.VERSION_SELECTED)

    def _settle_region(self) -> None:
        # escalating the level can grow the version, which changes the region
        assert self.placement is not None and self.version is not None and self.mode is not None
        while True:
            size = version_table.size(self.version)
            region = self.placement(size)
            if region.x < 0 or region.y < 0 or region.x + region.width > size or region.y + region.height > size:
                raise ValueError(f"reserved region {region} lies outside a {size}x{size} symbol")
            level = escalate_level(self.level, region, size)
            if level == self.level:
                self.region = region
                return
            logger.debug("reserved region raises level %s -> %s", self.level.letter, level.letter)
            self.level = level
            self.version = choose_version(self.text, self.mode, level, minimum=self.version)

    def pack_data(self) -> None:
        assert self.mode is not None and self.version is not None
        bits = pack(self.text, self.mode, self.version)
        self.data_codewords = terminate_and_pad(bits, self.version, self.level).to_bytes()
        self._advance(Stage.PACKED)

    def correct(self) -> None:
        assert self.version is not None
        self.codewords = build_codeword_stream(self.data_codewords, self.version, self.level)
        self._advance(Stage.ERROR_CORRECTED)

    def assemble(self) -> None:
        assert self.version is not None
        matrix = SymbolMatrix(self.version)
        matrix.add_function_patterns()
        if self.region is not None:
            matrix.reserve_region(self.region.x, self.region.y, self.region.width, self.region.height)
        placed = place(matrix, self.codewords)
        if placed < len(self.codewords) * 8:
            logger.debug("reserved region dropped %d codeword bits", len(self.codewords) * 8 - placed)
        self.matrix = matrix
        self._advance(Stage.MATRIX_ASSEMBLED)

    def mask_symbol(self) -> None:
        assert self.matrix is not None
        if self.mask is None:
            self.matrix, self.mask = select_best(self.matrix, self.level)
        else:
            self.matrix = apply_mask(self.matrix, self.mask)
            self.matrix.add_format_info(self.level, self.mask)
        logger.debug("mask %d", self.mask)
        self._advance(Stage.MASKED)

    def run(self) -> QRSymbol:
        if self.stage != Stage.CREATED:
            raise RuntimeError("encoder has already run")
        self.select_mode()
        self.select_version()
        self.pack_data()
        self.correct()
        self.assemble()
        self.mask_symbol()
        return self.symbol()

    def symbol(self) -> QRSymbol:
        if self.stage != Stage.MASKED:
            raise RuntimeError("encoding has not finished")
        assert self.matrix is not None and self.mode is not None
        assert self.version is not None and self.mask is not None
        grid = self.matrix.modules.copy()
        grid.flags.writeable = False
        return QRSymbol(
            version=self.version,
            level=self.level,
            mode=self.mode,
            mask=self.mask,
            size=self.matrix.size,
            matrix=grid,
        )


def encode(
    text: str,
    level: LevelLike = config.DEFAULT_LEVEL,
    *,
    mode: Optional[EncodingMode] = None,
    version: Optional[int] = None,
    mask: Optional[int] = None,
) -> QRSymbol:
    """Encode ``text`` into a QR symbol.

    Mode, version and mask are chosen automatically unless given. Raises
    ``EmptyInputError``, ``UnsupportedModeError`` or ``CapacityExceededError``.
    """
    return Encoder(text, level, mode=mode, version=version, mask=mask).run()


def encode_with_reserved_region(
    text: str,
    level: LevelLike,
    region: Rect,
    *,
    mode: Optional[EncodingMode] = None,
    mask: Optional[int] = None,
) -> QRSymbol:
    """Encode while keeping ``region`` light and free of data.

    The error correction level is raised (never lowered) according to the
    share of modules the region hides, before the data is packed.
    """
    return Encoder(text, level, mode=mode, mask=mask, placement=lambda size: region).run()


def encode_with_logo(
    text: str,
    level: LevelLike,
    logo_percent: int,
    *,
    mode: Optional[EncodingMode] = None,
    mask: Optional[int] = None,
) -> QRSymbol:
    if not 0 < logo_percent < 100:
        raise ValueError(f"logo_percent must be in (0, 100), got {logo_percent}")
    return Encoder(
        text,
        level,
        mode=mode,
        mask=mask,
        placement=lambda size: optimize_logo_placement(size, logo_percent),
    ).run()


def logo_region(symbol: QRSymbol, logo_percent: int) -> Rect:
    """Where ``encode_with_logo`` left room for the logo in ``symbol``."""
    return optimize_logo_placement(symbol.size, logo_percent)
