import numpy as np
import pytest
import segno

from conftest import decode_symbol, read_format_copies
from qrcore import (
    CapacityExceededError,
    EmptyInputError,
    EncodingMode,
    ErrorCorrectionLevel,
    UnsupportedModeError,
    encode,
)
from qrcore.encoder import Encoder, capacity, choose_version, fits
from qrcore.matrix import format_bits

L, M, Q, H = (
    ErrorCorrectionLevel.LOW,
    ErrorCorrectionLevel.MEDIUM,
    ErrorCorrectionLevel.QUARTILE,
    ErrorCorrectionLevel.HIGH,
)

TEXTS = ["123456789012345", "HELLO WORLD", "hello, world!"]


@pytest.mark.parametrize("level", list(ErrorCorrectionLevel))
def test_empty_input(level):
    with pytest.raises(EmptyInputError, match="data cannot be empty"):
        encode("", level)


def test_capacity_exceeded_at_low():
    with pytest.raises(CapacityExceededError) as info:
        encode("A" * 4297, "L")
    assert info.value.length == 4297
    assert info.value.capacity == 4296
    assert info.value.mode == EncodingMode.ALPHANUMERIC
    with pytest.raises(CapacityExceededError):
        encode("a" * 2954, "L")


@pytest.mark.parametrize(
    "version, mode, level, expected",
    [
        (1, EncodingMode.NUMERIC, L, 41),
        (1, EncodingMode.ALPHANUMERIC, L, 25),
        (1, EncodingMode.BYTE, L, 17),
        (1, EncodingMode.NUMERIC, H, 17),
        (1, EncodingMode.ALPHANUMERIC, H, 10),
        (1, EncodingMode.BYTE, H, 7),
        (40, EncodingMode.NUMERIC, L, 7089),
        (40, EncodingMode.ALPHANUMERIC, L, 4296),
        (40, EncodingMode.BYTE, L, 2953),
        (40, EncodingMode.BYTE, H, 1273),
    ],
)
def test_capacity(version, mode, level, expected):
    assert capacity(version, mode, level) == expected


@pytest.mark.parametrize("level", list(ErrorCorrectionLevel))
@pytest.mark.parametrize("text", ["1" * 100, "HELLO WORLD " * 20, "x" * 300])
def test_choose_version_is_minimal(text, level):
    symbol = encode(text, level)
    assert fits(text, symbol.mode, symbol.version, level)
    if symbol.version > 1:
        assert not fits(text, symbol.mode, symbol.version - 1, level)
    assert symbol.size == 17 + 4 * symbol.version


def test_hello_world_versions():
    assert encode("HELLO WORLD", "Q").version == 1
    assert choose_version("HELLO WORLD", EncodingMode.ALPHANUMERIC, H) == 2


@pytest.mark.parametrize(
    "text, mode",
    zip(TEXTS, [EncodingMode.NUMERIC, EncodingMode.ALPHANUMERIC, EncodingMode.BYTE]),
)
def test_mode_detection(text, mode):
    assert encode(text).mode == mode


def test_forced_mode_mismatch():
    with pytest.raises(UnsupportedModeError):
        encode("12a", mode=EncodingMode.NUMERIC)


def test_forced_byte_mode_for_digits():
    assert encode("12345", mode=EncodingMode.BYTE).mode == EncodingMode.BYTE


def test_forced_version_too_small():
    with pytest.raises(CapacityExceededError):
        encode("x" * 100, "H", version=1)


@pytest.mark.parametrize("version", [0, 41])
def test_forced_version_out_of_range(version):
    with pytest.raises(ValueError):
        encode("HELLO", version=version)


def test_forced_mask_out_of_range():
    with pytest.raises(ValueError):
        encode("HELLO", mask=8)


def test_level_parsing():
    assert encode("1", "h").level == H
    assert encode("1", 2).level == Q
    assert encode("1", "QUARTILE").level == Q
    with pytest.raises(ValueError):
        encode("1", "X")


def test_symbol_is_read_only():
    symbol = encode("HELLO WORLD")
    assert not symbol.matrix.flags.writeable
    with pytest.raises(ValueError):
        symbol.matrix[0, 0] = False
    assert symbol.module_at(0, 0) is True
    assert len(symbol.rows()) == symbol.size


@pytest.mark.parametrize("text", TEXTS + ["x" * 200])
def test_structure_of_encoded_symbol(text, finder):
    symbol = encode(text, "Q")
    grid = symbol.matrix
    size = symbol.size
    for x0, y0 in ((0, 0), (size - 7, 0), (0, size - 7)):
        assert np.array_equal(grid[y0 : y0 + 7, x0 : x0 + 7], finder)
    for i in range(8, size - 8):
        assert grid[6, i] == (i % 2 == 0)
        assert grid[i, 6] == (i % 2 == 0)
    assert grid[size - 8, 8]
    assert read_format_copies(grid) == [format_bits(symbol.level, symbol.mask)] * 2


def test_encoding_is_deterministic():
    first = encode("hello, world!", "M")
    second = encode("hello, world!", "M")
    assert first.mask == second.mask
    assert np.array_equal(first.matrix, second.matrix)


def test_forced_mask_is_used():
    for mask in range(8):
        assert encode("HELLO WORLD", mask=mask).mask == mask


def test_encoder_runs_once():
    encoder = Encoder("HELLO")
    encoder.run()
    with pytest.raises(RuntimeError):
        encoder.run()


def test_symbol_before_run():
    with pytest.raises(RuntimeError):
        Encoder("HELLO").symbol()


@pytest.mark.parametrize(
    "text, mode, version",
    [
        ("123456789012345", "numeric", 1),
        ("HELLO", "alphanumeric", 1),
        ("hello, world!", "byte", 2),
        ("HELLO WORLD", "alphanumeric", 2),
        ("https://example.com/qr", "byte", 5),
        ("31415926535897932384626433832795", "numeric", 7),
        ("THE QUICK BROWN FOX", "alphanumeric", 10),
        ("the quick brown fox jumps over the lazy dog", "byte", 27),
    ],
)
@pytest.mark.parametrize("level", list(ErrorCorrectionLevel))
def test_matches_segno(text, mode, version, level):
    mask = version % 8
    reference = segno.make(
        text,
        error=level.letter.lower(),
        version=version,
        mode=mode,
        mask=mask,
        boost_error=False,
    )
    expected = np.array([list(row) for row in reference.matrix], dtype=bool)
    symbol = encode(text, level, version=version, mask=mask)
    assert symbol.mode.name.lower() == mode
    assert np.array_equal(symbol.matrix, expected)


@pytest.mark.parametrize("level", list(ErrorCorrectionLevel))
@pytest.mark.parametrize("text", TEXTS)
def test_opencv_decodes(text, level):
    assert decode_symbol(encode(text, level)) == text


def test_opencv_decodes_version_with_version_info():
    text = "QR codes of version seven and up carry version information blocks. " * 2
    symbol = encode(text, "M")
    assert symbol.version >= 7
    assert decode_symbol(symbol) == text


def test_largest_byte_payload():
    symbol = encode("a" * 2953, "L")
    assert symbol.version == 40
    assert symbol.size == 177
