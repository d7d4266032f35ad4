import random

import pytest
import reedsolo

from qrcore import reed_solomon
from qrcore.models import ErrorCorrectionLevel
from qrcore.reed_solomon import gf


def test_field_tables():
    assert gf.exp[0] == 1
    assert gf.exp[8] == 0x1D
    assert gf.exp[255] == 1
    assert gf.multiply(2, 128) == 0x1D
    for a in range(1, 256):
        assert gf.multiply(a, gf.inverse(a)) == 1
        assert gf.divide(gf.multiply(a, 7), 7) == a


def test_divide_by_zero():
    with pytest.raises(ZeroDivisionError):
        gf.divide(3, 0)


def test_generator_polynomial_degree_two():
    # (x + 1)(x + 2) = x^2 + 3x + 2
    assert reed_solomon.generator_polynomial(2) == (1, 3, 2)


def test_published_vector_1m():
    data = bytes([0x10, 0x20, 0x0C, 0x56, 0x61, 0x80] + [0xEC, 0x11] * 5)
    ecc = reed_solomon.generate_ecc(data, 10)
    assert ecc == bytes([0xA5, 0x24, 0xD4, 0xC1, 0xED, 0x36, 0xC7, 0x87, 0x2C, 0x55])


def test_hello_world_1m():
    data = bytes([32, 91, 11, 120, 209, 114, 220, 77, 67, 64, 236, 17, 236, 17, 236, 17])
    ecc = reed_solomon.generate_ecc(data, 10)
    assert list(ecc) == [196, 35, 39, 119, 235, 215, 231, 226, 93, 23]


def test_zero_message_has_zero_ecc():
    assert reed_solomon.generate_ecc(bytes(20), 7) == bytes(7)


@pytest.mark.parametrize("ec_length", [7, 10, 18, 22, 30])
def test_matches_reedsolo(ec_length):
    rng = random.Random(ec_length)
    codec = reedsolo.RSCodec(ec_length, fcr=0, prim=0x11D, generator=2, c_exp=8)
    for _ in range(10):
        data = bytes(rng.randrange(256) for _ in range(rng.randrange(1, 120)))
        expected = bytes(codec.encode(bytearray(data))[-ec_length:])
        assert reed_solomon.generate_ecc(data, ec_length) == expected


def test_interleave_uneven_blocks():
    assert reed_solomon.interleave([b"\x01\x02", b"\x03\x04\x05"]) == b"\x01\x03\x02\x04\x05"


def test_codeword_stream_5q():
    level = ErrorCorrectionLevel.QUARTILE
    data = bytes(range(62))
    stream = reed_solomon.build_codeword_stream(data, 5, level)
    assert len(stream) == 134
    assert list(stream[:8]) == [0, 15, 30, 46, 1, 16, 31, 47]
    # the last data column only exists in the two longer blocks
    assert list(stream[56:62]) == [14, 29, 44, 60, 45, 61]
    blocks = reed_solomon.split_blocks(data, 5, level)
    assert [len(b) for b in blocks] == [15, 15, 16, 16]
    ecc = [reed_solomon.generate_ecc(b, 18) for b in blocks]
    assert list(stream[62:66]) == [e[0] for e in ecc]
    assert list(stream[-4:]) == [e[-1] for e in ecc]


def test_codeword_stream_rejects_wrong_length():
    with pytest.raises(ValueError):
        reed_solomon.build_codeword_stream(bytes(10), 1, ErrorCorrectionLevel.LOW)
