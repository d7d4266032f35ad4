"""Reed-Solomon error correction over GF(256) as used by QR codes.

The field is built from the primitive polynomial x^8 + x^4 + x^3 + x^2 + 1
(0x11D) with generator element 2. Error correction codewords are the
remainder of the message polynomial, shifted by the EC length, divided by
g(x) = (x - a^0)(x - a^1)...(x - a^(n-1)).
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence, Tuple

from .models import ErrorCorrectionLevel
from .version_table import block_structure, total_data_codewords

PRIMITIVE_POLY = 0x11D
GENERATOR = 2


class GF256:
    def __init__(self, prim_poly: int = PRIMITIVE_POLY, generator: int = GENERATOR) -> None:
        self.prim_poly = prim_poly
        self.exp = [0] * 512  # doubled so exp[log a + log b] needs no modulo
        self.log = [0] * 256
        x = 1
        for i in range(255):
            self.exp[i] = x
            self.exp[i + 255] = x
            self.log[x] = i
            x = self._multiply_slow(x, generator)

    def _multiply_slow(self, a: int, b: int) -> int:
        result = 0
        while b:
            if b & 1:
                result ^= a
            b >>= 1
            a <<= 1
            if a & 0x100:
                a ^= self.prim_poly
        return result

    def multiply(self, a: int, b: int) -> int:
        if a == 0 or b == 0:
            return 0
        return self.exp[self.log[a] + self.log[b]]

    def divide(self, a: int, b: int) -> int:
        if b == 0:
            raise ZeroDivisionError("division by zero in GF(256)")
        if a == 0:
            return 0
        return self.exp[(self.log[a] - self.log[b]) % 255]

    def power(self, a: int, n: int) -> int:
        if a == 0:
            return 0 if n > 0 else 1
        return self.exp[(self.log[a] * n) % 255]

    def inverse(self, a: int) -> int:
        if a == 0:
            raise ZeroDivisionError("0 has no inverse in GF(256)")
        return self.exp[255 - self.log[a]]


gf = GF256()


@lru_cache(maxsize=None)
def generator_polynomial(ec_length: int) -> Tuple[int, ...]:
    """Coefficients of g(x), highest degree first; the leading 1 is included."""
    poly = [1]
    for i in range(ec_length):
        # multiply by (x + a^i)
        root = gf.exp[i]
        nxt = poly + [0]
        for j, coeff in enumerate(poly):
            nxt[j + 1] ^= gf.multiply(coeff, root)
        poly = nxt
    return tuple(poly)


def generate_ecc(data: Sequence[int], ec_length: int) -> bytes:
    """Return exactly ``ec_length`` error correction bytes for ``data``."""
    if ec_length <= 0:
        return b""
    gen = generator_polynomial(ec_length)
    remainder = [0] * ec_length
    for byte in data:
        factor = byte ^ remainder[0]
        remainder = remainder[1:] + [0]
        if factor:
            for j in range(ec_length):
                remainder[j] ^= gf.multiply(gen[j + 1], factor)
    return bytes(remainder)


def split_blocks(data: bytes, version: int, level: ErrorCorrectionLevel) -> List[bytes]:
    blocks = []
    offset = 0
    for group in block_structure(version, level):
        for _ in range(group.num_blocks):
            blocks.append(data[offset : offset + group.data_codewords])
            offset += group.data_codewords
    return blocks


def interleave(blocks: Sequence[bytes]) -> bytes:
    """Column-wise merge; shorter blocks skip the columns they lack."""
    out = bytearray()
    longest = max((len(b) for b in blocks), default=0)
    for i in range(longest):
        for block in blocks:
            if i < len(block):
                out.append(block[i])
    return bytes(out)


def build_codeword_stream(data: bytes, version: int, level: ErrorCorrectionLevel) -> bytes:
    """Split data codewords into blocks, append ECC, interleave for placement."""
    expected = total_data_codewords(version, level)
    if len(data) != expected:
        raise ValueError(f"expected {expected} data codewords, got {len(data)}")
    data_blocks = split_blocks(data, version, level)
    ec_lengths = [
        group.ec_codewords
        for group in block_structure(version, level)
        for _ in range(group.num_blocks)
    ]
    ec_blocks = [generate_ecc(block, n) for block, n in zip(data_blocks, ec_lengths)]
    return interleave(data_blocks) + interleave(ec_blocks)
