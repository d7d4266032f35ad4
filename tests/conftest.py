import cv2
import numpy as np
import pytest

from qrcore.render import to_array


def decode_symbol(symbol, scale=8):
    """Decode a symbol with OpenCV's detector; returns the text or ''."""
    image = to_array(symbol, scale=scale, border=4)
    text, _points, _straight = cv2.QRCodeDetector().detectAndDecode(image)
    return text


def read_format_copies(modules):
    """Both 15-bit format information copies read back from a [y, x] grid."""
    size = modules.shape[0]
    first = [(8, i) for i in range(6)] + [(8, 7), (8, 8), (7, 8)]
    first += [(14 - i, 8) for i in range(9, 15)]
    second = [(size - 1 - i, 8) for i in range(8)]
    second += [(8, size - 15 + i) for i in range(8, 15)]
    values = []
    for positions in (first, second):
        value = 0
        for i, (x, y) in enumerate(positions):
            value |= int(modules[y, x]) << i
        values.append(value)
    return values


FINDER = np.array(
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


@pytest.fixture
def finder():
    return FINDER
