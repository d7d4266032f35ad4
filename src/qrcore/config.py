"""Default configuration values."""

DEFAULT_LEVEL = "M"  # error correction level used when none is given
MIN_VERSION = 1
MAX_VERSION = 40
MASK_COUNT = 8
PAD_BYTES = (0xEC, 0x11)  # alternating pad codewords
TERMINATOR_BITS = 4
MODE_INDICATOR_BITS = 4
ALPHANUMERIC_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./:"
BYTE_ENCODING = "utf-8"
DEFAULT_BORDER = 4  # quiet zone, in modules
DEFAULT_SCALE = 10  # pixels per module when rendering
DEFAULT_COLOR_FG = 0  # black
DEFAULT_COLOR_BG = 255  # white
LOGO_SAFETY_MARGIN = 1.5  # multiplier on the obscured fraction
LOGO_MAX_CORRECTION = 0.30
LOGO_MAX_OFFSET = 3  # modules a logo may shift to avoid critical areas
