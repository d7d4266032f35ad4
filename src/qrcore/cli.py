from __future__ import annotations

import argparse
import logging
import sys

import cv2

from . import config
from .encoder import encode, encode_with_logo
from .errors import QRCodeError
from .models import ErrorCorrectionLevel
from .render import to_array, to_text


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qrcore", description="Encode text as a QR code")
    parser.add_argument("text", help="Text to encode; '-' reads stdin")
    parser.add_argument("-o", "--output", help="Write a PNG image to this path")
    parser.add_argument("--level", default=config.DEFAULT_LEVEL, choices=list("LMQH"))
    parser.add_argument("--version", type=int, default=None, help="Force a symbol version (1-40)")
    parser.add_argument("--mask", type=int, default=None, help="Force a mask pattern (0-7)")
    parser.add_argument("--scale", type=int, default=config.DEFAULT_SCALE)
    parser.add_argument("--border", type=int, default=config.DEFAULT_BORDER)
    parser.add_argument(
        "--logo-percent",
        type=int,
        default=0,
        help="Leave a centred gap this wide (percent of the symbol) for a logo",
    )
    parser.add_argument("--print", dest="print_symbol", action="store_true", help="Print to terminal")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.scale <= 0:
        parser.error("scale must be > 0")
    if args.border < 0:
        parser.error("border must be >= 0")
    if args.logo_percent and args.version is not None:
        parser.error("--version cannot be combined with --logo-percent")

    text = sys.stdin.read().rstrip("\n") if args.text == "-" else args.text
    level = ErrorCorrectionLevel.parse(args.level)
    try:
        if args.logo_percent:
            symbol = encode_with_logo(text, level, args.logo_percent, mask=args.mask)
        else:
            symbol = encode(text, level, version=args.version, mask=args.mask)
    except (QRCodeError, ValueError) as exc:
        parser.exit(1, f"[qrcore] error: {exc}\n")

    print(
        f"[qrcore] version={symbol.version} size={symbol.size} level={symbol.level.letter} "
        f"mode={symbol.mode.name.lower()} mask={symbol.mask}"
    )
    if args.print_symbol or not args.output:
        print(to_text(symbol, border=args.border))
    if args.output:
        image = to_array(symbol, scale=args.scale, border=args.border)
        if not cv2.imwrite(args.output, image):
            parser.exit(1, f"[qrcore] error: could not write {args.output}\n")
        print(f"[qrcore] wrote {args.output}")


if __name__ == "__main__":
    main()
