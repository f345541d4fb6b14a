"""qrstr CLI: print QR codes as text, terminal art or HTML."""

import argparse
import sys
from pathlib import Path

from qrcode.exceptions import DataOverflowError

from qrstr.errors import QRStrError
from qrstr.logging import audit, get_logger, setup_logging

log = get_logger("cli")

MODES = {
    "dark": "TEXT_DARK",
    "light": "TEXT_LIGHT",
    "html": "HTML",
    "terminal": "TERMINAL",
}


def _write(text: str, output: str | None):
    if output is None:
        sys.stdout.write(text)
        return
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    print(f"Written: {path}")


def cmd_encode(args):
    """Encode data and print the rendering."""
    from qrstr.encoder import new_encoder
    from qrstr.grid import ECC_NAMES
    from qrstr.render import RenderMode

    encoder = new_encoder(RenderMode[MODES[args.mode]], ECC_NAMES[args.ecc])
    _write(encoder.encode(args.data, *args.header), args.output)


def cmd_show(args):
    """Render an existing QR bitmap."""
    from PIL import Image

    from qrstr.grid import PixelGrid
    from qrstr.render import RenderMode, palette_for, render

    mode = RenderMode[MODES[args.mode]]
    with Image.open(args.image) as img:
        grid = PixelGrid.from_image(img, module_size=args.module_size)
    audit("image.loaded", logger=log, path=args.image, size=f"{grid.width}x{grid.height}")
    _write(render(mode, palette_for(mode), grid, args.header), args.output)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="qrstr", description="Render QR codes as text, terminal art or HTML")

    parser.add_argument("-V", "--verbose", action="store_true", help="Enable DEBUG-level logging")
    parser.add_argument("--log-file", default=None, help="Write JSON logs to file")
    parser.add_argument("--json-logs", action="store_true", help="Log JSON to stderr as well")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- encode ---
    p_enc = subparsers.add_parser("encode", help="Encode data as a QR code")
    p_enc.add_argument("data", help="Text to encode")
    p_enc.add_argument("-m", "--mode", default="terminal", choices=list(MODES), help="Output format")
    p_enc.add_argument("-e", "--ecc", default="M", choices=["L", "M", "Q", "H"], help="Error correction level")
    p_enc.add_argument("-H", "--header", action="append", default=[], help="Header line (repeatable)")
    p_enc.add_argument("-o", "--output", default=None, help="Write to file instead of stdout")

    # --- show ---
    p_show = subparsers.add_parser("show", help="Render an existing QR code image")
    p_show.add_argument("image", help="Path to a black and white QR image")
    p_show.add_argument("-m", "--mode", default="terminal", choices=list(MODES), help="Output format")
    p_show.add_argument("--module-size", type=int, default=1, help="Pixels per module in the image")
    p_show.add_argument("-H", "--header", action="append", default=[], help="Header line (repeatable)")
    p_show.add_argument("-o", "--output", default=None, help="Write to file instead of stdout")

    return parser


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    # Logging goes to stderr so stdout stays clean for the rendering
    level = "DEBUG" if args.verbose else "WARNING"
    setup_logging(level=level, log_file=args.log_file, json_format=args.json_logs)
    audit("cli.start", logger=log, command=args.command, verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    commands = {
        "encode": cmd_encode,
        "show": cmd_show,
    }
    try:
        commands[args.command](args)
    except (QRStrError, DataOverflowError, ValueError, OSError) as e:
        log.debug("command failed", exc_info=True)
        print(f"qrstr: error: {e}", file=sys.stderr)
        sys.exit(2)
    audit("cli.done", logger=log, command=args.command)


if __name__ == "__main__":
    main()
