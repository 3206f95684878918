#!/usr/bin/env python3
"""Print a 24-bit BMP as text.

Usage:
  bmp-text image.bmp        render to the console
  bmp-text image.bmp 1      append the render to the log file
  bmp-text image.bmp 2      append the header dump and the render to the log file
"""

import argparse
import logging
import sys

from bmp_errors import BMPError
from bmp_text import write_grid, write_info
from config import ViewerConfig

logger = logging.getLogger(__name__)


# Handler installed by setup_logging(), replaced on each call
_stderr_handler = None


def setup_logging(debug: bool) -> None:
    global _stderr_handler
    level = logging.DEBUG if debug else logging.WARNING
    root = logging.getLogger()
    if _stderr_handler is not None:
        root.removeHandler(_stderr_handler)
    _stderr_handler = logging.StreamHandler(sys.stderr)
    _stderr_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root.addHandler(_stderr_handler)
    root.setLevel(level)


def build_arg_parser():
    ap = argparse.ArgumentParser(prog="bmp-text", description="Render a 24-bit BMP as text.")
    ap.add_argument("path", help="BMP file to render")
    ap.add_argument("mode", nargs="?", default="0",
                    help="0: console (default), 1: append render to log, "
                         "2: append headers and render to log")
    ap.add_argument("--log-file", default=ViewerConfig.log_path)
    ap.add_argument("--extension", default=ViewerConfig.expected_extension,
                    help="required file extension (default: %(default)s)")
    ap.add_argument("--no-wait", action="store_true",
                    help="do not wait for Enter after console output")
    ap.add_argument("--debug", action="store_true")
    return ap


def show_console(config, path, out=None, stdin=None):
    out = out or sys.stdout
    stdin = stdin or sys.stdin
    with config.make_parser(path) as parser:
        write_grid(parser.render(), out)

    if config.wait_for_enter and stdin.isatty():
        print("Press Enter for continue...", file=out)
        stdin.readline()


def append_to_log(config, path, with_info=False):
    with config.make_parser(path) as parser:
        grid = parser.render()
        headers = parser.describe_headers()

    with open(config.log_path, "a", encoding="utf-8") as log_file:
        if with_info:
            write_info(headers, log_file, path)
        write_grid(grid, log_file)
    logger.debug("appended %s to %s", path, config.log_path)


def main(argv=None) -> int:
    args = build_arg_parser().parse_args(argv)
    config = ViewerConfig.from_args(args)
    setup_logging(config.debug)

    # Only the first character of the mode is looked at
    mode = args.mode[:1]
    try:
        if mode == "0":
            show_console(config, args.path)
        elif mode == "1":
            append_to_log(config, args.path)
        elif mode == "2":
            append_to_log(config, args.path, with_info=True)
        else:
            logger.debug("unknown mode %r, nothing to do", args.mode)
    except (BMPError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
