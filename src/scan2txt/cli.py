# src/scan2txt/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import DEFAULT_DPI, DEFAULT_LANGUAGE, FALLBACK_LANGUAGE, ExtractOptions
from .exceptions import Scan2TxtError, UsageError
from .logger import setup_logging
from .pipeline import extract_text
from .postprocess import format_output

__all__ = ["main"]

logger = logging.getLogger("scan2txt")


class _ArgumentParser(argparse.ArgumentParser):
    """Report argument problems as UsageError so they map to exit code 1."""

    def error(self, message):
        raise UsageError(f"{message}\n{self.format_usage().strip()}")


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(
        prog="scan2txt",
        description="Extract text from a PDF (scanned or not) by rendering every page and running OCR on it.",
        epilog="Example: scan2txt document.pdf fr-FR 300",
    )
    p.add_argument("document", type=Path, help="PDF file to read")
    p.add_argument(
        "language", nargs="?", default=DEFAULT_LANGUAGE,
        help=f"OCR language tag, e.g. fr-FR, en-US (default: {DEFAULT_LANGUAGE})",
    )
    p.add_argument(
        "dpi", nargs="?", type=_positive_int, default=DEFAULT_DPI,
        help=f"Rendering resolution in dots per inch (default: {DEFAULT_DPI})",
    )

    p.add_argument(
        "--fallback-language", default=FALLBACK_LANGUAGE,
        help=f"Language used when the requested one is not installed (default: {FALLBACK_LANGUAGE})",
    )
    p.add_argument("--temp-dir", type=Path, help="Where the transient page workspace is created")
    p.add_argument(
        "--max-pixels", type=_positive_int,
        help="Refuse pages whose render target exceeds this many pixels (default: no limit)",
    )

    tess_group = p.add_argument_group("Tesseract")
    tess_group.add_argument("--tesseract-cmd", type=Path, help="Path to the tesseract binary")
    tess_group.add_argument("--tessdata-prefix", type=Path, help="Directory holding *.traineddata files")
    tess_group.add_argument("--psm", type=int, help="Tesseract page segmentation mode (default: 3)")

    log_group = p.add_argument_group("Logging")
    log_group.add_argument("--log-file", type=Path, help="Also write diagnostics to this file")
    mx = log_group.add_mutually_exclusive_group()
    mx.add_argument("-v", "--verbose", action="store_true", help="Show debug diagnostics")
    mx.add_argument("-q", "--quiet", action="store_true", help="Only show warnings and errors")

    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p


def _options_from_args(args: argparse.Namespace) -> ExtractOptions:
    backend_kwargs = {
        "tesseract_cmd": args.tesseract_cmd,
        "tessdata_prefix": args.tessdata_prefix,
        "psm": args.psm,
    }
    return ExtractOptions.from_dict({
        "language": args.language,
        "fallback_language": args.fallback_language,
        "dpi": args.dpi,
        "temp_dir": args.temp_dir,
        "max_pixels": args.max_pixels,
        "ocr_backend_kwargs": {k: v for k, v in backend_kwargs.items() if v is not None},
    })


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = _build_parser().parse_args(argv)
    except UsageError as e:
        setup_logging()
        logger.error("Error: %s", e)
        return 1

    level = logging.DEBUG if args.verbose else logging.WARNING if args.quiet else logging.INFO
    setup_logging(level, file_path=args.log_file)

    if not args.document.is_file():
        logger.error("Error: file does not exist: %s", args.document)
        return 1

    try:
        text = extract_text(args.document, _options_from_args(args))
    except Scan2TxtError as e:
        logger.error("Error: %s", e)
        logger.debug("Details", exc_info=True)
        return 1
    except Exception as e:
        logger.error("Error: %s", e, exc_info=True)
        return 1

    sys.stdout.write(format_output(text))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
