"""Command line bootstrap: scan, print the report, then show the list."""

from __future__ import annotations

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

from wavconvert.config.settings import (
    DEFAULT_PROBE_SIZE,
    TARGET_BIT_DEPTH,
    TARGET_SAMPLE_RATE,
    ScanConfig,
)
from wavconvert.core.inventory import build_inventory, write_report
from wavconvert.errors import WavConvertError, format_error_for_user

if TYPE_CHECKING:
    from wavconvert.core.classifier import HeaderRecord

logger = logging.getLogger("wavconvert")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wavconvert",
        description="List WAV files that are not 44.1kHz/16-bit.",
    )
    parser.add_argument("directory", help="Root directory to scan")
    parser.add_argument("--sample-rate", type=int, default=TARGET_SAMPLE_RATE,
                        help="Target sample rate in Hz (default: %(default)s)")
    parser.add_argument("--bit-depth", type=int, default=TARGET_BIT_DEPTH,
                        help="Target bits per sample (default: %(default)s)")
    parser.add_argument("--probe-size", type=int, default=DEFAULT_PROBE_SIZE,
                        help="Bytes read from the start of each file (default: %(default)s)")
    parser.add_argument("--skip-unreadable", action="store_true",
                        help="Skip unreadable subdirectories instead of aborting")
    parser.add_argument("--no-ui", action="store_true",
                        help="Print the report and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--log-file", type=Path, help="Also log to this rotating file")
    return parser


def configure_logging(verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    stderr_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=512_000,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
        logger.addHandler(file_handler)
    return logger


def run_ui(records: list[HeaderRecord], root: Path, config: ScanConfig) -> int:
    """Show the interactive list until the user quits."""
    from PySide6.QtWidgets import QApplication

    from wavconvert.ui.main_window import InventoryWindow

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("wavconvert")
    window = InventoryWindow(records, root, config)
    window.show()
    return app.exec()


def run_app(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, build the inventory and run the interactive list."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    try:
        config = ScanConfig.from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    root = Path(args.directory)
    logger.info("scan root=%s target=%s/%s probe=%d strict=%s", root,
                config.target_sample_rate, config.target_bit_depth,
                config.probe_size, config.strict_walk)
    try:
        inventory = build_inventory(root, config)
    except WavConvertError as exc:
        logger.error("%s", format_error_for_user(exc))
        logger.debug("fatal scan error: %s", exc.to_dict())
        return 1

    write_report(inventory, sys.stdout)
    sys.stdout.flush()

    if args.no_ui:
        return 0
    return run_ui(inventory, root, config)
