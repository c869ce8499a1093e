"""Compose walk, classify and filter into the final inventory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator, TextIO

from wavconvert.config.settings import ScanConfig
from wavconvert.core.classifier import HeaderRecord, classify, is_non_conforming
from wavconvert.core.walker import TreeWalker

logger = logging.getLogger(__name__)


def iter_classified(
    root: str | Path, config: ScanConfig | None = None,
) -> Iterator[tuple[int, int, HeaderRecord]]:
    """Classify every candidate under *root*, yielding progress as it goes.

    Yields ``(position, total, record)`` with a 1-based position, for every
    candidate file whether or not it matches the target format.
    """
    config = config or ScanConfig()
    walker = TreeWalker(root, extension=config.extension, strict=config.strict_walk)
    paths = walker.walk()
    total = len(paths)
    logger.debug("Found %d candidate files under %s", total, root)

    for position, path in enumerate(paths, start=1):
        yield position, total, classify(path, config.probe_size)


def select_non_conforming(records: Iterable[HeaderRecord],
                          config: ScanConfig | None = None) -> list[HeaderRecord]:
    config = config or ScanConfig()
    return [
        record for record in records
        if is_non_conforming(record, config.target_sample_rate, config.target_bit_depth)
    ]


def build_inventory(root: str | Path, config: ScanConfig | None = None) -> list[HeaderRecord]:
    """Return the non-conforming records under *root*, in traversal order."""
    records = (record for _, _, record in iter_classified(root, config))
    inventory = select_non_conforming(records, config)
    logger.info("%d non-conforming files under %s", len(inventory), root)
    return inventory


def format_report_line(record: HeaderRecord) -> str:
    return f"{record.path}\t{record.sample_rate}\t{record.bit_depth}"


def write_report(inventory: Iterable[HeaderRecord], stream: TextIO) -> None:
    """Write one tab-separated line per record to *stream*."""
    for record in inventory:
        stream.write(format_report_line(record) + "\n")
