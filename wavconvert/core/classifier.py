"""Classify candidate files by their WAVE format header."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from wavconvert.config.settings import DEFAULT_PROBE_SIZE
from wavconvert.core.riff import scan_header
from wavconvert.errors import ErrorCode, ScanFailure, classify_exception

logger = logging.getLogger(__name__)


class ScanReason(Enum):
    """Why a record could not be resolved."""

    NOT_A_CONTAINER = "not a RIFF/WAVE file"
    TRUNCATED_FORMAT_CHUNK = "truncated fmt chunk"
    FORMAT_CHUNK_NOT_FOUND = "no fmt chunk found"
    UNREADABLE = "unreadable"


_REASON_BY_CODE: dict[ErrorCode, ScanReason] = {
    ErrorCode.NOT_A_CONTAINER: ScanReason.NOT_A_CONTAINER,
    ErrorCode.TRUNCATED_FORMAT_CHUNK: ScanReason.TRUNCATED_FORMAT_CHUNK,
    ErrorCode.FORMAT_CHUNK_NOT_FOUND: ScanReason.FORMAT_CHUNK_NOT_FOUND,
}


@dataclass(frozen=True, slots=True)
class HeaderRecord:
    """Format of one candidate file. ``0, 0`` means it could not be determined."""

    path: Path
    sample_rate: int = 0
    bit_depth: int = 0
    reason: ScanReason | None = None

    @classmethod
    def sentinel(cls, path: Path, reason: ScanReason) -> HeaderRecord:
        return cls(path=path, sample_rate=0, bit_depth=0, reason=reason)

    @property
    def is_sentinel(self) -> bool:
        return self.sample_rate == 0 and self.bit_depth == 0

    def conforms_to(self, sample_rate: int, bit_depth: int) -> bool:
        return self.sample_rate == sample_rate and self.bit_depth == bit_depth


def is_non_conforming(record: HeaderRecord, target_rate: int, target_depth: int) -> bool:
    """Return True if *record* should appear in the inventory."""
    return not record.conforms_to(target_rate, target_depth)


def classify(path: str | Path, probe_size: int = DEFAULT_PROBE_SIZE) -> HeaderRecord:
    """Read the head of *path* and return its HeaderRecord.

    Never raises for per-file problems: open/read errors and parse failures
    all become sentinel records, with a warning logged.
    """
    path = Path(path)
    try:
        with open(path, "rb") as fh:
            data = fh.read(probe_size)
    except OSError as exc:
        err = classify_exception(exc, path)
        logger.warning("Cannot read %s: %s (%s)", path, err.message, err.code.name)
        return HeaderRecord.sentinel(path, ScanReason.UNREADABLE)

    try:
        info = scan_header(data, len(data))
    except ScanFailure as exc:
        reason = _REASON_BY_CODE[exc.code]
        logger.warning("%s: %s", reason.value.capitalize(), path)
        logger.debug("Scan failure details for %s: %s", path, exc.to_dict())
        return HeaderRecord.sentinel(path, reason)

    return HeaderRecord(path=path, sample_rate=info.sample_rate, bit_depth=info.bit_depth)
