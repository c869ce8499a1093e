"""RIFF/WAVE chunk walking and fmt chunk extraction.

The scanner works on a bounded prefix of a file. Declared chunk sizes come
straight from the file and are only ever used as skip distances; every field
read is checked against the number of bytes actually available, so a corrupt
or hostile size can move the cursor past the end of the buffer but can never
cause a read outside it.

Layout of the canonical PCM ``fmt `` payload::

    +0  format tag       u16
    +2  channels         u16
    +4  sample rate      u32
    +8  byte rate        u32
    +12 block align      u16
    +14 bits per sample  u16
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterator

from wavconvert.errors import (
    FormatChunkNotFoundError,
    NotAContainerError,
    TruncatedFormatChunkError,
)

RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "

RIFF_HEADER_SIZE = 12
CHUNK_HEADER_SIZE = 8
SAMPLE_RATE_OFFSET = 4
BIT_DEPTH_OFFSET = 14

_U32 = struct.Struct("<I")
_U16 = struct.Struct("<H")


@dataclass(frozen=True, slots=True)
class ChunkHeader:
    """A chunk header as seen by the scanner."""

    id: bytes
    offset: int
    size: int

    @property
    def name(self) -> str:
        return self.id.decode("ascii", errors="replace")

    @property
    def payload_offset(self) -> int:
        return self.offset + CHUNK_HEADER_SIZE


@dataclass(frozen=True, slots=True)
class FormatInfo:
    """Sample rate and bit depth read from a fmt chunk."""

    sample_rate: int
    bit_depth: int
    offset: int


def _available(data: bytes, bytes_available: int | None) -> int:
    if bytes_available is None:
        return len(data)
    return max(0, min(bytes_available, len(data)))


def _check_container(data: bytes, available: int) -> None:
    if available < RIFF_HEADER_SIZE:
        raise NotAContainerError(details={"available": available})
    if data[0:4] != RIFF_ID or data[8:12] != WAVE_ID:
        raise NotAContainerError(
            details={"riff": bytes(data[0:4]), "form": bytes(data[8:12])}
        )


def iter_chunks(data: bytes, bytes_available: int | None = None) -> Iterator[ChunkHeader]:
    """Yield each chunk header in *data* in file order.

    Raises NotAContainerError if *data* does not start with a RIFF/WAVE
    header. Iteration stops at the first chunk header that does not fit
    entirely within the available bytes.
    """
    available = _available(data, bytes_available)
    _check_container(data, available)

    pos = RIFF_HEADER_SIZE
    while pos + CHUNK_HEADER_SIZE <= available:
        chunk_id = bytes(data[pos:pos + 4])
        (size,) = _U32.unpack_from(data, pos + 4)
        yield ChunkHeader(id=chunk_id, offset=pos, size=size)
        pos += CHUNK_HEADER_SIZE + size


def scan_header(data: bytes, bytes_available: int | None = None) -> FormatInfo:
    """Locate the fmt chunk in *data* and return its sample rate and bit depth.

    Args:
        data: Bytes from the start of a file.
        bytes_available: How many bytes of *data* are valid. Defaults to
            ``len(data)`` and is clamped to it.

    Raises:
        NotAContainerError: fewer than 12 bytes, or not RIFF/WAVE.
        TruncatedFormatChunkError: fmt found, but its fields run past the
            available bytes.
        FormatChunkNotFoundError: no fmt chunk within the available bytes.
    """
    available = _available(data, bytes_available)
    for chunk in iter_chunks(data, available):
        if chunk.id != FMT_ID:
            continue
        rate_at = chunk.payload_offset + SAMPLE_RATE_OFFSET
        depth_at = chunk.payload_offset + BIT_DEPTH_OFFSET
        if depth_at + _U16.size > available:
            raise TruncatedFormatChunkError(
                details={"offset": chunk.offset, "available": available}
            )
        (sample_rate,) = _U32.unpack_from(data, rate_at)
        (bit_depth,) = _U16.unpack_from(data, depth_at)
        return FormatInfo(sample_rate=sample_rate, bit_depth=bit_depth, offset=chunk.offset)

    raise FormatChunkNotFoundError(details={"available": available})
