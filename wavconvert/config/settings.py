"""Scan configuration."""

from __future__ import annotations

from argparse import Namespace
from dataclasses import dataclass

TARGET_SAMPLE_RATE = 44100
TARGET_BIT_DEPTH = 16
# Enough to get past typical bext/LIST chunks that precede fmt.
DEFAULT_PROBE_SIZE = 1024
WAV_EXTENSION = "wav"


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Tunable constants for one inventory run."""

    target_sample_rate: int = TARGET_SAMPLE_RATE
    target_bit_depth: int = TARGET_BIT_DEPTH
    probe_size: int = DEFAULT_PROBE_SIZE
    extension: str = WAV_EXTENSION
    strict_walk: bool = True

    def __post_init__(self) -> None:
        if self.probe_size < 12:
            raise ValueError(f"probe_size must be at least 12 bytes, got {self.probe_size}")
        if not 0 <= self.target_sample_rate <= 0xFFFFFFFF:
            raise ValueError(f"target_sample_rate out of range: {self.target_sample_rate}")
        if not 0 <= self.target_bit_depth <= 0xFFFF:
            raise ValueError(f"target_bit_depth out of range: {self.target_bit_depth}")

    @property
    def target(self) -> tuple[int, int]:
        return (self.target_sample_rate, self.target_bit_depth)

    @classmethod
    def from_args(cls, args: Namespace) -> ScanConfig:
        """Build a config from parsed command line arguments."""
        return cls(
            target_sample_rate=args.sample_rate,
            target_bit_depth=args.bit_depth,
            probe_size=args.probe_size,
            strict_walk=not args.skip_unreadable,
        )
