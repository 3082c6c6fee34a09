"""Verification helpers.

We implement:
  - container verify: validate framing + code table (light), or decode the
    whole payload too (full)
  - round-trip verify: compress, decompress and compare with the input

Policy: light by default, --full decodes the payload.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from statichuff.engine.container import (
    Compressor,
    ContainerInfo,
    Decompressor,
    inspect_container,
    unpack_container,
)
from statichuff.errors import RoundTripMismatch


@dataclass(frozen=True)
class VerifyReport:
    input_size: int
    container_size: int
    output_size: int
    sha256: str

    @property
    def ratio(self) -> float:
        return self.container_size / self.input_size if self.input_size else 0.0


def verify_container_bytes(blob: bytes, *, full: bool = False) -> ContainerInfo:
    """Raise FormatError/UnmatchedCodeError if ``blob`` is not a valid container."""
    info = inspect_container(blob)
    if full:
        Decompressor().decode(unpack_container(blob))
    return info


def verify_container_file(path: Path, *, full: bool = False) -> ContainerInfo:
    return verify_container_bytes(path.read_bytes(), full=full)


def verify_roundtrip(data: bytes) -> VerifyReport:
    """Compress + decompress ``data`` in memory and require identical bytes."""
    blob = Compressor().compress(data)
    back = Decompressor().decompress(blob)
    if back != data:
        raise RoundTripMismatch(
            f"decompressed output does not match input ({len(back)} vs {len(data)} bytes)"
        )
    return VerifyReport(
        input_size=len(data),
        container_size=len(blob),
        output_size=len(back),
        sha256=hashlib.sha256(back).hexdigest(),
    )
