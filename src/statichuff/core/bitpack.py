from __future__ import annotations

from statichuff.core.code_table import CodeTable
from statichuff.errors import FormatError, UnmatchedCodeError


def payload_size(bit_length: int) -> int:
    """Bytes needed to hold ``bit_length`` bits (ceil(bit_length / 8))."""
    return (bit_length + 7) // 8


class BitPacker:
    """Accumulates '0'/'1' code strings into MSB-first bytes."""

    def __init__(self) -> None:
        self._out = bytearray()
        self._current = 0
        self._nbits = 0
        self.bit_length = 0

    def push(self, code: str) -> None:
        for ch in code:
            self._current = (self._current << 1) | (ch == "1")
            self._nbits += 1
            if self._nbits == 8:
                self._out.append(self._current)
                self._current = 0
                self._nbits = 0
        self.bit_length += len(code)

    def finish(self) -> bytes:
        """Flush the last partial byte (zero-padded) and return the payload."""
        if self._nbits > 0:
            self._out.append(self._current << (8 - self._nbits))
            self._current = 0
            self._nbits = 0
        return bytes(self._out)


def pack_bits(data: bytes, table: CodeTable) -> tuple[bytes, int]:
    """
    data -> (payload, bit_length)

    bit_length counts only the meaningful bits; the pad bits of the last
    byte are zero. Empty data gives (b"", 0).
    """
    packer = BitPacker()
    forward = table.forward
    for b in data:
        packer.push(forward[b])
    return packer.finish(), packer.bit_length


def unpack_bits(payload: bytes, bit_length: int, table: CodeTable) -> bytes:
    """
    Decode ``bit_length`` bits of ``payload`` against the inverse code map.

    Bits are appended one at a time to an accumulator; whenever it equals a
    stored code the symbol is emitted and the accumulator cleared. Pad bits
    past ``bit_length`` are never read.
    """
    if bit_length < 0:
        raise FormatError(f"negative bit length: {bit_length}")
    if bit_length == 0:
        return b""
    if len(table) == 0:
        raise FormatError(f"payload declares {bit_length} bits but the code table is empty")

    needed = payload_size(bit_length)
    if len(payload) < needed:
        raise FormatError(
            f"payload truncated: {bit_length} bits need {needed} bytes, got {len(payload)}"
        )

    inverse = table.inverse
    max_len = table.max_code_length
    out = bytearray()
    current = ""
    bits_read = 0

    for byte in payload[:needed]:
        for shift in range(7, -1, -1):
            if bits_read == bit_length:
                break
            current += "1" if (byte >> shift) & 1 else "0"
            bits_read += 1
            sym = inverse.get(current)
            if sym is not None:
                out.append(sym)
                current = ""
            elif len(current) >= max_len:
                raise FormatError(
                    f"no code matches {current!r} at bit {bits_read - len(current)}"
                )

    if current:
        raise UnmatchedCodeError(
            f"payload ended inside a code: {len(current)} pending bits {current!r}"
        )
    return bytes(out)
