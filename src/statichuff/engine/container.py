from __future__ import annotations

from dataclasses import dataclass

from statichuff.core.bitpack import pack_bits, payload_size, unpack_bits
from statichuff.core.code_table import CodeTable, build_code_table
from statichuff.core.freq import build_freq_table
from statichuff.core.table_codec import pack_code_table, unpack_code_table
from statichuff.core.tree import build_huffman_tree
from statichuff.errors import FormatError, UsageError

BIT_LENGTH_SIZE = 4
BIT_LENGTH_ORDER = "little"
MAX_BIT_LENGTH = 0xFFFFFFFF


# -------------------
# Container
# [TABLE (see core.table_codec) | BIT_LEN(u32 LE) | PAYLOAD(ceil(BIT_LEN/8))]
# -------------------
@dataclass(frozen=True)
class Container:
    table: CodeTable
    bit_length: int
    payload: bytes
    # entry order inside the header; None -> table order
    order: tuple[int, ...] | None = None


@dataclass(frozen=True)
class ContainerInfo:
    """Header summary, the way `statichuff show` prints it."""

    table_size: int
    entries: tuple[tuple[str, int], ...]  # (code, symbol) in header order
    bit_length: int
    payload_size: int
    container_size: int


def pack_container(c: Container) -> bytes:
    if not 0 <= c.bit_length <= MAX_BIT_LENGTH:
        raise UsageError(
            f"encoded stream too long for the container: {c.bit_length} bits (max {MAX_BIT_LENGTH})"
        )
    if len(c.payload) != payload_size(c.bit_length):
        raise ValueError("payload size does not match bit_length")

    out = bytearray()
    out += pack_code_table(c.table, c.order)
    out += c.bit_length.to_bytes(BIT_LENGTH_SIZE, BIT_LENGTH_ORDER)
    out += c.payload
    return bytes(out)


def unpack_container(blob: bytes) -> Container:
    table, idx = unpack_code_table(blob, 0)

    if idx + BIT_LENGTH_SIZE > len(blob):
        raise FormatError("container truncated (bit length)")
    bit_length = int.from_bytes(blob[idx:idx + BIT_LENGTH_SIZE], BIT_LENGTH_ORDER)
    idx += BIT_LENGTH_SIZE

    needed = payload_size(bit_length)
    available = len(blob) - idx
    if available < needed:
        raise FormatError(
            f"container truncated (payload): {bit_length} bits need {needed} bytes, got {available}"
        )
    if available > needed:
        raise FormatError(f"container has {available - needed} trailing bytes after the payload")
    if bit_length > 0 and len(table) == 0:
        raise FormatError("non-empty payload with an empty code table")

    payload = bytes(blob[idx:idx + needed])
    return Container(table=table, bit_length=bit_length, payload=payload, order=tuple(table.forward))


def inspect_container(blob: bytes) -> ContainerInfo:
    c = unpack_container(blob)
    return ContainerInfo(
        table_size=len(c.table),
        entries=tuple((code, sym) for sym, code in c.table.forward.items()),
        bit_length=c.bit_length,
        payload_size=len(c.payload),
        container_size=len(blob),
    )


# -------------------
# Compressor / Decompressor
# -------------------
class Compressor:
    """bytes -> container bytes. Never fails on valid input short of overflowing BIT_LEN."""

    def encode(self, data: bytes) -> Container:
        freq = build_freq_table(data)
        table = build_code_table(build_huffman_tree(freq))

        bit_length = table.encoded_bit_length(freq)
        if bit_length > MAX_BIT_LENGTH:
            raise UsageError(
                f"input too large: {bit_length} encoded bits do not fit the u32 bit-length field"
            )

        payload, packed_bits = pack_bits(data, table)
        assert packed_bits == bit_length
        return Container(table=table, bit_length=bit_length, payload=payload, order=tuple(freq.symbols()))

    def compress(self, data: bytes) -> bytes:
        return pack_container(self.encode(bytes(data)))


class Decompressor:
    """container bytes -> original bytes."""

    def decode(self, c: Container) -> bytes:
        return unpack_bits(c.payload, c.bit_length, c.table)

    def decompress(self, blob: bytes) -> bytes:
        return self.decode(unpack_container(bytes(blob)))


def compress(data: bytes) -> bytes:
    return Compressor().compress(data)


def decompress(blob: bytes) -> bytes:
    return Decompressor().decompress(blob)
