from __future__ import annotations

from collections.abc import Iterable

from statichuff.core.code_table import CodeTable
from statichuff.errors import FormatError

# -------------------
# Code table header
# [COUNT(u8) | repeat COUNT: SYMBOL(u8) | LEN(u8) | LEN x ASCII '0'/'1']
#
# COUNT=0 is overloaded: an empty table is always the last thing before the
# u32 bit-length field of an empty payload, so "0 followed by exactly 4 bytes"
# means empty and any other continuation means 256 entries.
# -------------------
FULL_ALPHABET = 256
EMPTY_TABLE_TAIL = 4

_BIT_CHARS = {ord("0"), ord("1")}


def pack_code_table(table: CodeTable, order: Iterable[int] | None = None) -> bytes:
    """Serialize ``table``; entries follow ``order`` (default: table order)."""
    symbols = list(table.forward) if order is None else list(order)
    if len(symbols) != len(table) or set(symbols) != set(table.forward):
        raise ValueError("order must list every symbol of the code table exactly once")

    n = len(symbols)
    if n > FULL_ALPHABET:
        raise ValueError(f"code table too large: {n} entries")

    out = bytearray()
    out.append(n & 0xFF)  # 256 -> 0
    for sym in symbols:
        code = table.forward[sym]
        out.append(sym)
        out.append(len(code))
        out += code.encode("ascii")
    return bytes(out)


def unpack_code_table(blob: bytes, idx: int = 0) -> tuple[CodeTable, int]:
    """Read a code table starting at ``idx``. Returns (table, next_idx)."""
    if idx >= len(blob):
        raise FormatError("container truncated (table count)")

    count = blob[idx]
    idx += 1
    if count == 0:
        if len(blob) - idx == EMPTY_TABLE_TAIL:
            return CodeTable.from_pairs(()), idx
        count = FULL_ALPHABET

    pairs: list[tuple[int, str]] = []
    for i in range(count):
        if idx + 2 > len(blob):
            raise FormatError(f"container truncated (table entry {i} of {count})")
        sym = blob[idx]
        code_len = blob[idx + 1]
        idx += 2
        if code_len == 0:
            raise FormatError(f"zero-length code for symbol {sym}")
        if idx + code_len > len(blob):
            raise FormatError(f"container truncated (code of symbol {sym})")
        raw = blob[idx:idx + code_len]
        idx += code_len
        if any(c not in _BIT_CHARS for c in raw):
            raise FormatError(f"code for symbol {sym} contains non-binary bytes")
        pairs.append((sym, raw.decode("ascii")))

    return CodeTable.from_pairs(pairs), idx
