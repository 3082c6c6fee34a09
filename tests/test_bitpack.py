from __future__ import annotations

import pytest

from statichuff.core.bitpack import BitPacker, pack_bits, payload_size, unpack_bits
from statichuff.core.code_table import CodeTable
from statichuff.errors import FormatError, UnmatchedCodeError

# a=0, b=10, c=11
ABC = CodeTable.from_pairs([(ord("a"), "0"), (ord("b"), "10"), (ord("c"), "11")])


def test_payload_size() -> None:
    assert payload_size(0) == 0
    assert payload_size(1) == 1
    assert payload_size(8) == 1
    assert payload_size(9) == 2


def test_packer_msb_first_zero_padded() -> None:
    p = BitPacker()
    for code in ("0", "10", "11", "0"):
        p.push(code)
    assert p.bit_length == 6
    assert p.finish() == b"\x58"  # 010110 + 00


def test_packer_crosses_byte_boundary() -> None:
    p = BitPacker()
    p.push("11111111")
    p.push("1")
    assert p.bit_length == 9
    assert p.finish() == b"\xff\x80"


def test_pack_bits_empty() -> None:
    assert pack_bits(b"", ABC) == (b"", 0)


def test_pack_bits_uses_forward_codes() -> None:
    payload, nbits = pack_bits(b"abca", ABC)
    assert (payload, nbits) == (b"\x58", 6)


def test_unpack_bits_basic() -> None:
    assert unpack_bits(b"\x58", 6, ABC) == b"abca"


def test_unpack_bits_ignores_pad_bits() -> None:
    # same six bits, pad bits set to 1
    assert unpack_bits(b"\x5b", 6, ABC) == b"abca"


def test_unpack_bits_zero_length() -> None:
    assert unpack_bits(b"", 0, ABC) == b""
    assert unpack_bits(b"", 0, CodeTable.from_pairs(())) == b""


def test_unpack_bits_truncated_payload() -> None:
    with pytest.raises(FormatError):
        unpack_bits(b"\x58", 9, ABC)


def test_unpack_bits_unmatched_tail() -> None:
    # 0|10|11|0|1 -> a trailing "1" never completes
    with pytest.raises(UnmatchedCodeError):
        unpack_bits(b"\x5a", 7, ABC)


def test_unpack_bits_runaway_accumulator() -> None:
    # incomplete code: "00" can never match
    table = CodeTable.from_pairs([(ord("a"), "1"), (ord("b"), "01")])
    with pytest.raises(FormatError) as ei:
        unpack_bits(b"\x00", 8, table)
    assert not isinstance(ei.value, UnmatchedCodeError)


def test_unpack_bits_empty_table_with_bits() -> None:
    with pytest.raises(FormatError):
        unpack_bits(b"\x00", 1, CodeTable.from_pairs(()))


def test_unpack_bits_negative_length() -> None:
    with pytest.raises(FormatError):
        unpack_bits(b"", -1, ABC)


def test_single_symbol_table() -> None:
    table = CodeTable.from_pairs([(ord("a"), "0")])
    payload, nbits = pack_bits(b"a" * 10, table)
    assert (payload, nbits) == (b"\x00\x00", 10)
    assert unpack_bits(payload, nbits, table) == b"a" * 10


def test_unpack_bits_with_directly_built_table() -> None:
    # constructor path, no from_pairs validation
    table = CodeTable(
        forward={ord("a"): "10", ord("b"): "11", ord("c"): "0"},
        inverse={"10": ord("a"), "11": ord("b"), "0": ord("c")},
    )
    assert table.max_code_length == 2
    assert unpack_bits(b"\x80", 2, table) == b"a"
    assert unpack_bits(b"\xd8", 5, table) == b"bca"
