from __future__ import annotations

import pytest

from statichuff.core.code_table import CodeTable, build_code_table
from statichuff.core.freq import build_freq_table
from statichuff.core.table_codec import pack_code_table, unpack_code_table
from statichuff.core.tree import build_huffman_tree
from statichuff.errors import FormatError

# bit-length field of an empty payload
_ZERO_BITS = b"\x00\x00\x00\x00"


def _table_for(data: bytes) -> tuple[CodeTable, list[int]]:
    freq = build_freq_table(data)
    return build_code_table(build_huffman_tree(freq)), freq.symbols()


def test_pack_layout_aab() -> None:
    table, order = _table_for(b"aab")
    blob = pack_code_table(table, order)
    assert blob.hex() == "02" + "610131" + "620130"


def test_pack_then_unpack_keeps_header_order() -> None:
    table, order = _table_for(b"mississippi")
    blob = pack_code_table(table, order)

    got, idx = unpack_code_table(blob + b"\x01\x00\x00\x00")
    assert idx == len(blob)
    assert list(got.forward) == order
    assert dict(got.forward) == dict(table.forward)
    assert pack_code_table(got) == blob


def test_pack_rejects_bad_order() -> None:
    table, order = _table_for(b"abc")
    with pytest.raises(ValueError):
        pack_code_table(table, order[:-1])
    with pytest.raises(ValueError):
        pack_code_table(table, [*order[:-1], 0xEE])


def test_empty_table_is_count_zero() -> None:
    empty = CodeTable.from_pairs(())
    assert pack_code_table(empty) == b"\x00"

    got, idx = unpack_code_table(b"\x00" + _ZERO_BITS)
    assert len(got) == 0
    assert idx == 1


def test_full_alphabet_uses_zero_sentinel() -> None:
    table, order = _table_for(bytes(range(256)))
    blob = pack_code_table(table, order)
    assert blob[0] == 0
    assert len(blob) == 1 + 256 * (2 + 8)

    got, idx = unpack_code_table(blob + b"\x00\x08\x00\x00")
    assert idx == len(blob)
    assert len(got) == 256
    assert dict(got.forward) == dict(table.forward)


def test_missing_count_byte() -> None:
    with pytest.raises(FormatError):
        unpack_code_table(b"")


@pytest.mark.parametrize("cut", [1, 2, 3, 5, 6])
def test_truncated_mid_entry(cut: int) -> None:
    table, order = _table_for(b"aab")
    blob = pack_code_table(table, order)
    with pytest.raises(FormatError):
        unpack_code_table(blob[:cut])


def test_zero_code_length_rejected() -> None:
    with pytest.raises(FormatError):
        unpack_code_table(b"\x01\x61\x00" + _ZERO_BITS)


def test_non_binary_code_byte_rejected() -> None:
    with pytest.raises(FormatError):
        unpack_code_table(b"\x01\x61\x01\x32" + _ZERO_BITS)


def test_duplicate_symbol_rejected() -> None:
    with pytest.raises(FormatError):
        unpack_code_table(b"\x02" + b"\x61\x010" + b"\x61\x011" + _ZERO_BITS)


def test_duplicate_code_rejected() -> None:
    with pytest.raises(FormatError):
        unpack_code_table(b"\x02" + b"\x61\x010" + b"\x62\x010" + _ZERO_BITS)


def test_prefix_violation_rejected() -> None:
    with pytest.raises(FormatError):
        unpack_code_table(b"\x02" + b"\x61\x010" + b"\x62\x0201" + _ZERO_BITS)
