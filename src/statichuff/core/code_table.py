from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from statichuff.core.freq import FrequencyTable
from statichuff.core.tree import HuffmanLeaf, HuffmanNode
from statichuff.errors import FormatError

# Code lengths travel in a single byte.
MAX_CODE_LENGTH = 0xFF


@dataclass(frozen=True)
class CodeTable:
    """Symbol <-> code mapping. Codes are strings of '0'/'1'.

    Both maps are copied into read-only views; max_code_length is derived.
    """

    forward: Mapping[int, str]
    inverse: Mapping[str, int]
    max_code_length: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "forward", MappingProxyType(dict(self.forward)))
        object.__setattr__(self, "inverse", MappingProxyType(dict(self.inverse)))
        object.__setattr__(self, "max_code_length", max(map(len, self.inverse), default=0))

    def __len__(self) -> int:
        return len(self.forward)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self.forward

    def code_for(self, symbol: int) -> str:
        return self.forward[symbol]

    def symbol_for(self, code: str) -> int | None:
        return self.inverse.get(code)

    def encoded_bit_length(self, freq: FrequencyTable) -> int:
        return sum(count * len(self.forward[sym]) for sym, count in freq)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, str]]) -> "CodeTable":
        """Build a table from (symbol, code) pairs, validating every invariant.

        Raises FormatError on empty/over-long codes, non-binary characters,
        duplicate symbols or codes, or a table that is not prefix-free.
        """
        forward: dict[int, str] = {}
        inverse: dict[str, int] = {}
        for sym, code in pairs:
            if not 0 <= sym <= 0xFF:
                raise FormatError(f"symbol out of range: {sym}")
            if not code:
                raise FormatError(f"empty code for symbol {sym}")
            if len(code) > MAX_CODE_LENGTH:
                raise FormatError(f"code too long for symbol {sym}: {len(code)} bits")
            if code.strip("01"):
                raise FormatError(f"code for symbol {sym} is not binary: {code!r}")
            if sym in forward:
                raise FormatError(f"duplicate symbol in code table: {sym}")
            if code in inverse:
                raise FormatError(f"duplicate code in code table: {code}")
            forward[sym] = code
            inverse[code] = sym

        if not is_prefix_free(inverse):
            raise FormatError("code table is not prefix-free")

        return cls(forward=forward, inverse=inverse)


def is_prefix_free(codes: Iterable[str]) -> bool:
    # after sorting, a prefix always sits right before one of its extensions
    ordered = sorted(codes)
    for a, b in zip(ordered, ordered[1:]):
        if b.startswith(a):
            return False
    return True


def build_code_table(root: HuffmanNode | None) -> CodeTable:
    """Walk the tree ('0' left, '1' right) and record each leaf's path.

    A lone root leaf gets the one-bit code "0".
    """
    forward: dict[int, str] = {}
    inverse: dict[str, int] = {}

    if root is None:
        return CodeTable(forward=forward, inverse=inverse)

    stack: list[tuple[HuffmanNode, str]] = [(root, "")]
    while stack:
        node, path = stack.pop()
        if isinstance(node, HuffmanLeaf):
            code = path or "0"
            forward[node.symbol] = code
            inverse[code] = node.symbol
            continue
        stack.append((node.right, path + "1"))
        stack.append((node.left, path + "0"))

    return CodeTable(forward=forward, inverse=inverse)
