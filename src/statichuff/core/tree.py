from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass
from typing import Union

from statichuff.core.freq import FrequencyTable


# -------------------
# Huffman tree nodes
# -------------------
@dataclass(frozen=True, slots=True)
class HuffmanLeaf:
    symbol: int
    weight: int


@dataclass(frozen=True, slots=True)
class HuffmanInternal:
    left: "HuffmanNode"
    right: "HuffmanNode"
    weight: int


HuffmanNode = Union[HuffmanLeaf, HuffmanInternal]


def build_huffman_tree(freq: FrequencyTable) -> HuffmanNode | None:
    """
    Build the Huffman tree for ``freq``.

    Heap items are ``(weight, seq, node)``; ``seq`` grows on every push, so
    among equal weights the node inserted first is popped first. Leaves are
    inserted in the table's first-discovery order. The first node popped
    becomes the left child, the second the right child.

    Returns None for an empty table. A one-symbol table returns its lone
    leaf as the root.
    """
    heap: list[tuple[int, int, HuffmanNode]] = []
    counter = itertools.count()

    for sym, weight in freq:
        heapq.heappush(heap, (weight, next(counter), HuffmanLeaf(symbol=sym, weight=weight)))

    if not heap:
        return None

    while len(heap) > 1:
        w1, _, n1 = heapq.heappop(heap)
        w2, _, n2 = heapq.heappop(heap)
        parent = HuffmanInternal(left=n1, right=n2, weight=w1 + w2)
        heapq.heappush(heap, (parent.weight, next(counter), parent))

    return heap[0][2]


def weighted_path_length(root: HuffmanNode | None) -> int:
    """Sum of weight * depth over all leaves (a lone root leaf counts depth 1)."""
    if root is None:
        return 0
    if isinstance(root, HuffmanLeaf):
        return root.weight

    total = 0
    stack: list[tuple[HuffmanNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, HuffmanLeaf):
            total += node.weight * depth
        else:
            stack.append((node.right, depth + 1))
            stack.append((node.left, depth + 1))
    return total
