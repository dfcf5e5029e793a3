# filename: huffman_core.py

import logging
from collections import Counter
from collections.abc import Mapping

from huffman_errors import InvalidInputError
from huffman_heap import MinHeap

log = logging.getLogger(__name__)


class HuffmanNode:
    __slots__ = ("weight",)

    is_leaf = False

    def __init__(self, weight):
        self.weight = weight


class HuffmanLeaf(HuffmanNode):
    __slots__ = ("symbol",)

    is_leaf = True

    def __init__(self, symbol, weight):
        super().__init__(weight)
        self.symbol = symbol

    def __repr__(self):
        return f"HuffmanLeaf({self.symbol!r}, {self.weight})"


class HuffmanInternal(HuffmanNode):
    __slots__ = ("left", "right")

    def __init__(self, left, right):
        super().__init__(left.weight + right.weight)
        self.left = left
        self.right = right

    def __repr__(self):
        return f"HuffmanInternal({self.weight}, left={self.left!r}, right={self.right!r})"


def _ordered_symbols(frequencies):
    try:
        return sorted(frequencies)
    except TypeError:
        # Mixed symbol types have no natural order, fall back to the mapping's own
        return list(frequencies)


class HuffmanLogic:
    def count_frequencies(self, seed):
        if seed is None or not isinstance(seed, str) or len(seed) == 0:
            raise InvalidInputError(f"seed text must be a non-empty string, got {seed!r}")
        # Frequency analysis of the seed text
        freqs = dict(Counter(seed))
        if len(freqs) < 2:
            raise InvalidInputError(
                f"seed text needs at least two distinct symbols, got {len(freqs)}"
            )
        return freqs

    def validate_frequencies(self, frequencies):
        if frequencies is None or not isinstance(frequencies, Mapping):
            raise InvalidInputError(f"frequencies must be a mapping, got {frequencies!r}")
        if len(frequencies) < 2:
            raise InvalidInputError(
                f"frequency table needs at least two symbols, got {len(frequencies)}"
            )
        freqs = {}
        for symbol, weight in frequencies.items():
            # String symbols are single characters so text round-trips
            if isinstance(symbol, str) and len(symbol) != 1:
                raise InvalidInputError(f"string symbols must be one character, got {symbol!r}")
            if isinstance(weight, bool) or not isinstance(weight, int):
                raise InvalidInputError(
                    f"weight for {symbol!r} must be an integer, got {weight!r}"
                )
            if weight <= 0:
                raise InvalidInputError(f"weight for {symbol!r} must be positive, got {weight}")
            freqs[symbol] = weight
        return freqs

    def build_tree(self, frequencies):
        priority_queue = MinHeap()
        for symbol in _ordered_symbols(frequencies):
            weight = frequencies[symbol]
            priority_queue.insert(weight, HuffmanLeaf(symbol, weight))

        if priority_queue.size() < 2:
            raise InvalidInputError("cannot build a code for fewer than two symbols")

        # Iteratively merge the two lightest fragments
        while priority_queue.size() > 1:
            _, first = priority_queue.extract_min()
            _, second = priority_queue.extract_min()
            merged = HuffmanInternal(first, second)
            priority_queue.insert(merged.weight, merged)

        _, root = priority_queue.extract_min()
        log.debug("built tree over %d symbols, total weight %d", len(frequencies), root.weight)
        return root

    def generate_codes(self, root):
        if root.is_leaf:
            raise InvalidInputError("a single leaf cannot be assigned a code")
        codes = {}
        stack = [(root, "")]
        while stack:
            node, path = stack.pop()
            if node.is_leaf:
                codes[node.symbol] = path
                continue
            stack.append((node.right, path + "1"))
            stack.append((node.left, path + "0"))
        return codes

    def walk(self, root, bits):
        """Decode a string of '0'/'1' by walking the tree from ``root``.

        Each leaf reached emits its symbol and restarts the walk at the root.
        Raises InvalidInputError on a non-binary character, or when the bits
        run out partway down a path.
        """
        symbols = []
        node = root
        for position, bit in enumerate(bits):
            if bit == "1":
                node = node.right
            elif bit == "0":
                node = node.left
            else:
                raise InvalidInputError(f"invalid bit {bit!r} at position {position}")
            if node.is_leaf:
                symbols.append(node.symbol)
                node = root
        if node is not root:
            raise InvalidInputError(f"code is truncated: {len(bits)} bits end inside a symbol")
        return symbols
