# filename: huffman_heap.py

import heapq
from itertools import count


class MinHeap:
    """Priority queue of (weight, node) pairs ordered by weight.

    Entries with equal weight come out in the order they were inserted, so a
    given insertion sequence always yields the same extraction sequence.
    """

    def __init__(self):
        self._entries = []
        self._sequence = count()

    def insert(self, weight, node):
        # The sequence number keeps nodes themselves out of the comparison
        heapq.heappush(self._entries, (weight, next(self._sequence), node))

    def extract_min(self):
        if not self._entries:
            raise IndexError("extract_min from an empty queue")
        weight, _, node = heapq.heappop(self._entries)
        return weight, node

    def size(self):
        return len(self._entries)
