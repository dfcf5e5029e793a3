# filename: huffman_service.py

import logging
from collections.abc import Mapping
from types import MappingProxyType

import huffman_config
from huffman_core import HuffmanLogic
from huffman_errors import InvalidInputError, NotYetCompressedError

log = logging.getLogger(__name__)


class HuffmanService:
    """Huffman coder built once from seed text or a frequency table.

    The tree and code table are fixed at construction. ``compress`` keeps
    running totals of input and output bits for ``compression_ratio``; those
    totals are the only state mutated after construction, so sharing one
    instance between threads needs external locking around ``compress``.
    """

    def __init__(self, source, symbol_width=None):
        self.logic = HuffmanLogic()

        if isinstance(source, str):
            freqs = self.logic.count_frequencies(source)
            self.symbol_count = len(source)
        elif isinstance(source, Mapping):
            freqs = self.logic.validate_frequencies(source)
            self.symbol_count = sum(freqs.values())
        else:
            raise InvalidInputError(
                f"expected seed text or a frequency mapping, got {source!r}"
            )

        if symbol_width is None:
            symbol_width = huffman_config.SYMBOL_WIDTH
        if isinstance(symbol_width, bool) or not isinstance(symbol_width, int) or symbol_width <= 0:
            raise InvalidInputError(f"symbol_width must be a positive integer, got {symbol_width!r}")
        self.symbol_width = symbol_width

        self._freqs = freqs
        self.root = self.logic.build_tree(freqs)
        self._codes = self.logic.generate_codes(self.root)

        self.compressed = False
        self.total_input_bits = 0
        self.total_output_bits = 0
        log.debug(
            "coder ready: %d symbols, longest code %d bits",
            len(self._codes), max(len(code) for code in self._codes.values()),
        )

    @classmethod
    def from_text(cls, seed, symbol_width=None):
        return cls(seed, symbol_width=symbol_width)

    @classmethod
    def from_frequencies(cls, frequencies, symbol_width=None):
        return cls(frequencies, symbol_width=symbol_width)

    @property
    def frequencies(self):
        return MappingProxyType(self._freqs)

    @property
    def code_table(self):
        return MappingProxyType(self._codes)

    @property
    def alphabet(self):
        return frozenset(self._codes)

    def compress(self, data):
        if data is None:
            raise InvalidInputError("cannot compress None")

        # Look every symbol up first so a rejected input leaves the totals alone
        try:
            parts = [self._codes[symbol] for symbol in data]
        except KeyError as exc:
            raise InvalidInputError(f"symbol {exc.args[0]!r} is not in the alphabet") from None
        except TypeError:
            raise InvalidInputError(f"cannot compress {data!r}") from None

        encoded = "".join(parts)
        self.total_input_bits += len(parts) * self.symbol_width
        self.total_output_bits += len(encoded)
        self.compressed = True
        log.debug("compressed %d symbols into %d bits", len(parts), len(encoded))
        return encoded

    def decode_symbols(self, code):
        if code is None:
            raise InvalidInputError("cannot decompress None")
        if not isinstance(code, str):
            raise InvalidInputError(f"code must be a string of '0' and '1', got {code!r}")
        if len(code) == 0:
            return []
        symbols = self.logic.walk(self.root, code)
        log.debug("decompressed %d bits into %d symbols", len(code), len(symbols))
        return symbols

    def decompress(self, code):
        symbols = self.decode_symbols(code)
        for symbol in symbols:
            if not isinstance(symbol, str):
                raise InvalidInputError(
                    f"decompress needs str symbols, got {type(symbol).__name__} {symbol!r}; use decode_symbols"
                )
        return "".join(symbols)

    def compression_ratio(self):
        if not self.compressed:
            raise NotYetCompressedError("compress has not been called yet")
        if self.total_input_bits == 0:
            return float("nan")
        return self.total_output_bits / self.total_input_bits

    def expected_encoding_length(self):
        length = 0.0
        for symbol, weight in self._freqs.items():
            length += weight / self.symbol_count * len(self._codes[symbol])
        return length
