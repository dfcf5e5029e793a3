# filename: huffman_errors.py


class HuffmanError(Exception):
    """Base class for all coder errors."""


class InvalidInputError(HuffmanError, ValueError):
    """Raised when construction, compress or decompress input is rejected."""


class NotYetCompressedError(HuffmanError, RuntimeError):
    """Raised when the compression ratio is requested before any compress call."""
