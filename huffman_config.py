# filename: huffman_config.py

import logging
import os

LOG_FORMAT = "%(levelname)-8s %(filename)-16s:%(lineno)-4d>> %(message)s"


def _read_symbol_width():
    raw = os.environ.get("HUFFMAN_SYMBOL_WIDTH", "16")
    try:
        width = int(raw)
    except ValueError:
        raise ValueError(f"HUFFMAN_SYMBOL_WIDTH must be an integer, got {raw!r}") from None
    if width <= 0:
        raise ValueError(f"HUFFMAN_SYMBOL_WIDTH must be positive, got {width}")
    return width


# Bits charged per input symbol when computing the compression ratio
SYMBOL_WIDTH = _read_symbol_width()
LOG_LEVEL = os.environ.get("HUFFMAN_LOG_LEVEL", "WARNING").upper()


def configure_logging(level=None):
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler()],
    )
