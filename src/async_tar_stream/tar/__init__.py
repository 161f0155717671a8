"""Header codec and metadata adapters."""

from .codec import (
    ZERO_BLOCK_BYTES,
    HeaderCodec,
    TarfileHeaderCodec,
    padding_length,
    zero_padding,
)
from .metadata import header_from_stat, stat_to_header

__all__ = [
    "HeaderCodec",
    "TarfileHeaderCodec",
    "ZERO_BLOCK_BYTES",
    "header_from_stat",
    "padding_length",
    "stat_to_header",
    "zero_padding",
]
