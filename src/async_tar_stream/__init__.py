"""Async tar stream - list, extract and create tar archives over byte channels."""

__version__ = "0.1.0"

from .archive import (
    create_archive_file,
    extract_archive,
    list_archive,
    under_directory,
)
from .core.channels import StreamWriterChannel
from .core.cursor import ArchiveCursor, CursorState, get_next_header, with_next_file
from .core.transfer import copy_n, really_read, really_write, skip
from .core.types import (
    BLOCK_SIZE,
    ZERO_BLOCK,
    FormatLevel,
    Header,
    LinkIndicator,
    StreamConfig,
    ZeroBlock,
)
from .exceptions import (
    DestinationError,
    InvalidHeaderError,
    TarReadError,
    TarStreamError,
    UnexpectedEndOfStream,
    ValidationError,
)
from .operations import (
    create_archive,
    extract_entries,
    list_entries,
    write_block,
    write_end,
)
from .tar import (
    HeaderCodec,
    TarfileHeaderCodec,
    padding_length,
    stat_to_header,
    zero_padding,
)
from .utils import describe_header

__all__ = [
    # Path operations
    "list_archive",
    "extract_archive",
    "create_archive_file",
    "under_directory",
    # Channel operations
    "list_entries",
    "extract_entries",
    "create_archive",
    "write_block",
    "write_end",
    # Traversal
    "ArchiveCursor",
    "CursorState",
    "get_next_header",
    "with_next_file",
    "StreamWriterChannel",
    # Transfer
    "really_read",
    "really_write",
    "copy_n",
    "skip",
    # Types
    "BLOCK_SIZE",
    "ZERO_BLOCK",
    "FormatLevel",
    "Header",
    "LinkIndicator",
    "StreamConfig",
    "ZeroBlock",
    # Adapters
    "HeaderCodec",
    "TarfileHeaderCodec",
    "padding_length",
    "zero_padding",
    "stat_to_header",
    "describe_header",
    # Exceptions
    "TarStreamError",
    "TarReadError",
    "UnexpectedEndOfStream",
    "InvalidHeaderError",
    "DestinationError",
    "ValidationError",
]
