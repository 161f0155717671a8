"""Core data types for tar archive streaming."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, runtime_checkable

from ..exceptions import ValidationError

# Fixed tar wire-format unit; headers and padding are multiples of it
BLOCK_SIZE = 512

DEFAULT_BUFFER_SIZE = 32768


class FormatLevel(Enum):
    """Header format variant used when writing an archive."""

    LEGACY = "legacy"  # V7: no magic, owner names or device numbers
    EXTENDED = "extended"  # POSIX ustar


class LinkIndicator(Enum):
    """Entry kind stored in the header type flag."""

    NORMAL = b"0"
    HARD_LINK = b"1"
    SYMBOLIC_LINK = b"2"
    CHARACTER_DEVICE = b"3"
    BLOCK_DEVICE = b"4"
    DIRECTORY = b"5"
    FIFO = b"6"
    CONTIGUOUS = b"7"
    GLOBAL_EXTENDED_HEADER = b"g"
    PER_FILE_EXTENDED_HEADER = b"x"
    LONG_LINK = b"K"
    LONG_NAME = b"L"

    @classmethod
    def from_flag(cls, flag: bytes) -> "LinkIndicator":
        """Map a raw type flag to an indicator.

        A NUL flag (old regular files) and unknown flags map to NORMAL.
        """
        try:
            return cls(flag)
        except ValueError:
            return cls.NORMAL

    @property
    def is_regular(self) -> bool:
        return self in (LinkIndicator.NORMAL, LinkIndicator.CONTIGUOUS)


@dataclass(frozen=True)
class Header:
    """One tar entry descriptor."""

    path: str
    mode: int
    uid: int
    gid: int
    size: int
    mtime: int
    link_indicator: LinkIndicator = LinkIndicator.NORMAL
    link_name: str = ""
    uname: str = ""
    gname: str = ""
    devmajor: int = 0
    devminor: int = 0

    def __post_init__(self) -> None:
        if self.size < 0:
            raise ValidationError(f"Header size must be non-negative: {self.size}")


class ZeroBlock:
    """Marker for a block made entirely of zero bytes."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ZERO_BLOCK"


ZERO_BLOCK = ZeroBlock()


@dataclass
class StreamConfig:
    """Per-operation configuration.

    Args:
        level: Header format used for writing
        buffer_size: Bounded buffer used by bulk copy and skip
        encoding: Codec for path and owner name fields
        errors: Codec error handler for path and owner name fields
    """

    level: FormatLevel = FormatLevel.LEGACY
    buffer_size: int = DEFAULT_BUFFER_SIZE
    encoding: str = "utf-8"
    errors: str = "surrogateescape"

    def __post_init__(self) -> None:
        if not isinstance(self.level, FormatLevel):
            raise ValidationError(f"Unsupported format level: {self.level!r}")
        if self.buffer_size <= 0:
            raise ValidationError(
                f"Buffer size must be positive: {self.buffer_size}"
            )


@runtime_checkable
class AsyncReadable(Protocol):
    """Sequential byte source; reads may return fewer bytes than asked."""

    async def read(self, n: int = -1, /) -> bytes: ...


@runtime_checkable
class AsyncWritable(Protocol):
    """Sequential byte sink; writes may accept fewer bytes than given."""

    async def write(self, data: bytes, /) -> Optional[int]: ...
