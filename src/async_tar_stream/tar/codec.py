"""Header codec adapter over the standard library tarfile module."""

import tarfile
from dataclasses import replace
from typing import Optional, Protocol, Union

from ..core.types import (
    BLOCK_SIZE,
    ZERO_BLOCK,
    FormatLevel,
    Header,
    LinkIndicator,
    StreamConfig,
    ZeroBlock,
)
from ..exceptions import InvalidHeaderError, ValidationError

# One all-zero block; two of them terminate an archive
ZERO_BLOCK_BYTES = bytes(BLOCK_SIZE)

# V7 headers have no prefix field, so names must fit the name field alone
LEGACY_NAME_LENGTH = 100

_CHKSUM_FIELD = slice(148, 156)
_MAGIC_FIELD = slice(257, 265)


class HeaderCodec(Protocol):
    """Capability needed by the traversal code to read and write headers."""

    def decode(
        self, block: bytes, level: Optional[FormatLevel] = None
    ) -> Union[Header, ZeroBlock]: ...

    def encode(self, header: Header, level: FormatLevel = FormatLevel.LEGACY) -> bytes: ...

    def zero_padding(self, header: Header) -> bytes: ...

    def padding_length(self, size: int) -> int: ...


def padding_length(size: int) -> int:
    """Number of zero bytes that follow a body of ``size`` bytes.

    Args:
        size: Body size in bytes

    Returns:
        Padding length in ``[0, BLOCK_SIZE)``

    Raises:
        ValueError: If size is negative
    """
    if size < 0:
        raise ValueError(f"Body size must be non-negative: {size}")
    return (BLOCK_SIZE - size % BLOCK_SIZE) % BLOCK_SIZE


def zero_padding(header: Header) -> bytes:
    """Zero bytes that follow the body of ``header``."""
    return bytes(padding_length(header.size))


class TarfileHeaderCodec:
    """Encode and decode single header blocks with ``tarfile.TarInfo``.

    Legacy headers are written as ustar blocks with the magic field cleared,
    which is how V7 writers lay them out. Decoding accepts both variants.
    """

    def __init__(self, encoding: str = "utf-8", errors: str = "surrogateescape") -> None:
        self.encoding = encoding
        self.errors = errors

    @classmethod
    def from_config(cls, config: StreamConfig) -> "TarfileHeaderCodec":
        return cls(encoding=config.encoding, errors=config.errors)

    def decode(
        self, block: bytes, level: Optional[FormatLevel] = None
    ) -> Union[Header, ZeroBlock]:
        """Decode one header block.

        Args:
            block: Exactly one block of bytes
            level: Optional hint; LEGACY blanks the ustar-only fields

        Returns:
            Decoded header, or ZERO_BLOCK for an all-zero block

        Raises:
            InvalidHeaderError: If a non-zero block is not a valid header
        """
        if len(block) != BLOCK_SIZE:
            raise InvalidHeaderError(
                f"Header block must be {BLOCK_SIZE} bytes, got {len(block)}"
            )

        try:
            info = tarfile.TarInfo.frombuf(bytes(block), self.encoding, self.errors)
        except tarfile.EOFHeaderError:
            return ZERO_BLOCK
        except (tarfile.HeaderError, UnicodeDecodeError) as e:
            raise InvalidHeaderError(f"Invalid tar header: {e}") from e

        if info.size < 0:
            raise InvalidHeaderError(f"Negative body size in header for {info.name}")

        header = Header(
            path=info.name,
            mode=info.mode,
            uid=info.uid,
            gid=info.gid,
            size=info.size,
            mtime=int(info.mtime),
            link_indicator=LinkIndicator.from_flag(info.type),
            link_name=info.linkname,
            uname=info.uname,
            gname=info.gname,
            devmajor=info.devmajor,
            devminor=info.devminor,
        )
        if level is FormatLevel.LEGACY:
            header = replace(header, uname="", gname="", devmajor=0, devminor=0)
        return header

    def encode(self, header: Header, level: FormatLevel = FormatLevel.LEGACY) -> bytes:
        """Encode a header into exactly one block.

        Raises:
            ValidationError: If a field does not fit the chosen format
        """
        info = tarfile.TarInfo(header.path)
        info.mode = header.mode
        info.uid = header.uid
        info.gid = header.gid
        info.size = header.size
        info.mtime = header.mtime
        info.type = header.link_indicator.value
        info.linkname = header.link_name

        if level is FormatLevel.EXTENDED:
            info.uname = header.uname
            info.gname = header.gname
            info.devmajor = header.devmajor
            info.devminor = header.devminor
        else:
            name = info.get_info()["name"]
            if len(name.encode(self.encoding, self.errors)) > LEGACY_NAME_LENGTH:
                raise ValidationError(
                    f"Name too long for legacy header ({LEGACY_NAME_LENGTH} bytes max): "
                    f"{header.path}"
                )

        try:
            block = info.tobuf(tarfile.USTAR_FORMAT, self.encoding, self.errors)
        except ValueError as e:
            raise ValidationError(f"Cannot encode header for {header.path}: {e}") from e

        if level is FormatLevel.LEGACY:
            block = _clear_magic(block)
        return block

    def zero_padding(self, header: Header) -> bytes:
        return zero_padding(header)

    def padding_length(self, size: int) -> int:
        return padding_length(size)


def _clear_magic(block: bytes) -> bytes:
    """Blank the ustar magic and recompute the checksum."""
    buf = bytearray(block)
    buf[_MAGIC_FIELD] = bytes(_MAGIC_FIELD.stop - _MAGIC_FIELD.start)
    chksum = tarfile.calc_chksums(bytes(buf))[0]
    buf[_CHKSUM_FIELD] = b"%06o\0 " % chksum
    return bytes(buf)
