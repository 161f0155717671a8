"""Forward-only cursor over the headers of a tar stream."""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional, TypeVar, Union

from ..tar.codec import HeaderCodec, TarfileHeaderCodec
from .transfer import really_read, skip
from .types import BLOCK_SIZE, AsyncReadable, FormatLevel, Header, StreamConfig, ZeroBlock

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CursorState(Enum):
    """Traversal state of an archive cursor."""

    SCANNING = "scanning"
    DONE = "done"


class ArchiveCursor:
    """Read headers from a channel one entry at a time.

    The cursor only consumes header blocks. After a header is returned the
    caller must consume ``header.size`` body bytes and then the padding
    before asking for the next header.
    """

    def __init__(
        self,
        channel: AsyncReadable,
        config: Optional[StreamConfig] = None,
        codec: Optional[HeaderCodec] = None,
        level: Optional[FormatLevel] = None,
    ) -> None:
        """Initialize cursor.

        Args:
            channel: Source channel positioned at a header boundary
            config: Stream configuration (defaults apply when omitted)
            codec: Header codec, built from config when omitted
            level: Optional decoding hint passed to the codec
        """
        self.channel = channel
        self.config = config or StreamConfig()
        self.codec = codec or TarfileHeaderCodec.from_config(self.config)
        self.level = level
        self.state = CursorState.SCANNING

    @property
    def done(self) -> bool:
        return self.state is CursorState.DONE

    async def _read_slot(self) -> Union[Header, ZeroBlock]:
        block = await really_read(self.channel, BLOCK_SIZE)
        return self.codec.decode(block, self.level)

    async def next_header(self) -> Optional[Header]:
        """Return the next header, or None once the archive has ended.

        A single zero block followed by a header is accepted; only two
        consecutive zero blocks end the archive.

        Raises:
            UnexpectedEndOfStream: If the channel ends inside a block
            InvalidHeaderError: If a non-zero block is not a header
        """
        if self.state is CursorState.DONE:
            return None

        first = await self._read_slot()
        if isinstance(first, Header):
            return first

        second = await self._read_slot()
        if isinstance(second, Header):
            logger.debug(f"Single zero block before {second.path}, continuing")
            return second

        self.state = CursorState.DONE
        return None

    async def skip_padding(self, header: Header) -> None:
        """Advance past the padding that follows the body of ``header``."""
        await skip(
            self.channel,
            self.codec.padding_length(header.size),
            self.config.buffer_size,
        )

    async def skip_body(self, header: Header) -> None:
        """Advance past the body of ``header`` without reading it out."""
        await skip(self.channel, header.size, self.config.buffer_size)


async def get_next_header(
    channel: AsyncReadable,
    level: Optional[FormatLevel] = None,
    config: Optional[StreamConfig] = None,
) -> Optional[Header]:
    """Read the next header from a channel positioned at a header boundary.

    Returns:
        The next header, or None if two consecutive zero blocks were read
    """
    return await ArchiveCursor(channel, config=config, level=level).next_header()


async def with_next_file(
    cursor: ArchiveCursor,
    func: Callable[[AsyncReadable, Header], Awaitable[T]],
) -> Optional[T]:
    """Read the next header and hand the channel to ``func``.

    ``func`` must leave the channel positioned right after the body; the
    padding is skipped afterwards.

    Returns:
        Result of ``func``, or None at end of archive
    """
    header = await cursor.next_header()
    if header is None:
        return None

    result = await func(cursor.channel, header)
    await cursor.skip_padding(header)
    return result
