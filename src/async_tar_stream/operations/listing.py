"""List the entries of a tar stream."""

import logging
from typing import Optional

from ..core.cursor import ArchiveCursor
from ..core.types import AsyncReadable, FormatLevel, Header, StreamConfig
from ..tar.codec import HeaderCodec
from ..utils.inspect import describe_header

logger = logging.getLogger(__name__)


async def list_entries(
    config: StreamConfig,
    channel: AsyncReadable,
    level: Optional[FormatLevel] = None,
    codec: Optional[HeaderCodec] = None,
) -> list[Header]:
    """Collect every header of an archive without reading bodies out.

    Args:
        config: Stream configuration
        channel: Source channel positioned at the start of the archive
        level: Optional decoding hint
        codec: Header codec override

    Returns:
        Headers in archive order

    Raises:
        UnexpectedEndOfStream: If the archive is truncated
        InvalidHeaderError: If a header block is corrupt
    """
    cursor = ArchiveCursor(channel, config=config, codec=codec, level=level)
    headers = []

    while (header := await cursor.next_header()) is not None:
        await cursor.skip_body(header)
        await cursor.skip_padding(header)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(describe_header(header))
        headers.append(header)

    return headers
