"""Extract the entries of a tar stream to storage."""

import logging
import os
from typing import Callable, Optional, Union

import aiofiles
import aiofiles.os

from ..core.cursor import ArchiveCursor
from ..core.transfer import copy_n
from ..core.types import AsyncReadable, FormatLevel, Header, LinkIndicator, StreamConfig
from ..exceptions import DestinationError
from ..tar.codec import HeaderCodec

logger = logging.getLogger(__name__)

Destination = Callable[[str], Union[str, "os.PathLike[str]"]]


class _DestinationSink:
    """Write channel that reports sink failures as DestinationError."""

    def __init__(self, location: str, handle) -> None:
        self.location = location
        self.handle = handle

    async def write(self, data: bytes) -> Optional[int]:
        try:
            return await self.handle.write(data)
        except OSError as e:
            raise DestinationError(f"Failed to write {self.location}: {e}") from e


async def _make_parents(location: str) -> None:
    parent = os.path.dirname(location)
    if not parent:
        return
    try:
        await aiofiles.os.makedirs(parent, exist_ok=True)
    except OSError as e:
        raise DestinationError(f"Failed to create directory {parent}: {e}") from e


async def _extract_file(
    config: StreamConfig, channel: AsyncReadable, header: Header, location: str
) -> None:
    await _make_parents(location)
    try:
        handle = await aiofiles.open(location, "wb")
    except OSError as e:
        raise DestinationError(f"Failed to open {location}: {e}") from e

    try:
        sink = _DestinationSink(location, handle)
        await copy_n(channel, sink, header.size, config.buffer_size)
    finally:
        try:
            await handle.close()
        except OSError as e:
            raise DestinationError(f"Failed to close {location}: {e}") from e


async def _extract_directory(location: str) -> None:
    try:
        await aiofiles.os.makedirs(location, exist_ok=True)
    except OSError as e:
        raise DestinationError(f"Failed to create directory {location}: {e}") from e


def _locate(destination: Destination, header: Header) -> str:
    try:
        return os.fspath(destination(header.path))
    except OSError as e:
        raise DestinationError(f"Failed to map {header.path}: {e}") from e


async def extract_entries(
    config: StreamConfig,
    channel: AsyncReadable,
    destination: Destination,
    level: Optional[FormatLevel] = None,
    codec: Optional[HeaderCodec] = None,
) -> list[Header]:
    """Copy every entry body of an archive to its destination.

    Regular files are written to ``destination(header.path)`` and directories
    are created there, along with any missing parent directories. Other entry
    kinds are skipped with a warning and never passed to ``destination``.
    Extraction is not resumable and does not roll back entries already
    written when a later one fails.

    Args:
        config: Stream configuration
        channel: Source channel positioned at the start of the archive
        destination: Maps a header path to the location to write
        level: Optional decoding hint
        codec: Header codec override

    Returns:
        Headers of all processed entries, in archive order

    Raises:
        DestinationError: If a destination cannot be mapped, created or written
        UnexpectedEndOfStream: If the archive is truncated
        InvalidHeaderError: If a header block is corrupt
    """
    cursor = ArchiveCursor(channel, config=config, codec=codec, level=level)
    headers = []

    while (header := await cursor.next_header()) is not None:
        if header.link_indicator.is_regular:
            location = _locate(destination, header)
            logger.info(location)
            await _extract_file(config, channel, header, location)
        elif header.link_indicator is LinkIndicator.DIRECTORY:
            await _extract_directory(_locate(destination, header))
            await cursor.skip_body(header)
        else:
            logger.warning(
                f"Skipping {header.path}: unsupported entry type "
                f"{header.link_indicator.name}"
            )
            await cursor.skip_body(header)

        await cursor.skip_padding(header)
        headers.append(header)

    return headers
