"""Write tar archives from regular files."""

import logging
import os
import stat
from dataclasses import replace
from typing import Awaitable, Callable, Iterable, Optional, Union

import aiofiles
import aiofiles.os

from ..core.transfer import copy_n, really_write
from ..core.types import AsyncWritable, Header, StreamConfig
from ..tar.codec import ZERO_BLOCK_BYTES, HeaderCodec, TarfileHeaderCodec
from ..tar.metadata import header_from_stat

logger = logging.getLogger(__name__)

BodyWriter = Callable[[AsyncWritable], Awaitable[None]]


async def write_block(
    config: StreamConfig,
    header: Header,
    body: BodyWriter,
    channel: AsyncWritable,
    codec: Optional[HeaderCodec] = None,
) -> None:
    """Write one entry: encoded header, body, then padding.

    Args:
        config: Stream configuration (format level and codec settings)
        header: Header of the entry
        body: Coroutine function writing exactly ``header.size`` bytes
        channel: Destination channel
        codec: Header codec override

    Raises:
        ValidationError: If the header cannot be encoded at ``config.level``
    """
    codec = codec or TarfileHeaderCodec.from_config(config)
    await really_write(channel, codec.encode(header, config.level))
    await body(channel)
    await really_write(channel, codec.zero_padding(header))


async def write_end(channel: AsyncWritable) -> None:
    """Write the end-of-archive marker of two zero blocks."""
    await really_write(channel, ZERO_BLOCK_BYTES)
    await really_write(channel, ZERO_BLOCK_BYTES)


async def create_archive(
    config: StreamConfig,
    paths: Iterable[Union[str, "os.PathLike[str]"]],
    channel: AsyncWritable,
    arcname: Optional[Callable[[str], str]] = None,
    codec: Optional[HeaderCodec] = None,
) -> list[Header]:
    """Write an archive containing ``paths`` in order.

    Inputs that are not regular files are skipped with a warning.

    Args:
        config: Stream configuration
        paths: Source files, written in the given order
        channel: Destination channel
        arcname: Optional mapping from source path to stored path
        codec: Header codec override

    Returns:
        Headers written, in order

    Raises:
        OSError: If a source file cannot be stat'ed or read
        UnexpectedEndOfStream: If a source file shrinks while being copied
        ValidationError: If a header cannot be encoded
    """
    codec = codec or TarfileHeaderCodec.from_config(config)
    headers = []

    for source in paths:
        filename = os.fspath(source)
        st = await aiofiles.os.stat(filename)
        if not stat.S_ISREG(st.st_mode):
            logger.warning(f"Skipping {filename}: not a regular file")
            continue

        header = await header_from_stat(filename, st, config.level)
        if arcname is not None:
            header = replace(header, path=arcname(filename))

        async with aiofiles.open(filename, "rb") as src:

            async def body(ofd: AsyncWritable) -> None:
                await copy_n(src, ofd, header.size, config.buffer_size)

            await write_block(config, header, body, channel, codec)

        headers.append(header)

    await write_end(channel)
    return headers
