"""Exact-count transfer primitives over async byte channels.

Every higher level operation depends on these never returning with the
channel at a position other than the one requested.
"""

from ..exceptions import UnexpectedEndOfStream
from .types import DEFAULT_BUFFER_SIZE, AsyncReadable, AsyncWritable


async def really_read(channel: AsyncReadable, n: int) -> bytes:
    """Read exactly ``n`` bytes from a channel.

    Args:
        channel: Source channel
        n: Number of bytes to read

    Returns:
        Exactly ``n`` bytes

    Raises:
        UnexpectedEndOfStream: If the channel ends before ``n`` bytes arrive
        ValueError: If ``n`` is negative
    """
    if n < 0:
        raise ValueError(f"Byte count must be non-negative: {n}")

    buffer = bytearray()
    while len(buffer) < n:
        chunk = await channel.read(n - len(buffer))
        if not chunk:
            raise UnexpectedEndOfStream(n, len(buffer))
        buffer += chunk
    return bytes(buffer)


async def really_write(channel: AsyncWritable, data: bytes) -> None:
    """Write all of ``data`` to a channel, absorbing short writes.

    Args:
        channel: Destination channel
        data: Bytes to write

    Raises:
        UnexpectedEndOfStream: If the channel stops accepting bytes
    """
    view = memoryview(data)
    offset = 0
    while offset < len(view):
        written = await channel.write(view[offset:])
        # Buffered writers report nothing and take the whole chunk
        if written is None:
            written = len(view) - offset
        if written == 0:
            raise UnexpectedEndOfStream(len(view), offset)
        offset += written


async def copy_n(
    source: AsyncReadable,
    destination: AsyncWritable,
    n: int,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> None:
    """Move exactly ``n`` bytes from ``source`` to ``destination``.

    Args:
        source: Channel to read from
        destination: Channel to write to
        n: Number of bytes to move
        buffer_size: Largest chunk held in memory at once

    Raises:
        UnexpectedEndOfStream: If either side ends early
        ValueError: If ``n`` is negative or ``buffer_size`` is not positive
    """
    _check_counts(n, buffer_size)

    remaining = n
    while remaining > 0:
        this = min(buffer_size, remaining)
        block = await really_read(source, this)
        await really_write(destination, block)
        remaining -= this


async def skip(
    source: AsyncReadable, n: int, buffer_size: int = DEFAULT_BUFFER_SIZE
) -> None:
    """Discard exactly ``n`` bytes from ``source``."""
    _check_counts(n, buffer_size)

    remaining = n
    while remaining > 0:
        amount = min(buffer_size, remaining)
        await really_read(source, amount)
        remaining -= amount


def _check_counts(n: int, buffer_size: int) -> None:
    if n < 0:
        raise ValueError(f"Byte count must be non-negative: {n}")
    if buffer_size <= 0:
        raise ValueError(f"Buffer size must be positive: {buffer_size}")
