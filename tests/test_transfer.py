"""Tests for exact-count transfer primitives."""

import pytest

from async_tar_stream.core.transfer import copy_n, really_read, really_write, skip
from async_tar_stream.exceptions import TarReadError, UnexpectedEndOfStream
from tests.helpers import (
    BrokenReader,
    MemoryReader,
    MemoryWriter,
    SilentWriter,
    StalledWriter,
)


@pytest.mark.asyncio
async def test_really_read_absorbs_short_reads():
    """Test that short reads are repeated until the count is met."""
    reader = MemoryReader(b"0123456789abcdef", chunk_size=3)

    data = await really_read(reader, 10)

    assert data == b"0123456789"
    assert reader.position == 10
    assert reader.reads == 4


@pytest.mark.asyncio
async def test_really_read_zero_bytes_does_not_touch_channel():
    """Test that reading nothing performs no channel read."""
    reader = MemoryReader(b"abc")

    assert await really_read(reader, 0) == b""
    assert reader.reads == 0


@pytest.mark.asyncio
async def test_really_read_end_of_stream():
    """Test that a channel ending early raises UnexpectedEndOfStream."""
    reader = MemoryReader(b"x" * 10, chunk_size=4)

    with pytest.raises(UnexpectedEndOfStream) as exc_info:
        await really_read(reader, 20)

    assert exc_info.value.expected == 20
    assert exc_info.value.received == 10
    assert isinstance(exc_info.value, EOFError)
    assert isinstance(exc_info.value, TarReadError)


@pytest.mark.asyncio
async def test_really_read_channel_error_propagates():
    """Test that channel-level errors are not wrapped."""
    with pytest.raises(BrokenPipeError):
        await really_read(BrokenReader(), 1)


@pytest.mark.asyncio
async def test_really_read_negative_count():
    """Test that a negative count is rejected."""
    with pytest.raises(ValueError):
        await really_read(MemoryReader(b""), -1)


@pytest.mark.asyncio
async def test_really_write_absorbs_short_writes():
    """Test that partial writes are continued until all bytes are out."""
    writer = MemoryWriter(max_write=7)
    data = bytes(range(100))

    await really_write(writer, data)

    assert writer.getvalue() == data


@pytest.mark.asyncio
async def test_really_write_buffered_channel():
    """Test writers that return None are treated as complete."""
    writer = SilentWriter()

    await really_write(writer, b"payload")

    assert writer.getvalue() == b"payload"


@pytest.mark.asyncio
async def test_really_write_stalled_channel():
    """Test that a writer accepting nothing raises UnexpectedEndOfStream."""
    with pytest.raises(UnexpectedEndOfStream):
        await really_write(StalledWriter(), b"data")


@pytest.mark.asyncio
async def test_copy_n_larger_than_buffer():
    """Test copying more bytes than the buffer holds."""
    data = bytes(range(256)) * 400
    reader = MemoryReader(data + b"trailing", chunk_size=1000)
    writer = MemoryWriter(max_write=333)

    await copy_n(reader, writer, len(data), buffer_size=4096)

    assert writer.getvalue() == data
    assert reader.position == len(data)


@pytest.mark.asyncio
async def test_copy_n_zero():
    """Test that copying zero bytes is a no-op."""
    reader = MemoryReader(b"abc")
    writer = MemoryWriter()

    await copy_n(reader, writer, 0)

    assert writer.getvalue() == b""
    assert reader.position == 0


@pytest.mark.asyncio
async def test_copy_n_truncated_source():
    """Test that a short source fails with UnexpectedEndOfStream."""
    reader = MemoryReader(b"abcdef")
    writer = MemoryWriter()

    with pytest.raises(UnexpectedEndOfStream):
        await copy_n(reader, writer, 10, buffer_size=4)

    # Only whole chunks reach the destination
    assert writer.getvalue() == b"abcd"


@pytest.mark.asyncio
async def test_skip_then_skip_zero_keeps_position():
    """Test that skip(0) after skip(n) leaves the position at n."""
    reader = MemoryReader(b"z" * 2000, chunk_size=100)

    await skip(reader, 1500, buffer_size=512)
    position = reader.position
    await skip(reader, 0)

    assert position == 1500
    assert reader.position == 1500


@pytest.mark.asyncio
async def test_skip_truncated():
    """Test that skipping past the end raises UnexpectedEndOfStream."""
    with pytest.raises(UnexpectedEndOfStream):
        await skip(MemoryReader(b"abc"), 4)


@pytest.mark.asyncio
async def test_invalid_counts():
    """Test argument validation for bulk operations."""
    with pytest.raises(ValueError):
        await skip(MemoryReader(b"abc"), -1)

    with pytest.raises(ValueError):
        await skip(MemoryReader(b"abc"), 1, buffer_size=0)

    with pytest.raises(ValueError):
        await copy_n(MemoryReader(b"abc"), MemoryWriter(), -5)
