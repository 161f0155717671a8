"""In-memory channels and archive builders for tests."""

import io
import tarfile
from typing import Optional

from async_tar_stream.core.types import FormatLevel, Header
from async_tar_stream.tar.codec import ZERO_BLOCK_BYTES, TarfileHeaderCodec

TERMINATOR = ZERO_BLOCK_BYTES * 2


class MemoryReader:
    """Async read channel over bytes, optionally returning short chunks."""

    def __init__(self, data: bytes, chunk_size: Optional[int] = None):
        self.data = data
        self.chunk_size = chunk_size
        self.position = 0
        self.reads = 0

    async def read(self, n: int = -1) -> bytes:
        self.reads += 1
        remaining = len(self.data) - self.position
        if n < 0 or n > remaining:
            n = remaining
        if self.chunk_size is not None:
            n = min(n, self.chunk_size)
        chunk = self.data[self.position : self.position + n]
        self.position += len(chunk)
        return chunk


class MemoryWriter:
    """Async write channel collecting bytes, optionally accepting short writes."""

    def __init__(self, max_write: Optional[int] = None):
        self.buffer = bytearray()
        self.max_write = max_write

    async def write(self, data) -> int:
        n = len(data) if self.max_write is None else min(len(data), self.max_write)
        self.buffer += bytes(data[:n])
        return n

    def getvalue(self) -> bytes:
        return bytes(self.buffer)


class SilentWriter(MemoryWriter):
    """Write channel that reports nothing, like a buffered stream."""

    async def write(self, data) -> None:
        self.buffer += bytes(data)
        return None


class StalledWriter:
    """Write channel that stops accepting bytes."""

    async def write(self, data) -> int:
        return 0


class BrokenReader:
    """Read channel whose descriptor has gone away."""

    async def read(self, n: int = -1) -> bytes:
        raise BrokenPipeError("channel closed")


def make_header(path: str, size: int, **fields) -> Header:
    """Build a header with fixed, encodable metadata."""
    values = {"mode": 0o644, "uid": 1000, "gid": 1000, "mtime": 1700000000}
    values.update(fields)
    return Header(path=path, size=size, **values)


def entry_bytes(
    header: Header, body: bytes = b"", level: FormatLevel = FormatLevel.LEGACY
) -> bytes:
    """Encode one entry: header block, body and padding."""
    assert len(body) == header.size, f"{header.path}: body does not match header size"
    codec = TarfileHeaderCodec()
    return codec.encode(header, level) + body + codec.zero_padding(header)


def build_archive(
    files: list[tuple[str, bytes]], level: FormatLevel = FormatLevel.LEGACY
) -> bytes:
    """Encode regular files followed by the terminator."""
    data = b"".join(
        entry_bytes(make_header(name, len(body)), body, level) for name, body in files
    )
    return data + TERMINATOR


def build_stdlib_archive(files: list[tuple[str, bytes]]) -> bytes:
    """Build a ustar archive with the standard library writer."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w", format=tarfile.USTAR_FORMAT) as tar:
        for name, body in files:
            info = tarfile.TarInfo(name)
            info.size = len(body)
            info.mtime = 1700000000
            tar.addfile(info, fileobj=io.BytesIO(body))
    return buffer.getvalue()
