"""Adapters that expose asyncio streams as byte channels."""

import asyncio


class StreamWriterChannel:
    """Write channel backed by an ``asyncio.StreamWriter``.

    ``asyncio.StreamReader`` already satisfies the read side, so only the
    writer needs adapting for pipes and sockets.
    """

    def __init__(self, writer: asyncio.StreamWriter) -> None:
        self.writer = writer

    async def write(self, data: bytes) -> int:
        """Queue ``data`` and wait for the transport to drain it."""
        self.writer.write(data)
        await self.writer.drain()
        return len(data)

    async def close(self) -> None:
        """Close the underlying writer."""
        self.writer.close()
        await self.writer.wait_closed()
