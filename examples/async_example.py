"""Example usage of async tar streaming."""

import asyncio
import logging
import sys
import tempfile
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, "src")

from async_tar_stream import (
    FormatLevel,
    TarStreamError,
    create_archive_file,
    describe_header,
    extract_archive,
    list_archive,
)

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def main():
    """Create, list and extract an archive."""
    with tempfile.TemporaryDirectory() as workdir:
        work = Path(workdir)
        (work / "a.txt").write_bytes(b"hello")
        (work / "b.txt").write_bytes(b"world" * 1000)
        tar_path = work / "example.tar"

        try:
            logger.info("Creating archive...")
            await create_archive_file(
                tar_path,
                [work / "a.txt", work / "b.txt"],
                level=FormatLevel.EXTENDED,
                arcname=lambda path: Path(path).name,
            )
            logger.info(f"✓ Wrote {tar_path.stat().st_size} bytes")

            logger.info("Listing archive...")
            for header in await list_archive(tar_path):
                logger.info(f"  {describe_header(header)}")

            logger.info("Extracting archive...")
            await extract_archive(tar_path, work / "restore")

        except TarStreamError as e:
            logger.error(f"Archive error: {e}")


async def concurrent_operations():
    """Example of listing several archives concurrently."""
    with tempfile.TemporaryDirectory() as workdir:
        work = Path(workdir)
        archives = []
        for index in range(3):
            source = work / f"file{index}.bin"
            source.write_bytes(bytes(index) * 1024)
            tar_path = work / f"archive{index}.tar"
            await create_archive_file(tar_path, [source], arcname=lambda p: Path(p).name)
            archives.append(tar_path)

        try:
            listings = await asyncio.gather(*[list_archive(a) for a in archives])
            for tar_path, headers in zip(archives, listings, strict=False):
                logger.info(f"{tar_path.name}: {[h.path for h in headers]}")
        except TarStreamError as e:
            logger.error(f"Archive error: {e}")


if __name__ == "__main__":
    print("=== Basic Async Operations ===")
    asyncio.run(main())

    print("\n=== Concurrent Async Operations ===")
    asyncio.run(concurrent_operations())
