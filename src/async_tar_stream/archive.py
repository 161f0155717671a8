"""Async functional archive operations on tar files."""

import os
from pathlib import Path, PurePosixPath
from typing import Callable, Iterable, Optional, Union

import aiofiles
import aiofiles.os

from .core.types import DEFAULT_BUFFER_SIZE, FormatLevel, Header, StreamConfig
from .exceptions import DestinationError, TarReadError
from .operations.create import create_archive
from .operations.extract import extract_entries
from .operations.listing import list_entries

PathLike = Union[str, "os.PathLike[str]"]


async def _ensure_archive(tar_path: PathLike) -> None:
    if not await aiofiles.os.path.isfile(tar_path):
        raise TarReadError(f"Tar file not found: {os.fspath(tar_path)}")


def under_directory(root: PathLike) -> Callable[[str], Path]:
    """Map archive paths to locations below ``root``.

    Args:
        root: Extraction directory

    Returns:
        Mapping usable as an extraction destination

    Raises:
        DestinationError: From the mapping, for absolute paths or paths
            escaping ``root`` through ``..``
    """
    base = Path(root)

    def resolve(name: str) -> Path:
        member = PurePosixPath(name)
        if member.is_absolute() or ".." in member.parts:
            raise DestinationError(f"Refusing to extract outside destination: {name}")
        return base.joinpath(*member.parts)

    return resolve


async def list_archive(
    tar_path: PathLike,
    level: Optional[FormatLevel] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> list[Header]:
    """tar 파일의 모든 항목 헤더를 순서대로 조회합니다.

    Args:
        tar_path: tar 파일 경로 (예: "backup.tar", "/tmp/export.tar")
        level: 디코딩 힌트 (LEGACY이면 ustar 전용 필드를 비웁니다)
        buffer_size: 본문 건너뛰기에 사용할 버퍼 크기 (기본값: 32 KiB)

    Returns:
        list[Header]: 아카이브 순서대로 정렬된 헤더 목록

    Raises:
        TarReadError: tar 파일이 없거나 잘린 경우
        InvalidHeaderError: 손상된 헤더 블록이 있는 경우

    Examples:
        headers = await list_archive("backup.tar")
        for header in headers:
            print(f"{header.path}: {header.size} bytes")
    """
    await _ensure_archive(tar_path)
    config = StreamConfig(buffer_size=buffer_size)

    async with aiofiles.open(tar_path, "rb") as channel:
        return await list_entries(config, channel, level=level)


async def extract_archive(
    tar_path: PathLike,
    destination: Union[PathLike, Callable[[str], PathLike]],
    level: Optional[FormatLevel] = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
) -> list[Header]:
    """tar 파일의 모든 항목을 추출합니다.

    디렉토리 경로를 주면 각 항목은 해당 디렉토리 아래에 생성되며,
    필요한 상위 디렉토리도 함께 만들어집니다.

    Args:
        tar_path: tar 파일 경로
        destination: 추출 디렉토리 또는 헤더 경로를 출력 위치로 바꾸는 함수
        level: 디코딩 힌트 (LEGACY이면 ustar 전용 필드를 비웁니다)
        buffer_size: 본문 복사에 사용할 버퍼 크기 (기본값: 32 KiB)

    Returns:
        list[Header]: 처리된 항목의 헤더 목록

    Raises:
        TarReadError: tar 파일이 없거나 잘린 경우
        DestinationError: 출력 위치를 만들거나 쓸 수 없는 경우

    Examples:
        # 디렉토리로 추출
        await extract_archive("backup.tar", "./restore")

        # 경로 매핑 함수 사용
        await extract_archive("backup.tar", lambda name: f"/tmp/{name}.out")
    """
    await _ensure_archive(tar_path)
    config = StreamConfig(buffer_size=buffer_size)
    mapping = destination if callable(destination) else under_directory(destination)

    async with aiofiles.open(tar_path, "rb") as channel:
        return await extract_entries(config, channel, mapping, level=level)


async def create_archive_file(
    tar_path: PathLike,
    files: Iterable[PathLike],
    level: FormatLevel = FormatLevel.LEGACY,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    arcname: Optional[Callable[[str], str]] = None,
) -> list[Header]:
    """일반 파일 목록으로 tar 파일을 생성합니다.

    일반 파일이 아닌 입력은 경고를 남기고 건너뜁니다.

    Args:
        tar_path: 생성할 tar 파일 경로
        files: 입력 파일 경로 목록 (순서대로 기록됩니다)
        level: 헤더 형식 (LEGACY 또는 EXTENDED, 기본값: LEGACY)
        buffer_size: 본문 복사에 사용할 버퍼 크기 (기본값: 32 KiB)
        arcname: 입력 경로를 아카이브 내 경로로 바꾸는 함수 (선택사항)

    Returns:
        list[Header]: 기록된 항목의 헤더 목록

    Raises:
        OSError: 입력 파일을 읽을 수 없는 경우
        ValidationError: 헤더를 선택한 형식으로 인코딩할 수 없는 경우

    Examples:
        await create_archive_file("out.tar", ["a.txt", "b.txt"])
        await create_archive_file("out.tar", ["a.txt"], level=FormatLevel.EXTENDED)
    """
    config = StreamConfig(level=level, buffer_size=buffer_size)

    async with aiofiles.open(tar_path, "wb") as channel:
        return await create_archive(config, files, channel, arcname=arcname)
