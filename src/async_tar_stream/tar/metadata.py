"""Build tar headers from filesystem metadata."""

import asyncio
import os
import stat
from typing import Union

import aiofiles.os

from ..core.types import FormatLevel, Header, LinkIndicator

try:
    import grp
    import pwd
except ImportError:
    grp = pwd = None


_KIND_INDICATORS = (
    (stat.S_ISDIR, LinkIndicator.DIRECTORY),
    (stat.S_ISLNK, LinkIndicator.SYMBOLIC_LINK),
    (stat.S_ISFIFO, LinkIndicator.FIFO),
    (stat.S_ISCHR, LinkIndicator.CHARACTER_DEVICE),
    (stat.S_ISBLK, LinkIndicator.BLOCK_DEVICE),
)


def link_indicator_for(st_mode: int) -> LinkIndicator:
    """Map a stat mode to the header type flag."""
    for predicate, indicator in _KIND_INDICATORS:
        if predicate(st_mode):
            return indicator
    return LinkIndicator.NORMAL


def lookup_user_name(uid: int) -> str:
    """Resolve a uid to a user name, empty when unknown."""
    if pwd is None:
        return ""
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return ""


def lookup_group_name(gid: int) -> str:
    """Resolve a gid to a group name, empty when unknown."""
    if grp is None:
        return ""
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return ""


async def header_from_stat(
    path: str, st: os.stat_result, level: FormatLevel = FormatLevel.LEGACY
) -> Header:
    """Build a header from an existing stat result.

    Owner names and device numbers are only filled in at the EXTENDED level.

    Args:
        path: Path recorded in the header
        st: Result of stat on the file
        level: Header format level

    Returns:
        Header describing the file
    """
    uname = gname = ""
    devmajor = devminor = 0

    if level is FormatLevel.EXTENDED:
        # Name service lookups may block
        loop = asyncio.get_event_loop()
        uname = await loop.run_in_executor(None, lookup_user_name, st.st_uid)
        gname = await loop.run_in_executor(None, lookup_group_name, st.st_gid)
        if hasattr(os, "major"):
            devmajor = os.major(st.st_rdev)
            devminor = os.minor(st.st_rdev)

    indicator = link_indicator_for(st.st_mode)

    return Header(
        path=path,
        mode=stat.S_IMODE(st.st_mode),
        uid=st.st_uid,
        gid=st.st_gid,
        size=st.st_size if indicator is LinkIndicator.NORMAL else 0,
        mtime=int(st.st_mtime),
        link_indicator=indicator,
        uname=uname,
        gname=gname,
        devmajor=devmajor,
        devminor=devminor,
    )


async def stat_to_header(
    path: Union[str, os.PathLike], level: FormatLevel = FormatLevel.LEGACY
) -> Header:
    """Stat ``path`` and return the header describing it.

    Raises:
        OSError: If the file cannot be stat'ed
    """
    st = await aiofiles.os.stat(path)
    return await header_from_stat(os.fspath(path), st, level)
