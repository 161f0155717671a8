"""Human readable rendering of tar headers."""

import stat
from datetime import datetime, timedelta, timezone

from ..core.types import Header, LinkIndicator

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_TYPE_CHARS = {
    LinkIndicator.NORMAL: "-",
    LinkIndicator.CONTIGUOUS: "-",
    LinkIndicator.HARD_LINK: "h",
    LinkIndicator.SYMBOLIC_LINK: "l",
    LinkIndicator.CHARACTER_DEVICE: "c",
    LinkIndicator.BLOCK_DEVICE: "b",
    LinkIndicator.DIRECTORY: "d",
    LinkIndicator.FIFO: "p",
}


def format_mode(header: Header) -> str:
    """Return an ``ls -l`` style mode string, e.g. ``-rw-r--r--``."""
    type_char = _TYPE_CHARS.get(header.link_indicator, "?")
    # filemode() expects a leading file type; regular keeps it neutral
    return type_char + stat.filemode(stat.S_IFREG | (header.mode & 0o7777))[1:]


def format_owner(header: Header) -> str:
    """Return ``user/group``, falling back to numeric ids."""
    user = header.uname or str(header.uid)
    group = header.gname or str(header.gid)
    return f"{user}/{group}"


def format_mtime(header: Header) -> str:
    """Return the modification time as ``YYYY-MM-DD HH:MM`` in UTC."""
    moment = _EPOCH + timedelta(seconds=header.mtime)
    return moment.strftime("%Y-%m-%d %H:%M")


def describe_header(header: Header) -> str:
    """Render a header as one ``tar -tv`` style line.

    Examples:
        >>> describe_header(Header("a.txt", 0o644, 0, 0, 5, 0))
        '-rw-r--r-- 0/0 5 1970-01-01 00:00 a.txt'
    """
    line = (
        f"{format_mode(header)} {format_owner(header)} {header.size} "
        f"{format_mtime(header)} {header.path}"
    )
    if header.link_indicator is LinkIndicator.SYMBOLIC_LINK:
        line += f" -> {header.link_name}"
    elif header.link_indicator is LinkIndicator.HARD_LINK:
        line += f" link to {header.link_name}"
    return line
