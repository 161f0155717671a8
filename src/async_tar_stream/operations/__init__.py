"""Archive-level operations over byte channels."""

from .create import create_archive, write_block, write_end
from .extract import extract_entries
from .listing import list_entries

__all__ = [
    "create_archive",
    "extract_entries",
    "list_entries",
    "write_block",
    "write_end",
]
