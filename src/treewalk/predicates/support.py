"""Path checks that predicate factories are built from."""

from __future__ import annotations

import logging
import re
from pathlib import Path

SNIFF_SIZE = 256

logger = logging.getLogger(__name__)


def _compile(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def path_name_matches(path: Path, pattern: str | re.Pattern[str]) -> bool:
    """Check if a file's name matches a pattern.

    Args:
        path: Path to check.
        pattern: Regular expression searched for in the final name component.

    Returns:
        True if the path is not a directory and its name matches.

    """
    if path.is_dir():
        return False
    return _compile(pattern).search(path.name) is not None


def read_prefix(path: Path, size: int = SNIFF_SIZE) -> bytes:
    """Read up to ``size`` leading bytes of a file.

    Unreadable files yield whatever was read before the failure, which may be
    nothing at all.
    """
    data = b""
    try:
        with path.open("rb") as f:
            data = f.read(size)
    except OSError as e:
        logger.debug("Could not read %s for sniffing: %s", path, e)
    return data


def sniff_media_type(data: bytes) -> str:
    """Return the media type libmagic reports for a buffer."""
    import magic

    return magic.from_buffer(data, mime=True)


def path_has_media_type(path: Path, media_type: str) -> bool:
    """Check if a file's sniffed content has a given media type.

    Args:
        path: Path to check.
        media_type: Expected media type, e.g. ``"image/png"``.

    Returns:
        True if the path is not a directory and its content sniffs as
        ``media_type``.

    """
    if path.is_dir():
        return False
    return sniff_media_type(read_prefix(path)) == media_type


def ancestor_name_matches(path: Path, pattern: str | re.Pattern[str]) -> bool:
    """Check if any component of a path's parent directory matches a pattern.

    Args:
        path: Path whose ancestors are checked.
        pattern: Regular expression searched for in each component.

    Returns:
        True if some parent component matches.

    Raises:
        ValueError: If the path has no parent.

    """
    parent = path.parent
    if parent == path:
        msg = f"{path} has no parent directory"
        raise ValueError(msg)

    regex = _compile(pattern)
    return any(regex.search(part) for part in parent.parts)
