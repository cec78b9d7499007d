# File: pen_harvest/utils.py
"""pen_harvest.utils: helpers for turning titles into filenames and writing files safely."""

from __future__ import annotations

import hashlib
import os
import re
import tempfile
from pathlib import Path
from typing import Sequence, Union

from pen_harvest.logger import logger

__all__: Sequence[str] = (
    "normalize_title",
    "pen_filename",
    "short_hash",
    "ensure_dir",
    "write_text_atomic",
)

_NON_ALNUM_RE = re.compile(r"[^A-Za-z0-9]+")


def normalize_title(title: str) -> str:
    """Turn an arbitrary title into a lowercase, dash-separated slug.

    >>> normalize_title("Flexbox Masonry!!")
    'flexbox-masonry'
    """
    slug = _NON_ALNUM_RE.sub("-", title.strip())
    slug = slug.strip("-")
    return slug.lower().strip()


def pen_filename(title: str) -> str:
    """Output filename for a pen title: ``<slug>.html``."""
    return f"{normalize_title(title)}.html"


def short_hash(value: str, length: int = 7) -> str:
    """First *length* hex chars of the SHA-1 of *value*."""
    return hashlib.sha1(value.encode("utf-8")).hexdigest()[:length]


def ensure_dir(path: Union[str, Path]) -> Path:
    """Create *path* (and parents) if missing and return it as Path."""
    p = Path(path).expanduser()
    if not p.is_dir():
        logger.debug("Creating directory %s", p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def write_text_atomic(path: Union[str, Path], text: str) -> Path:
    """Write *text* to a temporary sibling of *path*, then rename it into place.

    The target either does not exist or holds the complete text.
    """
    target = Path(path)
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp_name, target)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    logger.debug("Wrote %d chars to %s", len(text), target)
    return target
