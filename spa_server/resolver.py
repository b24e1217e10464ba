"""Request path resolution for the SPA catch-all route.

A request path is normalized lexically, then tried against the client
build root, then the public root.  Anything that resolves to neither is
answered with the client build root's ``index.html`` so the browser-side
router can interpret the URL.

Every candidate is checked after symlink resolution to still live inside
the root it was joined with; candidates that escape are treated as absent.
"""

import enum
import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from spa_server.config import Settings

logger = logging.getLogger(__name__)

INDEX_DOCUMENT = "index.html"


class ServedFrom(str, enum.Enum):
    CLIENT = "client"
    PUBLIC = "public"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ServedFile:
    path: Path
    source: ServedFrom


def normalize_path(request_path: str) -> str:
    """Collapse ``.``, ``..`` and duplicate slashes; the result always starts with ``/``.

    ``..`` segments can never climb above ``/``.  The bare root is
    rewritten to the index document.
    """
    # Re-anchor first: normpath keeps a leading "//" intact
    cleaned = posixpath.normpath("/" + (request_path or "").lstrip("/"))
    if cleaned == "/":
        return "/" + INDEX_DOCUMENT
    return cleaned


def _lookup(root: Path, relative: str) -> Optional[Path]:
    """Return the candidate under ``root`` if it exists, is not a directory and stays inside ``root``."""
    candidate = root / relative
    try:
        if not candidate.exists() or candidate.is_dir():
            return None
        resolved = candidate.resolve()
    except (OSError, ValueError):
        return None
    if not resolved.is_relative_to(root):
        logger.warning(f"Rejected {relative!r}: resolves outside {root}")
        return None
    return candidate


class Resolver:
    """Pick the file to serve for a catch-all request."""

    def __init__(
        self,
        client_dir: Union[str, Path],
        public_dir: Union[str, Path],
        index: str = INDEX_DOCUMENT,
    ) -> None:
        self.client_root = Path(client_dir).resolve()
        self.public_root = Path(public_dir).resolve()
        self.index = index

    @classmethod
    def from_settings(cls, settings: Settings) -> "Resolver":
        return cls(settings.client_root, settings.public_root)

    @property
    def fallback(self) -> Path:
        return self.client_root / self.index

    def resolve(self, request_path: str) -> ServedFile:
        relative = normalize_path(request_path).lstrip("/")

        found = _lookup(self.client_root, relative)
        if found is not None:
            return ServedFile(found, ServedFrom.CLIENT)

        found = _lookup(self.public_root, relative)
        if found is not None:
            return ServedFile(found, ServedFrom.PUBLIC)

        # Served even when missing; the failure surfaces when the file is opened
        logger.debug(f"No file for {request_path!r}, falling back to {self.index}")
        return ServedFile(self.fallback, ServedFrom.FALLBACK)
