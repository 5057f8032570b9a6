from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from werkzeug.utils import secure_filename

from ..common.datetime_utils import epoch_millis
from ..core.constants import UPLOADS_URL_PREFIX
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)

FALLBACK_UPLOAD_STEM = "upload"


def selfie_filename(now: datetime) -> str:
    return f"selfie_{epoch_millis(now)}.jpg"


def upload_filename(now: datetime, original_name: str) -> str:
    """`{timestamp}-{originalName}`; uniqueness relies on millisecond granularity.

    Names with nothing ASCII left after sanitising (e.g. Devanagari) are stored
    as `upload` plus whatever extension survives.
    """
    original = Path(original_name or "")
    safe = secure_filename(original_name or "")
    if not secure_filename(original.stem):
        ext = secure_filename(original.suffix.lstrip("."))
        safe = f"{FALLBACK_UPLOAD_STEM}.{ext}" if ext else FALLBACK_UPLOAD_STEM
    return f"{epoch_millis(now)}-{safe}"


class BlobStore(Protocol):
    def save(self, filename: str, data: bytes) -> str:
        """Store bytes and return the public URL."""

        raise NotImplementedError

    def delete(self, url: str) -> bool:
        """Remove the blob; False when it was already gone."""

        raise NotImplementedError


class LocalBlobStore(BlobStore):
    """Blobs as files in one directory, served by Flask under /uploads."""

    def __init__(self, root: str | Path, *, url_prefix: str = UPLOADS_URL_PREFIX):
        self._root = Path(root)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def url_for(self, filename: str) -> str:
        return f"{self._url_prefix}/{filename}"

    def path_for(self, url: str) -> Path:
        prefix = self._url_prefix + "/"
        if not url or not url.startswith(prefix):
            raise StorageError(f"Not a stored blob URL: {url!r}")
        name = url[len(prefix):]
        if not name or name != Path(name).name:
            raise StorageError(f"Not a stored blob URL: {url!r}")
        return self._root / name

    def save(self, filename: str, data: bytes) -> str:
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            (self._root / filename).write_bytes(data)
        except OSError as e:
            logger.error("Could not write blob %s: %s", filename, e)
            raise StorageError(f"Could not store {filename}") from e
        return self.url_for(filename)

    def delete(self, url: str) -> bool:
        path = self.path_for(url)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("Could not delete blob %s: %s", path, e)
            raise StorageError(f"Could not delete {path.name}") from e
        return True
