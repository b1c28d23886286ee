"""Storage service for uploaded media.

Uses local disk for now; a hosted backend only has to satisfy StorageBackend.
All media is organized by owner: users/{user_id}/{kind}/{filename}
"""
import io
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

import mutagen
from mutagen import MutagenError

from vidtube.core.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredMedia:
    url: str
    duration: float = 0.0  # seconds; 0 when the backend cannot read the length


def read_duration(data: bytes) -> float:
    """Playback length in seconds read from the container header, or 0 when it cannot be read."""
    try:
        media = mutagen.File(io.BytesIO(data))
    except MutagenError as e:
        logger.info("[Storage] could not read media duration: %s", e)
        return 0.0
    if media is None or media.info is None:
        return 0.0
    return float(getattr(media.info, "length", 0) or 0)


class StorageBackend(Protocol):
    def save(self, user_id: str, kind: str, data: bytes, ext: str) -> StoredMedia:
        """Save file and return its public URL and, for videos, its duration."""
        ...

    def delete(self, url: str) -> bool:
        """Delete file by URL. Returns True if deleted."""
        ...


class LocalStorage:
    """Store files on local disk. Path: uploads/users/{user_id}/{kind}/{uuid}.{ext}"""

    def __init__(self, base_dir: str | Path | None = None, base_url: str | None = None):
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR).resolve()
        self.base_url = (base_url or settings.MEDIA_BASE_URL).rstrip("/")

    def _user_path(self, user_id: str, kind: str) -> Path:
        path = self.base_dir / "users" / str(user_id) / kind
        path.mkdir(parents=True, exist_ok=True)
        return path

    def save(self, user_id: str, kind: str, data: bytes, ext: str) -> StoredMedia:
        filename = f"{uuid.uuid4().hex}{ext}"
        (self._user_path(user_id, kind) / filename).write_bytes(data)
        duration = read_duration(data) if kind == "videos" else 0.0
        return StoredMedia(url=f"{self.base_url}/uploads/users/{user_id}/{kind}/{filename}", duration=duration)

    def delete(self, url: str) -> bool:
        if "/uploads/" not in url:
            return False
        filepath = (self.base_dir / url.split("/uploads/", 1)[1]).resolve()
        if self.base_dir not in filepath.parents:
            logger.warning("[Storage] refusing to delete outside upload dir: %s", url)
            return False
        try:
            filepath.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("[Storage] could not delete %s: %s", filepath, e)
            return False
        return True


# Swap implementation here when moving to a hosted backend
_storage: StorageBackend | None = None


def get_storage() -> StorageBackend:
    global _storage
    if _storage is None:
        _storage = LocalStorage()
    return _storage


def schedule_media_cleanup(*urls: str | None) -> None:
    """Queue removal of media that no longer backs any record. Failures are logged, not raised."""
    urls = [url for url in urls if url]
    if not urls:
        return
    from vidtube.workers.media import delete_media

    try:
        delete_media.delay(urls)
    except Exception as e:
        logger.warning("[Storage] WARNING: Failed to enqueue media cleanup: %s", e)
