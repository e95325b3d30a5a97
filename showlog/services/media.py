# showlog/services/media.py
"""
Placement of uploaded concert media.

Every file lands in a directory named after the show
(``YYYYMMDD-<artistSlug>``) and is numbered after the media the concert
already has: ``YYYYMMDD-<artistSlug>-<N><ext>``. The number is recomputed on
every upload, so allocation, write and row update run under a per-concert
lock (row lock in the database plus a process-local lock).
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional

from botocore.exceptions import BotoCoreError, ClientError
from sqlalchemy.orm import Session

from showlog.core.exceptions import NotFoundError, ValidationError
from showlog.models.concert import Concert
from showlog.utils.sanitize import sanitize_filename
from showlog.utils.slug import slugify

logger = logging.getLogger(__name__)

ALLOWED_MEDIA_PREFIXES = ("image/", "video/")

# Upper bound on how far past the computed number we probe for a free name
MAX_NAME_PROBES = 1000

# Concerts share a fixed set of locks by id
LOCK_STRIPES = 64
_concert_locks = [threading.Lock() for _ in range(LOCK_STRIPES)]


def _concert_lock(concert_id: int) -> threading.Lock:
    return _concert_locks[concert_id % LOCK_STRIPES]


@dataclass(frozen=True)
class MediaPath:
    directory: str
    filename: str

    @property
    def key(self) -> str:
        return f"{self.directory}/{self.filename}"


def existing_media_count(concert: Concert) -> int:
    return len(concert.gallery or []) + (1 if concert.image_url else 0)


def media_directory(concert: Concert) -> str:
    artist_slug = concert.artist_slug or slugify(concert.artist)
    return f"{concert.date:%Y%m%d}-{artist_slug}"


def file_extension(original_filename: str) -> str:
    try:
        name = sanitize_filename(original_filename or "")
    except ValueError:
        raise ValidationError(
            f"Invalid filename: {original_filename!r}",
            details={"field": "file"},
        )
    return os.path.splitext(name)[1].lower()


def allocate_media_path(
    concert: Concert, original_filename: str, offset: int = 0
) -> MediaPath:
    """
    Compute where the next upload for ``concert`` goes.

    ``offset`` skips past names that turned out to be taken already.
    """
    directory = media_directory(concert)
    number = existing_media_count(concert) + 1 + offset
    ext = file_extension(original_filename)
    return MediaPath(directory=directory, filename=f"{directory}-{number}{ext}")


def _check_content_type(content_type: Optional[str]) -> None:
    if not content_type or not content_type.startswith(ALLOWED_MEDIA_PREFIXES):
        raise ValidationError(
            f"Unsupported media type '{content_type}'. Only images and videos are accepted.",
            details={"field": "file", "contentType": content_type},
        )


def _locked_concert(db: Session, concert_id: int) -> Concert:
    concert = (
        db.query(Concert).filter(Concert.id == concert_id).with_for_update().first()
    )
    if concert is None:
        raise NotFoundError(
            f"Concert {concert_id} not found", details={"concertId": concert_id}
        )
    return concert


def save_concert_media(
    db: Session,
    storage,
    *,
    concert_id: int,
    filename: str,
    content_type: Optional[str],
    fileobj: BinaryIO,
    is_main_image: bool = False,
) -> str:
    """Store an upload for a concert and attach it; returns its URL."""
    _check_content_type(content_type)

    with _concert_lock(concert_id):
        concert = _locked_concert(db, concert_id)
        previous_image = concert.image_url

        path = None
        for offset in range(MAX_NAME_PROBES):
            candidate = allocate_media_path(concert, filename, offset=offset)
            if storage.exists(candidate.key):
                continue
            try:
                url = storage.save(candidate.key, fileobj, content_type)
            except FileExistsError:
                continue
            path = candidate
            break
        if path is None:
            raise ValidationError(
                f"No free media name left for concert {concert_id}",
                details={"concertId": concert_id},
            )

        if is_main_image:
            concert.image_url = url
        else:
            concert.gallery = [*(concert.gallery or []), url]

        try:
            db.commit()
        except Exception:
            db.rollback()
            storage.delete(path.key)
            raise

    logger.info(f"Stored {path.key} for concert {concert_id}")

    if is_main_image and previous_image and previous_image != url:
        remove_media_files(storage, [previous_image])
    return url


def delete_concert_media(
    db: Session, storage, *, file_url: str, concert_id: Optional[int] = None
) -> bool:
    """
    Remove an uploaded file and, if a concert is named, detach it from
    that concert's primary image or gallery. Returns whether a file was
    actually removed from storage.
    """
    if concert_id is not None:
        with _concert_lock(concert_id):
            concert = _locked_concert(db, concert_id)
            if concert.image_url == file_url:
                concert.image_url = None
            elif file_url in (concert.gallery or []):
                concert.gallery = [u for u in concert.gallery if u != file_url]
            db.commit()

    try:
        removed = storage.delete_url(file_url)
    except ValueError:
        raise ValidationError(
            f"Invalid media URL: {file_url!r}", details={"field": "fileUrl"}
        )
    if removed:
        logger.info(f"Deleted media file {file_url}")
    else:
        logger.info(f"Media file {file_url} was not in storage")
    return removed


def remove_media_files(storage, urls: Iterable[str]) -> None:
    """Best-effort cleanup after the owning row is already gone."""
    for url in urls:
        try:
            storage.delete_url(url)
        except (OSError, ValueError, BotoCoreError, ClientError) as e:
            logger.warning(f"Could not remove media file {url}: {e}")
