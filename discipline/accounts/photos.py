import logging

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename

logger = logging.getLogger(__name__)


def profile_photo_path(user, suffix: str = "") -> str:
    name = f"{user.pk}-{get_valid_filename(suffix)}" if suffix else str(user.pk)
    return f"{settings.PROFILE_PHOTO_DIR}/{name}"


def upload_profile_photo(user, upload, storage=None, suffix: str = "") -> str:
    """
    Push ``upload`` to the blob store under the caller's key and return the
    durable URL to persist on the profile. An existing blob at the same path
    is replaced.
    """
    storage = storage or default_storage
    path = profile_photo_path(user, suffix)
    if storage.exists(path):
        storage.delete(path)
    saved = storage.save(path, upload)
    logger.info("Stored profile photo for user %s at %s", user.pk, saved)
    return storage.url(saved)


def discard_profile_photo(user, storage=None, suffix: str = "") -> None:
    """Remove a blob stored by :func:`upload_profile_photo` whose profile write failed."""
    storage = storage or default_storage
    path = profile_photo_path(user, suffix)
    if storage.exists(path):
        storage.delete(path)
        logger.info("Discarded profile photo for user %s at %s", user.pk, path)
