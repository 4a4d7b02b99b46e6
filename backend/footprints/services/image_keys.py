"""
Footprints Backend — Object Key Helpers
========================================

What:  Pure functions that turn stored photo references into object-store
       keys, pick the content type for a key, and build upload keys.
Who:   StorageService (signing), TripService (cover/detail photos) and
       PhotoService (batch resolution, upload slots).

Stored photo references come in two shapes:
    - an object key:   trips/u1/t1/beach.jpg
    - a full URL:      https://bucket.s3.amazonaws.com/trips/u1/t1/beach.jpg?X-Amz-...
                       (older rows, or a signed URL the client echoed back)
Both must map to the same key before a fresh URL can be signed.
"""

import re
from pathlib import PurePosixPath
from urllib.parse import unquote, urlsplit

from footprints.exceptions import InvalidImageKeyError

DEFAULT_CONTENT_TYPE = "image/jpeg"

CONTENT_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "svg": "image/svg+xml",
    "heic": "image/heic",
    "heif": "image/heif",
}

UPLOAD_KEY_PREFIX = "trips"

# Last resort for strings that look like object-store URLs but do not parse
_OBJECT_STORE_HOST = re.compile(r"amazonaws\.com/([^?]+)")


def _percent_decode(raw: str, stored: str) -> str:
    """Strict percent-decoding; escapes that are not valid UTF-8 are rejected."""
    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidImageKeyError(
            f"Malformed percent-encoding in {stored!r}"
        ) from e


def normalize_image_key(stored: str) -> str:
    """
    Turn a stored photo reference into its object key.

    Resolution order:
        1. No http(s) scheme        → already a key, percent-decoded
        2. Parseable URL with host  → path without the leading slash, decoded
        3. Object-store host match  → everything after "amazonaws.com/", decoded
        4. Anything else            → the raw value, decoded

    Raises:
        InvalidImageKeyError: the value is not a string, has percent escapes
            that do not decode to UTF-8, or yields an empty key
    """
    if not isinstance(stored, str):
        raise InvalidImageKeyError(
            f"Image reference must be a string, got {type(stored).__name__}"
        )

    if not stored.startswith(("http://", "https://")):
        raw = stored
    else:
        try:
            parts = urlsplit(stored)
            if not parts.netloc:
                raise ValueError(f"URL has no host: {stored!r}")
            raw = parts.path[1:] if parts.path.startswith("/") else parts.path
        except ValueError:
            match = _OBJECT_STORE_HOST.search(stored)
            raw = match.group(1) if match else stored

    key = _percent_decode(raw, stored)
    if not key.strip():
        raise InvalidImageKeyError(f"Could not derive an object key from {stored!r}")
    return key


def content_type_for_key(key: str) -> str:
    """
    Content type served with a signed read URL, from the key's extension.

    >>> content_type_for_key("trips/u1/t1/photo.HEIC")
    'image/heic'
    >>> content_type_for_key("trips/u1/t1/photo")
    'image/jpeg'
    """
    extension = PurePosixPath(key).suffix.lower().lstrip(".")
    return CONTENT_TYPES.get(extension, DEFAULT_CONTENT_TYPE)


def build_upload_key(user_id: str, trip_id: str, file_name: str) -> str:
    """
    Object key for a photo uploaded to a trip.

    Deterministic: the same file name for the same trip maps to the same key,
    so a repeated upload overwrites the earlier object.
    """
    return f"{UPLOAD_KEY_PREFIX}/{user_id}/{trip_id}/{file_name}"
