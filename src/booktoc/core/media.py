"""Media helpers used when importing book content.

- add_mime_types: extend a mime whitelist with audio/video formats
- is_valid_media: check a file's extension and sniffed type on import
- force_wrap_images: turn image-only paragraphs into captionless divs
"""

from __future__ import annotations

import re
from pathlib import Path

import filetype
import structlog

logger = structlog.get_logger(__name__)

# Audio/video formats accepted on top of the default whitelist
MEDIA_MIME_TYPES = {
    "mp4": "video/mp4",
    "webm": "video/webm",
    "ogv": "video/ogg",
    "ogg": "audio/ogg",
    "mp3": "audio/mpeg",
    "aac": "audio/x-aac",
    "vorbis": "audio/vorbis",
}

# Default upload whitelist (extension -> mime type)
DEFAULT_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "jpe": "image/jpeg",
    "gif": "image/gif",
    "png": "image/png",
    "bmp": "image/bmp",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "webp": "image/webp",
    "ico": "image/x-icon",
    "pdf": "application/pdf",
    "wav": "audio/wav",
    "m4a": "audio/mpeg",
    "flac": "audio/flac",
    "mov": "video/quicktime",
    "avi": "video/avi",
    "zip": "application/zip",
}

# Sniffed type -> whitelist spelling
DETECTED_ALIASES = {
    "audio/aac": "audio/x-aac",
    "audio/x-wav": "audio/wav",
    "audio/x-flac": "audio/flac",
    "video/x-msvideo": "video/avi",
    "audio/mp4": "audio/mpeg",
}


def add_mime_types(existing_mimes: dict[str, str] | None = None) -> dict[str, str]:
    """Extend a whitelist with the media formats.

    Entries already present in ``existing_mimes`` take precedence.
    """
    return {**MEDIA_MIME_TYPES, **(existing_mimes or {})}


def _extension(filename: str) -> str:
    return Path(filename).suffix.lower().lstrip(".")


def _detect_mime(path: Path) -> str | None:
    """Sniff a file's mime type from its leading bytes."""
    try:
        mime = filetype.guess_mime(str(path))
    except OSError as e:
        logger.warning("media.unreadable", path=str(path), error=str(e))
        return None
    if mime is None:
        return None
    return DETECTED_ALIASES.get(mime, mime)


def is_valid_media(path_to_file: str | Path, filename: str) -> bool:
    """Check a file for validity on import.

    Both the extension of ``filename`` and the type sniffed from the file
    content must be on the whitelist. Invalid files return False; nothing
    is raised.

    Args:
        path_to_file: Location of the uploaded file on disk
        filename: Original filename, used for its extension
    """
    mimes = add_mime_types(DEFAULT_MIME_TYPES)

    ext = _extension(filename)
    if ext not in mimes:
        logger.info("media.rejected", filename=filename, reason="extension", ext=ext)
        return False

    path = Path(path_to_file)
    if not path.is_file():
        logger.info("media.rejected", filename=filename, reason="missing", path=str(path))
        return False

    detected = _detect_mime(path)
    if detected not in mimes.values():
        logger.info(
            "media.rejected", filename=filename, reason="mime", detected=detected
        )
        return False

    return True


# Paragraphs holding a lone image, optionally wrapped in a link
_IMAGE_PARAGRAPH_PATTERNS = [
    re.compile(r'<p[^>]*>\s*?(<img class="([a-z0-9\- ]*).*?>)?\s*</p>'),
    re.compile(r'<p[^>]*>\s*?(<a .*?><img class="([a-z0-9\- ]*).*?></a>)?\s*</p>'),
]
_IMAGE_WRAPPER = r'<div class="wp-nocaption \2">\1</div>'


def force_wrap_images(content: str) -> str:
    """Replace image-only ``<p>`` elements with ``wp-nocaption`` divs.

    The image's class list is copied onto the div. Empty paragraphs are
    replaced too.
    """
    for pattern in _IMAGE_PARAGRAPH_PATTERNS:
        content = pattern.sub(_IMAGE_WRAPPER, content)
    return content
