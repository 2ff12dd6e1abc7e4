"""
Image type detection for the image exporter.

The exporter only accepts images, the same restriction a file picker
configured with ``image/*`` applies. The type is taken from the file
extension first and, when that says nothing useful, from the image data
itself via Pillow.
"""

import io
import logging
import mimetypes
import os
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError


logger = logging.getLogger(__name__)

# Initialize MIME types
mimetypes.init()

# Common image types, checked before the mimetypes registry
_IMAGE_EXTENSIONS = {
    '.jpg': "image/jpeg",
    '.jpeg': "image/jpeg",
    '.png': "image/png",
    '.gif': "image/gif",
    '.bmp': "image/bmp",
    '.webp': "image/webp",
    '.svg': "image/svg+xml",
    '.ico': "image/x-icon",
    '.tif': "image/tiff",
    '.tiff': "image/tiff",
    '.avif': "image/avif",
}


def get_mime_type(name: str) -> Optional[str]:
    """
    Determine the MIME type from a file name or URL.

    Args:
        name: The file name, path or URL to analyze

    Returns:
        str: The MIME type, or None if the extension is missing or unknown
    """
    # Ignore any query string on URLs
    path = name.split('?', 1)[0].split('#', 1)[0]
    _, ext = os.path.splitext(path)
    if not ext:
        return None

    # Normalize extension
    ext = ext.lower()
    if ext in _IMAGE_EXTENSIONS:
        return _IMAGE_EXTENSIONS[ext]

    # Use mimetypes library as fallback
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type


def sniff_mime_type(source: Union[str, Path, bytes]) -> Optional[str]:
    """
    Identify an image by its content using Pillow.

    Only the image header is read, the pixel data is never decoded.

    Args:
        source: A path to an image file, or the raw image bytes

    Returns:
        str: The MIME type Pillow reports, or None if the data is not an image
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    try:
        with Image.open(source) as img:
            mime_type = Image.MIME.get(img.format)
    except (UnidentifiedImageError, OSError) as e:
        logger.debug(f"Content is not a recognised image: {e}")
        return None
    return mime_type


def is_image_mime_type(mime_type: Optional[str]) -> bool:
    """Return True if the MIME type matches ``image/*``."""
    return bool(mime_type) and mime_type.lower().startswith('image/')
