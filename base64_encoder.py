"""
Base64 and data URI helpers for the image exporter.
"""

import base64
from typing import Tuple, Union


DATA_URI_PREFIX = "data:"
BASE64_MARKER = ";base64,"


def build_header(mime_type: str) -> str:
    """Return the data URI header for a MIME type, e.g. ``data:image/png;base64,``."""
    return f"{DATA_URI_PREFIX}{mime_type}{BASE64_MARKER}"


def build_data_uri(mime_type: str, data: Union[bytes, bytearray]) -> str:
    """Encode bytes as a data URI: standard base64, ASCII, no line breaks."""
    return build_header(mime_type) + base64.b64encode(data).decode('ascii')


def split_data_uri(data_uri: str) -> Tuple[str, str]:
    """
    Split a data URI into its header and payload.
    
    The split happens at the first comma only. A MIME type containing a
    comma therefore ends the header early and the rest of the header
    becomes part of the payload.
    
    Args:
        data_uri: A string such as ``data:image/png;base64,iVBO...``
        
    Returns:
        Tuple[str, str]: The header (including the comma) and the payload
        
    Raises:
        ValueError: If the string contains no comma
    """
    header, sep, payload = data_uri.partition(',')
    if not sep:
        raise ValueError("Malformed data URI: no ',' separating header from payload")
    return header + sep, payload
