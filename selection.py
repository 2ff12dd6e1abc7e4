"""
Turns command line inputs into selected image files.

Inputs may be file paths, glob patterns or http(s) URLs. Anything that is
not an image is rejected, the way a file picker limited to ``image/*``
refuses it.
"""

import glob
import logging
import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple
from urllib.parse import unquote, urlparse

import requests
from requests.exceptions import RequestException

from file_reader import REQUEST_TIMEOUT, is_remote_location
from image_processor import get_mime_type, is_image_mime_type, sniff_mime_type
from models import SourceFile


logger = logging.getLogger(__name__)


@dataclass
class SelectionResult:
    """Files accepted for conversion and the inputs that were refused."""
    accepted: List[SourceFile] = field(default_factory=list)
    rejected: List[Tuple[str, str]] = field(default_factory=list)  # (input, reason)


def _remote_name(url: str) -> str:
    path = urlparse(url).path
    name = os.path.basename(unquote(path))
    return name or url


def _remote_content_type(url: str) -> Optional[str]:
    """Ask the server for the Content-Type of a URL."""
    try:
        response = requests.head(url, timeout=REQUEST_TIMEOUT, allow_redirects=True)
    except RequestException as e:
        logger.debug(f"HEAD request failed for {url}: {e}")
        return None
    if response.status_code != 200:
        return None
    content_type = response.headers.get('Content-Type', '')
    return content_type.split(';', 1)[0].strip() or None


def _resolve_remote(url: str) -> Tuple[Optional[SourceFile], str]:
    mime_type = get_mime_type(urlparse(url).path)
    if not is_image_mime_type(mime_type):
        mime_type = _remote_content_type(url)
    if not is_image_mime_type(mime_type):
        return None, f"not an image ({mime_type or 'unknown type'})"
    return SourceFile(name=_remote_name(url), mime_type=mime_type, location=url), ""


def _resolve_local(path: str) -> Tuple[Optional[SourceFile], str]:
    if not os.path.isfile(path):
        return None, "file not found"

    mime_type = get_mime_type(path)
    if mime_type is None:
        logger.debug(f"No known extension for {path}, checking content")
        mime_type = sniff_mime_type(path)
    if not is_image_mime_type(mime_type):
        return None, f"not an image ({mime_type or 'unknown type'})"
    return SourceFile(name=os.path.basename(path), mime_type=mime_type, location=path), ""


def expand_inputs(inputs: Iterable[str], base_path: str = "") -> List[str]:
    """
    Expand glob patterns and resolve relative paths against ``base_path``.

    URLs and plain paths are passed through. A pattern matching nothing is
    kept as-is so it is reported as missing.
    """
    expanded = []
    for item in inputs:
        if is_remote_location(item):
            expanded.append(item)
            continue

        pattern = item
        if base_path and not os.path.isabs(pattern):
            pattern = os.path.join(base_path, pattern)

        if glob.has_magic(pattern):
            matches = sorted(glob.glob(pattern, recursive=True))
            if not matches:
                logger.warning(f"Input pattern '{item}' did not match any files.")
            expanded.extend(m for m in matches if os.path.isfile(m))
        else:
            expanded.append(pattern)
    return expanded


def select_files(inputs: Iterable[str], base_path: str = "") -> SelectionResult:
    """
    Select image files from paths, glob patterns and URLs.

    Args:
        inputs: Paths, patterns or URLs, in the order given
        base_path: Directory for resolving relative paths (default: CWD)

    Returns:
        SelectionResult: Accepted files in input order, plus rejected inputs
    """
    result = SelectionResult()
    for item in expand_inputs(inputs, base_path):
        if is_remote_location(item):
            source, reason = _resolve_remote(item)
        else:
            source, reason = _resolve_local(item)

        if source is None:
            logger.warning(f"Skipping {item}: {reason}")
            result.rejected.append((item, reason))
        else:
            logger.debug(f"Selected {source.name} as {source.mime_type}")
            result.accepted.append(source)
    return result
