"""
Readers that turn a selected file into a data URI.

A reader plays the role of a browser's ``FileReader.readAsDataURL``: it
fetches the bytes of one file and hands back ``data:<type>;base64,<payload>``
in a single call. The encoder only relies on the abstract interface, so
tests can substitute an in-memory reader.
"""

from abc import ABC, abstractmethod
import asyncio
import logging
from pathlib import Path
from typing import Optional

import requests
from requests.exceptions import RequestException

from base64_encoder import build_data_uri
from image_processor import get_mime_type
from models import SourceFile


# Seconds to wait for a remote file
REQUEST_TIMEOUT = 30

# Type used in the reader's own header when the location says nothing
FALLBACK_MIME_TYPE = "application/octet-stream"


class ReadError(Exception):
    """Raised when the bytes of a selected file cannot be read."""

    def __init__(self, source: SourceFile, reason: str):
        super().__init__(f"Could not read {source.name}: {reason}")
        self.source = source
        self.reason = reason


def is_remote_location(location: str) -> bool:
    return location.lower().startswith(('http://', 'https://'))


def _platform_mime_type(location: str) -> str:
    return get_mime_type(location) or FALLBACK_MIME_TYPE


class DataUriReader(ABC):
    """Abstract base class for reading a file as a data URI."""

    @abstractmethod
    async def read_as_data_uri(self, source: SourceFile) -> str:
        """
        Read a file and return it as a data URI.

        Args:
            source: The file to read

        Returns:
            str: The data URI (header + base64 payload)

        Raises:
            ReadError: If the file could not be read
        """
        pass


class LocalFileReader(DataUriReader):
    """Reads files from the local file system."""

    async def read_as_data_uri(self, source: SourceFile) -> str:
        logger = logging.getLogger(__name__)
        path = Path(source.location)

        try:
            logger.debug(f"Reading file: {path}")
            # Keep the event loop free while other reads are in flight
            data = await asyncio.to_thread(path.read_bytes)
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            raise ReadError(source, str(e)) from e

        logger.debug(f"Read {path} - Size: {len(data)} bytes")
        return build_data_uri(_platform_mime_type(source.location), data)


class RequestsReader(DataUriReader):
    """Implementation of DataUriReader using the requests library."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT):
        self.timeout = timeout

    def _download(self, url: str) -> requests.Response:
        return requests.get(url, timeout=self.timeout)

    async def read_as_data_uri(self, source: SourceFile) -> str:
        logger = logging.getLogger(__name__)
        url = source.location

        try:
            logger.debug(f"Downloading from URL: {url}")
            response = await asyncio.to_thread(self._download, url)
        except RequestException as e:
            logger.error(f"Error downloading {url}: {str(e)}")
            raise ReadError(source, str(e)) from e

        if response.status_code != 200:
            logger.warning(f"Failed to download: {url} - Status code: {response.status_code}")
            raise ReadError(source, f"HTTP status {response.status_code}")

        logger.debug(f"Download successful: {url} - Size: {len(response.content)} bytes")
        return build_data_uri(_platform_mime_type(url), response.content)


class SourceReader(DataUriReader):
    """Routes each file to the local or the HTTP reader by its location."""

    def __init__(self, local: Optional[DataUriReader] = None,
                 remote: Optional[DataUriReader] = None):
        self.local = local or LocalFileReader()
        self.remote = remote or RequestsReader()

    async def read_as_data_uri(self, source: SourceFile) -> str:
        if is_remote_location(source.location):
            return await self.remote.read_as_data_uri(source)
        return await self.local.read_as_data_uri(source)


def create_file_reader() -> DataUriReader:
    """
    Factory function to create a file reader.

    Returns:
        DataUriReader: A reader handling both local paths and URLs
    """
    return SourceReader()
