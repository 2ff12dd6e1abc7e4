"""
Converts selected files into encoded records.
"""

import asyncio
import logging
from typing import List, Sequence

from base64_encoder import build_header, split_data_uri
from file_reader import DataUriReader, ReadError
from models import EncodedRecord, SourceFile


logger = logging.getLogger(__name__)


async def encode_file(source: SourceFile, reader: DataUriReader) -> EncodedRecord:
    """
    Encode one file as a data URI carrying the file's own MIME type.

    The reader's header is dropped and replaced with one built from
    ``source.mime_type``. Everything after the first comma of the reader's
    data URI is taken as the payload.

    Args:
        source: The file to encode
        reader: The reader used to fetch the file

    Returns:
        EncodedRecord: The file name and its data URI

    Raises:
        ReadError: If the file could not be read, or the reader returned
                   something that is not a data URI
    """
    data_uri = await reader.read_as_data_uri(source)
    try:
        _, payload = split_data_uri(data_uri)
    except ValueError as e:
        raise ReadError(source, str(e)) from e

    content = build_header(source.mime_type) + payload
    logger.debug(f"Encoded {source.name} ({len(content)} characters)")
    return EncodedRecord(file_name=source.name, content=content)


async def encode_batch(sources: Sequence[SourceFile], reader: DataUriReader) -> List[EncodedRecord]:
    """
    Encode a batch of files concurrently.

    All reads start at once. The result keeps the order of ``sources``.
    If any read fails the whole batch fails and no records are returned.

    Raises:
        ReadError: For the first file that failed
    """
    logger.info(f"Encoding {len(sources)} files...")
    records = await asyncio.gather(*(encode_file(source, reader) for source in sources))
    return list(records)
