"""
Media Service - Encodes attachments for transport to AnkiConnect.

storeMediaFile takes the file content as base64 text, so every attachment is
read and encoded here before anything is sent.
"""

import base64
import os
from typing import Iterable, List, Optional, Tuple

import aiofiles

from ..config import Config
from ..errors import EncodingError
from ..models import EncodedMedia, MediaFile
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


class MediaEncoder:
    """Read attachments and turn them into base64 payloads."""

    def __init__(self, max_bytes: Optional[int] = None):
        """
        Initialize the encoder.

        Args:
            max_bytes: Largest accepted file (defaults to Config.MAX_MEDIA_BYTES)
        """
        self.max_bytes = max_bytes or Config.MAX_MEDIA_BYTES

    async def _read_bytes(self, media: MediaFile) -> bytes:
        if media.data is not None:
            return media.data
        if not media.path:
            raise EncodingError(media.name, "no path or data")
        try:
            size = os.path.getsize(media.path)
            if size > self.max_bytes:
                raise EncodingError(media.name, f"{size} bytes exceeds the {self.max_bytes} byte limit")
            async with aiofiles.open(media.path, "rb") as f:
                return await f.read()
        except OSError as e:
            raise EncodingError(media.name, e.strerror or str(e)) from e

    async def encode(self, media: Optional[MediaFile]) -> Optional[EncodedMedia]:
        """
        Encode one attachment.

        Args:
            media: Selected file, or None

        Returns:
            EncodedMedia, or None when no file was given

        Raises:
            EncodingError: If the bytes cannot be read or are too large
        """
        if media is None:
            return None

        content = await self._read_bytes(media)
        if len(content) > self.max_bytes:
            raise EncodingError(media.name, f"{len(content)} bytes exceeds the {self.max_bytes} byte limit")

        filename = os.path.basename(media.name) or os.path.basename(media.path or "")
        if not filename:
            raise EncodingError(media.name, "empty filename")

        return EncodedMedia(
            filename=filename,
            data=base64.b64encode(content).decode("ascii"),
        )

    async def encode_many(
        self,
        files: Iterable[MediaFile]
    ) -> Tuple[List[EncodedMedia], List[EncodingError]]:
        """
        Encode several attachments, one at a time and in order.

        A failing file does not stop the rest.

        Returns:
            Tuple of (encoded files in input order, errors in input order)
        """
        encoded: List[EncodedMedia] = []
        errors: List[EncodingError] = []
        for media in files:
            try:
                result = await self.encode(media)
            except EncodingError as e:
                logger.warning("%s", e)
                errors.append(e)
                continue
            if result is not None:
                encoded.append(result)
        return encoded, errors
