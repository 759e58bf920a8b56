"""Image lookup and transfer for the review server.

Resolves addresses against the shared `ReviewState`, answers conditional
requests from the address fingerprint alone, and opens files for streaming.
"""

from __future__ import annotations

import mimetypes
import os

from loguru import logger

from core.models import ReviewState
from core.services.fingerprint import compute_etag, etag_matches
from core.services.interfaces import ImageTransfer, TransferStatus

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def guess_content_type(relative_path: str) -> str:
    """MIME type from the file extension, generic binary when unknown."""
    ctype, _ = mimetypes.guess_type(relative_path)
    return ctype or DEFAULT_CONTENT_TYPE


class ImageService:
    """Produce `ImageTransfer` results for image fetch requests."""

    def __init__(self, state: ReviewState) -> None:
        self._state = state

    def etag_for(self, group_index: int, image_index: int, relative_path: str) -> str:
        return compute_etag(self._state.base_dir, group_index, image_index, relative_path)

    def fetch(
        self, group_index: int, image_index: int, if_none_match: str | None = None
    ) -> ImageTransfer:
        """Resolve an address and open its file for transfer.

        The file is not touched when `if_none_match` already covers the ETag.
        On `OK` the caller owns `stream` and must close it.
        """
        found = self._state.store.lookup(group_index, image_index)
        if found.image is None:
            return ImageTransfer(TransferStatus.NOT_FOUND, message=found.error or "")

        record = found.image
        etag = self.etag_for(group_index, image_index, record.relative_path)
        if etag_matches(etag, if_none_match):
            return ImageTransfer(TransferStatus.NOT_MODIFIED, etag=etag)

        source = self._state.base_dir / record.relative_path
        try:
            # pylint: disable-next=consider-using-with
            stream = source.open("rb")
        except (FileNotFoundError, NotADirectoryError) as ex:
            logger.info("Image missing, serving placeholder: {} ({})", source, ex)
            return ImageTransfer(TransferStatus.MISSING, etag=etag, message=str(ex))
        except OSError as ex:
            logger.error("Open failed for {}: {}", source, ex)
            return ImageTransfer(TransferStatus.ERROR, etag=etag, message=str(ex))

        try:
            size = os.fstat(stream.fileno()).st_size
        except OSError as ex:
            stream.close()
            logger.error("Stat failed for {}: {}", source, ex)
            return ImageTransfer(TransferStatus.ERROR, etag=etag, message=str(ex))

        return ImageTransfer(
            TransferStatus.OK,
            etag=etag,
            stream=stream,
            content_type=guess_content_type(record.relative_path),
            content_length=size,
        )
