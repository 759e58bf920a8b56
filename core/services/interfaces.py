"""Core service interfaces and shared data structures.

This module defines simple dataclasses that represent lookup, transfer and
trash results used across the infrastructure and web layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import BinaryIO

from core.models import ImageRecord

INVALID_GROUP = "Invalid group index"
INVALID_IMAGE = "Invalid image index"


@dataclass(frozen=True)
class ImageLookup:
    """Outcome of resolving an address against the group store.

    Attributes:
        image: Resolved record, or None when the address is invalid.
        error: Which coordinate was invalid, when `image` is None.
    """

    image: ImageRecord | None
    error: str | None = None

    @property
    def found(self) -> bool:
        return self.image is not None


class TransferStatus(Enum):
    OK = "ok"
    NOT_MODIFIED = "not_modified"
    MISSING = "missing"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class ImageTransfer:
    """Outcome of an image fetch.

    Attributes:
        status: What the HTTP layer should send.
        etag: Quoted entity tag, set once the address resolved.
        stream: Open binary file for `OK` transfers; the caller closes it.
        content_type: Guessed MIME type for `OK` transfers.
        content_length: Exact byte size for `OK` transfers.
        message: Human-readable reason for `NOT_FOUND` and `ERROR`.
    """

    status: TransferStatus
    etag: str | None = None
    stream: BinaryIO | None = None
    content_type: str | None = None
    content_length: int | None = None
    message: str = ""


class TrashStatus(Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass
class TrashResult:
    """Outcome of a trash operation.

    Attributes:
        status: `OK`, `NOT_FOUND` for an invalid address, `ERROR` for a
            filesystem failure.
        message: Error text for failures.
        source: Path the file was moved from, when the address resolved.
        target: Path the file was (or would have been) moved to.
    """

    status: TrashStatus
    message: str = ""
    source: str | None = None
    target: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is TrashStatus.OK
