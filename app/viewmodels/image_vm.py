"""Lightweight view model wrapper around `ImageRecord`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePosixPath

from core.models import ImageRecord


@dataclass
class ImageVM:
    """Expose convenient properties for templates."""

    group_index: int
    image_index: int
    record: ImageRecord

    @property
    def relative_path(self) -> str:
        return self.record.relative_path

    @property
    def file_name(self) -> str:
        """Base name of the relative path."""
        return PurePosixPath(self.record.relative_path).name

    @property
    def dimensions(self) -> str:
        """Pixel dimensions as `WIDTHxHEIGHT`."""
        return f"{self.record.width}x{self.record.height}"

    @property
    def megapixels(self) -> float:
        return round(self.record.width * self.record.height / 1_000_000, 1)
