"""Core domain models for duplicate image groups."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from core.services.group_store import GroupStore


@dataclass(frozen=True)
class ImageRecord:
    """A single image line from a duplicate report."""

    relative_path: str
    width: int
    height: int


@dataclass(frozen=True)
class DuplicateGroup:
    """Images judged duplicates of one another, in report order.

    The first item is the canonical copy and provides the group's sort key.
    """

    items: tuple[ImageRecord, ...]

    def __post_init__(self) -> None:
        if not self.items:
            raise ValueError("DuplicateGroup requires at least one image")

    @property
    def first(self) -> ImageRecord:
        """Canonical (first reported) image of the group."""
        return self.items[0]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[ImageRecord]:
        return iter(self.items)


@dataclass(frozen=True)
class ReviewState:
    """Process-wide state shared by every request handler.

    Built once at startup and never mutated afterwards.
    """

    store: GroupStore
    base_dir: Path
    trash_dir: Path

    @classmethod
    def for_report(cls, report_path: str | Path, store: GroupStore) -> ReviewState:
        """Derive base and trash directories from the report location."""
        base_dir = Path(report_path).absolute().parent
        return cls(store=store, base_dir=base_dir, trash_dir=base_dir / "trash")
