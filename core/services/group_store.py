"""Indexed, read-only store over parsed duplicate groups."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from core.models import DuplicateGroup, ImageRecord
from core.services.interfaces import INVALID_GROUP, INVALID_IMAGE, ImageLookup
from core.services.sort_service import SortService


class GroupStore:
    """Address groups and images by zero-based `(group_index, image_index)`.

    The store sorts its groups once on construction and is immutable
    afterwards, so it can be shared between request threads without locking.
    Lookups never raise: out-of-range coordinates return None.
    """

    def __init__(self, groups: Iterable[DuplicateGroup], sorter: SortService | None = None) -> None:
        self._groups: tuple[DuplicateGroup, ...] = tuple((sorter or SortService()).sort(groups))

    def group_count(self) -> int:
        return len(self._groups)

    def is_empty(self) -> bool:
        return not self._groups

    def group(self, group_index: int) -> DuplicateGroup | None:
        """Return the group at `group_index`, or None when out of range."""
        if 0 <= group_index < len(self._groups):
            return self._groups[group_index]
        return None

    def image(self, group_index: int, image_index: int) -> ImageRecord | None:
        """Return the image at the address, or None when out of range."""
        return self.lookup(group_index, image_index).image

    def lookup(self, group_index: int, image_index: int) -> ImageLookup:
        """Resolve an address, reporting which coordinate was invalid."""
        group = self.group(group_index)
        if group is None:
            return ImageLookup(image=None, error=INVALID_GROUP)
        if not 0 <= image_index < len(group):
            return ImageLookup(image=None, error=INVALID_IMAGE)
        return ImageLookup(image=group.items[image_index])

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[DuplicateGroup]:
        return iter(self._groups)
