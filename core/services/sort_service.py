"""Sorting service for `DuplicateGroup` collections.

Groups are ordered by the relative path of their first image so that indices
stay the same across runs on an unchanged report.
"""

from __future__ import annotations

from collections.abc import Iterable

from core.models import DuplicateGroup


class SortService:
    """Provides sorting utilities for `DuplicateGroup` lists."""

    def sort(self, groups: Iterable[DuplicateGroup]) -> list[DuplicateGroup]:
        """Return groups sorted by first-image path.

        Plain string comparison (case-sensitive); the sort is stable, so groups
        sharing a first path keep their report order.
        """
        return sorted(groups, key=lambda g: g.first.relative_path)
