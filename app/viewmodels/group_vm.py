from __future__ import annotations

from dataclasses import dataclass, field

from app.viewmodels.image_vm import ImageVM
from core.models import DuplicateGroup


@dataclass
class GroupVM:
    group_index: int
    group_count: int
    items: list[ImageVM] = field(default_factory=list)

    @classmethod
    def build(cls, group_index: int, group: DuplicateGroup, group_count: int) -> GroupVM:
        items = [ImageVM(group_index, i, rec) for i, rec in enumerate(group)]
        return cls(group_index=group_index, group_count=group_count, items=items)

    @property
    def is_next_group(self) -> bool:
        return self.group_index < self.group_count - 1

    @property
    def is_prev_group(self) -> bool:
        return self.group_index > 0
