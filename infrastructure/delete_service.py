"""Trash (quarantine) execution service.

Moves a reviewed image from the base directory into the parallel trash
directory, keeping its relative path, and optionally appends each attempt to an
audit CSV log.
"""

from __future__ import annotations

import csv
from datetime import datetime
import errno
import os
from pathlib import Path

from loguru import logger

from core.models import ReviewState
from core.services.interfaces import TrashResult, TrashStatus

TRASH_LOG_NAME = "trash_log.csv"
TRASH_LOG_HEADERS = ["Timestamp", "GroupIndex", "ImageIndex", "RelativePath", "Success", "Reason"]


class DeleteService:
    """Coordinates trash operations and audit logging."""

    def __init__(self, state: ReviewState, log_dir: str | Path | None = None) -> None:
        self._state = state
        self._log_dir = Path(log_dir) if log_dir else None

    def trash(self, group_index: int, image_index: int) -> TrashResult:
        """Move the image at the address into the trash directory.

        An invalid address returns `NOT_FOUND` without touching the
        filesystem. The rename is never retried as copy-and-delete, so a trash
        directory on another filesystem fails with an explicit error. An existing
        file in the trash is never overwritten.
        """
        found = self._state.store.lookup(group_index, image_index)
        if found.image is None:
            return TrashResult(TrashStatus.NOT_FOUND, message=found.error or "")

        relative_path = found.image.relative_path
        source = self._state.base_dir / relative_path
        target = self._state.trash_dir / relative_path
        if Path(relative_path).is_absolute():
            result = TrashResult(
                TrashStatus.ERROR,
                f"Refusing to trash a path outside the base directory: {relative_path}",
                str(source),
                str(target),
            )
        else:
            result = self._move(source, target)
        logger.info(
            "Trash {} -> {}: {}{}",
            source,
            target,
            result.status.value,
            f" ({result.message})" if result.message else "",
        )
        self._write_audit(group_index, image_index, relative_path, result)
        return result

    def _move(self, source: Path, target: Path) -> TrashResult:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as ex:
            logger.error("Create trash directory failed for {}: {}", target.parent, ex)
            return TrashResult(TrashStatus.ERROR, str(ex), str(source), str(target))

        # A missing source is left to os.rename so the error names it.
        if target.exists() and source.exists():
            message = f"Trash target already exists: {target}"
            logger.error("Refusing to overwrite {}", target)
            return TrashResult(TrashStatus.ERROR, message, str(source), str(target))

        try:
            os.rename(source, target)
        except OSError as ex:
            message = str(ex)
            if ex.errno == errno.EXDEV:
                message = f"Cross-device move not supported: {ex}"
            logger.error("Rename failed for {}: {}", source, message)
            return TrashResult(TrashStatus.ERROR, message, str(source), str(target))
        return TrashResult(TrashStatus.OK, "", str(source), str(target))

    def _write_audit(
        self, group_index: int, image_index: int, relative_path: str, result: TrashResult
    ) -> None:
        if self._log_dir is None:
            return
        try:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            log_path = self._log_dir / TRASH_LOG_NAME
            is_new = not log_path.exists()
            with log_path.open("a", encoding="utf-8", newline="") as f:
                writer = csv.writer(f)
                if is_new:
                    writer.writerow(TRASH_LOG_HEADERS)
                writer.writerow(
                    [
                        datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
                        group_index,
                        image_index,
                        relative_path,
                        1 if result.ok else 0,
                        result.message,
                    ]
                )
        except OSError as ex:
            logger.error("Write trash log failed: {}", ex)
