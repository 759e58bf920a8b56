"""Duplicate report parsing.

A report lists one duplicate group per run of lines: a line starting with a tab
continues the current group, any other line opens a new one. Each line looks
like `img(4032x3024): 2019/IMG_0001.jpg`.
"""

from __future__ import annotations

from pathlib import Path
import re

from loguru import logger

from core.models import DuplicateGroup, ImageRecord
from core.services.group_store import GroupStore
from core.services.sort_service import SortService

LINE_RE = re.compile(r"^\s*\w+\(([0-9]+)x([0-9]+)\): (.+)$")
UINT32_MAX = 2**32 - 1


class ReportParseError(ValueError):
    """A report line is malformed; carries the raw line and its number."""

    def __init__(self, reason: str, line: str, line_number: int) -> None:
        super().__init__(f"{reason} (line {line_number}): {line}")
        self.reason = reason
        self.line = line
        self.line_number = line_number


def _parse_dimension(value: str, line: str, line_number: int) -> int:
    number = int(value)
    if number > UINT32_MAX:
        raise ReportParseError("Dimension out of range", line, line_number)
    return number


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [ln[:-1] if ln.endswith("\r") else ln for ln in lines]


def parse_line(line: str, line_number: int = 1) -> ImageRecord:
    """Parse one report line into an `ImageRecord`."""
    m = LINE_RE.match(line)
    if m is None:
        raise ReportParseError("Line does not match expected format", line, line_number)
    return ImageRecord(
        relative_path=m.group(3),
        width=_parse_dimension(m.group(1), line, line_number),
        height=_parse_dimension(m.group(2), line, line_number),
    )


def parse_report(text: str, sorter: SortService | None = None) -> list[DuplicateGroup]:
    """Parse report text into groups sorted by first-image path."""
    groups: list[DuplicateGroup] = []
    pending: list[ImageRecord] = []
    for line_number, line in enumerate(_split_lines(text), start=1):
        if not line.startswith("\t"):
            if pending:
                groups.append(DuplicateGroup(tuple(pending)))
            pending = []
        pending.append(parse_line(line, line_number))
    if pending:
        groups.append(DuplicateGroup(tuple(pending)))
    return (sorter or SortService()).sort(groups)


class ReportRepository:
    """Load duplicate reports from disk."""

    def load(self, report_path: str | Path) -> list[DuplicateGroup]:
        """Read and parse the report at `report_path`.

        Raises `ReportParseError` on malformed content and `OSError` or
        `UnicodeDecodeError` when the file cannot be read.
        """
        path = Path(report_path)
        with path.open("r", encoding="utf-8", newline="") as f:
            text = f.read()
        groups = parse_report(text)
        logger.info(
            "Loaded {} duplicate groups ({} images) from {}",
            len(groups),
            sum(len(g) for g in groups),
            path,
        )
        return groups

    def load_store(self, report_path: str | Path) -> GroupStore:
        """Read the report at `report_path` into a `GroupStore`."""
        return GroupStore(self.load(report_path))
