"""Shared fixtures for review server tests."""

from pathlib import Path

from core.models import ReviewState
from infrastructure.report_repository import ReportRepository

REPORT = (
    "jpeg(4x3): 2020/a.jpg\n"
    "\tjpeg(4x3): 2020/copy/a.jpg\n"
    "png(2x2): 2021/b.png\n"
    "\tpng(2x2): 2021/b.unknownext\n"
)


def write_file(path: Path, content: bytes = b"x") -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)


def make_state(root: Path, report: str = REPORT, create_images: bool = True) -> ReviewState:
    """Write `report` under `root`, create its image files, and load it."""
    report_path = root / "report.txt"
    report_path.write_text(report, encoding="utf-8")
    store = ReportRepository().load_store(report_path)
    if create_images:
        for group in store:
            for record in group:
                write_file(root / record.relative_path, f"data:{record.relative_path}".encode())
    return ReviewState.for_report(report_path, store)
