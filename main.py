from __future__ import annotations

import argparse
from pathlib import Path

from loguru import logger

from app.web import create_app
from core.models import ReviewState
from infrastructure.logging import init_logging
from infrastructure.report_repository import ReportParseError, ReportRepository
from infrastructure.settings import JsonSettings

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Review and trash duplicate photos from a report")
    ap.add_argument("filename", help="Duplicate report produced by the photo de-duplication scan")
    ap.add_argument("--settings", help="Optional JSON settings file")
    ap.add_argument("--host", help=f"Bind address (default {DEFAULT_HOST})")
    ap.add_argument("--port", type=int, help=f"Bind port (default {DEFAULT_PORT})")
    return ap.parse_args(argv)


def load_state(report_path: str | Path) -> ReviewState:
    """Parse the report and derive base/trash directories from its location."""
    store = ReportRepository().load_store(report_path)
    return ReviewState.for_report(report_path, store)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    settings = JsonSettings(args.settings) if args.settings else JsonSettings.defaults()
    init_logging(settings.get("logging.dir"), settings.get("logging.level", "INFO"))

    try:
        state = load_state(args.filename)
    except ReportParseError as ex:
        logger.error("Invalid report {}: {}", args.filename, ex)
        return 1
    except (OSError, UnicodeDecodeError) as ex:
        logger.error("Cannot read report {}: {}", args.filename, ex)
        return 1

    if state.store.is_empty():
        logger.warning("Report {} contains no duplicate groups", args.filename)
    logger.info("Base directory: {} | trash directory: {}", state.base_dir, state.trash_dir)

    app = create_app(state, settings)
    host = args.host or settings.get("server.host", DEFAULT_HOST)
    port = args.port or int(settings.get("server.port", DEFAULT_PORT))
    logger.info("Serving review UI on http://{}:{}/", host, port)
    app.run(host=host, port=port, threaded=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
