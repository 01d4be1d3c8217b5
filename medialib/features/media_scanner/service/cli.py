"""
cli.py

Runs a scan of the configured upload tree from the command line.

Examples:
  python -m medialib.features.media_scanner.service.cli
  python -m medialib.features.media_scanner.service.cli --deep
  UPLOADS_DIR=/srv/www/uploads USE_SQLITE=true medialib-scan --deep
"""

import argparse
import logging
import sys
from typing import List, Optional

from medialib.core.common.enums import ScanMode
from medialib.core.config.settings import settings
from medialib.core.database.connection import init_db
from medialib.features.notices.domain.models import ScanNotice
from ..domain.exceptions import ScanAbortedError
from .api import media_scanner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="medialib-scan", description="Register unregistered uploads in the media catalog")
    p.add_argument("--deep", action="store_true", help="Recursively scan all subfolders in uploads")
    p.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level (default: %(default)s)")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    init_db()

    mode = ScanMode.DEEP if args.deep else ScanMode.NARROW
    try:
        stats = media_scanner.run(mode)
    except ScanAbortedError as e:
        logger.error(f"Scan aborted: {e}")
        stats = e.partial_stats
        print(_summary(mode, stats))
        return 1

    print(_summary(mode, stats))
    return 0


def _summary(mode: ScanMode, stats) -> str:
    label = "Deep scan (all uploads)" if mode == ScanMode.DEEP else "Scan (current month)"
    return ScanNotice(label=label, stats=stats).message()


if __name__ == "__main__":
    sys.exit(main())
