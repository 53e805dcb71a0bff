"""
Report notes that exist in only one of the two note collections. Run from project root:

  python -m securenotes.scripts.check_replication

Exit status is 0 when the collections agree, 1 when they diverge, 2 when the store is unreachable.
Nothing is repaired; divergent ids are printed for an operator to reconcile.
"""

import logging
import sys

from securenotes.core.config import get_settings
from securenotes.core.database import Database
from securenotes.core.errors import StoreUnavailable
from securenotes.core.logging import configure_logging
from securenotes.services.note_store import DualWriteNoteStore
from securenotes.services.outage import OutageFlag

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    configure_logging(settings)
    database = Database(settings)
    store = DualWriteNoteStore(database, OutageFlag(), read_retries=settings.DB_READ_RETRIES)
    try:
        report = store.find_divergence()
    except StoreUnavailable as e:
        logger.error("Replication check failed: %s", e.cause)
        return 2
    finally:
        database.dispose()

    if report.consistent:
        print(f"Collections agree ({report.in_both} notes).")
        return 0
    if report.only_in_primary:
        print(f"Only in notes_primary: {', '.join(map(str, report.only_in_primary))}")
    if report.only_in_fallback:
        print(f"Only in notes_fallback: {', '.join(map(str, report.only_in_fallback))}")
    logger.warning(
        "Replication check found divergence",
        extra={
            "only_in_primary": len(report.only_in_primary),
            "only_in_fallback": len(report.only_in_fallback),
        },
    )
    return 1


if __name__ == "__main__":
    sys.exit(main())
