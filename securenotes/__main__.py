"""
Run the API server:

  python -m securenotes

Listens on PORT (default 3000); use a process manager and `uvicorn securenotes.main:app` in production.
"""

import sys

import uvicorn

from securenotes.core.config import get_settings


def main() -> int:
    settings = get_settings()
    uvicorn.run(
        "securenotes.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
