"""Logging helpers."""
from __future__ import annotations

import logging
from pathlib import Path

# httpx logs every request at INFO; retries are already reported by the extraction client.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str, log_dir: Path) -> None:
    """Configure CLI logging to stderr and ``<log_dir>/comparison.log``."""
    log_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(log_dir / "comparison.log"),
        ],
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
