# Copyright 2026 Kezie Iwueke
# SPDX-License-Identifier: Apache-2.0

# src/foreman_host/logging/log.py

from __future__ import annotations

import logging
from pathlib import Path
from datetime import datetime, timezone
import uuid

DEFAULT_LOG_DIR = Path.home() / ".foreman_host" / "logs"


class _RunIdFilter(logging.Filter):
    """Stamps every record with the id of the current CLI invocation."""

    def __init__(self, run_id: str):
        super().__init__()
        self.run_id = run_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = self.run_id[:8]
        return True


def init_logging(
    *,
    base_dir: Path | None = None,
    name: str = "foreman_host",
    verbose: bool = False,
) -> tuple[logging.Logger, str, Path]:
    """
    One log file per invocation with the full DEBUG trace (redacted
    request bodies, retries, decoded responses). The console only shows
    warnings unless --verbose is passed, so command output stays valid
    JSON. urllib3 is held at WARNING unless --verbose is passed.
    """
    run_id = str(uuid.uuid4())
    base_dir = base_dir or DEFAULT_LOG_DIR
    base_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    log_path = base_dir / f"{name}-{ts}-{run_id}.log"

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    fh = logging.FileHandler(log_path)
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s | %(run_id)s | %(levelname)-7s | %(module)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    fh.addFilter(_RunIdFilter(run_id))

    ch = logging.StreamHandler()
    ch.setLevel(logging.DEBUG if verbose else logging.WARNING)
    ch.setFormatter(logging.Formatter("[foreman-host] %(levelname)s: %(message)s"))

    logger.addHandler(fh)
    logger.addHandler(ch)

    logging.getLogger("urllib3").setLevel(logging.DEBUG if verbose else logging.WARNING)

    logger.debug("run_id=%s log_file=%s", run_id, log_path)

    return logger, run_id, log_path
