"""
Audit Logger — Structured JSON-lines audit trail.

Records every register change with: timestamp, action, entity, entity id,
acting user and the written field values.
"""

from __future__ import annotations

import json
import logging
import time
from collections import deque
from pathlib import Path

from riskpro.config import settings
from riskpro.models.audit_models import AuditEntry

logger = logging.getLogger("riskpro.audit")


class AuditLogger:
    """Writes structured audit entries to a JSON-lines file."""

    def __init__(self, log_path: str | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)

    def log(self, entry: AuditEntry) -> None:
        """Append an audit entry to the log file."""
        record = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            **entry.model_dump(mode="json"),
        }

        try:
            with open(self.log_path, "a") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            logger.error(f"Failed to write audit log: {e}")

    def read_recent(self, count: int = 50) -> list[dict]:
        """Most recent `count` entries, oldest first. Corrupt lines are skipped."""
        if count <= 0 or not self.log_path.exists():
            return []

        recent: deque[dict] = deque(maxlen=count)
        try:
            with open(self.log_path) as f:
                for line in f:
                    if not line.strip():
                        continue
                    try:
                        recent.append(json.loads(line))
                    except json.JSONDecodeError:
                        logger.debug(f"Skipping corrupt audit line in {self.log_path}")
        except OSError as e:
            logger.error(f"Failed to read audit log: {e}")
            return []

        return list(recent)
