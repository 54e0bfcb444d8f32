"""Audit logging for configuration changes.

Every resource change the reconciler makes (or would make, in dry-run)
is written as one JSON line to a dedicated audit log, separate from the
application log.
"""
import json
import logging
import os
from datetime import datetime, timezone
from dataclasses import dataclass, asdict, field
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

# Create dedicated audit logger
audit_logger = logging.getLogger("eos_converge.audit")

DEFAULT_LOG_DIR = "~/.eos-converge"


def default_audit_file() -> str:
    return os.path.join(os.path.expanduser(DEFAULT_LOG_DIR), "audit.log")


def setup_audit_logging(log_dir: Optional[str] = None) -> str:
    """Configure audit logging to file.

    Args:
        log_dir: Directory for audit logs. Defaults to ~/.eos-converge/

    Returns:
        Path of the audit log file
    """
    if log_dir is None:
        log_dir = os.path.expanduser(DEFAULT_LOG_DIR)

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    audit_file = os.path.join(log_dir, "audit.log")

    audit_logger.setLevel(logging.INFO)
    audit_logger.handlers.clear()

    handler = RotatingFileHandler(
        audit_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=10,
    )
    # One JSON document per line
    handler.setFormatter(logging.Formatter("%(message)s"))
    audit_logger.addHandler(handler)
    audit_logger.propagate = False

    return audit_file


@dataclass
class ChangeRecord:
    """Record of a configuration change."""
    timestamp: str
    node_id: str
    operation: str  # "create eos_vlan", "modify eos_interface", ...
    dry_run: bool
    success: bool
    parameters: dict
    commands: list[str] = field(default_factory=list)
    error: Optional[str] = None

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=None)

    @classmethod
    def from_json(cls, json_str: str) -> "ChangeRecord":
        data = json.loads(json_str)
        return cls(**data)


class ChangeTracker:
    """Log configuration changes for one node."""

    def __init__(self, node_id: str):
        self.node_id = node_id

    def log_change(
        self,
        operation: str,
        parameters: dict,
        success: bool,
        commands: Optional[list[str]] = None,
        error: Optional[str] = None,
        dry_run: bool = False,
    ) -> ChangeRecord:
        """Log a configuration change.

        Returns:
            The ChangeRecord that was logged
        """
        record = ChangeRecord(
            timestamp=datetime.now(timezone.utc).isoformat(),
            node_id=self.node_id,
            operation=operation,
            dry_run=dry_run,
            success=success,
            parameters=parameters,
            commands=list(commands or []),
            error=error,
        )
        audit_logger.info(record.to_json())
        return record


def get_recent_changes(
    log_file: Optional[str] = None,
    node_id: Optional[str] = None,
    operation: Optional[str] = None,
    limit: int = 100,
) -> list[ChangeRecord]:
    """Read recent changes from the audit log, most recent first.

    Args:
        log_file: Path to audit log. Defaults to ~/.eos-converge/audit.log
        node_id: Filter by node ID
        operation: Filter by operation
        limit: Maximum number of records to return
    """
    if log_file is None:
        log_file = default_audit_file()

    if not os.path.exists(log_file):
        return []

    records = []
    with open(log_file, "r") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                record = ChangeRecord.from_json(line)
            except (json.JSONDecodeError, TypeError):
                continue  # Skip malformed lines

            if node_id and record.node_id != node_id:
                continue
            if operation and record.operation != operation:
                continue
            records.append(record)

    return list(reversed(records[-limit:]))
