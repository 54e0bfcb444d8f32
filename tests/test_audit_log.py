"""Tests for the audit trail."""
import logging

import pytest

from eos_converge.utils.audit_log import (
    ChangeRecord,
    ChangeTracker,
    audit_logger,
    get_recent_changes,
    setup_audit_logging,
)


@pytest.fixture
def audit_file(tmp_path):
    path = setup_audit_logging(str(tmp_path))
    yield path
    for handler in list(audit_logger.handlers):
        handler.close()
        audit_logger.removeHandler(handler)
    audit_logger.propagate = True


class TestChangeRecord:
    def test_json_round_trip(self):
        record = ChangeRecord(
            timestamp="2024-01-01T00:00:00+00:00",
            node_id="leaf1",
            operation="modify eos_vlan",
            dry_run=False,
            success=True,
            parameters={"name": "10"},
            commands=["vlan 10", "name web"],
        )
        assert ChangeRecord.from_json(record.to_json()) == record


class TestChangeTracker:
    """Tests for ChangeTracker and get_recent_changes."""

    def test_log_and_read(self, audit_file):
        tracker = ChangeTracker("leaf1")
        tracker.log_change("modify eos_vlan", {"name": "10"}, True, commands=["vlan 10", "name web"])
        tracker.log_change("create eos_vlan", {"name": "30"}, False, error="rejected", dry_run=True)

        records = get_recent_changes(audit_file)
        assert [r.operation for r in records] == ["create eos_vlan", "modify eos_vlan"]
        assert records[0].error == "rejected"
        assert records[0].dry_run is True
        assert records[1].commands == ["vlan 10", "name web"]

    def test_filters(self, audit_file):
        ChangeTracker("leaf1").log_change("modify eos_vlan", {"name": "10"}, True)
        ChangeTracker("leaf2").log_change("modify eos_vlan", {"name": "10"}, True)
        ChangeTracker("leaf2").log_change("delete eos_vlan", {"name": "20"}, True)

        assert len(get_recent_changes(audit_file, node_id="leaf2")) == 2
        assert len(get_recent_changes(audit_file, operation="delete eos_vlan")) == 1
        assert len(get_recent_changes(audit_file, limit=1)) == 1

    def test_malformed_lines_skipped(self, tmp_path):
        path = tmp_path / "audit.log"
        good = ChangeRecord("t", "leaf1", "modify eos_vlan", False, True, {}).to_json()
        path.write_text(f"not json\n\n{good}\n{{\"unexpected\": 1}}\n")
        records = get_recent_changes(str(path))
        assert len(records) == 1

    def test_missing_file(self, tmp_path):
        assert get_recent_changes(str(tmp_path / "missing.log")) == []

    def test_audit_kept_out_of_application_log(self, audit_file):
        """Audit records stop at the audit logger and never reach the package logger."""
        received = []

        class Collector(logging.Handler):
            def emit(self, record):
                received.append(record)

        parent = logging.getLogger("eos_converge")
        handler = Collector(level=logging.DEBUG)
        parent.addHandler(handler)
        try:
            ChangeTracker("leaf1").log_change("modify eos_vlan", {"name": "10"}, True)
        finally:
            parent.removeHandler(handler)

        assert audit_logger.propagate is False
        assert received == []
