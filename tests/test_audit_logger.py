"""
Tests for the JSON-lines audit logger.
"""

from riskpro.audit.logger import AuditLogger
from riskpro.models.audit_models import AuditEntry


def test_log_and_read_back(tmp_path):
    audit = AuditLogger(str(tmp_path / "audit.jsonl"))
    audit.log(AuditEntry(action="create", entity="risk", entity_id=1, user_id=1, changes={"title": "A"}))
    audit.log(AuditEntry(action="delete", entity="risk", entity_id=1, user_id=2))

    entries = audit.read_recent()
    assert [e["action"] for e in entries] == ["create", "delete"]
    assert entries[0]["changes"] == {"title": "A"}
    assert "timestamp" in entries[0]


def test_read_recent_limits_and_skips_corrupt_lines(tmp_path):
    path = tmp_path / "audit.jsonl"
    audit = AuditLogger(str(path))
    for i in range(5):
        audit.log(AuditEntry(action="update", entity="project", entity_id=i))
    with open(path, "a") as f:
        f.write("{not json\n")

    recent = audit.read_recent(count=2)
    assert [e["entity_id"] for e in recent] == [3, 4]


def test_missing_file_reads_empty(tmp_path):
    audit = AuditLogger(str(tmp_path / "nothing.jsonl"))
    assert audit.read_recent() == []
    assert audit.read_recent(count=0) == []
