"""Tests for the audit-summary completeness gate."""

import os
import time
from datetime import UTC, datetime

from healthguard.gates.audit import (
    DECISION_HEADER,
    REQUIRED_SECTIONS,
    check_audit_content,
    check_audit_summary,
    extract_section,
    find_latest_audit,
)
from healthguard.reasons import ReasonCode


def _write_audit(project, name: str, content: str, *, age_seconds: float = 0):
    audit_dir = project / "tmp"
    audit_dir.mkdir(exist_ok=True)
    path = audit_dir / name
    path.write_text(content, encoding="utf-8")
    if age_seconds:
        stamp = time.time() - age_seconds
        os.utime(path, (stamp, stamp))
    return path


def test_valid_audit_has_no_violations(project, make_context, valid_audit):
    _write_audit(project, "audit_intake.md", valid_audit)

    assert check_audit_summary(make_context({})) == []


def test_missing_tmp_directory(make_context):
    violations = check_audit_summary(make_context({}))

    assert len(violations) == 1
    assert violations[0].code == ReasonCode.NO_AUDIT
    assert "directory" in violations[0].message


def test_no_audit_artifact(project, make_context):
    (project / "tmp").mkdir()
    (project / "tmp" / "notes.md").write_text("not an audit")

    violations = check_audit_summary(make_context({}))

    assert len(violations) == 1
    assert "No AUDIT SUMMARY found" in violations[0].message


def test_stale_audit_still_checks_content(project, make_context, valid_audit):
    _write_audit(project, "AUDIT_old.md", valid_audit, age_seconds=30 * 3600)

    violations = check_audit_summary(make_context({}, now=datetime.now(UTC)))

    assert len(violations) == 1
    assert "stale" in violations[0].message
    assert "30 hours old" in violations[0].message


def test_latest_audit_is_most_recent(project, valid_audit):
    _write_audit(project, "audit_a.md", "old", age_seconds=3600)
    newest = _write_audit(project, "audit_b.md", valid_audit)

    assert find_latest_audit(project / "tmp") == newest


def test_missing_decision_section_yields_exactly_one_violation(valid_audit):
    content = valid_audit.split(DECISION_HEADER)[0]

    violations = check_audit_content(content)

    assert len(violations) == 1
    assert DECISION_HEADER in violations[0].message
    assert "missing required section" in violations[0].message


def test_decision_without_explicit_token(valid_audit):
    content = valid_audit.replace("Decision: GO", "Decision: pending review by the team")

    violations = check_audit_content(content)

    assert [v.message for v in violations] == [
        "AUDIT SUMMARY Go/No-Go decision must explicitly state GO or NO-GO"
    ]


def test_negative_decision_is_accepted(valid_audit):
    content = valid_audit.replace("Decision: GO", "Decision: NO-GO until the RLS fix lands")

    assert check_audit_content(content) == []


def test_brief_section_and_missing_keywords_are_separate(valid_audit):
    section = extract_section(valid_audit, "### ✅ Validación Zod")
    content = valid_audit.replace(section, "### ✅ Validación Zod\nTBD\n\n")

    messages = [v.message for v in check_audit_content(content)]

    assert any("too brief" in m for m in messages)
    assert any("missing required content: schema, validation" in m for m in messages)
    assert len(messages) == 2


def test_keyword_match_is_case_insensitive(valid_audit):
    content = valid_audit.replace("Objetivo", "OBJETIVO").replace("Alcance", "alcance")

    assert check_audit_content(content) == []


def test_every_missing_header_is_reported():
    violations = check_audit_content("# empty audit\n")

    assert len(violations) == len(REQUIRED_SECTIONS)
    assert all(v.code == ReasonCode.NO_AUDIT for v in violations)
