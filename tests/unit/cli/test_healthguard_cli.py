"""CLI tests for the healthguard commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from healthguard import __version__
from healthguard.cli import cli

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("GUARD_MODE", raising=False)
    monkeypatch.delenv("HEALTHGUARD_DEBUG", raising=False)


@pytest.fixture
def audited_project(project: Path, write_project, valid_audit) -> Path:
    write_project({
        "tmp/audit_summary.md": valid_audit,
        "src/ui/Clean.tsx": '<div className="bg-primary" />\n',
        "src/ui/Dirty.tsx": '<div className="bg-red-500" />\n',
        "src/data/patients.repo.ts": "client.from('patients').select('*')\n",
    })
    return project


def _check(root: Path, *args: str):
    return runner.invoke(
        cli,
        ["check", "--project-root", str(root), "--timestamp-mode", "deterministic", *args],
    )


def test_version() -> None:
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_check_passes_on_clean_files(audited_project: Path) -> None:
    result = _check(audited_project, "src/ui/Clean.tsx")

    assert result.exit_code == 0, result.output
    assert "HEALTH GUARD PASSED" in result.stdout
    assert (audited_project / "tmp" / "health_guard_violations.md").exists()


def test_check_fails_with_violations(audited_project: Path) -> None:
    result = _check(audited_project, "--fast", "src/ui/Dirty.tsx")

    assert result.exit_code == 1
    assert "HEALTH GUARD FAILED" in result.stdout
    assert "UI_HARDCODE" in result.stdout
    assert (audited_project / "tmp" / "health_guard_report_1970-01-01.md").exists()


def test_fast_mode_from_environment_skips_tenant_gate(
    audited_project: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("GUARD_MODE", "fast")

    fast = _check(audited_project, "src/data/patients.repo.ts")
    full = _check(audited_project, "--mode", "full", "src/data/patients.repo.ts")

    assert fast.exit_code == 0, fast.output
    assert full.exit_code == 1
    assert "RLS_RISK" in full.stdout


def test_invalid_mode_is_rejected(audited_project: Path) -> None:
    result = _check(audited_project, "--mode", "turbo", "src/ui/Clean.tsx")

    assert result.exit_code == 2


def test_empty_staged_set_passes(project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _nothing_staged(args: list[str], *, repo_root: Path) -> str:
        return ""

    monkeypatch.setattr("healthguard.git.changeset.run_git", _nothing_staged)

    result = _check(project)

    assert result.exit_code == 0
    assert "No staged files to validate" in result.stdout
    assert not (project / "tmp").exists()


def test_unexpected_error_exits_one(audited_project: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    def _explode(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr("healthguard.guard.write_report", _explode)

    result = _check(audited_project, "src/ui/Clean.tsx")

    assert result.exit_code == 1
    assert "Health Guard Error" in result.stdout
    assert "disk on fire" in result.stdout


def test_json_summary(audited_project: Path) -> None:
    result = _check(audited_project, "--json", "--full", "src/ui/Dirty.tsx")

    assert result.exit_code == 1
    payload = json.loads(result.stdout[result.stdout.index("{\n"):])
    assert payload["status"] == "failed"
    assert payload["mode"] == "full"
    assert [item["code"] for item in payload["violations"]["items"]] == ["UI_HARDCODE"]


def test_reasons_lists_every_code() -> None:
    result = runner.invoke(cli, ["reasons"])

    assert result.exit_code == 0
    for code in ("NO_AUDIT", "PATH_GUESS", "WRAPPERS_MISSING", "PROMPT_FORMAT_ERROR"):
        assert code in result.stdout


def test_manifests_show_defaults(project: Path) -> None:
    result = runner.invoke(cli, ["manifests", "show", "rls", "--project-root", str(project)])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["rls"]["source"] == "default"
    assert payload["rls"]["path"] is None
    assert "patients" in payload["rls"]["manifest"]["clinical_entities"]


def test_manifests_show_unknown_kind(project: Path) -> None:
    result = runner.invoke(cli, ["manifests", "show", "colors", "--project-root", str(project)])

    assert result.exit_code == 2


def test_manifests_init_then_show_custom(project: Path) -> None:
    init = runner.invoke(cli, ["manifests", "init", "--project-root", str(project)])

    assert init.exit_code == 0
    assert (project / "scripts" / "sentinel" / "soc-manifest.json").exists()

    again = runner.invoke(cli, ["manifests", "init", "--project-root", str(project)])
    assert "already exist" in again.stdout

    shown = runner.invoke(cli, ["manifests", "show", "--project-root", str(project)])
    payload = json.loads(shown.stdout)
    assert {kind: entry["source"] for kind, entry in payload.items()} == {
        "soc": "custom",
        "rls": "custom",
        "tokens": "custom",
    }
