"""Integration tests for the civic-connect command line."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from civic_connect.cli import EXIT_FAILURE, EXIT_OK, main

POTHOLE_ARGS = [
    "--title",
    "Pothole on Oak St",
    "--category",
    "infrastructure",
    "--description",
    "A large pothole has formed near the school crossing.",
]


@pytest.fixture
def snapshot(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    for key in (
        "CIVIC_SNAPSHOT_PATH",
        "CIVIC_SEED_DEMO_DATA",
        "CIVIC_SIMULATE_ON_START",
        "CIVIC_STRICT_CATEGORIES",
        "CIVIC_REVIEW_DELAY_SECONDS",
        "CIVIC_ADVANCE_STAGGER_SECONDS",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CIVIC_WORKER_POLL_SECONDS", "0.01")
    monkeypatch.setenv("CIVIC_ENVIRONMENT", "production")
    return tmp_path / "snapshot.json"


def _run(snapshot: Path, *args: str) -> int:
    return main(["--snapshot", str(snapshot), *args])


def _submit(snapshot: Path, capsys: pytest.CaptureFixture[str]) -> str:
    assert _run(snapshot, "submit", *POTHOLE_ARGS) == EXIT_OK
    out = capsys.readouterr().out
    return out.split("Report submitted: ")[1].split()[0]


class TestSubmitAndList:
    """Tests for submit, list and show."""

    def test_submit_writes_snapshot(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        report_id = _submit(snapshot, capsys)

        data = json.loads(snapshot.read_text(encoding="utf-8"))
        stored = data["reports"][0]
        assert stored["id"] == report_id
        assert stored["status"] == "submitted"
        assert stored["assignedTo"] == "Municipal Public Works Department"
        assert stored["submittedBy"] == "anonymous"

    def test_submit_prints_authority(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "submit", *POTHOLE_ARGS) == EXIT_OK

        assert "Assigned to: Municipal Public Works Department" in capsys.readouterr().out

    def test_invalid_submission(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = _run(snapshot, "submit", "--title", "Hole")

        captured = capsys.readouterr()
        assert code == EXIT_FAILURE
        assert "error: Title must be at least 5 characters long" in captured.err
        assert "error: Please select a category" in captured.err
        assert not snapshot.exists()

    def test_offline_submitter(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "--offline", "submit", *POTHOLE_ARGS) == EXIT_OK

        data = json.loads(snapshot.read_text(encoding="utf-8"))
        assert data["reports"][0]["submittedBy"] == "offline_user"

    def test_list_and_show(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        report_id = _submit(snapshot, capsys)

        assert _run(snapshot, "list", "--category", "infrastructure") == EXIT_OK
        listing = capsys.readouterr().out
        assert report_id in listing
        assert "Pothole on Oak St" in listing

        assert _run(snapshot, "list", "--status", "resolved") == EXIT_OK
        assert "No reports found" in capsys.readouterr().out

        assert _run(snapshot, "show", report_id) == EXIT_OK
        shown = capsys.readouterr().out
        assert "Report routed to Municipal Public Works Department" in shown
        assert "Report submitted by citizen" in shown

    def test_show_missing(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "show", "ghost") == EXIT_FAILURE
        assert "Report not found: ghost" in capsys.readouterr().err


class TestLifecycleCommands:
    """Tests for advance, simulate and stats."""

    def test_advance_to_resolved(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        report_id = _submit(snapshot, capsys)

        for expected in ("Under Review", "In Progress", "Resolved"):
            assert _run(snapshot, "advance", report_id) == EXIT_OK
            assert f"is now {expected}" in capsys.readouterr().out

        assert _run(snapshot, "advance", report_id) == EXIT_OK
        assert "already resolved" in capsys.readouterr().out

        data = json.loads(snapshot.read_text(encoding="utf-8"))
        assert len(data["reports"][0]["timeline"]) == 5

    def test_advance_missing(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "advance", "ghost") == EXIT_FAILURE
        assert "Report not found: ghost" in capsys.readouterr().err

    def test_simulate_rounds(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _submit(snapshot, capsys)

        code = _run(snapshot, "simulate", "--rounds", "3", "--stagger", "0.01")

        assert code == EXIT_OK
        assert "Round 3: 1 advance(s) scheduled" in capsys.readouterr().out
        data = json.loads(snapshot.read_text(encoding="utf-8"))
        assert data["reports"][0]["status"] == "resolved"

    @pytest.mark.parametrize(
        ("option", "value"),
        [("--stagger", "0"), ("--stagger", "-1"), ("--stagger", "soon"), ("--rounds", "0")],
    )
    def test_simulate_rejects_bad_timing(
        self,
        snapshot: Path,
        capsys: pytest.CaptureFixture[str],
        option: str,
        value: str,
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            _run(snapshot, "simulate", option, value)

        assert exc_info.value.code == 2
        assert f"argument {option}" in capsys.readouterr().err

    def test_simulate_without_pending(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "simulate", "--stagger", "0.01") == EXIT_OK
        assert "No pending reports" in capsys.readouterr().out

    def test_stats(self, snapshot: Path, capsys: pytest.CaptureFixture[str]) -> None:
        report_id = _submit(snapshot, capsys)
        for _ in range(3):
            _run(snapshot, "advance", report_id)
        _submit(snapshot, capsys)

        assert _run(snapshot, "stats") == EXIT_OK
        out = capsys.readouterr().out
        assert "Total reports:   2" in out
        assert "Resolved:        1" in out
        assert "Pending:         1" in out
        assert "Resolution rate: 50%" in out
        assert "Recent activity:" in out


class TestDraftCommands:
    def test_draft_save_list_submit(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "draft", "save", *POTHOLE_ARGS) == EXIT_OK
        draft_id = capsys.readouterr().out.split("Draft saved: ")[1].split()[0]

        assert _run(snapshot, "draft", "list") == EXIT_OK
        assert draft_id in capsys.readouterr().out

        assert _run(snapshot, "draft", "submit", draft_id) == EXIT_OK
        assert "Report submitted:" in capsys.readouterr().out

        assert _run(snapshot, "draft", "list") == EXIT_OK
        assert "No drafts" in capsys.readouterr().out

    def test_draft_delete(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "draft", "save", "--title", "Hi") == EXIT_OK
        draft_id = capsys.readouterr().out.split("Draft saved: ")[1].split()[0]

        assert _run(snapshot, "draft", "submit", draft_id) == EXIT_FAILURE
        assert _run(snapshot, "draft", "delete", draft_id) == EXIT_OK
        assert _run(snapshot, "draft", "delete", draft_id) == EXIT_FAILURE


class TestSessionCommands:
    def test_register_then_submit_then_logout(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "register", "--name", "Ada", "--email", "ada@example.org") == EXIT_OK
        assert "Welcome, Ada" in capsys.readouterr().out
        user_id = json.loads(snapshot.read_text(encoding="utf-8"))["currentUser"]["id"]

        _submit(snapshot, capsys)
        data = json.loads(snapshot.read_text(encoding="utf-8"))
        assert data["reports"][0]["submittedBy"] == user_id

        assert _run(snapshot, "logout") == EXIT_OK
        assert not snapshot.exists()

    def test_register_requires_name_and_email(
        self, snapshot: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _run(snapshot, "register", "--name", "Ada") == EXIT_FAILURE
        assert "Name and email are required." in capsys.readouterr().err

    def test_settings(self, snapshot: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert _run(snapshot, "settings", "--large-text", "--language", "es") == EXIT_OK
        out = capsys.readouterr().out
        assert "large_text: True" in out
        assert "language: es" in out

        assert _run(snapshot, "settings", "--no-large-text") == EXIT_OK
        assert "large_text: False" in capsys.readouterr().out

        data = json.loads(snapshot.read_text(encoding="utf-8"))
        assert data["settings"]["language"] == "es"

    def test_command_required(self, snapshot: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
