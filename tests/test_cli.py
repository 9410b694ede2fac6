"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from plan_engine.cli import build_plan_json, load_feedback, load_profile, load_records, main


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.fixture
def records_file(tmp_path: Path) -> Path:
    newest = datetime(2025, 1, 15, 7, 30, tzinfo=timezone.utc)
    stamps = [
        (newest - timedelta(days=2 * i)).strftime("%Y-%m-%dT%H:%M:%S.000Z") for i in range(18)
    ]
    records = [
        {
            "id": i,
            "createdAt": stamp,
            "summary": {
                "startTimeIso": stamp,
                "trimmed": {"distanceM": 10_000, "durationSec": 3_600},
                "intensity": 50,
            },
        }
        for i, stamp in enumerate(stamps)
    ]
    records.append({"id": "broken", "createdAt": "not a date", "summary": {}})
    return _write(tmp_path / "workouts.json", records)


@pytest.fixture
def profile_file(tmp_path: Path) -> Path:
    return _write(
        tmp_path / "profile.json",
        {"preferredRunDays": [2, 4, 6], "preferredSurface": "ROAD", "constraints": {"shoes": {}}},
    )


class TestLoaders:
    def test_bad_created_at_is_skipped(self, records_file: Path) -> None:
        records = load_records(records_file)
        assert len(records) == 18
        assert records[0].id == 0

    def test_profile_values_are_reencoded(self, profile_file: Path) -> None:
        profile = load_profile(profile_file)
        assert json.loads(profile.preferred_run_days) == [2, 4, 6]
        assert profile.preferred_surface == "ROAD"
        assert json.loads(profile.constraints) == {"shoes": {}}

    def test_profile_must_be_an_object(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            load_profile(_write(tmp_path / "p.json", [1, 2]))

    def test_feedback_defaults(self, tmp_path: Path) -> None:
        feedback = load_feedback(_write(tmp_path / "f.json", {"character": "tempo"}))
        assert feedback.character == "tempo"
        assert feedback.hr_stable is True
        assert feedback.pace_equality == 1.0
        assert feedback.weekly_load_contribution == 0.0


class TestBuildPlanJson:
    def test_output_is_plan_json(self, records_file: Path, profile_file: Path) -> None:
        payload = json.loads(build_plan_json(records_file, profile_file, 28))
        assert payload["windowDays"] == 28
        assert payload["weekStartIso"] == "2025-01-13T00:00:00.000Z"
        assert [s["day"] for s in payload["sessions"]] == [
            "mon", "tue", "wed", "thu", "fri", "sat", "sun",
        ]
        assert payload["summary"]["longRunDay"] == "sat"
        assert payload["appliedAdjustmentsCodes"] == ["surface_constraint"]

    def test_feedback_is_applied(
        self, records_file: Path, profile_file: Path, tmp_path: Path
    ) -> None:
        feedback = _write(
            tmp_path / "feedback.json",
            {"character": "interwał", "hrStable": True, "paceEquality": 0.9,
             "weeklyLoadContribution": 60},
        )
        payload = json.loads(build_plan_json(records_file, profile_file, 28, feedback))
        assert payload["appliedAdjustmentsCodes"] == ["surface_constraint", "reduce_load"]

    def test_output_is_deterministic(self, records_file: Path, profile_file: Path) -> None:
        assert build_plan_json(records_file, profile_file, 28) == build_plan_json(
            records_file, profile_file, 28
        )


class TestMain:
    def test_prints_plan(
        self, records_file: Path, profile_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = main(["--records", str(records_file), "--profile", str(profile_file)])
        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert len(payload["sessions"]) == 7

    def test_record_at_end_of_calendar(
        self, tmp_path: Path, profile_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        records = _write(
            tmp_path / "edge.json",
            [
                {
                    "id": 1,
                    "createdAt": "2025-01-15T07:30:00.000Z",
                    "summary": {"trimmed": {"distanceM": 10_000, "durationSec": 3_600}},
                },
                {
                    "id": 2,
                    "createdAt": "2025-01-14T07:30:00.000Z",
                    "summary": {
                        "startTimeIso": "9999-12-30T10:00:00Z",
                        "trimmed": {"durationSec": 1_800},
                    },
                },
            ],
        )
        assert main(["--records", str(records), "--profile", str(profile_file)]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["generatedAtIso"] == "2025-01-15T07:30:00.000Z"

    def test_missing_file(self, tmp_path: Path, profile_file: Path) -> None:
        code = main(["--records", str(tmp_path / "missing.json"), "--profile", str(profile_file)])
        assert code == 2

    def test_non_positive_days(self, records_file: Path, profile_file: Path) -> None:
        with pytest.raises(SystemExit) as excinfo:
            main(["--records", str(records_file), "--profile", str(profile_file), "--days", "0"])
        assert excinfo.value.code == 2
