from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from edci.acquisition.fetcher import FetchResult, SOURCE_API, SOURCE_MOCK
from edci.acquisition.mock_data import generate_mock_hospital_data
from edci.automation.batch_runner import run_dir_for, score_census_file
from edci.automation.poller import _scheduled_cycle, run_cycle
from edci.config.loader import load_config
from edci.config.settings import NotificationSettings
from edci.monitoring.metrics import MetricsCollector
from edci.policy.engine import AlertEngine

NOW = datetime(2025, 7, 21, 9, 30, tzinfo=timezone.utc)


def _fetch_mock(settings):
    return FetchResult(records=generate_mock_hospital_data(seed=42, now=NOW), source=SOURCE_MOCK)


# -------------------------------------------------
# Census files
# -------------------------------------------------

def test_score_census_file(census_df, tmp_path):
    src = tmp_path / "census.csv"
    census_df.to_csv(src, index=False)

    result = score_census_file(src, load_config(None), tmp_path / "run")

    assert result["file"] == "census.csv"
    assert Path(result["export"]).name == "census_edci.csv"
    assert Path(result["export"]).exists()
    assert result["overview"]["hospitals"] == 3


def test_score_census_file_for_user(census_df, tmp_path):
    src = tmp_path / "census.csv"
    census_df.to_csv(src, index=False)
    config = load_config(None)
    config["users"] = [{"username": "op", "role": "operator", "allowed_hospitals": ["H002"]}]

    result = score_census_file(src, config, tmp_path / "run", fmt="xlsx", username="op")

    assert result["export"].endswith(".xlsx")
    assert result["overview"]["hospitals"] == 1


def test_run_dir_for():
    assert run_dir_for("runs", NOW) == Path("runs") / "2025-07-21_09-30-00"


# -------------------------------------------------
# Refresh cycle
# -------------------------------------------------

def test_run_cycle_scores_every_hospital():
    report = run_cycle(load_config(None), fetch=_fetch_mock, now=NOW)

    assert report.source == SOURCE_MOCK
    assert report.overview["hospitals"] == 11
    assert len(report.scored) == 11
    assert report.export is None
    assert report.metrics["hospitals_scored"] == 11
    assert "duration_sec" in report.metrics


def test_run_cycle_uses_one_config_snapshot():
    config = load_config(None)
    config["edci"]["thresholds"] = {"normal": 0.5, "warning": 1.0}

    report = run_cycle(config, fetch=_fetch_mock, now=NOW)

    assert report.overview["critical"] == 11


def test_run_cycle_user_filter():
    config = load_config(None)
    config["users"] = [{"username": "op", "role": "operator", "allowed_hospitals": ["H001", "H005"]}]

    report = run_cycle(config, username="op", fetch=_fetch_mock, now=NOW)
    assert [s.hospital_code for s in report.scored] == ["H001", "H005"]

    nobody = run_cycle(config, username="ghost", fetch=_fetch_mock, now=NOW)
    assert nobody.scored == []


def test_run_cycle_alerts_and_export(tmp_path):
    config = load_config(None)
    config["notifications"].update({"warning_threshold": 0.1, "critical_threshold": 1000})
    config["export"] = {"enabled": True, "format": "csv"}
    config["output_dir"] = str(tmp_path)

    report = run_cycle(config, fetch=_fetch_mock, now=NOW)

    assert len(report.alerts) == 11
    assert {a.level for a in report.alerts} == {"warning"}
    assert Path(report.export) == tmp_path / "2025-07-21_09-30-00" / "snapshot.csv"
    assert len(pd.read_csv(report.export, encoding="utf-8-sig")) == 11


def test_run_cycle_reports_fallback_error():
    def failing_fetch(settings):
        result = _fetch_mock(settings)
        result.error = "API connection failed: 503; switched to mock data"
        return result

    report = run_cycle(load_config(None), fetch=failing_fetch, now=NOW)
    assert report.error.startswith("API connection failed")


def test_run_cycle_with_api_records():
    def api_fetch(settings):
        return FetchResult(records=generate_mock_hospital_data(seed=1, now=NOW)[:2], source=SOURCE_API)

    report = run_cycle(load_config(None), fetch=api_fetch, now=NOW)
    assert report.source == SOURCE_API
    assert report.overview["hospitals"] == 2


# -------------------------------------------------
# Metrics
# -------------------------------------------------

def test_metrics_collector():
    metrics = MetricsCollector()
    metrics.incr("alerts")
    metrics.incr("alerts", 2)

    collected = metrics.collect()
    assert collected["alerts"] == 3
    assert collected["duration_sec"] >= 0
    assert collected["memory_mb"] > 0


def test_scheduled_cycle_picks_up_notification_edits(write_config, tmp_path):
    path = write_config(
        "notifications:\n"
        "  enabled: true\n"
        "  warning_threshold: 0.1\n"
        "  critical_threshold: 1000\n"
        "  interval_minutes: 5\n"
        f"output_dir: {tmp_path}\n"
    )
    engine = AlertEngine(NotificationSettings(warning_threshold=500, critical_threshold=900))
    engine._last_sent[("H999", "warning")] = NOW

    _scheduled_cycle(str(path), engine, None)

    assert engine.settings.warning_threshold == 0.1
    assert engine.settings.interval_minutes == 5
    # history from earlier ticks is kept alongside the new alerts
    assert ("H999", "warning") in engine._last_sent
    assert ("H001", "warning") in engine._last_sent
