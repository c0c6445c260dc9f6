"""
Refresh cycle and interval polling.

Each cycle loads configuration once and passes that snapshot through
fetch, scoring, alerting and export, so one snapshot never mixes two
configurations.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from apscheduler.schedulers.blocking import BlockingScheduler

from edci.access.allow_list import filter_hospitals, find_user, load_users
from edci.acquisition.fetcher import fetch_hospital_data
from edci.automation.batch_runner import run_dir_for
from edci.config.loader import (
    load_api_settings,
    load_config,
    load_notification_settings,
    load_weight_config,
)
from edci.monitoring.metrics import MetricsCollector
from edci.policy.engine import Alert, AlertEngine
from edci.reporting.export import export_results
from edci.reporting.overview import status_overview
from edci.scoring.batch import ScoredHospital, score_records
from edci.utils.logger import get_logger

log = get_logger("poller")


@dataclass
class CycleReport:
    scored: List[ScoredHospital]
    source: str
    overview: Dict[str, Any]
    alerts: List[Alert] = field(default_factory=list)
    error: Optional[str] = None
    export: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)


def run_cycle(
    config: Dict[str, Any],
    alert_engine: Optional[AlertEngine] = None,
    username: Optional[str] = None,
    fetch=fetch_hospital_data,
    now: Optional[datetime] = None,
) -> CycleReport:
    metrics = MetricsCollector()
    now = now or datetime.now(timezone.utc)

    # -------------------------------------------------
    # 1. Snapshot configuration
    # -------------------------------------------------
    weight_config = load_weight_config(config)
    api_settings = load_api_settings(config)
    validate = bool(config.get("edci", {}).get("validate", False))

    # -------------------------------------------------
    # 2. Acquire + score
    # -------------------------------------------------
    fetched = fetch(api_settings)
    if fetched.error:
        log.warning(fetched.error)

    scored = score_records(fetched.records, weight_config, validate=validate)
    metrics.incr("hospitals_scored", len(scored))

    # -------------------------------------------------
    # 3. Optional per-user view
    # -------------------------------------------------
    if username is not None:
        user = find_user(load_users(config.get("users", [])), username)
        if user is None:
            log.warning("Unknown user %r; no hospitals visible", username)
        scored = filter_hospitals(scored, user)

    # -------------------------------------------------
    # 4. Alerts
    # -------------------------------------------------
    alert_engine = alert_engine or AlertEngine(load_notification_settings(config))
    alerts = alert_engine.evaluate(scored, now=now)
    for alert in alerts:
        log.warning(alert.message)
    metrics.incr("alerts", len(alerts))

    # -------------------------------------------------
    # 5. Overview + optional export
    # -------------------------------------------------
    overview = status_overview(scored)
    log.info(
        "Cycle complete: source=%s hospitals=%d normal=%d warning=%d critical=%d avg=%.2f",
        fetched.source,
        overview["hospitals"],
        overview["normal"],
        overview["warning"],
        overview["critical"],
        overview["average_edci"],
    )

    export_path = None
    export_cfg = config.get("export", {})
    if export_cfg.get("enabled"):
        fmt = export_cfg.get("format", "csv")
        run_dir = run_dir_for(config.get("output_dir", "runs"), now)
        export_path = str(export_results(scored, Path(run_dir) / f"snapshot.{fmt}", fmt=fmt))

    return CycleReport(
        scored=scored,
        source=fetched.source,
        overview=overview,
        alerts=alerts,
        error=fetched.error,
        export=export_path,
        metrics=metrics.collect(),
    )


def _scheduled_cycle(config_path: Optional[str], alert_engine: AlertEngine, username: Optional[str]):
    # Reload settings every tick so operator edits apply from the next cycle
    config = load_config(config_path)
    # Suppression history on the engine survives the swap
    alert_engine.settings = load_notification_settings(config)
    report = run_cycle(config, alert_engine=alert_engine, username=username)
    log.info("Cycle metrics: %s", report.metrics)


def start_poller(
    config_path: Optional[str] = None,
    username: Optional[str] = None,
) -> None:
    """
    Run a refresh cycle every `api.refresh_interval` minutes.
    """
    config = load_config(config_path)
    interval = load_api_settings(config).refresh_interval
    if interval <= 0:
        raise ValueError("api.refresh_interval must be positive")

    alert_engine = AlertEngine(load_notification_settings(config))
    scheduler = BlockingScheduler()

    log.info("Starting poller every %s minutes", interval)

    scheduler.add_job(
        _scheduled_cycle,
        trigger="interval",
        id="edci-refresh-job",
        replace_existing=True,
        minutes=interval,
        next_run_time=datetime.now(timezone.utc),
        max_instances=1,
        coalesce=True,
        kwargs={
            "config_path": config_path,
            "alert_engine": alert_engine,
            "username": username,
        },
    )

    log.info("Poller started. Press CTRL+C to stop.")

    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        scheduler.shutdown(wait=False)
        log.info("Poller stopped.")
