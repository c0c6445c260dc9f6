from datetime import datetime, timedelta, timezone

from edci.config.settings import NotificationSettings
from edci.policy.engine import AlertEngine

T0 = datetime(2025, 7, 21, 8, 0, tzinfo=timezone.utc)
SETTINGS = NotificationSettings(
    enabled=True, warning_threshold=25.0, critical_threshold=30.0, interval_minutes=30
)


def test_quiet_hospitals_raise_nothing(make_scored):
    engine = AlertEngine(SETTINGS)
    assert engine.evaluate([make_scored("H001", 10), make_scored("H002", 24)], now=T0) == []


def test_warning_and_critical_levels(make_scored):
    engine = AlertEngine(SETTINGS)
    alerts = engine.evaluate([make_scored("H001", 26), make_scored("H002", 30)], now=T0)

    assert [(a.hospital_code, a.level) for a in alerts] == [
        ("H001", "warning"),
        ("H002", "critical"),
    ]
    assert alerts[1].edci == 30.0
    assert "CRITICAL" in alerts[1].message


def test_repeat_alert_suppressed_within_interval(make_scored):
    engine = AlertEngine(SETTINGS)
    engine.evaluate([make_scored("H001", 26)], now=T0)

    assert engine.evaluate([make_scored("H001", 27)], now=T0 + timedelta(minutes=10)) == []

    later = engine.evaluate([make_scored("H001", 27)], now=T0 + timedelta(minutes=31))
    assert [a.level for a in later] == ["warning"]


def test_escalation_notifies_immediately(make_scored):
    engine = AlertEngine(SETTINGS)
    engine.evaluate([make_scored("H001", 26)], now=T0)

    escalated = engine.evaluate([make_scored("H001", 35)], now=T0 + timedelta(minutes=5))
    assert [a.level for a in escalated] == ["critical"]


def test_disabled_notifications(make_scored):
    engine = AlertEngine(NotificationSettings(enabled=False))
    assert engine.evaluate([make_scored("H001", 99)], now=T0) == []
