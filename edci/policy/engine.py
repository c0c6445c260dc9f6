from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from edci.config.settings import NotificationSettings
from edci.policy.rules import alert_level, suppress_if_recent
from edci.scoring.batch import ScoredHospital
from edci.utils.logger import get_logger

log = get_logger("alerts")


@dataclass(frozen=True)
class Alert:
    hospital_code: str
    hospital_name: str
    level: str  # warning | critical
    edci: float
    triggered_at: datetime

    @property
    def message(self) -> str:
        return (
            f"[{self.level.upper()}] {self.hospital_name} ({self.hospital_code}) "
            f"EDCI {self.edci:.2f}"
        )


class AlertEngine:
    """
    Decides which hospitals need a notification this cycle.

    A hospital is notified at most once per interval for each alert
    level, so escalating to critical notifies at once. Delivery is left
    to the caller.
    """

    def __init__(self, settings: NotificationSettings = NotificationSettings()):
        self.settings = settings
        self._last_sent: Dict[Tuple[str, str], datetime] = {}

    def evaluate(
        self,
        scored: Iterable[ScoredHospital],
        now: Optional[datetime] = None,
    ) -> List[Alert]:
        if not self.settings.enabled:
            return []

        now = now or datetime.now(timezone.utc)
        interval = self.settings.interval_minutes * 60
        alerts = []

        for item in scored:
            level = alert_level(
                item.result.edci,
                self.settings.warning_threshold,
                self.settings.critical_threshold,
            )
            if level is None:
                continue

            key = (item.hospital_code, level)
            suppressed = suppress_if_recent(self._last_sent.get(key), now, interval)
            if suppressed:
                log.debug(
                    "Alert for %s suppressed: %s",
                    item.hospital_code,
                    suppressed["reason"],
                )
                continue

            self._last_sent[key] = now
            alerts.append(
                Alert(
                    hospital_code=item.hospital_code,
                    hospital_name=item.record.hospital_name,
                    level=level,
                    edci=item.result.edci,
                    triggered_at=now,
                )
            )

        return alerts
