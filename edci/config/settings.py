from dataclasses import dataclass


# -------------------------------------------------
# UPSTREAM API SETTINGS
# -------------------------------------------------
@dataclass(frozen=True)
class ApiSettings:
    """
    Connection settings for the upstream hospital data API.
    """
    base_url: str = ""
    endpoint: str = ""
    api_key: str = ""
    timeout: float = 30.0          # seconds
    retry_count: int = 3
    backoff_seconds: float = 1.0
    refresh_interval: float = 5.0  # minutes

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url and self.endpoint)


# -------------------------------------------------
# NOTIFICATION SETTINGS
# -------------------------------------------------
@dataclass(frozen=True)
class NotificationSettings:
    enabled: bool = True
    warning_threshold: float = 25.0
    critical_threshold: float = 30.0
    interval_minutes: float = 30.0
