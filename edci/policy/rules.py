ALERT_WARNING = "warning"
ALERT_CRITICAL = "critical"


def alert_level(edci: float, warning_threshold: float, critical_threshold: float):
    if edci >= critical_threshold:
        return ALERT_CRITICAL
    if edci >= warning_threshold:
        return ALERT_WARNING
    return None


def suppress_if_recent(last_sent, now, interval_seconds: float):
    if last_sent is None:
        return None
    elapsed = (now - last_sent).total_seconds()
    if elapsed < interval_seconds:
        return {
            "status": "suppressed",
            "reason": f"notified_{int(elapsed)}s_ago",
        }
    return None
