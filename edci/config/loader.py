import yaml
import copy
import logging
from pathlib import Path

from .defaults import DEFAULT_CONFIG
from edci.config.settings import ApiSettings, NotificationSettings
from edci.config.weight_config import WeightConfig

logger = logging.getLogger(__name__)

BLEND_SUM_TOLERANCE = 1e-6


# -------------------------------------------------
# MAIN CONFIG LOADER
# -------------------------------------------------
def load_config(path: str | None) -> dict:
    """
    Load and merge user config with defaults.

    Rules:
    - Defaults ALWAYS win if user omits fields
    - Nested sections merge one level deep
    - output_dir MUST always exist
    """

    # -------------------------------------------------
    # 1. Load user config (if provided)
    # -------------------------------------------------
    user_config = {}

    if path:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}

        if not isinstance(user_config, dict):
            raise ValueError("Config file must contain a YAML dictionary")

    # -------------------------------------------------
    # 2. Merge with defaults
    # -------------------------------------------------
    config = copy.deepcopy(DEFAULT_CONFIG)

    for key, value in user_config.items():
        if isinstance(value, dict) and isinstance(config.get(key), dict):
            config[key].update(value)
        else:
            config[key] = value

    # -------------------------------------------------
    # 3. Enforce required invariants
    # -------------------------------------------------
    config.setdefault("output_dir", "runs")
    config.setdefault("metadata", {})

    if config.get("users") is None:
        config["users"] = []

    return config


# -------------------------------------------------
# SECTION BUILDERS
# -------------------------------------------------
def load_weight_config(cfg: dict) -> WeightConfig:
    """
    Build the immutable scoring snapshot from the `edci` section.
    """
    weight_config = WeightConfig.from_dict(cfg.get("edci", {}))

    # Accepted as-is, but an off-scale blend is worth flagging
    total = weight_config.blend_weights.total
    if abs(total - 1.0) > BLEND_SUM_TOLERANCE:
        logger.warning(
            "EDCI blend weights sum to %.4f, not 1.0; scores will not "
            "be on the scale of the configured thresholds",
            total,
        )

    return weight_config


def load_api_settings(cfg: dict) -> ApiSettings:
    api = cfg.get("api", {}) or {}
    return ApiSettings(
        base_url=str(api.get("base_url") or ""),
        endpoint=str(api.get("endpoint") or ""),
        api_key=str(api.get("api_key") or ""),
        timeout=float(api.get("timeout", 30)),
        retry_count=int(api.get("retry_count", 3)),
        backoff_seconds=float(api.get("backoff_seconds", 1.0)),
        refresh_interval=float(api.get("refresh_interval", 5)),
    )


def load_notification_settings(cfg: dict) -> NotificationSettings:
    notifications = cfg.get("notifications", {}) or {}
    return NotificationSettings(
        enabled=bool(notifications.get("enabled", True)),
        warning_threshold=float(notifications.get("warning_threshold", 25.0)),
        critical_threshold=float(notifications.get("critical_threshold", 30.0)),
        interval_minutes=float(notifications.get("interval_minutes", 30)),
    )
