from .loader import (
    load_config,
    load_weight_config,
    load_api_settings,
    load_notification_settings,
)
from .settings import ApiSettings, NotificationSettings
from .defaults import DEFAULT_CONFIG
from .weight_config import (
    WeightConfig,
    LevelWeights,
    BlendWeights,
    Thresholds,
    DEFAULT_WEIGHT_CONFIG,
)

__all__ = [
    "load_config",
    "load_weight_config",
    "load_api_settings",
    "load_notification_settings",
    "ApiSettings",
    "NotificationSettings",
    "DEFAULT_CONFIG",
    "WeightConfig",
    "LevelWeights",
    "BlendWeights",
    "Thresholds",
    "DEFAULT_WEIGHT_CONFIG",
]
