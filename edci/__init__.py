"""
EDCI Engine

Emergency Department Congestion Index scoring with data acquisition,
alerting and reporting support.
"""

from .__version__ import __version__

# Keep package init lightweight and safe
# Automation and reporting modules should be imported explicitly by users

# Core Engine
from .core.calculator import (
    compute_edci,
    compute_legacy_edci,
    classify_status,
)
from .core.models import (
    SeverityCounts,
    StaffingCounts,
    FlowCounts,
    EDCIResult,
    EDCIStatus,
)
from .core.validator import validate_inputs
from .core.errors import EDCIError, InvalidInputError

# Configuration
from .config.weight_config import WeightConfig, DEFAULT_WEIGHT_CONFIG

__all__ = [
    "__version__",
    "compute_edci",
    "compute_legacy_edci",
    "classify_status",
    "SeverityCounts",
    "StaffingCounts",
    "FlowCounts",
    "EDCIResult",
    "EDCIStatus",
    "validate_inputs",
    "EDCIError",
    "InvalidInputError",
    "WeightConfig",
    "DEFAULT_WEIGHT_CONFIG",
]
