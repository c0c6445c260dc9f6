from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Tuple


SEVERITY_LEVELS = (1, 2, 3, 4, 5)

# Nurse headcount assumed when a record carries no nursing data
DEFAULT_NURSE_COUNT = 1


# =====================================================
# STATUS TIERS
# =====================================================

class EDCIStatus(str, Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


# =====================================================
# INPUT COUNTS
# =====================================================

@dataclass(frozen=True)
class SeverityCounts:
    """
    Simultaneous ED census per triage level at one hospital.

    Level 1 is the most acute, level 5 the least.
    """
    level1: int = 0
    level2: int = 0
    level3: int = 0
    level4: int = 0
    level5: int = 0

    def __getitem__(self, level: int) -> int:
        if level not in SEVERITY_LEVELS:
            raise KeyError(f"Unknown severity level: {level}")
        return getattr(self, f"level{level}")

    def as_tuple(self) -> Tuple[int, int, int, int, int]:
        return (self.level1, self.level2, self.level3, self.level4, self.level5)

    @property
    def total(self) -> int:
        return sum(self.as_tuple())


@dataclass(frozen=True)
class StaffingCounts:
    attending_physicians: int = 0
    resident_physicians: int = 0
    nurses: int = DEFAULT_NURSE_COUNT


@dataclass(frozen=True)
class FlowCounts:
    waiting_for_admission: int = 0
    over_stay_hours_24: int = 0


# =====================================================
# OUTPUT
# =====================================================

@dataclass(frozen=True)
class EDCIResult:
    doctor_weighted_load: float
    effective_doctor_fte: float
    adjusted_pbr: float
    nurse_weighted_load: float
    nbr: float
    edci: float
    status: EDCIStatus

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data
