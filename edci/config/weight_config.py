from dataclasses import dataclass, field
from typing import Any, Dict, Mapping


# -------------------------------------------------
# PER-LEVEL WEIGHTS
# -------------------------------------------------
@dataclass(frozen=True)
class LevelWeights:
    """
    Multiplier applied to the census of each triage level.
    """
    l1: float
    l2: float
    l3: float
    l4: float
    l5: float

    def __getitem__(self, level: int) -> float:
        try:
            return getattr(self, f"l{int(level)}")
        except AttributeError:
            raise KeyError(f"Unknown severity level: {level}") from None

    def as_dict(self) -> Dict[str, float]:
        return {"l1": self.l1, "l2": self.l2, "l3": self.l3, "l4": self.l4, "l5": self.l5}


@dataclass(frozen=True)
class BlendWeights:
    """
    Weights blending the four congestion channels into one index.

    Intended to sum to 1.0 so the index stays on the scale of the
    historical thresholds. Not enforced.
    """
    pbr_weight: float = 0.3
    nbr_weight: float = 0.3
    waiting_weight: float = 0.2
    overstay_weight: float = 0.2

    @property
    def total(self) -> float:
        return self.pbr_weight + self.nbr_weight + self.waiting_weight + self.overstay_weight


@dataclass(frozen=True)
class Thresholds:
    normal: float = 15.0
    warning: float = 25.0


DEFAULT_DOCTOR_WEIGHTS = LevelWeights(l1=3.0, l2=2.0, l3=1.0, l4=0.5, l5=0.2)
DEFAULT_NURSE_WEIGHTS = LevelWeights(l1=1.5, l2=1.0, l3=1.0, l4=0.5, l5=0.3)


# -------------------------------------------------
# WEIGHT CONFIG (IMMUTABLE SNAPSHOT)
# -------------------------------------------------
@dataclass(frozen=True)
class WeightConfig:
    """
    Everything the calculator needs besides the census itself.

    Frozen so that one instance can be shared by every hospital scored
    in the same refresh cycle.
    """
    doctor_weights: LevelWeights = DEFAULT_DOCTOR_WEIGHTS
    nurse_weights: LevelWeights = DEFAULT_NURSE_WEIGHTS
    resident_fte_factor: float = 0.6
    blend_weights: BlendWeights = field(default_factory=BlendWeights)
    thresholds: Thresholds = field(default_factory=Thresholds)
    precision: int = 2

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "WeightConfig":
        """
        Build a config from the `edci` settings section.

        Missing keys fall back to the defaults above.
        """
        values = values or {}

        doctor = {**DEFAULT_DOCTOR_WEIGHTS.as_dict(), **(values.get("doctor_weights") or {})}
        nurse = {**DEFAULT_NURSE_WEIGHTS.as_dict(), **(values.get("nurse_weights") or {})}

        return cls(
            doctor_weights=LevelWeights(**{k: float(v) for k, v in doctor.items()}),
            nurse_weights=LevelWeights(**{k: float(v) for k, v in nurse.items()}),
            resident_fte_factor=float(values.get("resident_fte_factor", 0.6)),
            blend_weights=BlendWeights(
                **{k: float(v) for k, v in (values.get("blend_weights") or {}).items()}
            ),
            thresholds=Thresholds(
                **{k: float(v) for k, v in (values.get("thresholds") or {}).items()}
            ),
            precision=int(values.get("precision", 2)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "doctor_weights": self.doctor_weights.as_dict(),
            "nurse_weights": self.nurse_weights.as_dict(),
            "resident_fte_factor": self.resident_fte_factor,
            "blend_weights": {
                "pbr_weight": self.blend_weights.pbr_weight,
                "nbr_weight": self.blend_weights.nbr_weight,
                "waiting_weight": self.blend_weights.waiting_weight,
                "overstay_weight": self.blend_weights.overstay_weight,
            },
            "thresholds": {
                "normal": self.thresholds.normal,
                "warning": self.thresholds.warning,
            },
            "precision": self.precision,
        }


DEFAULT_WEIGHT_CONFIG = WeightConfig()
