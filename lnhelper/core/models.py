from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class NormalizationTargets:
    integrated_loudness_target: float
    loudness_range_target: float
    true_peak_target: float


@dataclass(frozen=True)
class LoudnessMeasurement:
    # Readings are kept exactly as loudnorm printed them.
    integrated_loudness: str
    true_peak: str
    loudness_range: str
    threshold: str
    target_offset: str


@dataclass(frozen=True)
class ProcessOutput:
    text: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class HeadroomCheck:
    tp_headroom: Decimal
    required_gain: Decimal

    @property
    def sufficient(self) -> bool:
        return not (self.required_gain > self.tp_headroom)
