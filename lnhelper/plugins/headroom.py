from __future__ import annotations
import sys
from decimal import Decimal, InvalidOperation
from typing import Optional, TextIO

from ..core.errors import MeasurementFieldNotNumeric
from ..core.models import HeadroomCheck, LoudnessMeasurement, NormalizationTargets


def _reading(value: str, field: str) -> Decimal:
    # Decimal keeps "-18 - -20.1" and "-1 - -3.1" exactly equal.
    try:
        number = Decimal(value)
    except InvalidOperation as e:
        raise MeasurementFieldNotNumeric(field, value) from e
    if number.is_nan():
        raise MeasurementFieldNotNumeric(field, value)
    return number


def evaluate_headroom(targets: NormalizationTargets, measurement: LoudnessMeasurement) -> HeadroomCheck:
    measured_tp = _reading(measurement.true_peak, "TP")
    measured_i = _reading(measurement.integrated_loudness, "I")
    return HeadroomCheck(
        tp_headroom=Decimal(repr(targets.true_peak_target)) - measured_tp,
        required_gain=Decimal(repr(targets.integrated_loudness_target)) - measured_i,
    )


def warn_if_insufficient(check: HeadroomCheck, stream: Optional[TextIO] = None) -> bool:
    """Print a warning when linear gain would push the true peak over its ceiling.

    loudnorm falls back to dynamic mode on its own in that case, so this is advisory only.
    """
    if check.sufficient:
        return False
    print(
        "[warn] Not enough headroom! Dynamic normalization will be used. "
        f"Headroom: {check.tp_headroom:.2f}dB, required: {check.required_gain:.2f}dB.",
        file=stream or sys.stderr,
    )
    return True
