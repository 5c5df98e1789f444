from __future__ import annotations
import re
from decimal import Decimal
from typing import Tuple, Union

from ..core.errors import InvalidNumericInput
from ..core.models import NormalizationTargets

INTEGRATED_RANGE: Tuple[float, float] = (-70.0, -5.0)
LRA_RANGE: Tuple[float, float] = (1.0, 20.0)
TRUE_PEAK_RANGE: Tuple[float, float] = (-9.0, 0.0)

# Plain decimal / exponent notation or infinity; no "1_0", no non-ASCII digits, no nan.
DECIMAL_RE = re.compile(r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf(?:inity)?)", re.ASCII | re.IGNORECASE)

Numeric = Union[str, float, int]


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def parse_decimal(value: Numeric, option: str) -> float:
    text = str(value).strip()
    if not DECIMAL_RE.fullmatch(text):
        raise InvalidNumericInput(option, value)
    return float(text)


def validate_targets(integrated: Numeric, lra: Numeric, true_peak: Numeric) -> NormalizationTargets:
    """Parse the three loudness targets and saturate them to loudnorm's accepted ranges.

    Out-of-range values are corrected silently; only unparsable text is an error.
    """
    return NormalizationTargets(
        integrated_loudness_target=clamp(parse_decimal(integrated, "I"), *INTEGRATED_RANGE),
        loudness_range_target=clamp(parse_decimal(lra, "LRA"), *LRA_RANGE),
        true_peak_target=clamp(parse_decimal(true_peak, "TP"), *TRUE_PEAK_RANGE),
    )


def format_number(value: float) -> str:
    # -18.0 -> "-18", -16.5 -> "-16.5", -1e-05 -> "-0.00001"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")
