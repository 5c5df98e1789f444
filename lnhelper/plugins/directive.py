from __future__ import annotations

from ..core.models import LoudnessMeasurement, NormalizationTargets
from .targets import format_number

RESAMPLE_SUFFIX = ",aresample=osr=48000,aresample=resampler=soxr:precision=28"


def build_filter(targets: NormalizationTargets, measurement: LoudnessMeasurement, resample: bool = False) -> str:
    # Option order matters to consumers that compare directives textually; keep it fixed.
    flt = (
        "loudnorm=linear=true"
        f":I={format_number(targets.integrated_loudness_target)}"
        f":LRA={format_number(targets.loudness_range_target)}"
        f":TP={format_number(targets.true_peak_target)}"
        f":measured_I={measurement.integrated_loudness}"
        f":measured_TP={measurement.true_peak}"
        f":measured_LRA={measurement.loudness_range}"
        f":measured_thresh={measurement.threshold}"
        f":offset={measurement.target_offset}"
        ":print_format=summary"
    )
    if resample:
        flt += RESAMPLE_SUFFIX
    return flt


def build_directive(targets: NormalizationTargets, measurement: LoudnessMeasurement, resample: bool = False) -> str:
    return "-af " + build_filter(targets, measurement, resample=resample)
