from lnhelper.core.models import LoudnessMeasurement
from lnhelper.plugins.directive import RESAMPLE_SUFFIX, build_directive, build_filter
from lnhelper.plugins.targets import validate_targets

EXPECTED = (
    "-af loudnorm=linear=true:I=-18:LRA=12:TP=-1:measured_I=-23.5:measured_TP=-3"
    ":measured_LRA=7.1:measured_thresh=-33.5:offset=1.2:print_format=summary"
)


def test_example_directive():
    targets = validate_targets("-18.0", "12.0", "-1.0")
    measured = LoudnessMeasurement(
        integrated_loudness="-23.5",
        true_peak="-3",
        loudness_range="7.1",
        threshold="-33.5",
        target_offset="1.2",
    )
    assert build_directive(targets, measured) == EXPECTED


def test_resample_suffix_only_when_requested(targets, measurement):
    plain = build_directive(targets, measurement, resample=False)
    resampled = build_directive(targets, measurement, resample=True)
    assert "aresample" not in plain
    assert resampled == plain + RESAMPLE_SUFFIX
    assert RESAMPLE_SUFFIX == ",aresample=osr=48000,aresample=resampler=soxr:precision=28"


def test_measured_fields_are_not_reformatted(targets):
    measured = LoudnessMeasurement(
        integrated_loudness="-23.50",
        true_peak="-3.000",
        loudness_range="07.10",
        threshold="-33.5000000001",
        target_offset="+0.00",
    )
    d = build_directive(targets, measured)
    for key, value in [("measured_I", "-23.50"), ("measured_TP", "-3.000"), ("measured_LRA", "07.10"),
                       ("measured_thresh", "-33.5000000001"), ("offset", "+0.00")]:
        assert f":{key}={value}:" in d


def test_clamped_targets_are_used(measurement):
    targets = validate_targets("-90", "0.1", "2")
    assert ":I=-70:LRA=1:TP=0:" in build_directive(targets, measurement)


def test_filter_has_no_option_prefix(targets, measurement):
    assert build_filter(targets, measurement).startswith("loudnorm=linear=true:")
    assert build_directive(targets, measurement) == "-af " + build_filter(targets, measurement)
