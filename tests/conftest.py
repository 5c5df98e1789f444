import pytest

from lnhelper.core.models import LoudnessMeasurement, NormalizationTargets, ProcessOutput

LOG_HEAD = """\
Input #0, mov,mp4,m4a,3gp,3g2,mj2, from 'input.mov':
  Metadata:
    major_brand     : qt
  Duration: 00:03:12.48, start: 0.000000, bitrate: 10452 kb/s
  Stream #0:0[0x1](und): Video: h264 (High) (avc1 / 0x31637661), yuv420p, 1920x1080, 10191 kb/s, 25 fps
  Stream #0:1[0x2](und): Audio: aac (LC) (mp4a / 0x6134706D), 48000 Hz, stereo, fltp, 256 kb/s
Stream mapping:
  Stream #0:1 -> #0:0 (aac (native) -> pcm_s16le (native))
Output #0, null, to 'pipe:':
  Stream #0:0(und): Audio: pcm_s16le, 192000 Hz, stereo, s16, 6144 kb/s
size=N/A time=00:03:12.48 bitrate=N/A speed= 241x
[Parsed_loudnorm_0 @ 0x55d0c1a3e8c0] 
"""

RECORD = """\
{
	"input_i" : "-23.5",
	"input_tp" : "-3.00",
	"input_lra" : "7.10",
	"input_thresh" : "-33.50",
	"output_i" : "-18.12",
	"output_tp" : "-1.40",
	"output_lra" : "5.60",
	"output_thresh" : "-28.20",
	"normalization_type" : "dynamic",
	"target_offset" : "1.20"
}
"""


@pytest.fixture
def ffmpeg_log():
    return LOG_HEAD + RECORD


@pytest.fixture
def targets():
    return NormalizationTargets(
        integrated_loudness_target=-18.0,
        loudness_range_target=12.0,
        true_peak_target=-1.0,
    )


@pytest.fixture
def measurement():
    return LoudnessMeasurement(
        integrated_loudness="-23.5",
        true_peak="-3.0",
        loudness_range="7.1",
        threshold="-33.5",
        target_offset="1.2",
    )


class FakeEngine:
    """Stands in for FfmpegEngine; records the arguments it was given."""

    binary = "ffmpeg"

    def __init__(self, text="", returncode=0, error=None):
        self.output = ProcessOutput(text=text, returncode=returncode)
        self.error = error
        self.calls = []

    def run(self, args):
        self.calls.append(list(args))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def fake_engine():
    return FakeEngine
