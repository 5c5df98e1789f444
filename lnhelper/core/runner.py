from __future__ import annotations
import shlex
import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from .config import Profile
from .errors import AnalysisPassFailed
from .models import NormalizationTargets
from ..plugins.targets import Numeric, validate_targets
from ..plugins.ffmpeg_tools import FfmpegEngine, build_analysis_args, build_analysis_command
from ..plugins.measurement import extract_measurement
from ..plugins.headroom import evaluate_headroom, warn_if_insufficient
from ..plugins.directive import build_directive
from ..plugins.progress import Spinner


def resolve_targets(
    profile: Profile,
    integrated: Optional[Numeric] = None,
    lra: Optional[Numeric] = None,
    true_peak: Optional[Numeric] = None,
) -> NormalizationTargets:
    """Command-line values win over the profile; both go through the same validation."""
    return validate_targets(
        integrated if integrated is not None else profile.targets.integrated,
        lra if lra is not None else profile.targets.lra,
        true_peak if true_peak is not None else profile.targets.true_peak,
    )


def run_job(
    input_path: Union[str, Path],
    targets: NormalizationTargets,
    resample: bool = False,
    engine=None,
    progress: bool = True,
    verbose: bool = False,
    diagnostics: Optional[TextIO] = None,
) -> str:
    diagnostics = diagnostics or sys.stderr
    engine = engine or FfmpegEngine()

    # 1) Measurement pass
    args = build_analysis_args(input_path, targets)
    if verbose:
        cmd = build_analysis_command(input_path, targets, getattr(engine, "binary", "ffmpeg"))
        print(f"[info] Running: {shlex.join(cmd)}", file=diagnostics)

    with Spinner(stream=diagnostics, enabled=progress):
        output = engine.run(args)

    if not output.ok:
        raise AnalysisPassFailed(output.returncode, output.text)

    # 2) Pull the loudnorm record out of the log
    measurement = extract_measurement(output.text)
    if verbose:
        print(
            f"[info] Measured I={measurement.integrated_loudness} TP={measurement.true_peak} "
            f"LRA={measurement.loudness_range} thresh={measurement.threshold} "
            f"offset={measurement.target_offset}",
            file=diagnostics,
        )

    # 3) Headroom check (advisory)
    warn_if_insufficient(evaluate_headroom(targets, measurement), stream=diagnostics)

    # 4) Second-pass directive
    return build_directive(targets, measurement, resample=resample)
