from __future__ import annotations
import os
import shutil
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from ..core.errors import ProcessLaunchFailure
from ..core.models import NormalizationTargets, ProcessOutput
from .targets import format_number


def analysis_filter(targets: NormalizationTargets) -> str:
    return (
        f"loudnorm=I={format_number(targets.integrated_loudness_target)}"
        f":LRA={format_number(targets.loudness_range_target)}"
        f":tp={format_number(targets.true_peak_target)}"
        ":print_format=json"
    )


def build_analysis_args(input_path: Union[str, Path], targets: NormalizationTargets) -> List[str]:
    # Measurement only: video dropped, decoded audio discarded to the null muxer.
    return [
        "-i", str(input_path),
        "-hide_banner",
        "-vn",
        "-af", analysis_filter(targets),
        "-f", "null", "-",
    ]


def build_analysis_command(
    input_path: Union[str, Path],
    targets: NormalizationTargets,
    binary: str = "ffmpeg",
) -> List[str]:
    return [binary] + build_analysis_args(input_path, targets)


def ensure_binary(binary: str) -> Optional[str]:
    """Return the resolved path of ``binary``, or None when it is not on PATH."""
    return shutil.which(binary)


class FfmpegEngine:
    """Runs ffmpeg as a blocking subprocess and hands back its diagnostic stream.

    A non-zero exit is reported through ``ProcessOutput.returncode``; only a failure
    to start the binary raises.
    """

    def __init__(self, binary: str = "ffmpeg"):
        self.binary = binary

    def run(self, args: List[str]) -> ProcessOutput:
        cmd = [self.binary] + list(args)
        try:
            result = subprocess.run(
                cmd,
                cwd=os.getcwd(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as e:
            raise ProcessLaunchFailure(self.binary, "not found. Install ffmpeg and ensure it's in PATH.") from e
        except PermissionError as e:
            raise ProcessLaunchFailure(self.binary, "permission denied.") from e
        except OSError as e:
            raise ProcessLaunchFailure(self.binary, str(e)) from e

        text = (result.stderr or b"").decode("utf-8", errors="replace")
        return ProcessOutput(text=text, returncode=result.returncode)
