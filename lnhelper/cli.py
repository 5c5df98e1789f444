import argparse
import sys
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .core.config import default_profile_name, load_profile
from .core.errors import (
    AnalysisPassFailed,
    InvalidNumericInput,
    LoudnormHelperError,
)
from .core.runner import resolve_targets, run_job
from .plugins.ffmpeg_tools import FfmpegEngine, ensure_binary

VERSION = "0.5.0"

# Long target flags match in any case (--LRA, --Lra, ...).
LONG_TARGET_FLAGS = ("--i", "--lra", "--tp")
# Flags whose value may itself start with a hyphen (-i -2e1, -t -inf).
TARGET_FLAGS = ("-i", "-I", "-l", "-L", "-t", "-T") + LONG_TARGET_FLAGS

DESCRIPTION = """\
Helper for linear audio loudness normalization using ffmpeg's loudnorm filter.
Performs the loudness scanning pass of the given file and outputs the string
of desired loudnorm options to be included in ffmpeg arguments.

Designed to work using your shell's command substitution.
* Bash example:
  'ffmpeg -i input.mov -c:v copy -c:a libopus $(ffmpeg-lh input.mov) normalized.mkv'
* Windows CMD:
  'for /f "tokens=*" %i in ('ffmpeg-lh input.mov') do ffmpeg -i input.mov -c:v copy -c:a libopus %i normalized.mkv'
"""


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ffmpeg-lh",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("input", metavar="INPUT", type=Path, help="Path to the input file.")
    p.add_argument("-i", "-I", "--i", dest="integrated", default=None, metavar="I",
                   help="Integrated loudness target (default -18.0). Clamped to valid range [-70.0..-5.0].")
    p.add_argument("-l", "-L", "--lra", dest="lra", default=None, metavar="LRA",
                   help="Loudness range target (default 12.0). Clamped to valid range [1.0..20.0].")
    p.add_argument("-t", "-T", "--tp", dest="true_peak", default=None, metavar="TP",
                   help="Maximum true peak (default -1.0). Clamped to valid range [-9.0..0.0].")
    p.add_argument("-r", "--resample", action="store_true", default=None,
                   help="Add a resampling filter hardcoded to 48kHz after loudnorm (which might upsample to 192kHz).")
    p.add_argument("--profile", default=None,
                   help="Target preset name (profiles/<name>.yaml) or path to a YAML file. Default: $LNHELPER_PROFILE or 'default'.")
    p.add_argument("--ffmpeg", default=None, help="ffmpeg binary to run (overrides profile and $LNHELPER_FFMPEG).")
    p.add_argument("--no-progress", action="store_true", help="Never draw the progress spinner.")
    p.add_argument("-v", "--verbose", action="store_true", help="Print the analysis command and measured values to stderr.")
    p.add_argument("-V", "--version", action="version", version=f"%(prog)s {VERSION}")
    return p


def normalize_argv(argv):
    """Lowercase long target flags and glue hyphenated values onto their target flag.

    argparse only takes "-i -23" style values that look like plain negative numbers;
    "-i -2e1" or "-t -inf" are rewritten to "-i=-2e1" so they reach the validator.
    """
    out = []
    tokens = list(argv)
    k = 0
    while k < len(tokens):
        token = tokens[k]
        k += 1
        if token == "--":
            out.extend(tokens[k - 1:])
            break
        flag, sep, value = token.partition("=")
        if flag.lower() in LONG_TARGET_FLAGS:
            flag = flag.lower()
            token = flag + sep + value
        if not sep and flag in TARGET_FLAGS and k < len(tokens) and tokens[k].startswith("-"):
            token = f"{flag}={tokens[k]}"
            k += 1
        out.append(token)
    return out


def main(argv=None, engine=None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(normalize_argv(sys.argv[1:] if argv is None else argv))

    try:
        profile = load_profile(args.profile or default_profile_name())
    except (FileNotFoundError, ValueError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    try:
        targets = resolve_targets(profile, args.integrated, args.lra, args.true_peak)
    except InvalidNumericInput as e:
        print(f"[error] {e}", file=sys.stderr)
        return 2

    if engine is None:
        binary = args.ffmpeg or profile.engine.binary
        if ensure_binary(binary) is None:
            print(f"[warn] {binary} not found in PATH.", file=sys.stderr)
        engine = FfmpegEngine(binary)

    if args.verbose:
        print(f"[info] Profile: {profile.name}", file=sys.stderr)

    resample = profile.output.resample if args.resample is None else args.resample
    try:
        directive = run_job(
            input_path=args.input,
            targets=targets,
            resample=resample,
            engine=engine,
            progress=profile.output.progress and not args.no_progress,
            verbose=args.verbose,
            diagnostics=sys.stderr,
        )
    except AnalysisPassFailed as e:
        print(e.output, file=sys.stderr)
        return 1
    except LoudnormHelperError as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1

    sys.stdout.write(directive)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
