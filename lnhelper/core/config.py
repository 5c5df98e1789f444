from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

PROFILES_DIR = Path(__file__).resolve().parents[1] / "profiles"

FFMPEG_ENV = "LNHELPER_FFMPEG"
PROFILE_ENV = "LNHELPER_PROFILE"


@dataclass
class TargetsConfig:
    # Kept as text: the CLI passes overrides as text and both go through the same validator.
    integrated: str = "-18.0"   # LUFS, clamped to [-70.0..-5.0]
    lra: str = "12.0"           # LU, clamped to [1.0..20.0]
    true_peak: str = "-1.0"     # dBTP, clamped to [-9.0..0.0]


@dataclass
class EngineConfig:
    binary: str = "ffmpeg"


@dataclass
class OutputConfig:
    # Append a 48 kHz soxr stage after loudnorm (which may upsample to 192 kHz).
    resample: bool = False
    progress: bool = True


@dataclass
class Profile:
    name: str = "default"
    targets: TargetsConfig = field(default_factory=TargetsConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def default_profile_name() -> str:
    return (os.getenv(PROFILE_ENV) or "").strip() or "default"


def _profile_path(profile: str) -> Path:
    candidate = Path(profile)
    if candidate.suffix.lower() in (".yaml", ".yml"):
        return candidate
    return PROFILES_DIR / f"{profile}.yaml"


def load_profile(profile: Optional[str] = None) -> Profile:
    """Load a target preset by name (``profiles/<name>.yaml``) or by path to a YAML file.

    Environment overrides are applied on top: ``LNHELPER_FFMPEG`` replaces the engine binary.
    """
    profile = profile or default_profile_name()
    path = _profile_path(profile)
    if not path.exists():
        raise FileNotFoundError(f"Profile not found: {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Profile {path} must be a YAML mapping, got {type(data).__name__}.")

    p = Profile(name=path.stem)

    # Shallow mapping; unknown keys are ignored.
    def update_dataclass(dc, upd: dict):
        for k, v in (upd or {}).items():
            if hasattr(dc, k):
                setattr(dc, k, v)

    update_dataclass(p.targets, data.get("targets"))
    update_dataclass(p.engine, data.get("engine"))
    update_dataclass(p.output, data.get("output"))

    # YAML turns unquoted -18.0 into a float; the validator wants text.
    p.targets.integrated = str(p.targets.integrated)
    p.targets.lra = str(p.targets.lra)
    p.targets.true_peak = str(p.targets.true_peak)

    for key in ("resample", "progress"):
        value = getattr(p.output, key)
        if not isinstance(value, bool):
            raise ValueError(f"Profile {path}: output.{key} must be true or false, got {value!r}.")

    env_binary = (os.getenv(FFMPEG_ENV) or "").strip()
    if env_binary:
        p.engine.binary = env_binary
    return p
