"""
Scoring and runtime configuration.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path


TRUE_VALUES = {"1", "true", "yes", "on"}

DEFAULT_LATEX_COMPILER_URL = "https://latex.ytotech.com/builds/sync"


def env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean switch from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


@dataclass(frozen=True)
class ScoringConfig:
    """Weights, display limits and suggestion thresholds for the ATS score."""
    keyword_weight: float = 0.4
    format_weight: float = 0.2
    length_weight: float = 0.2
    structure_weight: float = 0.2

    max_matched_keywords: int = 15
    max_missing_keywords: int = 10
    suggested_keywords: int = 5

    min_matched_keywords: int = 5
    min_summary_length: int = 100
    min_bullets: int = 2
    min_skills: int = 8

    # Keyword density is an unbounded percentage, so the raw score can pass 100
    clamp_score: bool = False

    @classmethod
    def from_env(cls) -> "ScoringConfig":
        return cls(clamp_score=env_flag("RESUME_ATS_CLAMP_SCORE"))

    def with_clamp(self, clamp_score: bool) -> "ScoringConfig":
        return replace(self, clamp_score=clamp_score)


def data_dir() -> Path:
    """Directory holding the autosaved resume."""
    configured = os.environ.get("RESUME_ATS_DATA_DIR")
    if configured:
        return Path(configured).expanduser()
    return Path.home() / ".resume_ats"


def latex_compiler_url() -> str:
    return os.environ.get("RESUME_ATS_LATEX_COMPILER_URL", DEFAULT_LATEX_COMPILER_URL)


def log_level() -> str:
    return os.environ.get("RESUME_ATS_LOG_LEVEL", "INFO").upper()
