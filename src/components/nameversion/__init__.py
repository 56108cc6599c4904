"""Name/version component.

Reconciles competing project identities reported by detectors into one
canonical project name and version, with a rationale for the choice.
"""

from .component import (
    decide_name_version,
    default_version,
    describe_decision,
    parse_preferred_detector,
    resolve_project_name_version,
    run,
)
from .models import (
    AmbiguousDetectorsDecision,
    ArbitraryDetectorDecision,
    ClosestDetectorDecision,
    DetectorProjectInfo,
    DetectorType,
    ExplicitOverrideDecision,
    NameVersion,
    NameVersionDecision,
    NoCandidatesDecision,
    PreferredDetectorDecision,
    PreferredDetectorNotFoundDecision,
    ProjectNameVersionOptions,
    ProjectNameVersionOutput,
    TooManyPreferredDetectorsDecision,
)
from .ports import TimePort

__all__ = [
    # Entry points
    "run",
    "decide_name_version",
    "default_version",
    "describe_decision",
    "parse_preferred_detector",
    "resolve_project_name_version",
    # Models
    "AmbiguousDetectorsDecision",
    "ArbitraryDetectorDecision",
    "ClosestDetectorDecision",
    "DetectorProjectInfo",
    "DetectorType",
    "ExplicitOverrideDecision",
    "NameVersion",
    "NameVersionDecision",
    "NoCandidatesDecision",
    "PreferredDetectorDecision",
    "PreferredDetectorNotFoundDecision",
    "ProjectNameVersionOptions",
    "ProjectNameVersionOutput",
    "TooManyPreferredDetectorsDecision",
    # Ports
    "TimePort",
]
