"""
Name/version component - Data models.

Candidate project identities reported by detectors, and the tagged union of
decisions describing how one of them was chosen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from src.config.models import DefaultVersionScheme


class DetectorType(str, Enum):
    """Detectors that can report a project name and version."""

    BAZEL = "BAZEL"
    BITBAKE = "BITBAKE"
    CARGO = "CARGO"
    COCOAPODS = "COCOAPODS"
    CONAN = "CONAN"
    CONDA = "CONDA"
    CPAN = "CPAN"
    CRAN = "CRAN"
    GIT = "GIT"
    GO_MOD = "GO_MOD"
    GRADLE = "GRADLE"
    HEX = "HEX"
    LERNA = "LERNA"
    MAVEN = "MAVEN"
    NPM = "NPM"
    NUGET = "NUGET"
    PACKAGIST = "PACKAGIST"
    PEAR = "PEAR"
    PIP = "PIP"
    POETRY = "POETRY"
    RUBYGEMS = "RUBYGEMS"
    SBT = "SBT"
    SWIFT = "SWIFT"
    YARN = "YARN"

    @classmethod
    def parse(cls, value: str) -> DetectorType:
        """Parse a detector name case-insensitively."""
        try:
            return cls(value.strip().upper())
        except ValueError:
            valid = ", ".join(t.value for t in cls)
            raise ValueError(
                f"Unknown detector type '{value}'. Valid values: {valid}"
            ) from None


@dataclass(frozen=True)
class NameVersion:
    """A project name and version, either of which may be unknown."""

    name: str | None = None
    version: str | None = None


@dataclass(frozen=True)
class DetectorProjectInfo:
    """One candidate project identity found by a detector."""

    detector_type: DetectorType
    depth: int
    name_version: NameVersion

    def __post_init__(self) -> None:
        if self.depth < 0:
            raise ValueError(f"Detector depth must be non-negative, got {self.depth}")


# --- Decisions (tagged union) ---


@dataclass(frozen=True)
class ExplicitOverrideDecision:
    """The operator supplied both name and version."""

    name_version: NameVersion
    kind: str = field(default="explicit_override", init=False)


@dataclass(frozen=True)
class PreferredDetectorDecision:
    """The configured preferred detector produced exactly one candidate."""

    project_info: DetectorProjectInfo
    kind: str = field(default="preferred_detector", init=False)

    @property
    def name_version(self) -> NameVersion:
        return self.project_info.name_version


@dataclass(frozen=True)
class PreferredDetectorNotFoundDecision:
    """The configured preferred detector produced no candidate."""

    detector_type: DetectorType
    kind: str = field(default="preferred_detector_not_found", init=False)

    @property
    def name_version(self) -> None:
        return None


@dataclass(frozen=True)
class TooManyPreferredDetectorsDecision:
    """The configured preferred detector produced several candidates."""

    detector_type: DetectorType
    candidates: tuple[DetectorProjectInfo, ...]
    kind: str = field(default="too_many_preferred_detectors", init=False)

    @property
    def name_version(self) -> None:
        return None


@dataclass(frozen=True)
class ClosestDetectorDecision:
    """Exactly one candidate was found at the lowest depth."""

    project_info: DetectorProjectInfo
    kind: str = field(default="closest_detector", init=False)

    @property
    def name_version(self) -> NameVersion:
        return self.project_info.name_version


@dataclass(frozen=True)
class ArbitraryDetectorDecision:
    """Several candidates of one detector type shared the lowest depth."""

    project_info: DetectorProjectInfo
    other_options: tuple[DetectorProjectInfo, ...]
    kind: str = field(default="arbitrary_detector", init=False)

    @property
    def name_version(self) -> NameVersion:
        return self.project_info.name_version


@dataclass(frozen=True)
class AmbiguousDetectorsDecision:
    """Candidates of different detector types shared the lowest depth."""

    candidates: tuple[DetectorProjectInfo, ...]
    kind: str = field(default="ambiguous_detectors", init=False)

    @property
    def name_version(self) -> None:
        return None


@dataclass(frozen=True)
class NoCandidatesDecision:
    """No detector reported a project identity."""

    kind: str = field(default="no_candidates", init=False)

    @property
    def name_version(self) -> None:
        return None


NameVersionDecision = (
    ExplicitOverrideDecision
    | PreferredDetectorDecision
    | PreferredDetectorNotFoundDecision
    | TooManyPreferredDetectorsDecision
    | ClosestDetectorDecision
    | ArbitraryDetectorDecision
    | AmbiguousDetectorsDecision
    | NoCandidatesDecision
)


# --- Input / Output ---


@dataclass(frozen=True)
class ProjectNameVersionOptions:
    """Operator settings that influence the project identity."""

    source_dir_name: str
    override_name: str | None = None
    override_version: str | None = None
    preferred_detector: DetectorType | None = None
    default_version_scheme: DefaultVersionScheme = DefaultVersionScheme.TEXT
    default_version_text: str = "Default Detect Version"
    default_version_timeformat: str = "%Y-%m-%dT%H:%M:%S.%f"


@dataclass(frozen=True)
class ProjectNameVersionOutput:
    """The resolved project identity and how it was decided."""

    name_version: NameVersion
    decision: NameVersionDecision
    rationale: str

    @property
    def name(self) -> str | None:
        return self.name_version.name

    @property
    def version(self) -> str | None:
        return self.name_version.version
