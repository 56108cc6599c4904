"""Name/version component implementation.

Picks one project identity out of the candidates reported by detectors,
then fills anything still missing from operator overrides and defaults.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from src.config.models import DefaultVersionScheme

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

logger = logging.getLogger(__name__)


def _describe_info(info: DetectorProjectInfo) -> str:
    nv = info.name_version
    return f"{info.detector_type.value} ({nv.name}/{nv.version}) at depth {info.depth}"


def describe_decision(decision: NameVersionDecision) -> str:
    """Render the human-readable rationale for a decision."""
    if isinstance(decision, ExplicitOverrideDecision):
        return "Using the project name and version provided by the operator."

    if isinstance(decision, PreferredDetectorDecision):
        info = decision.project_info
        return (
            f"Using preferred detector project info from {info.detector_type.value} "
            f"found at depth {info.depth} as project info."
        )

    if isinstance(decision, PreferredDetectorNotFoundDecision):
        return (
            f"A preferred detector type was provided but "
            f"{decision.detector_type.value} was not found. "
            "Project info could not be found in a detector."
        )

    if isinstance(decision, TooManyPreferredDetectorsDecision):
        found = ", ".join(_describe_info(c) for c in decision.candidates)
        return (
            f"More than one {decision.detector_type.value} detector was found "
            f"({found}). Project info could not be found in a detector."
        )

    if isinstance(decision, ClosestDetectorDecision):
        info = decision.project_info
        return (
            f"Using project info from {info.detector_type.value} found at the "
            f"lowest depth ({info.depth}) as project info."
        )

    if isinstance(decision, ArbitraryDetectorDecision):
        others = ", ".join(_describe_info(o) for o in decision.other_options)
        return (
            f"Multiple unique project infos were found at the lowest depth. "
            f"Chose {_describe_info(decision.project_info)} over: {others}."
        )

    if isinstance(decision, AmbiguousDetectorsDecision):
        found = ", ".join(_describe_info(c) for c in decision.candidates)
        return (
            f"Project info from different detector types was found at the same "
            f"depth ({found}). Set a preferred detector to choose one."
        )

    return "No detector provided project info."


def _lowest_depth(candidates: Iterable[DetectorProjectInfo]) -> list[DetectorProjectInfo]:
    candidates = list(candidates)
    if not candidates:
        return []
    lowest = min(c.depth for c in candidates)
    return [c for c in candidates if c.depth == lowest]


def decide_name_version(
    candidates: Iterable[DetectorProjectInfo],
    options: ProjectNameVersionOptions,
) -> NameVersionDecision:
    """Choose at most one candidate as the project identity.

    Args:
        candidates: Identities reported by detectors during discovery.
        options: Operator overrides and preferred detector.

    Returns:
        The decision variant describing the winner, or why there is none.
    """
    # Only candidates that actually carry a name can win
    usable = [c for c in candidates if c.name_version.name]

    # 1. Operator override
    if options.override_name and options.override_version:
        return ExplicitOverrideDecision(
            NameVersion(options.override_name, options.override_version)
        )

    # 2. Preferred detector
    if options.preferred_detector is not None:
        preferred = _lowest_depth(
            c for c in usable if c.detector_type == options.preferred_detector
        )
        if not preferred:
            return PreferredDetectorNotFoundDecision(options.preferred_detector)
        if len(preferred) > 1:
            return TooManyPreferredDetectorsDecision(
                options.preferred_detector, tuple(preferred)
            )
        return PreferredDetectorDecision(preferred[0])

    # 3. Closest candidates
    closest = _lowest_depth(usable)
    if not closest:
        return NoCandidatesDecision()
    if len(closest) == 1:
        return ClosestDetectorDecision(closest[0])

    if len({c.detector_type for c in closest}) > 1:
        return AmbiguousDetectorsDecision(tuple(closest))

    ordered = sorted(
        closest,
        key=lambda c: (c.name_version.name or "", c.name_version.version or ""),
    )
    return ArbitraryDetectorDecision(ordered[0], tuple(ordered[1:]))


def default_version(options: ProjectNameVersionOptions, time: TimePort) -> str:
    if options.default_version_scheme == DefaultVersionScheme.TIMESTAMP:
        return time.now_utc().strftime(options.default_version_timeformat)
    return options.default_version_text


def resolve_project_name_version(
    candidates: Iterable[DetectorProjectInfo],
    options: ProjectNameVersionOptions,
    time: TimePort,
) -> ProjectNameVersionOutput:
    """Resolve the final project name and version.

    Overrides win field by field. Anything the decision does not supply
    falls back to the source directory name and the default version.
    """
    decision = decide_name_version(candidates, options)
    rationale = describe_decision(decision)
    logger.debug(rationale)

    decided = decision.name_version or NameVersion()

    name = options.override_name or decided.name or options.source_dir_name
    version = (
        options.override_version
        or decided.version
        or default_version(options, time)
    )

    return ProjectNameVersionOutput(
        name_version=NameVersion(name, version),
        decision=decision,
        rationale=rationale,
    )


def run(
    candidates: Iterable[DetectorProjectInfo],
    options: ProjectNameVersionOptions,
    time: TimePort,
) -> ProjectNameVersionOutput:
    """Main entry point for the name/version component."""
    return resolve_project_name_version(candidates, options, time)


def parse_preferred_detector(value: str | None) -> DetectorType | None:
    """Parse the configured preferred detector, treating blank as unset."""
    if value is None or not value.strip():
        return None
    return DetectorType.parse(value)
