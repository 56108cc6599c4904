"""
Name/version component unit tests.

Tests for candidate reconciliation and final identity resolution.
"""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from src.components.nameversion import (
    AmbiguousDetectorsDecision,
    ArbitraryDetectorDecision,
    ClosestDetectorDecision,
    DetectorProjectInfo,
    DetectorType,
    ExplicitOverrideDecision,
    NameVersion,
    NoCandidatesDecision,
    PreferredDetectorDecision,
    PreferredDetectorNotFoundDecision,
    ProjectNameVersionOptions,
    TooManyPreferredDetectorsDecision,
    decide_name_version,
    describe_decision,
    parse_preferred_detector,
    run,
)
from src.config.models import DefaultVersionScheme


class FakeTime:
    def now_utc(self):
        return datetime(2026, 1, 12, 12, 0, 0, tzinfo=UTC)


def info(detector: DetectorType, depth: int, name: str | None, version: str | None = "1.0"):
    return DetectorProjectInfo(detector, depth, NameVersion(name, version))


@pytest.fixture
def options() -> ProjectNameVersionOptions:
    return ProjectNameVersionOptions(source_dir_name="my-repo")


# --- Decision Tests ---


class TestDecideNameVersion:
    """Test candidate reconciliation."""

    def test_no_candidates(self, options) -> None:
        decision = decide_name_version([], options)

        assert isinstance(decision, NoCandidatesDecision)
        assert decision.name_version is None

    def test_single_closest_wins(self, options) -> None:
        near = info(DetectorType.MAVEN, 0, "root")
        far = info(DetectorType.NPM, 2, "nested")

        decision = decide_name_version([far, near], options)

        assert isinstance(decision, ClosestDetectorDecision)
        assert decision.project_info is near

    def test_same_type_at_lowest_depth_is_arbitrary(self, options) -> None:
        b = info(DetectorType.GRADLE, 1, "beta")
        a = info(DetectorType.GRADLE, 1, "alpha")

        decision = decide_name_version([b, a], options)

        assert isinstance(decision, ArbitraryDetectorDecision)
        assert decision.project_info is a
        assert decision.other_options == (b,)

    def test_mixed_types_at_lowest_depth_is_ambiguous(self, options) -> None:
        candidates = [info(DetectorType.NPM, 0, "web"), info(DetectorType.PIP, 0, "api")]

        decision = decide_name_version(candidates, options)

        assert isinstance(decision, AmbiguousDetectorsDecision)
        assert decision.name_version is None

    def test_preferred_detector(self) -> None:
        options = ProjectNameVersionOptions(
            source_dir_name="x", preferred_detector=DetectorType.PIP
        )
        pip = info(DetectorType.PIP, 3, "deep-python")

        decision = decide_name_version([info(DetectorType.NPM, 0, "web"), pip], options)

        assert isinstance(decision, PreferredDetectorDecision)
        assert decision.project_info is pip
        assert decision.name_version == NameVersion("deep-python", "1.0")

    def test_preferred_detector_not_found(self) -> None:
        options = ProjectNameVersionOptions(
            source_dir_name="x", preferred_detector=DetectorType.CARGO
        )

        decision = decide_name_version([info(DetectorType.NPM, 0, "web")], options)

        assert isinstance(decision, PreferredDetectorNotFoundDecision)
        assert decision.detector_type == DetectorType.CARGO

    def test_too_many_preferred(self) -> None:
        options = ProjectNameVersionOptions(
            source_dir_name="x", preferred_detector=DetectorType.NPM
        )
        candidates = [
            info(DetectorType.NPM, 1, "a"),
            info(DetectorType.NPM, 1, "b"),
            info(DetectorType.NPM, 2, "c"),
        ]

        decision = decide_name_version(candidates, options)

        assert isinstance(decision, TooManyPreferredDetectorsDecision)
        assert [c.name_version.name for c in decision.candidates] == ["a", "b"]

    def test_preferred_detector_uses_lowest_depth(self) -> None:
        options = ProjectNameVersionOptions(
            source_dir_name="x", preferred_detector=DetectorType.NPM
        )
        root = info(DetectorType.NPM, 0, "root")
        nested = info(DetectorType.NPM, 3, "nested")

        decision = decide_name_version([nested, root], options)

        assert isinstance(decision, PreferredDetectorDecision)
        assert decision.project_info is root

    def test_override_needs_name_and_version(self) -> None:
        both = ProjectNameVersionOptions(
            source_dir_name="x", override_name="n", override_version="v"
        )
        name_only = ProjectNameVersionOptions(source_dir_name="x", override_name="n")

        assert isinstance(decide_name_version([], both), ExplicitOverrideDecision)
        assert isinstance(decide_name_version([], name_only), NoCandidatesDecision)

    def test_nameless_candidates_are_ignored(self, options) -> None:
        decision = decide_name_version([info(DetectorType.GIT, 0, None)], options)

        assert isinstance(decision, NoCandidatesDecision)


class TestDescribeDecision:
    """Test rationale rendering."""

    def test_preferred_detector_rationale(self) -> None:
        decision = PreferredDetectorDecision(info(DetectorType.MAVEN, 2, "core"))

        assert describe_decision(decision) == (
            "Using preferred detector project info from MAVEN found at depth 2 "
            "as project info."
        )

    def test_no_candidates_rationale(self) -> None:
        assert "No detector" in describe_decision(NoCandidatesDecision())

    def test_arbitrary_rationale_lists_others(self) -> None:
        decision = ArbitraryDetectorDecision(
            info(DetectorType.GRADLE, 1, "alpha"),
            (info(DetectorType.GRADLE, 1, "beta"),),
        )

        text = describe_decision(decision)

        assert "alpha" in text
        assert "beta" in text


# --- Resolution Tests ---


class TestResolve:
    """Test final identity resolution."""

    def test_uses_decided_identity(self, options) -> None:
        result = run([info(DetectorType.MAVEN, 0, "core", "2.1.0")], options, FakeTime())

        assert result.name == "core"
        assert result.version == "2.1.0"
        assert isinstance(result.decision, ClosestDetectorDecision)
        assert result.rationale == describe_decision(result.decision)

    def test_falls_back_to_source_dir_and_default_text(self, options) -> None:
        result = run([], options, FakeTime())

        assert result.name == "my-repo"
        assert result.version == "Default Detect Version"

    def test_timestamp_default_version(self) -> None:
        options = ProjectNameVersionOptions(
            source_dir_name="repo",
            default_version_scheme=DefaultVersionScheme.TIMESTAMP,
            default_version_timeformat="%Y-%m-%d",
        )

        result = run([], options, FakeTime())

        assert result.version == "2026-01-12"

    def test_override_fields_win_individually(self) -> None:
        options = ProjectNameVersionOptions(source_dir_name="repo", override_version="9.9")

        result = run([info(DetectorType.NPM, 0, "web", "1.0")], options, FakeTime())

        assert result.name == "web"
        assert result.version == "9.9"

    def test_missing_version_uses_default(self, options) -> None:
        result = run([info(DetectorType.NPM, 0, "web", None)], options, FakeTime())

        assert result.name == "web"
        assert result.version == "Default Detect Version"


class TestDetectorType:
    def test_parse_is_case_insensitive(self) -> None:
        assert parse_preferred_detector(" go_mod ") == DetectorType.GO_MOD

    def test_blank_is_unset(self) -> None:
        assert parse_preferred_detector("") is None
        assert parse_preferred_detector(None) is None

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown detector type"):
            parse_preferred_detector("ant")

    def test_negative_depth_rejected(self) -> None:
        with pytest.raises(ValueError):
            info(DetectorType.NPM, -1, "x")
