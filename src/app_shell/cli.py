import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from src.adapters.blackduck import BlackDuckClient, BlackDuckConnectivityChecker
from src.adapters.clock import SystemClock
from src.adapters.phone_home import DefaultProductBootFactory
from src.adapters.polaris import PolarisClient, PolarisConnectivityChecker
from src.app_shell.config import configure_logging, load_detect_config
from src.components import nameversion, product_boot
from src.components.product_boot import ConnectivityCheckerPort, Platform, ProductRunData
from src.components.product_decision import boot_options, decide_products
from src.config.loader import ConfigError
from src.config.models import DetectConfig

logger = logging.getLogger("cli")

EXIT_OK = 0
EXIT_BOOT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


class CandidateEntry(BaseModel):
    detector: str
    depth: int = Field(ge=0)
    name: str | None = None
    version: str | None = None


def build_checkers() -> dict[Platform, ConnectivityCheckerPort]:
    return {
        Platform.BLACKDUCK: BlackDuckConnectivityChecker(),
        Platform.POLARIS: PolarisConnectivityChecker(),
    }


def _close_clients(run_data: ProductRunData) -> None:
    for data in run_data.platforms:
        if isinstance(data.client, (BlackDuckClient, PolarisClient)):
            data.client.close()


def handle_boot(config: DetectConfig, args: argparse.Namespace) -> int:
    detect = config.detect
    if args.test_connection or args.ignore_connection_failures:
        detect = detect.model_copy(
            update={
                "test_connection": detect.test_connection or args.test_connection,
                "ignore_connection_failures": (
                    detect.ignore_connection_failures or args.ignore_connection_failures
                ),
            }
        )
        config = config.model_copy(update={"detect": detect})

    factory = DefaultProductBootFactory(phone_home_enabled=config.detect.phone_home.enabled)
    output = product_boot.run(
        decide_products(config),
        boot_options(config),
        build_checkers(),
        factory,
    )

    if output.error is not None:
        print(f"Boot failed: {output.error.message}", file=sys.stderr)
        return EXIT_BOOT_FAILURE

    if output.connection_tested or output.run_data is None:
        print("Connection test passed.")
        return EXIT_OK

    for data in output.run_data.platforms:
        print(f"{data.platform.display_name}: {'active' if data.active else 'inactive'}")

    _close_clients(output.run_data)
    return EXIT_OK


def load_candidates(path: Path) -> list[nameversion.DetectorProjectInfo]:
    """Read detector candidates from a YAML list of {detector, depth, name, version}."""
    if not path.exists():
        raise ConfigError(f"Candidates file not found at: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or []
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in candidates file: {e}") from e

    if not isinstance(data, list):
        raise ConfigError("Candidates file must contain a list")

    candidates = []
    for raw in data:
        try:
            entry = CandidateEntry.model_validate(raw)
            detector = nameversion.DetectorType.parse(entry.detector)
        except (ValidationError, ValueError) as e:
            raise ConfigError(f"Invalid candidate {raw!r}: {e}") from e
        candidates.append(
            nameversion.DetectorProjectInfo(
                detector_type=detector,
                depth=entry.depth,
                name_version=nameversion.NameVersion(entry.name, entry.version),
            )
        )
    return candidates


def handle_project(config: DetectConfig, args: argparse.Namespace) -> int:
    project = config.project
    source_dir = Path(args.source_dir).resolve()

    try:
        preferred = nameversion.parse_preferred_detector(project.detector)
    except ValueError as e:
        raise ConfigError(str(e)) from e

    options = nameversion.ProjectNameVersionOptions(
        source_dir_name=source_dir.name,
        override_name=project.name,
        override_version=project.version_name,
        preferred_detector=preferred,
        default_version_scheme=project.default_version_scheme,
        default_version_text=project.default_version_text,
        default_version_timeformat=project.default_version_timeformat,
    )

    result = nameversion.run(load_candidates(Path(args.candidates)), options, SystemClock())

    print(f"Project name: {result.name}")
    print(f"Project version: {result.version}")
    print(f"Decision: {result.rationale}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Detect product boot CLI")
    parser.add_argument("--config", help="Path to detect.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # boot
    boot_parser = subparsers.add_parser("boot", help="Decide which products to run")
    boot_parser.add_argument(
        "--test-connection",
        action="store_true",
        help="Only test connectivity to the configured products",
    )
    boot_parser.add_argument(
        "--ignore-connection-failures",
        action="store_true",
        help="Skip products that cannot be reached instead of failing",
    )

    # project
    project_parser = subparsers.add_parser(
        "project", help="Resolve the project name and version"
    )
    project_parser.add_argument(
        "--candidates", required=True, help="YAML file of detector candidates"
    )
    project_parser.add_argument(
        "--source-dir", default=".", help="Source directory (fallback project name)"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_detect_config(args.config)
        configure_logging(config)

        if args.command == "boot":
            return handle_boot(config, args)
        if args.command == "project":
            return handle_project(config, args)
    except ConfigError as e:
        logger.error(str(e))
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
