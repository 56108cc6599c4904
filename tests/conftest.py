import os
from pathlib import Path

import pytest


@pytest.fixture
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """
    Keep tests independent of the developer's environment.

    Config overrides are read from upper-cased env vars, so clear the ones
    this project reads and run from an empty working directory.
    """
    prefixes = ("BLACKDUCK_", "POLARIS_", "DETECT_", "PROJECT_", "LOGGING_")
    for name in list(os.environ):
        if name.startswith(prefixes):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
