# topmark:header:start
#
#   project      : WheelCI
#   file         : constants.py
#   file_relpath : src/wheelci/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WheelCI Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from pathlib import Path

WHEELCI_NAME: str = "wheelci"
WHEELCI_VERSION: str = get_version("wheelci")

# Package holding the bundled pipeline templates:
TEMPLATES_PACKAGE: str = "wheelci.rendering"
TEMPLATES_DIR: str = "templates"
GITLAB_TEMPLATE_NAME: str = "gitlab-ci.yml"

# Build tool driven by the generated pipelines.
BUILD_TOOL: str = "maturin"

# Manifest location that needs no explicit `--manifest-path`.
DEFAULT_MANIFEST_PATH: Path = Path("Cargo.toml")

# Local directory the build step writes artifacts to.
DIST_DIR: str = "dist"

WHEELCI_LOG_LEVEL_ENV: str = "WHEELCI_LOG_LEVEL"
