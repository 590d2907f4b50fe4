# topmark:header:start
#
#   project      : WheelCI
#   file         : keys.py
#   file_relpath : src/wheelci/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for WheelCI configuration.

This module defines the authoritative string constants used when reading and
writing WheelCI configuration from TOML sources (``wheelci.toml`` and
``[tool.wheelci]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by WheelCI configuration.

    Notes:
        - Values must match user-facing TOML keys exactly.
        - Renaming or removing a key is a breaking change.
    """

    # Section path inside pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
    SECTION_WHEELCI: Final[str] = "wheelci"

    # Top-level tables that identify a document as a pyproject.toml
    PYPROJECT_MARKERS: Final[tuple[str, ...]] = ("project", "build-system")

    KEY_PROVIDER: Final[str] = "provider"
    KEY_PLATFORMS: Final[str] = "platforms"
    KEY_PYTEST: Final[str] = "pytest"
    KEY_ZIG: Final[str] = "zig"
    KEY_MANIFEST_PATH: Final[str] = "manifest-path"

    # ---------------------------- Schema helpers ----------------------------

    ALLOWED_KEYS: Final[frozenset[str]] = frozenset(
        {
            KEY_PROVIDER,
            KEY_PLATFORMS,
            KEY_PYTEST,
            KEY_ZIG,
            KEY_MANIFEST_PATH,
        }
    )
