# topmark:header:start
#
#   project      : WheelCI
#   file         : errors.py
#   file_relpath : src/wheelci/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by WheelCI.

Usage:
    Configuration problems are reported as `ConfigError` while the
    configuration is being built, so generation itself never fails for a
    well-formed `GenerateConfig`.

    `BridgeResolutionError` is the failure an upstream project resolver
    raises when it cannot tell how the extension is bound to Python. WheelCI
    defines it so resolvers and callers share one type; the generator neither
    raises nor catches it.
"""

from __future__ import annotations


class WheelciError(Exception):
    """Base class for all WheelCI errors."""


class ConfigError(WheelciError, ValueError):
    """Error for configuration errors (missing/invalid/contradictory values)."""


class BridgeResolutionError(WheelciError):
    """Error when the bridge model cannot be determined from project metadata."""

    def __init__(self, message: str = "cannot determine bridging") -> None:
        super().__init__(message)
