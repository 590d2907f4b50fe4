# topmark:header:start
#
#   project      : WheelCI
#   file         : __init__.py
#   file_relpath : src/wheelci/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WheelCI package.

WheelCI generates continuous-integration pipeline definitions for projects
that ship a compiled extension as Python wheels. It turns a resolved bridge
model, a set of target platforms and a few feature flags into a
provider-neutral job graph, then renders that graph as a GitHub Actions
workflow or a GitLab CI pipeline.
"""

from __future__ import annotations

from wheelci.api import build_graph, generate, generate_from_config
from wheelci.config.model import GenerateConfig, MutableGenerateConfig
from wheelci.core.bridge import Bin, Bindings, BindingsAbi3, BridgeModel, Cffi, UniFfi
from wheelci.core.errors import BridgeResolutionError, ConfigError, WheelciError
from wheelci.core.types import Platform, Provider

__all__ = [
    "Bin",
    "Bindings",
    "BindingsAbi3",
    "BridgeModel",
    "BridgeResolutionError",
    "Cffi",
    "ConfigError",
    "GenerateConfig",
    "MutableGenerateConfig",
    "Platform",
    "Provider",
    "UniFfi",
    "WheelciError",
    "build_graph",
    "generate",
    "generate_from_config",
]
