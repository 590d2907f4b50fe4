# topmark:header:start
#
#   project      : WheelCI
#   file         : __init__.py
#   file_relpath : src/wheelci/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""WheelCI configuration: immutable settings, their builder, TOML I/O and logging.

- `GenerateConfig`: frozen snapshot consumed by the pipeline layer.
- `MutableGenerateConfig`: builder with defaults, TOML overlays and ``freeze()``.
- `wheelci.config.io`: tomlkit-based loading/rendering helpers.
- `wheelci.config.logging`: TRACE-aware, chalk-colored logging.
"""

from __future__ import annotations

from wheelci.config.model import GenerateConfig, MutableGenerateConfig

__all__ = [
    "GenerateConfig",
    "MutableGenerateConfig",
]
