# topmark:header:start
#
#   project      : WheelCI
#   file         : bridge.py
#   file_relpath : src/wheelci/core/bridge.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Bridge models: how the compiled artifact is exposed to Python.

A bridge model is a tagged union of small frozen dataclasses. Callers branch on
it with ``match`` over the variant classes; the helpers below are the only
predicates the pipeline layer needs.

Variants:
    - `Bindings`: extension module produced by a bindings generator
      (e.g. ``pyo3``), built once per interpreter.
    - `BindingsAbi3`: same, compiled against the stable limited API, so one
      build serves every interpreter from ``(major, minor)`` onward.
    - `Cffi`: extension exposed through cffi.
    - `UniFfi`: extension exposed through uniffi.
    - `Bin`: standalone executable, optionally still carrying bindings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Bindings:
    """Extension built with a bindings generator.

    Attributes:
        name (str): Bindings crate name, e.g. ``"pyo3"``.
        minimum_minor (int): Lowest supported Python 3 minor version.
    """

    name: str
    minimum_minor: int = 7


@dataclass(frozen=True, slots=True)
class BindingsAbi3:
    """Extension built against the stable ABI (abi3).

    Attributes:
        major (int): Minimum Python major version.
        minor (int): Minimum Python minor version.
    """

    major: int = 3
    minor: int = 7


@dataclass(frozen=True, slots=True)
class Cffi:
    """Extension exposed through cffi."""


@dataclass(frozen=True, slots=True)
class UniFfi:
    """Extension exposed through uniffi."""


@dataclass(frozen=True, slots=True)
class Bin:
    """Standalone binary.

    Attributes:
        bindings (Bindings | BindingsAbi3 | None): Bindings the binary still links
            against, or ``None`` for a pure executable.
    """

    bindings: Bindings | BindingsAbi3 | None = None


BridgeModel: TypeAlias = Bindings | BindingsAbi3 | Cffi | UniFfi | Bin


def is_bin(bridge: BridgeModel) -> bool:
    """Return True when the project ships a standalone executable."""
    return isinstance(bridge, Bin)


def is_abi3(bridge: BridgeModel) -> bool:
    """Return True for the stable-ABI bindings variant."""
    return isinstance(bridge, BindingsAbi3)


def needs_python(bridge: BridgeModel) -> bool:
    """Return True when building requires a Python interpreter on the runner.

    Every variant except a binary without bindings links against, or generates
    code for, the host interpreter.
    """
    match bridge:
        case Bin(bindings=None):
            return False
        case Bin() | Bindings() | BindingsAbi3() | Cffi() | UniFfi():
            return True


def describe(bridge: BridgeModel) -> str:
    """Return a short human-readable description (used in log records)."""
    match bridge:
        case Bindings(name=name, minimum_minor=minor):
            return f"{name} bindings (python>=3.{minor})"
        case BindingsAbi3(major=major, minor=minor):
            return f"abi3 bindings (python>={major}.{minor})"
        case Cffi():
            return "cffi"
        case UniFfi():
            return "uniffi"
        case Bin(bindings=None):
            return "binary"
        case Bin(bindings=inner):
            return f"binary with {describe(inner)}"
