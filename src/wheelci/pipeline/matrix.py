# topmark:header:start
#
#   project      : WheelCI
#   file         : matrix.py
#   file_relpath : src/wheelci/pipeline/matrix.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build matrix table.

Each platform builds for a fixed list of (runner, target) pairs. The table
mirrors what the hosted runners and the build action can actually produce; it
is data, not policy, so keep it in sync with upstream toolchain support.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from wheelci.core.types import Platform

LINUX_RUNNER: Final[str] = "ubuntu-latest"
WINDOWS_RUNNER: Final[str] = "windows-latest"
MACOS_INTEL_RUNNER: Final[str] = "macos-12"
MACOS_ARM_RUNNER: Final[str] = "macos-14"

EMSCRIPTEN_TARGET: Final[str] = "wasm32-unknown-emscripten"


@dataclass(frozen=True, slots=True)
class MatrixEntry:
    """One build-matrix row.

    Attributes:
        runner (str): Runner label the row is scheduled on.
        target (str): Target architecture (or triple) passed to the build.
    """

    runner: str
    target: str


def _on(runner: str, *targets: str) -> tuple[MatrixEntry, ...]:
    return tuple(MatrixEntry(runner=runner, target=t) for t in targets)


MATRIX_TABLE: Final[dict[Platform, tuple[MatrixEntry, ...]]] = {
    Platform.MANYLINUX: _on(LINUX_RUNNER, "x86_64", "x86", "aarch64", "armv7", "s390x", "ppc64le"),
    # musllinux builds x86 as well; its emulated test guard excludes x86 targets
    Platform.MUSLLINUX: _on(LINUX_RUNNER, "x86_64", "x86", "aarch64", "armv7"),
    Platform.WINDOWS: _on(WINDOWS_RUNNER, "x64", "x86"),
    Platform.MACOS: (
        MatrixEntry(runner=MACOS_INTEL_RUNNER, target="x86_64"),
        MatrixEntry(runner=MACOS_ARM_RUNNER, target="aarch64"),
    ),
    Platform.EMSCRIPTEN: _on(LINUX_RUNNER, EMSCRIPTEN_TARGET),
}


def matrix_for(platform: Platform) -> tuple[MatrixEntry, ...]:
    """Return the build matrix for a concrete platform.

    The ``ALL`` wildcard has no matrix of its own and yields an empty tuple.
    """
    return MATRIX_TABLE.get(platform, ())
