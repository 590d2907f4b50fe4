# topmark:header:start
#
#   project      : WheelCI
#   file         : test_matrix_table.py
#   file_relpath : tests/pipeline/test_matrix_table.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the per-platform build matrix table."""

from __future__ import annotations

import pytest

from wheelci.core.types import Platform
from wheelci.pipeline.matrix import (
    EMSCRIPTEN_TARGET,
    LINUX_RUNNER,
    MACOS_ARM_RUNNER,
    MACOS_INTEL_RUNNER,
    WINDOWS_RUNNER,
    MatrixEntry,
    matrix_for,
)

pytestmark: pytest.MarkDecorator = pytest.mark.pipeline


def _targets(platform: Platform) -> list[str]:
    return [e.target for e in matrix_for(platform)]


def _runners(platform: Platform) -> set[str]:
    return {e.runner for e in matrix_for(platform)}


def test_manylinux_builds_six_architectures_on_one_runner() -> None:
    """Order matters: it is the rendered matrix order."""
    assert _targets(Platform.MANYLINUX) == ["x86_64", "x86", "aarch64", "armv7", "s390x", "ppc64le"]
    assert _runners(Platform.MANYLINUX) == {LINUX_RUNNER}


def test_musllinux_builds_four_architectures() -> None:
    """No s390x/ppc64le musl wheels."""
    assert _targets(Platform.MUSLLINUX) == ["x86_64", "x86", "aarch64", "armv7"]
    assert _runners(Platform.MUSLLINUX) == {LINUX_RUNNER}


def test_windows_matrix() -> None:
    """Windows uses the interpreter architecture names."""
    assert matrix_for(Platform.WINDOWS) == (
        MatrixEntry(WINDOWS_RUNNER, "x64"),
        MatrixEntry(WINDOWS_RUNNER, "x86"),
    )


def test_macos_uses_one_runner_per_architecture() -> None:
    """Intel and Apple silicon wheels build natively on distinct runners."""
    assert matrix_for(Platform.MACOS) == (
        MatrixEntry(MACOS_INTEL_RUNNER, "x86_64"),
        MatrixEntry(MACOS_ARM_RUNNER, "aarch64"),
    )
    assert MACOS_INTEL_RUNNER != MACOS_ARM_RUNNER


def test_emscripten_has_one_synthetic_entry() -> None:
    """A single wasm target on the Linux runner."""
    assert matrix_for(Platform.EMSCRIPTEN) == (MatrixEntry(LINUX_RUNNER, EMSCRIPTEN_TARGET),)
    assert EMSCRIPTEN_TARGET == "wasm32-unknown-emscripten"


def test_wildcard_has_no_matrix() -> None:
    """``all`` never reaches the matrix builder in practice."""
    assert matrix_for(Platform.ALL) == ()
