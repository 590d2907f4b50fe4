# topmark:header:start
#
#   project      : WheelCI
#   file         : test_platform_expansion.py
#   file_relpath : tests/pipeline/test_platform_expansion.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for platform wildcard expansion and the binary/Emscripten override."""

from __future__ import annotations

import pytest

from tests.conftest import parametrize
from wheelci.core.bridge import Bin, Bindings, BindingsAbi3, BridgeModel, Cffi, UniFfi
from wheelci.core.types import Platform
from wheelci.pipeline.platforms import (
    ALL_PLATFORMS,
    DEFAULT_PLATFORMS,
    expand_platforms,
    participating_platforms,
)

BOUND: list[BridgeModel] = [Bindings("pyo3"), BindingsAbi3(), Cffi(), UniFfi()]
BINARIES: list[BridgeModel] = [Bin(None), Bin(Bindings("pyo3"))]

pytestmark: pytest.MarkDecorator = pytest.mark.pipeline


@parametrize("bridge", BINARIES)
def test_wildcard_for_binaries_has_no_emscripten(bridge: BridgeModel) -> None:
    """``all`` stands for the four native platforms for binaries."""
    assert expand_platforms([Platform.ALL], bridge) == DEFAULT_PLATFORMS


@parametrize("bridge", BOUND)
def test_wildcard_for_extensions_includes_emscripten(bridge: BridgeModel) -> None:
    """``all`` adds Emscripten for every bound-extension model."""
    assert expand_platforms([Platform.ALL], bridge) == ALL_PLATFORMS
    assert ALL_PLATFORMS[-1] is Platform.EMSCRIPTEN


def test_explicit_entries_union_with_wildcard_and_deduplicate() -> None:
    """Explicit platforms merge into the expansion without duplicates."""
    result: tuple[Platform, ...] = expand_platforms(
        [Platform.MACOS, Platform.ALL, Platform.MACOS, Platform.EMSCRIPTEN],
        Bin(None),
    )
    # expansion keeps an explicitly requested Emscripten; it is dropped later
    assert result == (*DEFAULT_PLATFORMS, Platform.EMSCRIPTEN)


def test_expansion_order_is_independent_of_request_order() -> None:
    """Output is sorted in declaration order."""
    a = expand_platforms([Platform.MACOS, Platform.MANYLINUX, Platform.WINDOWS], Cffi())
    b = expand_platforms([Platform.WINDOWS, Platform.MACOS, Platform.MANYLINUX], Cffi())
    assert a == b == (Platform.MANYLINUX, Platform.WINDOWS, Platform.MACOS)


@parametrize("bridge", BINARIES)
def test_binaries_never_get_an_emscripten_job(bridge: BridgeModel) -> None:
    """Emscripten is removed even when named explicitly."""
    expanded = expand_platforms([Platform.EMSCRIPTEN, Platform.MANYLINUX], bridge)
    assert participating_platforms(expanded, bridge) == (Platform.MANYLINUX,)
    assert participating_platforms(expand_platforms([Platform.EMSCRIPTEN], bridge), bridge) == ()


@parametrize("bridge", BOUND)
def test_extensions_keep_explicit_emscripten(bridge: BridgeModel) -> None:
    """The override only concerns binaries."""
    expanded = expand_platforms([Platform.EMSCRIPTEN], bridge)
    assert participating_platforms(expanded, bridge) == (Platform.EMSCRIPTEN,)
