# topmark:header:start
#
#   project      : WheelCI
#   file         : strategies_wheelci.py
#   file_relpath : tests/strategies_wheelci.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

# pyright: strict

"""Hypothesis strategies for bridge models and generation settings.

The input space is small and finite (five bridge variants, six platform tokens,
two providers, two flags), so these strategies cover it exhaustively in
combination rather than approximating it.
"""

from __future__ import annotations

from pathlib import Path

from hypothesis import strategies as st

from wheelci.config.model import GenerateConfig
from wheelci.core.bridge import Bin, Bindings, BindingsAbi3, BridgeModel, Cffi, UniFfi
from wheelci.core.types import Platform, Provider

s_bindings: st.SearchStrategy[Bindings] = st.builds(
    Bindings,
    name=st.sampled_from(["pyo3", "rust-cpython"]),
    minimum_minor=st.integers(min_value=7, max_value=13),
)

s_abi3: st.SearchStrategy[BindingsAbi3] = st.builds(
    BindingsAbi3,
    major=st.just(3),
    minor=st.integers(min_value=7, max_value=13),
)

s_bin: st.SearchStrategy[Bin] = st.builds(
    Bin,
    bindings=st.one_of(st.none(), s_bindings, s_abi3),
)

s_bridge: st.SearchStrategy[BridgeModel] = st.one_of(
    s_bindings,
    s_abi3,
    st.just(Cffi()),
    st.just(UniFfi()),
    s_bin,
)

# Non-empty platform requests, possibly with duplicates and the wildcard.
s_platform_request: st.SearchStrategy[list[Platform]] = st.lists(
    st.sampled_from(list(Platform)),
    min_size=1,
    max_size=8,
)

s_manifest_path: st.SearchStrategy[Path | None] = st.sampled_from(
    [None, Path("Cargo.toml"), Path("rust/Cargo.toml"), Path("crates/core/Cargo.toml")]
)

s_config: st.SearchStrategy[GenerateConfig] = st.builds(
    GenerateConfig,
    provider=st.sampled_from(list(Provider)),
    platforms=s_platform_request.map(tuple),
    pytest=st.booleans(),
    zig=st.booleans(),
    manifest_path=s_manifest_path,
)
