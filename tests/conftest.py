# topmark:header:start
#
#   project      : WheelCI
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the WheelCI test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `wheelci.config.MutableGenerateConfig` (mutable), then
      `freeze()` into a `wheelci.config.GenerateConfig` for pipeline and API calls.
    - Do **not** mutate a frozen `GenerateConfig`. If you need to tweak one,
      call `GenerateConfig.thaw()`, edit the returned builder, then `freeze()` again.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from wheelci.api import build_graph
from wheelci.config import MutableGenerateConfig, logging
from wheelci.core.bridge import Bindings

if TYPE_CHECKING:
    from wheelci.config import GenerateConfig
    from wheelci.core.bridge import BridgeModel
    from wheelci.pipeline.graph import JobSpec, PipelineGraph

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]

PROJECT: str = "example"
PYO3: Bindings = Bindings("pyo3", 7)


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.pipeline`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_pipeline: DecoratorType[Any] = as_typed_mark(pytest.mark.pipeline)
mark_rendering: DecoratorType[Any] = as_typed_mark(pytest.mark.rendering)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_wheelci_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure WheelCI's runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv("WHEELCI_LOG_LEVEL", raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE so every decision is captured on failure.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


def make_config(**overrides: Any) -> GenerateConfig:
    """Return a frozen `GenerateConfig` built from defaults and overrides.

    Args:
        **overrides (Any): Keyword overrides applied to the mutable builder before freezing.

    Returns:
        GenerateConfig: An immutable configuration snapshot for use in tests.
    """
    m: MutableGenerateConfig = MutableGenerateConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


def make_graph(
    bridge: BridgeModel = PYO3,
    *,
    sdist: bool = True,
    **overrides: Any,
) -> PipelineGraph:
    """Return the graph for a bridge model and config overrides."""
    return build_graph(
        make_config(**overrides),
        bridge_model=bridge,
        project_name=PROJECT,
        sdist_present=sdist,
    )


def job_named(graph: PipelineGraph, name: str) -> JobSpec:
    """Return the job called ``name`` (fails the test when absent)."""
    for job in graph.jobs:
        if job.name == name:
            return job
    raise AssertionError(f"No job named {name!r} in {graph.job_names}")
