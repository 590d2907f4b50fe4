# topmark:header:start
#
#   project      : WheelCI
#   file         : runtime.py
#   file_relpath : src/wheelci/api/runtime.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pipeline generation entry points.

All three functions run synchronously and build a fresh graph per call; no
state is shared between invocations, and identical inputs always produce
byte-identical text.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from wheelci.config.logging import get_logger
from wheelci.config.model import GenerateConfig, normalize_platforms, parse_provider
from wheelci.core.bridge import describe
from wheelci.pipeline.graph import assemble_graph
from wheelci.rendering import get_renderer

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wheelci.config.logging import WheelciLogger
    from wheelci.config.model import PlatformLike, ProviderLike
    from wheelci.core.bridge import BridgeModel
    from wheelci.pipeline.graph import PipelineGraph
    from wheelci.rendering.contracts import Renderer

logger: WheelciLogger = get_logger(__name__)


def build_graph(
    config: GenerateConfig,
    *,
    bridge_model: BridgeModel,
    project_name: str,
    sdist_present: bool,
) -> PipelineGraph:
    """Build the provider-neutral pipeline graph.

    Args:
        config (GenerateConfig): Frozen generation settings.
        bridge_model (BridgeModel): The project's resolved bridge model.
        project_name (str): Distribution name installed by test steps.
        sdist_present (bool): Whether to add a source distribution job.

    Returns:
        PipelineGraph: Jobs in emission order plus the release job.
    """
    return assemble_graph(config, bridge_model, project_name=project_name, sdist=sdist_present)


def generate_from_config(
    config: GenerateConfig,
    *,
    bridge_model: BridgeModel,
    project_name: str,
    sdist_present: bool,
    command: str | None = None,
) -> str:
    """Render the pipeline described by a frozen configuration.

    Args:
        config (GenerateConfig): Frozen generation settings.
        bridge_model (BridgeModel): The project's resolved bridge model.
        project_name (str): Distribution name installed by test steps.
        sdist_present (bool): Whether to add a source distribution job.
        command (str | None): Invoking command line, quoted in the banner.

    Returns:
        str: Pipeline text for ``config.provider``.
    """
    logger.info(
        "Generating %s pipeline for %s (%s)",
        config.provider.label,
        project_name,
        describe(bridge_model),
    )
    graph: PipelineGraph = build_graph(
        config,
        bridge_model=bridge_model,
        project_name=project_name,
        sdist_present=sdist_present,
    )
    renderer: Renderer = get_renderer(config.provider)
    logger.debug("Selected renderer %s", type(renderer).__name__)
    return renderer.render(graph, command=command)


def generate(
    provider: ProviderLike,
    bridge_model: BridgeModel,
    project_name: str,
    sdist_present: bool,
    platform_set: Iterable[PlatformLike] | PlatformLike,
    pytest_flag: bool = False,
    cross_toolchain_flag: bool = False,
    manifest_path: Path | str | None = None,
    *,
    command: str | None = None,
) -> str:
    """Generate a CI pipeline definition.

    Args:
        provider (ProviderLike): ``Provider`` member or token (``"github"``, ``"gitlab"``).
        bridge_model (BridgeModel): The project's resolved bridge model.
        project_name (str): Distribution name installed by test steps.
        sdist_present (bool): Whether to add a source distribution job.
        platform_set (Iterable[PlatformLike] | PlatformLike): Requested platforms, or a
            single one; may include ``Platform.ALL``. Must not be empty.
        pytest_flag (bool): Run the test suite against the built wheels.
        cross_toolchain_flag (bool): Cross-compile manylinux wheels with zig.
        manifest_path (Path | str | None): Non-default manifest location.
        command (str | None): Invoking command line, quoted in the banner.

    Returns:
        str: Pipeline text.

    Raises:
        ConfigError: If the provider or a platform token is unknown, or no
            platform is requested.
    """
    config = GenerateConfig(
        provider=parse_provider(provider),
        platforms=normalize_platforms(platform_set),
        pytest=pytest_flag,
        zig=cross_toolchain_flag,
        manifest_path=None if manifest_path is None else Path(manifest_path),
    )
    return generate_from_config(
        config,
        bridge_model=bridge_model,
        project_name=project_name,
        sdist_present=sdist_present,
        command=command,
    )
