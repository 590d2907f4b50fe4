# topmark:header:start
#
#   project      : WheelCI
#   file         : gitlab.py
#   file_relpath : src/wheelci/rendering/gitlab.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GitLab CI pipeline renderer.

The GitLab pipeline is a fixed three-stage document (test, build, release)
shipped as a package resource: a Python version matrix for the tests, fixed
target-triple lists for the Linux/macOS/Windows builds, and a publish job gated
on tags, the default branch or a manual trigger.

It is not yet derived from the graph. Graph features it does not reflect are
logged at DEBUG so callers can tell when the two providers' pipelines diverge.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING

from wheelci.config.logging import get_logger
from wheelci.constants import GITLAB_TEMPLATE_NAME, TEMPLATES_DIR, TEMPLATES_PACKAGE
from wheelci.core.bridge import describe, is_abi3, is_bin
from wheelci.core.types import Platform, Provider
from wheelci.pipeline.sequencer import custom_manifest
from wheelci.rendering.banner import render_banner

if TYPE_CHECKING:
    import sys
    from pathlib import Path

    if sys.version_info < (3, 14):
        from importlib.abc import Traversable
    else:
        from importlib.resources.abc import Traversable

    from wheelci.config.logging import WheelciLogger
    from wheelci.pipeline.graph import PipelineGraph

logger: WheelciLogger = get_logger(__name__)


def load_gitlab_template() -> str:
    """Return the bundled GitLab pipeline text, without its trailing newline."""
    resource: Traversable = files(TEMPLATES_PACKAGE).joinpath(TEMPLATES_DIR, GITLAB_TEMPLATE_NAME)
    return resource.read_text(encoding="utf-8").rstrip("\n")


def unsupported_features(graph: PipelineGraph) -> list[str]:
    """List the graph features the static GitLab pipeline does not express."""
    features: list[str] = []
    if is_abi3(graph.bridge) or is_bin(graph.bridge):
        features.append(describe(graph.bridge))
    if graph.config.zig:
        features.append("zig")
    if graph.config.pytest:
        features.append("pytest")
    manifest: Path | None = custom_manifest(graph.config.manifest_path)
    if manifest is not None:
        features.append(f"manifest-path {manifest.as_posix()}")
    extra: list[str] = [
        p.key for p in graph.platforms if p in (Platform.MUSLLINUX, Platform.EMSCRIPTEN)
    ]
    if extra:
        features.append(f"platforms {', '.join(extra)}")
    return features


class GitLabRenderer:
    """Renderer for GitLab CI pipelines."""

    provider: Provider = Provider.GITLAB

    def render(self, graph: PipelineGraph, *, command: str | None = None) -> str:
        """Render the pipeline, banner included.

        Args:
            graph (PipelineGraph): The assembled pipeline.
            command (str | None): Invoking command line for the regeneration hint.

        Returns:
            str: Pipeline YAML text.
        """
        ignored: list[str] = unsupported_features(graph)
        if ignored:
            logger.debug("GitLab pipeline does not reflect: %s", "; ".join(ignored))
        return render_banner(command, self.provider) + load_gitlab_template()
