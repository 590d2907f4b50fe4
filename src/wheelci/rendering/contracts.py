# topmark:header:start
#
#   project      : WheelCI
#   file         : contracts.py
#   file_relpath : src/wheelci/rendering/contracts.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type contracts for pipeline renderers.

A renderer turns a provider-neutral `PipelineGraph` into one provider's
pipeline text. Renderers are stateless: every call builds its own output
buffer, and identical graphs always render to identical text.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from wheelci.core.types import Provider
    from wheelci.pipeline.graph import PipelineGraph


class Renderer(Protocol):
    """Protocol shared by the provider backends."""

    provider: Provider

    def render(self, graph: PipelineGraph, *, command: str | None = None) -> str:
        """Render the graph, banner included.

        Args:
            graph (PipelineGraph): The assembled pipeline.
            command (str | None): Invoking command line for the regeneration hint.

        Returns:
            str: The pipeline definition text.
        """
        ...
