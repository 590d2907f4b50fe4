# topmark:header:start
#
#   project      : WheelCI
#   file         : __init__.py
#   file_relpath : src/wheelci/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Provider renderers for WheelCI pipelines.

Public modules:
    - wheelci.rendering.contracts
    - wheelci.rendering.github
    - wheelci.rendering.gitlab
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from wheelci.core.types import Provider
from wheelci.rendering.github import GitHubRenderer
from wheelci.rendering.gitlab import GitLabRenderer

if TYPE_CHECKING:
    from wheelci.rendering.contracts import Renderer


def get_renderer(provider: Provider) -> Renderer:
    """Return the renderer for a provider."""
    match provider:
        case Provider.GITHUB:
            return GitHubRenderer()
        case Provider.GITLAB:
            return GitLabRenderer()


__all__ = ["GitHubRenderer", "GitLabRenderer", "get_renderer"]
