# topmark:header:start
#
#   project      : WheelCI
#   file         : __init__.py
#   file_relpath : src/wheelci/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Provider-neutral pipeline model and the decision logic that builds it.

Data flows strictly forward:

    GenerateConfig → platforms → matrix → sequencer → graph → (rendering)

Nothing in this package knows about provider syntax; see `wheelci.rendering`.
"""

from __future__ import annotations

from wheelci.pipeline.graph import JobSpec, PipelineGraph, ReleaseJob, assemble_graph

__all__ = [
    "JobSpec",
    "PipelineGraph",
    "ReleaseJob",
    "assemble_graph",
]
