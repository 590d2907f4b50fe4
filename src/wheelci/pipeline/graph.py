# topmark:header:start
#
#   project      : WheelCI
#   file         : graph.py
#   file_relpath : src/wheelci/pipeline/graph.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pipeline graph assembly.

The graph is the provider-neutral result of generation: one job per
participating platform (each with its matrix and steps), an optional source
distribution job, and a terminal release job that depends on every other job.

Mermaid (orientation)
---------------------
```mermaid
flowchart LR
  C[GenerateConfig] --> E[expand_platforms] --> P[participating_platforms]
  P --> M[matrix_for] --> J[JobSpec]
  P --> S[sequence_steps] --> J
  J --> G[PipelineGraph]
  SD[sdist job] --> G
  G --> R[ReleaseJob.needs]
```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from wheelci.config.logging import get_logger
from wheelci.core.bridge import describe
from wheelci.core.types import Platform
from wheelci.pipeline.matrix import LINUX_RUNNER, matrix_for
from wheelci.pipeline.platforms import expand_platforms, participating_platforms
from wheelci.pipeline.sequencer import EMSCRIPTEN_ARTIFACT, sdist_steps, sequence_steps
from wheelci.pipeline.steps import (
    SECRET_INDEX_TOKEN,
    DownloadArtifacts,
    Publish,
    UploadReleaseAssets,
)

if TYPE_CHECKING:
    from wheelci.config.logging import WheelciLogger
    from wheelci.config.model import GenerateConfig
    from wheelci.core.bridge import BridgeModel
    from wheelci.pipeline.matrix import MatrixEntry
    from wheelci.pipeline.steps import StepSpec

logger: WheelciLogger = get_logger(__name__)

SDIST_JOB: Final[str] = "sdist"
RELEASE_JOB: Final[str] = "release"


@dataclass(frozen=True, slots=True)
class JobSpec:
    """A build job.

    Attributes:
        name (str): Unique job name.
        steps (tuple[StepSpec, ...]): Steps in execution order.
        matrix (tuple[MatrixEntry, ...]): Matrix rows; empty for single-runner jobs.
        runner (str | None): Runner label for jobs without a matrix.
        platform (Platform | None): Platform the job builds for; None for the sdist job.
    """

    name: str
    steps: tuple[StepSpec, ...]
    matrix: tuple[MatrixEntry, ...] = ()
    runner: str | None = None
    platform: Platform | None = None


@dataclass(frozen=True, slots=True)
class ReleaseJob:
    """Terminal job publishing everything the other jobs produced.

    Attributes:
        needs (tuple[str, ...]): Names of every prior job, in emission order.
        steps (tuple[StepSpec, ...]): Steps in execution order.
        attaches_release_assets (bool): Whether the job uploads files to the
            source-control release (and therefore needs write access).
        name (str): Job name.
        display_name (str): Human-readable job name.
        runner (str): Runner label.
        tags_only (bool): Whether the job only runs for tag pushes.
    """

    needs: tuple[str, ...]
    steps: tuple[StepSpec, ...]
    attaches_release_assets: bool = False
    name: str = RELEASE_JOB
    display_name: str = "Release"
    runner: str = LINUX_RUNNER
    tags_only: bool = True


@dataclass(frozen=True, slots=True)
class PipelineGraph:
    """Provider-neutral pipeline.

    Attributes:
        jobs (tuple[JobSpec, ...]): Platform jobs, then the sdist job if any.
        release (ReleaseJob): The terminal release job.
        project_name (str): Distribution name of the project.
        config (GenerateConfig): Settings the graph was generated from.
        bridge (BridgeModel): The project's bridge model.
    """

    jobs: tuple[JobSpec, ...]
    release: ReleaseJob
    project_name: str
    config: GenerateConfig
    bridge: BridgeModel

    @property
    def job_names(self) -> tuple[str, ...]:
        """Names of the non-release jobs in emission order."""
        return tuple(job.name for job in self.jobs)

    @property
    def platforms(self) -> tuple[Platform, ...]:
        """Platforms that received a job, in emission order."""
        return tuple(job.platform for job in self.jobs if job.platform is not None)


def platform_job(
    platform: Platform,
    config: GenerateConfig,
    bridge: BridgeModel,
    project_name: str,
) -> JobSpec:
    """Build the job for one concrete platform."""
    return JobSpec(
        name=platform.key,
        matrix=matrix_for(platform),
        steps=sequence_steps(platform, config, bridge, project_name),
        platform=platform,
    )


def sdist_job(config: GenerateConfig) -> JobSpec:
    """Build the source distribution job (fixed Linux runner, no matrix)."""
    return JobSpec(name=SDIST_JOB, runner=LINUX_RUNNER, steps=sdist_steps(config))


def release_job(needs: tuple[str, ...], *, with_wasm: bool) -> ReleaseJob:
    """Build the release job.

    Args:
        needs (tuple[str, ...]): Every prior job name, in emission order.
        with_wasm (bool): Whether an Emscripten job took part; its wheels cannot
            go to the package index and are attached to the release instead.

    Returns:
        ReleaseJob: The terminal release job.
    """
    steps: list[StepSpec] = [
        DownloadArtifacts(),
        Publish(
            name="Publish to PyPI",
            args=("--non-interactive", "--skip-existing", "wheels-*/*"),
            token=SECRET_INDEX_TOKEN,
        ),
    ]
    if with_wasm:
        steps.append(
            UploadReleaseAssets(
                name="Upload to GitHub Release",
                files=(f"{EMSCRIPTEN_ARTIFACT}/*.whl",),
            )
        )
    return ReleaseJob(needs=needs, steps=tuple(steps), attaches_release_assets=with_wasm)


def assemble_graph(
    config: GenerateConfig,
    bridge: BridgeModel,
    *,
    project_name: str,
    sdist: bool,
) -> PipelineGraph:
    """Build the full pipeline graph for a configuration.

    Args:
        config (GenerateConfig): Generation settings.
        bridge (BridgeModel): The project's bridge model.
        project_name (str): Distribution name installed by test steps.
        sdist (bool): Whether to add a source distribution job.

    Returns:
        PipelineGraph: Jobs in emission order plus the release job.
    """
    logger.debug("Assembling pipeline for %s (%s)", project_name, describe(bridge))

    platforms: tuple[Platform, ...] = participating_platforms(
        expand_platforms(config.platforms, bridge),
        bridge,
    )

    jobs: list[JobSpec] = [
        platform_job(platform, config, bridge, project_name) for platform in platforms
    ]
    if sdist:
        jobs.append(sdist_job(config))

    needs: tuple[str, ...] = tuple(job.name for job in jobs)
    logger.debug("Release job needs: %s", list(needs))

    return PipelineGraph(
        jobs=tuple(jobs),
        release=release_job(needs, with_wasm=Platform.EMSCRIPTEN in platforms),
        project_name=project_name,
        config=config,
        bridge=bridge,
    )
