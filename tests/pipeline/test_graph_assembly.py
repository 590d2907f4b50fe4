# topmark:header:start
#
#   project      : WheelCI
#   file         : test_graph_assembly.py
#   file_relpath : tests/pipeline/test_graph_assembly.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for job graph assembly and release gating."""

from __future__ import annotations

import pytest

from tests.conftest import PYO3, job_named, make_graph
from wheelci.core.bridge import Bin, BindingsAbi3
from wheelci.core.types import Platform
from wheelci.pipeline.graph import RELEASE_JOB, SDIST_JOB
from wheelci.pipeline.matrix import LINUX_RUNNER
from wheelci.pipeline.steps import (
    SECRET_INDEX_TOKEN,
    Build,
    DownloadArtifacts,
    EnvironmentSetup,
    Publish,
    RunTests,
    SetupKind,
    UploadArtifact,
    UploadReleaseAssets,
)

pytestmark: pytest.MarkDecorator = pytest.mark.pipeline


def test_single_manylinux_scenario() -> None:
    """One linux job with six rows, then sdist, then release."""
    graph = make_graph(PYO3, sdist=True, platforms=[Platform.MANYLINUX])
    assert graph.job_names == ("linux", SDIST_JOB)

    linux = job_named(graph, "linux")
    assert [e.target for e in linux.matrix] == ["x86_64", "x86", "aarch64", "armv7", "s390x", "ppc64le"]
    assert {e.runner for e in linux.matrix} == {LINUX_RUNNER}

    build = next(s for s in linux.steps if isinstance(s, Build))
    assert "--find-interpreter" in build.args
    assert build.manylinux == "auto"
    upload = next(s for s in linux.steps if isinstance(s, UploadArtifact))
    assert upload.artifact[0] == "wheels-linux-"
    assert not any(isinstance(s, RunTests) for s in linux.steps)

    assert graph.release.needs == ("linux", SDIST_JOB)


def test_sdist_job_shape() -> None:
    """Fixed Linux runner, no matrix, no platform."""
    sdist = job_named(make_graph(), SDIST_JOB)
    assert sdist.runner == LINUX_RUNNER
    assert sdist.matrix == ()
    assert sdist.platform is None


def test_release_needs_follow_emission_order() -> None:
    """Needs list platform jobs in declaration order, then sdist if present."""
    graph = make_graph(platforms=[Platform.MACOS, Platform.MANYLINUX, Platform.WINDOWS])
    assert graph.release.needs == ("linux", "windows", "macos", SDIST_JOB)
    no_sdist = make_graph(sdist=False, platforms=[Platform.MACOS, Platform.MANYLINUX])
    assert no_sdist.release.needs == ("linux", "macos")


def test_release_job_publishes_to_the_index() -> None:
    """Download everything, then upload with the index token."""
    release = make_graph().release
    assert release.name == RELEASE_JOB
    assert release.tags_only
    assert isinstance(release.steps[0], DownloadArtifacts)
    publish = release.steps[1]
    assert isinstance(publish, Publish)
    assert publish.token == SECRET_INDEX_TOKEN
    assert publish.args == ("--non-interactive", "--skip-existing", "wheels-*/*")
    assert not release.attaches_release_assets
    assert len(release.steps) == 2


def test_emscripten_wheels_are_attached_to_the_release() -> None:
    """Wasm wheels cannot go to the index; they are uploaded as release assets."""
    release = make_graph(platforms=[Platform.ALL]).release
    assert release.attaches_release_assets
    assets = release.steps[-1]
    assert isinstance(assets, UploadReleaseAssets)
    assert assets.files == ("wasm-wheels/*.whl",)


def test_binary_with_explicit_emscripten_gets_no_release_assets() -> None:
    """A dropped Emscripten job must not leave a dangling asset upload."""
    graph = make_graph(Bin(None), platforms=[Platform.EMSCRIPTEN, Platform.MACOS])
    assert graph.platforms == (Platform.MACOS,)
    assert graph.release.needs == ("macos", SDIST_JOB)
    assert not graph.release.attaches_release_assets


def test_abi3_builds_skip_interpreter_discovery() -> None:
    """abi3 builds drop --find-interpreter but still set up a host Python."""
    graph = make_graph(BindingsAbi3(3, 7), sdist=False, platforms=[Platform.ALL])
    for job in graph.jobs:
        build = next(s for s in job.steps if isinstance(s, Build))
        assert "--find-interpreter" not in build.args
        if job.platform is not Platform.EMSCRIPTEN:
            assert any(
                isinstance(s, EnvironmentSetup) and s.kind is SetupKind.PYTHON for s in job.steps
            )


def test_job_names_are_unique() -> None:
    """Every job name appears once."""
    graph = make_graph(platforms=[Platform.ALL, Platform.MANYLINUX, Platform.MACOS])
    assert len(set(graph.job_names)) == len(graph.job_names)
    assert RELEASE_JOB not in graph.job_names
