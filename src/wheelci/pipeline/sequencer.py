# topmark:header:start
#
#   project      : WheelCI
#   file         : sequencer.py
#   file_relpath : src/wheelci/pipeline/sequencer.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-platform step sequencing.

For each platform job the sequencer emits, in order:

1. checkout;
2. environment setup: the two-phase Pyodide/Emscripten bootstrap for
   Emscripten, otherwise a Python setup when tests run or the bridge model
   needs an interpreter at build time (Windows pins the interpreter
   architecture to the matrix target);
3. the wheel build, with interpreter selection, manifest path and
   cross-toolchain arguments decided from the bridge model and flags;
4. the artifact upload;
5. when tests are enabled, the platform's test strategy.

Every function here is pure: the same inputs always produce the same tuple of
steps.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from wheelci.config.logging import get_logger
from wheelci.constants import DEFAULT_MANIFEST_PATH, DIST_DIR
from wheelci.core.bridge import is_abi3, is_bin, needs_python
from wheelci.core.types import Platform
from wheelci.pipeline.steps import (
    ENV_EMSCRIPTEN_VERSION,
    ENV_PYTHON_VERSION,
    MATRIX_TARGET,
    Build,
    BuildCommand,
    Checkout,
    EnvironmentSetup,
    ExportVariables,
    Run,
    RunTests,
    SetupKind,
    TestStrategy,
    UploadArtifact,
    not_equals,
    not_starts_with,
    starts_with,
)

if TYPE_CHECKING:
    from pathlib import Path

    from wheelci.config.logging import WheelciLogger
    from wheelci.config.model import GenerateConfig
    from wheelci.core.bridge import BridgeModel
    from wheelci.pipeline.steps import Fragment, StepSpec, Text

logger: WheelciLogger = get_logger(__name__)

HOST_PYTHON_VERSION: Final[str] = "3.x"
NODE_VERSION: Final[str] = "18"
PYODIDE_BUILD: Final[str] = "pyodide-build"
EMSCRIPTEN_TOOLCHAIN: Final[str] = "nightly"
EMSCRIPTEN_ARTIFACT: Final[str] = "wasm-wheels"
SDIST_ARTIFACT: Final[str] = "wheels-sdist"

EMULATED_GNU_DISTRO: Final[str] = "ubuntu22.04"
EMULATED_MUSL_DISTRO: Final[str] = "alpine_latest"
MUSL_CONTAINER_IMAGE: Final[str] = "alpine:latest"

# Packaging-standard tag per Linux flavor.
MANYLINUX_TAGS: Final[dict[Platform, str]] = {
    Platform.MANYLINUX: "auto",
    Platform.MUSLLINUX: "musllinux_1_2",
}


def custom_manifest(manifest_path: Path | None) -> Path | None:
    """Return the manifest path when it differs from the default location."""
    if manifest_path is None or manifest_path == DEFAULT_MANIFEST_PATH:
        return None
    return manifest_path


def manifest_args(manifest_path: Path | None) -> Text:
    """Return ``--manifest-path`` arguments for a non-default manifest."""
    manifest: Path | None = custom_manifest(manifest_path)
    if manifest is None:
        return ()
    return ("--manifest-path", manifest.as_posix())


def chdir_prefix(manifest_path: Path | None) -> str:
    """Return the ``cd <dir> && `` prefix used to run tests next to the manifest."""
    manifest: Path | None = custom_manifest(manifest_path)
    if manifest is None:
        return ""
    return f"cd {manifest.parent.as_posix()} && "


def requires_python_setup(config: GenerateConfig, bridge: BridgeModel) -> bool:
    """Return True when non-Emscripten jobs install a Python interpreter."""
    return config.pytest or needs_python(bridge)


# --- Environment setup ---


def python_setup(platform: Platform) -> EnvironmentSetup:
    """Return the host Python setup step for an ordinary platform."""
    architecture: Fragment | None = MATRIX_TARGET if platform is Platform.WINDOWS else None
    return EnvironmentSetup(
        kind=SetupKind.PYTHON,
        version=HOST_PYTHON_VERSION,
        architecture=architecture,
    )


def emscripten_setup() -> tuple[StepSpec, ...]:
    """Return the Pyodide/Emscripten bootstrap.

    The installed ``pyodide-build`` decides which Emscripten SDK and which
    Python version the wheel must target, so it is installed first, queried,
    removed, and only then are the SDK and the matching interpreter set up
    (with ``pyodide-build`` reinstalled under that interpreter).
    """
    return (
        Run(commands=(f"pip install {PYODIDE_BUILD}",)),
        ExportVariables(
            name="Get Emscripten and Python version info",
            variables=(
                (ENV_EMSCRIPTEN_VERSION.name, "pyodide config get emscripten_version"),
                (
                    ENV_PYTHON_VERSION.name,
                    "pyodide config get python_version | cut -d '.' -f 1-2",
                ),
            ),
            then=(f"pip uninstall -y {PYODIDE_BUILD}",),
        ),
        EnvironmentSetup(kind=SetupKind.EMSDK, version=ENV_EMSCRIPTEN_VERSION),
        EnvironmentSetup(kind=SetupKind.PYTHON, version=ENV_PYTHON_VERSION),
        Run(commands=(f"pip install {PYODIDE_BUILD}",)),
    )


# --- Build ---


def build_args(
    platform: Platform,
    config: GenerateConfig,
    bridge: BridgeModel,
) -> Text:
    """Return the build tool arguments for a platform job.

    Interpreter selection is skipped for abi3 builds (one wheel serves all
    interpreters) and for binaries built without any Python; Emscripten pins
    the interpreter version exported by its setup phase; everything else lets
    the build tool discover interpreters.
    """
    extra: list[Fragment] = []
    if is_abi3(bridge) or (is_bin(bridge) and not requires_python_setup(config, bridge)):
        pass
    elif platform is Platform.EMSCRIPTEN:
        extra.extend(("-i", ENV_PYTHON_VERSION))
    else:
        extra.append("--find-interpreter")

    extra.extend(manifest_args(config.manifest_path))

    if config.zig and platform is Platform.MANYLINUX:
        extra.append("--zig")

    return ("--release", "--out", DIST_DIR, *extra)


def build_step(
    platform: Platform,
    config: GenerateConfig,
    bridge: BridgeModel,
) -> Build:
    """Return the wheel build step for a platform job."""
    return Build(
        name="Build wheels",
        args=build_args(platform, config, bridge),
        target=MATRIX_TARGET,
        sccache=True,
        manylinux=MANYLINUX_TAGS.get(platform),
        rust_toolchain=EMSCRIPTEN_TOOLCHAIN if platform is Platform.EMSCRIPTEN else None,
    )


def artifact_name(platform: Platform) -> Text:
    """Return the artifact name for a platform job.

    Emscripten wheels cannot be published to the package index, so they are
    collected under one fixed name for the release job to attach elsewhere.
    """
    if platform is Platform.EMSCRIPTEN:
        return (EMSCRIPTEN_ARTIFACT,)
    return (f"wheels-{platform.key}-", MATRIX_TARGET)


def upload_step(platform: Platform) -> UploadArtifact:
    """Return the artifact upload step for a platform job."""
    return UploadArtifact(name="Upload wheels", artifact=artifact_name(platform), path=DIST_DIR)


# --- Tests ---


def _install_wheel(project_name: str, *, pip: str = "pip", no_index: bool = False) -> str:
    index: str = " --no-index" if no_index else ""
    return f"{pip} install {project_name}{index} --find-links {DIST_DIR} --force-reinstall"


def _venv_script(
    project_name: str,
    chdir: str,
    *,
    activate: str = ".venv/bin/activate",
) -> tuple[str, ...]:
    return (
        "set -e",
        "python3 -m venv .venv",
        f"source {activate}",
        _install_wheel(project_name),
        "pip install pytest",
        f"{chdir}pytest",
    )


def manylinux_tests(project_name: str, chdir: str) -> tuple[StepSpec, ...]:
    """Host run for x86_64, emulated run for the other architectures."""
    return (
        RunTests(
            strategy=TestStrategy.HOST,
            guard=(starts_with("x86_64"),),
            shell="bash",
            commands=_venv_script(project_name, chdir),
        ),
        RunTests(
            strategy=TestStrategy.EMULATED,
            guard=(not_starts_with("x86"), not_equals("ppc64")),
            image=EMULATED_GNU_DISTRO,
            arch=MATRIX_TARGET,
            install=(
                "apt-get update",
                "apt-get install -y --no-install-recommends python3 python3-pip",
                "pip3 install -U pip pytest",
            ),
            commands=(
                "set -e",
                _install_wheel(project_name, pip="pip3"),
                f"{chdir}pytest",
            ),
        ),
    )


def musllinux_tests(project_name: str, chdir: str) -> tuple[StepSpec, ...]:
    """Alpine container for x86_64, emulated Alpine for the other architectures."""
    return (
        RunTests(
            strategy=TestStrategy.CONTAINER,
            guard=(starts_with("x86_64"),),
            image=MUSL_CONTAINER_IMAGE,
            commands=(
                "set -e",
                "apk add py3-pip py3-virtualenv",
                "python3 -m virtualenv .venv",
                "source .venv/bin/activate",
                _install_wheel(project_name, no_index=True),
                "pip install pytest",
                f"{chdir}pytest",
            ),
        ),
        RunTests(
            strategy=TestStrategy.EMULATED,
            guard=(not_starts_with("x86"),),
            image=EMULATED_MUSL_DISTRO,
            arch=MATRIX_TARGET,
            install=("apk add py3-virtualenv",),
            commands=(
                "set -e",
                "python3 -m virtualenv .venv",
                "source .venv/bin/activate",
                "pip install pytest",
                _install_wheel(project_name),
                f"{chdir}pytest",
            ),
        ),
    )


def windows_tests(project_name: str, chdir: str) -> tuple[StepSpec, ...]:
    """Host run; aarch64 wheels cannot be tested on the hosted runners."""
    return (
        RunTests(
            strategy=TestStrategy.HOST,
            guard=(not_starts_with("aarch64"),),
            shell="bash",
            commands=_venv_script(project_name, chdir, activate=".venv/Scripts/activate"),
        ),
    )


def macos_tests(project_name: str, chdir: str) -> tuple[StepSpec, ...]:
    """Host run on every matrix row."""
    return (
        RunTests(
            strategy=TestStrategy.HOST,
            commands=_venv_script(project_name, chdir),
        ),
    )


def emscripten_tests(project_name: str, chdir: str) -> tuple[StepSpec, ...]:
    """Node.js setup, then pytest inside a Pyodide virtual environment."""
    return (
        EnvironmentSetup(kind=SetupKind.NODE, version=NODE_VERSION),
        RunTests(
            strategy=TestStrategy.PYODIDE,
            commands=(
                "set -e",
                "pyodide venv .venv",
                "source .venv/bin/activate",
                _install_wheel(project_name),
                "pip install pytest",
                f"{chdir}python -m pytest",
            ),
        ),
    )


def pytest_steps(
    platform: Platform,
    project_name: str,
    manifest_path: Path | None,
) -> tuple[StepSpec, ...]:
    """Return the test steps for a platform job."""
    chdir: str = chdir_prefix(manifest_path)
    match platform:
        case Platform.MANYLINUX:
            return manylinux_tests(project_name, chdir)
        case Platform.MUSLLINUX:
            return musllinux_tests(project_name, chdir)
        case Platform.WINDOWS:
            return windows_tests(project_name, chdir)
        case Platform.MACOS:
            return macos_tests(project_name, chdir)
        case Platform.EMSCRIPTEN:
            return emscripten_tests(project_name, chdir)
        case Platform.ALL:
            return ()


# --- Jobs ---


def sequence_steps(
    platform: Platform,
    config: GenerateConfig,
    bridge: BridgeModel,
    project_name: str,
) -> tuple[StepSpec, ...]:
    """Return the ordered steps of a platform job.

    Args:
        platform (Platform): Concrete platform of the job.
        config (GenerateConfig): Generation settings.
        bridge (BridgeModel): The project's bridge model.
        project_name (str): Distribution name installed by the test steps.

    Returns:
        tuple[StepSpec, ...]: The job's steps in execution order.
    """
    steps: list[StepSpec] = [Checkout()]

    if platform is Platform.EMSCRIPTEN:
        steps.extend(emscripten_setup())
    elif requires_python_setup(config, bridge):
        steps.append(python_setup(platform))

    steps.append(build_step(platform, config, bridge))
    steps.append(upload_step(platform))

    if config.pytest:
        steps.extend(pytest_steps(platform, project_name, config.manifest_path))

    logger.debug("Sequenced %d steps for the %s job", len(steps), platform.key)
    return tuple(steps)


def sdist_steps(config: GenerateConfig) -> tuple[StepSpec, ...]:
    """Return the steps of the source distribution job."""
    return (
        Checkout(),
        Build(
            name="Build sdist",
            command=BuildCommand.SDIST,
            args=("--out", DIST_DIR, *manifest_args(config.manifest_path)),
        ),
        UploadArtifact(name="Upload sdist", artifact=(SDIST_ARTIFACT,), path=DIST_DIR),
    )

