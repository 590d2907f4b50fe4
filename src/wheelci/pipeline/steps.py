# topmark:header:start
#
#   project      : WheelCI
#   file         : steps.py
#   file_relpath : src/wheelci/pipeline/steps.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Provider-neutral step specifications.

Steps are small frozen dataclasses forming a tagged union (`StepSpec`).
They carry everything a renderer needs (command text, guards, versions) but no
provider syntax: values only known at pipeline run time are expressed as
`Ref` placeholders, and conditions as `TargetCondition` tuples.

Text values that mix literals and placeholders are tuples of fragments
(`Text`); renderers join the fragments after substituting each `Ref` with
their own expression syntax.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, TypeAlias


class RefKind(Enum):
    """Where a run-time value comes from."""

    MATRIX = "matrix"  # current build-matrix row
    ENV = "env"  # value exported by an earlier step
    SECRET = "secret"  # repository secret


@dataclass(frozen=True, slots=True)
class Ref:
    """Placeholder for a value resolved by the CI provider at run time."""

    kind: RefKind
    name: str


Fragment: TypeAlias = str | Ref
Text: TypeAlias = tuple[Fragment, ...]

MATRIX_RUNNER: Final[Ref] = Ref(RefKind.MATRIX, "runner")
MATRIX_TARGET: Final[Ref] = Ref(RefKind.MATRIX, "target")
ENV_PYTHON_VERSION: Final[Ref] = Ref(RefKind.ENV, "PYTHON_VERSION")
ENV_EMSCRIPTEN_VERSION: Final[Ref] = Ref(RefKind.ENV, "EMSCRIPTEN_VERSION")
SECRET_INDEX_TOKEN: Final[Ref] = Ref(RefKind.SECRET, "PYPI_API_TOKEN")


class ConditionOp(Enum):
    """Comparison applied to the matrix target."""

    STARTS_WITH = "starts_with"
    EQUALS = "equals"


@dataclass(frozen=True, slots=True)
class TargetCondition:
    """A predicate over the current matrix target.

    Attributes:
        op (ConditionOp): Comparison to apply.
        value (str): Operand compared against the target.
        negated (bool): Whether the comparison is inverted.
    """

    op: ConditionOp
    value: str
    negated: bool = False


# All conditions must hold; an empty guard means "always".
Guard: TypeAlias = tuple[TargetCondition, ...]


def starts_with(value: str) -> TargetCondition:
    """Target starts with ``value``."""
    return TargetCondition(ConditionOp.STARTS_WITH, value)


def not_starts_with(value: str) -> TargetCondition:
    """Target does not start with ``value``."""
    return TargetCondition(ConditionOp.STARTS_WITH, value, negated=True)


def not_equals(value: str) -> TargetCondition:
    """Target differs from ``value``."""
    return TargetCondition(ConditionOp.EQUALS, value, negated=True)


class SetupKind(Enum):
    """Toolchains an `EnvironmentSetup` step can install."""

    PYTHON = "python"
    EMSDK = "emsdk"
    NODE = "node"


class BuildCommand(Enum):
    """Build tool sub-commands run through the build action."""

    BUILD = "build"
    SDIST = "sdist"


class TestStrategy(Enum):
    """How the freshly built wheel is tested.

    Attributes:
        HOST: Directly on the runner.
        CONTAINER: Inside a container of the target's libc flavor.
        EMULATED: Under foreign-architecture emulation.
        PYODIDE: Inside a Pyodide virtual environment.
    """

    __test__ = False  # not a pytest test class

    HOST = "host"
    CONTAINER = "container"
    EMULATED = "emulated"
    PYODIDE = "pyodide"


@dataclass(frozen=True, slots=True)
class Checkout:
    """Check out the repository."""


@dataclass(frozen=True, slots=True)
class EnvironmentSetup:
    """Install a toolchain.

    Attributes:
        kind (SetupKind): Toolchain to install.
        version (Fragment): Version spec, possibly an exported value.
        architecture (Fragment | None): Interpreter architecture (Windows only).
    """

    kind: SetupKind
    version: Fragment
    architecture: Fragment | None = None


@dataclass(frozen=True, slots=True)
class Run:
    """Run shell commands.

    Attributes:
        commands (tuple[str, ...]): Command lines, run in order.
        name (str | None): Optional display name.
        shell (str | None): Shell to run under; provider default when None.
    """

    commands: tuple[str, ...]
    name: str | None = None
    shell: str | None = None


@dataclass(frozen=True, slots=True)
class ExportVariables:
    """Compute values with shell commands and expose them to later steps.

    Attributes:
        name (str): Display name.
        variables (tuple[tuple[str, str], ...]): ``(variable, command)`` pairs;
            each variable receives the command's standard output.
        then (tuple[str, ...]): Commands run after the exports.
        shell (str): Shell to run under.
    """

    name: str
    variables: tuple[tuple[str, str], ...]
    then: tuple[str, ...] = ()
    shell: str = "bash"


@dataclass(frozen=True, slots=True)
class Build:
    """Run the build tool through the build action.

    Attributes:
        name (str): Display name.
        args (Text): Arguments passed to the build tool.
        command (BuildCommand): Build tool sub-command.
        target (Fragment | None): Target architecture, when cross-building per matrix row.
        sccache (bool): Whether the compiler cache is enabled.
        manylinux (str | None): Packaging-standard tag for Linux builds.
        rust_toolchain (str | None): Toolchain override.
    """

    name: str
    args: Text
    command: BuildCommand = BuildCommand.BUILD
    target: Fragment | None = None
    sccache: bool = False
    manylinux: str | None = None
    rust_toolchain: str | None = None


@dataclass(frozen=True, slots=True)
class UploadArtifact:
    """Upload a directory as a named artifact.

    Attributes:
        name (str): Display name of the step.
        artifact (Text): Artifact name.
        path (str): Directory to upload.
    """

    name: str
    artifact: Text
    path: str


@dataclass(frozen=True, slots=True)
class RunTests:
    """Install the built wheel and run the test suite.

    Attributes:
        strategy (TestStrategy): Where the tests run.
        commands (tuple[str, ...]): Script run by the strategy.
        guard (Guard): Matrix rows the step applies to.
        shell (str | None): Shell for host strategies.
        image (str | None): Container image or emulated distribution.
        arch (Fragment | None): Emulated architecture.
        install (tuple[str, ...]): Provisioning commands run inside emulation.
        name (str): Display name.
    """

    strategy: TestStrategy
    commands: tuple[str, ...]
    guard: Guard = ()
    shell: str | None = None
    image: str | None = None
    arch: Fragment | None = None
    install: tuple[str, ...] = ()
    name: str = "pytest"


@dataclass(frozen=True, slots=True)
class DownloadArtifacts:
    """Download every artifact uploaded by earlier jobs."""


@dataclass(frozen=True, slots=True)
class Publish:
    """Upload wheels and sdists to the package index.

    Attributes:
        name (str): Display name.
        args (Text): Arguments for the upload command.
        token (Ref): Secret holding the index token.
    """

    name: str
    args: Text
    token: Ref


@dataclass(frozen=True, slots=True)
class UploadReleaseAssets:
    """Attach files to the source-control release of the pushed tag.

    Attributes:
        name (str): Display name.
        files (tuple[str, ...]): Glob patterns of files to attach.
        prerelease_markers (tuple[str, ...]): Ref substrings marking a prerelease.
    """

    name: str
    files: tuple[str, ...]
    prerelease_markers: tuple[str, ...] = ("alpha", "beta")


StepSpec: TypeAlias = (
    Checkout
    | EnvironmentSetup
    | Run
    | ExportVariables
    | Build
    | UploadArtifact
    | RunTests
    | DownloadArtifacts
    | Publish
    | UploadReleaseAssets
)
