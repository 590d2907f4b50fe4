# topmark:header:start
#
#   project      : WheelCI
#   file         : github.py
#   file_relpath : src/wheelci/rendering/github.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""GitHub Actions workflow renderer.

Renders every part of a `PipelineGraph`: one job per platform with its build
matrix, all step variants, target guards as ``${{ ... }}`` expressions, the
optional sdist job and the tag-gated release job.

Layout rules:
    - matrix rows are exposed as ``matrix.platform.runner`` / ``.target``;
    - each build job (platforms, then sdist) is followed by a blank line;
    - step keys are always written in the order name, if, uses, shell, env,
      with, run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from wheelci.config.logging import get_logger
from wheelci.core.types import Provider
from wheelci.pipeline.steps import (
    MATRIX_RUNNER,
    Build,
    BuildCommand,
    Checkout,
    ConditionOp,
    DownloadArtifacts,
    EnvironmentSetup,
    ExportVariables,
    Publish,
    Ref,
    RefKind,
    Run,
    RunTests,
    SetupKind,
    TestStrategy,
    UploadArtifact,
    UploadReleaseAssets,
)
from wheelci.rendering.banner import render_banner
from wheelci.rendering.yaml_writer import YamlWriter

if TYPE_CHECKING:
    from wheelci.config.logging import WheelciLogger
    from wheelci.pipeline.graph import JobSpec, PipelineGraph, ReleaseJob
    from wheelci.pipeline.steps import Fragment, Guard, StepSpec, TargetCondition, Text

logger: WheelciLogger = get_logger(__name__)

# Pinned action versions.
CHECKOUT_ACTION: Final[str] = "actions/checkout@v4"
SETUP_PYTHON_ACTION: Final[str] = "actions/setup-python@v5"
SETUP_EMSDK_ACTION: Final[str] = "mymindstorm/setup-emsdk@v12"
SETUP_NODE_ACTION: Final[str] = "actions/setup-node@v3"
BUILD_ACTION: Final[str] = "PyO3/maturin-action@v1"
UPLOAD_ACTION: Final[str] = "actions/upload-artifact@v4"
DOWNLOAD_ACTION: Final[str] = "actions/download-artifact@v4"
RUN_ON_ARCH_ACTION: Final[str] = "uraimo/run-on-arch-action@v2"
DOCKER_RUN_ACTION: Final[str] = "addnab/docker-run-action@v3"
RELEASE_ACTION: Final[str] = "softprops/action-gh-release@v1"

EMSDK_CACHE_FOLDER: Final[str] = "emsdk-cache"
INDEX_TOKEN_ENV: Final[str] = "MATURIN_PYPI_TOKEN"
TAG_REF_PREFIX: Final[str] = "refs/tags/"


def expression(body: str) -> str:
    """Wrap an expression in ``${{ ... }}``."""
    return f"${{{{ {body} }}}}"


def ref_path(ref: Ref) -> str:
    """Return the context path a `Ref` resolves to."""
    match ref.kind:
        case RefKind.MATRIX:
            return f"matrix.platform.{ref.name}"
        case RefKind.ENV:
            return f"env.{ref.name}"
        case RefKind.SECRET:
            return f"secrets.{ref.name}"


def fragment(value: Fragment) -> str:
    """Render a literal or placeholder."""
    if isinstance(value, Ref):
        return expression(ref_path(value))
    return value


def text(value: Text) -> str:
    """Render a fragment tuple as one concatenated string."""
    return "".join(fragment(v) for v in value)


def arguments(value: Text) -> str:
    """Render a fragment tuple as a space-separated argument list."""
    return " ".join(fragment(v) for v in value)


def condition(cond: TargetCondition) -> str:
    """Render one target condition."""
    target: str = ref_path(Ref(RefKind.MATRIX, "target"))
    match cond.op:
        case ConditionOp.STARTS_WITH:
            call: str = f"startsWith({target}, '{cond.value}')"
            return f"!{call}" if cond.negated else call
        case ConditionOp.EQUALS:
            operator: str = "!=" if cond.negated else "=="
            return f"{target} {operator} '{cond.value}'"


def guard_expression(guard: Guard) -> str:
    """Render a guard as a single ``if`` expression."""
    return expression(" && ".join(condition(c) for c in guard))


class GitHubRenderer:
    """Renderer for GitHub Actions workflows."""

    provider: Provider = Provider.GITHUB

    def render(self, graph: PipelineGraph, *, command: str | None = None) -> str:
        """Render the workflow, banner included.

        Args:
            graph (PipelineGraph): The assembled pipeline.
            command (str | None): Invoking command line for the regeneration hint.

        Returns:
            str: Workflow YAML text.
        """
        out = YamlWriter()
        self._preamble(out)
        with out.mapping("jobs"):
            for job in graph.jobs:
                self._job(out, job)
                out.blank()
            self._release(out, graph.release)
        logger.debug("Rendered GitHub workflow with %d build jobs", len(graph.jobs))
        return render_banner(command, self.provider) + out.getvalue()

    # --- Document structure ---

    def _preamble(self, out: YamlWriter) -> None:
        out.key("name", "CI")
        out.blank()
        with out.mapping("on"):
            with out.mapping("push"):
                with out.mapping("branches"):
                    out.line("- main")
                    out.line("- master")
                with out.mapping("tags"):
                    out.line("- '*'")
            out.key("pull_request")
            out.key("workflow_dispatch")
        out.blank()
        with out.mapping("permissions"):
            out.key("contents", "read")
        out.blank()

    def _job(self, out: YamlWriter, job: JobSpec) -> None:
        with out.mapping(job.name):
            if job.matrix:
                out.key("runs-on", fragment(MATRIX_RUNNER))
                with out.mapping("strategy"), out.mapping("matrix"), out.mapping("platform"):
                    for entry in job.matrix:
                        with out.item(f"runner: {entry.runner}"):
                            out.key("target", entry.target)
            elif job.runner is not None:
                out.key("runs-on", job.runner)
            self._steps(out, job.steps)

    def _release(self, out: YamlWriter, release: ReleaseJob) -> None:
        with out.mapping(release.name):
            out.key("name", release.display_name)
            out.key("runs-on", release.runner)
            if release.tags_only:
                out.key("if", f"\"startsWith(github.ref, '{TAG_REF_PREFIX}')\"")
            out.key("needs", f"[{', '.join(release.needs)}]")
            if release.attaches_release_assets:
                with out.mapping("permissions"):
                    out.line("# Used to upload release artifacts")
                    out.key("contents", "write")
            self._steps(out, release.steps)

    def _steps(self, out: YamlWriter, steps: tuple[StepSpec, ...]) -> None:
        with out.mapping("steps"):
            for step in steps:
                self._step(out, step)

    # --- Steps ---

    def _step(self, out: YamlWriter, step: StepSpec) -> None:
        match step:
            case Checkout():
                out.line(f"- uses: {CHECKOUT_ACTION}")
            case EnvironmentSetup():
                self._setup(out, step)
            case Run():
                self._run(out, step)
            case ExportVariables():
                with out.item(f"name: {step.name}"):
                    out.key("shell", step.shell)
                    out.literal(
                        "run",
                        [
                            *(f"echo {var}=$({cmd}) >> $GITHUB_ENV" for var, cmd in step.variables),
                            *step.then,
                        ],
                    )
            case Build():
                self._build(out, step)
            case UploadArtifact():
                with out.item(f"name: {step.name}"):
                    out.key("uses", UPLOAD_ACTION)
                    with out.mapping("with"):
                        out.key("name", text(step.artifact))
                        out.key("path", step.path)
            case RunTests():
                self._tests(out, step)
            case DownloadArtifacts():
                out.line(f"- uses: {DOWNLOAD_ACTION}")
            case Publish():
                with out.item(f"name: {step.name}"):
                    out.key("uses", BUILD_ACTION)
                    with out.mapping("env"):
                        out.key(INDEX_TOKEN_ENV, fragment(step.token))
                    with out.mapping("with"):
                        out.key("command", "upload")
                        out.key("args", arguments(step.args))
            case UploadReleaseAssets():
                prerelease: str = " || ".join(
                    f"contains(github.ref, '{marker}')" for marker in step.prerelease_markers
                )
                with out.item(f"name: {step.name}"):
                    out.key("uses", RELEASE_ACTION)
                    with out.mapping("with"):
                        out.literal("files", step.files)
                        out.key("prerelease", expression(prerelease))

    def _setup(self, out: YamlWriter, step: EnvironmentSetup) -> None:
        version: str = fragment(step.version)
        match step.kind:
            case SetupKind.PYTHON:
                with out.item(f"uses: {SETUP_PYTHON_ACTION}"), out.mapping("with"):
                    out.key("python-version", version)
                    if step.architecture is not None:
                        out.key("architecture", fragment(step.architecture))
            case SetupKind.EMSDK:
                with out.item(f"uses: {SETUP_EMSDK_ACTION}"), out.mapping("with"):
                    out.key("version", version)
                    out.key("actions-cache-folder", EMSDK_CACHE_FOLDER)
            case SetupKind.NODE:
                with out.item(f"uses: {SETUP_NODE_ACTION}"), out.mapping("with"):
                    out.key("node-version", f"'{version}'")

    def _run(self, out: YamlWriter, step: Run) -> None:
        if step.name is None and step.shell is None and len(step.commands) == 1:
            out.line(f"- run: {step.commands[0]}")
            return
        with out.item(f"name: {step.name or step.commands[0]}"):
            if step.shell is not None:
                out.key("shell", step.shell)
            out.literal("run", step.commands)

    def _build(self, out: YamlWriter, step: Build) -> None:
        with out.item(f"name: {step.name}"):
            out.key("uses", BUILD_ACTION)
            with out.mapping("with"):
                if step.command is not BuildCommand.BUILD:
                    out.key("command", step.command.value)
                if step.target is not None:
                    out.key("target", fragment(step.target))
                out.key("args", arguments(step.args))
                if step.sccache:
                    out.key("sccache", "'true'")
                if step.manylinux is not None:
                    out.key("manylinux", step.manylinux)
                if step.rust_toolchain is not None:
                    out.key("rust-toolchain", step.rust_toolchain)

    def _tests(self, out: YamlWriter, step: RunTests) -> None:
        with out.item(f"name: {step.name}"):
            if step.guard:
                out.key("if", guard_expression(step.guard))
            match step.strategy:
                case TestStrategy.HOST | TestStrategy.PYODIDE:
                    if step.shell is not None:
                        out.key("shell", step.shell)
                    out.literal("run", step.commands)
                case TestStrategy.CONTAINER:
                    out.key("uses", DOCKER_RUN_ACTION)
                    with out.mapping("with"):
                        out.key("image", step.image or "")
                        out.key("options", f"-v {expression('github.workspace')}:/io -w /io")
                        out.literal("run", step.commands)
                case TestStrategy.EMULATED:
                    out.key("uses", RUN_ON_ARCH_ACTION)
                    with out.mapping("with"):
                        if step.arch is not None:
                            out.key("arch", fragment(step.arch))
                        out.key("distro", step.image or "")
                        out.key("githubToken", expression("github.token"))
                        out.literal("install", step.install)
                        out.literal("run", step.commands)
