# topmark:header:start
#
#   project      : WheelCI
#   file         : types.py
#   file_relpath : src/wheelci/core/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Enumerations shared by the configuration, pipeline and rendering layers.

Both enums are `KeyedStrEnum`s: the ``.value`` is the token users type and the
name jobs are rendered under, so they parse from TOML/API strings and render
without extra mapping tables.
"""

from __future__ import annotations

from wheelci.core.enum_mixins import KeyedStrEnum


class Provider(KeyedStrEnum):
    """CI providers a pipeline can be rendered for."""

    GITHUB = ("github", "GitHub Actions", ("gh", "github_actions"))
    GITLAB = ("gitlab", "GitLab CI", ("gl", "gitlab_ci"))


class Platform(KeyedStrEnum):
    """Target platforms.

    Declaration order is the canonical job order; ``ALL`` is a wildcard that is
    expanded before any job is built and never appears in a graph.

    Attributes:
        ALL: Every platform that makes sense for the bridge model.
        MANYLINUX: glibc-based Linux (job name ``linux``).
        MUSLLINUX: musl-based Linux.
        WINDOWS: Windows (MSVC).
        MACOS: macOS.
        EMSCRIPTEN: WebAssembly via Emscripten/Pyodide.
    """

    ALL = ("all", "All")
    MANYLINUX = ("linux", "Manylinux", ("manylinux",))
    MUSLLINUX = ("musllinux", "Musllinux")
    WINDOWS = ("windows", "Windows")
    MACOS = ("macos", "macOS")
    EMSCRIPTEN = ("emscripten", "Emscripten")

    @property
    def order(self) -> int:
        """Position of this member in declaration order."""
        return list(type(self)).index(self)
