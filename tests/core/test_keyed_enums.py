# topmark:header:start
#
#   project      : WheelCI
#   file         : test_keyed_enums.py
#   file_relpath : tests/core/test_keyed_enums.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `KeyedStrEnum` parsing and the provider/platform enums."""

from __future__ import annotations

from tests.conftest import parametrize
from wheelci.core.types import Platform, Provider


@parametrize(
    "token, expected",
    [
        ("github", Provider.GITHUB),
        ("GitHub", Provider.GITHUB),
        ("gh", Provider.GITHUB),
        ("github-actions", Provider.GITHUB),
        ("gitlab", Provider.GITLAB),
        ("GITLAB_CI", Provider.GITLAB),
        ("jenkins", None),
    ],
)
def test_provider_parse(token: str, expected: Provider | None) -> None:
    """Keys, names and aliases parse case-insensitively."""
    assert Provider.parse(token) is expected


@parametrize(
    "token, expected",
    [
        ("linux", Platform.MANYLINUX),
        ("manylinux", Platform.MANYLINUX),
        ("ManyLinux", Platform.MANYLINUX),
        ("musllinux", Platform.MUSLLINUX),
        ("macos", Platform.MACOS),
        (" Windows ", Platform.WINDOWS),
        ("emscripten", Platform.EMSCRIPTEN),
        ("all", Platform.ALL),
        ("freebsd", None),
    ],
)
def test_platform_parse(token: str, expected: Platform | None) -> None:
    """Platform tokens accept the job name and the enum name."""
    assert Platform.parse(token) is expected


def test_platform_keys_are_job_names() -> None:
    """The key doubles as the rendered job name."""
    assert str(Platform.MANYLINUX) == "linux"
    assert Platform.keys() == ("all", "linux", "musllinux", "windows", "macos", "emscripten")


def test_platform_order_is_declaration_order() -> None:
    """Ordering drives job emission order."""
    assert [p.order for p in Platform] == list(range(len(Platform)))
    assert Platform.MANYLINUX.order < Platform.EMSCRIPTEN.order
