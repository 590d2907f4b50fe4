# topmark:header:start
#
#   project      : WheelCI
#   file         : banner.py
#   file_relpath : src/wheelci/rendering/banner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Regeneration banner written at the top of every generated pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from wheelci.constants import BUILD_TOOL, WHEELCI_NAME, WHEELCI_VERSION

if TYPE_CHECKING:
    from wheelci.core.types import Provider

# Project scaffolding commands that also write a pipeline; re-running them
# would recreate the project, so the banner points at the generator instead.
SCAFFOLD_PREFIXES: Final[tuple[str, ...]] = tuple(
    f"{tool} {cmd}" for tool in (WHEELCI_NAME, BUILD_TOOL) for cmd in ("new", "init")
)


def regeneration_command(command: str | None, provider: Provider) -> str:
    """Return the command shown in the banner.

    Args:
        command (str | None): The invoking command line, as supplied by the caller.
        provider (Provider): Provider the pipeline is rendered for.

    Returns:
        str: ``command`` unless it is missing or a scaffolding command, in which
            case ``wheelci generate-ci <provider>``.
    """
    if command is None or not command.strip() or command.startswith(SCAFFOLD_PREFIXES):
        return f"{WHEELCI_NAME} generate-ci {provider.key}"
    return command


def render_banner(command: str | None, provider: Provider) -> str:
    """Return the five comment lines that open a generated pipeline."""
    return (
        f"# This file is autogenerated by {WHEELCI_NAME} v{WHEELCI_VERSION}\n"
        "# To update, run\n"
        "#\n"
        f"#    {regeneration_command(command, provider)}\n"
        "#\n"
    )
