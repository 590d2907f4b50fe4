# topmark:header:start
#
#   project      : WheelCI
#   file         : platforms.py
#   file_relpath : src/wheelci/pipeline/platforms.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Platform expansion.

Turns the requested platform list into the concrete, ordered platform tuple
the graph is built from:

- the ``all`` wildcard expands to every platform meaningful for the bridge
  model (binaries have no use for the WebAssembly target);
- explicit entries pass through and are unioned with the expansion;
- duplicates collapse and the result is sorted in `Platform` declaration
  order, so identical input always yields identical output.

Dropping an explicitly requested Emscripten platform for binaries is *not*
done here: `participating_platforms` applies that override when jobs are
assembled.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from wheelci.config.logging import get_logger
from wheelci.core.bridge import is_bin
from wheelci.core.types import Platform

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wheelci.config.logging import WheelciLogger
    from wheelci.core.bridge import BridgeModel

logger: WheelciLogger = get_logger(__name__)

# Platforms substituted for `all` when the project is a standalone binary.
DEFAULT_PLATFORMS: Final[tuple[Platform, ...]] = (
    Platform.MANYLINUX,
    Platform.MUSLLINUX,
    Platform.WINDOWS,
    Platform.MACOS,
)

# Platforms substituted for `all` for every other bridge model.
ALL_PLATFORMS: Final[tuple[Platform, ...]] = (*DEFAULT_PLATFORMS, Platform.EMSCRIPTEN)


def sort_platforms(platforms: Iterable[Platform]) -> tuple[Platform, ...]:
    """Return the unique platforms in declaration order."""
    return tuple(sorted(set(platforms), key=lambda p: p.order))


def wildcard_platforms(bridge: BridgeModel) -> tuple[Platform, ...]:
    """Return the platforms the ``all`` wildcard stands for."""
    return DEFAULT_PLATFORMS if is_bin(bridge) else ALL_PLATFORMS


def expand_platforms(
    requested: Iterable[Platform],
    bridge: BridgeModel,
) -> tuple[Platform, ...]:
    """Expand the ``all`` wildcard and normalize the requested platforms.

    Args:
        requested (Iterable[Platform]): Requested platforms, possibly with
            duplicates and the ``ALL`` wildcard.
        bridge (BridgeModel): The project's bridge model.

    Returns:
        tuple[Platform, ...]: Concrete platforms, unique and in declaration order.
    """
    expanded: set[Platform] = set()
    for platform in requested:
        if platform is Platform.ALL:
            expanded.update(wildcard_platforms(bridge))
        else:
            expanded.add(platform)

    result: tuple[Platform, ...] = sort_platforms(expanded)
    logger.trace("Expanded platforms: %s", [p.key for p in result])
    return result


def participating_platforms(
    platforms: Iterable[Platform],
    bridge: BridgeModel,
) -> tuple[Platform, ...]:
    """Return the platforms that get a build job.

    Binaries never get an Emscripten job, whether it was requested explicitly
    or through the wildcard.

    Args:
        platforms (Iterable[Platform]): Concrete platforms from `expand_platforms`.
        bridge (BridgeModel): The project's bridge model.

    Returns:
        tuple[Platform, ...]: The platforms to emit jobs for, in input order.
    """
    kept: list[Platform] = []
    for platform in platforms:
        if platform is Platform.EMSCRIPTEN and is_bin(bridge):
            logger.debug("Skipping %s job: binaries cannot target it", platform.key)
            continue
        kept.append(platform)
    return tuple(kept)
