# topmark:header:start
#
#   project      : WheelCI
#   file         : model.py
#   file_relpath : src/wheelci/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for pipeline generation.

This module defines:
    - `GenerateConfig`: an immutable snapshot consumed by the pipeline layer.
    - `MutableGenerateConfig`: a mutable builder with defaults and TOML
      overlays; it can be frozen into `GenerateConfig` and thawed back for edits.

Scope:
    - *In scope*: data shapes, defaults, token parsing, freeze/thaw mechanics.
    - *Out of scope*: resolving the project's bridge model and name from its
      manifest, and writing the rendered pipeline anywhere.

Immutability:
    - `GenerateConfig` stores tuples and is ``frozen=True``. Its platform tuple
      is never empty and holds no duplicates, so an empty platform selection
      cannot reach the generator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from wheelci.config.io import (
    extract_wheelci_table,
    get_bool_value_or_none,
    get_string_list_value_or_none,
    get_string_value_or_none,
    load_toml_dict,
    nest_under_tool_section,
    parse_toml_text,
    to_toml,
    warn_unknown_keys,
)
from wheelci.config.keys import Toml
from wheelci.config.logging import get_logger
from wheelci.core.errors import ConfigError
from wheelci.core.types import Platform, Provider
from wheelci.pipeline.platforms import DEFAULT_PLATFORMS

if TYPE_CHECKING:
    from collections.abc import Iterable

    from wheelci.config.io import TomlTable
    from wheelci.config.logging import WheelciLogger

logger: WheelciLogger = get_logger(__name__)

PlatformLike = Platform | str
ProviderLike = Provider | str

DEFAULT_PROVIDER: Final[Provider] = Provider.GITHUB


def parse_provider(value: ProviderLike) -> Provider:
    """Return the `Provider` for an enum member or token.

    Raises:
        ConfigError: If the token names no provider.
    """
    if isinstance(value, Provider):
        return value
    provider: Provider | None = Provider.parse(value)
    if provider is None:
        raise ConfigError(f"Unknown CI provider {value!r} (expected one of: {', '.join(Provider.keys())})")
    return provider


def parse_platform(value: PlatformLike) -> Platform:
    """Return the `Platform` for an enum member or token.

    Raises:
        ConfigError: If the token names no platform.
    """
    if isinstance(value, Platform):
        return value
    platform: Platform | None = Platform.parse(value)
    if platform is None:
        raise ConfigError(f"Unknown platform {value!r} (expected one of: {', '.join(Platform.keys())})")
    return platform


def normalize_platforms(values: Iterable[PlatformLike] | PlatformLike) -> tuple[Platform, ...]:
    """Parse platform tokens, dropping duplicates and keeping first-seen order.

    A single member or token is accepted as a one-element selection.

    Raises:
        ConfigError: If no platform is given or a token is unknown.
    """
    if isinstance(values, str):
        values = (values,)
    seen: dict[Platform, None] = {}
    for value in values:
        seen.setdefault(parse_platform(value), None)
    if not seen:
        raise ConfigError("At least one platform must be selected")
    return tuple(seen)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class GenerateConfig:
    """Immutable generation settings.

    Attributes:
        provider (Provider): CI provider to render for.
        platforms (tuple[Platform, ...]): Requested platforms (may include the
            ``ALL`` wildcard); never empty, no duplicates.
        pytest (bool): Whether jobs run the test suite against the built wheels.
        zig (bool): Whether manylinux builds cross-compile with zig.
        manifest_path (Path | None): Manifest location, None for the default.
    """

    provider: Provider = DEFAULT_PROVIDER
    platforms: tuple[Platform, ...] = DEFAULT_PLATFORMS
    pytest: bool = False
    zig: bool = False
    manifest_path: Path | None = None

    def __post_init__(self) -> None:
        """Normalize tokens and reject an empty platform selection."""
        object.__setattr__(self, "provider", parse_provider(self.provider))
        object.__setattr__(self, "platforms", normalize_platforms(self.platforms))
        if self.manifest_path is not None and not isinstance(self.manifest_path, Path):
            object.__setattr__(self, "manifest_path", Path(self.manifest_path))

    def thaw(self) -> MutableGenerateConfig:
        """Return a mutable copy of this configuration."""
        return MutableGenerateConfig(
            provider=self.provider,
            platforms=list(self.platforms),
            pytest=self.pytest,
            zig=self.zig,
            manifest_path=self.manifest_path,
        )

    def to_toml_dict(self) -> TomlTable:
        """Convert this configuration into a TOML-serializable dict."""
        table: TomlTable = {
            Toml.KEY_PROVIDER: self.provider.key,
            Toml.KEY_PLATFORMS: [p.key for p in self.platforms],
            Toml.KEY_PYTEST: self.pytest,
            Toml.KEY_ZIG: self.zig,
        }
        if self.manifest_path is not None:
            table[Toml.KEY_MANIFEST_PATH] = self.manifest_path.as_posix()
        return table

    def to_toml(self, *, for_pyproject: bool = False) -> str:
        """Render this configuration as TOML text.

        Args:
            for_pyproject (bool): If True, nest the output under ``[tool.wheelci]``.

        Returns:
            str: TOML document text.
        """
        table: TomlTable = self.to_toml_dict()
        return to_toml(nest_under_tool_section(table) if for_pyproject else table)


# ------------------ Mutable builder ------------------


@dataclass
class MutableGenerateConfig:
    """Mutable builder for `GenerateConfig`.

    Defaults mirror a bare ``generate-ci`` invocation: GitHub, the four
    non-WebAssembly platforms, no tests, no zig, default manifest.
    """

    provider: ProviderLike = DEFAULT_PROVIDER
    platforms: list[PlatformLike] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))
    pytest: bool = False
    zig: bool = False
    manifest_path: Path | str | None = None

    @classmethod
    def from_defaults(cls) -> MutableGenerateConfig:
        """Return a builder holding the default settings."""
        return cls()

    @classmethod
    def from_toml_text(cls, text: str) -> MutableGenerateConfig:
        """Return a builder with defaults overlaid by a TOML document.

        Raises:
            ConfigError: If the text is invalid TOML or holds invalid values.
        """
        builder: MutableGenerateConfig = cls.from_defaults()
        builder.apply_toml_dict(extract_wheelci_table(parse_toml_text(text)))
        return builder

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableGenerateConfig:
        """Return a builder with defaults overlaid by a ``wheelci.toml`` / ``pyproject.toml``.

        A relative ``manifest-path`` is kept as written: it is interpreted by the
        CI runner relative to the repository root, not to the config file.

        Raises:
            ConfigError: If the file cannot be read or holds invalid values.
        """
        builder: MutableGenerateConfig = cls.from_defaults()
        builder.apply_toml_dict(extract_wheelci_table(load_toml_dict(path)))
        return builder

    def apply_toml_dict(self, table: TomlTable) -> None:
        """Overlay the values present in a settings table.

        Args:
            table (TomlTable): The ``[tool.wheelci]`` (or top-level) table.

        Raises:
            ConfigError: If a value has the wrong type or an unknown token.
        """
        warn_unknown_keys(table)

        provider: str | None = get_string_value_or_none(table, Toml.KEY_PROVIDER)
        if provider is not None:
            self.provider = parse_provider(provider)

        platforms: list[str] | None = get_string_list_value_or_none(table, Toml.KEY_PLATFORMS)
        if platforms is not None:
            self.platforms = list(normalize_platforms(platforms))

        pytest: bool | None = get_bool_value_or_none(table, Toml.KEY_PYTEST)
        if pytest is not None:
            self.pytest = pytest

        zig: bool | None = get_bool_value_or_none(table, Toml.KEY_ZIG)
        if zig is not None:
            self.zig = zig

        manifest_path: str | None = get_string_value_or_none(table, Toml.KEY_MANIFEST_PATH)
        if manifest_path is not None:
            self.manifest_path = Path(manifest_path)

        logger.debug("Applied config overlay with keys: %s", sorted(table))

    def freeze(self) -> GenerateConfig:
        """Return the immutable snapshot of the current settings.

        Raises:
            ConfigError: If no platform is selected or a token is unknown.
        """
        manifest: Path | None = None if self.manifest_path is None else Path(self.manifest_path)
        return GenerateConfig(
            provider=parse_provider(self.provider),
            platforms=normalize_platforms(self.platforms),
            pytest=self.pytest,
            zig=self.zig,
            manifest_path=manifest,
        )


def coerce_config(**overrides: Any) -> GenerateConfig:
    """Return a frozen config built from defaults and keyword overrides.

    Raises:
        ConfigError: If an override is not a configuration field or is invalid.
    """
    builder: MutableGenerateConfig = MutableGenerateConfig.from_defaults()
    for key, value in overrides.items():
        if not hasattr(builder, key):
            raise ConfigError(f"Unknown configuration field {key!r}")
        setattr(builder, key, value)
    return builder.freeze()
