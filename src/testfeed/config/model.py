# topmark:header:start
#
#   project      : TestFeed
#   file         : model.py
#   file_relpath : src/testfeed/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reporter configuration model.

This module defines:
    - `ReporterConfig`: an immutable, runtime snapshot read by the reporter.
    - `MutableReporterConfig`: a mutable builder used while loading config files
      and applying CLI overrides; it can be frozen into `ReporterConfig`.

Precedence (lowest to highest): built-in defaults, `pyproject.toml`
(``[tool.testfeed]``), `testfeed.toml`, explicit ``--config`` file, CLI flags.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from testfeed.config.io import (
    get_float_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
    get_table_value,
    load_toml_dict,
)
from testfeed.config.logging import get_logger
from testfeed.constants import (
    FAILURE_INDENT,
    INFO_SYMBOL,
    PYPROJECT_TOML_NAME,
    PYPROJECT_TOOL_SECTION,
    SLOW_TEST_THRESHOLD_MS,
    SUCCESS_SYMBOL,
    TESTFEED_TOML_NAME,
)

if TYPE_CHECKING:
    from testfeed.config.io import TomlTable
    from testfeed.config.logging import TestfeedLogger

ArgsLike = Mapping[str, Any]

logger: TestfeedLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ReporterConfig:
    """Immutable runtime configuration for the reporter.

    Attributes:
        slow_test_threshold_ms (float): Leaves slower than this get a duration annotation.
        success_symbol (str): Glyph printed before passing leaf names.
        info_symbol (str): Glyph printed before nested diagnostic messages.
        failure_indent (int): Indentation of formatted errors in the failure summary.
        config_files (tuple[Path, ...]): Config sources that contributed to this snapshot.
    """

    slow_test_threshold_ms: float = SLOW_TEST_THRESHOLD_MS
    success_symbol: str = SUCCESS_SYMBOL
    info_symbol: str = INFO_SYMBOL
    failure_indent: int = FAILURE_INDENT
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableReporterConfig:
        """Return a mutable copy of this snapshot."""
        return MutableReporterConfig(
            slow_test_threshold_ms=self.slow_test_threshold_ms,
            success_symbol=self.success_symbol,
            info_symbol=self.info_symbol,
            failure_indent=self.failure_indent,
            config_files=list(self.config_files),
        )


@dataclass
class MutableReporterConfig:
    """Mutable configuration builder.

    ``None`` means "not set at this layer" so that `merge_with` can tell an
    explicit value apart from an inherited one.
    """

    slow_test_threshold_ms: float | None = None
    success_symbol: str | None = None
    info_symbol: str | None = None
    failure_indent: int | None = None
    config_files: list[Path] = field(default_factory=lambda: [])

    def freeze(self) -> ReporterConfig:
        """Freeze this builder into an immutable `ReporterConfig`.

        Raises:
            ValueError: If a numeric setting is negative.
        """
        defaults = ReporterConfig()
        threshold = (
            defaults.slow_test_threshold_ms
            if self.slow_test_threshold_ms is None
            else self.slow_test_threshold_ms
        )
        failure_indent = defaults.failure_indent if self.failure_indent is None else self.failure_indent
        if threshold < 0:
            raise ValueError(f"slow_test_threshold_ms must not be negative (got {threshold})")
        if failure_indent < 0:
            raise ValueError(f"failure_indent must not be negative (got {failure_indent})")

        return ReporterConfig(
            slow_test_threshold_ms=threshold,
            success_symbol=self.success_symbol or defaults.success_symbol,
            info_symbol=self.info_symbol or defaults.info_symbol,
            failure_indent=failure_indent,
            config_files=tuple(self.config_files),
        )

    def merge_with(self, other: MutableReporterConfig) -> MutableReporterConfig:
        """Overlay ``other`` on top of this builder (``other`` wins when set).

        Args:
            other (MutableReporterConfig): Higher-precedence layer.

        Returns:
            MutableReporterConfig: This builder, updated in place.
        """
        if other.slow_test_threshold_ms is not None:
            self.slow_test_threshold_ms = other.slow_test_threshold_ms
        if other.success_symbol is not None:
            self.success_symbol = other.success_symbol
        if other.info_symbol is not None:
            self.info_symbol = other.info_symbol
        if other.failure_indent is not None:
            self.failure_indent = other.failure_indent
        self.config_files.extend(other.config_files)
        return self

    def apply_cli_args(self, args: ArgsLike) -> MutableReporterConfig:
        """Apply CLI overrides (keys with ``None`` values are ignored).

        Args:
            args (ArgsLike): Mapping of option names to values.

        Returns:
            MutableReporterConfig: This builder, updated in place.
        """
        threshold = args.get("slow_test_threshold_ms")
        if threshold is not None:
            self.slow_test_threshold_ms = float(threshold)
        return self

    @classmethod
    def from_toml_dict(cls, data: TomlTable) -> MutableReporterConfig:
        """Build a layer from an already-extracted TestFeed TOML table.

        Args:
            data (TomlTable): The ``[tool.testfeed]`` table or a `testfeed.toml` document.

        Returns:
            MutableReporterConfig: The parsed layer.
        """
        symbols: TomlTable = get_table_value(data, "symbols")
        return cls(
            slow_test_threshold_ms=get_float_value_or_none(data, "slow_test_threshold_ms"),
            success_symbol=get_string_value_or_none(symbols, "success"),
            info_symbol=get_string_value_or_none(symbols, "info"),
            failure_indent=get_int_value_or_none(data, "failure_indent"),
        )

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableReporterConfig | None:
        """Load one TOML file as a configuration layer.

        Supports both `testfeed.toml` and `pyproject.toml`, extracting the
        ``[tool.testfeed]`` section from the latter.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableReporterConfig | None: The layer, or ``None`` when a
                `pyproject.toml` has no ``[tool.testfeed]`` section.
        """
        logger.debug("Creating MutableReporterConfig from TOML config: %s", path)
        toml_data: TomlTable = load_toml_dict(path)

        if path.name == PYPROJECT_TOML_NAME:
            toml_data = get_table_value(get_table_value(toml_data, "tool"), PYPROJECT_TOOL_SECTION)
            if not toml_data:
                logger.debug("No [tool.%s] section in %s", PYPROJECT_TOOL_SECTION, path)
                return None

        draft = cls.from_toml_dict(toml_data)
        draft.config_files = [path]
        return draft

    @classmethod
    def load_merged(
        cls,
        *,
        start: Path | None = None,
        extra_config: Path | None = None,
        args: ArgsLike | None = None,
    ) -> MutableReporterConfig:
        """Merge all configuration layers in precedence order.

        Args:
            start (Path | None): Directory searched for `pyproject.toml` and
                `testfeed.toml`; defaults to the current working directory.
            extra_config (Path | None): Explicit config file (highest file precedence).
            args (ArgsLike | None): CLI overrides applied last.

        Returns:
            MutableReporterConfig: The merged builder, ready to `freeze`.
        """
        anchor: Path = start or Path.cwd()
        merged = cls()
        for name in (PYPROJECT_TOML_NAME, TESTFEED_TOML_NAME):
            candidate = anchor / name
            if candidate.is_file():
                layer = cls.from_toml_file(candidate)
                if layer is not None:
                    merged.merge_with(layer)

        if extra_config is not None:
            layer = cls.from_toml_file(extra_config)
            if layer is not None:
                merged.merge_with(layer)

        if args:
            merged.apply_cli_args(args)

        logger.debug("Merged reporter config: %s", merged)
        return merged
