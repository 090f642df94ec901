"""Configuration management for AutoCondense."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from autocondense.config.paths import default_config_path
from autocondense.features.condense.domain.models import (
    MAX_TARGET_LINES_DEFAULT,
    MIN_SCALE_DEFAULT,
    PROGRESS_INTERVAL_DEFAULT,
    RECOMPOSE_INTERVAL_DEFAULT,
    STEP_DEFAULT,
)
from autocondense.platform.logging import logger


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # Search tuning
    min_scale: float = MIN_SCALE_DEFAULT
    step: int = STEP_DEFAULT
    recompose_interval: int = RECOMPOSE_INTERVAL_DEFAULT
    max_target_lines: int = MAX_TARGET_LINES_DEFAULT
    progress_interval: int = PROGRESS_INTERVAL_DEFAULT

    # Run defaults used when the CLI flag is omitted
    default_target_lines: int = 1
    overflow_priority: bool = True
    exclude_leading_char: bool = False

    # Singleton instance
    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

    def save(self) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        try:
            target = default_config_path()
            target.parent.mkdir(parents=True, exist_ok=True)
            _ = target.write_text(self._render_toml(config_dict), encoding="utf-8")
            logger.info("Configuration saved to %s", target)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# AutoCondense Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/autocondense.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Lowest horizontal scale (percent) the search may reach")
        lines.append(f"min_scale = {self._format_toml_value(config['min_scale'])}")
        lines.append("# Scale decrement per probe (percentage points)")
        lines.append(f"step = {self._format_toml_value(config['step'])}")
        lines.append("# Recompose the layout every N scale points while searching")
        lines.append(
            f"recompose_interval = {self._format_toml_value(config['recompose_interval'])}"
        )
        lines.append("# Upper bound accepted for the target line count")
        lines.append(f"max_target_lines = {self._format_toml_value(config['max_target_lines'])}")
        lines.append("# Report progress every N units")
        lines.append(
            f"progress_interval = {self._format_toml_value(config['progress_interval'])}"
        )
        lines.append("")

        lines.append("# Defaults for the fit command")
        lines.append(
            f"default_target_lines = {self._format_toml_value(config['default_target_lines'])}"
        )
        lines.append(
            f"overflow_priority = {self._format_toml_value(config['overflow_priority'])}"
        )
        lines.append(
            f"exclude_leading_char = {self._format_toml_value(config['exclude_leading_char'])}"
        )
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return f'"{str(value)}"'
        return str(value)

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from file, creating a default one when absent.

        Returns:
            Config: Loaded configuration object.
        """
        if cls._instance is not None:
            return cls._instance

        config_file = default_config_path()

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning(
                        "Ignoring unknown configuration keys in %s: %s",
                        config_file,
                        ", ".join(unknown),
                    )
                config_dict = {key: value for key, value in config_dict.items() if key in known}

                logger.debug("Configuration loaded from %s", config_file)
                instance = cls(**config_dict)

                cls._instance = instance
                cls._loaded_from = config_file
                return instance

            config = cls()
            config.save()
            logger.info("Created default configuration at %s", config_file)
            cls._instance = config
            cls._loaded_from = config_file
            return config

        except Exception as e:
            logger.error("Failed to load configuration: %s", e)
            raise


__all__ = [
    "Config",
    "MAX_TARGET_LINES_DEFAULT",
    "MIN_SCALE_DEFAULT",
    "PROGRESS_INTERVAL_DEFAULT",
    "RECOMPOSE_INTERVAL_DEFAULT",
    "STEP_DEFAULT",
]
