"""Configuration management for tagsweep."""

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar, Final

from tagsweep.config.file_ops import write_text_file
from tagsweep.config.paths import default_config_path
from tagsweep.platform.logging import logger

JPEG_QUALITY_DEFAULT: Final[int] = 90
UNKNOWN_ARTIST_NAME_DEFAULT: Final[str] = "[unknown]"
UNKNOWN_ALBUM_TITLE_DEFAULT: Final[str] = "[unknown]"
COVER_FILE_NAME_DEFAULT: Final[str] = "cover.jpg"
WORKERS_DEFAULT: Final[int] = 1


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

    # Cover art
    jpeg_quality: int = JPEG_QUALITY_DEFAULT
    cover_file_name: str = COVER_FILE_NAME_DEFAULT

    # Group placeholders for tracks without album artist or album
    unknown_artist_name: str = UNKNOWN_ARTIST_NAME_DEFAULT
    unknown_album_title: str = UNKNOWN_ALBUM_TITLE_DEFAULT

    # Number of album groups processed concurrently
    workers: int = WORKERS_DEFAULT

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)

    def save(self, target: Path | None = None) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        destination = target or default_config_path()
        try:
            write_text_file(destination, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", destination)
        except OSError as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# tagsweep Configuration File")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/tagsweep.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# JPEG quality (1-99) used when re-encoding cover art")
        lines.append(f"jpeg_quality = {self._format_toml_value(config['jpeg_quality'])}")
        lines.append("")

        lines.append("# File name of the standalone cover written into every album directory")
        lines.append(f"cover_file_name = {self._format_toml_value(config['cover_file_name'])}")
        lines.append("")

        lines.append("# Directory names used when album artist or album cannot be resolved")
        lines.append(
            f"unknown_artist_name = {self._format_toml_value(config['unknown_artist_name'])}"
        )
        lines.append(
            f"unknown_album_title = {self._format_toml_value(config['unknown_album_title'])}"
        )
        lines.append("")

        lines.append("# Number of albums processed concurrently (1 = sequential)")
        lines.append(f"workers = {self._format_toml_value(config['workers'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization."""
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def load(cls, config_file: Path | None = None) -> "Config":
        """Load configuration from file, creating a default file when missing.

        Args:
            config_file: Explicit TOML file; defaults to ``default_config_path()``.

        Returns:
            Config: Loaded configuration object.
        """
        config_file = config_file or default_config_path()
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        try:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)

                known = {f.name for f in fields(cls)}
                unknown = sorted(set(config_dict) - known)
                if unknown:
                    logger.warning("Ignoring unknown configuration keys: %s", ", ".join(unknown))
                config_dict = {key: value for key, value in config_dict.items() if key in known}

                if isinstance(config_dict.get("log_file"), str) and not config_dict["log_file"].strip():
                    config_dict["log_file"] = None

                logger.debug("Configuration loaded from %s", config_file)
                instance = cls(**config_dict)
            else:
                instance = cls()
                instance.save(config_file)
                logger.info("Created default configuration at %s", config_file)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Failed to load configuration: %s", e)
            raise

        cls._instance = instance
        cls._loaded_from = config_file
        return instance


__all__ = [
    "Config",
    "JPEG_QUALITY_DEFAULT",
    "UNKNOWN_ARTIST_NAME_DEFAULT",
    "UNKNOWN_ALBUM_TITLE_DEFAULT",
    "COVER_FILE_NAME_DEFAULT",
    "WORKERS_DEFAULT",
]
