"""Configuration management for mp3repair."""

from __future__ import annotations

import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from mp3repair.config.file_ops import write_text_file
from mp3repair.config.paths import default_config_path

DEFAULT_MUSIC_ROOT: Path = Path("~/Music")
DEFAULT_FILE_EXTENSION: str = ".mp3"
DEFAULT_FILTER: str = ".*"
MAX_OPEN_FILES_DEFAULT: int = 20
MAX_OPEN_FILES_LIMIT: int = 20


class ConfigError(Exception):
    """Raised when the configuration file cannot be parsed or holds bad values."""


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion."""
    return field(default=default, metadata={"path": True})


@dataclass
class Config:
    """Application configuration."""

    # Root of the music library: <music_root>/<artist>/<album>/<NN title>.mp3
    music_root: Path | None = _path_field()

    # Extension of track files, including the leading dot
    file_extension: str = DEFAULT_FILE_EXTENSION

    # Regular expressions selecting artist and album directories
    artist_filter: str = DEFAULT_FILTER
    album_filter: str = DEFAULT_FILTER

    # Upper bound on files read concurrently
    max_open_files: int = MAX_OPEN_FILES_DEFAULT

    # Log file path
    log_file: Path | None = _path_field()

    # Directory holding the dirty marker; MP3REPAIR_STATE_DIR applies when unset
    state_dir: Path | None = _path_field()

    _instance: ClassVar[Config | None] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Convert string paths to ``Path`` objects using field metadata."""

        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value.strip() else None)

    @property
    def resolved_music_root(self) -> Path:
        return (self.music_root or DEFAULT_MUSIC_ROOT).expanduser()

    def save(self, path: Path | None = None) -> Path:
        """Save configuration to ``path`` (default: the portable config location)."""

        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = path or default_config_path()
        write_text_file(target, self._render_toml(config_dict))
        return target

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []
        lines.append("# mp3repair Configuration File")
        lines.append("")

        lines.append("# Root directory of your music library (optional, default ~/Music)")
        lines.append("# Tracks live at <music_root>/<artist>/<album>/<NN title>.mp3")
        lines.append('# Example: music_root = "/path/to/your/music"')
        if config["music_root"] is not None:
            lines.append(f"music_root = {self._format_toml_value(config['music_root'])}")
        lines.append("")

        lines.append("# Extension of track files")
        lines.append(f"file_extension = {self._format_toml_value(config['file_extension'])}")
        lines.append("")

        lines.append("# Regular expressions selecting artist and album directories")
        lines.append(f"artist_filter = {self._format_toml_value(config['artist_filter'])}")
        lines.append(f"album_filter = {self._format_toml_value(config['album_filter'])}")
        lines.append("")

        lines.append(f"# Maximum number of files read at once (1-{MAX_OPEN_FILES_LIMIT})")
        lines.append(f"max_open_files = {self._format_toml_value(config['max_open_files'])}")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/mp3repair.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Directory for application state such as the dirty marker (optional)")
        if config["state_dir"] is not None:
            lines.append(f"state_dir = {self._format_toml_value(config['state_dir'])}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        return str(value)

    @classmethod
    def _from_mapping(cls, data: dict[str, Any], source: Path) -> Config:
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"Unknown configuration keys in {source}: {', '.join(unknown)}")

        for key in ("file_extension", "artist_filter", "album_filter"):
            if key in data and not isinstance(data[key], str):
                raise ConfigError(f"{key} in {source} must be a string")
        for key in ("music_root", "log_file", "state_dir"):
            if key in data and not isinstance(data[key], str):
                raise ConfigError(f"{key} in {source} must be a path string")
        if "max_open_files" in data and (
            isinstance(data["max_open_files"], bool) or not isinstance(data["max_open_files"], int)
        ):
            raise ConfigError(f"max_open_files in {source} must be an integer")
        return cls(**data)

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        """Load configuration from ``path``; missing files yield defaults.

        The instance loaded from the default location is cached.
        """
        if path is None and cls._instance is not None:
            return cls._instance

        config_file = path or default_config_path()
        if config_file.exists():
            try:
                with open(config_file, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                raise ConfigError(f"Failed to load configuration from {config_file}: {e}") from e
            instance = cls._from_mapping(config_dict, config_file)
        else:
            instance = cls()

        if path is None:
            cls._instance = instance
            cls._loaded_from = config_file
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance."""

        cls._instance = None
        cls._loaded_from = None


__all__ = [
    "Config",
    "ConfigError",
    "DEFAULT_FILE_EXTENSION",
    "DEFAULT_FILTER",
    "DEFAULT_MUSIC_ROOT",
    "MAX_OPEN_FILES_DEFAULT",
    "MAX_OPEN_FILES_LIMIT",
]
