"""Configuration for bippi.

Two layers live here:

- ``DownloadConfig``: immutable runtime settings for one download run.
- ``AppConfig``: the persisted JSON document holding the default
  destination and the alias table. It is read once at startup and only
  written back by the ``alias``/``config`` commands.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

import click
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from bippi.exceptions import AliasNotFoundError, ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "bippi"
CONFIG_FILENAME = "config.json"
DEFAULT_AUDIO_FORMAT = "mp3"


@dataclass(frozen=True)
class DownloadConfig:
    """Settings for a single ``single``/``album`` run.

    Attributes:
        destination: Absolute directory the audio files are written to.
        audio_format: Target audio format passed to yt-dlp (mp3, m4a, flac...).
        ascii_filenames: Transliterate track titles to ASCII in filenames.
        binary: Name or path of the yt-dlp executable.
    """

    destination: Path
    audio_format: str = DEFAULT_AUDIO_FORMAT
    ascii_filenames: bool = False
    binary: str = "yt-dlp"


class AliasEntry(BaseModel):
    """A named shortcut to a URL."""

    model_config = ConfigDict(frozen=True)

    url: str
    album: bool = False


def default_config_path() -> Path:
    """Location of the config file in the user's config directory."""
    return Path(click.get_app_dir(APP_NAME)) / CONFIG_FILENAME


def default_music_dir() -> Path | None:
    """Fallback destination used when none is configured."""
    try:
        return Path.home() / "music"
    except RuntimeError:
        return None


def ensure_absolute(path: Path) -> Path:
    """Resolve a user-supplied path against the current directory."""
    path = path.expanduser()
    if path.is_absolute():
        return path
    return Path.cwd() / path


class AppConfig(BaseModel):
    """Persisted user configuration.

    Attributes:
        default_destination: Directory used when ``--dest`` is not given.
        aliases: Alias table keyed by name.
        ascii_filenames: Transliterate unicode to ASCII in filenames.
    """

    model_config = ConfigDict(extra="ignore")

    default_destination: Path | None = Field(default_factory=default_music_dir)
    aliases: dict[str, AliasEntry] = Field(default_factory=dict)
    ascii_filenames: bool = False

    @classmethod
    def load(cls, path: Path) -> "AppConfig":
        """Load the configuration, falling back to defaults.

        A missing or empty file yields the default configuration, whose
        destination is ``~/music``. An explicit ``null`` destination stays
        unset (downloads then go to the current directory).

        Raises:
            ConfigError: If the file cannot be read or is not valid config JSON.
        """
        if not path.exists():
            logger.debug("No config file at %s, using defaults", path)
            return cls()

        try:
            data = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read config {path}: {e}") from e

        if not data.strip():
            return cls()

        try:
            return cls.model_validate_json(data)
        except ValidationError as e:
            raise ConfigError(f"Failed to parse config {path}: {e}") from e

    def save(self, path: Path) -> None:
        """Write the configuration as indented JSON, creating parent dirs.

        Raises:
            ConfigError: If the file cannot be written.
        """
        payload = self.model_dump(mode="json")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(payload, indent=2, sort_keys=True) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            raise ConfigError(f"Failed to write config {path}: {e}") from e
        logger.debug("Saved config to %s", path)

    # ============================================================================
    # ALIASES
    # ============================================================================

    def upsert_alias(self, name: str, url: str, *, album: bool = False) -> bool:
        """Create or replace an alias.

        Returns:
            True if the alias was created, False if an existing one was updated.
        """
        created = name not in self.aliases
        self.aliases[name] = AliasEntry(url=url, album=album)
        return created

    def remove_alias(self, name: str) -> None:
        """Delete an alias.

        Raises:
            AliasNotFoundError: If no alias has that name.
        """
        if self.aliases.pop(name, None) is None:
            raise AliasNotFoundError(name)

    def sorted_aliases(self) -> list[tuple[str, AliasEntry]]:
        """Aliases ordered by name."""
        return sorted(self.aliases.items())

    # ============================================================================
    # DESTINATION
    # ============================================================================

    def set_destination(self, path: Path) -> Path:
        """Set the default destination, creating the directory if needed.

        Raises:
            ConfigError: If the path exists but is not a directory, or cannot
                be created.
        """
        absolute = ensure_absolute(path)
        if absolute.exists() and not absolute.is_dir():
            raise ConfigError(f"{absolute} exists and is not a directory")
        try:
            absolute.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigError(f"Failed to create {absolute}: {e}") from e
        self.default_destination = absolute
        return absolute

    def clear_destination(self) -> bool:
        """Unset the default destination. Returns False if it was already unset."""
        if self.default_destination is None:
            return False
        self.default_destination = None
        return True

    def resolve_destination(self, override: Path | None = None) -> Path:
        """Pick the download directory: override, then config, then CWD."""
        if override is not None:
            return ensure_absolute(override)
        if self.default_destination is not None:
            return self.default_destination
        return Path.cwd()
