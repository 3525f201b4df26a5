"""
Configuration management for Music Session
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger


@dataclass
class PlayerConfig:
    """Configuration for the simulated playback backends."""

    local_load_delay: float = 1.0  # seconds to "open" a local file
    remote_load_delay: float = 2.0  # seconds to negotiate a remote stream
    tick_interval: float = 0.1  # clock tick period for both backends
    volume: float = 0.5  # initial session volume (0.0 - 1.0)

    def validate(self) -> None:
        """Validate player configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.local_load_delay < 0 or self.remote_load_delay < 0:
            raise ValueError(
                f"Load delays must be non-negative "
                f"(local={self.local_load_delay}, remote={self.remote_load_delay})"
            )
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")
        if not 0.0 <= self.volume <= 1.0:
            raise ValueError(f"volume must be between 0.0 and 1.0, got {self.volume}")


@dataclass
class LookupConfig:
    """Configuration for the track lookup service (TheAudioDB)."""

    api_url: str = "https://www.theaudiodb.com/api/v1/json/2"
    timeout: float = 10.0
    enabled: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/music-session/music-session.log)
    )
    console_output: bool = False  # Also output to stderr (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    player: PlayerConfig = field(default_factory=PlayerConfig)
    lookup: LookupConfig = field(default_factory=LookupConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "music-session"
    return Path.home() / ".config" / "music-session"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            if config_path.exists():
                return config_path
            return None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/music-session (or ~/.config/music-session)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "music-session"
    return Path.home() / ".local" / "share" / "music-session"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# Music Session Configuration

[player]
# Simulated time to open a local file (seconds)
local_load_delay = 1.0

# Simulated time to negotiate a remote stream (seconds)
remote_load_delay = 2.0

# Playback clock tick period (seconds)
tick_interval = 0.1

# Initial volume (0.0 - 1.0)
volume = 0.5

[lookup]
# TheAudioDB API base URL
api_url = "https://www.theaudiodb.com/api/v1/json/2"

# Request timeout in seconds
timeout = 10.0

# Enable track lookup
enabled = true

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/music-session/music-session.log)
# log_file = "/path/to/custom/music-session.log"

# Also output logs to stderr (useful for debugging)
console_output = false
""".strip()


def parse_config(toml_data: dict) -> Config:
    """Build a Config from parsed TOML data, falling back to defaults per field."""
    config = Config()

    if "player" in toml_data:
        player_data = toml_data["player"]
        player = PlayerConfig(
            local_load_delay=float(
                player_data.get("local_load_delay", config.player.local_load_delay)
            ),
            remote_load_delay=float(
                player_data.get("remote_load_delay", config.player.remote_load_delay)
            ),
            tick_interval=float(
                player_data.get("tick_interval", config.player.tick_interval)
            ),
            volume=float(player_data.get("volume", config.player.volume)),
        )
        try:
            player.validate()
            config.player = player
        except ValueError as e:
            logger.warning(f"Invalid player configuration: {e}. Using defaults.")

    if "lookup" in toml_data:
        lookup_data = toml_data["lookup"]
        config.lookup = LookupConfig(
            api_url=lookup_data.get("api_url", config.lookup.api_url),
            timeout=float(lookup_data.get("timeout", config.lookup.timeout)),
            enabled=lookup_data.get("enabled", config.lookup.enabled),
        )

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    _apply_env_overrides(config)
    return config


def _apply_env_overrides(config: Config) -> None:
    """Override selected values from environment variables."""
    log_level = os.environ.get("MUSIC_SESSION_LOG_LEVEL")
    if log_level:
        config.logging.level = log_level.upper()

    lookup_url = os.environ.get("MUSIC_SESSION_LOOKUP_URL")
    if lookup_url:
        config.lookup.api_url = lookup_url


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file or create default.

    Environment variables override TOML values:
    - MUSIC_SESSION_LOG_LEVEL
    - MUSIC_SESSION_LOOKUP_URL
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    config_path = config_path or get_config_path()

    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_default_config())
        logger.info(f"Created default configuration at: {config_path}")
        config = Config()
        _apply_env_overrides(config)
        return config

    try:
        with open(config_path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.error(f"Error loading configuration from {config_path}: {e}")
        config = Config()
        _apply_env_overrides(config)
        return config

    return parse_config(toml_data)
