"""Configuration management for catsync.

Reads configuration from ~/.config/catsync.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

DEFAULT_BASE_URL = "https://lubosoftdev.com/api/nst_back_end_code/catagory.php"


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    base_url: str
    timeout: float
    device_type: str
    username: str
    log_level: str
    log_dir: Path

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "catsync"
        return cls(
            base_dir=base_dir,
            base_url=DEFAULT_BASE_URL,
            timeout=10.0,
            device_type="web",
            username="anvar",
            log_level="INFO",
            log_dir=base_dir / "logs",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "catsync.toml"


def load_config(config_path: Path = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional path override. Defaults to ~/.config/catsync.toml.

    Returns:
        Config object with loaded or default values.
    """
    config_path = config_path or get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    defaults = Config.default()

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", defaults.base_dir)).expanduser()

    backend_config = data.get("backend", {})
    base_url = backend_config.get("base_url", defaults.base_url)
    timeout = float(backend_config.get("timeout", defaults.timeout))

    session_config = data.get("session", {})
    device_type = session_config.get("device_type", defaults.device_type)
    username = session_config.get("username", defaults.username)

    log_config = data.get("logging", {})
    log_level = log_config.get("level", defaults.log_level)
    log_dir = Path(log_config.get("log_dir", base_dir / "logs")).expanduser()

    return Config(
        base_dir=base_dir,
        base_url=base_url,
        timeout=timeout,
        device_type=device_type,
        username=username,
        log_level=log_level,
        log_dir=log_dir,
    )


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination file.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "backend": {
            "base_url": config.base_url,
            "timeout": config.timeout,
        },
        "session": {
            "device_type": config.device_type,
            "username": config.username,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
