"""Configuration management for Tagtree.

Reads configuration from ~/.config/tagtree.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

DEFAULT_LINK_LABEL_SEPARATOR = " ↔ "


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    store_data_dir: Path
    store_filename: str
    log_level: str
    log_dir: Path
    archive_enabled: bool
    archive_dir: Path
    link_label_separator: str = DEFAULT_LINK_LABEL_SEPARATOR
    enable_reset: bool = False

    @property
    def store_path(self) -> Path:
        """Get the full snapshot path (data_dir/filename)."""
        return self.store_data_dir / self.store_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "tagtree"
        return cls(
            base_dir=base_dir,
            store_data_dir=base_dir / "store",
            store_filename="categories.json",
            log_level="INFO",
            log_dir=base_dir / "logs",
            archive_enabled=True,
            archive_dir=base_dir / "archives",
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "tagtree.toml"


def load_config() -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Returns:
        Config object with loaded or default values.
    """
    config_path = get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "tagtree"))
    enable_reset = data.get("enable_reset", False)

    store_config = data.get("store", {})
    store_data_dir = Path(store_config.get("data_dir", base_dir / "store"))
    store_filename = store_config.get("filename", "categories.json")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    archive_config = data.get("archive", {})
    archive_enabled = archive_config.get("enabled", True)
    archive_dir = Path(archive_config.get("archive_dir", base_dir / "archives"))

    links_config = data.get("links", {})
    link_label_separator = links_config.get(
        "label_separator", DEFAULT_LINK_LABEL_SEPARATOR
    )

    return Config(
        base_dir=base_dir,
        store_data_dir=store_data_dir,
        store_filename=store_filename,
        log_level=log_level,
        log_dir=log_dir,
        archive_enabled=archive_enabled,
        archive_dir=archive_dir,
        link_label_separator=link_label_separator,
        enable_reset=enable_reset,
    )


def _write_config(config: Config) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
    """
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "enable_reset": config.enable_reset,
        "store": {
            "data_dir": str(config.store_data_dir),
            "filename": config.store_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "archive": {
            "enabled": config.archive_enabled,
            "archive_dir": str(config.archive_dir),
        },
        "links": {
            "label_separator": config.link_label_separator,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
