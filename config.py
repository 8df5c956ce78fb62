"""Configuration management for Finboard.

Reads configuration from ~/.config/finboard.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

STORAGE_BACKENDS = ("sqlite", "local")


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    db_data_dir: Path
    db_filename: str
    log_level: str
    log_dir: Path
    storage_backend: str
    local_store_path: Path
    tax_table: str
    reminder_window_days: int

    @property
    def db_path(self) -> Path:
        """Get the full database path (data_dir/filename)."""
        return self.db_data_dir / self.db_filename

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        home = Path.home()
        base_dir = home / "data" / "finboard"
        return cls(
            base_dir=base_dir,
            db_data_dir=base_dir / "db",
            db_filename="finboard.db",
            log_level="INFO",
            log_dir=base_dir / "logs",
            storage_backend="sqlite",
            local_store_path=base_dir / "store.json",
            tax_table="new_regime",
            reminder_window_days=7,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "finboard.toml"


def get_migrations_dir() -> Path:
    """Get the path to the migrations directory.

    This is always relative to the code location, not configurable.
    """
    return Path(__file__).parent / "db" / "migrations"


def load_config(config_path: Path = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional path to the TOML file. Defaults to
                     ~/.config/finboard.toml.

    Returns:
        Config object with loaded or default values.

    Raises:
        ValueError: If the storage backend is not one of STORAGE_BACKENDS.
    """
    config_path = config_path or get_config_path()

    # If config doesn't exist, create it with defaults
    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "finboard"))

    db_config = data.get("database", {})
    db_data_dir = Path(db_config.get("data_dir", base_dir / "db"))
    db_filename = db_config.get("filename", "finboard.db")

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))

    storage_config = data.get("storage", {})
    storage_backend = storage_config.get("backend", "sqlite")
    if storage_backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"Unknown storage backend: {storage_backend} "
            f"(expected one of {', '.join(STORAGE_BACKENDS)})"
        )
    local_store_path = Path(storage_config.get("local_path", base_dir / "store.json"))

    tax_config = data.get("tax", {})
    tax_table = tax_config.get("table", "new_regime")

    alerts_config = data.get("alerts", {})
    reminder_window_days = int(alerts_config.get("reminder_window_days", 7))

    return Config(
        base_dir=base_dir,
        db_data_dir=db_data_dir,
        db_filename=db_filename,
        log_level=log_level,
        log_dir=log_dir,
        storage_backend=storage_backend,
        local_store_path=local_store_path,
        tax_table=tax_table,
        reminder_window_days=reminder_window_days,
    )


def _write_config(config: Config, config_path: Path) -> None:
    """Write config to the config file.

    Args:
        config: Config object to write.
        config_path: Destination TOML file.
    """
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "base_dir": str(config.base_dir),
        "database": {
            "data_dir": str(config.db_data_dir),
            "filename": config.db_filename,
        },
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
        },
        "storage": {
            "backend": config.storage_backend,
            "local_path": str(config.local_store_path),
        },
        "tax": {
            "table": config.tax_table,
        },
        "alerts": {
            "reminder_window_days": config.reminder_window_days,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
