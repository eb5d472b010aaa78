"""Configuration management for Ledgerlens.

Reads configuration from ~/.config/ledgerlens.toml and creates default config if needed.
"""

from pathlib import Path
from dataclasses import dataclass
import tomllib
import tomli_w

DEFAULT_INSIGHTS_MONTHS = 6
DEFAULT_INSIGHTS_TYPE = "EXPENSE"


@dataclass
class Config:
    """Application configuration."""

    base_dir: Path
    log_level: str
    log_dir: Path
    log_to_file: bool
    insights_months: int
    insights_type: str

    @classmethod
    def default(cls) -> "Config":
        """Create a Config with default values."""
        base_dir = Path.home() / "data" / "ledgerlens"
        return cls(
            base_dir=base_dir,
            log_level="INFO",
            log_dir=base_dir / "logs",
            log_to_file=True,
            insights_months=DEFAULT_INSIGHTS_MONTHS,
            insights_type=DEFAULT_INSIGHTS_TYPE,
        )


def get_config_path() -> Path:
    """Get the path to the config file."""
    return Path.home() / ".config" / "ledgerlens.toml"


def load_config(config_path: Path = None) -> Config:
    """Load configuration from file, creating default if it doesn't exist.

    Args:
        config_path: Optional override of the config file location.

    Returns:
        Config object with loaded or default values.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        config = Config.default()
        _write_config(config, config_path)
        return config

    with open(config_path, "rb") as f:
        data = tomllib.load(f)

    # Parse with defaults for any missing values
    base_dir = Path(data.get("base_dir", Path.home() / "data" / "ledgerlens"))

    log_config = data.get("logging", {})
    log_level = log_config.get("level", "INFO")
    log_dir = Path(log_config.get("log_dir", base_dir / "logs"))
    log_to_file = log_config.get("to_file", True)

    insights_config = data.get("insights", {})
    insights_months = insights_config.get("months", DEFAULT_INSIGHTS_MONTHS)
    insights_type = insights_config.get("type", DEFAULT_INSIGHTS_TYPE)

    return Config(
        base_dir=base_dir,
        log_level=log_level,
        log_dir=log_dir,
        log_to_file=log_to_file,
        insights_months=insights_months,
        insights_type=insights_type,
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
        "logging": {
            "level": config.log_level,
            "log_dir": str(config.log_dir),
            "to_file": config.log_to_file,
        },
        "insights": {
            "months": config.insights_months,
            "type": config.insights_type,
        },
    }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)
