"""
Configuration loader
"""
import yaml
from pathlib import Path
from scoreboard.models import Settings


DEFAULT_CONFIG_PATH = "config/leaderboard.yaml"


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to config file

    Returns:
        Settings object (missing keys take their defaults)
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return Settings(**data)
