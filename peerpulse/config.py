"""
Configuration loader
"""
import os
from pathlib import Path
from typing import Dict, Optional

import yaml
from dotenv import load_dotenv

from peerpulse.models import Settings


DEFAULT_CONFIG_PATH = "config/peerpulse.yaml"

# Environment variable -> Settings field
ENV_OVERRIDES: Dict[str, str] = {
    "MONGODB_URI": "mongodb_uri",
    "MONGODB_DB": "mongodb_db",
    "PEERPULSE_DB_RETRY_DELAY": "db_retry_delay",
    "PEERPULSE_TRANSPORT": "transport",
    "PEERPULSE_CHANNEL": "channel_name",
    "PEERPULSE_STRICT_TRANSITIONS": "strict_transitions",
    "PUSHER_APP_ID": "pusher_app_id",
    "PUSHER_KEY": "pusher_key",
    "PUSHER_SECRET": "pusher_secret",
    "PUSHER_CLUSTER": "pusher_cluster",
}


def load_config(config_path: Optional[str] = None, environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    Load configuration from YAML file, then apply environment overrides

    Args:
        config_path: Path to config file (default: $PEERPULSE_CONFIG or config/peerpulse.yaml).
            A missing file is not an error; defaults are used.
        environ: Environment mapping (default: os.environ after loading .env)

    Returns:
        Settings object

    Raises:
        ValueError: If transport is "pusher" and any Pusher credential is missing
    """
    if environ is None:
        load_dotenv()
        environ = dict(os.environ)

    path = Path(config_path or environ.get("PEERPULSE_CONFIG", DEFAULT_CONFIG_PATH))

    data = {}
    if path.exists():
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

    for env_key, field in ENV_OVERRIDES.items():
        value = environ.get(env_key)
        if value not in (None, ""):
            data[field] = value

    settings = Settings(**data)

    if settings.transport == "pusher":
        missing = [
            name for name in ("pusher_app_id", "pusher_key", "pusher_secret", "pusher_cluster")
            if not getattr(settings, name)
        ]
        if missing:
            raise ValueError(f"Pusher transport requires: {', '.join(missing)}")

    return settings
