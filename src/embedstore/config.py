"""
Configuration loader for embedstore.

Loads API keys and connection settings from:
1. Project-level: ./embedstore.toml or ./embedstore.yaml
2. User-level: ~/.embedstore/config.toml or ~/.embedstore/config.yaml
3. Environment variables (highest priority when used)
4. .env files (loaded from the current directory by load_env())

Priority: Explicit params > Environment vars > Config file

Example embedstore.toml:

    [qdrant]
    url = "http://localhost:6333"
    collection_name = "documents"
    content_key = "content"

    [models.openai]
    embedding_model = "text-embedding-3-small"
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "embedstore"
USER_CONFIG_DIR = ".embedstore"

_API_KEY_ENV_VARS: dict[str, list[str]] = {
    "openai": ["OPENAI_API_KEY"],
    "qdrant": ["QDRANT_API_KEY"],
}

_QDRANT_ENV_VARS: dict[str, str] = {
    "url": "QDRANT_URL",
    "collection_name": "QDRANT_COLLECTION",
    "content_key": "QDRANT_CONTENT_KEY",
}


def load_env(path: str | os.PathLike[str] | None = None) -> bool:
    """Load a .env file into the environment without overriding set variables.

    Args:
        path: Explicit .env path. Defaults to searching from the current directory.

    Returns:
        True if a file was loaded.
    """
    return load_dotenv(path) if path is not None else load_dotenv()


def find_config_file() -> Path | None:
    """Find configuration file in standard locations.

    Checks in order:
    1. ./embedstore.toml
    2. ./embedstore.yaml / ./embedstore.yml
    3. ~/.embedstore/config.toml
    4. ~/.embedstore/config.yaml / ~/.embedstore/config.yml

    Returns:
        Path to config file or None if not found
    """
    candidates = [
        Path.cwd() / f"{CONFIG_FILENAME}.toml",
        Path.cwd() / f"{CONFIG_FILENAME}.yaml",
        Path.cwd() / f"{CONFIG_FILENAME}.yml",
        Path.home() / USER_CONFIG_DIR / "config.toml",
        Path.home() / USER_CONFIG_DIR / "config.yaml",
        Path.home() / USER_CONFIG_DIR / "config.yml",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate
    return None


def load_toml(path: Path) -> dict[str, Any]:
    """Load TOML configuration file."""
    with open(path, "rb") as f:
        return tomllib.load(f)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML configuration file."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from file.

    A config file that cannot be parsed is logged and ignored, so a broken
    user-level file never prevents explicit configuration from working.

    Args:
        path: Explicit config file. Defaults to find_config_file().

    Returns:
        Configuration dictionary or empty dict if no config found
    """
    config_path = path or find_config_file()
    if not config_path:
        return {}

    try:
        if config_path.suffix == ".toml":
            return load_toml(config_path)
        if config_path.suffix in (".yaml", ".yml"):
            return load_yaml(config_path)
    except (OSError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
        logger.warning("Failed to load config from %s: %s", config_path, e)
    return {}


def get_api_key(provider: str, explicit_key: str | None = None) -> str | None:
    """Get API key for provider with priority handling.

    Priority:
    1. Explicit key parameter (highest)
    2. Environment variable
    3. Config file (lowest), [<provider>] or [models.<provider>] table

    Args:
        provider: Provider name (openai, qdrant)
        explicit_key: Explicitly provided API key

    Returns:
        API key or None
    """
    if explicit_key:
        return explicit_key

    provider_lower = provider.lower()
    for env_var in _API_KEY_ENV_VARS.get(provider_lower, []):
        key = os.environ.get(env_var)
        if key:
            return key

    config = load_config()
    section = config.get(provider_lower) or config.get("models", {}).get(provider_lower, {})
    return section.get("api_key")


def get_model_override(provider: str, kind: str) -> str | None:
    """Get embedding model override from env or config.

    Priority:
    1. Environment variable (e.g., OPENAI_EMBEDDING_MODEL)
    2. Config file (models.<provider>.embedding_model)

    Args:
        provider: Provider name
        kind: Model kind, e.g. "embedding"

    Returns:
        Model name override or None
    """
    value = os.environ.get(f"{provider.upper()}_{kind.upper()}_MODEL")
    if value:
        return value

    config = load_config()
    provider_config = config.get("models", {}).get(provider.lower(), {})
    return provider_config.get(f"{kind}_model")


def get_qdrant_settings(**explicit: Any) -> dict[str, Any]:
    """Resolve Qdrant connection settings.

    Args:
        **explicit: Values that take precedence (url, collection_name,
            content_key, api_key). None values are ignored.

    Returns:
        Dictionary with the resolved keys; missing settings are absent.
    """
    file_settings = load_config().get("qdrant", {})
    settings: dict[str, Any] = {}

    for key, env_var in _QDRANT_ENV_VARS.items():
        value = explicit.get(key) or os.environ.get(env_var) or file_settings.get(key)
        if value:
            settings[key] = value

    api_key = get_api_key("qdrant", explicit.get("api_key"))
    if api_key:
        settings["api_key"] = api_key
    return settings
