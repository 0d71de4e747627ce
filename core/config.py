import os
from dataclasses import dataclass
from typing import Mapping, Optional

import yaml

DEFAULT_USER_AGENT = "demo-mcp-server/1.0"
DEFAULT_SERVER_NAME = "campaign-api-server"
DEFAULT_SERVER_VERSION = "1.0.0"


class ConfigurationError(Exception):
    """Raised when required configuration is missing at startup."""


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML file on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _load_config(cls):
        """
        Load config.yaml from the repository root into _config.
        The file is optional; without it every setting uses its default.
        """
        config_path = os.path.join(os.path.dirname(__file__), "..", "config.yaml")
        config_path = os.path.abspath(config_path)
        if not os.path.isfile(config_path):
            cls._config = {}
            return
        with open(config_path, "r") as f:
            cls._config = yaml.safe_load(f) or {}

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def get_config():
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, built once at startup and passed to tools."""

    base_api_url: str
    api_key: Optional[str] = None
    user_agent: str = DEFAULT_USER_AGENT
    server_name: str = DEFAULT_SERVER_NAME
    server_version: str = DEFAULT_SERVER_VERSION

    @property
    def uses_api_key(self) -> bool:
        return bool(self.api_key)


def load_settings(environ: Optional[Mapping[str, str]] = None, config: Optional[dict] = None) -> Settings:
    """Build Settings from the environment and config.yaml.

    BASE_API_URL is required; CAMPAIGN_API_KEY is optional. Raises
    ConfigurationError when the base URL is missing or blank, or when the API
    key or user agent cannot be sent as an ASCII HTTP header.
    """
    env = os.environ if environ is None else environ
    cfg = get_config() if config is None else config
    cfg = cfg or {}

    base_url = (env.get("BASE_API_URL") or "").strip().rstrip("/")
    if not base_url:
        raise ConfigurationError("BASE_API_URL is not defined in the environment variables.")

    api_key = (env.get("CAMPAIGN_API_KEY") or "").strip() or None
    user_agent = str(cfg.get("user_agent") or DEFAULT_USER_AGENT)
    for name, value in (("CAMPAIGN_API_KEY", api_key), ("user_agent", user_agent)):
        if value is not None and not value.isascii():
            raise ConfigurationError(f"{name} must contain only ASCII characters.")

    server_cfg = cfg.get("server", {}) or {}
    return Settings(
        base_api_url=base_url,
        api_key=api_key,
        user_agent=user_agent,
        server_name=server_cfg.get("name") or DEFAULT_SERVER_NAME,
        server_version=str(server_cfg.get("version") or DEFAULT_SERVER_VERSION),
    )
