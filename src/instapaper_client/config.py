"""Configuration loading and saving.

Config file location: ~/.config/instapaper/config.toml

Schema:
    [consumer]
    key = "..."
    secret = "..."

    [auth]  # written by `instapaper login`
    oauth_token = "..."
    oauth_token_secret = "..."

    [api]
    base_url = "https://www.instapaper.com"
    timeout = 30.0

The username and password are never stored, only the token pair they were
exchanged for.
"""

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

import tomli_w

from .client import BASE_URL, Client
from .errors import ConfigError
from .transport import DEFAULT_TIMEOUT, Transport

CONFIG_DIR = Path.home() / ".config" / "instapaper"
CONFIG_FILE = CONFIG_DIR / "config.toml"


@dataclass
class ConsumerConfig:
    key: str
    secret: str


@dataclass
class TokenConfig:
    oauth_token: str
    oauth_token_secret: str


@dataclass
class AppConfig:
    consumer: ConsumerConfig
    token: TokenConfig | None = None
    base_url: str = BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    def to_client(self) -> Client:
        client = Client.from_credentials(
            self.consumer.key,
            self.consumer.secret,
            base_url=self.base_url,
            transport=Transport(timeout=self.timeout),
        )
        if self.token:
            client = client.with_token(
                self.token.oauth_token, self.token.oauth_token_secret
            )
        return client


def load_config(config_path: Path = CONFIG_FILE) -> AppConfig:
    """Load and validate config from TOML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_path}: {e}") from e

    consumer_data = data.get("consumer", {})
    key = consumer_data.get("key", "")
    secret = consumer_data.get("secret", "")
    if not key or not secret:
        raise ConfigError("Config missing required consumer.key and consumer.secret")

    auth_data = data.get("auth", {})
    oauth_token = auth_data.get("oauth_token", "")
    oauth_token_secret = auth_data.get("oauth_token_secret", "")
    if bool(oauth_token) != bool(oauth_token_secret):
        raise ConfigError(
            "Config auth section needs both oauth_token and oauth_token_secret"
        )

    token = None
    if oauth_token:
        token = TokenConfig(
            oauth_token=oauth_token, oauth_token_secret=oauth_token_secret
        )

    api_data = data.get("api", {})
    try:
        timeout = float(api_data.get("timeout", DEFAULT_TIMEOUT))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid api.timeout: {e}") from e

    return AppConfig(
        consumer=ConsumerConfig(key=key, secret=secret),
        token=token,
        base_url=api_data.get("base_url", BASE_URL),
        timeout=timeout,
    )


def save_config(config: AppConfig, config_path: Path = CONFIG_FILE) -> None:
    """Write config to TOML file with restricted permissions."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "consumer": {
            "key": config.consumer.key,
            "secret": config.consumer.secret,
        },
        "api": {
            "base_url": config.base_url,
            "timeout": config.timeout,
        },
    }

    if config.token:
        data["auth"] = {
            "oauth_token": config.token.oauth_token,
            "oauth_token_secret": config.token.oauth_token_secret,
        }

    with open(config_path, "wb") as f:
        tomli_w.dump(data, f)

    # File contains consumer and token secrets
    os.chmod(config_path, 0o600)


def config_exists(config_path: Path = CONFIG_FILE) -> bool:
    """Check if config file exists."""
    return config_path.exists()
