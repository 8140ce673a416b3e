"""Application settings loaded from environment variables and config files.

Configuration is loaded from (highest priority first):
1. Environment variables (prefix: ``HELIUM_WALLET_``, nested via ``__``)
2. YAML config file (``HELIUM_WALLET_CONFIG_PATH`` env var or ``from_yaml``)
3. Defaults defined here
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from helium_wallet.helium.keys import KeyNetwork

# ---------------------------------------------------------------------------
# Enums for validated choices
# ---------------------------------------------------------------------------


class Network(enum.StrEnum):
    """Supported networks."""

    MAINNET = "mainnet"
    TESTNET = "testnet"

    @property
    def key_network(self) -> KeyNetwork:
        """Network nibble used in key tags and addresses."""
        return KeyNetwork.TESTNET if self is Network.TESTNET else KeyNetwork.MAINNET


# ---------------------------------------------------------------------------
# Sub-config models
# ---------------------------------------------------------------------------


class APIConfig(BaseSettings):
    """Node API settings."""

    model_config = SettingsConfigDict(
        env_prefix="HELIUM_WALLET_API__",
        case_sensitive=False,
    )

    mainnet_url: str = "https://api.helium.io"
    testnet_url: str = "https://testnet-api.helium.wtf"
    timeout: float = 30.0

    def url_for(self, network: Network) -> str:
        """Base URL of the API serving *network*."""
        return self.testnet_url if network == Network.TESTNET else self.mainnet_url


class FeeSettings(BaseSettings):
    """Fee and sweep resolution settings."""

    model_config = SettingsConfigDict(
        env_prefix="HELIUM_WALLET_FEES__",
        case_sensitive=False,
    )

    oracle_window: int = Field(
        default=120,
        ge=0,
        description="Minutes of predicted oracle prices considered for sweeps; 0 uses the current price",
    )
    sweep_max_iterations: int = Field(
        default=10,
        ge=1,
        description="Iteration cap for the sweep fee fixed-point loop",
    )


# ---------------------------------------------------------------------------
# Top-level config
# ---------------------------------------------------------------------------


def _load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML configuration file and return its contents as a dict.

    Returns an empty dict if the file doesn't exist or is empty.
    """
    p = Path(path)
    if not p.exists():
        return {}
    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    return data if isinstance(data, dict) else {}


class AppConfig(BaseSettings):
    """Top-level application configuration.

    Loads settings from environment variables (``HELIUM_WALLET_`` prefix),
    an optional YAML file, and built-in defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="HELIUM_WALLET_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    config_path: str = ""
    network: Network = Network.MAINNET

    api: APIConfig = Field(default_factory=APIConfig)
    fees: FeeSettings = Field(default_factory=FeeSettings)

    @model_validator(mode="before")
    @classmethod
    def _merge_yaml(cls, values: dict[str, Any]) -> dict[str, Any]:
        """Merge YAML config file contents under the env var overrides."""
        config_path = values.get("config_path", "")
        if not config_path:
            return values
        for key, val in _load_yaml(config_path).items():
            if key not in values or values[key] is None:
                values[key] = val
            elif isinstance(val, dict) and isinstance(values.get(key), dict):
                # YAML fills in nested keys the environment left unset
                values[key] = {**val, **values[key]}
        return values

    @classmethod
    def from_yaml(cls, path: str | Path) -> Self:
        """Construct ``AppConfig`` loading defaults from a YAML file.

        Environment variables still override YAML values.
        """
        return cls(config_path=str(path))
