"""
TOML-based configuration for nemwallet.

Loads settings from a TOML file and/or environment variables.
Environment variables take precedence over file values.

Usage:
    from nemwallet_core.config import load_config
    cfg = load_config("nemwallet.toml")
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from nemwallet_core.address import network_version
from nemwallet_core.endpoint import DEFAULT_PORT, DEFAULT_PROTOCOL, NodeEndpoint

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


@dataclass
class NetworkConfig:
    """Which network addresses are derived for."""
    name: str = "mainnet"

    @property
    def version(self) -> int:
        return network_version(self.name)


@dataclass
class HarvestingConfig:
    """Default remote harvesting node, used when no endpoint is given explicitly."""
    protocol: str = DEFAULT_PROTOCOL
    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT

    def endpoint(self) -> NodeEndpoint:
        return NodeEndpoint(self.protocol, self.host, self.port)


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    format: str = "human"   # "human" or "json"
    file: str | None = None


@dataclass
class NemWalletConfig:
    """Top-level configuration container."""
    network: NetworkConfig = field(default_factory=NetworkConfig)
    harvesting: HarvestingConfig = field(default_factory=HarvestingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _merge(dc: Any, raw: dict[str, Any]) -> None:
    """Merge a raw dict into a dataclass instance (in-place)."""
    for key, value in raw.items():
        key_under = key.replace("-", "_")
        if hasattr(dc, key_under):
            setattr(dc, key_under, value)


def load_config(path: str | None = None) -> NemWalletConfig:
    """
    Load configuration from a TOML file, then overlay environment variables.

    A missing file is not an error; the defaults are used.

    Env-var mapping:
        NEMWALLET_NETWORK          -> network.name
        NEMWALLET_HARVEST_PROTOCOL -> harvesting.protocol
        NEMWALLET_HARVEST_HOST     -> harvesting.host
        NEMWALLET_HARVEST_PORT     -> harvesting.port
        NEMWALLET_LOG_LEVEL        -> logging.level
        NEMWALLET_LOG_FMT          -> logging.format
    """
    cfg = NemWalletConfig()

    # ── TOML file ────────────────────────────────────────────────
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p, "rb") as f:
                data = tomllib.load(f)
            for section_name, section_dc in [
                ("network", cfg.network),
                ("harvesting", cfg.harvesting),
                ("logging", cfg.logging),
            ]:
                if section_name in data:
                    _merge(section_dc, data[section_name])

    # ── Environment variable overrides ───────────────────────────
    if v := os.environ.get("NEMWALLET_NETWORK"):
        cfg.network.name = v
    if v := os.environ.get("NEMWALLET_HARVEST_PROTOCOL"):
        cfg.harvesting.protocol = v
    if v := os.environ.get("NEMWALLET_HARVEST_HOST"):
        cfg.harvesting.host = v
    if v := os.environ.get("NEMWALLET_HARVEST_PORT"):
        cfg.harvesting.port = int(v)
    if v := os.environ.get("NEMWALLET_LOG_LEVEL"):
        cfg.logging.level = v.upper()
    if v := os.environ.get("NEMWALLET_LOG_FMT"):
        cfg.logging.format = v

    return cfg
