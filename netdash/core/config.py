#!/usr/bin/env python3
"""
netdash Configuration Management

Values come from a YAML file first; command line flags override the ones
they name. The telemetry URL defaults to /net.json on the telemetry server.
"""

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urljoin

import yaml

logger = logging.getLogger("netdash.server")


@dataclass
class DashboardConfig:
    """Dashboard configuration with defaults"""
    server: str = "http://127.0.0.1:3128"
    data_url: str = "/net.json"
    interval: int = 5
    timeout: int = 10
    host: str = "0.0.0.0"
    port: int = 8050
    container_id: str = "chart"
    skip_when_busy: bool = True
    log_level: str = "INFO"
    once: bool = False

    def __post_init__(self):
        # YAML files may spell levels in lower case
        self.log_level = str(self.log_level).upper()

    @classmethod
    def from_file(cls, config_path: Path) -> "DashboardConfig":
        """Load configuration from YAML file"""
        if not config_path.exists():
            logger.debug("Config file not found: %s, using defaults", config_path)
            return cls()

        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
            logger.debug("Loaded config from %s: %s", config_path, data)
            return cls(**data)
        except (OSError, yaml.YAMLError, TypeError) as e:
            logger.warning("Failed to load config from %s: %s, using defaults", config_path, e)
            return cls()

    def override_with_args(self, args: argparse.Namespace) -> "DashboardConfig":
        """Override config with command line arguments if provided"""
        # Only override if explicitly provided - preserves config file values
        self.server = args.server if args.server is not None else self.server
        self.data_url = args.data if args.data is not None else self.data_url
        self.interval = args.interval if args.interval is not None else self.interval
        self.host = args.host if args.host is not None else self.host
        self.port = args.port if args.port is not None else self.port
        self.log_level = args.log_level if args.log_level is not None else self.log_level
        self.once = args.once
        return self

    @property
    def poll_period(self) -> int:
        return max(1, self.interval)

    def resolve_data_url(self) -> str:
        """Absolute telemetry URL; relative data_url values hang off `server`."""
        if self.data_url.startswith(("http://", "https://")):
            return self.data_url
        return urljoin(self.server.rstrip("/") + "/", self.data_url.lstrip("/"))
