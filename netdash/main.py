#!/usr/bin/env python3
"""
netdash entry point

Serves the dashboard page and runs the telemetry poller in the same
process. With --once, polls a single time, prints the dashboard snapshot
as JSON and exits.
"""

import argparse
import asyncio
import json
import logging
from pathlib import Path

import uvicorn

from .api.server import create_app
from .core.config import DashboardConfig
from .dashboard.controller import DashboardController

logger = logging.getLogger("netdash.server")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="netdash live network dashboard")
    parser.add_argument("--config", "-c", type=Path, default=Path("config.yml"),
                        help="YAML configuration file (default: config.yml)")
    parser.add_argument("--server",
                        help="telemetry server base URL (e.g., http://server:3128)")
    parser.add_argument("--data",
                        help="telemetry document path or URL (default: /net.json)")
    parser.add_argument("--interval", type=int,
                        help="seconds between polls")
    parser.add_argument("--host", help="address the dashboard listens on")
    parser.add_argument("--port", type=int, help="port the dashboard listens on")
    parser.add_argument("--once", action="store_true",
                        help="poll once, print the dashboard snapshot and exit")
    parser.add_argument("--log-level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="logging level")
    return parser


async def poll_once(config: DashboardConfig) -> dict:
    controller = DashboardController(config)
    await controller.poller.poll_once()
    data = controller.get_surface_data()
    controller.manager.dispose()
    return data


def main():
    args = build_parser().parse_args()

    # Load config: YAML first, then CLI overrides
    config = DashboardConfig.from_file(args.config).override_with_args(args)

    # Configure logging
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))
    logger.info("netdash starting: data=%s, interval=%ss", config.resolve_data_url(), config.poll_period)

    if config.once:
        print(json.dumps(asyncio.run(poll_once(config)), indent=2))
        return

    try:
        uvicorn.run(create_app(config), host=config.host, port=config.port, access_log=False)
    except KeyboardInterrupt:
        print("\nInterrupted. Bye!")


if __name__ == "__main__":
    main()
