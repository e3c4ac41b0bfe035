#!/usr/bin/env python3
"""Calendar Mirror — mirror upcoming events between two Google accounts by CORE SYSTEMS."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional

from .config import DEFAULT_CONFIG_FILE, Config, Side, Vendor, load_config
from .errors import CalendarMirrorError
from .log import LOGGER_NAME, setup_logging
from .providers import CalendarClient, GoogleCalendarClient
from .sync import StateStore, SyncEngine

ClientFactory = Callable[[Vendor, Config], CalendarClient]


def connect_google(vendor: Vendor, config: Config) -> CalendarClient:
    return GoogleCalendarClient.connect(
        vendor.label, vendor.credentials_file, config.callback_server_port,
    )


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='core-calendar-mirror',
        description="Mirror upcoming events from one Google Calendar account to another.",
    )
    parser.add_argument('-c', '--config', default=DEFAULT_CONFIG_FILE,
                        help=f"configuration file (default: {DEFAULT_CONFIG_FILE})")
    parser.add_argument('--state', help="event checksum file (overrides stateFile)")
    parser.add_argument('--log-level', default='INFO',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help="console log level (default: INFO)")
    direction = parser.add_mutually_exclusive_group()
    direction.add_argument('--two-way', dest='two_way', action='store_true', default=None,
                           help="also mirror destination events back to the source")
    direction.add_argument('--one-way', dest='two_way', action='store_false',
                           help="only mirror source events to the destination")
    return parser.parse_args(argv)


def run(args: argparse.Namespace, connect: ClientFactory = connect_google) -> int:
    logger = logging.getLogger(LOGGER_NAME)
    try:
        config = load_config(args.config)
        if args.state:
            config.state_file = args.state
        if args.two_way is not None:
            config.sync_options.two_way_sync = args.two_way

        source, destination = config.vendors()
        clients = {
            Side.SOURCE: connect(source, config),
            Side.DESTINATION: connect(destination, config),
        }
        engine = SyncEngine(
            source, destination, clients,
            options=config.sync_options,
            state_store=StateStore(config.state_file, logger=logger),
            logger=logger,
        )
        engine.run()
    except CalendarMirrorError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
