#!/usr/bin/env python3
"""
IP Radar - Main Entry Point

Loads notification settings, starts the configuration console and runs the
poll loop until interrupted.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ip_radar.change_monitor import ChangeDetector
from ip_radar.core.config import get_config
from ip_radar.notifications import Notifier, RetryPolicy, SmtpTransport
from ip_radar.poll_loop import PollLoop
from ip_radar.scanner import InterfaceScanner
from ip_radar.settings_store import SettingsCell, SettingsError, SettingsStore
from ip_radar.ui import ConsoleServer, create_app


def setup_logging(log_level: str):
    """
    Setup logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def positive_int(value: str) -> int:
    """argparse type: integer >= 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def port_number(value: str) -> int:
    """argparse type: TCP port 1-65535."""
    number = positive_int(value)
    if number > 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="IP Radar - email notification on new public IP addresses"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Notification settings file (default: from environment, config.json)"
    )
    parser.add_argument(
        "--interval",
        type=positive_int,
        default=None,
        help="Seconds between scans (default: from config, 600)"
    )
    parser.add_argument(
        "--port",
        type=port_number,
        default=None,
        help="Configuration console port (default: from config, 8087)"
    )
    parser.add_argument(
        "--no-console",
        action="store_true",
        help="Do not start the configuration console"
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single scan cycle and exit"
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Log level (default: from config)"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    config = get_config()

    log_level = args.log_level or config.log_level
    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    store = SettingsStore(args.config or config.config_file)
    try:
        store.ensure_exists()
        cell = SettingsCell(store.load())
    except SettingsError as e:
        logger.error(f"Fatal error: {e}")
        return 1

    scanner = InterfaceScanner()
    notifier = Notifier(
        transport=SmtpTransport(timeout=config.smtp_timeout_seconds),
        settings_provider=cell.get,
        retry=RetryPolicy(
            max_attempts=config.retry_attempts,
            delay_seconds=config.retry_delay_seconds,
        ),
    )
    interval = args.interval if args.interval is not None else config.poll_interval_seconds
    loop = PollLoop(
        scanner=scanner,
        detector=ChangeDetector(),
        notifier=notifier,
        interval_seconds=interval,
    )

    if args.once:
        loop.run_cycle()
        return 0

    console = None
    if not args.no_console:
        console = ConsoleServer(
            create_app(cell, store, scanner),
            host=config.console_host,
            port=args.port if args.port is not None else config.console_port,
        )
        console.start()

    logger.info("IP Radar is running...")
    try:
        loop.run()
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down...")
        loop.stop()
    finally:
        if console is not None:
            console.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
