"""Application entry point."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Optional, Sequence

from cli import RaffleConsole
from config import Config, load_config
from core import setup_logger
from services.raffle import Raffle
from services.ticket_generator import TicketGenerator
from utils.performance import PerformanceMonitor


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal raffle simulator")
    parser.add_argument("--seed", type=int, default=None, help="Seed for deterministic tickets")
    parser.add_argument("--log-level", default=None, help="Console log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--log-file", default=None, help="Log file path")
    parser.add_argument("--no-clear", action="store_true", help="Don't clear the screen between menus")
    return parser.parse_args(argv)


def apply_args(config: Config, args: argparse.Namespace) -> Config:
    """Override loaded configuration with command-line options."""
    overrides = {}
    if args.seed is not None:
        overrides["random_seed"] = args.seed
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    if args.log_file:
        overrides["log_file"] = args.log_file
    if args.no_clear:
        overrides["clear_screen"] = False
    return replace(config, **overrides) if overrides else config


def build_console(config: Config) -> RaffleConsole:
    """Wire the ledger, its ticket source and the menu from configuration."""
    monitor = PerformanceMonitor()
    generator = TicketGenerator(seed=config.random_seed)
    raffle = Raffle(generator=generator, monitor=monitor)
    return RaffleConsole(
        raffle,
        clear_screen=config.clear_screen,
        monitor=monitor,
        metrics_textfile=config.metrics_textfile,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    config = apply_args(load_config(), parse_args(argv))

    # Configure the root logger so every module logger is captured
    logger = setup_logger(
        name="",
        level=config.log_level,
        log_file=config.log_file,
        colored=config.colored_logs,
        file_level="DEBUG" if config.debug else "INFO",
    )

    try:
        console = build_console(config)
        logger.info(f"Raffle started (environment={config.environment}, seed={config.random_seed})")
        console.run()
    except Exception as e:
        logger.error(f"Application failed: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
