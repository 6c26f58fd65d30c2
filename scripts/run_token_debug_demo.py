#!/usr/bin/env python3
"""
Watch token refreshes happen with token debug mode switched on.

Loads credential settings, builds a TokenManager through the runtime factory
and asks it for a token repeatedly. With `token_debug.enabled: true` the
expiry is shortened, so refreshes show up in the log within a few minutes.

Usage:
    python scripts/run_token_debug_demo.py --config configs/token_debug_demo.yml
    python scripts/run_token_debug_demo.py --config my.yml --iterations 20 --interval 30

Secrets can be referenced as ${ENV_VAR} in the config file.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from config import ConfigLoader, EnvVarPreprocessor, TokenManagerRuntimeFactory  # noqa: E402
from core.logging import configure_logging, set_http_logging_level  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Acquire tokens in a loop to observe refresh behavior"
    )
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to a YAML credential settings file",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=10,
        help="Number of token lookups to perform (default: 10)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=30.0,
        help="Seconds to wait between lookups (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Root log level (default: INFO)",
    )
    return parser.parse_args()


async def run(config_path: Path, iterations: int, interval: float) -> None:
    logger = logging.getLogger("[TokenDebugDemo]")

    settings = ConfigLoader([EnvVarPreprocessor()]).from_yaml(config_path)
    manager = TokenManagerRuntimeFactory.build_factory(settings)()

    try:
        for i in range(1, iterations + 1):
            token = await manager.get_token()
            logger.info(
                f"Lookup {i}/{iterations}: token expires in "
                f"{token.seconds_until_expiration():.0f}s"
            )
            if i < iterations:
                await asyncio.sleep(interval)
    finally:
        await manager.provider.close()


def main() -> int:
    """Main entry point for the token debug demo."""
    args = parse_args()

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Error: Configuration file not found: {config_path}")
        return 1

    configure_logging(args.log_level.upper())
    set_http_logging_level()

    asyncio.run(run(config_path, args.iterations, args.interval))
    return 0


if __name__ == "__main__":
    sys.exit(main())
