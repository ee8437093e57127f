#!/usr/bin/env python3

"""
Example script to update an openHAB item using the async pyhabdroid library.

Reads the server settings (OPENHAB_URL, OPENHAB_USERNAME, OPENHAB_PASSWORD,
OPENHAB_TIMEOUT, OPENHAB_VERIFY_SSL) from environment variables.

Requires the item name and the value as command-line arguments. Use the
value TOGGLE to invert the current state of the item.

Usage:
  export OPENHAB_URL="https://openhab.local:8443"
  python3 update_item.py Kitchen_Light TOGGLE --toast
"""

import argparse
import asyncio
import json
import logging
import sys

from pyhabdroid import (
    ConfigError,
    ConnectionFactory,
    ItemUpdater,
    ItemUpdateScheduler,
    RetryPolicy,
    ServerConfig,
    UpdateRequest,
)

# --- Configuration ---
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)

# --- Argument Parsing ---
parser = argparse.ArgumentParser(description="Send a new state to an openHAB item.")
parser.add_argument("item", help="Name of the item to update.")
parser.add_argument("value", help="Value to send, or TOGGLE.")
parser.add_argument("--label", help="Label used in the feedback message.")
parser.add_argument("--mapped-value", help="Display value used in the feedback.")
parser.add_argument(
    "--toast", action="store_true", help="Log a feedback message on completion."
)
parser.add_argument(
    "--retry-delay",
    type=float,
    default=2.0,
    help="Initial delay in seconds between attempts while the server is unreachable.",
)
args = parser.parse_args()


# --- Main Async Function ---
async def main():
    """Run the async update script."""
    try:
        config = ServerConfig.from_env()
    except ConfigError as e:
        logging.error(f"Configuration Error: {e}")
        sys.exit(1)

    factory = ConnectionFactory(config)
    try:
        updater = ItemUpdater(factory)
        scheduler = ItemUpdateScheduler(
            updater, RetryPolicy(initial_delay=args.retry_delay, max_delay=60.0)
        )
        request = UpdateRequest(
            item=args.item,
            value=args.value,
            label=args.label,
            mapped_value=args.mapped_value,
            show_toast=args.toast,
        )
        logging.info(f"Updating item {request.item} to {request.value}...")
        outcome = await scheduler.run(request)
        print(json.dumps(outcome.to_data(), indent=2))
        if not outcome.success:
            sys.exit(2)
    finally:
        # Ensure the session is closed
        await factory.close()
        logging.info("HTTP session closed.")


if __name__ == "__main__":
    asyncio.run(main())
