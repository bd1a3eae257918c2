#!/usr/bin/env python3

import argparse
import logging

from tickerpi.station.config import load_config
from tickerpi.station.service import run_station_loop


def parse_args():
    parser = argparse.ArgumentParser(description="Run the sensor and quote display loop.")
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=None,
        help="Stop after this many control-loop ticks (default: run forever).",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Perform the initial refresh and exit.",
    )
    return parser.parse_args()


def main():
    args = parse_args()
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    max_ticks = 1 if args.once else args.max_ticks
    run_station_loop(max_ticks=max_ticks)


if __name__ == "__main__":
    main()
