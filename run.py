#!/usr/bin/env python3
"""Convenience runner for the GNSS distance calculator.

Usage:
    python run.py -i input.json -d reference.json -o output.json [-a]
"""
import logging
from gnss_distance.main import main

if __name__ == "__main__":
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    raise SystemExit(int(main()))
