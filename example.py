#!/usr/bin/env python3
"""
Example: categorizing a small product catalogue

Runs the categorizer on 30 consumer electronics and home products and
prints the resulting leaf categories as JSON. Needs OPENAI_API_KEY (or
LLM_PROVIDER=ollama with a local model).
"""

import json
import logging
import sys

from config import Config
from core.categorizer import run_categorization
from core.errors import CategorizationError

EXAMPLE_ITEMS = [
    "iPhone 13 Pro",
    "Samsung Galaxy S22",
    "MacBook Air M2",
    "Dell XPS 15",
    "AirPods Pro",
    "Sony WH-1000XM5",
    "iPad Pro 12.9",
    "Microsoft Surface Pro 9",
    "Nintendo Switch OLED",
    "PlayStation 5",
    "Amazon Echo Dot",
    "Google Nest Hub",
    "LG C2 OLED TV",
    "Samsung QN90B QLED TV",
    "Canon EOS R5",
    "Sony A7 IV",
    "DJI Mavic 3",
    "GoPro Hero 11",
    "Fitbit Sense 2",
    "Apple Watch Series 8",
    "Instant Pot Duo",
    "Ninja Air Fryer",
    "Dyson V15 Absolute",
    "iRobot Roomba j7+",
    "Kindle Paperwhite",
    "Sonos Beam",
    "Logitech MX Master 3",
    "Razer BlackWidow V3",
    "NVIDIA RTX 4080",
    "AMD Ryzen 9 5950X",
]

EXAMPLE_OVERRIDES = {
    "item_count": len(EXAMPLE_ITEMS),
    "category_count": 5,
    "sample_size": 30,
    "step_category_amount": 5,
    "batch_size": 10,
}


def main():
    """Run example categorization."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    config = Config()
    config.load_env()

    try:
        categories = run_categorization(EXAMPLE_ITEMS, EXAMPLE_OVERRIDES, config=config)
    except CategorizationError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps([c.model_dump() for c in categories], indent=2))


if __name__ == "__main__":
    main()
