"""Run driver: wires configuration into the partitioner and reports statistics."""

import logging
import random
from typing import Any, Dict, List, Optional

from config import Config
from core.assigner import ItemAssigner
from core.models import Category
from core.oracle import CategoryOracle
from core.partitioner import RecursivePartitioner
from core.proposer import CategoryProposer

logger = logging.getLogger(__name__)


def resolve_config(
    items: List[str], config: Config, overrides: Optional[Dict[str, Any]] = None
) -> Config:
    """
    Apply ``overrides`` to the categorization section.

    ``item_count`` defaults to the number of items and ``category_count`` is
    clamped to it unless either was given explicitly.
    """
    overrides = dict(overrides or {})
    if "item_count" not in overrides:
        overrides["item_count"] = max(1, len(items))
    if "category_count" not in overrides:
        overrides["category_count"] = min(
            config.categorization.category_count, overrides["item_count"]
        )
    return config.with_overrides(overrides)


def summarize_categories(categories: List[Category]) -> Dict[str, Any]:
    """Distribution statistics over leaf categories."""
    counts = [len(c.items) for c in categories]
    if not counts:
        return {
            "category_count": 0,
            "item_count": 0,
            "min_items": 0,
            "max_items": 0,
            "avg_items": 0.0,
            "max_depth": 0,
        }
    return {
        "category_count": len(counts),
        "item_count": sum(counts),
        "min_items": min(counts),
        "max_items": max(counts),
        "avg_items": round(sum(counts) / len(counts), 2),
        "max_depth": max(c.depth for c in categories),
    }


def run_categorization(
    items: List[str],
    config_overrides: Optional[Dict[str, Any]] = None,
    config: Optional[Config] = None,
    oracle: Optional[CategoryOracle] = None,
    rng: Optional[random.Random] = None,
) -> List[Category]:
    """
    Categorize ``items`` and log distribution statistics.

    Args:
        items: Items to categorize
        config_overrides: Partial categorization settings (field name -> value)
        config: Base configuration (defaults if omitted)
        oracle: Backend client (built from config if omitted)
        rng: Random source for sampling (seeded from ``config.seed`` if omitted)

    Returns:
        Leaf categories
    """
    config = resolve_config(items, config or Config(), config_overrides)
    settings = config.categorization
    logger.info(f"Starting categorization with config: {settings.model_dump()}")

    oracle = oracle or CategoryOracle(config)
    rng = rng or random.Random(config.seed)
    partitioner = RecursivePartitioner(
        CategoryProposer(oracle, rng=rng),
        ItemAssigner(
            oracle,
            workers=config.processing.workers,
            show_progress=config.processing.show_progress,
        ),
    )

    result = partitioner.partition(list(items), settings)

    stats = summarize_categories(result)
    logger.info("Categorization complete!")
    logger.info(f"Created {stats['category_count']} categories for {len(items)} items")
    logger.info("Category statistics:")
    logger.info(f"  - Min items: {stats['min_items']}")
    logger.info(f"  - Max items: {stats['max_items']}")
    logger.info(f"  - Avg items: {stats['avg_items']:.2f}")
    logger.info(f"  - Max depth: {stats['max_depth']}")

    return result
