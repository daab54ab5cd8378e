"""Recursive partitioning of items into within-budget leaf categories."""

import logging
from typing import List

from config import CategorizationConfig
from core.assigner import ItemAssigner
from core.errors import NoProgressError, RecursionLimitError
from core.models import Category
from core.proposer import CategoryProposer

logger = logging.getLogger(__name__)

UNASSIGNED_NAME = "Unassigned"
UNASSIGNED_DESCRIPTION = "Items the model did not place in any proposed category"


class RecursivePartitioner:
    """Proposes, assigns, and subdivides oversized categories until all fit."""

    def __init__(self, proposer: CategoryProposer, assigner: ItemAssigner):
        self.proposer = proposer
        self.assigner = assigner

    def partition(
        self, items: List[str], config: CategorizationConfig, depth: int = 0
    ) -> List[Category]:
        """
        Categorize ``items`` into leaf categories.

        Args:
            items: Items to categorize at this level
            config: Configuration for this level
            depth: Current recursion depth (0 for the full item set)

        Returns:
            Leaf categories in the order they were produced, depth-first

        Raises:
            RecursionLimitError: If depth exceeds ``config.max_depth``
            NoProgressError: If one category swallows every item of a level
            BackendError, SchemaMismatch: Propagated from the oracle layer
        """
        if not items:
            return []
        if depth > config.max_depth:
            raise RecursionLimitError(
                f"Exceeded max depth {config.max_depth} with {len(items)} items left"
            )

        logger.info(f"[DEPTH {depth}] Processing {len(items)} items...")

        categories = self.proposer.propose(items, config)
        populated, unassigned = self.assigner.assign(items, categories, config)

        items_per_category = config.items_per_category
        final_categories: list[Category] = []

        for category in populated:
            size = len(category.items)
            if size <= items_per_category:
                final_categories.append(category)
                continue

            if size >= len(items):
                raise NoProgressError(
                    f"[DEPTH {depth}] Category '{category.name}' holds all {size} items; "
                    f"subdividing would not shrink the problem"
                )

            logger.info(
                f"Category \"{category.name}\" has {size} items, which exceeds the "
                f"target of {items_per_category}. Subdividing..."
            )
            child_config = config.derive(
                item_count=size,
                category_count=-(-size // items_per_category),
            )
            sub_categories = self.partition(category.items, child_config, depth + 1)
            final_categories.extend(sub.nested_under(category) for sub in sub_categories)

        if unassigned:
            if config.keep_unassigned:
                logger.warning(
                    f"[DEPTH {depth}] {len(unassigned)} item(s) routed to '{UNASSIGNED_NAME}'"
                )
                final_categories.append(
                    Category(
                        name=UNASSIGNED_NAME,
                        description=UNASSIGNED_DESCRIPTION,
                        items=unassigned,
                    )
                )
            else:
                logger.warning(f"[DEPTH {depth}] Dropped {len(unassigned)} unassigned item(s)")

        return final_categories
