"""Batch assignment of items to a fixed set of categories."""

import json
import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, List, Tuple

from pydantic import ValidationError
from tqdm import tqdm

from config import CategorizationConfig
from core.category_validator import CategoryValidator
from core.errors import SchemaMismatch
from core.models import AssignmentBatch, Category
from core.oracle import CategoryOracle

logger = logging.getLogger(__name__)


def iter_batches(items: List[str], batch_size: int) -> Iterator[List[str]]:
    """Yield consecutive slices of ``batch_size`` items; the last may be shorter."""
    for start in range(0, len(items), batch_size):
        yield items[start:start + batch_size]


class ItemAssigner:
    """Partitions items into categories with one oracle call per batch."""

    def __init__(self, oracle: CategoryOracle, workers: int = 1, show_progress: bool = False):
        """
        Initialize assigner.

        Args:
            oracle: Backend client
            workers: Number of batches in flight at once
            show_progress: Show a tqdm progress bar over batches
        """
        self.oracle = oracle
        self.workers = max(1, workers)
        self.show_progress = show_progress
        self.validator = CategoryValidator()

    def assign(
        self,
        items: List[str],
        categories: List[Category],
        config: CategorizationConfig,
    ) -> Tuple[List[Category], List[str]]:
        """
        Assign every item to one of ``categories``.

        Args:
            items: Items to place
            categories: Fixed category set (items lists are appended to)
            config: Configuration for this level

        Returns:
            Tuple of (categories with items populated, items that could not be placed)

        Raises:
            SchemaMismatch: If a reply lacks a usable ``assignments`` list
            BackendError: If an oracle call fails
        """
        system_prompt = self._build_prompt(categories)
        index = self.validator.build_index(categories)
        batches = list(iter_batches(items, config.batch_size))
        total = len(batches)

        def run_batch(numbered: Tuple[int, List[str]]) -> Tuple[List[List[str]], List[str]]:
            number, batch = numbered
            logger.info(f"Assigning batch {number}/{total}...")
            return self._assign_batch(batch, categories, index, system_prompt)

        numbered_batches = list(enumerate(batches, 1))
        if self.workers > 1 and total > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as executor:
                results = list(
                    tqdm(
                        executor.map(run_batch, numbered_batches),
                        total=total,
                        desc="Assigning items",
                        unit="batch",
                        disable=not self.show_progress,
                    )
                )
        else:
            results = [
                run_batch(numbered)
                for numbered in tqdm(
                    numbered_batches,
                    desc="Assigning items",
                    unit="batch",
                    disable=not self.show_progress,
                )
            ]

        # Merge in batch order so grouping does not depend on execution order
        unassigned: list[str] = []
        for buckets, leftover in results:
            for category, bucket in zip(categories, buckets):
                category.items.extend(bucket)
            unassigned.extend(leftover)

        return categories, unassigned

    def _assign_batch(
        self,
        batch: List[str],
        categories: List[Category],
        index,
        system_prompt: str,
    ) -> Tuple[List[List[str]], List[str]]:
        """Run one oracle call and bucket its assignments by category position."""
        response = self.oracle.call(
            system_prompt,
            f"Assign these items to the most appropriate categories:\n{json.dumps(batch)}",
        )

        try:
            parsed = AssignmentBatch.model_validate(response)
        except ValidationError as e:
            logger.error(f"Assignment reply has unexpected shape: {e}")
            raise SchemaMismatch(f"Assignment reply has unexpected shape: {e}") from e

        remaining = Counter(batch)
        buckets: list[list[str]] = [[] for _ in categories]
        unassigned: list[str] = []

        for assignment in parsed.assignments:
            if remaining[assignment.item] <= 0:
                logger.warning(f"Ignoring assignment for unknown or repeated item: {assignment.item}")
                continue
            remaining[assignment.item] -= 1

            position = self.validator.match(assignment.category_name, index)
            if position is None:
                logger.warning(f"Category not found: {assignment.category_name}")
                unassigned.append(assignment.item)
            else:
                buckets[position].append(assignment.item)

        omitted = list(remaining.elements())
        if omitted:
            logger.warning(f"Backend omitted {len(omitted)} item(s) from its reply")
            unassigned.extend(omitted)

        return buckets, unassigned

    def _build_prompt(self, categories: List[Category]) -> str:
        """Build item assignment prompt."""
        categories_info = json.dumps(
            [{"name": c.name, "description": c.description} for c in categories],
            indent=2,
        )
        return f"""You are an expert in categorization. Your task is to assign each item to the most appropriate category
from a predefined list.

CATEGORIES:
{categories_info}

INSTRUCTIONS:
- For each item, select the ONE most appropriate category from the list above
- Use the category name exactly as written
- Respond with a JSON object of the form {{"assignments": [{{"item": string, "categoryName": string}}]}}
- Make decisions based on the most salient features of each item
- Be consistent in your categorization approach
- Do not include any explanations outside the JSON structure
- If an item truly doesn't fit any category, assign it to the closest match

Your goal is to ensure items are distributed as evenly as possible across categories while
maintaining logical categorization.
"""
