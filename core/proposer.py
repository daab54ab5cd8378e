"""LLM-driven category proposal from a sample of items."""

import json
import logging
import random
from typing import List, Optional

from pydantic import ValidationError

from config import CategorizationConfig
from core.category_validator import CategoryValidator
from core.errors import SchemaMismatch
from core.models import Category, CategoryProposal
from core.oracle import CategoryOracle

logger = logging.getLogger(__name__)


class CategoryProposer:
    """Asks the oracle for a fixed number of category definitions."""

    def __init__(self, oracle: CategoryOracle, rng: Optional[random.Random] = None):
        """
        Initialize proposer.

        Args:
            oracle: Backend client
            rng: Random source used for sampling (a fresh unseeded one if omitted)
        """
        self.oracle = oracle
        self.rng = rng or random.Random()

    def select_sample(self, items: List[str], sample_size: int) -> List[str]:
        """Return all items if they fit, else a uniform sample without replacement."""
        if len(items) <= sample_size:
            return list(items)
        return self.rng.sample(items, sample_size)

    def propose(self, items: List[str], config: CategorizationConfig) -> List[Category]:
        """
        Propose categories for ``items``.

        Args:
            items: Items at the current recursion level
            config: Configuration for this level

        Returns:
            Categories with empty item lists, nominally ``step_category_amount`` of them

        Raises:
            SchemaMismatch: If the reply lacks a usable ``categories`` list
            BackendError: If the oracle call fails
        """
        sample = self.select_sample(items, config.sample_size)
        logger.info(
            f"Creating {config.step_category_amount} categories based on "
            f"{len(sample)} sample items..."
        )

        response = self.oracle.call(
            self._build_prompt(config),
            f"Here are the sample items:\n{json.dumps(sample)}",
        )

        try:
            proposal = CategoryProposal.model_validate(response)
        except ValidationError as e:
            logger.error(f"Category proposal has unexpected shape: {e}")
            raise SchemaMismatch(f"Category proposal has unexpected shape: {e}") from e

        validator = CategoryValidator(expected_count=config.step_category_amount)
        categories, warnings, errors = validator.validate_proposals(proposal.categories)

        for warning in warnings:
            logger.warning(f"Category validation: {warning}")

        if errors:
            error_msg = "; ".join(errors)
            logger.error(f"Category validation failed: {error_msg}")
            raise SchemaMismatch(f"Category validation failed: {error_msg}")

        return categories

    def _build_prompt(self, config: CategorizationConfig) -> str:
        """Build category creation prompt."""
        step = config.step_category_amount
        return f"""You are an expert in organizing and categorizing information. Your task is to create logical,
well-defined, and evenly distributed categories for a set of items.

GOALS:
1. Create {step} distinct categories that will allow for even distribution of items
2. Make categories intuitive for humans to understand
3. Ensure categories are specific enough to be useful but general enough to contain multiple items
4. Design categories that would make searching for specific items efficient

INSTRUCTIONS:
- Analyze the sample items provided
- Generate exactly {step} categories
- Provide a clear name and brief description for each category
- Respond with a JSON object of the form {{"categories": [{{"name": string, "description": string}}]}}
- Do not include any explanations outside the JSON structure

The categories should be designed with the knowledge that we'll eventually need to categorize
{config.item_count} items into {config.category_count} total categories.
"""
