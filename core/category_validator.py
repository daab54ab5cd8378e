"""Validation of proposed categories and resolution of assignment names."""

import logging
import re
from typing import Dict, List, Optional, Tuple

from core.models import Category, ProposedCategory

logger = logging.getLogger(__name__)


class CategoryValidator:
    """Cleans proposed category sets and maps names back to category identifiers."""

    def __init__(self, expected_count: Optional[int] = None):
        """
        Initialize category validator.

        Args:
            expected_count: Number of categories requested from the oracle (for warnings only)
        """
        self.expected_count = expected_count

    def normalize_name(self, name: str) -> str:
        """
        Normalize a category name for lookup.

        Examples:
            "  Home   Audio " -> "home audio"
            "GAMING" -> "gaming"
        """
        if not name:
            return ""
        return re.sub(r"\s+", " ", name).strip().casefold()

    def validate_proposals(
        self, proposed: List[ProposedCategory]
    ) -> Tuple[List[Category], List[str], List[str]]:
        """
        Turn proposed definitions into empty categories.

        Args:
            proposed: Category definitions returned by the oracle

        Returns:
            Tuple of:
            - Categories with empty item lists (valid, de-duplicated)
            - List of warnings (non-fatal issues)
            - List of errors (fatal issues)
        """
        warnings: list[str] = []
        errors: list[str] = []
        categories: list[Category] = []
        seen: set[str] = set()

        for entry in proposed:
            name = entry.name.strip()
            key = self.normalize_name(name)
            if not key:
                warnings.append("Skipping category with empty name")
                continue
            if key in seen:
                warnings.append(f"Duplicate category detected: '{name}'")
                continue
            seen.add(key)
            categories.append(
                Category(
                    name=name, description=entry.description.strip(), items=[], path=[name]
                )
            )

        if not categories:
            errors.append("Oracle proposed no usable categories")
        elif self.expected_count is not None and len(categories) != self.expected_count:
            warnings.append(
                f"Requested {self.expected_count} categories, got {len(categories)}"
            )

        return categories, warnings, errors

    def build_index(self, categories: List[Category]) -> Tuple[Dict[str, int], Dict[str, int]]:
        """
        Map names to positions in ``categories``.

        Returns:
            Tuple of (exact name -> index, normalized name -> index)
        """
        exact: dict[str, int] = {}
        normalized: dict[str, int] = {}
        for index, category in enumerate(categories):
            exact.setdefault(category.name, index)
            normalized.setdefault(self.normalize_name(category.name), index)
        return exact, normalized

    def match(
        self, name: str, index: Tuple[Dict[str, int], Dict[str, int]]
    ) -> Optional[int]:
        """
        Resolve an assignment's category name to a category index.

        Exact matches win; otherwise case and whitespace differences are ignored.
        """
        exact, normalized = index
        if name in exact:
            return exact[name]
        position = normalized.get(self.normalize_name(name))
        if position is not None:
            logger.debug(f"Matched '{name}' after normalization")
        return position
