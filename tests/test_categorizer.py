"""Unit tests for core/categorizer.py"""

import random
from collections import Counter

import pytest

from config import Config
from core.categorizer import resolve_config, run_categorization, summarize_categories
from core.errors import ConfigError
from core.models import Category


def test_run_categorization_scenario(fake_oracle, items):
    """Test the 30-item demo configuration end to end."""
    result = run_categorization(
        items,
        {
            "item_count": 30,
            "category_count": 5,
            "sample_size": 30,
            "step_category_amount": 5,
            "batch_size": 10,
        },
        oracle=fake_oracle,
        rng=random.Random(0),
    )

    assert len(result) == 5
    assert all(len(c.items) <= 6 for c in result)
    assert Counter(i for c in result for i in c.items) == Counter(items)


def test_run_categorization_does_not_mutate_input(fake_oracle, items):
    """Test the caller's item list is left as-is."""
    original = list(items)

    run_categorization(items, {"category_count": 5, "step_category_amount": 5}, oracle=fake_oracle)

    assert items == original


def test_run_categorization_uses_config_seed(make_oracle):
    """Test config.seed makes sampling reproducible."""
    items = [f"item-{i}" for i in range(40)]
    config = Config(seed=7)
    overrides = {"category_count": 8, "sample_size": 10, "step_category_amount": 5}

    first, second = make_oracle(), make_oracle()
    run_categorization(items, overrides, config=config, oracle=first)
    run_categorization(items, overrides, config=config, oracle=second)

    assert first.samples[0] == second.samples[0]


class TestResolveConfig:
    """Tests for override merging."""

    def test_item_count_defaults_to_input_size(self):
        config = resolve_config(["a"] * 12, Config(), {"category_count": 3})

        assert config.categorization.item_count == 12
        assert config.categorization.category_count == 3

    def test_category_count_clamped_to_item_count(self):
        config = resolve_config(["a"] * 12, Config())

        assert config.categorization.item_count == 12
        assert config.categorization.category_count == 12

    def test_explicit_counts_are_kept(self):
        config = resolve_config(["a"] * 12, Config(), {"item_count": 500, "category_count": 20})

        assert config.categorization.item_count == 500
        assert config.categorization.category_count == 20

    def test_explicit_invalid_counts_raise(self):
        with pytest.raises(ConfigError):
            resolve_config(["a"] * 2, Config(), {"category_count": 5})


class TestSummarizeCategories:
    """Tests for distribution statistics."""

    def test_statistics(self):
        categories = [
            Category(name="A", items=["1", "2"]),
            Category(name="B > C", items=["3", "4", "5", "6"], path=["B", "C"]),
            Category(name="B > D", items=["7", "8", "9"], path=["B", "D"]),
        ]

        stats = summarize_categories(categories)

        assert stats == {
            "category_count": 3,
            "item_count": 9,
            "min_items": 2,
            "max_items": 4,
            "avg_items": 3.0,
            "max_depth": 1,
        }

    def test_empty(self):
        stats = summarize_categories([])

        assert stats["category_count"] == 0
        assert stats["avg_items"] == 0.0

    def test_max_depth_ignores_separator_in_names(self):
        stats = summarize_categories([Category(name="Audio > Video Cables", items=["x"])])

        assert stats["max_depth"] == 0
