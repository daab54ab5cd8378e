"""Unit tests for core/assigner.py"""

import pytest

from config import CategorizationConfig
from core.assigner import ItemAssigner, iter_batches
from core.errors import SchemaMismatch
from core.models import Category


def _categories(names):
    return [Category(name=name, description=f"{name} things") for name in names]


NAMES = [f"Group {i}" for i in range(1, 6)]


class TestIterBatches:
    """Tests for batch splitting."""

    @pytest.mark.parametrize("count,batch_size", [(0, 3), (1, 3), (10, 3), (12, 4), (5, 50)])
    def test_batches_reconstruct_input(self, count, batch_size):
        items = [f"item-{i}" for i in range(count)]

        batches = list(iter_batches(items, batch_size))

        assert [item for batch in batches for item in batch] == items
        assert all(len(batch) == batch_size for batch in batches[:-1])
        assert all(0 < len(batch) <= batch_size for batch in batches)

    def test_last_batch_shorter(self):
        assert list(iter_batches(list("abcdefg"), 3)) == [["a", "b", "c"], ["d", "e", "f"], ["g"]]


class TestAssign:
    """Tests for ItemAssigner.assign."""

    def test_batches_sent_to_oracle_cover_input(self, fake_oracle, items, scenario_config):
        assigner = ItemAssigner(fake_oracle)

        assigner.assign(items, _categories(NAMES), scenario_config)

        assert len(fake_oracle.batches) == 3
        assert [item for batch in fake_oracle.batches for item in batch] == items

    def test_round_robin_populates_evenly(self, fake_oracle, items, scenario_config):
        assigner = ItemAssigner(fake_oracle)

        categories, unassigned = assigner.assign(items, _categories(NAMES), scenario_config)

        assert [len(c.items) for c in categories] == [6, 6, 6, 6, 6]
        assert unassigned == []
        assert sorted(i for c in categories for i in c.items) == sorted(items)

    def test_system_prompt_lists_categories(self, fake_oracle, items, scenario_config):
        assigner = ItemAssigner(fake_oracle)

        assigner.assign(items, _categories(NAMES), scenario_config)

        prompt = fake_oracle.system_prompts[0]
        assert '"name": "Group 3"' in prompt
        assert '"description": "Group 3 things"' in prompt
        assert len(set(fake_oracle.system_prompts)) == 1

    def test_unmatched_category_goes_to_unassigned(self, make_oracle, scenario_config, caplog):
        def assign_fn(batch, names):
            return [
                {"item": batch[0], "categoryName": "Nonexistent"},
                *({"item": item, "categoryName": names[0]} for item in batch[1:]),
            ]

        assigner = ItemAssigner(make_oracle(assign_fn=assign_fn))

        categories, unassigned = assigner.assign(["a", "b", "c"], _categories(NAMES), scenario_config)

        assert unassigned == ["a"]
        assert categories[0].items == ["b", "c"]
        assert "Category not found: Nonexistent" in caplog.text

    def test_omitted_items_go_to_unassigned(self, make_oracle, scenario_config):
        def assign_fn(batch, names):
            return [{"item": item, "categoryName": names[1]} for item in batch[:-1]]

        assigner = ItemAssigner(make_oracle(assign_fn=assign_fn))

        categories, unassigned = assigner.assign(["a", "b", "c"], _categories(NAMES), scenario_config)

        assert categories[1].items == ["a", "b"]
        assert unassigned == ["c"]

    def test_unknown_and_repeated_items_are_ignored(self, make_oracle, scenario_config):
        def assign_fn(batch, names):
            return [
                {"item": "a", "categoryName": names[0]},
                {"item": "a", "categoryName": names[1]},
                {"item": "invented", "categoryName": names[2]},
                {"item": "b", "categoryName": names[3]},
            ]

        assigner = ItemAssigner(make_oracle(assign_fn=assign_fn))

        categories, unassigned = assigner.assign(["a", "b"], _categories(NAMES), scenario_config)

        assert categories[0].items == ["a"]
        assert categories[1].items == []
        assert categories[2].items == []
        assert categories[3].items == ["b"]
        assert unassigned == []

    def test_duplicate_items_keep_multiplicity(self, make_oracle, scenario_config):
        assigner = ItemAssigner(make_oracle())

        categories, unassigned = assigner.assign(["x", "x", "y"], _categories(NAMES), scenario_config)

        assert sorted(i for c in categories for i in c.items) == ["x", "x", "y"]
        assert unassigned == []

    def test_normalized_name_matches(self, make_oracle, scenario_config):
        def assign_fn(batch, names):
            return [{"item": item, "categoryName": "  group 2 "} for item in batch]

        assigner = ItemAssigner(make_oracle(assign_fn=assign_fn))

        categories, unassigned = assigner.assign(["a", "b"], _categories(NAMES), scenario_config)

        assert categories[1].items == ["a", "b"]
        assert unassigned == []

    def test_missing_assignments_key_raises(self, make_oracle, scenario_config):
        oracle = make_oracle()
        oracle.call = lambda system_prompt, user_prompt: {"results": []}
        assigner = ItemAssigner(oracle)

        with pytest.raises(SchemaMismatch):
            assigner.assign(["a"], _categories(NAMES), scenario_config)

    def test_parallel_batches_match_sequential(self, make_oracle, items, scenario_config):
        sequential, _ = ItemAssigner(make_oracle()).assign(
            items, _categories(NAMES), scenario_config
        )
        parallel, _ = ItemAssigner(make_oracle(), workers=3).assign(
            items, _categories(NAMES), scenario_config
        )

        assert [c.items for c in parallel] == [c.items for c in sequential]

    def test_empty_items_make_no_calls(self, fake_oracle, scenario_config):
        categories, unassigned = ItemAssigner(fake_oracle).assign(
            [], _categories(NAMES), scenario_config
        )

        assert fake_oracle.batches == []
        assert all(c.items == [] for c in categories)
        assert unassigned == []

    def test_batch_size_from_config(self, fake_oracle, items):
        config = CategorizationConfig(item_count=30, category_count=5, batch_size=7)

        ItemAssigner(fake_oracle).assign(items, _categories(NAMES), config)

        assert [len(b) for b in fake_oracle.batches] == [7, 7, 7, 7, 2]
