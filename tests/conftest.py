"""Test utilities and helpers."""

import json
import sys
from pathlib import Path
from typing import Any, Callable, List, Optional

import pytest

# Add project root to Python path so we can import cli, config, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config import CategorizationConfig  # noqa: E402


def _payload(user_prompt: str) -> List[str]:
    """Extract the JSON item list that follows the first line of a user prompt."""
    return json.loads(user_prompt.split("\n", 1)[1])


class FakeOracle:
    """
    Deterministic stand-in for CategoryOracle.

    Proposal calls return ``category_names`` (or the result of ``propose_fn``);
    assignment calls return the result of ``assign_fn(batch, names)``, which
    defaults to round-robin over the offered category names.
    """

    def __init__(
        self,
        category_names: Optional[List[str]] = None,
        assign_fn: Optional[Callable[[List[str], List[str]], List[Any]]] = None,
        propose_fn: Optional[Callable[[List[str]], Any]] = None,
    ):
        self.category_names = category_names or [f"Group {i}" for i in range(1, 6)]
        self.assign_fn = assign_fn or round_robin
        self.propose_fn = propose_fn
        self.samples: List[List[str]] = []
        self.batches: List[List[str]] = []
        self.system_prompts: List[str] = []

    def call(self, system_prompt: str, user_prompt: str) -> Any:
        self.system_prompts.append(system_prompt)
        if user_prompt.startswith("Here are the sample items"):
            sample = _payload(user_prompt)
            self.samples.append(sample)
            if self.propose_fn is not None:
                return self.propose_fn(sample)
            return {
                "categories": [
                    {"name": name, "description": f"{name} things"}
                    for name in self.category_names
                ]
            }

        batch = _payload(user_prompt)
        self.batches.append(batch)
        names = [c["name"] for c in json.loads(system_prompt.split("CATEGORIES:\n", 1)[1].split("\n\nINSTRUCTIONS", 1)[0])]
        return {"assignments": self.assign_fn(batch, names)}


def round_robin(batch: List[str], names: List[str]) -> List[dict]:
    return [
        {"item": item, "categoryName": names[i % len(names)]}
        for i, item in enumerate(batch)
    ]


@pytest.fixture
def fake_oracle():
    """Round-robin fake oracle with five categories."""
    return FakeOracle()


@pytest.fixture
def items():
    """Thirty distinct items."""
    return [f"item-{i:02d}" for i in range(30)]


@pytest.fixture
def scenario_config():
    """Configuration for the 30-item, 5-category scenario."""
    return CategorizationConfig(
        item_count=30,
        category_count=5,
        sample_size=30,
        step_category_amount=5,
        batch_size=10,
        max_retries=3,
        retry_delay=0,
    )


@pytest.fixture
def make_oracle():
    """Factory for FakeOracle instances with custom behavior."""
    return FakeOracle
