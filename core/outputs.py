"""Output generation: leaf categories, per-item assignment rows, statistics."""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from core.models import HIERARCHY_SEPARATOR, Category

logger = logging.getLogger(__name__)


def assignment_records(categories: List[Category]) -> List[Dict[str, Any]]:
    """Flatten leaf categories into one row per item, ready for a relational load."""
    records = []
    for category in categories:
        for item in category.items:
            records.append(
                {
                    "item": item,
                    "category": category.name,
                    "path": category.path,
                    "depth": category.depth,
                }
            )
    return records


class OutputGenerator:
    """Generate all output files."""

    def __init__(self, output_dir: Path):
        """
        Initialize output generator.

        Args:
            output_dir: Directory for output files
        """
        self.output_dir = output_dir
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write_categories(self, categories: List[Category], filename: str = "categories.json"):
        """Write leaf categories as an indented JSON list."""
        output_path = self.output_dir / filename

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump([c.model_dump() for c in categories], f, indent=2, ensure_ascii=False)

        logger.info(f"Wrote {len(categories)} categories to {output_path}")

    def write_jsonl(self, records: List[Dict[str, Any]], filename: str = "assignments.jsonl"):
        """
        Write records to JSONL file.

        Args:
            records: List of record dictionaries
            filename: Output filename
        """
        output_path = self.output_dir / filename

        with open(output_path, "w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record, ensure_ascii=False) + "\n")

        logger.info(f"Wrote {len(records)} records to {output_path}")

    def write_csv(self, records: List[Dict[str, Any]], filename: str = "assignments.csv"):
        """
        Write records to CSV file.

        Args:
            records: List of record dictionaries
            filename: Output filename
        """
        if not records:
            logger.warning("No records to write to CSV")
            return

        output_path = self.output_dir / filename
        columns = ["item", "category", "path", "depth"]

        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
            writer.writeheader()

            for record in records:
                row = dict(record)
                if isinstance(row.get("path"), list):
                    row["path"] = HIERARCHY_SEPARATOR.join(row["path"])
                writer.writerow(row)

        logger.info(f"Wrote {len(records)} records to {output_path}")

    def write_statistics(self, stats: Dict[str, Any], filename: str = "statistics.json"):
        """
        Write statistics to JSON file.

        Args:
            stats: Statistics dictionary
            filename: Output filename
        """
        output_path = self.output_dir / filename

        with open(output_path, "w") as f:
            json.dump(stats, f, indent=2)

        logger.info(f"Wrote statistics to {output_path}")

    def write_all(self, categories: List[Category], stats: Dict[str, Any]):
        """Write every output file for one run."""
        records = assignment_records(categories)
        self.write_categories(categories)
        self.write_jsonl(records)
        self.write_csv(records)
        self.write_statistics(stats)
