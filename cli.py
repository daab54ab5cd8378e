"""Command line interface for LLM-driven hierarchical categorization."""

import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import click
import coloredlogs

from config import Config
from core.categorizer import run_categorization, summarize_categories
from core.errors import CategorizationError
from core.oracle import CategoryOracle
from core.outputs import OutputGenerator
from example import EXAMPLE_ITEMS
from utils.llm_provider import SUPPORTED_PROVIDERS

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def load_items(path: Path) -> List[str]:
    """Read items from a JSON array file or a text file with one item per line."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise click.BadParameter(f"{path} is not valid JSON: {e}") from e
        if not isinstance(data, list) or not all(isinstance(i, str) for i in data):
            raise click.BadParameter(f"{path} must contain a JSON array of strings")
        return data
    return [line.strip() for line in text.splitlines() if line.strip()]


def setup_logging(verbose: bool, output_dir: Optional[Path]) -> Optional[Path]:
    """Install colored console logging and, with an output dir, a file log."""
    level = logging.DEBUG if verbose else logging.INFO
    coloredlogs.install(level=level, fmt=LOG_FORMAT, stream=sys.stderr)

    if output_dir is None:
        return None

    log_dir = output_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"categorize_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(file_handler)
    return log_file


@click.group()
def cli():
    """LLM Categorizer - organize items into human-readable categories with an LLM."""
    pass


@cli.command(short_help="Categorize items into within-budget leaf categories")
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Items file: JSON array or one item per line (default: built-in example items)",
)
@click.option(
    "--config-file",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration YAML file (optional)",
)
@click.option(
    "--llm-provider",
    type=click.Choice(list(SUPPORTED_PROVIDERS)),
    default=None,
    help="LLM provider to use",
)
@click.option("--item-count", type=click.IntRange(min=1), default=None, help="Total item count used for budgeting")
@click.option("--category-count", type=click.IntRange(min=1), default=None, help="Target number of leaf categories")
@click.option("--sample-size", type=click.IntRange(min=1), default=None, help="Items sampled for category proposal")
@click.option(
    "--step-category-amount",
    type=click.IntRange(min=1),
    default=None,
    help="Categories proposed at each level",
)
@click.option("--batch-size", type=click.IntRange(min=1), default=None, help="Items per assignment call")
@click.option("--max-retries", type=click.IntRange(min=1), default=None, help="Retries per backend call")
@click.option("--max-depth", type=click.IntRange(min=0), default=None, help="Maximum subdivision depth")
@click.option("--drop-unassigned", is_flag=True, help="Drop unplaced items instead of keeping an Unassigned leaf")
@click.option("--seed", type=int, default=None, help="Random seed for sampling")
@click.option("--workers", type=click.IntRange(min=1), default=None, help="Parallel assignment batches")
@click.option(
    "--output-dir",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Write categories, assignments and statistics here",
)
@click.option("--no-progress", is_flag=True, help="Disable progress bars")
@click.option("--verbose", is_flag=True, help="Debug logging")
def categorize(
    input_path: Optional[Path],
    config_file: Optional[Path],
    llm_provider: Optional[str],
    item_count: Optional[int],
    category_count: Optional[int],
    sample_size: Optional[int],
    step_category_amount: Optional[int],
    batch_size: Optional[int],
    max_retries: Optional[int],
    max_depth: Optional[int],
    drop_unassigned: bool,
    seed: Optional[int],
    workers: Optional[int],
    output_dir: Optional[Path],
    no_progress: bool,
    verbose: bool,
):
    """Categorize items and print the leaf categories as JSON."""
    log_file = setup_logging(verbose, output_dir)

    try:
        config = Config.from_yaml(config_file) if config_file else Config()
        config.load_env()

        if llm_provider:
            config.llm_provider = llm_provider
        if workers:
            config.processing.workers = workers
        if no_progress:
            config.processing.show_progress = False
        config.seed = seed
        config.output_dir = output_dir

        items = load_items(input_path) if input_path else list(EXAMPLE_ITEMS)
        if not items:
            raise click.UsageError("No items to categorize")

        overrides = {
            key: value
            for key, value in {
                "item_count": item_count,
                "category_count": category_count,
                "sample_size": sample_size,
                "step_category_amount": step_category_amount,
                "batch_size": batch_size,
                "max_retries": max_retries,
                "max_depth": max_depth,
            }.items()
            if value is not None
        }
        if drop_unassigned:
            overrides["keep_unassigned"] = False

        logger.info("=" * 80)
        logger.info("LLM CATEGORIZER")
        logger.info("=" * 80)
        logger.info(f"Items: {len(items)} ({input_path or 'built-in example'})")
        logger.info(f"LLM Provider: {config.llm_provider}")
        logger.info(f"Output directory: {output_dir}")
        logger.info("=" * 80)

        categories = run_categorization(
            items, overrides, config=config, oracle=CategoryOracle(config)
        )
    except CategorizationError as e:
        logger.error(f"Categorization failed: {e}")
        sys.exit(1)

    stats = summarize_categories(categories)
    if output_dir:
        OutputGenerator(output_dir).write_all(categories, stats)

    click.echo(json.dumps([c.model_dump() for c in categories], indent=2, ensure_ascii=False))

    if log_file:
        logger.info(f"Log file: {log_file}")


@cli.command("init-config", short_help="Write the default configuration to a YAML file")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def init_config(path: Path):
    """Write the default configuration to PATH."""
    Config().to_yaml(path)
    click.echo(f"Wrote default configuration to {path}")


if __name__ == "__main__":
    cli()
