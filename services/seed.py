"""Bulk creation of categories from a YAML seed file."""

from dataclasses import dataclass
from pathlib import Path
from typing import List
import yaml
from services.sync import SyncClient, SyncError
from logger import get_logger

logger = get_logger()


@dataclass
class SeedResult:
    created: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.created + self.skipped + self.failed


def load_seed_names(path: Path) -> List[str]:
    """Read category names from a seed file.

    The file must hold a YAML list whose items are either names or mappings
    with a ``name`` key.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file isn't a list of names.
    """
    if not path.exists():
        raise FileNotFoundError(f"Seed file not found: {path}")

    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Error parsing seed file {path}: {e}") from e

    if not isinstance(data, list):
        raise ValueError(f"Seed file {path} must contain a list of categories")

    names = []
    for item in data:
        if isinstance(item, dict):
            item = item.get("name")
        if not isinstance(item, str):
            raise ValueError(f"Invalid category entry in {path}: {item!r}")
        names.append(item)
    return names


def seed_categories(sync: SyncClient, path: Path) -> SeedResult:
    """Create every category from the seed file that isn't in the store yet.

    The store should already be loaded, otherwise nothing is skipped.
    """
    result = SeedResult()

    for name in load_seed_names(path):
        name = name.strip()
        if not name:
            logger.warning("Skipping category with no name")
            continue

        if sync.store.find_by_name(name) is not None:
            logger.info(f"⊘ Skipped '{name}' (already exists)")
            result.skipped += 1
            continue

        try:
            record = sync.create(name)
            logger.info(f"✓ Created '{name}' (ID: {record.id})")
            result.created += 1
        except SyncError as e:
            logger.error(f"Error creating category '{name}': {e}")
            result.failed += 1

    return result
