"""In-memory category list and the reducer that applies sync outcomes to it."""

from typing import Iterator, List, Optional
from models.category import CategoryRecord
from models.operations import Created, Discarded, Outcome, Removed, Renamed


class CategoryStore:
    """Ordered list of live categories; the single source for rendering.

    Order is backend order, with categories created in this session
    prepended.
    """

    def __init__(self, records: Optional[List[CategoryRecord]] = None):
        self._records: List[CategoryRecord] = []
        if records:
            self.replace_all(records)

    def list(self) -> List[CategoryRecord]:
        """Get a snapshot of the categories in display order."""
        return list(self._records)

    def get(self, category_id: str) -> Optional[CategoryRecord]:
        for record in self._records:
            if record.id == category_id:
                return record
        return None

    def find_by_name(self, name: str) -> Optional[CategoryRecord]:
        """Get a category by exact (case-sensitive) name."""
        for record in self._records:
            if record.name == name:
                return record
        return None

    def replace_all(self, records: List[CategoryRecord]) -> None:
        """Replace the whole list, keeping the given order.

        Raises:
            ValueError: If two records share an id.
        """
        seen = set()
        for record in records:
            if record.id in seen:
                raise ValueError(f"Duplicate category id {record.id}")
            seen.add(record.id)
        self._records = list(records)

    def prepend(self, record: CategoryRecord) -> None:
        """Insert a new category at the front of the list.

        Raises:
            ValueError: If a category with the same id is already present.
        """
        if self.get(record.id) is not None:
            raise ValueError(f"Category with ID {record.id} already present")
        self._records.insert(0, record)

    def update_name(
        self,
        category_id: str,
        name: str,
        updated_by: Optional[str] = None,
        updated_at: Optional[str] = None,
    ) -> bool:
        """Rename a category in place.

        Returns:
            True if the category was found, False otherwise.
        """
        for index, record in enumerate(self._records):
            if record.id == category_id:
                self._records[index] = record.renamed(name, updated_by, updated_at)
                return True
        return False

    def remove(self, category_id: str) -> bool:
        """Drop a category from the list.

        Returns:
            True if the category was removed, False if it was not present.
        """
        for index, record in enumerate(self._records):
            if record.id == category_id:
                del self._records[index]
                return True
        return False

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CategoryRecord]:
        return iter(self.list())

    def __contains__(self, category_id) -> bool:
        return self.get(category_id) is not None


def apply_outcome(store: CategoryStore, outcome: Outcome) -> bool:
    """Apply one sync outcome to the store.

    Returns:
        True if the store changed.
    """
    if isinstance(outcome, Created):
        store.prepend(outcome.record)
        return True
    if isinstance(outcome, Renamed):
        return store.update_name(
            outcome.category_id,
            outcome.name,
            updated_by=outcome.updated_by,
            updated_at=outcome.updated_at,
        )
    if isinstance(outcome, Removed):
        return store.remove(outcome.category_id)
    if isinstance(outcome, Discarded):
        return False
    raise TypeError(f"Unknown outcome: {outcome!r}")
