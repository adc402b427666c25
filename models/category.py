"""Category model for the remote main-category list."""

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class CategoryRecord:
    """Represents one live main category as held by the backend.

    Attributes:
        id: Opaque identifier assigned by the backend (kept as a string).
        name: Display name, mutable through rename.
        created_by: Username that created the category.
        created_at: Creation timestamp as sent by the backend.
        updated_by: Username of the last update.
        updated_at: Timestamp of the last update.
    """

    id: str
    name: str
    created_by: str
    created_at: str
    updated_by: str
    updated_at: str

    @classmethod
    def synthesize(cls, category_id, name: str, username: str) -> "CategoryRecord":
        """Build a local copy of a freshly created category.

        The backend only returns the new id, so the timestamps come from the
        client clock and may differ from what the server stored.
        """
        now = datetime.now().isoformat(timespec="seconds")
        return cls(
            id=str(category_id),
            name=name,
            created_by=username,
            created_at=now,
            updated_by=username,
            updated_at=now,
        )

    def renamed(self, name: str, updated_by=None, updated_at=None) -> "CategoryRecord":
        """Return a copy with a new name and, optionally, new last-update fields."""
        return replace(
            self,
            name=name,
            updated_by=updated_by if updated_by is not None else self.updated_by,
            updated_at=updated_at if updated_at is not None else self.updated_at,
        )
