"""Sync client keeping the local category store consistent with the backend."""

import itertools
import threading
from datetime import datetime
from typing import Dict, List, Set
from api.client import BackendError, CategoryBackend
from models.category import CategoryRecord
from models.operations import (
    Created,
    Discarded,
    Outcome,
    Removed,
    Rename,
    Renamed,
    SoftDelete,
)
from models.session import Session
from services.store import CategoryStore, apply_outcome
from logger import get_logger

logger = get_logger()

FETCH_FAILED = "Failed to fetch categories."
CREATE_FAILED = "Failed to add category."
CREATED_NOT_REFRESHED = "Category was added, but the list could not be refreshed."
RENAME_FAILED = "Failed to update category."
DELETE_FAILED = "Failed to delete category."
EMPTY_NAME = "Category name cannot be empty."
EMPTY_NAME_OR_SELECTION = "Category name cannot be empty and no category selected."


class SyncError(Exception):
    """A sync operation failed; the message is safe to show to the user."""


class ValidationError(SyncError):
    """Input was rejected locally, before any request was sent."""


class OperationTokens:
    """Per-category counters used to spot stale completions.

    A token is issued when a request for a category is sent. A successful
    completion is current only if no newer request for that category has
    already been applied and the category has not been retired by a
    completed soft-delete. Failed requests are never settled, so they can't
    make an older successful request stale.
    """

    def __init__(self):
        self._counter = itertools.count(1)
        self._applied: Dict[str, int] = {}
        self._retired: Set[str] = set()

    def issue(self, category_id: str) -> int:
        return next(self._counter)

    def is_current(self, category_id: str, token: int) -> bool:
        if category_id in self._retired:
            return False
        return token > self._applied.get(category_id, 0)

    def settle(self, category_id: str, token: int) -> None:
        """Record that the request holding ``token`` was applied."""
        self._applied[category_id] = max(token, self._applied.get(category_id, 0))

    def retire(self, category_id: str) -> None:
        self._retired.add(category_id)
        self._applied.pop(category_id, None)

    def is_retired(self, category_id: str) -> bool:
        return category_id in self._retired


class SyncClient:
    """Runs the four remote operations and mutates the store on success.

    Updates are optimistic: after the backend confirms, the store is changed
    directly instead of re-fetching. On failure the store is left alone and
    a SyncError is raised.

    Args:
        backend: Transport for the category backend.
        store: Local category list to keep in sync.
        session: Identity used to attribute local changes.
    """

    def __init__(self, backend: CategoryBackend, store: CategoryStore, session: Session):
        self.backend = backend
        self.store = store
        self.session = session
        self.tokens = OperationTokens()
        self._lock = threading.Lock()

    def fetch_all(self) -> List[CategoryRecord]:
        """Load the full category list into the store.

        Raises:
            SyncError: If the backend call fails. The store is not touched.
        """
        try:
            records = self.backend.list_categories()
        except BackendError as e:
            logger.error(f"Error fetching categories: {e}")
            raise SyncError(FETCH_FAILED) from e

        with self._lock:
            # A fetch that overlapped a soft-delete may still list the category
            records = [r for r in records if not self.tokens.is_retired(r.id)]
            try:
                self.store.replace_all(records)
            except ValueError as e:
                logger.error(f"Error fetching categories: {e}")
                raise SyncError(FETCH_FAILED) from e

        logger.info(f"Loaded {len(records)} categories")
        return self.store.list()

    def create(self, name: str) -> CategoryRecord:
        """Create a category and prepend it to the store.

        Raises:
            ValidationError: If the name is blank. No request is sent.
            SyncError: If the backend does not confirm the insert, or if it
                returned an id already in the store and the reload failed.
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError(EMPTY_NAME)

        try:
            category_id = self.backend.insert(name)
        except BackendError as e:
            logger.error(f"Error adding category: {e}")
            raise SyncError(CREATE_FAILED) from e

        record = CategoryRecord.synthesize(category_id, name, self.session.username)
        with self._lock:
            try:
                apply_outcome(self.store, Created(record))
                conflict = False
            except ValueError as e:
                logger.warning(
                    f"Backend created '{name}' with ID {category_id}, "
                    f"which is already listed locally ({e}); reloading"
                )
                conflict = True

        if conflict:
            return self._reload_created(category_id)

        logger.info(f"Created category '{name}' (ID: {record.id})")
        return record

    def _reload_created(self, category_id: str) -> CategoryRecord:
        """Re-fetch after an insert whose id clashed with a local record.

        The row exists on the server either way, so failures here must not
        read as a failed create.
        """
        try:
            self.fetch_all()
        except SyncError as e:
            raise SyncError(CREATED_NOT_REFRESHED) from e

        record = self.store.get(category_id)
        if record is None:
            logger.error(f"Created category {category_id} missing after reload")
            raise SyncError(CREATED_NOT_REFRESHED)
        return record

    def rename(self, category_id: str, name: str) -> Outcome:
        """Rename a category after the backend confirms.

        Returns:
            Renamed if the store was updated, Discarded if a newer request
            for the same category was applied while this one was in flight.

        Raises:
            ValidationError: If the name is blank or the category is not in
                the store. No request is sent.
            SyncError: If the backend does not confirm the update.
        """
        name = (name or "").strip()
        with self._lock:
            if not name or category_id is None or category_id not in self.store:
                raise ValidationError(EMPTY_NAME_OR_SELECTION)
            token = self.tokens.issue(category_id)

        try:
            self.backend.update(Rename(category_id, name))
        except BackendError as e:
            logger.error(f"Error updating category {category_id}: {e}")
            raise SyncError(RENAME_FAILED) from e

        with self._lock:
            if not self.tokens.is_current(category_id, token):
                logger.info(
                    f"Discarding stale rename of category {category_id} (token {token})"
                )
                return Discarded(category_id, token)

            outcome = Renamed(
                category_id=category_id,
                name=name,
                updated_by=self.session.username,
                updated_at=datetime.now().isoformat(timespec="seconds"),
            )
            apply_outcome(self.store, outcome)
            self.tokens.settle(category_id, token)

        logger.info(f"Renamed category {category_id} to '{name}'")
        return outcome

    def soft_delete(self, record: CategoryRecord) -> Outcome:
        """Mark a category deleted on the backend and drop it locally.

        Confirmation is the caller's responsibility. A confirmed soft-delete
        always removes the category and invalidates any other request still
        in flight for it.

        Returns:
            Removed, or Discarded if the category was already retired by an
            earlier soft-delete.

        Raises:
            SyncError: If the backend does not confirm the delete.
        """
        with self._lock:
            token = self.tokens.issue(record.id)

        try:
            self.backend.update(SoftDelete(record.id, record.name))
        except BackendError as e:
            logger.error(f"Error deleting category {record.id}: {e}")
            raise SyncError(DELETE_FAILED) from e

        with self._lock:
            if self.tokens.is_retired(record.id):
                logger.info(f"Category {record.id} already deleted")
                return Discarded(record.id, token)
            self.tokens.retire(record.id)
            outcome = Removed(record.id)
            apply_outcome(self.store, outcome)

        logger.info(f"Deleted category '{record.name}' (ID: {record.id})")
        return outcome
