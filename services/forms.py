"""Form and page state for the category screen.

The controller owns the transient UI state (create form, edit form, page
view state) and turns sync failures into error text. It never raises for
backend or validation failures; every action returns True on success.
"""

from enum import Enum
from typing import Callable, Optional
from models.category import CategoryRecord
from services.sync import SyncClient, SyncError
from logger import get_logger

logger = get_logger()


class ViewState(Enum):
    """Mutually exclusive top-level page states."""

    LOADING = "loading"
    ERROR = "error"
    CONTENT = "content"


def delete_prompt(record: CategoryRecord) -> str:
    return f'Are you sure you want to delete "{record.name}"?'


class FormController:
    """Create form, edit form and delete confirmation for one category page.

    Edit form states:
        no-selection -> select() -> editing(id, draft)
        editing -> submit_rename() success -> no-selection
        editing -> submit_rename() failure -> editing, with edit_error set

    Args:
        sync: Sync client used for every remote operation.
    """

    def __init__(self, sync: SyncClient):
        self.sync = sync
        self.view = ViewState.LOADING
        self.load_error: Optional[str] = None

        # Create form; delete failures are reported here as well
        self.new_name = ""
        self.form_error = ""

        # Edit form, only shown while a category is selected
        self.selected: Optional[CategoryRecord] = None
        self.edit_name = ""
        self.edit_error = ""

    @property
    def categories(self):
        return self.sync.store.list()

    @property
    def editing(self) -> bool:
        return self.selected is not None

    def load(self) -> bool:
        """Fetch the category list and leave the loading state."""
        self.view = ViewState.LOADING
        try:
            self.sync.fetch_all()
        except SyncError as e:
            self.load_error = str(e)
            self.view = ViewState.ERROR
            return False

        self.load_error = None
        self.view = ViewState.CONTENT
        return True

    def submit_create(self, name: Optional[str] = None) -> bool:
        """Submit the create form, optionally setting the draft first."""
        if name is not None:
            self.new_name = name

        try:
            self.sync.create(self.new_name)
        except SyncError as e:
            self.form_error = str(e)
            return False

        self.new_name = ""
        self.form_error = ""
        return True

    def select(self, record: CategoryRecord) -> None:
        """Open the edit form for a category, pre-filled with its name."""
        self.selected = record
        self.edit_name = record.name
        self.edit_error = ""

    def cancel_edit(self) -> None:
        self.selected = None
        self.edit_name = ""
        self.edit_error = ""

    def submit_rename(self, name: Optional[str] = None) -> bool:
        """Submit the edit form, optionally setting the draft first."""
        if name is not None:
            self.edit_name = name

        category_id = self.selected.id if self.selected else None
        try:
            self.sync.rename(category_id, self.edit_name)
        except SyncError as e:
            self.edit_error = str(e)
            return False

        self.cancel_edit()
        self.form_error = ""
        return True

    def request_delete(
        self, record: CategoryRecord, confirm: Callable[[str], bool]
    ) -> bool:
        """Ask for confirmation, then soft-delete the category.

        Args:
            record: Category to delete.
            confirm: Called with the prompt text; a false result cancels
                the delete without contacting the backend.

        Returns:
            True if the category was deleted.
        """
        if not confirm(delete_prompt(record)):
            logger.info("Deletion cancelled.")
            return False

        try:
            self.sync.soft_delete(record)
        except SyncError as e:
            self.form_error = str(e)
            return False

        if self.selected is not None and self.selected.id == record.id:
            self.cancel_edit()
        return True
