"""HTTP client for the main-category backend.

Every call is a POST to the same script, selected by the ``run`` query
parameter, with the session identity merged into the JSON body.
"""

from typing import List, Optional, Union
import requests
from pydantic import BaseModel, Field, ValidationError
from models.category import CategoryRecord
from models.operations import UpdateRequest
from models.session import Session
from logger import get_logger

logger = get_logger()

RUN_LIST = "get_all_main_cat"
RUN_INSERT = "insert_main_catagory"
RUN_UPDATE = "update_main_catagory"


class BackendError(Exception):
    """Raised when a backend call fails for any reason.

    Network errors, HTTP error statuses, undecodable bodies and responses
    without a true ``success`` field all end up here.
    """


# Pydantic models for response validation
class CategoryRow(BaseModel):
    """One category row as returned by the list call."""

    id: Union[int, str] = Field(alias="MAIN_CAT_ID")
    name: str = Field(alias="MAIN_CAT_NAME")
    created_by: Optional[str] = Field(default=None, alias="CREATED_USER")
    created_at: Optional[str] = Field(default=None, alias="CREATED_TIME")
    updated_by: Optional[str] = Field(default=None, alias="LAST_UPD_USER")
    updated_at: Optional[str] = Field(default=None, alias="LAST_UPD_TIME")

    def to_record(self) -> CategoryRecord:
        return CategoryRecord(
            id=str(self.id),
            name=self.name,
            created_by=self.created_by or "",
            created_at=self.created_at or "",
            updated_by=self.updated_by or "",
            updated_at=self.updated_at or "",
        )


class ListResponse(BaseModel):
    message: Optional[List[CategoryRow]] = None


class InsertResponse(BaseModel):
    success: bool = False
    newCategoryId: Optional[Union[int, str]] = None


class UpdateResponse(BaseModel):
    success: bool = False


class CategoryBackend:
    """Transport for the four category operations.

    Args:
        base_url: URL of the category script.
        session: Identity sent with every request.
        timeout: Per-request timeout in seconds.
        http: Optional requests session (injected for testing).
    """

    def __init__(
        self,
        base_url: str,
        session: Session,
        timeout: float = 10.0,
        http: Optional[requests.Session] = None,
    ):
        self.base_url = base_url
        self.session = session
        self.timeout = timeout
        self.http = http or requests.Session()

    def list_categories(self) -> List[CategoryRecord]:
        """Fetch every live category, in backend order.

        Raises:
            BackendError: If the request fails or the body is malformed.
        """
        data = self._post(RUN_LIST, {})
        response = self._validate(ListResponse, data, RUN_LIST)
        records = [row.to_record() for row in response.message or []]
        logger.debug(f"Fetched {len(records)} categories")
        return records

    def insert(self, name: str) -> str:
        """Create a category and return the id the backend assigned to it.

        Raises:
            BackendError: If the backend does not confirm the insert.
        """
        data = self._post(RUN_INSERT, {"cat_name": name})
        response = self._validate(InsertResponse, data, RUN_INSERT)
        if not response.success:
            raise BackendError(f"Backend rejected insert of '{name}'")
        if response.newCategoryId is None:
            raise BackendError("Backend confirmed insert without a category id")
        return str(response.newCategoryId)

    def update(self, request: UpdateRequest) -> None:
        """Send a rename or soft-delete; both share the update endpoint.

        Raises:
            BackendError: If the backend does not confirm the update.
        """
        data = self._post(
            RUN_UPDATE,
            {
                "cat_name": request.name,
                "main_cat_id": request.category_id,
                "deleted_flg": request.flag,
            },
        )
        response = self._validate(UpdateResponse, data, RUN_UPDATE)
        if not response.success:
            raise BackendError(
                f"Backend rejected {type(request).__name__} of category "
                f"{request.category_id}"
            )

    def close(self) -> None:
        self.http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _post(self, run: str, body: dict):
        payload = {**self.session.identity(), **body}
        logger.debug(f"POST {self.base_url}?run={run} {payload}")

        try:
            response = self.http.post(
                self.base_url,
                params={"run": run},
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise BackendError(f"{run} request failed: {e}") from e
        except ValueError as e:
            # Body was not JSON
            raise BackendError(f"{run} returned an invalid body: {e}") from e

    def _validate(self, model, data, run: str):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise BackendError(f"{run} returned an unexpected response: {e}") from e
