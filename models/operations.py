"""Request variants sent to the backend and the outcomes they produce locally.

Rename and soft-delete share one backend endpoint and differ only by a flag,
but their local effects differ: a rename mutates a record, a soft-delete
removes it. The request side keeps the shared shape, the outcome side keeps
the effects apart.
"""

from dataclasses import dataclass
from typing import Union

from models.category import CategoryRecord

UPDATE_FLAG = "U"
DELETE_FLAG = "D"


@dataclass(frozen=True)
class Rename:
    """Change the name of an existing category."""

    category_id: str
    name: str

    @property
    def flag(self) -> str:
        return UPDATE_FLAG


@dataclass(frozen=True)
class SoftDelete:
    """Mark a category as deleted on the backend.

    The backend still wants the current name alongside the flag.
    """

    category_id: str
    name: str

    @property
    def flag(self) -> str:
        return DELETE_FLAG


UpdateRequest = Union[Rename, SoftDelete]


@dataclass(frozen=True)
class Created:
    record: CategoryRecord


@dataclass(frozen=True)
class Renamed:
    category_id: str
    name: str
    updated_by: str
    updated_at: str


@dataclass(frozen=True)
class Removed:
    category_id: str


@dataclass(frozen=True)
class Discarded:
    """A completion that arrived after a newer request for the same id."""

    category_id: str
    token: int


Outcome = Union[Created, Renamed, Removed, Discarded]
