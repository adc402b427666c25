"""Helper utilities for tests."""

import requests
from api.client import BackendError
from models.category import CategoryRecord


def make_record(category_id, name, user="anvar", stamp="2024-03-01 10:00:00"):
    """Build a category record as the backend would list it."""
    return CategoryRecord(
        id=str(category_id),
        name=name,
        created_by=user,
        created_at=stamp,
        updated_by=user,
        updated_at=stamp,
    )


class FakeBackend:
    """Scripted stand-in for CategoryBackend.

    Records every call in ``calls``. Operation names listed in ``fail``
    ("list", "insert", "update") raise BackendError. ``on_update`` is called
    once with the request, before the update completes, to simulate another
    action landing while a request is in flight.
    """

    def __init__(self, categories=None):
        self.categories = list(categories or [])
        self.calls = []
        self.fail = set()
        self.next_id = 100
        self.on_update = None
        self.closed = False

    def list_categories(self):
        self.calls.append(("list",))
        if "list" in self.fail:
            raise BackendError("connection refused")
        return list(self.categories)

    def insert(self, name):
        self.calls.append(("insert", name))
        if "insert" in self.fail:
            raise BackendError("insert rejected")
        category_id = str(self.next_id)
        self.next_id += 1
        return category_id

    def update(self, request):
        self.calls.append(("update", request))
        if self.on_update is not None:
            hook, self.on_update = self.on_update, None
            hook(request)
        if "update" in self.fail:
            raise BackendError("update rejected")

    def close(self):
        self.closed = True


class FakeResponse:
    """Minimal requests.Response replacement."""

    def __init__(self, json_data=None, status_code=200):
        self.json_data = json_data
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        if isinstance(self.json_data, Exception):
            raise self.json_data
        return self.json_data
