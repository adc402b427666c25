from unittest.mock import MagicMock

import pytest
import requests

from api.client import BackendError, CategoryBackend
from api.factory import get_backend
from models.operations import Rename, SoftDelete
from tests.helpers import FakeResponse

URL = "http://backend.test/catagory.php"


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(http, session):
    return CategoryBackend(URL, session, timeout=3.0, http=http)


def sent(http):
    """Return (run, body) of the last POST."""
    kwargs = http.post.call_args.kwargs
    return kwargs["params"]["run"], kwargs["json"]


class TestListCategories:
    """Tests for the list call."""

    def test_parses_rows_in_order(self, client, http):
        http.post.return_value = FakeResponse(
            {
                "message": [
                    {
                        "MAIN_CAT_ID": 7,
                        "MAIN_CAT_NAME": "Food",
                        "CREATED_USER": "anvar",
                        "CREATED_TIME": "2024-03-01 10:00:00",
                        "LAST_UPD_USER": "anvar",
                        "LAST_UPD_TIME": "2024-03-02 11:00:00",
                    },
                    {"MAIN_CAT_ID": "8", "MAIN_CAT_NAME": "Rent"},
                ]
            }
        )

        records = client.list_categories()

        assert [r.id for r in records] == ["7", "8"]
        assert records[0].name == "Food"
        assert records[0].updated_at == "2024-03-02 11:00:00"
        assert records[1].created_by == ""

    def test_sends_identity_and_selector(self, client, http):
        http.post.return_value = FakeResponse({"message": []})

        client.list_categories()

        run, body = sent(http)
        assert run == "get_all_main_cat"
        assert body == {"deviceType": "web", "username": "tester"}
        assert http.post.call_args.args == (URL,)
        assert http.post.call_args.kwargs["timeout"] == 3.0

    @pytest.mark.parametrize("data", [{}, {"message": None}])
    def test_missing_message_is_empty(self, client, http, data):
        http.post.return_value = FakeResponse(data)

        assert client.list_categories() == []

    def test_non_list_message_is_error(self, client, http):
        http.post.return_value = FakeResponse({"message": "No data found"})

        with pytest.raises(BackendError):
            client.list_categories()

    def test_network_error(self, client, http):
        http.post.side_effect = requests.ConnectionError("unreachable")

        with pytest.raises(BackendError, match="get_all_main_cat request failed"):
            client.list_categories()

    def test_http_error_status(self, client, http):
        http.post.return_value = FakeResponse({"message": []}, status_code=500)

        with pytest.raises(BackendError):
            client.list_categories()

    def test_invalid_json(self, client, http):
        http.post.return_value = FakeResponse(ValueError("Expecting value"))

        with pytest.raises(BackendError, match="invalid body"):
            client.list_categories()


class TestInsert:
    """Tests for the insert call."""

    def test_returns_new_id(self, client, http):
        http.post.return_value = FakeResponse({"success": True, "newCategoryId": 42})

        assert client.insert("Gifts") == "42"

        run, body = sent(http)
        assert run == "insert_main_catagory"
        assert body == {"deviceType": "web", "username": "tester", "cat_name": "Gifts"}

    @pytest.mark.parametrize(
        "data",
        [
            {"success": False, "newCategoryId": 42},
            {"newCategoryId": 42},
            {"success": True},
            [],
        ],
    )
    def test_unconfirmed_insert_is_error(self, client, http, data):
        http.post.return_value = FakeResponse(data)

        with pytest.raises(BackendError):
            client.insert("Gifts")


class TestUpdate:
    """Tests for the shared update endpoint."""

    def test_rename_body(self, client, http):
        http.post.return_value = FakeResponse({"success": True})

        client.update(Rename("5", "Travel"))

        run, body = sent(http)
        assert run == "update_main_catagory"
        assert body == {
            "deviceType": "web",
            "username": "tester",
            "cat_name": "Travel",
            "main_cat_id": "5",
            "deleted_flg": "U",
        }

    def test_soft_delete_body(self, client, http):
        http.post.return_value = FakeResponse({"success": True})

        client.update(SoftDelete("5", "Travel"))

        run, body = sent(http)
        assert run == "update_main_catagory"
        assert body["deleted_flg"] == "D"
        assert body["cat_name"] == "Travel"

    def test_missing_success_is_error(self, client, http):
        http.post.return_value = FakeResponse({"message": "ok"})

        with pytest.raises(BackendError, match="rejected SoftDelete"):
            client.update(SoftDelete("5", "Travel"))

    def test_timeout(self, client, http):
        http.post.side_effect = requests.Timeout("slow")

        with pytest.raises(BackendError):
            client.update(Rename("5", "Travel"))


class TestLifecycle:
    def test_context_manager_closes_session(self, client, http):
        with client:
            pass

        http.close.assert_called_once()


class TestFactory:
    def test_builds_from_config(self, test_config, session):
        backend = get_backend(test_config, session)

        assert backend.base_url == test_config.base_url
        assert backend.timeout == test_config.timeout
        assert backend.session == session
        backend.close()

    def test_requires_base_url(self, test_config, session):
        test_config.base_url = ""

        with pytest.raises(ValueError):
            get_backend(test_config, session)
