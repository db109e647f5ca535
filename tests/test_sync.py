import json
from unittest import mock

import pytest

from conftest import FakeZoho, lead
from zoho_crm.client import ClientPreferences, ZohoClient
from zoho_crm.response import ResponseMode
from zoho_crm.sync import sync


@pytest.fixture
def sync_client():
    client = ZohoClient(
        "token",
        modules=["Info", "Leads"],
        preferences=ClientPreferences(ResponseMode.RECORDS_ARRAY, True),
    )
    client.fire = FakeZoho(total=3)
    return client


@mock.patch("zoho_crm.sync.singer.write_state")
@mock.patch("zoho_crm.sync.singer.write_record")
def test_sync_writes_records_and_bookmark(write_record, write_state, sync_client):
    state = {}
    sync(sync_client, {"start_date": "2019-06-01T00:00:00Z"}, state)

    assert [c.args for c in write_record.call_args_list] == [("leads", lead(i)) for i in range(1, 4)]
    assert state["bookmarks"]["leads"] == "2020-01-01T00:00:03+00:00"
    assert "currently_syncing" not in state

    sent = sync_client.fire.calls[0].parameters
    assert sent["lastModifiedTime"] == "2019-06-01 00:00:00"
    assert sent["sortColumnString"] == "Modified Time"


@mock.patch("zoho_crm.sync.singer.write_state")
@mock.patch("zoho_crm.sync.singer.write_record")
def test_sync_resumes_from_bookmark(write_record, write_state, sync_client):
    state = {"bookmarks": {"leads": "2019-12-31T23:00:00+00:00"}}
    sync(sync_client, {}, state)

    assert sync_client.fire.calls[0].parameters["lastModifiedTime"] == "2019-12-31 23:00:00"


@mock.patch("zoho_crm.sync.singer.write_state")
@mock.patch("zoho_crm.sync.singer.write_record")
def test_sync_rejects_out_of_order_records(write_record, write_state, sync_client):
    state = {"bookmarks": {"leads": "2021-01-01T00:00:00+00:00"}}
    with pytest.raises(RuntimeError, match="out of order"):
        sync(sync_client, {}, state)
    assert "currently_syncing" not in state


@mock.patch("zoho_crm.sync.singer.write_state")
@mock.patch("zoho_crm.sync.singer.write_record")
def test_sync_keeps_bookmark_of_records_written_before_a_failure(write_record, write_state, sync_client):
    sync_client.fire.records[2]["Modified Time"] = "2019-12-01 00:00:00"
    state = {}

    with pytest.raises(RuntimeError, match="out of order"):
        sync(sync_client, {}, state)

    assert write_record.call_count == 2
    assert state["bookmarks"]["leads"] == "2020-01-01T00:00:02+00:00"


@mock.patch("zoho_crm.sync.singer.write_state")
@mock.patch("zoho_crm.sync.singer.write_record")
def test_sync_users_with_their_own_method(write_record, write_state):
    client = ZohoClient("token", modules=["Users"])
    client.fire = mock.Mock(return_value=json.dumps({"users": {"user": [{"id": "42", "email": "jane@example.com", "content": "Jane"}]}}))

    sync(client, {}, {})

    sent = client.fire.call_args[0][0]
    assert sent.method == "getUsers"
    assert sent.parameters["type"] == "AllUsers"
    write_record.assert_called_once()
    assert write_record.call_args.args == ("users", {"id": "42", "email": "jane@example.com", "content": "Jane"})
