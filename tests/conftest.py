import json

import pytest

from zoho_crm.client import ZohoClient


def lead(index):
    return {"LEADID": str(1000 + index), "Last Name": f"Lead {index}", "Modified Time": f"2020-01-01 00:00:{index % 60:02d}"}


def records_payload(module, records):
    if not records:
        return json.dumps({"response": {"nodata": {"code": "4422", "message": "There is no data to show"}}})
    rows = [
        {"no": str(no), "FL": [{"val": key, "content": value} for key, value in record.items()]}
        for no, record in enumerate(records, start=1)
    ]
    return json.dumps({"response": {"result": {module: {"row": rows}}, "uri": f"/crm/private/json/{module}/getRecords"}})


class FakeZoho:
    """Serves ``total`` Leads through fromIndex/toIndex windows and records every call."""

    def __init__(self, total, fail_on_call=None, error=None):
        self.records = [lead(i) for i in range(1, total + 1)]
        self.calls = []
        self.fail_on_call = fail_on_call
        self.error = error

    def __call__(self, request):
        self.calls.append(request)
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise self.error
        params = request.parameters
        window = self.records[params["fromIndex"] - 1:params["toIndex"]]
        return records_payload(request.module, window)


@pytest.fixture
def client():
    return ZohoClient("secret-token")
