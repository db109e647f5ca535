import json
import xml.etree.ElementTree as ET

import singer

from zoho_crm.exceptions import ParseError
from zoho_crm.request import ResponseFormat


LOGGER = singer.get_logger()


def parse_response(request, raw_data):
    """Turn a raw Zoho payload into clean python data.

    Record listings come back as a list of ``{field: value}`` dicts, an empty
    list when Zoho answers with ``nodata``. Anything else in ``result`` is
    returned untouched. An in-band ``error`` is raised as ParseError.
    """
    if request.format is ResponseFormat.XML:
        return _parse_xml(request, raw_data)
    return _parse_json(request, raw_data)


def _as_list(value):
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _clean_json_row(row):
    if "FL" in row:
        return {fl["val"]: fl.get("content") for fl in _as_list(row["FL"])}
    return {k: v for k, v in row.items() if k != "no"}


def _parse_json(request, raw_data):
    try:
        data = json.loads(raw_data)
    except (TypeError, ValueError) as err:
        raise ParseError(f"invalid JSON from {request.module}/{request.method}: {err}") from err

    if not isinstance(data, dict):
        raise ParseError(f"unexpected payload from {request.module}/{request.method}")

    if "response" not in data:
        # getUsers answers with a bare {"users": {"user": [...]}} document
        users = data.get("users")
        if isinstance(users, dict):
            return [_clean_json_row(user) for user in _as_list(users.get("user"))]
        return data

    response = data["response"]
    if not isinstance(response, dict):
        raise ParseError(f"unexpected response block from {request.module}/{request.method}: {response!r}")

    error = response.get("error")
    if error:
        raise ParseError(error.get("message", "unknown error"), code=error.get("code"))

    if "nodata" in response:
        LOGGER.debug(f"no data for {request.module}/{request.method}: {response['nodata']}")
        return []

    result = response.get("result")
    if not isinstance(result, dict):
        return result

    container = result.get(request.module, result)
    if isinstance(container, dict) and "row" in container:
        return [_clean_json_row(row) for row in _as_list(container["row"])]
    return container


def _clean_xml_row(element):
    fields = element.findall("FL")
    if fields:
        return {fl.get("val"): fl.text for fl in fields}
    row = {k: v for k, v in element.attrib.items() if k != "no"}
    if element.text and element.text.strip():
        row["content"] = element.text.strip()
    return row


def _xml_to_python(element):
    children = list(element)
    if not children:
        return element.text
    return {child.tag: _xml_to_python(child) for child in children}


def _parse_xml(request, raw_data):
    try:
        root = ET.fromstring(raw_data)
    except (ET.ParseError, TypeError) as err:
        raise ParseError(f"invalid XML from {request.module}/{request.method}: {err}") from err

    if root.tag == "users":
        return [_clean_xml_row(user) for user in root.findall("user")]

    error = root.find("error")
    if error is not None:
        raise ParseError(error.findtext("message", "unknown error"), code=error.findtext("code"))

    if root.find("nodata") is not None:
        return []

    result = root.find("result")
    if result is None:
        return _xml_to_python(root)

    container = result.find(request.module)
    if container is None:
        container = result
    rows = container.findall("row")
    if rows:
        return [_clean_xml_row(row) for row in rows]
    return _xml_to_python(container)
