from enum import Enum

from zoho_crm.entities import to_entities


class ResponseMode(Enum):
    FULL = "full"
    RECORDS_ARRAY = "records_array"
    ENTITY = "entity"


class Response:
    def __init__(self, request, raw_data, content):
        self.request = request
        self.raw_data = raw_data
        self.content = content

    def get_content(self):
        return self.content

    def to_entity(self):
        return to_entities(self.request.module, self.content)

    def __repr__(self):
        return f"Response({self.request.module}/{self.request.method})"


def as_full(response):
    return response


def as_records_array(response):
    return response.get_content()


def as_entity(response):
    return response.to_entity()


TRANSFORMERS = {
    ResponseMode.FULL: as_full,
    ResponseMode.RECORDS_ARRAY: as_records_array,
    ResponseMode.ENTITY: as_entity,
}


def transform(response, mode):
    return TRANSFORMERS[ResponseMode(mode)](response)
