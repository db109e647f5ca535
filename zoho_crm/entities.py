import re

from dateutil.parser import parse

from zoho_crm.modules import MODULES


TIMESTAMP_FIELDS = {"Created Time", "Modified Time", "Last Activity Time", "Call Start Time"}


def attribute_name(field):
    name = re.sub(r"[^0-9a-zA-Z]+", "_", field).strip("_")
    return name.lower()


class Entity:
    """A Zoho record with python-friendly attribute names and parsed timestamps."""

    def __init__(self, module, data):
        self.module = module
        self.raw = dict(data)
        self._attributes = {}
        for field, value in self.raw.items():
            if field in TIMESTAMP_FIELDS and value:
                value = parse(value)
            self._attributes[attribute_name(field)] = value

    @property
    def id(self):
        id_key = MODULES.get(self.module, {}).get("id_key")
        if id_key:
            return self.raw.get(id_key)
        return self.raw.get("id")

    def __getattr__(self, name):
        try:
            return self.__dict__["_attributes"][name]
        except KeyError:
            raise AttributeError(f"{self.module} entity has no attribute '{name}'") from None

    def __getitem__(self, field):
        return self.raw[field]

    def to_dict(self):
        return dict(self._attributes)

    def __eq__(self, other):
        if not isinstance(other, Entity):
            return NotImplemented
        return self.module == other.module and self.raw == other.raw

    def __repr__(self):
        return f"<{self.module} entity id={self.id!r}>"


def to_entities(module, content):
    if content is None:
        return []
    if isinstance(content, list):
        return [Entity(module, record) for record in content]
    return Entity(module, content)
