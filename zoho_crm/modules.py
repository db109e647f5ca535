from zoho_crm.exceptions import ModuleNotFound


RECORDS_METHODS = [
    "getFields",
    "getRecordById",
    "getRecords",
    "getMyRecords",
    "searchRecords",
    "insertRecords",
    "updateRecords",
]

MODULES = {
    "Info": {
        "methods": ["getModules"],
    },
    "Users": {
        "stream_name": "users",
        "methods": ["getUsers"],
        "sync_method": "getUsers",
        "params": {"type": "AllUsers"},
    },
    "Leads": {
        "stream_name": "leads",
        "methods": RECORDS_METHODS + [
            "deleteRecords",
            "getDeletedRecordIds",
            "getSearchRecordsByPDC",
            "convertLead",
            "uploadFile",
        ],
        "id_key": "LEADID",
        "bookmark_key": "Modified Time",
        "params": {"sortColumnString": "Modified Time", "sortOrderString": "asc"},
    },
    "Calls": {
        "stream_name": "calls",
        "methods": RECORDS_METHODS,
        "id_key": "ACTIVITYID",
        "bookmark_key": "Modified Time",
        "params": {"sortColumnString": "Modified Time", "sortOrderString": "asc"},
    },
}

DEFAULT_MODULES = ["Info", "Leads", "Users", "Calls"]


class ModuleDescriptor:
    def __init__(self, name, supported_methods, **options):
        self.name = name
        self.supported_methods = frozenset(supported_methods)
        self.stream_name = options.get("stream_name")
        self.id_key = options.get("id_key")
        self.bookmark_key = options.get("bookmark_key")
        self.sync_method = options.get("sync_method", "getRecords")
        self.params = dict(options.get("params") or {})

    def supports(self, method):
        return method in self.supported_methods

    def __repr__(self):
        return f"ModuleDescriptor({self.name!r}, {sorted(self.supported_methods)!r})"


class ModuleRegistry:
    """Maps each configured module name to its descriptor.

    Built once per client. A configured name with no definition is a
    construction error, not something discovered at dispatch time.
    """

    def __init__(self, module_names=None, definitions=None):
        definitions = MODULES if definitions is None else definitions
        self._modules = {}
        for name in module_names or DEFAULT_MODULES:
            definition = definitions.get(name)
            if definition is None:
                raise ModuleNotFound(name)
            options = {k: v for k, v in definition.items() if k != "methods"}
            self._modules[name] = ModuleDescriptor(name, definition["methods"], **options)

    @property
    def module_names(self):
        return list(self._modules)

    def get(self, module):
        return self._modules.get(module)

    def supports(self, module, method):
        descriptor = self._modules.get(module)
        return descriptor is not None and descriptor.supports(method)

    def __contains__(self, module):
        return module in self._modules

    def __iter__(self):
        return iter(self._modules.values())
