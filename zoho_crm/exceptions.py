class ZohoCRMError(Exception):
    pass


class UnsupportedModuleError(ZohoCRMError):
    def __init__(self, module):
        self.module = module
        super().__init__(f"Module {module} is not supported.")


class UnsupportedMethodError(ZohoCRMError):
    def __init__(self, module, method):
        self.module = module
        self.method = method
        super().__init__(f"Method {method} is not supported by module {module}.")


class ModuleNotFound(ZohoCRMError):
    def __init__(self, module):
        self.module = module
        super().__init__(f"Module {module} not found.")


class EmptyAuthTokenError(ZohoCRMError):
    def __init__(self):
        super().__init__("The auth token cannot be empty.")


class TransportError(ZohoCRMError):
    def __init__(self, status, message):
        self.status = status
        self.message = message
        super().__init__(f"HTTP {status}: {message}" if status else message)


class ParseError(ZohoCRMError):
    def __init__(self, reason, code=None):
        self.reason = reason
        self.code = code
        super().__init__(f"[{code}] {reason}" if code else reason)


class Cancelled(ZohoCRMError):
    pass


class NotYetFetchedError(ZohoCRMError):
    def __init__(self):
        super().__init__("No page has been fetched yet, call fetch_all() or fetch_next_page() first.")


class PaginationExhausted(ZohoCRMError):
    def __init__(self):
        super().__init__("All pages have already been fetched.")


class PaginationFailed(ZohoCRMError):
    def __init__(self, cause):
        self.cause = cause
        super().__init__(f"Pagination stopped after an error: {cause}")
