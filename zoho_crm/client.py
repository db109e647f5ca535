import threading

import requests
import singer

from zoho_crm.exceptions import (
    EmptyAuthTokenError,
    UnsupportedMethodError,
    UnsupportedModuleError,
)
from zoho_crm.modules import ModuleRegistry
from zoho_crm.paginator import Paginator
from zoho_crm.parameters import ParameterSet
from zoho_crm.parser import parse_response
from zoho_crm.request import Request, ResponseFormat
from zoho_crm.response import Response, ResponseMode, transform
from zoho_crm.transport import API_DOMAIN, fire_request


LOGGER = singer.get_logger()


class ClientPreferences:
    response_mode: ResponseMode = ResponseMode.FULL
    auto_fetch_paginated_requests: bool = False

    def __init__(self, response_mode=None, auto_fetch_paginated_requests=None):
        if response_mode is not None:
            self.response_mode = ResponseMode(response_mode)
        if auto_fetch_paginated_requests is not None:
            self.auto_fetch_paginated_requests = bool(auto_fetch_paginated_requests)


class ModuleProxy:
    def __init__(self, client, descriptor):
        self._client = client
        self.descriptor = descriptor

    @property
    def name(self):
        return self.descriptor.name

    def supports(self, method):
        return self.descriptor.supports(method)

    def request(self, method, params=None, **kwargs):
        return self._client.request(self.name, method, params, **kwargs)


class ZohoClient:
    """Entry point to the Zoho CRM API.

    ``request`` validates the module and method, layers the parameters
    (defaults, then the auth token, then the caller's), and either makes one
    call or hands the request to a Paginator. The result is shaped according
    to the response mode before it is returned.
    """

    api_domain: str = API_DOMAIN
    timeout: float = None

    def __init__(self, auth_token, modules=None, api_domain=None, timeout=None, preferences=None, session=None):
        self._lock = threading.Lock()
        self.set_auth_token(auth_token)
        self.api_domain = api_domain or self.api_domain
        self.timeout = timeout
        self._session = session or requests.session()
        self._default_parameters = ParameterSet.with_defaults()
        self._preferences = preferences or ClientPreferences()
        self._registry = ModuleRegistry(modules)
        self._modules = {descriptor.name: ModuleProxy(self, descriptor) for descriptor in self._registry}

    @property
    def supported_modules(self):
        return self._registry.module_names

    def supports(self, module):
        return module in self._registry

    def module(self, module):
        if module not in self._modules:
            raise UnsupportedModuleError(module)
        return self._modules[module]

    def get_module(self, module):
        return self._registry.get(module)

    @property
    def preferences(self):
        with self._lock:
            return ClientPreferences(
                self._preferences.response_mode,
                self._preferences.auto_fetch_paginated_requests,
            )

    def set_response_mode(self, mode):
        with self._lock:
            self._preferences.response_mode = ResponseMode(mode)

    def set_auto_fetch_paginated_requests(self, enabled):
        with self._lock:
            self._preferences.auto_fetch_paginated_requests = bool(enabled)

    @property
    def auth_token(self):
        return self._auth_token

    def set_auth_token(self, auth_token):
        if auth_token is None or auth_token == "":
            raise EmptyAuthTokenError()
        with self._lock:
            self._auth_token = auth_token

    @property
    def default_parameters(self):
        with self._lock:
            return ParameterSet(self._default_parameters)

    def set_default_parameters(self, params):
        with self._lock:
            self._default_parameters = ParameterSet(params)

    def set_default_parameter(self, key, value):
        with self._lock:
            self._default_parameters.set(key, value)

    def unset_default_parameter(self, key):
        with self._lock:
            self._default_parameters.unset(key)

    def fire(self, request):
        return fire_request(request, session=self._session, api_domain=self.api_domain, timeout=self.timeout)

    def parse(self, request, raw_data):
        return parse_response(request, raw_data)

    def request(
        self,
        module,
        method,
        params=None,
        paginate=False,
        format=ResponseFormat.JSON,
        response_mode=None,
        cancel_event=None,
    ):
        if not self.supports(module):
            raise UnsupportedModuleError(module)
        if not self._registry.supports(module, method):
            raise UnsupportedMethodError(module, method)

        with self._lock:
            defaults = ParameterSet(self._default_parameters)
            auth_token = self._auth_token
            mode = ResponseMode(response_mode or self._preferences.response_mode)
            auto_fetch = self._preferences.auto_fetch_paginated_requests

        url_parameters = defaults.extend({"authtoken": auth_token}).extend(params)
        request = Request(format, module, method, url_parameters)

        if paginate:
            paginator = Paginator(request, fire=self.fire, parse=self.parse, cancel_event=cancel_event)
            if not auto_fetch:
                return paginator
            response = paginator.fetch_all().get_aggregated_response()
        else:
            LOGGER.debug(f"requesting {module}/{method}")
            raw_data = self.fire(request)
            content = self.parse(request, raw_data)
            response = Response(request, raw_data, content)

        return transform(response, mode)
